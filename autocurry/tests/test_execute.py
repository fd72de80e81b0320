from autocurry.errors import CurryRuntimeError
import autocurry.execute
import unittest


class TestExecute(unittest.TestCase):
    def test_vocabulary_is_preloaded(self) -> None:
        globals = autocurry.execute.execute(
            '<test>',
            'subtract = curry(lambda a, b: a - b)\n'
            'result = subtract(5)(3)\n'
            'greeting = "Bella" | compose(str.upper, identity)\n'
            'cell = Ref(0)\n',
        )
        self.assertEqual(2, globals['result'])
        self.assertEqual('BELLA', globals['greeting'])
        self.assertEqual(0, globals['cell'].value)

    def test_existing_names_are_kept(self) -> None:
        globals = {'curry': 'mine'}
        autocurry.execute.execute('<test>', 'seen = curry', globals)
        self.assertEqual('mine', globals['seen'])

    def test_errors_are_wrapped(self) -> None:
        with self.assertRaises(CurryRuntimeError) as cm:
            autocurry.execute.execute('<test>', 'raise KeyError(1)')
        self.assertIsInstance(cm.exception.__cause__, KeyError)
        self.assertEqual('<test>', cm.exception.filename)
