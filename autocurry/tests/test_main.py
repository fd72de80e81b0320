"""
Test the driver that you would run with `python -m autocurry`.
"""

import autocurry.__main__
from autocurry.errors import CurryRuntimeError
import contextlib
import io
import json
import logging
import os
import tempfile
import unittest


class TestMain(unittest.TestCase):
    def setUp(self) -> None:
        self.directory = tempfile.TemporaryDirectory()

    def tearDown(self) -> None:
        logger = logging.getLogger('autocurry')
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
        self.directory.cleanup()

    def _script(self, source: str) -> str:
        path = os.path.join(self.directory.name, 'script.py')
        with open(path, 'w') as f:
            f.write(source)
        return path

    def test_success(self) -> None:
        path = self._script(
            '@curry\n'
            'def three(one, two, three):\n'
            '    return one + two * three\n'
            'assert three(1)(2)(3) == 7\n'
        )
        self.assertEqual(0, autocurry.__main__.main([path]))

    def test_failure(self) -> None:
        path = self._script('curry(lambda a, b: a + b)(1, 2, 3)\n')
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            status = autocurry.__main__.main([path])
        self.assertEqual(1, status)
        self.assertIn('Too many arguments', stderr.getvalue())
        self.assertIn(path, stderr.getvalue())

    def test_verbose_reraises(self) -> None:
        path = self._script('raise ValueError("bad")\n')
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            with self.assertRaises(CurryRuntimeError) as cm:
                autocurry.__main__.main(['--verbose', path])
        self.assertIsInstance(cm.exception.__cause__, ValueError)
        self.assertIn('ValueError: bad', stderr.getvalue())

    def test_debug_logs_dispatch(self) -> None:
        path = self._script('curry(lambda a, b: a + b)(1)(2)\n')
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            status = autocurry.__main__.main(['--debug', path])
        self.assertEqual(0, status)
        self.assertIn('DEBUG autocurry.curried: invoking', stderr.getvalue())

    def test_json_log(self) -> None:
        path = self._script('x = 1\n')
        log_path = os.path.join(self.directory.name, 'log.json')
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            status = autocurry.__main__.main(['--log-json', log_path, path])
        self.assertEqual(0, status)
        logger = logging.getLogger('autocurry')
        for handler in logger.handlers:
            handler.flush()
        with open(log_path) as f:
            first = json.loads(f.readline())
        self.assertTrue(first['message'].startswith('running'))
        self.assertEqual('INFO', first['level_name'])
