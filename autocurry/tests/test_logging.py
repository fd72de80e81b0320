from autocurry.logging import CurryLogger, JSONFormatter, configure, get_logger
import io
import json
import logging
import unittest


class ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


class TestCurryLogger(unittest.TestCase):
    def setUp(self) -> None:
        self.python_logger = logging.getLogger('autocurry.tests.logging')
        self.handler = ListHandler()
        self.python_logger.addHandler(self.handler)
        self.python_logger.propagate = False
        self.logger = CurryLogger(self.python_logger)

    def tearDown(self) -> None:
        self.python_logger.removeHandler(self.handler)
        self.python_logger.setLevel(logging.NOTSET)
        self.python_logger.propagate = True

    def test_format_syntax(self) -> None:
        self.python_logger.setLevel(logging.DEBUG)
        self.logger.debug('{} of {total}', 1, total=3)
        self.assertEqual('1 of 3', self.handler.records[0].getMessage())

    def test_records_caller(self) -> None:
        self.python_logger.setLevel(logging.INFO)
        self.logger.info('hello')
        caller = self.handler.records[0].caller
        self.assertEqual('test_records_caller', caller.function)

    def test_disabled_level_is_skipped(self) -> None:
        self.python_logger.setLevel(logging.WARNING)
        self.logger.debug('quiet')
        self.logger.info('quiet')
        self.logger.warning('loud')
        self.logger.error('louder')
        self.assertEqual(
            ['loud', 'louder'],
            [record.getMessage() for record in self.handler.records],
        )

    def test_get_logger(self) -> None:
        logger = get_logger('autocurry.tests.named')
        self.assertEqual('autocurry.tests.named', logger.logger.name)


class TestJSONFormatter(unittest.TestCase):
    def test_record_from_curry_logger(self) -> None:
        python_logger = logging.getLogger('autocurry.tests.json')
        handler = ListHandler()
        python_logger.addHandler(handler)
        python_logger.setLevel(logging.DEBUG)
        try:
            CurryLogger(python_logger).debug('value {!r}', 'x')
        finally:
            python_logger.removeHandler(handler)
            python_logger.setLevel(logging.NOTSET)
        fields = json.loads(JSONFormatter().format(handler.records[0]))
        self.assertEqual("value 'x'", fields['message'])
        self.assertEqual('DEBUG', fields['level_name'])
        self.assertEqual(
            'test_record_from_curry_logger', fields['function_name']
        )
        self.assertEqual('test_logging.py', fields['file_name'])
        self.assertIsNone(fields['exception'])

    def test_plain_record(self) -> None:
        record = logging.LogRecord(
            'plain', logging.INFO, __file__, 10, 'message', None, None
        )
        fields = json.loads(JSONFormatter().format(record))
        self.assertEqual('message', fields['message'])
        self.assertEqual(10, fields['line_number'])


class TestConfigure(unittest.TestCase):
    def test_stream(self) -> None:
        stream = io.StringIO()
        logger = configure(logging.DEBUG, stream=stream)
        try:
            get_logger('autocurry.tests.configure').info('configured {}', 1)
        finally:
            for handler in logger.handlers[:]:
                if isinstance(handler, logging.StreamHandler):
                    logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
        self.assertIn('configured 1', stream.getvalue())

    def test_reconfiguring_replaces_handlers(self) -> None:
        stream = io.StringIO()
        logger = configure(logging.DEBUG, stream=stream)
        handlers_before = list(logger.handlers)
        logger = configure(logging.DEBUG, stream=stream)
        try:
            get_logger('autocurry.tests.configure').info('configured {}', 2)
            self.assertEqual(len(handlers_before), len(logger.handlers))
        finally:
            for handler in logger.handlers[:]:
                if isinstance(handler, logging.StreamHandler):
                    logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
        self.assertEqual(1, stream.getvalue().count('configured 2'))
