from datetime import datetime, timezone
import inspect
import json
import logging
import pathlib
import sys
import traceback
from typing import Callable, Dict, List, Optional, TextIO, Tuple


# handlers added by configure()
_installed_handlers: List[logging.Handler] = []


class CurryLogger:
    """Wraps a logging.Logger so that it's easy to use str.format syntax.

    The calling frame is only inspected when the level is enabled."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def debug(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        if self._logger.isEnabledFor(logging.DEBUG):
            _log(self._logger.debug, format_string, _caller(), args, kwargs)

    def info(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        if self._logger.isEnabledFor(logging.INFO):
            _log(self._logger.info, format_string, _caller(), args, kwargs)

    def warning(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        if self._logger.isEnabledFor(logging.WARNING):
            _log(self._logger.warning, format_string, _caller(), args, kwargs)

    def error(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        if self._logger.isEnabledFor(logging.ERROR):
            _log(self._logger.error, format_string, _caller(), args, kwargs)


def get_logger(name: str) -> CurryLogger:
    python_logger = logging.getLogger(name)
    python_logger.addHandler(logging.NullHandler())
    return CurryLogger(python_logger)


def _caller() -> inspect.FrameInfo:
    # _caller <- CurryLogger method <- the code that logged
    return inspect.stack(context=0)[2]


def _log(
    logging_method: Callable,
    format_string: str,
    caller: inspect.FrameInfo,
    args: Tuple[object, ...],
    kwargs: Dict[str, object],
) -> None:
    exc_info = kwargs.pop('exc_info', None)
    logging_method(
        _DelayedFormat(format_string, args, kwargs),
        exc_info=exc_info,
        extra={'caller': caller},
    )


class _DelayedFormat:
    def __init__(
        self,
        format_string: str,
        args: Tuple[object, ...],
        kwargs: Dict[str, object],
    ) -> None:
        self._format_string, self._args, self._kwargs = (
            format_string,
            args,
            kwargs,
        )

    def __str__(self) -> str:
        return self._format_string.format(*self._args, **self._kwargs)


class _LogRecordEncoder(json.JSONEncoder):
    """A JSON Encoder that supports logging.LogRecord objects."""

    def default(self, obj: object):
        if isinstance(obj, logging.LogRecord):
            caller = getattr(obj, 'caller', None)
            if caller is None:
                path_name, line_number, function_name, module = (
                    obj.pathname,
                    obj.lineno,
                    obj.funcName,
                    obj.module,
                )
            else:
                path_name, line_number, function_name = (
                    caller.filename,
                    caller.lineno,
                    caller.function,
                )
                module = caller.frame.f_globals.get('__name__')
            return {
                'name': obj.name,
                'message': obj.getMessage(),
                # arguments for the formatting string don't need to be in the
                # JSON
                'level_name': obj.levelname,
                'path_name': path_name,
                'file_name': pathlib.Path(path_name).name,
                'module': module,
                'exception': (
                    traceback.format_exception(*obj.exc_info)
                    if obj.exc_info
                    else None
                ),
                'line_number': line_number,
                'function_name': function_name,
                'created': datetime.fromtimestamp(
                    obj.created, timezone.utc
                ).isoformat(),
                'thread': obj.thread,
                'thread_name': obj.threadName,
                'process_name': obj.processName,
                'process': obj.process,
            }
        return super().default(obj)


class JSONFormatter(logging.Formatter):
    """A logging formatter for producing structured JSON logs."""

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(record, cls=_LogRecordEncoder)


def configure(
    level: int,
    json_path: Optional[pathlib.Path] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Send the package's logs to stream (stderr by default) and, when
    json_path is given, to that file as JSON lines.

    Handlers installed by an earlier call are removed and closed first."""
    logger = logging.getLogger('autocurry')
    while _installed_handlers:
        handler = _installed_handlers.pop()
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)
    stream_handler = logging.StreamHandler(
        sys.stderr if stream is None else stream
    )
    stream_handler.setFormatter(
        logging.Formatter('%(levelname)s %(name)s: %(message)s')
    )
    _installed_handlers.append(stream_handler)
    if json_path is not None:
        json_handler = logging.FileHandler(json_path, encoding='utf-8')
        json_handler.setFormatter(JSONFormatter())
        _installed_handlers.append(json_handler)
    for handler in _installed_handlers:
        logger.addHandler(handler)
    return logger
