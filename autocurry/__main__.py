"""Run a Python script with curry, compose, pipe and Ref already imported."""

import argparse
import logging
import pathlib
import sys
from typing import IO, Callable, List, Optional

from autocurry.error_reporting import create_runtime_error_message
from autocurry.errors import CurryRuntimeError
import autocurry.execute
import autocurry.logging


filename = '<stdin>'


def file_type(mode: str) -> Callable[[str], IO[str]]:
    """Capture the filename and create a file object."""

    def func(name: str) -> IO[str]:
        global filename
        filename = name
        return open(name, mode=mode)

    return func


arg_parser = argparse.ArgumentParser(
    prog='autocurry', description='Run a Python script with autocurry.'
)
arg_parser.add_argument(
    'file',
    nargs='?',
    type=file_type('r'),
    default=sys.stdin,
    help='file to run',
)
arg_parser.add_argument(
    '--debug',
    action='store_true',
    default=False,
    help='log every curried call to stderr',
)
arg_parser.add_argument(
    '--verbose',
    action='store_true',
    default=False,
    help='re-raise errors raised by the script, with their tracebacks',
)
arg_parser.add_argument(
    '--log-json',
    type=pathlib.Path,
    default=None,
    metavar='PATH',
    help='also write logs to PATH as JSON lines',
)


def main(argv: Optional[List[str]] = None) -> int:
    global filename
    filename = '<stdin>'
    args = arg_parser.parse_args(argv)
    if args.debug or args.log_json is not None:
        autocurry.logging.configure(
            logging.DEBUG if args.debug else logging.INFO,
            json_path=args.log_json,
        )
    try:
        source = args.file.read()
    finally:
        if args.file is not sys.stdin:
            args.file.close()
    try:
        autocurry.execute.execute(filename, source)
    except CurryRuntimeError as e:
        print(create_runtime_error_message(e), file=sys.stderr)
        if args.verbose:
            raise
        return 1
    return 0


def console_main() -> None:
    sys.exit(main())


if __name__ == '__main__':
    console_main()
