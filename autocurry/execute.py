"""This module runs Python scripts with the currying vocabulary in scope."""
import types
from typing import Dict, Optional

import autocurry
import autocurry.logging
from autocurry.errors import CurryRuntimeError


_logger = autocurry.logging.get_logger(__name__)


def _compile(filename: str, source: str) -> types.CodeType:
    return compile(source, filename, 'exec')


def _do_preamble(globals: Dict[str, object]) -> None:
    """Add the names scripts expect to the passed-in mapping.

    This mutates the mapping, but anything already in the mapping is preserved.
    """
    globals.setdefault('__name__', '__main__')
    globals.setdefault('autocurry', autocurry)
    globals.setdefault('curry', autocurry.curry)
    globals.setdefault('compose', autocurry.compose)
    globals.setdefault('forward_compose', autocurry.forward_compose)
    globals.setdefault('backward_compose', autocurry.backward_compose)
    globals.setdefault('pipe', autocurry.pipe)
    globals.setdefault('identity', autocurry.identity)
    globals.setdefault('Ref', autocurry.Ref)
    globals.setdefault('ArityFunction', autocurry.ArityFunction)


def _run(
    filename: str, prog: types.CodeType, globals: Dict[str, object]
) -> None:
    try:
        exec(prog, globals)
    except Exception as e:
        _logger.debug('script {} failed', filename, exc_info=e)
        raise CurryRuntimeError(filename) from e


def execute(
    filename: str,
    source: str,
    globals: Optional[Dict[str, object]] = None,
) -> Dict[str, object]:
    globals = {} if globals is None else globals
    _do_preamble(globals)
    _logger.info('running {}', filename)
    _run(filename, _compile(filename, source), globals)
    return globals
