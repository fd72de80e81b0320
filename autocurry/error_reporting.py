from autocurry.curried import CurriedFunction
from autocurry.errors import CurryError, CurryRuntimeError, OverflowError


def describe(function: CurriedFunction) -> str:
    return (
        f'{function.target.name} (arity {function.arity}, '
        f'{len(function.bound)} bound, {function.remaining} remaining)'
    )


def create_runtime_error_message(error: CurryRuntimeError) -> str:
    cause = error.__cause__
    message = f'Error while running {error.filename}:\n'
    if isinstance(cause, OverflowError):
        message += (
            f'Too many arguments for {describe(cause.function)}: '
            f'{len(cause.surplus)} left over\n'
        )
    if isinstance(cause, CurryError) or cause is None:
        message += f'{cause}\n'
    else:
        message += f'{type(cause).__name__}: {cause}\n'
    return message
