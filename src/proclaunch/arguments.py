"""Type-checking and normalization of command-line arguments."""

from collections.abc import Iterable

from proclaunch.errors import InvalidArgument

Argument = int | str


def normalize_arguments(args: Iterable[object]) -> tuple[str, ...]:
    """Return `args` as strings, with ints in their decimal form."""
    normalized: list[str] = []
    for arg in args:
        # bool is an int subclass but never a meaningful argument
        if isinstance(arg, bool):
            raise InvalidArgument(f"invalid command-line argument type: {type(arg).__name__}")
        if isinstance(arg, int):
            normalized.append(str(arg))
        elif isinstance(arg, str):
            if "\0" in arg:
                raise InvalidArgument(f"command-line argument contains a NUL character: {arg!r}")
            normalized.append(arg)
        else:
            raise InvalidArgument(f"invalid command-line argument type: {type(arg).__name__}")
    return tuple(normalized)


def normalize_exit_codes(codes: Iterable[object]) -> frozenset[int]:
    result: set[int] = set()
    for code in codes:
        if isinstance(code, bool) or not isinstance(code, int):
            raise InvalidArgument(f"invalid exit code type: {type(code).__name__}")
        result.add(code)
    return frozenset(result)
