"""Argument coercion for function calls.

Each declared parameter type maps to a converter in ``COERCIONS``. A
parameter type that isn't in the table is treated as an opaque host type:
values are passed through untouched, but only when their runtime type is
exactly the declared type. Nothing is ever implicitly converted outside of
what the table allows."""

from .errors import ArgumentTypeMismatchError

TRUE_STRINGS = ('true',)
FALSE_STRINGS = ('false',)


def to_str(value) -> str:
    """Strings are taken as they are."""

    if isinstance(value, str):
        return value

    raise ArgumentTypeMismatchError(
        "Expected a string, got {!r} of type {}."
        .format(value, type(value).__name__))


def to_bool(value) -> bool:
    """Accept bools, or the strings 'true' and 'false' in any case."""

    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        lowered = value.lower()
        if lowered in TRUE_STRINGS:
            return True
        elif lowered in FALSE_STRINGS:
            return False

    raise ArgumentTypeMismatchError(
        "Expected a boolean ('true' or 'false'), got {!r}.".format(value))


def to_int(value) -> int:
    """Accept ints, or strings of decimal integers. Bools are not ints
    here, even though Python thinks they are."""

    if isinstance(value, bool):
        raise ArgumentTypeMismatchError(
            "Expected an integer, got boolean {!r}.".format(value))

    if isinstance(value, int):
        return value

    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            pass

    raise ArgumentTypeMismatchError(
        "Expected an integer, got {!r}.".format(value))


def to_float(value) -> float:
    """Accept ints, floats, or numeric strings."""

    if isinstance(value, bool):
        raise ArgumentTypeMismatchError(
            "Expected a number, got boolean {!r}.".format(value))

    if isinstance(value, (int, float)):
        return float(value)

    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            pass

    raise ArgumentTypeMismatchError(
        "Expected a number, got {!r}.".format(value))


COERCIONS = {
    str: to_str,
    bool: to_bool,
    int: to_int,
    float: to_float,
}


def is_valid_type(param_type) -> bool:
    """Whether param_type can be used as a parameter or return type."""

    return isinstance(param_type, type)


def coerce(value, param_type):
    """Convert value to the declared param_type.

    :raises ArgumentTypeMismatchError: When the value can't be converted.
    """

    converter = COERCIONS.get(param_type)
    if converter is not None:
        return converter(value)

    # Host objects pass through only on an exact type match.
    if type(value) is param_type:
        return value

    raise ArgumentTypeMismatchError(
        "Expected a value of type {}, got {!r} of type {}."
        .format(type_name(param_type), value, type(value).__name__))


def type_name(param_type) -> str:
    """The name to show for a type in signatures and errors."""

    return getattr(param_type, '__name__', str(param_type))
