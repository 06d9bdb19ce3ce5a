import math

from pydantic import TypeAdapter, ValidationError

BOOL_LIKE_VALUES = [
    "true",
    "True",
    "1",
    "on",
    "yes",
    "false",
    "False",
    "0",
    "off",
    "no",
]


def is_bool_like(value: str) -> bool:
    return value in BOOL_LIKE_VALUES


def parse_number(value: str) -> float | None:
    """Parse a finite number from user input, or ``None`` if it is not one."""
    try:
        number = TypeAdapter(float).validate_python(value.strip())
    except ValidationError:
        return None
    return number if math.isfinite(number) else None
