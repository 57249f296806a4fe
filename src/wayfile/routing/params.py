"""Path parameter converters.

A converter names the shape of a captured segment (``{id:int}``) and the
Python type its value is coerced to before constraints see it.
"""

import re

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}

PATTERNS: dict[str, re.Pattern[str]] = {
    name: re.compile(pattern) for name, (pattern, _) in CONVERTERS.items()
}


def accepts(text: str, param_type: str) -> bool:
    """True if *text* has the shape of the *param_type* converter."""
    return PATTERNS[param_type].fullmatch(text) is not None


def convert_param(value: str, param_type: str) -> str | int | float:
    """Convert a captured path parameter string to the target type.

    Raises ``ValueError`` if the string cannot be converted.
    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    _, target_type = CONVERTERS[param_type]
    return target_type(value)
