"""Translation of raw env strings into typed values.

These helpers are pure (no env access) so they can be unit tested on
their own. Each raises EnvConfigError naming the config entry on failure.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, List

from .errors import (
    EnvConfigError,
    INVALID_BOOLEAN,
    INVALID_CUSTOM,
    INVALID_DICT_ENTRY,
    INVALID_FLOAT,
    INVALID_INTEGER,
    INVALID_TRANSLATOR,
)

# Longest numeric prefix, the way parseFloat/parseInt read it. ASCII digits only.
_FLOAT_PREFIX = re.compile(r'[+-]?(?:Infinity|(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)')
_INTEGER_PREFIX = re.compile(r'[+-]?[0-9]+')

# Whitespace skipped before a number (ECMAScript WhiteSpace + LineTerminator).
_LEADING_WHITESPACE = (
    '\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006'
    '\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff'
)


def to_string(name: str, value: str) -> str:
    return value


def to_array(name: str, value: str) -> List[str]:
    # No trimming; empty segments are kept.
    return value.split(',')


def to_boolean(name: str, value: str) -> bool:
    if value == 'true':
        return True
    if value == 'false':
        return False
    raise EnvConfigError(name, f'Invalid boolean value "{value}"', INVALID_BOOLEAN)


def to_float(name: str, value: str) -> float:
    match = _FLOAT_PREFIX.match(value.lstrip(_LEADING_WHITESPACE))
    if match is None:
        raise EnvConfigError(name, f'Invalid float "{value}"', INVALID_FLOAT)
    return float(match.group(0).replace('Infinity', 'inf'))


def to_integer(name: str, value: str) -> int:
    match = _INTEGER_PREFIX.match(value.lstrip(_LEADING_WHITESPACE))
    if match is None:
        raise EnvConfigError(name, f'Invalid integer "{value}"', INVALID_INTEGER)
    try:
        return int(match.group(0), 10)
    except ValueError as e:
        # Digit runs past sys.get_int_max_str_digits().
        raise EnvConfigError(name, f'Invalid integer "{value}"', INVALID_INTEGER) from e


def to_dict(name: str, value: str) -> Dict[str, str]:
    result: Dict[str, str] = {}
    for entry in value.split(','):
        pair = entry.split(':')
        if len(pair) != 2:
            raise EnvConfigError(
                name,
                f'Invalid dict entry "{entry}". Complete value: "{value}"',
                INVALID_DICT_ENTRY,
            )
        key, val = pair
        result[key] = val
    return result


BUILTIN_TRANSLATORS: Dict[str, Callable[[str, str], Any]] = {
    'string': to_string,
    'integer': to_integer,
    'float': to_float,
    'boolean': to_boolean,
    'array': to_array,
    'dict': to_dict,
}


def translate(name: str, translator: Any, value: str) -> Any:
    """
    Translate a raw env value with a built-in kind or a custom function.

    Args:
        name: Config entry name, used in error messages
        translator: Kind tag ('string', 'integer', ...) or a callable
        value: Raw string from the env source

    Returns:
        The translated value
    """
    if callable(translator):
        try:
            return translator(value)
        except EnvConfigError:
            raise
        except Exception as e:
            raise EnvConfigError(
                name, f'Custom translator failed for "{value}": {e}', INVALID_CUSTOM
            ) from e

    builtin = BUILTIN_TRANSLATORS.get(translator) if isinstance(translator, str) else None
    if builtin is None:
        raise EnvConfigError(name, f'Invalid translator provided "{translator}"', INVALID_TRANSLATOR)
    return builtin(name, value)
