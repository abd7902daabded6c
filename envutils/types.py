"""Shared type aliases for env config lookups."""
from __future__ import annotations

from typing import Callable, Literal, Mapping, TypeVar, Union

T = TypeVar('T')

ShortEnvNames = Literal['dev', 'test', 'prod']
LongEnvNames = Literal['development', 'test', 'production']

# Env variable holding the active environment name.
ENV_NAME_VARIABLE = 'APP_ENV'
UNDEFINED_ENV_NAME = 'undefined'

# Key in a default map that matches any environment.
WILDCARD = '*'

TranslatorKind = Literal['string', 'integer', 'float', 'boolean', 'array', 'dict']
TranslatorFunction = Callable[[str], T]
Translator = Union[TranslatorKind, Callable[[str], object]]

# Environment name (or WILDCARD) -> already-typed fallback value.
EnvDefaultMap = Mapping[str, T]
