"""Holder for a single env config value and its target type."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional

from .errors import ConfigUsageError, EnvConfigError, NOT_DEFINED
from .translators import translate
from .types import WILDCARD, EnvDefaultMap, Translator, TranslatorFunction

logger = logging.getLogger(__name__)

_OPTIONAL_ORDER_MESSAGE = (
    'Tried to change the type after marking as optional.'
    ' This is not allowed because it breaks type safety.'
    ' Call .optional() after setting the type instead.'
)


@dataclass(frozen=True)
class ValueHolder:
    """
    One env config entry, bound to its raw value.

    Type selectors and optional() return a new holder, so chains like
    ``holder.as_integer().optional().get()`` never mutate ``holder``.
    optional() must be the last call before get().
    """

    name: str
    raw_value: Optional[str]
    env_name: str
    error_as_value: bool = False
    is_optional: bool = False
    translator: Translator = 'string'

    def get(self, defaults: Optional[EnvDefaultMap[Any]] = None) -> Any:
        """
        Resolve the value.

        Args:
            defaults: Fallbacks keyed by env name, or '*' for any env.
                Returned as-is, without translation.

        Returns:
            The translated value, a default, None when optional and unset,
            or a CapturedError when lazy validation is on and resolution failed.
        """
        try:
            return self._resolve(defaults)
        except EnvConfigError as e:
            if not self.error_as_value:
                raise
            logger.debug(f"Captured config error for {self.name}: {e.detail}")
            return e.capture()

    def _resolve(self, defaults: Optional[EnvDefaultMap[Any]]) -> Any:
        if self.raw_value is not None:
            return translate(self.name, self.translator, self.raw_value)

        if defaults:
            if defaults.get(self.env_name) is not None:
                return defaults[self.env_name]
            if defaults.get(WILDCARD) is not None:
                return defaults[WILDCARD]

        if self.is_optional:
            return None

        raise EnvConfigError(self.name, 'Value not defined', NOT_DEFINED)

    def optional(self) -> ValueHolder:
        return replace(self, is_optional=True)

    def as_string(self) -> ValueHolder:
        return self._with_translator('string')

    def as_integer(self) -> ValueHolder:
        return self._with_translator('integer')

    def as_float(self) -> ValueHolder:
        return self._with_translator('float')

    def as_boolean(self) -> ValueHolder:
        return self._with_translator('boolean')

    def as_array(self) -> ValueHolder:
        return self._with_translator('array')

    def as_dict(self) -> ValueHolder:
        return self._with_translator('dict')

    def as_custom(self, translator: TranslatorFunction[Any]) -> ValueHolder:
        if not callable(translator):
            raise ConfigUsageError(f'Custom translator for {self.name} must be callable')
        return self._with_translator(translator)

    def _with_translator(self, translator: Translator) -> ValueHolder:
        if self.is_optional:
            raise ConfigUsageError(f'Error in env variable {self.name}: {_OPTIONAL_ORDER_MESSAGE}')
        return replace(self, translator=translator)

    # Short names, matching env.KEY.integer().get() style call sites.
    string = as_string
    integer = as_integer
    float = as_float
    boolean = as_boolean
    array = as_array
    dict = as_dict
    custom = as_custom
