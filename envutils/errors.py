"""Error types raised (or captured) while reading env configuration."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

NOT_DEFINED = "not_defined"
INVALID_BOOLEAN = "invalid_boolean"
INVALID_FLOAT = "invalid_float"
INVALID_INTEGER = "invalid_integer"
INVALID_DICT_ENTRY = "invalid_dict_entry"
INVALID_TRANSLATOR = "invalid_translator"
INVALID_CUSTOM = "invalid_custom"


class EnvConfigError(ValueError):
    """A config value is missing or could not be translated."""

    def __init__(self, config_name: str, detail: str, kind: str = NOT_DEFINED):
        super().__init__(f"Error in env variable {config_name}: {detail}")
        self.config_name = config_name
        self.detail = detail
        self.kind = kind

    def capture(self) -> "CapturedError":
        return CapturedError(kind=self.kind, config_name=self.config_name, detail=self.detail)


class ConfigUsageError(TypeError):
    """The holder API was used in an order that breaks its type guarantees.

    Never captured as a value, regardless of lazy validation.
    """


@dataclass(frozen=True)
class CapturedError:
    """An EnvConfigError stored in place of the value it replaced.

    Produced by ``ValueHolder.get`` when lazy validation is on, and
    collected later by ``EnvUtils.validate``.
    """

    kind: str
    config_name: str
    detail: str

    @property
    def message(self) -> str:
        return f"Error in env variable {self.config_name}: {self.detail}"

    def raise_(self) -> None:
        raise EnvConfigError(self.config_name, self.detail, self.kind)


class EnvValidationError(ValueError):
    """Aggregated failure listing every captured error in a config tree."""

    def __init__(self, env_name: str, errors: Sequence[CapturedError]):
        self.env_name = env_name
        self.errors: List[CapturedError] = list(errors)
        plural = "errors" if len(self.errors) > 1 else "error"
        lines = "\n".join("-> " + err.message for err in self.errors)
        super().__init__(
            f'Errors in configuration with env "{env_name}" ({len(self.errors)} {plural}):\n' + lines
        )


__all__ = [
    "EnvConfigError",
    "ConfigUsageError",
    "CapturedError",
    "EnvValidationError",
    "NOT_DEFINED",
    "INVALID_BOOLEAN",
    "INVALID_FLOAT",
    "INVALID_INTEGER",
    "INVALID_DICT_ENTRY",
    "INVALID_TRANSLATOR",
    "INVALID_CUSTOM",
]
