"""Env config accessor: per-key value holders plus batch validation."""
from __future__ import annotations

import dataclasses
import logging
import types
from pathlib import Path
from typing import Any, Callable, List, Mapping, NamedTuple, Optional, Set, TypeVar, Union

from .errors import CapturedError, EnvValidationError
from .sources import load_env_file, process_env
from .types import ENV_NAME_VARIABLE, UNDEFINED_ENV_NAME
from .value_holder import ValueHolder

logger = logging.getLogger(__name__)

C = TypeVar('C')


class EnvProxy:
    """Attribute/item access to EnvUtils.lookup: ``env.PORT`` == ``env['PORT']``."""

    __slots__ = ('_utils',)

    def __init__(self, utils: EnvUtils):
        self._utils = utils

    def __getattr__(self, key: str) -> ValueHolder:
        if key.startswith('__'):
            raise AttributeError(key)
        return self._utils.lookup(key)

    def __getitem__(self, key: str) -> ValueHolder:
        return self._utils.lookup(key)


class EnvUtils:
    """Reads typed config values from an env-like source."""

    def __init__(
        self,
        prefix: str = '',
        source: Optional[Mapping[str, Any]] = None,
        env_name: Optional[str] = None,
        lazy_validation: bool = False,
    ):
        """
        Initialize the accessor.

        Args:
            prefix: Prepended to every key when reading the source
            source: Key/value store to read from (defaults to os.environ)
            env_name: Active environment; defaults to APP_ENV from the source
            lazy_validation: Return errors as values instead of raising,
                so validate() can report them all at once
        """
        if source is None:
            source = process_env()
        self.source = source

        if env_name:
            self.env_name = env_name
        elif isinstance(source.get(ENV_NAME_VARIABLE), str):
            self.env_name = source[ENV_NAME_VARIABLE]
        else:
            self.env_name = UNDEFINED_ENV_NAME

        self.prefix = prefix or ''
        self.lazy_validation = lazy_validation is True

        logger.debug(
            f"EnvUtils initialized (env={self.env_name}, prefix={self.prefix!r}, "
            f"lazy_validation={self.lazy_validation})"
        )

    @classmethod
    def from_env_file(
        cls,
        path: Optional[Union[Path, str]] = None,
        *,
        include_os_environ: bool = True,
        overrides: Optional[Mapping[str, str]] = None,
        **options: Any,
    ) -> EnvUtils:
        """Create an accessor over a .env file merged with the OS environment."""
        source = load_env_file(path, include_os_environ=include_os_environ, overrides=overrides)
        return cls(source=source, **options)

    @property
    def env(self) -> EnvProxy:
        return EnvProxy(self)

    def lookup(self, key: str) -> ValueHolder:
        """
        Get a holder for one config entry.

        Args:
            key: Entry name, without the prefix

        Returns:
            A new ValueHolder; non-string source values read as absent
        """
        raw = self.source.get(self.prefix + key)
        return ValueHolder(
            name=key,
            raw_value=raw if isinstance(raw, str) else None,
            env_name=self.env_name,
            error_as_value=self.lazy_validation,
        )

    def validate(self, config: C) -> C:
        """
        Collect every captured error from a config tree.

        Args:
            config: Any nesting of mappings, lists, tuples, dataclasses and objects

        Returns:
            config itself, when no errors were found

        Raises:
            EnvValidationError: listing all captured errors in traversal order
        """
        errors = collect_errors(config)
        if not errors:
            return config

        logger.warning(f"Found {len(errors)} config error(s) for env {self.env_name}")
        raise EnvValidationError(self.env_name, errors)


def collect_errors(config: Any) -> List[CapturedError]:
    """Depth-first, pre-order walk returning captured errors in the order found."""
    errors: List[CapturedError] = []
    seen: Set[int] = set()

    def walk(current: Any) -> None:
        if isinstance(current, CapturedError):
            errors.append(current)
            return
        if isinstance(current, (str, bytes, bytearray, type)) or current is None:
            return

        children = _children(current)
        if children is None or id(current) in seen:
            return
        seen.add(id(current))
        for child in children:
            walk(child)

    walk(config)
    return errors


def _children(current: Any) -> Optional[List[Any]]:
    if isinstance(current, Mapping):
        return list(current.values())
    if isinstance(current, (list, tuple, set, frozenset)):
        return list(current)
    if dataclasses.is_dataclass(current):
        return [getattr(current, f.name) for f in dataclasses.fields(current)]
    if hasattr(current, "__dict__") and not callable(current) and not isinstance(current, types.ModuleType):
        return list(vars(current).values())
    return None


class EnvUtilsReturn(NamedTuple):
    env: EnvProxy
    validate_env: Callable[[Any], Any]


def env_utils(**options: Any) -> EnvUtilsReturn:
    """Shortcut returning ``(env, validate_env)`` for one EnvUtils instance."""
    instance = EnvUtils(**options)
    return EnvUtilsReturn(env=instance.env, validate_env=instance.validate)
