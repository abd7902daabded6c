"""Typed env configuration values with batch validation."""
from .env_utils import EnvProxy, EnvUtils, EnvUtilsReturn, collect_errors, env_utils
from .errors import CapturedError, ConfigUsageError, EnvConfigError, EnvValidationError
from .sources import load_env_file, process_env
from .types import ENV_NAME_VARIABLE, WILDCARD, EnvDefaultMap, LongEnvNames, ShortEnvNames
from .value_holder import ValueHolder

__all__ = [
    'EnvUtils',
    'EnvProxy',
    'EnvUtilsReturn',
    'env_utils',
    'collect_errors',
    'ValueHolder',
    'EnvConfigError',
    'ConfigUsageError',
    'CapturedError',
    'EnvValidationError',
    'load_env_file',
    'process_env',
    'ENV_NAME_VARIABLE',
    'WILDCARD',
    'EnvDefaultMap',
    'ShortEnvNames',
    'LongEnvNames',
]
