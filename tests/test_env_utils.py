"""Tests for EnvUtils lookup and validate."""
from dataclasses import dataclass
from typing import Dict, get_args

import pytest

from envutils import (
    CapturedError,
    EnvConfigError,
    EnvUtils,
    EnvValidationError,
    LongEnvNames,
    ShortEnvNames,
    ValueHolder,
    env_utils,
)


def test_lookup_reads_prefixed_key():
    utils = EnvUtils(prefix='APP_', source={'APP_PORT': '8080', 'PORT': '1'}, env_name='dev')
    holder = utils.lookup('PORT')

    assert isinstance(holder, ValueHolder)
    assert holder.name == 'PORT'
    assert holder.raw_value == '8080'
    assert holder.env_name == 'dev'
    assert holder.as_integer().get() == 8080


def test_lookup_distinguishes_absent_from_empty():
    utils = EnvUtils(source={'EMPTY': ''})
    assert utils.lookup('EMPTY').get() == ''
    with pytest.raises(EnvConfigError, match='Value not defined'):
        utils.lookup('MISSING').get()


def test_non_string_source_values_read_as_absent():
    utils = EnvUtils(source={'NUM': 5})
    assert utils.lookup('NUM').raw_value is None


def test_lookup_is_not_cached():
    source = {'HOST': 'a'}
    utils = EnvUtils(source=source)
    first = utils.lookup('HOST')
    source['HOST'] = 'b'
    assert first.get() == 'a'
    assert utils.lookup('HOST').get() == 'b'


def test_env_name_resolution():
    assert EnvUtils(source={'APP_ENV': 'prod'}).env_name == 'prod'
    assert EnvUtils(source={'APP_ENV': 'prod'}, env_name='test').env_name == 'test'
    assert EnvUtils(source={}).env_name == 'undefined'


def test_defaults_follow_env_name():
    source = {'APP_ENV': 'prod'}
    defaults = {'prod': 'X', '*': 'Y'}
    assert EnvUtils(source=source).lookup('MODE').get(defaults) == 'X'
    assert EnvUtils(source=source, env_name='dev').lookup('MODE').get(defaults) == 'Y'


def test_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv('ENVUTILS_TEST_VALUE', 'from-os')
    monkeypatch.setenv('APP_ENV', 'test')
    utils = EnvUtils()
    assert utils.lookup('ENVUTILS_TEST_VALUE').get() == 'from-os'
    assert utils.env_name == 'test'


def test_env_proxy_attribute_and_item_access():
    utils = EnvUtils(prefix='X_', source={'X_DEBUG': 'true'})
    assert utils.env.DEBUG.as_boolean().get() is True
    assert utils.env['DEBUG'].boolean().get() is True


def test_env_utils_factory():
    env, validate_env = env_utils(source={'RETRIES': 'three'}, lazy_validation=True)
    config = {'retries': env.RETRIES.as_integer().get()}
    with pytest.raises(EnvValidationError, match='Invalid integer "three"'):
        validate_env(config)


class TestValidate:
    """Batch validation of config trees built in lazy mode."""

    def _utils(self, source):
        return EnvUtils(source=source, env_name='prod', lazy_validation=True)

    def test_valid_tree_is_returned_unchanged(self):
        utils = self._utils({'PORT': '80', 'DEBUG': 'false'})
        config = {
            'port': utils.lookup('PORT').as_integer().get(),
            'debug': utils.lookup('DEBUG').as_boolean().get(),
            'nested': {'name': 'x', 'items': [1, 2, None]},
        }
        assert utils.validate(config) is config

    def test_collects_errors_in_traversal_order(self):
        utils = self._utils({'PORT': 'eighty', 'DEBUG': 'yes', 'NAME': 'svc'})
        config = {
            'server': {
                'name': utils.lookup('NAME').get(),
                'port': utils.lookup('PORT').as_integer().get(),
            },
            'debug': utils.lookup('DEBUG').as_boolean().get(),
            'timeout': utils.lookup('TIMEOUT').as_float().get(),
        }

        with pytest.raises(EnvValidationError) as exc_info:
            utils.validate(config)

        error = exc_info.value
        assert [e.config_name for e in error.errors] == ['PORT', 'DEBUG', 'TIMEOUT']
        assert error.env_name == 'prod'
        assert str(error) == (
            'Errors in configuration with env "prod" (3 errors):\n'
            '-> Error in env variable PORT: Invalid integer "eighty"\n'
            '-> Error in env variable DEBUG: Invalid boolean value "yes"\n'
            '-> Error in env variable TIMEOUT: Value not defined'
        )

    def test_single_error_message(self):
        utils = self._utils({})
        config = {'host': utils.lookup('HOST').get()}
        with pytest.raises(EnvValidationError, match=r'\(1 error\):\n-> Error in env variable HOST'):
            utils.validate(config)

    def test_walks_lists_dataclasses_and_objects(self):
        @dataclass
        class Database:
            url: object
            pool: object

        class Settings:
            def __init__(self, db, hosts):
                self.db = db
                self.hosts = hosts

        utils = self._utils({'DB_POOL': 'big'})
        settings = Settings(
            db=Database(url=utils.lookup('DB_URL').get(), pool=utils.lookup('DB_POOL').as_integer().get()),
            hosts=[utils.lookup('HOST_A').get(), ('ok', utils.lookup('HOST_B').get())],
        )

        with pytest.raises(EnvValidationError) as exc_info:
            utils.validate(settings)
        names = [e.config_name for e in exc_info.value.errors]
        assert names == ['DB_URL', 'DB_POOL', 'HOST_A', 'HOST_B']

    def test_top_level_error(self):
        utils = self._utils({})
        with pytest.raises(EnvValidationError):
            utils.validate(utils.lookup('MISSING').get())

    def test_cycles_terminate(self):
        utils = self._utils({})
        config = {'value': utils.lookup('MISSING').get()}
        config['self'] = config
        with pytest.raises(EnvValidationError) as exc_info:
            utils.validate(config)
        assert len(exc_info.value.errors) == 1

    def test_leaves_are_ignored(self):
        utils = self._utils({})
        config = {'a': 'text', 'b': 3, 'c': True, 'd': None, 'e': b'bytes'}
        assert utils.validate(config) is config

    def test_eager_mode_raises_at_get(self):
        utils = EnvUtils(source={}, env_name='prod')
        with pytest.raises(EnvConfigError):
            utils.lookup('MISSING').get()

    def test_captured_errors_stored_by_caller(self):
        utils = self._utils({})
        value = utils.lookup('MISSING').get()
        assert isinstance(value, CapturedError)
        assert utils.validate([]) == []


def test_defaults_keyed_by_env_name_literals():
    workers: Dict[ShortEnvNames, int] = {'dev': 1, 'test': 2, 'prod': 8}
    for name in get_args(ShortEnvNames):
        utils = EnvUtils(source={}, env_name=name)
        assert utils.lookup('WORKERS').as_integer().get(workers) == workers[name]

    assert get_args(LongEnvNames) == ('development', 'test', 'production')
    with pytest.raises(EnvConfigError, match='Value not defined'):
        EnvUtils(source={}, env_name='production').lookup('WORKERS').get(workers)
