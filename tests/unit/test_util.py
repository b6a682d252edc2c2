import argparse
import os
from unittest.mock import patch

import pytest
from bedanno.config import DEFAULTS, get_default, get_metavar
from bedanno.types import ReferenceName
from bedanno.util import (
    ENV_VAR_PREFIX,
    cast,
    cast_boolean,
    format_duration,
    get_env_variable,
    log_arguments,
)


class TestCast:
    def test_float(self):
        assert type(cast('1', float)) == type(1.0)
        assert type(cast('1', int)) != type(1.0)

    def test_boolean(self):
        assert type(cast('f', bool)) == type(False)
        assert not cast('f', bool)
        assert not cast('false', bool)
        assert not cast('0', bool)
        assert not cast('F', bool)
        assert cast('yes', bool)

    def test_boolean_error(self):
        with pytest.raises(TypeError):
            cast_boolean('maybe')


class TestGetEnvVariable:
    def test_not_set(self):
        assert get_env_variable('test_not_set_variable', 1) == 1

    def test_needs_cast(self):
        with patch.dict(os.environ, {ENV_VAR_PREFIX + 'CHUNK_SIZE': '15'}):
            assert get_env_variable('chunk_size', 1) == 15

    def test_boolean(self):
        with patch.dict(os.environ, {ENV_VAR_PREFIX + 'IGNORE_CHR_PREFIX': 'true'}):
            assert get_env_variable('ignore_chr_prefix', False) is True


class TestGetDefault:
    def test_default(self, monkeypatch):
        monkeypatch.delenv(ENV_VAR_PREFIX + 'DATA_DIR', raising=False)
        assert get_default('data_dir') == DEFAULTS.data_dir

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv(ENV_VAR_PREFIX + 'DATA_DIR', '/refs')
        assert get_default('data_dir') == '/refs'

    def test_unknown(self):
        with pytest.raises(AttributeError):
            get_default('not_a_setting')

    def test_defaults_keys(self):
        assert DEFAULTS.keys() == ['data_dir', 'chunk_size', 'log_level', 'ignore_chr_prefix']


class TestGetMetavar:
    def test_types(self):
        assert get_metavar(bool) == '{True,False}'
        assert get_metavar(cast_boolean) == '{True,False}'
        assert get_metavar(int) == 'INT'
        assert get_metavar(float) == 'FLOAT'
        assert get_metavar(str) is None


class TestFormatDuration:
    def test_seconds(self):
        assert format_duration(5) == '0:00:05'

    def test_hours(self):
        assert format_duration(3725) == '1:02:05'


class TestLogArguments:
    def test_logs_each_argument(self, caplog):
        caplog.set_level('INFO', logger='bedanno')
        log_arguments(argparse.Namespace(bed='regions.bed', chunk_size=10, files=['a', 'b']))
        assert "bed = 'regions.bed'" in caplog.text
        assert 'chunk_size = 10' in caplog.text
        assert "'b'" in caplog.text


class TestReferenceName:
    def test_prefix_insensitive(self):
        assert ReferenceName('chr1') == ReferenceName('1')
        assert ReferenceName('1') == 'chr1'
        assert ReferenceName('chr1') != ReferenceName('chr2')
        assert hash(ReferenceName('chr1')) == hash(ReferenceName('1'))
