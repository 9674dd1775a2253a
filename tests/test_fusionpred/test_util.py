import os
from unittest.mock import patch

import pytest

from fusionpred import util as _util


class TestCast:
    def test_boolean(self):
        assert _util.cast('yes', bool)
        assert not _util.cast('F', bool)
        with pytest.raises(TypeError):
            _util.cast('maybe', bool)

    def test_int(self):
        assert _util.cast('10', int) == 10


class TestGetEnvVariable:
    def test_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert _util.get_env_variable('output_prefix', 'sample') == 'sample'

    def test_from_environment(self):
        with patch.dict(os.environ, {'FUSIONPRED_OUTPUT_PREFIX': 'other'}):
            assert _util.get_env_variable('output_prefix', 'sample') == 'other'


class TestFormatDuration:
    def test_hours(self):
        assert _util.format_duration(0, 3725) == '1:02:05'

    def test_zero(self):
        assert _util.format_duration(100, 100) == '0:00:00'


class TestMkdirp:
    def test_existing(self, tmp_path):
        assert _util.mkdirp(str(tmp_path)) == str(tmp_path)
        nested = str(tmp_path / 'a' / 'b')
        _util.mkdirp(nested)
        assert os.path.isdir(nested)
