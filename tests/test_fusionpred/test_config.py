import argparse

from fusionpred.config import CustomHelpFormatter, get_metavar
from fusionpred.util import cast_boolean


class TestGetMetavar:
    def test_types(self):
        assert get_metavar(bool) == '{True,False}'
        assert get_metavar(cast_boolean) == '{True,False}'
        assert get_metavar(int) == 'INT'
        assert get_metavar(float) == 'FLOAT'
        assert get_metavar(str) is None


class TestCustomHelpFormatter:
    def test_required_without_default(self):
        parser = argparse.ArgumentParser(formatter_class=CustomHelpFormatter)
        parser.add_argument('--inputs', required=True, help='input files')
        parser.add_argument('--min_score', type=int, default=4, help='minimum score')
        help_text = parser.format_help()
        assert 'input files\n' in help_text
        assert 'minimum score (default: 4)' in help_text
        assert 'MIN_SCORE' not in help_text
        assert 'INT' in help_text
