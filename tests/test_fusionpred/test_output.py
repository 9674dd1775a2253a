import os
import shutil
import tempfile

import pytest

from fusionpred.constants import COLUMNS, OUTPUT_SUFFIX
from fusionpred.evidence import EvidenceAggregator, expand_fusion_hypotheses
from fusionpred.output import (
    output_filename,
    write_candidates,
    write_junction_reads,
    write_spanning_reads,
)
from fusionpred.score import rank_candidates, score_all

from ..util import read_output_rows
from .mock import mock_hit, mock_record


@pytest.fixture
def output_dir():
    temp_output = tempfile.mkdtemp()
    yield temp_output
    shutil.rmtree(temp_output)


@pytest.fixture
def aggregator():
    evidence = EvidenceAggregator()
    bcr = mock_hit('BCR^ENSG1', chrom='chr22', coord=23290413)
    abl1 = mock_hit('ABL1^ENSG2', chrom='chr9', coord=130714455)
    expand_fusion_hypotheses(mock_record('r2', [bcr], [abl1]), evidence)
    expand_fusion_hypotheses(mock_record('r1', [bcr], [abl1]), evidence)
    expand_fusion_hypotheses(
        mock_record('r3', [mock_hit('A^1')], [mock_hit('B^2')], junction_type='-1'), evidence
    )
    return evidence


class TestOutputFilename:
    def test_suffix(self):
        assert output_filename('out/sample', OUTPUT_SUFFIX.CANDIDATES) == (
            'out/sample.fusion_candidates.preliminary'
        )

    def test_bad_suffix(self):
        with pytest.raises(KeyError):
            output_filename('sample', 'other')


class TestWriteCandidates:
    def test_header_and_rows(self, aggregator, output_dir):
        filename = os.path.join(output_dir, 'candidates.tab')
        write_candidates(rank_candidates(score_all(aggregator)), filename)
        with open(filename, 'r') as fh:
            header = fh.readline().rstrip('\n').split('\t')
        assert header[0] == '#' + COLUMNS.fusion_name
        assert header[-1] == COLUMNS.large_anchor_support
        assert len(header) == 11

        rows = read_output_rows(filename)
        assert [row[COLUMNS.fusion_name] for row in rows] == ['BCR--ABL1', 'A--B']
        assert rows[0][COLUMNS.junction_reads] == 'r1,r2'
        assert rows[0][COLUMNS.spanning_frags] == '.'
        assert rows[1][COLUMNS.junction_read_count] == '0'
        assert rows[1][COLUMNS.spanning_frags] == 'r3'

    def test_no_candidates(self, output_dir):
        filename = os.path.join(output_dir, 'candidates.tab')
        write_candidates([], filename)
        assert read_output_rows(filename) == []


class TestWriteReadNames:
    def test_junction_reads(self, aggregator, output_dir):
        filename = os.path.join(output_dir, 'junction_reads.tab')
        write_junction_reads(aggregator, filename)
        rows = read_output_rows(filename)
        assert [row[COLUMNS.read_name] for row in rows] == ['r1', 'r2']
        assert rows[0][COLUMNS.fusion_complex_name] == 'BCR^ENSG1--ABL1^ENSG2'
        assert rows[0][COLUMNS.breakpoint_key] == 'chr22:23290413:+|0|chr9:130714455:+|0'

    def test_spanning_reads(self, aggregator, output_dir):
        filename = os.path.join(output_dir, 'spanning_frags.tab')
        write_spanning_reads(aggregator, filename)
        rows = read_output_rows(filename)
        assert rows == [{COLUMNS.fusion_complex_name: 'A^1--B^2', COLUMNS.read_name: 'r3'}]
