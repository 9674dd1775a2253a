from fusionpred.duplicate import DuplicateFilter
from fusionpred.evidence import EvidenceAggregator, expand_fusion_hypotheses

from .mock import mock_hit, mock_record


def left_hits():
    return [mock_hit('BCR^ENSG1', chrom='chr22')]


def right_hits():
    return [mock_hit('ABL1^ENSG2', chrom='chr9')]


class TestDuplicateFilter:
    def test_first_occurrence_kept(self):
        dedup = DuplicateFilter()
        assert not dedup.is_duplicate(mock_record('r1', left_hits(), right_hits()))
        assert dedup.seen == 1
        assert dedup.removed == 0

    def test_same_signature_different_read_name(self):
        dedup = DuplicateFilter()
        assert not dedup.is_duplicate(mock_record('r1', left_hits(), right_hits()))
        assert dedup.is_duplicate(mock_record('r2', left_hits(), right_hits()))
        assert dedup.is_duplicate(mock_record('r3', left_hits(), right_hits()))
        assert dedup.removed == 2

    def test_signature_ignores_gene_hits(self):
        dedup = DuplicateFilter()
        dedup.is_duplicate(mock_record('r1', left_hits(), right_hits()))
        assert dedup.is_duplicate(mock_record('r2', [mock_hit('OTHER^1')], right_hits()))

    def test_different_cigar(self):
        dedup = DuplicateFilter()
        dedup.is_duplicate(mock_record('r1', left_hits(), right_hits()))
        assert not dedup.is_duplicate(
            mock_record('r2', left_hits(), right_hits(), second_segment_cigar='40S60M')
        )

    def test_different_segment_start(self):
        dedup = DuplicateFilter()
        dedup.is_duplicate(mock_record('r1', left_hits(), right_hits()))
        assert not dedup.is_duplicate(
            mock_record('r2', left_hits(), right_hits(), first_segment_start=52)
        )

    def test_disabled(self):
        dedup = DuplicateFilter(remove_duplicates=False)
        assert not dedup.is_duplicate(mock_record('r1', left_hits(), right_hits()))
        assert not dedup.is_duplicate(mock_record('r2', left_hits(), right_hits()))
        assert dedup.seen == 2
        assert dedup.removed == 0


class TestDuplicateEvidenceCounts:
    def aggregate(self, records, remove_duplicates):
        dedup = DuplicateFilter(remove_duplicates=remove_duplicates)
        aggregator = EvidenceAggregator()
        for record in records:
            if not dedup.is_duplicate(record):
                expand_fusion_hypotheses(record, aggregator)
        return aggregator

    def test_removal_is_idempotent(self):
        once = self.aggregate([mock_record('r1', left_hits(), right_hits())], True)
        twice = self.aggregate(
            [
                mock_record('r1', left_hits(), right_hits()),
                mock_record('r2', left_hits(), right_hits()),
            ],
            True,
        )
        assert once.junction_evidence == twice.junction_evidence

    def test_disabled_counts_double(self):
        aggregator = self.aggregate(
            [
                mock_record('r1', left_hits(), right_hits()),
                mock_record('r2', left_hits(), right_hits()),
            ],
            False,
        )
        reads = list(aggregator.breakpoints('BCR^ENSG1--ABL1^ENSG2').values())
        assert len(reads) == 1
        assert reads[0] == {'r1', 'r2'}
