from typing import List

from .constants import (
    CANDIDATE_COLUMNS,
    COLUMNS,
    JUNCTION_READ_COLUMNS,
    OUTPUT_SUFFIX,
    SPANNING_READ_COLUMNS,
)
from .evidence import EvidenceAggregator
from .score import FusionCandidate
from .util import output_tabbed_file


def output_filename(prefix: str, suffix: str) -> str:
    """
    Example:
        >>> output_filename('sample1', OUTPUT_SUFFIX.SPANNING_READS)
        'sample1.spanning_frag_names'
    """
    return '{}.{}'.format(prefix, OUTPUT_SUFFIX.enforce(suffix))


def write_candidates(candidates: List[FusionCandidate], filename: str):
    output_tabbed_file([c.flatten() for c in candidates], filename, CANDIDATE_COLUMNS)


def write_junction_reads(aggregator: EvidenceAggregator, filename: str):
    """
    write one row per junction read per breakpoint per fusion pair (regardless of the ranking of the fusion)
    """
    rows = [
        {
            COLUMNS.fusion_complex_name: complex_name,
            COLUMNS.breakpoint_key: str(breakpoint),
            COLUMNS.read_name: read_name,
        }
        for complex_name, breakpoint, read_name in aggregator.junction_read_associations()
    ]
    output_tabbed_file(rows, filename, JUNCTION_READ_COLUMNS)


def write_spanning_reads(aggregator: EvidenceAggregator, filename: str):
    rows = [
        {COLUMNS.fusion_complex_name: complex_name, COLUMNS.read_name: read_name}
        for complex_name, read_name in aggregator.spanning_read_associations()
    ]
    output_tabbed_file(rows, filename, SPANNING_READ_COLUMNS)
