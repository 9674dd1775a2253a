"""
scoring and ranking of the fusion candidates once all evidence has been collected
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .constants import (
    ANCHOR_SUPPORT,
    COLUMNS,
    JUNCTION_READ_WEIGHT,
    NO_DATA,
    READ_NAME_DELIM,
    SPLICE_TYPE,
)
from .evidence import BreakpointKey, EvidenceAggregator
from .util import logger


@dataclass(frozen=True)
class FusionCandidate:
    simple_name: str
    complex_name: str
    junction_count: int
    spanning_count: int
    left_gene_id: str
    right_gene_id: str
    left_breakpoint: str
    right_breakpoint: str
    splice_type: str
    anchor_support: str
    score: int
    left_delta: str = NO_DATA
    right_delta: str = NO_DATA
    breakpoint_key: Optional[BreakpointKey] = None
    junction_reads: List[str] = field(default_factory=list)
    spanning_reads: List[str] = field(default_factory=list)

    def sort_key(self):
        """
        the deterministic ranking key: highest score first, ties broken by name then breakpoint
        """
        return (
            -self.score,
            self.simple_name,
            self.complex_name,
            '' if self.breakpoint_key is None else str(self.breakpoint_key),
        )

    def flatten(self) -> Dict:
        return {
            COLUMNS.fusion_name: self.simple_name,
            COLUMNS.junction_read_count: self.junction_count,
            COLUMNS.spanning_frag_count: self.spanning_count,
            COLUMNS.splice_type: self.splice_type,
            COLUMNS.left_gene: self.left_gene_id,
            COLUMNS.left_breakpoint: self.left_breakpoint,
            COLUMNS.right_gene: self.right_gene_id,
            COLUMNS.right_breakpoint: self.right_breakpoint,
            COLUMNS.junction_reads: READ_NAME_DELIM.join(self.junction_reads) or NO_DATA,
            COLUMNS.spanning_frags: READ_NAME_DELIM.join(self.spanning_reads) or NO_DATA,
            COLUMNS.large_anchor_support: self.anchor_support,
        }


def compute_score(junction_count: int, spanning_count: int) -> int:
    """
    Example:
        >>> compute_score(2, 1)
        9
    """
    return JUNCTION_READ_WEIGHT * junction_count + spanning_count


def classify_splice_type(breakpoint: BreakpointKey) -> str:
    if breakpoint.left_delta == 0 and breakpoint.right_delta == 0:
        return SPLICE_TYPE.REFERENCE
    return SPLICE_TYPE.NON_REFERENCE


def score_fusion_pair(aggregator: EvidenceAggregator, complex_name: str) -> List[FusionCandidate]:
    """
    create a candidate for every breakpoint of a given fusion pair

    Args:
        aggregator: the evidence collected for all fusion pairs
        complex_name: the fusion pair to score

    Returns:
        the candidates for the fusion pair. Ordered by decreasing number of junction reads, ties are
        ordered by the serialized breakpoint

    Note:
        spanning fragments which are also junction reads at a given breakpoint are only counted as
        junction reads for that breakpoint
    """
    pair = aggregator.fusion_pairs[complex_name]
    spanning = aggregator.spanning_reads(complex_name)
    breakpoints = aggregator.breakpoints(complex_name)

    if not breakpoints:
        return [
            FusionCandidate(
                simple_name=pair.simple_name,
                complex_name=complex_name,
                junction_count=0,
                spanning_count=len(spanning),
                left_gene_id=pair.left_gene_id,
                right_gene_id=pair.right_gene_id,
                left_breakpoint=pair.left_coord,
                right_breakpoint=pair.right_coord,
                splice_type=SPLICE_TYPE.NO_JUNCTION,
                anchor_support=ANCHOR_SUPPORT.NO,
                score=compute_score(0, len(spanning)),
                spanning_reads=sorted(spanning),
            )
        ]

    candidates = []
    for breakpoint in sorted(breakpoints, key=lambda b: (-len(breakpoints[b]), str(b))):
        junction_reads = breakpoints[breakpoint]
        spanning_reads = spanning - junction_reads
        candidates.append(
            FusionCandidate(
                simple_name=pair.simple_name,
                complex_name=complex_name,
                junction_count=len(junction_reads),
                spanning_count=len(spanning_reads),
                left_gene_id=pair.left_gene_id,
                right_gene_id=pair.right_gene_id,
                left_breakpoint=breakpoint.left,
                right_breakpoint=breakpoint.right,
                left_delta=NO_DATA if breakpoint.left_delta is None else str(breakpoint.left_delta),
                right_delta=NO_DATA
                if breakpoint.right_delta is None
                else str(breakpoint.right_delta),
                breakpoint_key=breakpoint,
                splice_type=classify_splice_type(breakpoint),
                anchor_support=ANCHOR_SUPPORT.YES
                if aggregator.has_double_long_anchor(complex_name, breakpoint)
                else ANCHOR_SUPPORT.NO,
                score=compute_score(len(junction_reads), len(spanning_reads)),
                junction_reads=sorted(junction_reads),
                spanning_reads=sorted(spanning_reads),
            )
        )
    return candidates


def score_all(aggregator: EvidenceAggregator) -> List[FusionCandidate]:
    candidates = []
    for complex_name in sorted(aggregator.fusion_pairs):
        candidates.extend(score_fusion_pair(aggregator, complex_name))
    logger.info(f'scored {len(candidates)} candidates from {len(aggregator)} fusion pairs')
    return candidates


def rank_candidates(candidates: List[FusionCandidate]) -> List[FusionCandidate]:
    """
    sort the candidates by decreasing score. Ties are ordered by the fusion name and then by the breakpoint
    so that the output is reproducible between runs
    """
    return sorted(candidates, key=lambda c: c.sort_key())
