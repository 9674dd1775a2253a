"""
aggregation of the read evidence supporting each candidate fusion pair

Evidence is collected in three maps keyed by the fusion complex name

- spanning evidence: names of the discordant read pairs (fragments) supporting the fusion
- junction evidence: names of the reads split across each distinct breakpoint of the fusion
- long anchor flags: whether any junction read at a breakpoint had a long anchor on either side
"""
from dataclasses import dataclass
from typing import Dict, Iterator, List, NamedTuple, Optional, Set, Tuple

from .constants import (
    BREAKPOINT_KEY_DELIM,
    FUSION_DELIM,
    LONG_ANCHOR_SIZE,
    NO_DATA,
    SENSE,
    SIDE,
)
from .record import ChimericAlignmentRecord, GeneHit
from .util import logger


class BreakpointKey(NamedTuple):
    """
    identifies a single junction breakpoint of a fusion pair. Reads are grouped into the same
    breakpoint only when all four fields match exactly
    """

    left: str
    left_delta: Optional[int]
    right: str
    right_delta: Optional[int]

    def __str__(self):
        return BREAKPOINT_KEY_DELIM.join(
            [
                self.left,
                NO_DATA if self.left_delta is None else str(self.left_delta),
                self.right,
                NO_DATA if self.right_delta is None else str(self.right_delta),
            ]
        )

    @classmethod
    def from_hits(cls, left_hit: GeneHit, right_hit: GeneHit) -> 'BreakpointKey':
        return cls(left_hit.breakpoint, left_hit.delta, right_hit.breakpoint, right_hit.delta)


@dataclass
class FusionPair:
    """
    the identity of a fusion gene pair with the roles of the genes resolved (left is the 5' gene)

    The left/right coordinates are only used to report fusions which have no junction reads
    """

    complex_name: str
    simple_name: str
    left_gene_id: str
    right_gene_id: str
    left_coord: str
    right_coord: str

    @classmethod
    def from_hits(cls, left_hit: GeneHit, right_hit: GeneHit) -> 'FusionPair':
        """
        Example:
            >>> left = GeneHit('BCR^ENSG1', 'chr22', 100, 'sense', 30)
            >>> right = GeneHit('ABL1^ENSG2', 'chr9', 500, 'sense', 30)
            >>> FusionPair.from_hits(left, right).simple_name
            'BCR--ABL1'
        """
        return cls(
            complex_name=left_hit.gene_id + FUSION_DELIM + right_hit.gene_id,
            simple_name=left_hit.gene_symbol + FUSION_DELIM + right_hit.gene_symbol,
            left_gene_id=left_hit.gene_id,
            right_gene_id=right_hit.gene_id,
            left_coord=left_hit.breakpoint,
            right_coord=right_hit.breakpoint,
        )


class EvidenceAggregator:
    """
    accumulates the evidence for all fusion pairs observed in a run

    Attributes:
        fusion_pairs: fusion pair identity by complex name
        spanning_evidence: names of the spanning fragments by complex name
        junction_evidence: names of the junction reads by breakpoint by complex name
        long_anchor_flags: long anchor flags (by side) by breakpoint by complex name
    """

    def __init__(self):
        self.fusion_pairs: Dict[str, FusionPair] = {}
        self.spanning_evidence: Dict[str, Set[str]] = {}
        self.junction_evidence: Dict[str, Dict[BreakpointKey, Set[str]]] = {}
        self.long_anchor_flags: Dict[str, Dict[BreakpointKey, Dict[str, bool]]] = {}

    def __len__(self):
        return len(self.fusion_pairs)

    def add_fusion_pair(self, pair: FusionPair):
        self.fusion_pairs[pair.complex_name] = pair

    def add_spanning_read(self, complex_name: str, read_name: str):
        self.spanning_evidence.setdefault(complex_name, set()).add(read_name)

    def add_junction_read(self, complex_name: str, breakpoint: BreakpointKey, read_name: str):
        self.junction_evidence.setdefault(complex_name, {}).setdefault(breakpoint, set()).add(
            read_name
        )

    def flag_long_anchor(self, complex_name: str, breakpoint: BreakpointKey, side: str):
        self.long_anchor_flags.setdefault(complex_name, {}).setdefault(breakpoint, {})[
            SIDE.enforce(side)
        ] = True

    def spanning_reads(self, complex_name: str) -> Set[str]:
        return self.spanning_evidence.get(complex_name, set())

    def breakpoints(self, complex_name: str) -> Dict[BreakpointKey, Set[str]]:
        return self.junction_evidence.get(complex_name, {})

    def has_double_long_anchor(self, complex_name: str, breakpoint: BreakpointKey) -> bool:
        flags = self.long_anchor_flags.get(complex_name, {}).get(breakpoint, {})
        return bool(flags.get(SIDE.LEFT) and flags.get(SIDE.RIGHT))

    def merge(self, other: 'EvidenceAggregator') -> 'EvidenceAggregator':
        """
        add the evidence from another aggregator to the current one. Read name sets and anchor
        flags are combined by union. For fusion pairs present in both, the other pair identity
        replaces the current one (last write wins)
        """
        self.fusion_pairs.update(other.fusion_pairs)
        for complex_name, reads in other.spanning_evidence.items():
            self.spanning_evidence.setdefault(complex_name, set()).update(reads)
        for complex_name, reads_by_breakpoint in other.junction_evidence.items():
            current = self.junction_evidence.setdefault(complex_name, {})
            for breakpoint, reads in reads_by_breakpoint.items():
                current.setdefault(breakpoint, set()).update(reads)
        for complex_name, flags_by_breakpoint in other.long_anchor_flags.items():
            current_flags = self.long_anchor_flags.setdefault(complex_name, {})
            for breakpoint, flags in flags_by_breakpoint.items():
                merged = current_flags.setdefault(breakpoint, {})
                for side, flag in flags.items():
                    merged[side] = merged.get(side, False) or flag
        return self

    def junction_read_associations(self) -> Iterator[Tuple[str, BreakpointKey, str]]:
        """
        all (complex name, breakpoint, read name) associations in a reproducible order
        """
        for complex_name in sorted(self.junction_evidence):
            reads_by_breakpoint = self.junction_evidence[complex_name]
            for breakpoint in sorted(reads_by_breakpoint, key=str):
                for read_name in sorted(reads_by_breakpoint[breakpoint]):
                    yield complex_name, breakpoint, read_name

    def spanning_read_associations(self) -> Iterator[Tuple[str, str]]:
        """
        all (complex name, read name) associations in a reproducible order
        """
        for complex_name in sorted(self.spanning_evidence):
            for read_name in sorted(self.spanning_evidence[complex_name]):
                yield complex_name, read_name


def expand_fusion_hypotheses(
    record: ChimericAlignmentRecord, aggregator: EvidenceAggregator
) -> List[FusionPair]:
    """
    add the evidence from a single chimeric alignment for every combination of the genes hit by
    the left and right side of the alignment

    Args:
        record: the chimeric alignment
        aggregator: the evidence for the current run (updated in place)

    Returns:
        the fusion pairs the alignment was added to as evidence

    Note:
        pairs of genes where one side is sense and the other antisense are not consistent with a fusion
        transcript and are skipped. Antisense pairs are swapped so that the left gene is always the 5' gene
    """
    supported = []
    for left_hit in record.left_hits:
        for right_hit in record.right_hits:
            if left_hit.sense != right_hit.sense:
                logger.debug(
                    f'skipping {record.read_name}: inconsistent orientation {left_hit.gene_id} '
                    f'({left_hit.sense}) {right_hit.gene_id} ({right_hit.sense})'
                )
                continue
            if left_hit.sense == SENSE.ANTISENSE:
                first, second = right_hit, left_hit
            else:
                first, second = left_hit, right_hit

            pair = FusionPair.from_hits(first, second)
            aggregator.add_fusion_pair(pair)

            if record.is_encompassing:
                aggregator.add_spanning_read(pair.complex_name, record.read_name)
            else:
                breakpoint = BreakpointKey.from_hits(first, second)
                aggregator.add_junction_read(pair.complex_name, breakpoint, record.read_name)
                if first.anchor_length >= LONG_ANCHOR_SIZE:
                    aggregator.flag_long_anchor(pair.complex_name, breakpoint, SIDE.LEFT)
                if second.anchor_length >= LONG_ANCHOR_SIZE:
                    aggregator.flag_long_anchor(pair.complex_name, breakpoint, SIDE.RIGHT)
            supported.append(pair)
    return supported
