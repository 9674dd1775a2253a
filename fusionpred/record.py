"""
parsing of the chimeric junction rows produced by the aligner and annotated with the genes overlapping
each side of the junction
"""
import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .constants import (
    ENCOMPASSING_JUNCTION_TYPE,
    GENE_ID_DELIM,
    NO_DATA,
    NUM_FIXED_COLUMNS,
    SENSE,
    STRAND,
    UNDEFINED_READ_GROUP,
)
from .error import GeneHitDecodeError, MalformedRecordError
from .util import logger

HEADER_FIRST_COLUMN = 'chr_donorA'
"""first column name of the header line written by newer versions of the aligner"""


@dataclass(frozen=True)
class GeneHit:
    """
    a single candidate gene for one side of a chimeric junction

    Attributes:
        gene_id: composite gene identifier (gene symbol and stable id joined by '^')
        chrom: the chromosome
        coord: the breakpoint-aligned genomic position
        sense: orientation of the read segment relative to the gene (sense/antisense)
        anchor_length: number of bases of the read segment uniquely assigned to this side
        orient: exon orientation at the breakpoint
        delta: distance from the breakpoint to the nearest annotated splice site
    """

    gene_id: str
    chrom: str
    coord: int
    sense: str
    anchor_length: int
    orient: Optional[str] = None
    delta: Optional[int] = None

    @property
    def gene_symbol(self) -> str:
        return self.gene_id.split(GENE_ID_DELIM)[0]

    @property
    def breakpoint(self) -> str:
        """
        Example:
            >>> GeneHit('A^1', 'chr1', 100, 'sense', 30, orient='+').breakpoint
            'chr1:100:+'
        """
        return '{}:{}:{}'.format(self.chrom, self.coord, self.orient or NO_DATA)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GeneHit':
        try:
            delta = data.get('delta')
            return cls(
                gene_id=str(data['gene_id']),
                chrom=str(data['chrom']),
                coord=int(data['coord']),
                sense=SENSE.enforce(data['sense_or_antisense']),
                anchor_length=int(data['seg_length']),
                orient=data.get('orient'),
                delta=None if delta in {None, NO_DATA} else int(delta),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as err:
            raise GeneHitDecodeError(f'invalid gene hit ({err}): {data}')


def decode_gene_hits(blob: str) -> List[GeneHit]:
    """
    decode the JSON list of gene hits for one side of a chimeric junction

    Example:
        >>> decode_gene_hits('.')
        []
    """
    blob = blob.strip()
    if blob == NO_DATA:
        return []
    try:
        data = json.loads(blob)
    except ValueError as err:
        raise GeneHitDecodeError(f'gene hits are not valid JSON ({err}): {blob}')
    if isinstance(data, dict):
        data = [data]
    elif not isinstance(data, list):
        raise GeneHitDecodeError(f'expected a list of gene hits: {blob}')
    return [GeneHit.from_dict(hit) for hit in data]


@dataclass
class ChimericAlignmentRecord:
    """
    a single chimeric alignment. The donor/acceptor coordinates are shifted by one base from what the
    aligner reports so that they give the breakpoint (last aligned base) rather than the first intronic base
    """

    donor_chrom: str
    donor_coord: int
    donor_strand: str
    acceptor_chrom: str
    acceptor_coord: int
    acceptor_strand: str
    junction_type: str
    repeat_left: int
    repeat_right: int
    read_name: str
    first_segment_start: int
    first_segment_cigar: str
    second_segment_start: int
    second_segment_cigar: str
    read_group: Optional[str] = None
    left_hits: List[GeneHit] = field(default_factory=list)
    right_hits: List[GeneHit] = field(default_factory=list)

    @property
    def is_encompassing(self) -> bool:
        return self.junction_type == ENCOMPASSING_JUNCTION_TYPE


def tag_read_name(read_name: str, read_group: Optional[str]) -> str:
    """
    prefix the read name with the read group so that read names re-used between read groups do not collide

    Example:
        >>> tag_read_name('r1', 'rg1')
        '&rg1@r1'
        >>> tag_read_name('r1', '0')
        'r1'
    """
    if not read_group or read_group == UNDEFINED_READ_GROUP or re.match(r'^-?\d+$', read_group):
        return read_name
    return f'&{read_group}@{read_name}'


def parse_record(line: str) -> ChimericAlignmentRecord:
    """
    parse a single chimeric junction row

    Args:
        line: the tab delimited row

    Returns:
        the alignment record with its decoded gene hits

    Raises:
        MalformedRecordError: the line does not have the expected columns
        GeneHitDecodeError: the gene hits for either side could not be decoded
    """
    fields = line.rstrip('\r\n').split('\t')
    if len(fields) < NUM_FIXED_COLUMNS + 2:
        raise MalformedRecordError(
            f'expected at least {NUM_FIXED_COLUMNS + 2} columns but found {len(fields)}'
        )
    (
        donor_chrom,
        donor_coord,
        donor_strand,
        acceptor_chrom,
        acceptor_coord,
        acceptor_strand,
        junction_type,
        repeat_left,
        repeat_right,
        read_name,
        first_segment_start,
        first_segment_cigar,
        second_segment_start,
        second_segment_cigar,
    ) = fields[:NUM_FIXED_COLUMNS]

    # older aligner versions do not output any columns between the fixed columns and the gene hits
    read_group = fields[-3] if len(fields) > NUM_FIXED_COLUMNS + 2 else None

    try:
        donor_coord = int(donor_coord)
        acceptor_coord = int(acceptor_coord)
        repeat_left = int(repeat_left)
        repeat_right = int(repeat_right)
        first_segment_start = int(first_segment_start)
        second_segment_start = int(second_segment_start)
    except ValueError as err:
        raise MalformedRecordError(f'expected an integer column: {err}')

    donor_coord += -1 if donor_strand == STRAND.POS else 1
    acceptor_coord += 1 if acceptor_strand == STRAND.POS else -1

    return ChimericAlignmentRecord(
        donor_chrom=donor_chrom,
        donor_coord=donor_coord,
        donor_strand=donor_strand,
        acceptor_chrom=acceptor_chrom,
        acceptor_coord=acceptor_coord,
        acceptor_strand=acceptor_strand,
        junction_type=junction_type,
        repeat_left=repeat_left,
        repeat_right=repeat_right,
        read_name=tag_read_name(read_name, read_group),
        first_segment_start=first_segment_start,
        first_segment_cigar=first_segment_cigar,
        second_segment_start=second_segment_start,
        second_segment_cigar=second_segment_cigar,
        read_group=read_group,
        left_hits=decode_gene_hits(fields[-2]),
        right_hits=decode_gene_hits(fields[-1]),
    )


def read_chimeric_junctions(filename: str) -> Iterator[ChimericAlignmentRecord]:
    """
    iterate over the alignment records in a chimeric junction file. Comment lines and the
    aligner header line are skipped

    Raises:
        MalformedRecordError: any row which cannot be parsed (this is not recovered from)
    """
    logger.info(f'reading: {filename}')
    count = 0
    with open(filename, 'r') as fh:
        for line_no, line in enumerate(fh, start=1):
            if not line.strip() or line.startswith('#') or line.startswith(HEADER_FIRST_COLUMN):
                continue
            try:
                record = parse_record(line)
            except MalformedRecordError as err:
                logger.error(f'error parsing line {line_no} of {filename}')
                raise type(err)(f'{filename}:{line_no}: {err}') from err
            count += 1
            yield record
    logger.info(f'read {count} chimeric alignments from {filename}')
