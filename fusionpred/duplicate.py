from typing import Set, Tuple

from .record import ChimericAlignmentRecord

AlignmentSignature = Tuple[str, int, str, str, int, str]


class DuplicateFilter:
    """
    tracks the physical alignment signature of the chimeric alignments seen in a run so that
    PCR/optical duplicates are only counted once, even when their read names differ

    Attributes:
        remove_duplicates: when False every record is kept (signatures are still counted)
        seen: number of records checked
        removed: number of records flagged as duplicates
    """

    def __init__(self, remove_duplicates: bool = True):
        self.remove_duplicates = remove_duplicates
        self.signatures: Set[AlignmentSignature] = set()
        self.seen = 0
        self.removed = 0

    @staticmethod
    def key(record: ChimericAlignmentRecord) -> AlignmentSignature:
        return (
            record.donor_chrom,
            record.first_segment_start,
            record.first_segment_cigar,
            record.acceptor_chrom,
            record.second_segment_start,
            record.second_segment_cigar,
        )

    def is_duplicate(self, record: ChimericAlignmentRecord) -> bool:
        """
        Returns:
            True if an earlier record had the same alignment signature and duplicate removal is enabled
        """
        self.seen += 1
        signature = self.key(record)
        if signature in self.signatures:
            if self.remove_duplicates:
                self.removed += 1
                return True
            return False
        self.signatures.add(signature)
        return False
