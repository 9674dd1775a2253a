"""
module responsible for the controlled vocabulary and constants used throughout the fusionpred package
"""
from mavis_config.constants import MavisNamespace

PROGNAME: str = 'fusionpred'
EXIT_OK: int = 0
EXIT_ERROR: int = 1

NO_DATA: str = '.'
"""placeholder used by the aligner annotation and in the outputs where a value is not available"""

UNDEFINED_READ_GROUP: str = 'GRPundef'
"""read group reported by the aligner for reads not assigned to any read group"""

GENE_ID_DELIM: str = '^'
"""separates the gene symbol from the stable gene id in a composite gene identifier"""

FUSION_DELIM: str = '--'
"""joins the left and right gene of a fusion pair"""

BREAKPOINT_KEY_DELIM: str = '|'
"""joins the fields of a serialized breakpoint key"""

READ_NAME_DELIM: str = ','
"""joins read names in the ranked candidates table"""

NUM_FIXED_COLUMNS: int = 14
"""number of positional columns at the start of every chimeric junction row"""

ENCOMPASSING_JUNCTION_TYPE: str = '-1'
"""junction type reported for a discordant mate pair where neither read crosses the breakpoint"""

LONG_ANCHOR_SIZE: int = 25
"""minimum anchor length (bases) for a read segment to be counted as a long anchor"""

JUNCTION_READ_WEIGHT: int = 4
"""score weight of a junction (split) read relative to a spanning fragment"""


class SENSE(MavisNamespace):
    """
    holds controlled vocabulary for the orientation of a read segment relative to the gene model

    Attributes:
        SENSE: the segment aligns in the direction of transcription
        ANTISENSE: the segment aligns opposite to the direction of transcription
    """

    SENSE: str = 'sense'
    ANTISENSE: str = 'antisense'


class STRAND(MavisNamespace):
    """
    holds controlled vocabulary for allowed strand values

    Attributes:
        POS: the positive/forward strand
        NEG: the negative/reverse strand
    """

    POS: str = '+'
    NEG: str = '-'


class SPLICE_TYPE(MavisNamespace):
    """
    holds controlled vocabulary for the splice site classification of a fusion breakpoint

    Attributes:
        REFERENCE: both sides of the breakpoint fall exactly on annotated splice sites
        NON_REFERENCE: at least one side of the breakpoint is not an annotated splice site
        NO_JUNCTION: no junction reads support the fusion so the breakpoint is not resolved
    """

    REFERENCE: str = 'only reference splice sites'
    NON_REFERENCE: str = 'includes non-reference splice site'
    NO_JUNCTION: str = 'no junction reads'


class ANCHOR_SUPPORT(MavisNamespace):
    """
    holds controlled vocabulary for the long anchor support label

    Attributes:
        YES: at least one junction read has a long anchor on each side of the breakpoint
        NO: one or both sides of the breakpoint lack a long anchor
    """

    YES: str = 'yes long double anchor support'
    NO: str = 'no long double anchor support'


class SIDE(MavisNamespace):
    LEFT: str = 'left'
    RIGHT: str = 'right'


class OUTPUT_SUFFIX(MavisNamespace):
    """
    suffixes appended to the output prefix for each of the output files
    """

    CANDIDATES: str = 'fusion_candidates.preliminary'
    JUNCTION_READS: str = 'junction_read_names'
    SPANNING_READS: str = 'spanning_frag_names'


# content related to tabbed files for input/output
# ensure that we don't have to change ALL the code when we update column names
class COLUMNS(MavisNamespace):
    """
    Column names for the output files
    """

    fusion_name: str = 'FusionName'
    junction_read_count: str = 'JunctionReadCount'
    spanning_frag_count: str = 'SpanningFragCount'
    splice_type: str = 'SpliceType'
    left_gene: str = 'LeftGene'
    left_breakpoint: str = 'LeftBreakpoint'
    right_gene: str = 'RightGene'
    right_breakpoint: str = 'RightBreakpoint'
    junction_reads: str = 'JunctionReads'
    spanning_frags: str = 'SpanningFrags'
    large_anchor_support: str = 'LargeAnchorSupport'
    fusion_complex_name: str = 'FusionComplexName'
    breakpoint_key: str = 'Breakpoint'
    read_name: str = 'ReadName'


CANDIDATE_COLUMNS = [
    COLUMNS.fusion_name,
    COLUMNS.junction_read_count,
    COLUMNS.spanning_frag_count,
    COLUMNS.splice_type,
    COLUMNS.left_gene,
    COLUMNS.left_breakpoint,
    COLUMNS.right_gene,
    COLUMNS.right_breakpoint,
    COLUMNS.junction_reads,
    COLUMNS.spanning_frags,
    COLUMNS.large_anchor_support,
]

JUNCTION_READ_COLUMNS = [COLUMNS.fusion_complex_name, COLUMNS.breakpoint_key, COLUMNS.read_name]

SPANNING_READ_COLUMNS = [COLUMNS.fusion_complex_name, COLUMNS.read_name]


class DEFAULTS(MavisNamespace):
    """
    default values of the command line options. The output prefix and log level can also be set with the
    matching FUSIONPRED_ environment variable
    """

    output_prefix: str = 'fusionpred'
    log_level: str = 'INFO'
    remove_duplicates: bool = True
