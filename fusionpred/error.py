class MalformedRecordError(Exception):
    """
    raised when a line of the chimeric junction input cannot be parsed into an alignment record

    this is not recoverable per record since it generally indicates the input was produced by an
    unsupported version of the aligner or annotation step
    """

    pass


class GeneHitDecodeError(MalformedRecordError):
    """
    raised when the gene hits annotated on one side of a chimeric junction are not valid JSON
    or are missing required attributes
    """

    pass
