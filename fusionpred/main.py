#!python
import argparse
import logging
import os
import platform
import sys
import time
from typing import List, Optional

from . import __version__
from . import config as _config
from . import util as _util
from .constants import DEFAULTS, EXIT_OK, OUTPUT_SUFFIX, PROGNAME
from .duplicate import DuplicateFilter
from .evidence import EvidenceAggregator, expand_fusion_hypotheses
from .output import output_filename, write_candidates, write_junction_reads, write_spanning_reads
from .record import read_chimeric_junctions
from .score import FusionCandidate, rank_candidates, score_all


def collect_evidence(inputs: List[str], duplicate_filter: DuplicateFilter) -> EvidenceAggregator:
    """
    read the chimeric alignments from each input file and aggregate the evidence by fusion pair.
    Each file is aggregated separately and then merged. Duplicates are removed across all the files
    """
    aggregator = EvidenceAggregator()
    for input_file in inputs:
        file_evidence = EvidenceAggregator()
        hypotheses = 0
        for record in read_chimeric_junctions(input_file):
            if duplicate_filter.is_duplicate(record):
                continue
            hypotheses += len(expand_fusion_hypotheses(record, file_evidence))
        _util.logger.info(
            f'added {hypotheses} fusion hypotheses for {len(file_evidence)} fusion pairs from {input_file}'
        )
        aggregator.merge(file_evidence)
    _util.logger.info(
        f'removed {duplicate_filter.removed} duplicate alignments of {duplicate_filter.seen}'
    )
    return aggregator


def predict(
    inputs: List[str],
    output_prefix: str = DEFAULTS.output_prefix,
    remove_duplicates: bool = DEFAULTS.remove_duplicates,
) -> List[FusionCandidate]:
    """
    Args:
        inputs: the chimeric junction files to read
        output_prefix: prefix of the output files
        remove_duplicates: remove alignments with the same alignment signature as a previous alignment

    Returns:
        the ranked fusion candidates
    """
    duplicate_filter = DuplicateFilter(remove_duplicates=remove_duplicates)
    aggregator = collect_evidence(inputs, duplicate_filter)
    _util.logger.info(f'found {len(aggregator)} fusion pairs')

    candidates = rank_candidates(score_all(aggregator))

    if os.path.dirname(output_prefix):
        _util.mkdirp(os.path.dirname(output_prefix))
    write_candidates(candidates, output_filename(output_prefix, OUTPUT_SUFFIX.CANDIDATES))
    write_junction_reads(aggregator, output_filename(output_prefix, OUTPUT_SUFFIX.JUNCTION_READS))
    write_spanning_reads(aggregator, output_filename(output_prefix, OUTPUT_SUFFIX.SPANNING_READS))
    return candidates


def create_parser(argv):
    parser = argparse.ArgumentParser(
        prog=PROGNAME,
        formatter_class=_config.CustomHelpFormatter,
        add_help=False,
        description='rank candidate gene fusions from annotated chimeric junction alignments',
    )
    required = parser.add_argument_group('required arguments')
    optional = parser.add_argument_group('optional arguments')
    optional.add_argument('-h', '--help', action='help', help='show this help message and exit')
    optional.add_argument(
        '-v',
        '--version',
        action='version',
        version='%(prog)s version ' + __version__,
        help='Outputs the version number',
    )
    optional.add_argument('--log', help='redirect stdout to a log file', default=None)
    optional.add_argument(
        '--log_level',
        help='level of logging to output',
        choices=['INFO', 'DEBUG'],
        default=_util.get_env_variable('log_level', DEFAULTS.log_level),
    )
    optional.add_argument(
        '--debug',
        action='store_true',
        default=False,
        help='output debugging information (overrides --log_level)',
    )
    required.add_argument(
        '-n',
        '--inputs',
        nargs='+',
        help='path to the chimeric junction file(s) annotated with gene hits',
        required=True,
        metavar='FILEPATH',
    )
    optional.add_argument(
        '-o',
        '--output_prefix',
        default=_util.get_env_variable('output_prefix', DEFAULTS.output_prefix),
        help='prefix for the output files',
    )
    optional.add_argument(
        '--no_remove_dups',
        action='store_true',
        default=False,
        help='do not remove alignments which duplicate the alignment signature of a previous alignment',
    )
    return parser, parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """
    sets up the parser and checks the validity of command line args then predicts the fusion candidates

    Args:
        argv: List of arguments, defaults to command line arguments
    """
    if argv is None:  # need to do at run time or patching will not behave as expected
        argv = sys.argv[1:]
    start_time = int(time.time())
    parser, args = create_parser(argv)

    # try checking the input files exist
    try:
        args.inputs = _util.bash_expands(*args.inputs)
    except FileNotFoundError:
        parser.error('--inputs file(s) {} do not exist'.format(args.inputs))

    if args.debug:
        args.log_level = 'DEBUG'

    log_conf = {
        'format': '{asctime} [{levelname}] {message}',
        'style': '{',
        'level': args.log_level,
    }

    original_logging_handlers = logging.root.handlers[:]
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    if args.log:  # redirect stdout AND stderr to a log file
        log_conf['filename'] = args.log
    logging.basicConfig(**log_conf)

    _util.logger.info(f'{PROGNAME}: {__version__}')
    _util.logger.info(f'hostname: {platform.node()}')
    _util.log_arguments(args)

    try:
        predict(
            inputs=args.inputs,
            output_prefix=args.output_prefix,
            remove_duplicates=not args.no_remove_dups,
        )
        duration = int(time.time()) - start_time
        _util.logger.info(f'run time (hh/mm/ss): {_util.format_duration(start_time)}')
        _util.logger.info(f'run time (s): {duration}')
        return EXIT_OK
    except Exception as err:
        if args.log:
            _util.logger.exception(err)  # capture the error in the logging output file
        raise err
    finally:
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
            handler.close()
        for handler in original_logging_handlers:
            logging.root.addHandler(handler)


if __name__ == '__main__':
    main()
