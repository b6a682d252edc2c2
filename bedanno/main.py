#!python
import argparse
import logging
import platform
import sys
import time
from typing import List, Optional

from . import __version__
from . import config as _config
from . import util as _util
from .annotate import main as annotate_main
from .annotate.file_io import REFERENCE_ALIASES, STDIN
from .constants import EXIT_ERROR, EXIT_OK, GFF_TYPE, PROGNAME
from .error import ChromosomeReorderError, ParseError, ReferenceNotFoundError


def create_parser(argv):
    parser = argparse.ArgumentParser(
        prog=PROGNAME,
        formatter_class=_config.CustomHelpFormatter,
        description='Annotate the regions of a BED file with the name of the best overlapping gene',
        add_help=False,
    )
    required = parser.add_argument_group('positional arguments')
    optional = parser.add_argument_group('optional arguments')
    required.add_argument(
        'bed', nargs='?', default=STDIN, help='path to the input BED file (.bed or .bed.gz)'
    )
    required.add_argument(
        'reference',
        nargs='?',
        default='hg38',
        help='path to the GTF/GFF file or the name of a built-in reference ({})'.format(
            ', '.join(sorted(REFERENCE_ALIASES))
        ),
    )
    optional.add_argument('-h', '--help', action='help', help='show this help message and exit')
    optional.add_argument(
        '-v',
        '--version',
        action='version',
        version='%(prog)s version ' + __version__,
        help='Outputs the version number',
    )
    optional.add_argument(
        '-o', '--output', default=STDIN, help='path to the output BED file', metavar='FILEPATH'
    )
    optional.add_argument(
        '--gff_type',
        choices=sorted(GFF_TYPE.values()),
        default=None,
        help='annotation file format, detected from the file extension when not given',
    )
    optional.add_argument(
        '--ignore_chr_prefix',
        type=_util.cast_boolean,
        default=_config.get_default('ignore_chr_prefix'),
        help='treat chromosome names with and without the chr prefix as the same chromosome',
    )
    optional.add_argument(
        '--chunk_size',
        type=int,
        default=_config.get_default('chunk_size'),
        help='number of rows read from an input file at a time',
    )
    optional.add_argument(
        '--data_dir',
        default=_config.get_default('data_dir'),
        help='directory holding the built-in references',
    )
    optional.add_argument('--log', help='redirect logging to a log file', default=None)
    optional.add_argument(
        '--log_level',
        help='level of logging to output',
        choices=['INFO', 'DEBUG'],
        default=_config.get_default('log_level'),
    )
    args = parser.parse_args(argv)
    if args.chunk_size < 1:
        parser.error('--chunk_size must be a positive integer')
    return parser, args


def main(argv: Optional[List[str]] = None) -> int:
    """
    sets up the parser, checks the validity of command line args and annotates the input regions

    Args:
        argv: List of arguments, defaults to command line arguments
    """
    if argv is None:  # need to do at run time or patching will not behave as expected
        argv = sys.argv[1:]
    start_time = int(time.time())
    parser, args = create_parser(argv)

    log_conf = {
        'format': '{asctime} [{levelname}] {message}',
        'style': '{',
        'level': args.log_level,
    }

    original_logging_handlers = logging.root.handlers[:]
    for handler in original_logging_handlers:
        logging.root.removeHandler(handler)
    if args.log:
        log_conf['filename'] = args.log
    logging.basicConfig(**log_conf)

    try:
        _util.logger.info(f'{PROGNAME}: {__version__}')
        _util.logger.info(f'hostname: {platform.node()}')
        _util.log_arguments(args)

        try:
            annotate_main.main(
                bed=args.bed,
                reference=args.reference,
                output=args.output,
                gff_type=args.gff_type,
                ignore_chr_prefix=args.ignore_chr_prefix,
                chunk_size=args.chunk_size,
                data_dir=args.data_dir,
                start_time=start_time,
            )
        except (ChromosomeReorderError, ParseError, ReferenceNotFoundError) as err:
            _util.logger.error(str(err))
            return EXIT_ERROR
        except (FileNotFoundError, ValueError) as err:
            _util.logger.error(repr(err))
            return EXIT_ERROR
        return EXIT_OK
    finally:
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
            handler.close()
        for handler in original_logging_handlers:
            logging.root.addHandler(handler)


if __name__ == '__main__':
    sys.exit(main())
