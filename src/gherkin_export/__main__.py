import sys
import argparse
import logging

from typing import List, Optional

from gherkin_export.cli import ErrorBehavior, convert
from gherkin_export.constants import DEFAULT_OUTPUT_PATH
from gherkin_export.export import EXPORTERS


def parse_arguments() -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='gherkin-export', description='convert gherkin feature files to test source code')

    parser.add_argument(
        'input_pattern',
        nargs='?',
        type=str,
        default=None,
        help='input path, use wildcards for directory contents',
    )

    parser.add_argument(
        'output_path',
        nargs='?',
        type=str,
        default=DEFAULT_OUTPUT_PATH,
        help='destination for output source files and logs',
    )

    parser.add_argument(
        '-f',
        '--format',
        type=str,
        choices=list(EXPORTERS.keys()),
        default='nunit',
        help='output format for converted feature files',
    )

    parser.add_argument(
        '-e',
        '--error-behavior',
        type=str,
        choices=[behavior.value for behavior in ErrorBehavior],
        default=ErrorBehavior.LOG.value,
        help='what to do with error messages, "log" creates a .log file per failed file in output_path',
    )

    parser.add_argument(
        '-j',
        '--jobs',
        type=int,
        default=1,
        required=False,
        help='number of files to convert in parallel',
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        required=False,
        default=False,
        help='verbose output',
    )

    parser.add_argument(
        '--no-verbose',
        nargs='+',
        type=str,
        default=None,
        help='name of loggers to disable',
    )

    parser.add_argument(
        '--version',
        action='store_true',
        required=False,
        default=False,
        help='print version and exit',
    )

    args = parser.parse_args()

    if args.version:
        from gherkin_export import __version__

        print(__version__, file=sys.stderr)

        raise SystemExit(0)

    if args.input_pattern is None:
        parser.error('the following arguments are required: input_pattern')

    if args.jobs < 1:
        parser.error('--jobs must be at least 1')

    return args


def setup_logging(args: argparse.Namespace) -> None:
    level = logging.INFO if not args.verbose else logging.DEBUG
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    logging.basicConfig(
        level=level,
        format='[%(asctime)s] %(levelname)s: %(message)s',
        handlers=handlers,
    )

    no_verbose: Optional[List[str]] = args.no_verbose

    if no_verbose is None:
        no_verbose = []

    for logger_name in no_verbose:
        if logger_name in logging.Logger.manager.loggerDict:
            logger = logging.getLogger(logger_name)
            logger.setLevel(logging.ERROR)
        else:
            print(f'!! logger "{logger_name}" does not exist', file=sys.stderr)


def main() -> None:
    args = parse_arguments()

    setup_logging(args)

    raise SystemExit(convert(args))


if __name__ == '__main__':  # pragma: no cover
    main()
