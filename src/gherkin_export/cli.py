from __future__ import annotations

import sys
import logging

from typing import List, Optional, Union
from argparse import Namespace as Arguments
from pathlib import Path
from glob import glob
from dataclasses import dataclass, field
from enum import Enum
from concurrent.futures import ThreadPoolExecutor

from colorama import init, Fore

from gherkin_export.errors import GherkinError
from gherkin_export.export import get_exporter
from gherkin_export.parser import parse_feature


logger = logging.getLogger(__name__)

ConversionError = Union[GherkinError, OSError, UnicodeDecodeError]


class ErrorBehavior(Enum):
    LOG = 'log'
    SILENT = 'silent'
    STDOUT = 'stdout'
    STDERR = 'stderr'


@dataclass
class ConversionResult:
    path: Path
    output: Optional[Path] = field(default=None)
    error: Optional[ConversionError] = field(default=None)

    @property
    def success(self) -> bool:
        return self.error is None


def error_to_text(filename: str, error: ConversionError) -> str:
    location = filename
    if isinstance(error, GherkinError) and error.lineno is not None:
        location = f'{filename}:{error.lineno}'

    message = ': '.join(str(error).split('\n'))

    return '\t'.join(
        [
            location,
            f'{Fore.RED}error{Fore.RESET}',
            message,
        ]
    )


def error_to_log(path: Path, error: ConversionError) -> str:
    breadcrumbs = error.breadcrumbs if isinstance(error, GherkinError) else [str(error)]

    return ':\n'.join([f'Error parsing {path.as_posix()}'] + breadcrumbs)


def find_feature_files(input_pattern: str) -> List[Path]:
    pattern_path = Path(input_pattern)
    if pattern_path.is_dir():
        return sorted(file for file in pattern_path.rglob('*.feature') if file.is_file())

    files: List[Path] = []
    for match in sorted(glob(input_pattern, recursive=True)):
        file = Path(match)
        if file.is_dir():
            logger.debug(f'skipping directory {file}')
            continue

        files.append(file)

    return files


def convert_file(path: Path, output_dir: Path, export_format: str) -> ConversionResult:
    """Parse one feature file and write it in `export_format` to `output_dir`.

    Failing to read, parse or write the file is returned in the result, so that one broken
    file does not stop the rest of a batch.
    """
    exporter = get_exporter(export_format)
    output = output_dir / f'{path.name}{exporter.extension}'

    try:
        source = path.read_text(encoding='utf-8')
        feature = parse_feature(source)
        output.write_text(exporter.export(feature), encoding='utf-8')
    except (GherkinError, OSError, UnicodeDecodeError) as e:
        logger.debug(f'failed to convert {path}: {e}')
        return ConversionResult(path=path, error=e)

    logger.debug(f'converted {path} to {output}')

    return ConversionResult(path=path, output=output)


def report_failure(result: ConversionResult, output_dir: Path, error_behavior: ErrorBehavior) -> None:
    if result.error is None or error_behavior is ErrorBehavior.SILENT:
        return

    if error_behavior is ErrorBehavior.LOG:
        log_file = output_dir / f'{result.path.name}.log'
        log_file.write_text(error_to_log(result.path, result.error), encoding='utf-8')
    else:
        stream = sys.stdout if error_behavior is ErrorBehavior.STDOUT else sys.stderr
        print(error_to_text(result.path.as_posix(), result.error), file=stream)


def convert(args: Arguments) -> int:
    # init colorama for ansi colors
    init()

    output_dir = Path(args.output_path)
    output_dir.mkdir(parents=True, exist_ok=True)
    error_behavior = ErrorBehavior(args.error_behavior)

    files = find_feature_files(args.input_pattern)
    if len(files) < 1:
        logger.warning(f'no feature files match "{args.input_pattern}"')

    logger.info(f'converting {len(files)} feature files to {args.format} in {output_dir}')

    results: List[ConversionResult]
    if args.jobs > 1:
        with ThreadPoolExecutor(max_workers=args.jobs) as executor:
            results = list(executor.map(lambda file: convert_file(file, output_dir, args.format), files))
    else:
        results = [convert_file(file, output_dir, args.format) for file in files]

    success_count = 0
    failure_count = 0
    for result in results:
        if result.success:
            success_count += 1
        else:
            failure_count += 1
            report_failure(result, output_dir, error_behavior)

    print(f'Successful parses: {success_count}')
    print(f'Failed parses: {failure_count}')

    return 0 if failure_count == 0 else 1
