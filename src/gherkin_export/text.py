from __future__ import annotations

import re

from typing import List, Optional, Tuple, Union
from dataclasses import dataclass, field

from gherkin_export.constants import (
    BYTE_ORDER_MARK,
    MARKER_COMMENT,
    MARKER_ESCAPE,
    MARKER_PLACEHOLDER_CLOSE,
    MARKER_PLACEHOLDER_OPEN,
    MARKER_TABLE,
    MARKER_TAG,
)
from gherkin_export.errors import MalformedRowError, UnrecognizedKeywordError, UnterminatedPlaceholderError
from gherkin_export.model import GroupingKeyword, Step, StepKeyword


@dataclass
class Tags:
    names: List[str]
    text: str = field(default='')
    lineno: int = field(default=0)


@dataclass
class StepLine:
    keyword: StepKeyword
    content: str
    text: str = field(default='')
    lineno: int = field(default=0)


@dataclass
class BeginGroup:
    keyword: GroupingKeyword
    title: str
    text: str = field(default='')
    lineno: int = field(default=0)


@dataclass
class FreeText:
    text: str
    lineno: int = field(default=0)


@dataclass
class TableRow:
    text: str
    lineno: int = field(default=0)


GherkinLine = Union[Tags, StepLine, BeginGroup, FreeText, TableRow]


def prepare_lines(source: str) -> List[Tuple[int, str]]:
    """Trimmed lines of a feature file, without blank lines and comments.

    Each line is paired with its 1-based line number in `source`.
    """
    if source.startswith(BYTE_ORDER_MARK):
        source = source[len(BYTE_ORDER_MARK) :]

    lines: List[Tuple[int, str]] = []
    for lineno, line in enumerate(source.splitlines(), start=1):
        stripped_line = line.strip()
        if len(stripped_line) < 1 or stripped_line[0] == MARKER_COMMENT:
            continue

        lines.append((lineno, stripped_line))

    return lines


def _split_once(line: str, separator: str) -> Tuple[Optional[str], Optional[str]]:
    try:
        head, tail = line.split(separator, 1)
    except ValueError:
        return None, None

    return head.strip(), tail.strip()


def classify_line(line: str, lineno: int = 0) -> GherkinLine:
    line = line.strip()

    # group headers first, "Scenario: Given a thing" is a scenario and not a step
    keyword, title = _split_once(line, ':')
    if keyword is not None and title is not None:
        grouping_keyword = GroupingKeyword.from_str(keyword)
        if grouping_keyword is not None:
            return BeginGroup(grouping_keyword, title, text=line, lineno=lineno)

    keyword, content = _split_once(line, ' ')
    if keyword is not None and content is not None:
        try:
            step_keyword: Optional[StepKeyword] = StepKeyword.from_str(keyword)
        except UnrecognizedKeywordError:
            step_keyword = None

        if step_keyword is not None:
            return StepLine(step_keyword, content, text=line, lineno=lineno)

    if line.startswith(MARKER_TAG):
        names = [name.strip() for name in line[len(MARKER_TAG) :].split(MARKER_TAG)]
        return Tags(names, text=line, lineno=lineno)

    if line.startswith(MARKER_TABLE):
        return TableRow(line, lineno=lineno)

    return FreeText(line, lineno=lineno)


def split_table_row(line: str, *, lineno: Optional[int] = None) -> List[str]:
    """
    Split a `| a | b |` table row into its cells.

    A delimiter preceded by a backslash is part of the cell, `| a\\|b |` is the single cell
    `a|b`. Only escaped delimiters are unescaped, other backslashes are kept as is.
    """
    line = line.strip()
    escaped_delimiter = f'{MARKER_ESCAPE}{MARKER_TABLE}'

    segments: List[str] = []
    start = 0
    escaping = False
    has_escaped_delimiter = False

    for index, char in enumerate(line):
        if escaping:
            escaping = False
            if char == MARKER_TABLE:
                has_escaped_delimiter = True
        elif char == MARKER_ESCAPE:
            escaping = True
        elif char == MARKER_TABLE:
            segments.append(line[start:index].strip())
            start = index + 1

    segments.append(line[start:].strip())

    # text before the first and after the last delimiter is not a cell
    if len(segments) < 3:
        raise MalformedRowError(
            f'malformed table row, expected cells between "{MARKER_TABLE}" delimiters: "{line}"',
            lineno=lineno,
            line=line,
        )

    cells = segments[1:-1]

    if has_escaped_delimiter:
        cells = [cell.replace(escaped_delimiter, MARKER_TABLE) if escaped_delimiter in cell else cell for cell in cells]

    return cells


def parse_step(keyword: StepKeyword, text: str, *, lineno: Optional[int] = None) -> Step:
    literals: List[str] = []
    variables: List[str] = []
    remaining = text.strip()

    while True:
        try:
            literal, remaining = remaining.split(MARKER_PLACEHOLDER_OPEN, 1)
        except ValueError:
            literals.append(remaining)
            break

        literals.append(literal)

        try:
            variable, remaining = remaining.split(MARKER_PLACEHOLDER_CLOSE, 1)
        except ValueError:
            raise UnterminatedPlaceholderError(
                f'placeholder opened with "{MARKER_PLACEHOLDER_OPEN}" is never closed with "{MARKER_PLACEHOLDER_CLOSE}" in step "{keyword.value} {text}"',
                lineno=lineno,
                line=f'{keyword.value} {text}',
            )

        variables.append(variable)

    return Step(keyword, tuple(literals), tuple(variables))


def pascal_case(text: str) -> str:
    return ''.join(word[0].upper() + word[1:] for word in re.split(r'[^\w]|_', text) if len(word) > 0)


def camel_case(text: str) -> str:
    words = re.split(r'[^\w]|_', text)
    if len(words) < 1:
        return ''

    return words[0] + ''.join(word[0].upper() + word[1:] for word in words[1:] if len(word) > 0)
