"""
Recursive descent parser that turns feature file text into a `Feature` document.

The text is prepared and classified line by line (`gherkin_export.text`), and consumed
through a forward-only `LineReader`. There is no peek or push back: every group parser
returns the value it built together with the first line it read but did not consume
(or `None` at end of input), and its caller resumes dispatching from that line.
"""
from __future__ import annotations

import logging

from typing import Iterable, Iterator, List, Optional, Tuple

from ordered_set import OrderedSet

from gherkin_export.errors import (
    DuplicateBackgroundError,
    StructuralError,
    TitledExamplesError,
    error_context,
)
from gherkin_export.model import (
    ExampleBlock,
    ExampleRow,
    Feature,
    GroupingKeyword,
    Scenario,
    ScenarioOutline,
    check_row_arity,
)
from gherkin_export.text import (
    BeginGroup,
    FreeText,
    GherkinLine,
    StepLine,
    TableRow,
    Tags,
    classify_line,
    parse_step,
    prepare_lines,
    split_table_row,
)


logger = logging.getLogger(__name__)


class LineReader:
    """Classified lines of one feature file, and the tags waiting for the next group header."""

    _lines: Iterator[GherkinLine]
    pending_tags: OrderedSet[str]

    def __init__(self, lines: Iterable[GherkinLine]) -> None:
        self._lines = iter(lines)
        self.pending_tags = OrderedSet()

    def next(self) -> Optional[GherkinLine]:
        return next(self._lines, None)

    def buffer_tags(self, line: Tags) -> None:
        # empty names, from "@@" or a trailing "@", are ignored
        for name in line.names:
            if len(name) > 0:
                self.pending_tags.add(name)

    def drain_tags(self) -> OrderedSet[str]:
        tags = self.pending_tags
        self.pending_tags = OrderedSet()

        return tags


def _describe(line: Optional[GherkinLine]) -> str:
    if line is None:
        return 'end of file'

    return f'"{line.text}"'


def _consume_tags(reader: LineReader, line: Tags) -> GherkinLine:
    """Buffer a run of tag lines, and return the line after them."""
    next_line: Optional[GherkinLine] = line
    last_tags = line

    while isinstance(next_line, Tags):
        last_tags = next_line
        reader.buffer_tags(next_line)
        next_line = reader.next()

    if next_line is None:
        raise StructuralError(
            f'tags must be followed by the group they annotate, found end of file after {_describe(last_tags)}',
            lineno=last_tags.lineno,
            line=last_tags.text,
        )

    if not isinstance(next_line, BeginGroup):
        raise StructuralError(
            f'tags must be followed by a group header, found {_describe(next_line)}',
            lineno=next_line.lineno,
            line=next_line.text,
        )

    return next_line


def _parse_scenario(reader: LineReader, header: BeginGroup) -> Tuple[Scenario, Optional[GherkinLine]]:
    scenario = Scenario(name=header.title, tags=reader.drain_tags())
    kind = 'background' if header.keyword is GroupingKeyword.BACKGROUND else 'scenario'

    with error_context(f'while parsing {kind} "{scenario.name}"'):
        line = reader.next()
        while isinstance(line, StepLine):
            scenario.steps.append(parse_step(line.keyword, line.content, lineno=line.lineno))
            line = reader.next()

        if line is not None and not isinstance(line, (BeginGroup, Tags)):
            raise StructuralError(
                f'expected a step, tags or a group header, found {_describe(line)}',
                lineno=line.lineno,
                line=line.text,
            )

    return scenario, line


def _parse_example_block(reader: LineReader, header: BeginGroup) -> Tuple[ExampleBlock, Optional[GherkinLine]]:
    if len(header.title) > 0:
        raise TitledExamplesError(
            f'Examples blocks cannot carry a title, expected "Examples:" but found "{header.text}"',
            lineno=header.lineno,
            line=header.text,
        )

    tags = reader.drain_tags()

    line = reader.next()
    if not isinstance(line, TableRow):
        raise StructuralError(
            f'expected a label row after "Examples:", found {_describe(line)}',
            lineno=line.lineno if line is not None else header.lineno,
            line=line.text if line is not None else None,
        )

    labels = ExampleRow(tuple(split_table_row(line.text, lineno=line.lineno)))
    block = ExampleBlock(labels=labels, tags=tags)

    line = reader.next()
    while isinstance(line, TableRow):
        row = ExampleRow(tuple(split_table_row(line.text, lineno=line.lineno)))
        check_row_arity(labels, row, lineno=line.lineno)
        block.examples.append(row)
        line = reader.next()

    if line is not None and not isinstance(line, (BeginGroup, Tags)):
        raise StructuralError(
            f'expected an example row, tags or a group header, found {_describe(line)}',
            lineno=line.lineno,
            line=line.text,
        )

    return block, line


def _parse_scenario_outline(reader: LineReader, header: BeginGroup) -> Tuple[ScenarioOutline, Optional[GherkinLine]]:
    outline = ScenarioOutline(name=header.title, tags=reader.drain_tags())

    with error_context(f'while parsing scenario outline "{outline.name}"'):
        line = reader.next()
        while isinstance(line, StepLine):
            outline.steps.append(parse_step(line.keyword, line.content, lineno=line.lineno))
            line = reader.next()

        while line is not None:
            if isinstance(line, Tags):
                line = _consume_tags(reader, line)

            if not isinstance(line, BeginGroup):
                raise StructuralError(
                    f'expected a step, tags or a group header, found {_describe(line)}',
                    lineno=line.lineno,
                    line=line.text,
                )

            # any other group ends the outline, buffered tags are left for it
            if line.keyword is not GroupingKeyword.EXAMPLES:
                break

            with error_context(f'while parsing example block #{len(outline.example_blocks) + 1}'):
                block, line = _parse_example_block(reader, line)

            outline.example_blocks.append(block)

    return outline, line


def _parse_feature(reader: LineReader) -> Feature:
    description: List[str] = []

    line = reader.next()
    while isinstance(line, (Tags, FreeText)):
        if isinstance(line, Tags):
            reader.buffer_tags(line)
        else:
            description.append(line.text)
        line = reader.next()

    if not isinstance(line, BeginGroup) or line.keyword is not GroupingKeyword.FEATURE:
        raise StructuralError(
            f'expected "Feature:", found {_describe(line)}',
            lineno=line.lineno if line is not None else None,
            line=line.text if line is not None else None,
        )

    feature = Feature(name=line.title, tags=reader.drain_tags(), description=description)
    background_header: Optional[BeginGroup] = None

    with error_context(f'while parsing feature "{feature.name}"'):
        line = reader.next()
        while isinstance(line, FreeText):
            feature.description.append(line.text)
            line = reader.next()

        while line is not None:
            if isinstance(line, Tags):
                line = _consume_tags(reader, line)

            if not isinstance(line, BeginGroup):
                raise StructuralError(
                    f'expected "Background:", "Scenario:", "Scenario Outline:" or tags, found {_describe(line)}',
                    lineno=line.lineno,
                    line=line.text,
                )

            header = line

            if header.keyword is GroupingKeyword.BACKGROUND:
                if background_header is not None:
                    raise DuplicateBackgroundError(
                        f'a feature can only have one background, found "{header.title}" after "{background_header.title}"',
                        lineno=header.lineno,
                        line=header.text,
                    )

                background_header = header
                feature.background, line = _parse_scenario(reader, header)
            elif header.keyword is GroupingKeyword.SCENARIO:
                scenario, line = _parse_scenario(reader, header)
                feature.items.append(scenario)
            elif header.keyword is GroupingKeyword.SCENARIO_OUTLINE:
                outline, line = _parse_scenario_outline(reader, header)
                feature.items.append(outline)
            else:
                raise StructuralError(
                    f'"{header.keyword.value}:" is not allowed at this position, found {_describe(header)}',
                    lineno=header.lineno,
                    line=header.text,
                )

    logger.debug(f'parsed feature "{feature.name}" with {len(feature.scenarios)} scenarios and {len(feature.scenario_outlines)} scenario outlines')

    return feature


def parse_feature(source: str) -> Feature:
    """Parse the complete text of one feature file.

    Any malformed line fails the whole document with a `GherkinError` describing where
    in the feature it happened.
    """
    reader = LineReader(classify_line(line, lineno) for lineno, line in prepare_lines(source))

    return _parse_feature(reader)
