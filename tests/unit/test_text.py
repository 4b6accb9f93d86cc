import pytest

from pytest_mock import MockerFixture

from gherkin_export.errors import MalformedRowError, UnterminatedPlaceholderError
from gherkin_export.model import GroupingKeyword, StepKeyword
from gherkin_export.text import (
    BeginGroup,
    FreeText,
    StepLine,
    TableRow,
    Tags,
    camel_case,
    classify_line,
    parse_step,
    pascal_case,
    prepare_lines,
    split_table_row,
)


def test_prepare_lines() -> None:
    source = '\ufeff# language: en\nFeature: test\n\n   Scenario: a  \n  # Given a commented step\n\tGiven x\r\n'

    assert prepare_lines(source) == [
        (2, 'Feature: test'),
        (4, 'Scenario: a'),
        (6, 'Given x'),
    ]

    assert prepare_lines('') == []
    assert prepare_lines('\n  \n# only comments\n') == []

    # only a leading byte order mark is stripped
    assert prepare_lines('Feature: \ufeffx') == [(1, 'Feature: \ufeffx')]


class TestClassifyLine:
    def test_begin_group(self) -> None:
        assert classify_line('Feature: Farm activities') == BeginGroup(
            GroupingKeyword.FEATURE,
            'Farm activities',
            text='Feature: Farm activities',
        )
        assert classify_line('Background:', 3) == BeginGroup(GroupingKeyword.BACKGROUND, '', text='Background:', lineno=3)
        assert classify_line('Scenario: Shave a yak') == BeginGroup(GroupingKeyword.SCENARIO, 'Shave a yak', text='Scenario: Shave a yak')
        assert classify_line('Scenario Outline:  Shave an animal ') == BeginGroup(
            GroupingKeyword.SCENARIO_OUTLINE,
            'Shave an animal',
            text='Scenario Outline:  Shave an animal',
        )
        assert classify_line('Examples:') == BeginGroup(GroupingKeyword.EXAMPLES, '', text='Examples:')

        # <!-- synonyms
        line = classify_line('Example: one')
        assert isinstance(line, BeginGroup)
        assert line.keyword is GroupingKeyword.SCENARIO

        line = classify_line('Scenario Template: two')
        assert isinstance(line, BeginGroup)
        assert line.keyword is GroupingKeyword.SCENARIO_OUTLINE

        line = classify_line('Scenarios:')
        assert isinstance(line, BeginGroup)
        assert line.keyword is GroupingKeyword.EXAMPLES
        # // -->

        # group headers wins over steps
        line = classify_line('Scenario: Given a thing')
        assert isinstance(line, BeginGroup)
        assert line.title == 'Given a thing'

    def test_step_line(self) -> None:
        assert classify_line('Given I have a <thing>', 7) == StepLine(
            StepKeyword.GIVEN,
            'I have a <thing>',
            text='Given I have a <thing>',
            lineno=7,
        )

        for keyword, expected in [
            ('When', StepKeyword.WHEN),
            ('Then', StepKeyword.THEN),
            ('And', StepKeyword.AND),
            ('But', StepKeyword.BUT),
            ('*', StepKeyword.BULLET),
        ]:
            line = classify_line(f'{keyword}   the step text')
            assert isinstance(line, StepLine)
            assert line.keyword is expected
            assert line.content == 'the step text'

    def test_tags(self) -> None:
        assert classify_line('@slow @web') == Tags(['slow', 'web'], text='@slow @web')
        assert classify_line('@one') == Tags(['one'], text='@one')

        # empty names are left for the consumer to ignore
        line = classify_line('@@odd @')
        assert isinstance(line, Tags)
        assert line.names == ['', 'odd', '']

    def test_table_row(self) -> None:
        assert classify_line('| a | b |', 12) == TableRow('| a | b |', lineno=12)
        assert classify_line('|incomplete') == TableRow('|incomplete')

    def test_free_text(self) -> None:
        assert classify_line('As a farmer') == FreeText('As a farmer')
        assert classify_line('Given') == FreeText('Given')
        assert classify_line('Givens are nice') == FreeText('Givens are nice')
        assert classify_line('Rule: not supported') == FreeText('Rule: not supported')
        assert classify_line('Note: Scenario Outline') == FreeText('Note: Scenario Outline')

    def test_step_keyword_lookup(self, mocker: MockerFixture) -> None:
        from_str_spy = mocker.spy(StepKeyword, 'from_str')

        assert classify_line('Whenever it rains') == FreeText('Whenever it rains')
        assert from_str_spy.call_count == 1

        line = classify_line('But not today')
        assert isinstance(line, StepLine)
        assert line.keyword is StepKeyword.BUT
        assert from_str_spy.call_count == 2


class TestSplitTableRow:
    def test_cells(self) -> None:
        assert split_table_row('| animal | noise |') == ['animal', 'noise']
        assert split_table_row('  |cow|moo|  ') == ['cow', 'moo']
        assert split_table_row('| single |') == ['single']
        assert split_table_row('||') == ['']
        assert split_table_row('| a |  | c |') == ['a', '', 'c']

    def test_escaped_delimiter(self) -> None:
        assert split_table_row('| a\\|b |') == ['a|b']
        assert split_table_row('|a\\|b|c|') == ['a|b', 'c']
        assert split_table_row('| \\|start | end\\| |') == ['|start', 'end|']

        # an escaped backslash does not escape the delimiter after it
        assert split_table_row('| \\\\| x |') == ['\\\\', 'x']

        # other escapes are left as they are
        assert split_table_row('| C:\\temp | \\n |') == ['C:\\temp', '\\n']

    def test_malformed(self) -> None:
        for line in ['abc', '|abc', '| a \\|', '']:
            with pytest.raises(MalformedRowError) as mre:
                split_table_row(line)
            assert 'malformed table row' in str(mre.value)
            assert mre.value.lineno is None

        with pytest.raises(MalformedRowError) as mre:
            split_table_row('| only one', lineno=3)
        assert mre.value.lineno == 3
        assert mre.value.line == '| only one'


class TestParseStep:
    def test_literals_and_variables(self) -> None:
        step = parse_step(StepKeyword.AND, 'On that farm there is a <animal>')
        assert step.keyword is StepKeyword.AND
        assert step.literals == ('On that farm there is a ', '')
        assert step.variables == ('animal',)

        step = parse_step(StepKeyword.THEN, 'I hear a <noise> here and a <noise> there')
        assert step.literals == ('I hear a ', ' here and a ', ' there')
        assert step.variables == ('noise', 'noise')

        step = parse_step(StepKeyword.GIVEN, 'I am Old McDonald')
        assert step.literals == ('I am Old McDonald',)
        assert step.variables == ()

        step = parse_step(StepKeyword.BULLET, '<a><b>')
        assert step.literals == ('', '', '')
        assert step.variables == ('a', 'b')

        step = parse_step(StepKeyword.GIVEN, 'a > b')
        assert step.literals == ('a > b',)

    def test_reconstruct_text(self) -> None:
        for text in [
            'I am Old McDonald',
            'On that farm there is a <animal>',
            '<count> <animal> on a <place>',
            '<a><b>',
            '',
        ]:
            step = parse_step(StepKeyword.GIVEN, text)
            assert step.text == text
            assert len(step.literals) == len(step.variables) + 1

    def test_unterminated_placeholder(self) -> None:
        with pytest.raises(UnterminatedPlaceholderError) as upe:
            parse_step(StepKeyword.GIVEN, 'a <broken placeholder', lineno=9)

        assert 'never closed' in str(upe.value)
        assert upe.value.lineno == 9
        assert upe.value.line == 'Given a <broken placeholder'

        with pytest.raises(UnterminatedPlaceholderError):
            parse_step(StepKeyword.GIVEN, '<one> and <two')


def test_pascal_case() -> None:
    assert pascal_case('Farm activities') == 'FarmActivities'
    assert pascal_case('Shave an animal') == 'ShaveAnAnimal'
    assert pascal_case('On that farm there is a ') == 'OnThatFarmThereIsA'
    assert pascal_case('snake_case-and.dots') == 'SnakeCaseAndDots'
    assert pascal_case(' ') == ''
    assert pascal_case('') == ''


def test_camel_case() -> None:
    assert camel_case('animal') == 'animal'
    assert camel_case('noise level') == 'noiseLevel'
    assert camel_case('snake_case') == 'snakeCase'
    assert camel_case('Noise') == 'Noise'
    assert camel_case('') == ''
