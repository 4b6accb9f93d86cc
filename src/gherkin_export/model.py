from __future__ import annotations

from typing import Dict, Generic, Iterator, List, Optional, Tuple, TypeVar, Union
from dataclasses import dataclass, field
from enum import Enum

from ordered_set import OrderedSet

from gherkin_export.constants import KEYWORDS_STEP, MARKER_PLACEHOLDER_CLOSE, MARKER_PLACEHOLDER_OPEN
from gherkin_export.errors import ArityError, MalformedRowError, UnrecognizedKeywordError
from gherkin_export.inference import ArgumentType, infer_argument_types


T = TypeVar('T')


class StepKeyword(Enum):
    GIVEN = 'Given'
    WHEN = 'When'
    THEN = 'Then'
    AND = 'And'
    BUT = 'But'
    BULLET = '*'

    @classmethod
    def from_str(cls, value: str) -> StepKeyword:
        try:
            return cls(value.strip())
        except ValueError:
            expected = ', '.join(f"'{keyword}'" for keyword in KEYWORDS_STEP)
            raise UnrecognizedKeywordError(f'unrecognized step keyword "{value}" (expected one of {expected})')

    @property
    def label(self) -> str:
        return self.name.capitalize()


class GroupingKeyword(Enum):
    FEATURE = 'Feature'
    BACKGROUND = 'Background'
    SCENARIO = 'Scenario'
    SCENARIO_OUTLINE = 'Scenario Outline'
    EXAMPLES = 'Examples'

    @classmethod
    def from_str(cls, value: str) -> Optional[GroupingKeyword]:
        return _GROUPING_SYNONYMS.get(value.strip(), None)


_GROUPING_SYNONYMS: Dict[str, GroupingKeyword] = {
    'Feature': GroupingKeyword.FEATURE,
    'Background': GroupingKeyword.BACKGROUND,
    'Scenario': GroupingKeyword.SCENARIO,
    'Example': GroupingKeyword.SCENARIO,
    'Scenario Outline': GroupingKeyword.SCENARIO_OUTLINE,
    'Scenario Template': GroupingKeyword.SCENARIO_OUTLINE,
    'Examples': GroupingKeyword.EXAMPLES,
    'Scenarios': GroupingKeyword.EXAMPLES,
}


@dataclass(frozen=True)
class Step:
    """
    One line of scenario behaviour. The text is stored split around its placeholders,
    `literals` always has exactly one element more than `variables`, so interleaving them
    (starting and ending with a literal) gives back the step text.
    """

    keyword: StepKeyword
    literals: Tuple[str, ...]
    variables: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if len(self.literals) != len(self.variables) + 1:
            raise ValueError(f'step has {len(self.literals)} literals and {len(self.variables)} variables, expected exactly one more literal than variables')

    @property
    def arity(self) -> int:
        return len(self.variables)

    @property
    def text(self) -> str:
        buffer: List[str] = [self.literals[0]]
        for variable, literal in zip(self.variables, self.literals[1:]):
            buffer.append(f'{MARKER_PLACEHOLDER_OPEN}{variable}{MARKER_PLACEHOLDER_CLOSE}')
            buffer.append(literal)

        return ''.join(buffer)

    def accept(self, visitor: FeatureVisitor[T]) -> T:
        return visitor.visit_step(self)


@dataclass(frozen=True)
class ExampleRow:
    cells: Tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.cells) < 1:
            raise MalformedRowError('example row must contain at least one cell')

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[str]:
        return iter(self.cells)

    def __getitem__(self, index: int) -> str:
        return self.cells[index]

    def __str__(self) -> str:
        return f'| {" | ".join(self.cells)} |'


def check_row_arity(labels: ExampleRow, row: ExampleRow, *, lineno: Optional[int] = None) -> None:
    if len(row) == len(labels):
        return

    raise ArityError(
        f'example row has {len(row)} cells but the label row has {len(labels)}, label row: {labels}, example row: {row}',
        lineno=lineno,
        line=str(row),
    )


@dataclass
class ExampleBlock:
    labels: ExampleRow
    examples: List[ExampleRow] = field(default_factory=list)
    tags: OrderedSet[str] = field(default_factory=OrderedSet)

    def __post_init__(self) -> None:
        for row in self.examples:
            check_row_arity(self.labels, row)

    def accept(self, visitor: FeatureVisitor[T]) -> T:
        return visitor.visit_example_block(self)


@dataclass
class Scenario:
    name: str
    steps: List[Step] = field(default_factory=list)
    tags: OrderedSet[str] = field(default_factory=OrderedSet)

    def accept(self, visitor: FeatureVisitor[T]) -> T:
        return visitor.visit_scenario(self)


@dataclass
class ScenarioOutline:
    name: str
    steps: List[Step] = field(default_factory=list)
    example_blocks: List[ExampleBlock] = field(default_factory=list)
    tags: OrderedSet[str] = field(default_factory=OrderedSet)

    @property
    def labels(self) -> Optional[ExampleRow]:
        if len(self.example_blocks) < 1:
            return None

        return self.example_blocks[0].labels

    @property
    def examples(self) -> List[ExampleRow]:
        return [row for block in self.example_blocks for row in block.examples]

    @property
    def argument_types(self) -> List[ArgumentType]:
        return infer_argument_types(self.example_blocks)

    def accept(self, visitor: FeatureVisitor[T]) -> T:
        return visitor.visit_scenario_outline(self)


FeatureItem = Union[Scenario, ScenarioOutline]


@dataclass
class Feature:
    name: str
    tags: OrderedSet[str] = field(default_factory=OrderedSet)
    description: List[str] = field(default_factory=list)
    background: Optional[Scenario] = field(default=None)
    items: List[FeatureItem] = field(default_factory=list)

    @property
    def scenarios(self) -> List[Scenario]:
        return [item for item in self.items if isinstance(item, Scenario)]

    @property
    def scenario_outlines(self) -> List[ScenarioOutline]:
        return [item for item in self.items if isinstance(item, ScenarioOutline)]

    def accept(self, visitor: FeatureVisitor[T]) -> T:
        return visitor.visit_feature(self)


class FeatureVisitor(Generic[T]):
    """
    Read-only walk over a parsed `Feature`. Renderers implement one method per node
    type and call `accept` on the children they want to descend into.
    """

    def visit_feature(self, feature: Feature) -> T:
        raise NotImplementedError(f'{self.__class__.__name__} does not implement visit_feature')

    def visit_background(self, background: Scenario) -> T:
        raise NotImplementedError(f'{self.__class__.__name__} does not implement visit_background')

    def visit_scenario(self, scenario: Scenario) -> T:
        raise NotImplementedError(f'{self.__class__.__name__} does not implement visit_scenario')

    def visit_scenario_outline(self, outline: ScenarioOutline) -> T:
        raise NotImplementedError(f'{self.__class__.__name__} does not implement visit_scenario_outline')

    def visit_example_block(self, block: ExampleBlock) -> T:
        raise NotImplementedError(f'{self.__class__.__name__} does not implement visit_example_block')

    def visit_step(self, step: Step) -> T:
        raise NotImplementedError(f'{self.__class__.__name__} does not implement visit_step')
