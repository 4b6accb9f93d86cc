from __future__ import annotations

import re
import math

from typing import List, Optional, Sequence, TYPE_CHECKING
from enum import Enum
from functools import reduce


if TYPE_CHECKING:  # pragma: no cover
    from gherkin_export.model import ExampleBlock


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INTEGER = re.compile(r'^[+-]?[0-9]+$')
_FLOAT = re.compile(r'^[+-]?([0-9]+(\.[0-9]+)?|\.[0-9]+)([eE][+-]?[0-9]+)?$')


class ArgumentType(Enum):
    BOOLEAN = 'boolean'
    INTEGER = 'integer'
    FLOAT = 'float'
    STRING = 'string'

    @classmethod
    def from_value(cls, value: str) -> ArgumentType:
        if _is_integer(value):
            return cls.INTEGER
        elif _is_float(value):
            return cls.FLOAT
        elif value in ('true', 'false'):
            return cls.BOOLEAN

        return cls.STRING

    def join(self, other: ArgumentType) -> ArgumentType:
        # a column keeps its type until contradicted, any contradiction is a string
        if self is other:
            return self

        return ArgumentType.STRING


def _is_integer(value: str) -> bool:
    if _INTEGER.match(value) is None:
        return False

    return INT64_MIN <= int(value) <= INT64_MAX


def _is_float(value: str) -> bool:
    # ascii decimal or exponent notation only, so the value is also a valid C# double literal
    if _FLOAT.match(value) is None:
        return False

    return math.isfinite(float(value))


def infer_argument_types(example_blocks: Sequence[ExampleBlock]) -> List[ArgumentType]:
    """
    Find one type per parameter of a scenario outline, by looking at the cells of every
    example row, in every example block, for that column.

    The column count is taken from the label row of the first block.
    """
    if len(example_blocks) < 1:
        return []

    argument_types: List[ArgumentType] = []
    column_count = len(example_blocks[0].labels)

    for index in range(column_count):
        types: List[ArgumentType] = []
        for block in example_blocks:
            for row in block.examples:
                value: Optional[str] = row[index] if index < len(row) else None
                types.append(ArgumentType.from_value(value) if value is not None else ArgumentType.STRING)

        argument_types.append(reduce(ArgumentType.join, types) if len(types) > 0 else ArgumentType.STRING)

    return argument_types
