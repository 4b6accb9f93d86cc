from __future__ import annotations

from typing import Dict, List, Sequence

from jinja2 import Environment

from gherkin_export.export.base import Exporter
from gherkin_export.inference import ArgumentType
from gherkin_export.model import ExampleBlock, Feature, Scenario, ScenarioOutline, Step
from gherkin_export.text import camel_case, pascal_case


CSHARP_TYPES: Dict[ArgumentType, str] = {
    ArgumentType.BOOLEAN: 'bool',
    ArgumentType.INTEGER: 'long',
    ArgumentType.FLOAT: 'double',
    ArgumentType.STRING: 'string',
}

TEMPLATE_FIXTURE = '''\
{% if description %}
/// <summary>
{% for line in description %}
/// {{ line }}
{% endfor %}
/// </summary>
{% endif %}
[TestFixture]
{% for tag in tags %}
[Category("{{ tag | csharp_string }}")]
{% endfor %}
public class {{ name | pascal }}
{
{% for member in members %}
{% if not loop.first %}

{% endif %}
{{ member }}
{% endfor %}
}
'''

TEMPLATE_METHOD = '''\
{% for attribute in attributes %}
    [{{ attribute }}]
{% endfor %}
{% for tag in tags %}
    [Category("{{ tag | csharp_string }}")]
{% endfor %}
    public void {{ name }}({{ parameters | join(', ') }})
    {
{% for step in steps %}
        {{ step }}
{% endfor %}
    }
'''


def escape_literal(literal: str, *, add_quotes: bool) -> str:
    """Turn a raw example cell into a C# verbatim string literal.

    At most one leading backslash, or else one leading forward slash, is removed.
    """
    if literal.startswith('\\'):
        literal = literal[1:]
    elif literal.startswith('/'):
        literal = literal[1:]

    if add_quotes:
        # quotes are doubled inside verbatim strings
        escaped_literal = literal.replace('"', '""')
        return f'@"{escaped_literal}"'

    return f'@{literal}'


def interpret_argument(value: str, argument_type: ArgumentType) -> str:
    if argument_type is ArgumentType.BOOLEAN:
        return 'true' if value.lower() == 'true' else 'false'
    elif argument_type in (ArgumentType.INTEGER, ArgumentType.FLOAT):
        return value

    already_quoted = len(value) > 1 and value.startswith('"') and value.endswith('"') and value.count('"') == 2

    return escape_literal(value, add_quotes=not already_quoted)


def csharp_string(value: str) -> str:
    return value.replace('\\', '\\\\').replace('"', '\\"')


class NUnitExporter(Exporter[str]):
    """Renders a feature as an NUnit test fixture in C#, one test method per scenario."""

    name = 'nunit'
    extension = '.cs'

    environment: Environment
    _argument_types: List[ArgumentType]

    def __init__(self) -> None:
        self.environment = Environment(autoescape=False, trim_blocks=True, lstrip_blocks=True)
        self.environment.filters.update(
            {
                'pascal': pascal_case,
                'camel': camel_case,
                'csharp_string': csharp_string,
            }
        )
        self._argument_types = []

    def export(self, feature: Feature) -> str:
        return f'{feature.accept(self)}\n'

    def _render_method(
        self,
        name: str,
        *,
        attributes: Sequence[str],
        tags: Sequence[str],
        parameters: Sequence[str],
        steps: Sequence[Step],
    ) -> str:
        template = self.environment.from_string(TEMPLATE_METHOD)

        return template.render(
            name=pascal_case(name),
            attributes=attributes,
            tags=tags,
            parameters=parameters,
            steps=[step.accept(self) for step in steps],
        )

    def visit_feature(self, feature: Feature) -> str:
        members: List[str] = []

        if feature.background is not None:
            members.append(self.visit_background(feature.background))

        for item in feature.items:
            members.append(item.accept(self))

        template = self.environment.from_string(TEMPLATE_FIXTURE)

        return template.render(
            name=feature.name,
            description=feature.description,
            tags=list(feature.tags),
            members=members,
        )

    def visit_background(self, background: Scenario) -> str:
        return self._render_method(
            'Background',
            attributes=['SetUp'],
            tags=[],
            parameters=[],
            steps=background.steps,
        )

    def visit_scenario(self, scenario: Scenario) -> str:
        return self._render_method(
            scenario.name,
            attributes=['Test'],
            tags=list(scenario.tags),
            parameters=[],
            steps=scenario.steps,
        )

    def visit_scenario_outline(self, outline: ScenarioOutline) -> str:
        self._argument_types = outline.argument_types

        test_cases: List[str] = []
        for block in outline.example_blocks:
            test_cases.extend(block.accept(self).splitlines())

        parameters: List[str] = []
        if outline.labels is not None:
            for index, label in enumerate(outline.labels):
                argument_type = self._argument_types[index] if index < len(self._argument_types) else ArgumentType.STRING
                parameters.append(f'{CSHARP_TYPES[argument_type]} {camel_case(label)}')

        return self._render_method(
            outline.name,
            attributes=test_cases,
            tags=list(outline.tags),
            parameters=parameters,
            steps=outline.steps,
        )

    def visit_example_block(self, block: ExampleBlock) -> str:
        category = ','.join(block.tags)
        test_cases: List[str] = []

        for row in block.examples:
            arguments = [interpret_argument(value, argument_type) for value, argument_type in zip(row, self._argument_types)]
            if len(category) > 0:
                arguments.append(f'Category="{csharp_string(category)}"')

            test_cases.append(f'TestCase({", ".join(arguments)})')

        return '\n'.join(test_cases)

    def visit_step(self, step: Step) -> str:
        title = '___'.join(pascal_case(literal) for literal in step.literals)
        arguments = ', '.join(camel_case(variable) for variable in step.variables)

        return f'// {step.keyword.label}({title}({arguments}));'
