from __future__ import annotations

import json

from typing import Any, Dict

from gherkin_export.export.base import Exporter
from gherkin_export.model import ExampleBlock, Feature, Scenario, ScenarioOutline, Step


class JsonExporter(Exporter[Dict[str, Any]]):
    name = 'json'
    extension = '.json'

    def export(self, feature: Feature) -> str:
        return json.dumps(feature.accept(self), indent=2, ensure_ascii=False)

    def visit_feature(self, feature: Feature) -> Dict[str, Any]:
        return {
            'name': feature.name,
            'tags': list(feature.tags),
            'description': list(feature.description),
            'background': self.visit_background(feature.background) if feature.background is not None else None,
            'items': [item.accept(self) for item in feature.items],
        }

    def visit_background(self, background: Scenario) -> Dict[str, Any]:
        return {
            'name': background.name,
            'tags': list(background.tags),
            'steps': [step.accept(self) for step in background.steps],
        }

    def visit_scenario(self, scenario: Scenario) -> Dict[str, Any]:
        return {
            'type': 'scenario',
            'name': scenario.name,
            'tags': list(scenario.tags),
            'steps': [step.accept(self) for step in scenario.steps],
        }

    def visit_scenario_outline(self, outline: ScenarioOutline) -> Dict[str, Any]:
        return {
            'type': 'scenario_outline',
            'name': outline.name,
            'tags': list(outline.tags),
            'steps': [step.accept(self) for step in outline.steps],
            'argument_types': [argument_type.value for argument_type in outline.argument_types],
            'example_blocks': [block.accept(self) for block in outline.example_blocks],
        }

    def visit_example_block(self, block: ExampleBlock) -> Dict[str, Any]:
        return {
            'tags': list(block.tags),
            'labels': list(block.labels),
            'examples': [list(row) for row in block.examples],
        }

    def visit_step(self, step: Step) -> Dict[str, Any]:
        return {
            'keyword': step.keyword.label,
            'literals': list(step.literals),
            'variables': list(step.variables),
        }
