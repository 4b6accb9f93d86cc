from __future__ import annotations

from typing import Any, Dict, Type

from gherkin_export.export.base import Exporter
from gherkin_export.export.json import JsonExporter
from gherkin_export.export.nunit import NUnitExporter


EXPORTERS: Dict[str, Type[Exporter[Any]]] = {
    NUnitExporter.name: NUnitExporter,
    JsonExporter.name: JsonExporter,
}


def get_exporter(name: str) -> Exporter[Any]:
    try:
        return EXPORTERS[name]()
    except KeyError:
        raise ValueError(f'unknown export format "{name}", expected one of {", ".join(EXPORTERS.keys())}')


__all__ = [
    'EXPORTERS',
    'Exporter',
    'JsonExporter',
    'NUnitExporter',
    'get_exporter',
]
