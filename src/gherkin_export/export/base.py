from __future__ import annotations

from typing import TypeVar

from gherkin_export.model import Feature, FeatureVisitor


T = TypeVar('T')


class Exporter(FeatureVisitor[T]):
    name: str
    extension: str

    def export(self, feature: Feature) -> str:
        raise NotImplementedError(f'{self.__class__.__name__} does not implement export')
