from __future__ import annotations

from typing import Generator, List, Optional
from contextlib import contextmanager


class GherkinError(Exception):
    """
    Base for every failure raised while turning feature file text into a document.

    Nested parse functions add a breadcrumb with `error_context` as the error passes
    through them, so `str(error)` reads from the outermost scope down to the fault:

    `while parsing feature "Farm": while parsing scenario outline "Shave": malformed row`
    """

    message: str
    lineno: Optional[int]
    line: Optional[str]
    context: List[str]

    def __init__(self, message: str, *, lineno: Optional[int] = None, line: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.lineno = lineno
        self.line = line
        self.context = []

    def add_context(self, description: str) -> None:
        self.context.append(description)

    @property
    def breadcrumbs(self) -> List[str]:
        return list(reversed(self.context)) + [self.message]

    def __str__(self) -> str:
        return ': '.join(self.breadcrumbs)


class StructuralError(GherkinError):
    pass


class DuplicateBackgroundError(StructuralError):
    pass


class TitledExamplesError(StructuralError):
    pass


class DecodingError(GherkinError):
    pass


class MalformedRowError(DecodingError):
    pass


class UnterminatedPlaceholderError(DecodingError):
    pass


class UnrecognizedKeywordError(DecodingError):
    pass


class ArityError(GherkinError):
    pass


@contextmanager
def error_context(description: str) -> Generator[None, None, None]:
    try:
        yield
    except GherkinError as e:
        e.add_context(description)
        raise
