"""Template and registry types shared by every built-in page shape."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pageshape.extractors.context import DocumentContext
from pageshape.extractors.detection import DetectionSignals, score_signals
from pageshape.extractors.schema import FieldSpec
from pageshape.extractors.validation import FieldValidation
from pageshape.settings import DetectionWeights

logger = logging.getLogger(__name__)


class UnknownTemplateError(KeyError):
    """Raised by :meth:`TemplateRegistry.get` for an unregistered name."""


@dataclass(frozen=True)
class Template:
    """A named page shape: detection signals, field schema and validation rules.

    ``article_like`` templates have their ``content`` field replaced by the
    readability body when one can be recovered.
    """

    name: str
    description: str
    signals: DetectionSignals
    schema: Mapping[str, FieldSpec]
    validation: Mapping[str, FieldValidation] = field(default_factory=dict)
    article_like: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("template name must not be empty")
        object.__setattr__(self, "schema", MappingProxyType(dict(self.schema)))
        object.__setattr__(self, "validation", MappingProxyType(dict(self.validation)))

    def detect(self, ctx: DocumentContext, weights: DetectionWeights | None = None) -> float:
        return score_signals(ctx, self.signals, weights)


class TemplateRegistry:
    """Ordered, immutable set of templates with unique names.

    Iteration follows registration order, which is also the tie-break when
    two templates score the same.
    """

    __slots__ = ("_templates", "_by_name")

    def __init__(self, templates: Iterable[Template] = ()) -> None:
        ordered = tuple(templates)
        by_name: dict[str, Template] = {}
        for template in ordered:
            if template.name in by_name:
                raise ValueError(f"duplicate template name: {template.name!r}")
            by_name[template.name] = template
        self._templates = ordered
        self._by_name = MappingProxyType(by_name)

    def get(self, name: str) -> Template:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownTemplateError(name) from None

    def find(self, name: str | None) -> Template | None:
        """Like :meth:`get` but returns None for a missing or unknown name."""
        if not name:
            return None
        return self._by_name.get(name)

    def names(self) -> list[str]:
        return [t.name for t in self._templates]

    def with_template(self, template: Template) -> TemplateRegistry:
        """Return a new registry with *template* appended."""
        return TemplateRegistry((*self._templates, template))

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Template]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __repr__(self) -> str:
        return f"TemplateRegistry({self.names()!r})"
