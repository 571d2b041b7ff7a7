"""
Template Search Domain Service

Architectural Intent:
- Approximate (fuzzy) matching of a free-text phrase against templates
- Name matches weigh more than description matches
- Typo and partial-token tolerant; this is not a substring filter

Scoring:
- name similarity: rapidfuzz WRatio on normalized strings (0-100)
- description similarity: rapidfuzz partial_ratio on normalized strings
- queries shorter than MIN_PARTIAL_QUERY_LENGTH are compared to names only,
  with a plain ratio, since any single character is a "partial match"
- a template matches when either similarity reaches the threshold
- matches are ordered by their best weighted similarity, ties keep
  catalog order
"""

from dataclasses import dataclass
from typing import Iterable

from rapidfuzz import fuzz, utils

from railway_mcp.domain.entities.template import Template

DEFAULT_SEARCH_THRESHOLD = 70.0
DEFAULT_NAME_WEIGHT = 3.0
DEFAULT_DESCRIPTION_WEIGHT = 2.0
MIN_PARTIAL_QUERY_LENGTH = 3


@dataclass(frozen=True)
class TemplateMatch:
    template: Template
    similarity: float
    score: float


class TemplateSearch:
    def __init__(
        self,
        threshold: float = DEFAULT_SEARCH_THRESHOLD,
        name_weight: float = DEFAULT_NAME_WEIGHT,
        description_weight: float = DEFAULT_DESCRIPTION_WEIGHT,
    ) -> None:
        if name_weight <= 0 or description_weight < 0:
            raise ValueError("weights must be positive")
        self.threshold = threshold
        self.name_weight = name_weight
        self.description_weight = description_weight

    def similarities(self, query: str, template: Template) -> tuple[float, float]:
        """Return (name, description) similarity on a 0-100 scale."""
        if len(utils.default_process(query)) < MIN_PARTIAL_QUERY_LENGTH:
            return fuzz.ratio(query, template.name, processor=utils.default_process), 0.0
        name = fuzz.WRatio(query, template.name, processor=utils.default_process)
        description = 0.0
        if template.description:
            description = fuzz.partial_ratio(
                query, template.description, processor=utils.default_process
            )
        return name, description

    def match(self, query: str, template: Template) -> TemplateMatch:
        name, description = self.similarities(query, template)
        return TemplateMatch(
            template=template,
            similarity=max(name, description),
            score=max(name * self.name_weight, description * self.description_weight),
        )

    def rank(self, query: str, templates: Iterable[Template]) -> list[TemplateMatch]:
        if not utils.default_process(query):
            return []
        kept = [
            m
            for m in (self.match(query, template) for template in templates)
            if m.similarity >= self.threshold
        ]
        # sorted() is stable, so equal scores keep catalog order
        return sorted(kept, key=lambda m: m.score, reverse=True)

    def search(self, query: str, templates: Iterable[Template]) -> list[Template]:
        return [m.template for m in self.rank(query, templates)]
