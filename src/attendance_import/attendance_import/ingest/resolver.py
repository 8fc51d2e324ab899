from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from ..common.string_utils import tokenize_name
from ..core.constants import DEFAULT_MAX_SUGGESTIONS, DEFAULT_SUGGESTION_THRESHOLD
from ..employees.model import EmployeeDirectory
from .model import ResolutionResult, Suggestion
from .normalizer import EMPLOYEE_NAME
from .similarity import jaccard_similarity
from .strategies.base import MatchStrategy
from .strategies.email_strategy import EmailStrategy
from .strategies.id_strategy import EmployeeIdStrategy
from .strategies.name_strategy import FullNameStrategy, ShortNameStrategy


def default_strategies() -> tuple[MatchStrategy, ...]:
    return (EmployeeIdStrategy(), EmailStrategy(), ShortNameStrategy(), FullNameStrategy())


@dataclass(frozen=True)
class IdentityResolver:
    """Match a normalized row to a known employee.

    Strategies run in priority order and the first hit wins. Without a hit,
    employees whose name tokens overlap the row's name by more than
    ``threshold`` (Jaccard) are offered as suggestions, best first.
    """

    threshold: float = DEFAULT_SUGGESTION_THRESHOLD
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS
    strategies: Sequence[MatchStrategy] = field(default_factory=default_strategies)

    def resolve(self, record: Mapping[str, Any], directory: EmployeeDirectory) -> ResolutionResult:
        for strategy in self.strategies:
            employee = strategy.match(record, directory)
            if employee is not None:
                return ResolutionResult.matched(employee, strategy.name)
        return ResolutionResult.unmatched(self.suggest(record, directory))

    def suggest(self, record: Mapping[str, Any], directory: EmployeeDirectory) -> list[Suggestion]:
        name_tokens = tokenize_name(record.get(EMPLOYEE_NAME))
        if not name_tokens:
            return []

        suggestions: list[Suggestion] = []
        for employee in directory.employees():
            score = max(
                jaccard_similarity(name_tokens, tokenize_name(candidate))
                for candidate in (employee.name, employee.full_name)
            )
            if score > self.threshold:
                suggestions.append(Suggestion(employee=employee, similarity=score))

        # Stable sort keeps id order among equal scores.
        suggestions.sort(key=lambda s: s.similarity, reverse=True)
        return suggestions[: self.max_suggestions]
