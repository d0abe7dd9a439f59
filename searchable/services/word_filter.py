"""Per-column admission of query words.

A column may declare conditions restricting which words are searched in it,
e.g. "only words of three letters or more" for a name column or "only numbers"
for an age column.  Conditions are OR-combined: a word is admitted when at
least one of them matches.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from searchable.core.exceptions import SearchConfigurationError


class AdmissionRule(ABC):
    """Decides whether a word may be searched in a column."""

    @abstractmethod
    def matches(self, word: str) -> bool:
        pass


@dataclass(frozen=True)
class PatternRule(AdmissionRule):
    """Regular expression anchored at both ends of the word."""

    pattern: str

    def matches(self, word: str) -> bool:
        try:
            return re.fullmatch(self.pattern, word) is not None
        except re.error as exc:
            raise SearchConfigurationError(f"invalid word condition {self.pattern!r}: {exc}") from exc


@dataclass(frozen=True)
class PredicateRule(AdmissionRule):
    predicate: Callable[[str], bool]

    def matches(self, word: str) -> bool:
        return bool(self.predicate(word))


def to_rules(value: object) -> tuple[AdmissionRule, ...]:
    """Coerce a raw condition (pattern, callable, rule or a list of them)."""
    if isinstance(value, (str, AdmissionRule)) or callable(value):
        items: Sequence[object] = [value]
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
    else:
        raise ValueError(f"unsupported word condition: {value!r}")

    rules: list[AdmissionRule] = []
    for item in items:
        if isinstance(item, AdmissionRule):
            rules.append(item)
        elif isinstance(item, str):
            rules.append(PatternRule(item))
        elif callable(item):
            rules.append(PredicateRule(item))
        else:
            raise ValueError(f"unsupported word condition: {item!r}")
    if not rules:
        raise ValueError("word conditions must not be empty")
    return tuple(rules)


def filter_words(
    column: str,
    conditions: Mapping[str, Sequence[AdmissionRule]] | None,
    words: Sequence[str],
) -> list[str]:
    """Return the words admitted to ``column``, keeping their order."""
    if not conditions or column not in conditions:
        return list(words)

    rules = conditions[column]
    return [word for word in words if any(rule.matches(word) for rule in rules)]
