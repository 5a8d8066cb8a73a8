from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from salesboard.models.sales import CanonicalSalesperson

MATCH_THRESHOLD = 0.3
VERY_LIKELY_SCORE = 0.8
LIKELY_SCORE = 0.5
SUBSTRING_SCORE = 0.8
MIN_TOKEN_LENGTH = 3


class AliasTableError(ValueError):
    pass


def normalize_name(value: Optional[str]) -> str:
    return (value or "").strip().lower()


class AliasTable:
    """Ordered mapping of canonical salespeople to their name fragments.

    Lookups are first-match-wins in table order, so construction refuses
    aliases that could match two different people.
    """

    def __init__(self, entries: Iterable[Tuple[str, Iterable[str]]]) -> None:
        people: List[CanonicalSalesperson] = []
        seen_names: set[str] = set()
        for display_name, aliases in entries:
            if display_name in seen_names:
                raise AliasTableError(f"Salesperson {display_name} is listed twice")
            seen_names.add(display_name)
            normalized = frozenset(alias for alias in (normalize_name(a) for a in aliases) if alias)
            if not normalized:
                normalized = frozenset({normalize_name(display_name)})
            people.append(CanonicalSalesperson(display_name=display_name, aliases=normalized))
        self._validate_disjoint(people)
        self.people: Tuple[CanonicalSalesperson, ...] = tuple(people)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[str]]) -> "AliasTable":
        return cls(mapping.items())

    @staticmethod
    def _validate_disjoint(people: Sequence[CanonicalSalesperson]) -> None:
        for index, person in enumerate(people):
            for other in people[index + 1 :]:
                for alias in person.aliases:
                    for other_alias in other.aliases:
                        if alias in other_alias or other_alias in alias:
                            raise AliasTableError(
                                f"Alias '{alias}' of {person.display_name} overlaps "
                                f"'{other_alias}' of {other.display_name}"
                            )

    @property
    def display_names(self) -> List[str]:
        return [person.display_name for person in self.people]

    def canonicalize(self, raw_name: Optional[str]) -> Optional[CanonicalSalesperson]:
        return canonicalize(raw_name, self)

    def __iter__(self):
        return iter(self.people)

    def __len__(self) -> int:
        return len(self.people)


def canonicalize(raw_name: Optional[str], alias_table: AliasTable) -> Optional[CanonicalSalesperson]:
    name = normalize_name(raw_name)
    if not name:
        return None
    for person in alias_table.people:
        for alias in person.aliases:
            if alias in name or name in alias:
                return person
    return None


def _tokens(value: str) -> List[str]:
    return [token for token in value.split() if len(token) >= MIN_TOKEN_LENGTH]


def similarity(a: Optional[str], b: Optional[str]) -> float:
    """Cheap customer-name similarity in [0, 1].

    Exact match scores 1.0 and containment 0.8. Otherwise the share of
    ``a``'s tokens (longer than two characters) that equal or overlap a token
    of ``b``, over the larger token count. Not symmetric in general.
    """
    left = normalize_name(a)
    right = normalize_name(b)
    if not left or not right:
        return 0.0
    if left == right:
        return 1.0
    if left in right or right in left:
        return SUBSTRING_SCORE

    left_tokens = _tokens(left)
    right_tokens = _tokens(right)
    if not left_tokens or not right_tokens:
        return 0.0
    matches = sum(
        1
        for token in left_tokens
        if any(token == other or token in other or other in token for other in right_tokens)
    )
    return matches / max(len(left_tokens), len(right_tokens))


def confidence_label(score: float) -> str:
    if score >= VERY_LIKELY_SCORE:
        return "very likely"
    if score >= LIKELY_SCORE:
        return "likely"
    return "possible"
