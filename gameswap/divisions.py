"""Division registry: which divisions a game can be swapped with.

Division fields in the schedule are free text ("U13 B", "U13 Girls B1", ...),
so each rule is a pair of regular expressions searched against that field:
one to decide membership and one to decide swap compatibility.

Swap policy:
  U9 A-C   <-> U9 A-C
  U11 A-C  <-> U11 A-C, U13 B-C
  U13 A    <-> U13 A, U15 A-B
  U13 B-C  <-> U13 B-C, U11 A-C
  U15 A-B  <-> U13 A, U15 A-B, U18 A-B
  U18 A-B  <-> U15 A-B, U18 A-B
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from gameswap.errors import AmbiguousDivision, RegistryConfigError


@dataclass(frozen=True)
class DivisionRule:
    name: str
    membership: re.Pattern
    swaps: str
    compatibility: re.Pattern

    def is_member(self, division: str) -> bool:
        return self.membership.search(division) is not None

    def is_compatible(self, division: str) -> bool:
        return self.compatibility.search(division) is not None


# (name, membership regex, description, compatibility regex)
_DIVISION_TABLE = [
    # U9
    ("U9 A", r"U9.*A", "U9 A -> U9 A-C", r"U9.*[A-C]"),
    ("U9 B", r"U9.*B", "U9 B -> U9 A-C", r"U9.*[A-C]"),
    ("U9 C", r"U9.*C", "U9 C -> U9 A-C", r"U9.*[A-C]"),
    # U11
    ("U11 A", r"U11.*A", "U11 A -> U11 A-C, U13 B-C", r"U11.*[A-C]|U13.*[B-C]"),
    ("U11 B", r"U11.*B", "U11 B -> U11 A-C, U13 B-C", r"U11.*[A-C]|U13.*[B-C]"),
    ("U11 C", r"U11.*C", "U11 C -> U11 A-C, U13 B-C", r"U11.*[A-C]|U13.*[B-C]"),
    # U13
    ("U13 A", r"U13.*A", "U13 A -> U15 A-B", r"U13.*A|U15.*[A-B]"),
    ("U13 B", r"U13.*B", "U13 B -> U11 A-C, U13 B-C", r"U13.*[B-C]|U11.*[A-C]"),
    ("U13 C", r"U13.*C", "U13 C -> U11 A-C, U13 B-C", r"U13.*[B-C]|U11.*[A-C]"),
    # U15
    ("U15 A", r"U15.*A", "U15 A -> U13 A, U15 A-B, U18 A-B", r"U13.*A|U15.*[A-B]|U18.*[A-B]"),
    ("U15 B", r"U15.*B", "U15 B -> U13 A, U15 A-B, U18 A-B", r"U13.*A|U15.*[A-B]|U18.*[A-B]"),
    # U18
    ("U18 A", r"U18.*A", "U18 A -> U15 A-B, U18 A-B", r"U15.*[A-B]|U18.*[A-B]"),
    ("U18 B", r"U18.*B", "U18 B -> U15 A-B, U18 A-B", r"U15.*[A-B]|U18.*[A-B]"),
]


def build_registry(table: list[tuple[str, str, str, str]]) -> tuple[DivisionRule, ...]:
    """Compile a division table into an immutable, validated registry."""
    try:
        rules = tuple(
            DivisionRule(name, re.compile(member), swaps, re.compile(compat))
            for name, member, swaps, compat in table
        )
    except re.error as e:
        raise RegistryConfigError(f"Invalid division pattern: {e}") from e
    validate_registry(rules)
    return rules


def validate_registry(rules: tuple[DivisionRule, ...]) -> None:
    """Check that every division label resolves to exactly itself.

    Also checks that every division can swap with itself. Raises
    RegistryConfigError on the first problem found.
    """
    seen = set()
    for rule in rules:
        if rule.name in seen:
            raise RegistryConfigError(f"Duplicate division '{rule.name}'")
        seen.add(rule.name)

    for rule in rules:
        matches = [r.name for r in rules if r.is_member(rule.name)]
        if matches != [rule.name]:
            raise RegistryConfigError(
                f"Division '{rule.name}' matches membership of {matches}, expected only itself"
            )
        if not rule.is_compatible(rule.name):
            raise RegistryConfigError(f"Division '{rule.name}' is not compatible with itself")


DIVISIONS = build_registry(_DIVISION_TABLE)


def resolve_division(division: str, rules: tuple[DivisionRule, ...] = DIVISIONS) -> DivisionRule:
    """Return the single rule whose membership matches a game's division field."""
    matches = [r for r in rules if r.is_member(division)]
    if len(matches) != 1:
        raise AmbiguousDivision(division, [r.name for r in matches])
    return matches[0]


def get_division(name: str, rules: tuple[DivisionRule, ...] = DIVISIONS) -> DivisionRule:
    """Look up a rule by its label, e.g. "U13 A"."""
    for rule in rules:
        if rule.name == name:
            return rule
    raise KeyError(name)
