"""Team name normalization.

Schedule exports append scores to team names once a game is played, e.g.
"BLACKBURN STINGERS U15 B1 (1)". Every team name is passed through
``normalize`` before it is compared or put in a set.
"""

SCORE_MARKER = " ("


def normalize(raw: str) -> str:
    """Strip a trailing score annotation and upper-case the name."""
    before, _, _ = raw.partition(SCORE_MARKER)
    return before.upper()


def add_unique(items: list[str], raw: str) -> list[str]:
    """Append normalize(raw) to items unless a case-insensitive equal is present.

    Keeps first-seen order. Returns the same list for chaining.
    """
    name = normalize(raw)
    for existing in items:
        if existing.upper() == name:
            return items
    items.append(name)
    return items
