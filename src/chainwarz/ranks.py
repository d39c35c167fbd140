"""Rank ladder derived from a player's total strike count."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rank:
    name: str
    min_strikes: int


RANKS: tuple[Rank, ...] = (
    Rank("Squire", 0),
    Rank("Knight", 100),
    Rank("Knight Captain", 250),
    Rank("Baron", 500),
    Rank("Duke", 1000),
    Rank("Warlord", 2500),
    Rank("Legendary Champion", 5000),
)


def get_rank(strike_count: int) -> Rank:
    """Highest rank whose threshold *strike_count* meets."""
    for rank in reversed(RANKS):
        if strike_count >= rank.min_strikes:
            return rank
    return RANKS[0]


def next_rank(strike_count: int) -> Rank | None:
    """The next rank up, or None at the top of the ladder."""
    for rank in RANKS:
        if rank.min_strikes > strike_count:
            return rank
    return None
