from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

DEFAULT_MAX_DIVISOR = 20
TIE_BREAKS = ("input", "acronym")


@dataclass(frozen=True)
class QuotientCell:
    """One entry of the divisor table: a party's votes divided by ``divisor``."""

    acronym: str
    divisor: int
    quotient: float

    @property
    def key(self) -> Tuple[str, int]:
        return self.acronym, self.divisor


def _votes_by_party(parties: Iterable) -> List[Tuple[str, float]]:
    rows = []
    for party in parties:
        if isinstance(party, (tuple, list)):
            acronym, votes = party
        else:
            acronym, votes = party.acronym, party.votes
        rows.append((acronym, float(votes)))
    return rows


def compute_quotients(
    parties: Iterable, max_divisor: int = DEFAULT_MAX_DIVISOR, tie_break: str = "input"
) -> List[QuotientCell]:
    """
    Build every D'Hondt quotient ``votes / d`` for ``d`` in ``1..max_divisor``.

    Cells are ordered by quotient, highest first. The sort is stable over
    party-major order (party, then divisor), so equal quotients keep the
    upstream party order when ``tie_break="input"``; with ``"acronym"`` the
    parties are ordered by acronym before sorting.

    Args:
        parties: PartyResult-like objects (``acronym``/``votes``) or
            ``(acronym, votes)`` pairs
        max_divisor: Highest divisor; anything below 1 yields no cells
        tie_break: ``"input"`` or ``"acronym"``

    Returns:
        ``len(parties) * max_divisor`` cells in allocation order
    """
    if tie_break not in TIE_BREAKS:
        raise ValueError(f"Unknown tie break {tie_break!r}, expected one of {TIE_BREAKS}")

    rows = _votes_by_party(parties)
    if tie_break == "acronym":
        rows = sorted(rows, key=lambda r: r[0])
    if not rows or max_divisor < 1:
        return []

    votes = np.array([v for _, v in rows], dtype=float)
    divisors = np.arange(1, max_divisor + 1)
    quotients = (votes[:, None] / divisors[None, :]).ravel()
    order = np.argsort(-quotients, kind="stable")

    cells = []
    for flat in order:
        party_idx, divisor_idx = divmod(int(flat), max_divisor)
        cells.append(
            QuotientCell(rows[party_idx][0], int(divisors[divisor_idx]), float(quotients[flat]))
        )
    return cells


def allocate_seats(quotients: Sequence[QuotientCell], seat_count: int) -> Dict[str, int]:
    """Count how many of the top ``seat_count`` quotients each party holds."""
    if seat_count <= 0:
        return {}
    return dict(Counter(cell.acronym for cell in quotients[:seat_count]))


def allocate_seats_dhondt(
    parties: Iterable,
    seat_count: int,
    max_divisor: Optional[int] = None,
    tie_break: str = "input",
) -> Dict[str, int]:
    # A party can win at most seat_count seats, so this many divisors always suffice.
    if max_divisor is None:
        max_divisor = max(DEFAULT_MAX_DIVISOR, seat_count)
    return allocate_seats(compute_quotients(parties, max_divisor, tie_break), seat_count)


def quotient_table(parties: Iterable, max_divisor: int = DEFAULT_MAX_DIVISOR) -> pd.DataFrame:
    """Divisor table: one row per divisor, one column per party acronym."""
    rows = _votes_by_party(parties)
    index = pd.RangeIndex(1, max(max_divisor, 0) + 1, name="divisor")
    columns = [acronym for acronym, _ in rows]
    if not columns:
        return pd.DataFrame(index=index)
    # built row-wise so repeated acronyms keep a column each
    data = [[votes / d for _, votes in rows] for d in index]
    return pd.DataFrame(data, index=index, columns=columns)
