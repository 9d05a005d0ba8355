from dataclasses import dataclass
from typing import Dict, List, Sequence

import pandas as pd

from legislativas_live.model.results import PartyResult, Region, TerritorySnapshot
from legislativas_live.model.seats import (
    DEFAULT_MAX_DIVISOR,
    QuotientCell,
    allocate_seats,
    compute_quotients,
)


def divisor_range(total_mandates: int, y_axis_length: int = DEFAULT_MAX_DIVISOR) -> int:
    """Number of divisors to compute: the table height, grown to fit every mandate."""
    return max(y_axis_length, total_mandates)


@dataclass
class RegionAllocation:
    region: Region
    parties: List[PartyResult]
    quotients: List[QuotientCell]
    attributed: Dict[str, int]
    simulated: Dict[str, int]
    max_divisor: int

    @property
    def acronyms(self) -> List[str]:
        """Parties from the upstream list, then any party only seen in the simulation."""
        seen = dict.fromkeys(p.acronym for p in self.parties)
        seen.update(dict.fromkeys(self.simulated))
        return list(seen)

    @property
    def totals(self) -> Dict[str, int]:
        return {
            acronym: self.attributed.get(acronym, 0) + self.simulated.get(acronym, 0)
            for acronym in self.acronyms
        }

    def seat_totals(self) -> Dict[str, int]:
        """Totals without parties that end up with no seat."""
        return {acronym: seats for acronym, seats in self.totals.items() if seats > 0}

    def to_frame(self) -> pd.DataFrame:
        votes = {p.acronym: p.votes for p in self.parties}
        rows = [
            {
                "acronym": acronym,
                "votes": votes.get(acronym, 0),
                "attributed": self.attributed.get(acronym, 0),
                "simulated": self.simulated.get(acronym, 0),
                "total": total,
            }
            for acronym, total in self.totals.items()
        ]
        df = pd.DataFrame(rows, columns=["acronym", "votes", "attributed", "simulated", "total"])
        return df.sort_values(["total", "votes"], ascending=False, kind="stable").reset_index(
            drop=True
        )


def allocate_region(
    region: Region,
    parties: Sequence[PartyResult],
    y_axis_length: int = DEFAULT_MAX_DIVISOR,
    tie_break: str = "input",
) -> RegionAllocation:
    """
    Reconcile a region's attributed mandates with a D'Hondt simulation of the rest.

    The simulation ranks quotients over the full vote list and hands the
    region's ``available_mandates`` to the highest ones; each party's total is
    its attributed mandates plus the seats it wins there.
    """
    max_divisor = divisor_range(region.total_mandates, y_axis_length)
    quotients = compute_quotients(parties, max_divisor, tie_break)
    simulated = allocate_seats(quotients, region.available_mandates)

    attributed: Dict[str, int] = {}
    for party in parties:
        attributed[party.acronym] = attributed.get(party.acronym, 0) + party.mandates

    return RegionAllocation(
        region=region,
        parties=list(parties),
        quotients=quotients,
        attributed=attributed,
        simulated=simulated,
        max_divisor=max_divisor,
    )


def allocate_snapshot(
    snapshot: TerritorySnapshot,
    y_axis_length: int = DEFAULT_MAX_DIVISOR,
    tie_break: str = "input",
) -> RegionAllocation:
    return allocate_region(snapshot.region, snapshot.parties, y_axis_length, tie_break)
