from dataclasses import dataclass, field, replace
from typing import List, Optional


@dataclass(frozen=True)
class PartyResult:
    """A party's standing in one territory as reported upstream."""

    acronym: str
    votes: int = 0
    mandates: int = 0  # already attributed upstream
    percentage: float = 0.0
    valid_votes_percentage: float = 0.0


@dataclass(frozen=True)
class Region:
    """An electoral circle and its mandate/turnout counters."""

    name: str
    territory_key: str
    available_mandates: int = 0
    attributed_mandates: int = 0
    number_voters: int = 0
    subscribed_voters: int = 0

    @property
    def total_mandates(self) -> int:
        return self.attributed_mandates + self.available_mandates

    @property
    def turnout(self) -> Optional[float]:
        if self.subscribed_voters <= 0:
            return None
        return self.number_voters / self.subscribed_voters

    def zeroed(self) -> "Region":
        return replace(
            self,
            available_mandates=0,
            attributed_mandates=0,
            number_voters=0,
            subscribed_voters=0,
        )


@dataclass
class TerritorySnapshot:
    """One fetch of a territory: its counters and party list.

    ``ok`` is False when the data could not be fetched or parsed; such a
    snapshot carries a zeroed region and no parties.
    """

    region: Region
    parties: List[PartyResult] = field(default_factory=list)
    territory_full_name: str = ""
    ok: bool = True
    error: Optional[str] = None

    @classmethod
    def empty(cls, region: Region, error: Optional[str] = None) -> "TerritorySnapshot":
        return cls(
            region=region.zeroed(),
            parties=[],
            territory_full_name=region.name,
            ok=False,
            error=error,
        )

    @property
    def display_name(self) -> str:
        return self.territory_full_name or self.region.name
