from collections import Counter
from dataclasses import dataclass, field
from functools import partial
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from legislativas_live.data_adapters.territory_results import (
    Fetcher,
    fetch_all_territories,
    fetch_region,
)
from legislativas_live.model.regional import RegionAllocation, allocate_snapshot
from legislativas_live.model.results import Region, TerritorySnapshot
from legislativas_live.model.seats import DEFAULT_MAX_DIVISOR
from legislativas_live.settings import MAX_WORKERS
from legislativas_live.utils.logging import get_logger

logger = get_logger("legislativas-live.national")

TOTAL_NAME = "Total"


def aggregate_national(allocations: Iterable[RegionAllocation]) -> Dict[str, int]:
    """Sum each party's regional seat totals, highest first."""
    tally: Counter = Counter()
    for allocation in allocations:
        tally.update(allocation.seat_totals())
    return dict(sorted(tally.items(), key=lambda item: item[1], reverse=True))


def total_region(regions: Iterable[Region], total_key: str = "TOTAL") -> Region:
    regions = list(regions)
    return Region(
        name=TOTAL_NAME,
        territory_key=total_key,
        available_mandates=sum(r.available_mandates for r in regions),
        attributed_mandates=sum(r.attributed_mandates for r in regions),
        number_voters=sum(r.number_voters for r in regions),
        subscribed_voters=sum(r.subscribed_voters for r in regions),
    )


def build_region_tabs(
    snapshots: Sequence[TerritorySnapshot], total_key: str = "TOTAL"
) -> List[Region]:
    """The national pseudo-region, then every region by total mandates (largest first)."""
    regions = [s.region for s in snapshots]
    ordered = sorted(regions, key=lambda r: r.total_mandates, reverse=True)
    return [total_region(regions, total_key)] + ordered


def tab_label(region: Region) -> str:
    return f"{region.name} ({region.total_mandates})"


@dataclass
class NationalResult:
    tally: Dict[str, int]
    total: Region
    allocations: List[RegionAllocation] = field(default_factory=list)
    failed_regions: List[str] = field(default_factory=list)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(list(self.tally.items()), columns=["acronym", "total"])


def _allocatable(snapshot: TerritorySnapshot) -> TerritorySnapshot:
    """The snapshot itself, or a zeroed one when its votes cannot be divided."""
    try:
        for party in snapshot.parties:
            float(party.votes)
    except (TypeError, ValueError, OverflowError) as e:
        logger.error(f"Unusable vote counts for {snapshot.region.name}: {e}")
        return TerritorySnapshot.empty(snapshot.region, error=str(e))
    return snapshot


def compute_national(
    snapshots: Sequence[TerritorySnapshot],
    total_key: str = "TOTAL",
    y_axis_length: int = DEFAULT_MAX_DIVISOR,
    tie_break: str = "input",
) -> NationalResult:
    """
    Allocate every region and add the results up.

    Snapshots flagged as failed are zero regions with no parties and so add
    nothing; they are reported in ``failed_regions``.
    """
    snapshots = [_allocatable(s) for s in snapshots]
    allocations = [allocate_snapshot(s, y_axis_length, tie_break) for s in snapshots]
    failed = [s.region.name for s in snapshots if not s.ok]
    result = NationalResult(
        tally=aggregate_national(allocations),
        total=total_region((s.region for s in snapshots), total_key),
        allocations=allocations,
        failed_regions=failed,
    )
    logger.info(
        f"National tally over {len(snapshots)} regions: "
        f"{sum(result.tally.values())}/{result.total.total_mandates} mandates, "
        f"{len(failed)} unavailable"
    )
    if failed:
        logger.warning(f"No data for: {', '.join(failed)}")
    return result


def fetch_national(
    regions: Sequence[Region],
    fetcher: Optional[Fetcher] = None,
    total_key: str = "TOTAL",
    max_workers: int = MAX_WORKERS,
    y_axis_length: int = DEFAULT_MAX_DIVISOR,
    tie_break: str = "input",
    timeout: Optional[float] = None,
) -> NationalResult:
    """
    Fetch all regions concurrently, then aggregate once every branch has finished.

    ``timeout`` applies to each region request made by the default fetcher;
    a custom ``fetcher`` handles its own.
    """
    if fetcher is None:
        fetcher = partial(fetch_region, timeout=timeout)
    snapshots = fetch_all_territories(regions, fetcher, max_workers)
    return compute_national(snapshots, total_key, y_axis_length, tie_break)
