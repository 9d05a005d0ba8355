import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from legislativas_live.errors import FetchError, MalformedPayloadError
from legislativas_live.model.results import PartyResult, Region, TerritorySnapshot
from legislativas_live.settings import (
    ELECTION_ID,
    HTTP_MAX_RETRIES,
    HTTP_TIMEOUT,
    MAX_WORKERS,
    RESULTS_API_URL,
)
from legislativas_live.utils.logging import get_logger

logger = get_logger("legislativas-live.results")

Fetcher = Callable[[Region], TerritorySnapshot]

_local = threading.local()


def _create_session(max_retries: int = HTTP_MAX_RETRIES) -> requests.Session:
    session = requests.Session()

    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=1,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update(
        {
            "User-Agent": "Mozilla/5.0 (compatible; LegislativasLive/1.0)",
            "Accept": "application/json",
            "Cache-Control": "no-store",
        }
    )
    return session


def get_session() -> requests.Session:
    """One session per thread; ``requests.Session`` is not safe to share across workers."""
    session = getattr(_local, "session", None)
    if session is None:
        session = _local.session = _create_session()
    return session


def _count(value) -> int:
    # upstream sends null for counters that have not started yet
    if value is None or value == "":
        return 0
    try:
        count = int(value)
        # quotients are computed in floating point
        float(count)
    except (TypeError, ValueError, OverflowError):
        raise MalformedPayloadError(f"Expected a count, got {value!r}")
    return max(0, count)


def _ratio(value) -> float:
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


def parse_territory_payload(payload, name: str, territory_key: str) -> TerritorySnapshot:
    """
    Turn a ``TerritoryResults`` JSON document into a snapshot.

    Missing or null counters count as 0. Raises MalformedPayloadError when
    ``currentResults`` is absent or the document does not have the expected
    shape.
    """
    if not isinstance(payload, dict):
        raise MalformedPayloadError(f"Expected a JSON object, got {type(payload).__name__}")
    current = payload.get("currentResults")
    if not isinstance(current, dict):
        raise MalformedPayloadError("Missing currentResults")

    raw_parties = current.get("resultsParty") or []
    if not isinstance(raw_parties, list):
        raise MalformedPayloadError("resultsParty is not a list")

    parties = []
    for entry in raw_parties:
        if not isinstance(entry, dict) or not entry.get("acronym"):
            raise MalformedPayloadError(f"Unexpected party entry {entry!r}")
        parties.append(
            PartyResult(
                acronym=str(entry["acronym"]),
                votes=_count(entry.get("votes")),
                mandates=_count(entry.get("mandates")),
                percentage=_ratio(entry.get("percentage")),
                valid_votes_percentage=_ratio(entry.get("validVotesPercentage")),
            )
        )

    region = Region(
        name=name,
        territory_key=territory_key,
        available_mandates=_count(current.get("availableMandates")),
        attributed_mandates=_count(current.get("totalMandates")),
        number_voters=_count(current.get("numberVoters")),
        subscribed_voters=_count(current.get("subscribedVoters")),
    )
    return TerritorySnapshot(
        region=region,
        parties=parties,
        territory_full_name=current.get("territoryFullName") or name,
    )


def _get_payload(territory_key: str, session: requests.Session, timeout: float):
    params = {"territoryKey": territory_key, "electionId": ELECTION_ID}
    logger.debug(f"Fetching {RESULTS_API_URL} {params}")
    try:
        response = session.get(RESULTS_API_URL, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(territory_key, str(e)) from e
    if not response.ok:
        raise FetchError(territory_key, f"HTTP {response.status_code} {response.reason}")
    try:
        return response.json()
    except ValueError as e:
        raise MalformedPayloadError(f"Invalid JSON: {e}") from e


def fetch_territory_results(
    territory_key: str,
    name: Optional[str] = None,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> TerritorySnapshot:
    """
    Fetch the current results of one territory.

    Never raises for upstream problems: on a network error, a non-2xx
    response or an unexpected payload the failure is logged and a zeroed
    snapshot with ``ok=False`` is returned.
    """
    name = name or territory_key
    session = session or get_session()
    timeout = HTTP_TIMEOUT if timeout is None else timeout
    try:
        payload = _get_payload(territory_key, session, timeout)
        return parse_territory_payload(payload, name, territory_key)
    except FetchError as e:
        logger.error(f"Failed to fetch results for {name}: {e.reason}")
        return TerritorySnapshot.empty(Region(name, territory_key), error=e.reason)
    except MalformedPayloadError as e:
        logger.warning(f"Results for {name} are not in the expected format: {e}")
        return TerritorySnapshot.empty(Region(name, territory_key), error=str(e))


def fetch_region(region: Region, timeout: Optional[float] = None) -> TerritorySnapshot:
    return fetch_territory_results(region.territory_key, region.name, timeout=timeout)


def _fetch_or_empty(fetcher: Fetcher, region: Region) -> TerritorySnapshot:
    try:
        return fetcher(region)
    except Exception as e:
        logger.error(f"Error fetching results for {region.name}: {e}")
        return TerritorySnapshot.empty(region, error=str(e))


def fetch_all_territories(
    regions: Sequence[Region],
    fetcher: Fetcher = fetch_region,
    max_workers: int = MAX_WORKERS,
) -> List[TerritorySnapshot]:
    """
    Fetch every region concurrently and wait for all of them.

    Each worker returns its own snapshot; a branch that raises is replaced by
    a zeroed snapshot so one region never aborts the others. Results come back
    in the order of ``regions``.
    """
    if not regions:
        return []
    workers = max(1, min(max_workers, len(regions)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="territory") as pool:
        futures = [pool.submit(_fetch_or_empty, fetcher, region) for region in regions]
        return [future.result() for future in futures]
