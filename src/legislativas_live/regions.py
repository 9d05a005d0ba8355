from typing import List, Tuple

import yaml

from legislativas_live.model.results import Region
from legislativas_live.settings import REGIONS_CONFIG


def load_regions(path: str = REGIONS_CONFIG) -> Tuple[List[Region], str]:
    """
    Read the configured electoral circles.

    Returns:
        The regions in configuration order and the reserved key of the
        national view
    """
    with open(path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    total_key = str(config.get("total_key", "TOTAL"))
    regions = []
    seen = set()
    for entry in config.get("regions") or []:
        key = str(entry["territory_key"])
        if key in seen:
            raise ValueError(f"Duplicate territory key {key} in {path}")
        if key == total_key:
            raise ValueError(f"Territory key {key} is reserved for the national view")
        seen.add(key)
        regions.append(Region(name=str(entry["name"]), territory_key=key))

    if not regions:
        raise ValueError(f"No regions configured in {path}")
    return regions, total_key
