from typing import Dict, Iterable, List, Optional

import yaml

from legislativas_live.settings import PARTIES_CONFIG

FALLBACK_COLOR = "#A9A9A9"


class PartyColors:
    """Acronym to display colour lookup, with a fixed colour for unknown parties."""

    def __init__(self, colors: Optional[Dict[str, str]] = None, fallback: str = FALLBACK_COLOR):
        self.colors = dict(colors or {})
        self.fallback = fallback

    def __call__(self, acronym: str) -> str:
        return self.colors.get(acronym, self.fallback)

    def for_parties(self, acronyms: Iterable[str]) -> List[str]:
        return [self(a) for a in acronyms]

    @classmethod
    def from_yaml(cls, path: str = PARTIES_CONFIG) -> "PartyColors":
        with open(path, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
        return cls(config.get("colors"), config.get("fallback_color", FALLBACK_COLOR))
