import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parents[2]

RESULTS_API_URL = os.getenv(
    "RESULTS_API_URL",
    "https://www.legislativas2025.mai.gov.pt/frontend/data/TerritoryResults",
)
ELECTION_ID = os.getenv("ELECTION_ID", "AR")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "15"))
HTTP_MAX_RETRIES = int(os.getenv("HTTP_MAX_RETRIES", "0"))
MAX_WORKERS = int(os.getenv("MAX_WORKERS", "20"))
REFRESH_INTERVAL = int(os.getenv("REFRESH_INTERVAL", "10"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Rows of the divisor table; grows to the region's mandate count when larger.
Y_AXIS_LENGTH = int(os.getenv("Y_AXIS_LENGTH", "20"))
# "input" keeps the upstream party order on equal quotients, "acronym" sorts them.
TIE_BREAK = os.getenv("TIE_BREAK", "input")

REGIONS_CONFIG = os.getenv("REGIONS_CONFIG", str(PROJECT_ROOT / "config" / "regions.yaml"))
PARTIES_CONFIG = os.getenv("PARTIES_CONFIG", str(PROJECT_ROOT / "config" / "parties.yaml"))
