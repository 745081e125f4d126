"""Shared helpers for the legacy migration scripts.

Invariants:
    - Legacy database URLs are derived from DATABASE_URL by swapping only the
      database name; credentials and host are kept
    - Parsers never raise on bad legacy data; they return None / [] instead
    - Per-row failures are counted in MigrationStats, never re-raised
"""

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable

from sqlalchemy.engine import make_url

from scouting.config import get_settings
from scouting.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

LEGACY_V1_DATABASE = "smo_v1"
LEGACY_V2_DATABASE = "smo_v2"

# media_files.type values copied onto clubs (thumb variants only)
CLUB_THUMB_TYPES = ("thumb", "thumb.profile", "thumb.normal", "thumb.icon")

_SCORE = re.compile(r"(\d+)\s*[-/]\s*(\d+)")


def configure_script_logging() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, "text")


def derive_database_url(database_url: str, database: str) -> str:
    """Same server and credentials, different database name."""
    url = make_url(database_url).set(database=database)
    return url.render_as_string(hide_password=False)


def parse_score(raw: str | None) -> tuple[int, int] | None:
    """'3-2' or '3/2' -> (3, 2)."""
    if not raw:
        return None
    found = _SCORE.search(raw)
    if not found:
        return None
    return int(found.group(1)), int(found.group(2))


def parse_lineup(raw: Any) -> list[dict]:
    """Lineup JSON -> entries that carry both player_name and jersy_number."""
    if not raw:
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return []
    if not isinstance(raw, list):
        return []
    return [
        p for p in raw
        if isinstance(p, dict) and p.get("player_name") and p.get("jersy_number")
    ]


def parse_legacy_datetime(value: Any) -> datetime | None:
    """Naive UTC datetime from a legacy timestamp string or datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def build_media_map(
    rows: Iterable[Any], prefix: str,
) -> dict[int, dict[str, str]]:
    """media_files rows -> {parent_id: {type: absolute url}}."""
    media: dict[int, dict[str, str]] = {}
    for row in rows:
        if not row["storage_path"]:
            continue
        media.setdefault(row["parent_id"], {})[row["type"]] = prefix + row["storage_path"]
    return media


def to_json(value: Any) -> str:
    return json.dumps(value, default=str)


@dataclass
class MigrationStats:
    """Named counters plus a summary block for the end of a run."""
    title: str
    counts: dict[str, int] = field(default_factory=dict)

    def bump(self, name: str, by: int = 1) -> None:
        self.counts[name] = self.counts.get(name, 0) + by

    def __getitem__(self, name: str) -> int:
        return self.counts.get(name, 0)

    def summary_lines(self) -> list[str]:
        width = max((len(k) for k in self.counts), default=0)
        return [f"{name.ljust(width)}  {value}" for name, value in self.counts.items()]

    def log_summary(self) -> None:
        logger.info(f"{self.title} summary")
        for line in self.summary_lines():
            logger.info(line)
