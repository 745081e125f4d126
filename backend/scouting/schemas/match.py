"""Match Schemas — analysis request body, worker status updates, result payloads.

Invariants:
    - MatchCreate.video_url must be an absolute http(s) URL
    - home_team/away_team: 1-255 chars after stripping
    - MatchStatusUpdate.progress bounded 0-100
    - normalize_analysis_payload accepts exactly two shapes: a JSON array, or
      an object whose "result" key is an array
"""

from typing import Any

from pydantic import Field, HttpUrl

from scouting.core.domain_types import MatchLevel, MatchStatus
from scouting.core.errors import RequestValidationFailed
from scouting.schemas.common import CamelModel


class MatchCreate(CamelModel):
    """Body of POST /match/request."""
    video_url: HttpUrl
    match_level: MatchLevel
    home_team: str = Field(min_length=1, max_length=255)
    away_team: str = Field(min_length=1, max_length=255)
    focus_hint: str | None = Field(None, max_length=2000)


class MatchStatusUpdate(CamelModel):
    """Body of PUT /internal/matches/{id}/status."""
    status: MatchStatus
    progress: int | None = Field(None, ge=0, le=100)


def normalize_analysis_payload(body: Any) -> tuple[dict, int]:
    """Return (payload to store, number of analysed items).

    A bare array is wrapped as {"events": [...]}; an object carrying an
    array under "result" is stored unchanged.
    """
    if isinstance(body, list):
        return {"events": body}, len(body)
    if isinstance(body, dict) and isinstance(body.get("result"), list):
        return body, len(body["result"])
    raise RequestValidationFailed(
        "Invalid body format. Expected array or object with 'result'.",
        field="body",
    )
