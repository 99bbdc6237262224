"""Pydantic schemas for the visitor game."""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ScanOutcome(str, Enum):
    """Result of scanning a station."""

    RECORDED = "recorded"
    ALREADY_SCANNED = "already_scanned"
    STATION_INACTIVE = "station_inactive"


class StationPublic(BaseModel):
    """Station as shown to visitors after a scan."""

    id: UUID
    name: str
    name_he: str
    letter: str
    order_index: int
    fun_facts: str
    image_url: str | None
    video_url: str | None

    model_config = ConfigDict(from_attributes=True)


class ScanResponse(BaseModel):
    """Outcome of a scan. ``station`` is omitted for inactive stations."""

    outcome: ScanOutcome
    station: StationPublic | None = None


class GameStation(BaseModel):
    """A station on the visitor's board. The letter shows once collected."""

    id: UUID
    name: str
    name_he: str
    order_index: int
    image_url: str | None
    collected: bool
    letter: str | None = None


class GameStateResponse(BaseModel):
    """The visitor's board for the current tenant."""

    stations: list[GameStation]
    collected_count: int
    total_count: int
