from dataclasses import dataclass

from swing_analytics.domain.instrument import SwingInstrumentType


@dataclass(frozen=True)
class Session:
    player_id: int
    session_date: str
    instrument: SwingInstrumentType
    player_level: str | None = None
    id: int | None = None
    created_at: str | None = None
