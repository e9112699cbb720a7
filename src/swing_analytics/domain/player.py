from dataclasses import dataclass


@dataclass(frozen=True)
class Player:
    name: str
    level: str | None = None
    id: int | None = None
    created_at: str | None = None
