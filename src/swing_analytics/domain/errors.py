from dataclasses import dataclass


@dataclass(frozen=True)
class SwingError:
    message: str


@dataclass(frozen=True)
class IngestError(SwingError):
    source_type: str
    source_detail: str
    target_table: str
