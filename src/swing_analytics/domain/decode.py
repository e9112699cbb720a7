from dataclasses import dataclass

from swing_analytics.domain.instrument import SwingInstrumentType
from swing_analytics.domain.swing import SwingRecord


@dataclass(frozen=True)
class DecodeSummary:
    total_rows: int
    parsed_rows: int
    skipped_rows: int
    error_count: int

    def to_dict(self) -> dict[str, int]:
        return {
            "total_rows": self.total_rows,
            "parsed_rows": self.parsed_rows,
            "skipped_rows": self.skipped_rows,
            "error_count": self.error_count,
        }


@dataclass(frozen=True)
class DecodeResult:
    instrument: SwingInstrumentType
    records: tuple[SwingRecord, ...]
    summary: DecodeSummary
