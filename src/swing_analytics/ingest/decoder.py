"""Positional decoding of vendor swing exports.

Both vendor formats carry unreliable header text, so each instrument is a fixed
schema of column offsets. The offsets below are the only place either format is
described.
"""

import csv
import logging
import math
from collections.abc import Callable, Sequence
from pathlib import Path

from swing_analytics.domain.decode import DecodeResult, DecodeSummary
from swing_analytics.domain.instrument import SwingInstrumentType
from swing_analytics.domain.swing import BallSwingRecord, BatSwingRecord, SwingRecord
from swing_analytics.exceptions import DecodeError, MalformedInputError
from swing_analytics.ingest.csv_source import SwingCsvSource
from swing_analytics.ingest.protocols import LineSource

logger = logging.getLogger(__name__)

# Bat tracker
BAT_SPEED_COL = 7
ATTACK_ANGLE_COL = 10
TIME_TO_CONTACT_COL = 15
BAT_MIN_COLUMNS = 16
DATA_LOOKAHEAD_LINES = 20
MIN_NUMERIC_FIELDS_FOR_DATA = 2

# Ball tracker
PITCH_SPEED_COL = 4
STRIKE_ZONE_COL = 5
EXIT_VELOCITY_COL = 7
LAUNCH_ANGLE_COL = 8
DISTANCE_COL = 9
SPRAY_CHART_X_COL = 22
SPRAY_CHART_Z_COL = 23
BALL_MIN_COLUMNS = 10
BALL_DATA_START = 1

_NULL_TOKENS = frozenset({"", "null", "undefined", "nan", "none"})


def parse_number(value: str | None) -> float | None:
    """Strictly parse a finite float, returning None for blanks and junk."""
    if value is None:
        return None
    text = value.strip()
    if text.lower() in _NULL_TOKENS:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_strike_zone(value: str | None) -> int | None:
    number = parse_number(value)
    if number is None or not number.is_integer():
        return None
    zone = int(number)
    return zone if 1 <= zone <= 13 else None


def _field(fields: Sequence[str], index: int) -> str | None:
    return fields[index] if index < len(fields) else None


def _is_blank(fields: Sequence[str]) -> bool:
    return all(not f.strip() for f in fields)


def decode_bat_line(fields: Sequence[str]) -> BatSwingRecord | None:
    if len(fields) < BAT_MIN_COLUMNS:
        return None
    bat_speed = parse_number(fields[BAT_SPEED_COL])
    attack_angle = parse_number(fields[ATTACK_ANGLE_COL])
    time_to_contact = parse_number(fields[TIME_TO_CONTACT_COL])
    if bat_speed is None or attack_angle is None or time_to_contact is None:
        return None
    if bat_speed < 0 or time_to_contact <= 0:
        return None
    return BatSwingRecord(bat_speed=bat_speed, attack_angle=attack_angle, time_to_contact=time_to_contact)


def decode_ball_line(fields: Sequence[str]) -> BallSwingRecord | None:
    if len(fields) < BALL_MIN_COLUMNS:
        return None
    exit_velocity = parse_number(fields[EXIT_VELOCITY_COL])
    if exit_velocity is None or exit_velocity <= 0:
        return None
    return BallSwingRecord(
        exit_velocity=exit_velocity,
        launch_angle=parse_number(fields[LAUNCH_ANGLE_COL]),
        distance=parse_number(fields[DISTANCE_COL]),
        strike_zone=parse_strike_zone(fields[STRIKE_ZONE_COL]),
        pitch_speed=parse_number(fields[PITCH_SPEED_COL]),
        spray_chart_x=parse_number(_field(fields, SPRAY_CHART_X_COL)),
        spray_chart_z=parse_number(_field(fields, SPRAY_CHART_Z_COL)),
    )


def _looks_like_bat_data(fields: Sequence[str]) -> bool:
    numeric = sum(
        1
        for col in (BAT_SPEED_COL, ATTACK_ANGLE_COL, TIME_TO_CONTACT_COL)
        if parse_number(_field(fields, col)) is not None
    )
    return numeric >= MIN_NUMERIC_FIELDS_FOR_DATA


def find_bat_data_start(lines: Sequence[Sequence[str]]) -> int:
    """Index of the first line inside the look-ahead window that carries bat data."""
    for index, fields in enumerate(lines[:DATA_LOOKAHEAD_LINES]):
        if _looks_like_bat_data(fields):
            return index
    raise DecodeError("no data rows found")


def decode_lines(lines: Sequence[Sequence[str]], instrument: SwingInstrumentType) -> DecodeResult:
    rows = [fields for fields in lines if not _is_blank(fields)]

    decode: Callable[[Sequence[str]], BatSwingRecord | BallSwingRecord | None]
    if instrument is SwingInstrumentType.BAT_TRACKER:
        start = find_bat_data_start(rows)
        decode = decode_bat_line
    else:
        start = min(BALL_DATA_START, len(rows))
        decode = decode_ball_line
    logger.debug("%s data starts at line %d of %d", instrument, start, len(rows))

    records: list[SwingRecord] = []
    errors = 0
    for index in range(start, len(rows)):
        record = decode(rows[index])
        if record is None:
            errors += 1
            logger.debug("Dropped %s line %d: %s", instrument, index, rows[index])
            continue
        records.append(record)

    summary = DecodeSummary(
        total_rows=len(rows),
        parsed_rows=len(records),
        skipped_rows=start + errors,
        error_count=errors,
    )
    return DecodeResult(instrument=instrument, records=tuple(records), summary=summary)


def decode_source(source: LineSource, instrument: SwingInstrumentType) -> DecodeResult:
    try:
        lines = source.fetch()
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise MalformedInputError(f"Cannot read {source.source_detail}: {exc}") from exc
    return decode_lines(lines, instrument)


def decode_file(path: str | Path, instrument: SwingInstrumentType) -> DecodeResult:
    return decode_source(SwingCsvSource(path), instrument)
