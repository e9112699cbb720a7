import logging
import sqlite3
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from swing_analytics.domain.decode import DecodeSummary
from swing_analytics.domain.errors import IngestError
from swing_analytics.domain.goal import PlayerGoal
from swing_analytics.domain.instrument import SwingInstrumentType
from swing_analytics.domain.load_log import LoadLog
from swing_analytics.domain.result import Err, Ok, Result
from swing_analytics.domain.session import Session
from swing_analytics.domain.swing import BallSwingRecord, BatSwingRecord
from swing_analytics.exceptions import MalformedInputError
from swing_analytics.ingest.decoder import decode_source
from swing_analytics.ingest.protocols import LineSource
from swing_analytics.repos.protocols import BallSwingRepo, BatSwingRepo, LoadLogRepo, SessionRepo
from swing_analytics.services.goal_tracker import GoalTracker

logger = logging.getLogger(__name__)

_TARGET_TABLES = {
    SwingInstrumentType.BAT_TRACKER: "bat_swing",
    SwingInstrumentType.BALL_TRACKER: "ball_swing",
}


@dataclass(frozen=True)
class ImportResult:
    session_id: int
    summary: DecodeSummary
    log: LoadLog
    achieved_goals: tuple[PlayerGoal, ...] = ()


class SessionLoader:
    """Decode one vendor export and persist it as a new session."""

    def __init__(
        self,
        source: LineSource,
        session_repo: SessionRepo,
        bat_swing_repo: BatSwingRepo,
        ball_swing_repo: BallSwingRepo,
        load_log_repo: LoadLogRepo,
        *,
        conn: sqlite3.Connection,
        goal_tracker: GoalTracker | None = None,
    ) -> None:
        self._source = source
        self._session_repo = session_repo
        self._bat_swing_repo = bat_swing_repo
        self._ball_swing_repo = ball_swing_repo
        self._load_log_repo = load_log_repo
        self._conn = conn
        self._goal_tracker = goal_tracker

    def load(
        self,
        player_id: int,
        instrument: SwingInstrumentType,
        session_date: str,
        player_level: str | None = None,
    ) -> Result[ImportResult, IngestError]:
        target_table = _TARGET_TABLES[instrument]
        started_at = datetime.now(timezone.utc).isoformat()
        t0 = time.perf_counter()
        logger.info("Importing %s session for player %d from %s", instrument, player_id, self._source.source_detail)

        try:
            decoded = decode_source(self._source, instrument)
        except MalformedInputError as exc:
            logger.error("Decode failed for %s: %s", self._source.source_detail, exc)
            return self._fail(target_table, started_at, str(exc))

        logger.debug("Decoded %s", decoded.summary.to_dict())

        session = Session(
            player_id=player_id,
            session_date=session_date,
            instrument=instrument,
            player_level=player_level,
        )
        achieved: list[PlayerGoal] = []
        try:
            session_id = self._session_repo.insert(session)
            if instrument is SwingInstrumentType.BAT_TRACKER:
                bat_records = [r for r in decoded.records if isinstance(r, BatSwingRecord)]
                self._bat_swing_repo.insert_many(session_id, bat_records)
            else:
                ball_records = [r for r in decoded.records if isinstance(r, BallSwingRecord)]
                self._ball_swing_repo.insert_many(session_id, ball_records)
            if self._goal_tracker is not None:
                achieved = self._goal_tracker.check_session(replace(session, id=session_id), decoded.records)
            self._conn.commit()
        except sqlite3.Error as exc:
            logger.error("Persisting %s session failed: %s", instrument, exc)
            self._conn.rollback()
            return self._fail(target_table, started_at, str(exc))

        log = LoadLog(
            source_type=self._source.source_type,
            source_detail=self._source.source_detail,
            target_table=target_table,
            rows_loaded=decoded.summary.parsed_rows,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc).isoformat(),
            status="success",
        )
        self._load_log_repo.insert(log)
        self._conn.commit()
        logger.info(
            "Loaded %d rows into session %d in %.1fs",
            decoded.summary.parsed_rows,
            session_id,
            time.perf_counter() - t0,
        )
        return Ok(
            ImportResult(
                session_id=session_id,
                summary=decoded.summary,
                log=log,
                achieved_goals=tuple(achieved),
            )
        )

    def _fail(self, target_table: str, started_at: str, message: str) -> Err[IngestError]:
        log = LoadLog(
            source_type=self._source.source_type,
            source_detail=self._source.source_detail,
            target_table=target_table,
            rows_loaded=0,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc).isoformat(),
            status="error",
            error_message=message,
        )
        self._load_log_repo.insert(log)
        self._conn.commit()
        return Err(
            IngestError(
                message=message,
                source_type=self._source.source_type,
                source_detail=self._source.source_detail,
                target_table=target_table,
            )
        )
