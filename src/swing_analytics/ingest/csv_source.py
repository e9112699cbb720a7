import csv
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class SwingCsvSource:
    """Reads a vendor export as raw positional rows; header text is never interpreted."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def source_type(self) -> str:
        return "csv"

    @property
    def source_detail(self) -> str:
        return str(self._path)

    def fetch(self, **params: Any) -> list[list[str]]:
        logger.debug("Reading CSV %s", self._path)
        # utf-8-sig drops the BOM some device exports prepend
        encoding = params.pop("encoding", "utf-8-sig")
        delimiter = params.pop("sep", params.pop("delimiter", ","))
        with open(self._path, encoding=encoding, newline="") as f:
            reader = csv.reader(f, delimiter=delimiter, skipinitialspace=True)
            rows = [list(row) for row in reader]
        logger.debug("Read %d lines from %s", len(rows), self._path)
        return rows


class TextSource:
    """In-memory export, e.g. an uploaded file body."""

    def __init__(self, text: str, detail: str = "<memory>") -> None:
        self._text = text
        self._detail = detail

    @property
    def source_type(self) -> str:
        return "text"

    @property
    def source_detail(self) -> str:
        return self._detail

    def fetch(self, **params: Any) -> list[list[str]]:
        delimiter = params.pop("sep", params.pop("delimiter", ","))
        text = self._text.removeprefix("\ufeff")
        return [list(row) for row in csv.reader(text.splitlines(), delimiter=delimiter, skipinitialspace=True)]
