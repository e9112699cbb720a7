from typing import Any


class ErrorLineSource:
    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    @property
    def source_type(self) -> str:
        return "test"

    @property
    def source_detail(self) -> str:
        return "broken"

    def fetch(self, **params: Any) -> list[list[str]]:
        raise self._exc
