from __future__ import annotations

from typing import List, Tuple


class ProcessLogger:
    """Keeps the trail of widget actions, e.g. ``> [submit] refused: phone``."""

    def __init__(self) -> None:
        self._records: List[Tuple[str, str]] = []

    def log(self, channel: str, message: str) -> None:
        self._records.append((channel, message))

    def for_channel(self, channel: str) -> List[str]:
        return [message for name, message in self._records if name == channel]

    @property
    def entries(self) -> List[str]:
        return [f"> [{channel}] {message}" for channel, message in self._records]
