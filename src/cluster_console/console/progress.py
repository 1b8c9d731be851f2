"""Rolling progress text for service start/stop requests."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TextIO


ROLL_COUNT = 4


class ServiceProgress:
    """Produces ``STOPPING..`` style frames until the target state is reached.

    Once ``done`` reports True the final word is returned exactly once,
    after which every frame is empty.
    """

    def __init__(self, active_word: str, final_word: str, done: Callable[[], bool]) -> None:
        self._active_word = active_word
        self._final_word = final_word
        self._done = done
        self._counter = 1
        self._finished = False

    @classmethod
    def stopping(cls, done: Callable[[], bool]) -> ServiceProgress:
        return cls("STOPPING", "STOPPED", done)

    @classmethod
    def starting(cls, done: Callable[[], bool]) -> ServiceProgress:
        return cls("STARTING", "STARTED", done)

    @property
    def finished(self) -> bool:
        return self._finished

    def get_text(self) -> str:
        dot_count = self._counter % ROLL_COUNT
        self._counter = self._counter + 1 if self._counter + 1 < ROLL_COUNT else 1
        if not self._done():
            return self._active_word + "." * dot_count
        if not self._finished:
            self._finished = True
            return self._final_word
        return ""


def show_progress(
    progress: ServiceProgress,
    stream: TextIO,
    interval: float = 1.0,
    max_frames: int | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Write frames on one line until the final word has been shown."""
    frames = 0
    while not progress.finished:
        if max_frames is not None and frames >= max_frames:
            break
        text = progress.get_text()
        stream.write(f"\r{text:<12}")
        stream.flush()
        frames += 1
        if not progress.finished:
            sleep(interval)
    stream.write("\n")
    stream.flush()
