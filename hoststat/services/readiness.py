from __future__ import annotations

import enum
from dataclasses import dataclass


class ReadinessState(enum.Enum):
    NOT_READY = "not_ready"
    READY = "ready"


@dataclass
class Readiness:
    state: ReadinessState = ReadinessState.NOT_READY

    @property
    def is_ready(self) -> bool:
        return self.state is ReadinessState.READY

    def mark_ready(self) -> None:
        if self.state is ReadinessState.READY:
            raise RuntimeError("readiness already set")
        self.state = ReadinessState.READY
