from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


EventType = Literal[
    "pointer_down",
    "pointer_move",
    "pointer_up",
    "pointer_cancel",
    "wheel",
]


@dataclass(frozen=True)
class InputEvent:
    """Raw platform pointer event in canvas-local pixel coordinates."""

    event_type: EventType
    timestamp: float
    x: float
    y: float
    pointer_id: int = 0
    delta_x: Optional[float] = None
    delta_y: Optional[float] = None

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)
