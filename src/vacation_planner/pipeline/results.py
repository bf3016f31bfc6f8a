"""Pipeline step reports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class StepReport:
    name: str
    ok: bool
    message: Optional[str] = None
    payload: Optional[Any] = None
    duration_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "ok": self.ok,
            "message": self.message,
            "payload": self.payload,
            "duration_ms": round(self.duration_ms, 3),
        }
