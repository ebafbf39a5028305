"""Identity carried by a verified session."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SessionUser:
    username: str
    name: str

    def as_dict(self) -> dict[str, str]:
        return {"username": self.username, "name": self.name}
