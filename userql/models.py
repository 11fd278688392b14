"""Domain models for the user query service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict


@dataclass(frozen=True)
class User:
    """Represents a user record owned by the storage collaborator."""

    id: str
    name: str
    email: str
    created_at: datetime

    def to_payload(self) -> Dict[str, str]:
        """Return the wire representation used inside ``data`` envelopes."""

        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "createdAt": self.created_at.isoformat(),
        }


__all__ = ["User"]
