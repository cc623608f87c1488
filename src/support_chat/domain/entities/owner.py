from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Owner:
    """A user who owns exactly one support thread."""

    id: int
    address: str
