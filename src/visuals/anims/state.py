"""State containers used by the race animation.

``PlaybackState`` tracks where the driver is in its lifecycle; ``JoinState``
tracks which artist is bound to which category so the renderers can tell
entering, updating and exiting bars apart between frames.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from src.visuals.anims.keyframes import RankedEntry

A = TypeVar("A")


class PlaybackState(str, Enum):
    IDLE = "idle"
    AWAITING_START = "awaiting_start"
    PLAYING = "playing"
    DONE = "done"
    CANCELLED = "cancelled"


class JoinState(Generic[A]):
    """Holds the artists currently bound to categories and their last datum."""

    def __init__(self) -> None:
        self.artists: dict[str, A] = {}
        self.data: dict[str, RankedEntry] = {}
        self.exiting: list[A] = []

    def bind(self, artist: A, entry: RankedEntry) -> None:
        self.artists[entry.category] = artist
        self.data[entry.category] = entry

    def release(self, category: str) -> tuple[A, RankedEntry]:
        """Unbind ``category`` and return its artist and last datum."""
        artist = self.artists.pop(category)
        datum = self.data.pop(category)
        self.exiting.append(artist)
        return artist, datum

    def stale(self, visible: set[str]) -> list[str]:
        return [c for c in self.artists if c not in visible]
