# cube_challenge/core/models.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Dict

from cube_challenge.config import (
    DEFAULT_DELETE_AFTER_HOURS,
    DEFAULT_POST_TIME,
    DEFAULT_TIMEZONE,
)
from cube_challenge.core.puzzle_types import PuzzleType


def as_utc(moment: datetime) -> datetime:
    """Devuelve `moment` con zona; un datetime naive se interpreta como UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass
class BotConfig:
    """Configuración de publicación de un canal."""

    id: int
    channel_id: str
    guild_id: str
    time_to_post: str = DEFAULT_POST_TIME
    timezone: str = DEFAULT_TIMEZONE
    enabled: bool = True
    delete_after_hours: int = DEFAULT_DELETE_AFTER_HOURS

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BotConfig":
        return cls(**data)


@dataclass
class ChallengeThread:
    """Hilo de reto publicado, con su fecha de expiración."""

    id: int
    thread_id: str
    channel_id: str
    guild_id: str
    puzzle: PuzzleType
    scramble: str
    created_at: datetime
    expires_at: datetime
    is_deleted: bool = False

    def is_expired(self, now: datetime) -> bool:
        return not self.is_deleted and self.expires_at < as_utc(now)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["puzzle"] = self.puzzle.value
        data["created_at"] = self.created_at.isoformat()
        data["expires_at"] = self.expires_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChallengeThread":
        data = dict(data)
        data["puzzle"] = PuzzleType.from_tag(data["puzzle"])
        data["created_at"] = as_utc(datetime.fromisoformat(data["created_at"]))
        data["expires_at"] = as_utc(datetime.fromisoformat(data["expires_at"]))
        return cls(**data)
