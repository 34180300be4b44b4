# cube_challenge/bot/scheduler.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from cube_challenge.bot.lifecycle import ThreadLifecycle, local_now, resolve_timezone
from cube_challenge.config import DEFAULT_POST_TIME, DEFAULT_TIMEZONE, parse_hhmm
from cube_challenge.core.models import BotConfig, ChallengeThread
from cube_challenge.core.puzzle_types import PuzzleType, day_name, puzzle_for_day
from cube_challenge.core.storage import MemStorage

log = logging.getLogger(__name__)


@dataclass
class TickResult:
    """Resultado de una pasada del scheduler."""

    posted: List[ChallengeThread] = field(default_factory=list)
    retired: int = 0
    errors: int = 0


@dataclass(frozen=True)
class NextChallenge:
    """Reto de hoy, el de mañana y cuánto falta para el cambio de día."""

    day: str
    puzzle: PuzzleType
    tomorrow_puzzle: PuzzleType
    time_until: str


class ChallengeScheduler:
    """Lógica de cada pasada periódica: publicar retos y retirar los vencidos.

    No depende de Qt; el dashboard la ejecuta desde un `ScheduleWorker`.
    """

    def __init__(self, storage: MemStorage, lifecycle: ThreadLifecycle) -> None:
        self.storage = storage
        self.lifecycle = lifecycle

    @staticmethod
    def should_post(config: BotConfig, now: datetime) -> bool:
        """True si en la zona del canal ya pasó la hora de publicación de hoy.

        Una hora inválida se reemplaza por la hora por defecto.
        """
        local = local_now(now, config.timezone)
        try:
            hour, minute = parse_hhmm(config.time_to_post)
        except ValueError:
            log.warning(
                "Invalid time_to_post %r for config %s, using %s",
                config.time_to_post,
                config.id,
                DEFAULT_POST_TIME,
            )
            hour, minute = parse_hhmm(DEFAULT_POST_TIME)
        return (local.hour, local.minute) >= (hour, minute)

    def run_once(self, now: Optional[datetime] = None) -> TickResult:
        """Una pasada completa. Nunca lanza: los errores se registran y se cuentan."""
        now = now or datetime.now(timezone.utc)
        result = TickResult()

        for config in self.storage.get_all_bot_configs():
            if not config.enabled or not self.should_post(config, now):
                continue
            try:
                thread = self.lifecycle.create_daily_thread(config, now)
            except Exception:
                log.exception("Error in scheduled scramble post for config %s", config.id)
                result.errors += 1
                continue
            if thread is not None:
                result.posted.append(thread)

        try:
            result.retired = self.lifecycle.retire_expired_threads(now)
        except Exception:
            log.exception("Error in scheduled thread cleanup")
            result.errors += 1

        log.info(
            "Scheduler tick: %d posted, %d retired, %d errors",
            len(result.posted),
            result.retired,
            result.errors,
        )
        return result

    @staticmethod
    def next_challenge(now: Optional[datetime] = None, tz_name: str = DEFAULT_TIMEZONE) -> NextChallenge:
        """Reto de hoy y de mañana en la zona `tz_name`, y el tiempo hasta medianoche."""
        tz = resolve_timezone(tz_name)
        local = local_now(now or datetime.now(timezone.utc), tz_name)
        today = local.date()
        tomorrow = today + timedelta(days=1)

        midnight = tz.localize(datetime.combine(tomorrow, datetime.min.time()))
        remaining = int((midnight - local).total_seconds())
        hours, rest = divmod(max(remaining, 0), 3600)

        return NextChallenge(
            day=day_name(today),
            puzzle=puzzle_for_day(today),
            tomorrow_puzzle=puzzle_for_day(tomorrow),
            time_until=f"{hours}h {rest // 60}m",
        )
