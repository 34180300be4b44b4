# cube_challenge/bot/lifecycle.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional, Union

import pytz

from cube_challenge.bot.chat_client import BotNotReadyError, ChatClient, ChatClientError
from cube_challenge.config import DEFAULT_DELETE_AFTER_HOURS, DEFAULT_TIMEZONE
from cube_challenge.core.models import BotConfig, ChallengeThread, as_utc
from cube_challenge.core.puzzle_types import PuzzleType
from cube_challenge.core.storage import MemStorage
from cube_challenge.logic.challenge import (
    DailyChallenge,
    daily_challenge,
    extract_scramble,
    manual_challenge,
)
from cube_challenge.logic.random_source import RandomSource

log = logging.getLogger(__name__)

AUTO_ARCHIVE_MINUTES = 1440


def resolve_timezone(tz_name: str) -> pytz.BaseTzInfo:
    """Zona horaria `tz_name`; si no existe se usa la zona por defecto."""
    try:
        return pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        log.warning("Unknown timezone %r, using %s", tz_name, DEFAULT_TIMEZONE)
        return pytz.timezone(DEFAULT_TIMEZONE)


def local_now(now: datetime, tz_name: str) -> datetime:
    """Convierte `now` (UTC si es naive) a la zona `tz_name`."""
    return as_utc(now).astimezone(resolve_timezone(tz_name))


class ThreadLifecycle:
    """Crea los hilos de reto y los retira cuando expiran.

    Args:
        storage: Donde se registran los hilos publicados.
        client: Cliente de la plataforma de chat.
        rng: Fuente de aleatoriedad opcional para los scrambles.
        strict: Si True, un tipo de puzzle desconocido en los retos manuales
            lanza `UnknownPuzzleType` en vez de usar el 3x3.
    """

    def __init__(
        self,
        storage: MemStorage,
        client: ChatClient,
        rng: Optional[RandomSource] = None,
        strict: bool = False,
    ) -> None:
        self.storage = storage
        self.client = client
        self.rng = rng
        self.strict = strict

    def _ensure_ready(self) -> None:
        if not self.client.is_ready():
            raise BotNotReadyError("El cliente de chat no está listo.")

    def has_thread_for(self, config: BotConfig, puzzle: PuzzleType, now: datetime) -> bool:
        """True si ya existe un hilo activo de `puzzle` en la fecha local de hoy."""
        today = local_now(now, config.timezone).date()
        return any(
            t.guild_id == config.guild_id
            and t.puzzle is puzzle
            and not t.is_deleted
            and local_now(t.created_at, config.timezone).date() == today
            for t in self.storage.get_all_challenge_threads()
        )

    def _publish(
        self,
        guild_id: str,
        channel_id: str,
        challenge: DailyChallenge,
        now: datetime,
        delete_after_hours: int,
    ) -> ChallengeThread:
        now = as_utc(now)
        message_id = self.client.send_message(guild_id, channel_id, challenge.announcement)
        thread_id = self.client.start_thread(
            guild_id, channel_id, message_id, challenge.title, AUTO_ARCHIVE_MINUTES
        )
        content = challenge.content
        self.client.send_thread_message(thread_id, content)

        thread = self.storage.create_challenge_thread(
            thread_id=thread_id,
            channel_id=channel_id,
            guild_id=guild_id,
            puzzle=challenge.puzzle,
            scramble=extract_scramble(content),
            created_at=now,
            expires_at=now + timedelta(hours=delete_after_hours),
        )
        log.info("Created scramble thread: %s", challenge.title)
        return thread

    def create_daily_thread(self, config: BotConfig, now: datetime) -> Optional[ChallengeThread]:
        """Publica el reto del día para `config`.

        Returns:
            El hilo creado, o None si hoy ya existía uno para este puzzle.

        Raises:
            BotNotReadyError: Si el cliente no está listo.
            ChatClientError: Si el canal no es accesible.
        """
        self._ensure_ready()
        today = local_now(now, config.timezone).date()
        challenge = daily_challenge(today, rng=self.rng)

        if self.has_thread_for(config, challenge.puzzle, now):
            log.info(
                "Thread for %s already exists for today (%s), skipping creation",
                challenge.puzzle.value,
                today.isoformat(),
            )
            return None

        return self._publish(
            config.guild_id, config.channel_id, challenge, now, config.delete_after_hours
        )

    def create_manual_thread(
        self,
        guild_id: str,
        channel_id: str,
        puzzle: Union[PuzzleType, str],
        now: datetime,
    ) -> ChallengeThread:
        """Publica un reto manual para un puzzle explícito.

        La expiración se toma de la configuración del servidor (24 h si no hay).
        """
        self._ensure_ready()
        config = self.storage.get_bot_config_by_guild_id(guild_id)
        tz_name = config.timezone if config else DEFAULT_TIMEZONE
        hours = config.delete_after_hours if config else DEFAULT_DELETE_AFTER_HOURS

        challenge = manual_challenge(
            puzzle, local_now(now, tz_name).date(), rng=self.rng, strict=self.strict
        )
        return self._publish(guild_id, channel_id, challenge, now, hours)

    def retire_expired_threads(self, now: datetime) -> int:
        """Borra en el chat los hilos expirados y los marca como borrados.

        Un hilo que ya no existe en la plataforma se marca igual.

        Returns:
            Cantidad de hilos retirados.
        """
        self._ensure_ready()
        retired = 0
        for thread in self.storage.get_expired_threads(now):
            try:
                deleted = self.client.delete_thread(
                    thread.guild_id, thread.channel_id, thread.thread_id
                )
            except BotNotReadyError:
                raise
            except ChatClientError as exc:
                log.warning("Thread %s could not be deleted: %s", thread.thread_id, exc)
                deleted = False
            if deleted:
                log.info("Deleted expired thread: %s", thread.thread_id)
            self.storage.mark_thread_as_deleted(thread.id)
            retired += 1
        return retired
