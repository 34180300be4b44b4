# cube_challenge/core/storage.py
from __future__ import annotations

import json
import logging
import os
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, List, Optional

from cube_challenge.core.models import BotConfig, ChallengeThread, as_utc
from cube_challenge.core.puzzle_types import PuzzleType

log = logging.getLogger(__name__)


class MemStorage:
    """Almacenamiento en memoria de configuraciones y hilos.

    Si se indica `path`, cada modificación reescribe un snapshot JSON y al
    construir se carga el snapshot existente (si lo hay). Un snapshot dañado
    se registra en el log y se ignora.

    Args:
        path: Ruta del archivo JSON, o None para no persistir.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self.path: Optional[str] = path
        self._configs: Dict[int, BotConfig] = {}
        self._threads: Dict[int, ChallengeThread] = {}
        self._next_config_id: int = 1
        self._next_thread_id: int = 1
        self._load()

    # -------------------
    # Persistencia
    # -------------------
    def _load(self) -> None:
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
            if not isinstance(data, dict):
                raise ValueError(f"se esperaba un objeto JSON, no {type(data).__name__}")
            configs = [BotConfig.from_dict(c) for c in data.get("bot_configs", [])]
            threads = [ChallengeThread.from_dict(t) for t in data.get("challenge_threads", [])]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            log.error("Could not load storage snapshot %s: %s", self.path, exc)
            return

        self._configs = {c.id: c for c in configs}
        self._threads = {t.id: t for t in threads}
        self._next_config_id = data.get("next_config_id", max(self._configs, default=0) + 1)
        self._next_thread_id = data.get("next_thread_id", max(self._threads, default=0) + 1)
        log.info(
            "Loaded %d configs and %d threads from %s",
            len(self._configs),
            len(self._threads),
            self.path,
        )

    def _save(self) -> None:
        if not self.path:
            return
        data: Dict[str, Any] = {
            "bot_configs": [c.to_dict() for c in self._configs.values()],
            "challenge_threads": [t.to_dict() for t in self._threads.values()],
            "next_config_id": self._next_config_id,
            "next_thread_id": self._next_thread_id,
        }
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2)
        os.replace(tmp, self.path)
        log.debug("Storage snapshot saved to %s", self.path)

    # -------------------
    # Configuraciones
    # -------------------
    def get_bot_config(self, config_id: int) -> Optional[BotConfig]:
        return self._configs.get(config_id)

    def get_bot_config_by_guild_id(self, guild_id: str) -> Optional[BotConfig]:
        return next((c for c in self._configs.values() if c.guild_id == guild_id), None)

    def get_all_bot_configs(self) -> List[BotConfig]:
        return list(self._configs.values())

    def create_bot_config(self, channel_id: str, guild_id: str, **fields: Any) -> BotConfig:
        """Crea una configuración; los campos omitidos usan sus valores por defecto."""
        config = BotConfig(id=self._next_config_id, channel_id=channel_id, guild_id=guild_id, **fields)
        self._next_config_id += 1
        self._configs[config.id] = config
        self._save()
        return config

    def update_bot_config(self, config_id: int, **fields: Any) -> Optional[BotConfig]:
        """Actualiza campos de una configuración existente.

        Returns:
            La configuración actualizada, o None si no existe.
        """
        existing = self._configs.get(config_id)
        if existing is None:
            return None
        fields.pop("id", None)
        updated = replace(existing, **fields)
        self._configs[config_id] = updated
        self._save()
        return updated

    def delete_bot_config(self, config_id: int) -> bool:
        removed = self._configs.pop(config_id, None) is not None
        if removed:
            self._save()
        return removed

    # -------------------
    # Hilos
    # -------------------
    def get_challenge_thread(self, thread_pk: int) -> Optional[ChallengeThread]:
        return self._threads.get(thread_pk)

    def get_challenge_thread_by_thread_id(self, thread_id: str) -> Optional[ChallengeThread]:
        return next((t for t in self._threads.values() if t.thread_id == thread_id), None)

    def get_all_challenge_threads(self) -> List[ChallengeThread]:
        return list(self._threads.values())

    def get_expired_threads(self, now: datetime) -> List[ChallengeThread]:
        """Hilos no borrados cuya expiración ya pasó respecto de `now`."""
        now = as_utc(now)
        return [t for t in self._threads.values() if t.is_expired(now)]

    def create_challenge_thread(
        self,
        thread_id: str,
        channel_id: str,
        guild_id: str,
        puzzle: PuzzleType,
        scramble: str,
        created_at: datetime,
        expires_at: datetime,
    ) -> ChallengeThread:
        thread = ChallengeThread(
            id=self._next_thread_id,
            thread_id=thread_id,
            channel_id=channel_id,
            guild_id=guild_id,
            puzzle=puzzle,
            scramble=scramble,
            created_at=as_utc(created_at),
            expires_at=as_utc(expires_at),
        )
        self._next_thread_id += 1
        self._threads[thread.id] = thread
        self._save()
        return thread

    def mark_thread_as_deleted(self, thread_pk: int) -> bool:
        thread = self._threads.get(thread_pk)
        if thread is None:
            return False
        thread.is_deleted = True
        self._save()
        return True
