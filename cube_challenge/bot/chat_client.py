# cube_challenge/bot/chat_client.py
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Protocol, Set, Tuple

log = logging.getLogger(__name__)


class ChatClientError(RuntimeError):
    """No se pudo completar una operación en la plataforma de chat."""


class BotNotReadyError(ChatClientError):
    """El cliente todavía no está conectado."""


class ChatClient(Protocol):
    """Operaciones mínimas que el ciclo de vida de hilos necesita del chat."""

    def is_ready(self) -> bool: ...

    def send_message(self, guild_id: str, channel_id: str, content: str) -> str:
        """Publica un mensaje en un canal de texto y devuelve su id."""
        ...

    def start_thread(
        self,
        guild_id: str,
        channel_id: str,
        message_id: str,
        name: str,
        auto_archive_minutes: int,
    ) -> str:
        """Abre un hilo a partir de un mensaje y devuelve el id del hilo."""
        ...

    def send_thread_message(self, thread_id: str, content: str) -> str: ...

    def delete_thread(self, guild_id: str, channel_id: str, thread_id: str) -> bool:
        """Borra un hilo. Devuelve False si el hilo ya no existe."""
        ...


@dataclass
class LocalThread:
    """Hilo guardado por `LocalChatClient`."""

    thread_id: str
    guild_id: str
    channel_id: str
    name: str
    auto_archive_minutes: int
    messages: List[str] = field(default_factory=list)


class LocalChatClient:
    """Cliente de chat en memoria.

    Lo usa el dashboard para previsualizar los hilos y también los tests.
    Los canales de texto se registran con `add_channel`; publicar en
    un canal desconocido lanza `ChatClientError`.
    """

    def __init__(self, ready: bool = True) -> None:
        self.ready: bool = ready
        self.channels: Set[Tuple[str, str]] = set()
        self.messages: Dict[str, Tuple[str, str, str]] = {}
        self.threads: Dict[str, LocalThread] = {}
        self._ids = itertools.count(1)

    def add_channel(self, guild_id: str, channel_id: str) -> None:
        self.channels.add((guild_id, channel_id))

    def is_ready(self) -> bool:
        return self.ready

    def _check_channel(self, guild_id: str, channel_id: str) -> None:
        if not self.ready:
            raise BotNotReadyError("El cliente de chat no está listo.")
        if (guild_id, channel_id) not in self.channels:
            raise ChatClientError(f"Channel {channel_id} is not a text channel")

    def send_message(self, guild_id: str, channel_id: str, content: str) -> str:
        self._check_channel(guild_id, channel_id)
        message_id = f"msg-{next(self._ids)}"
        self.messages[message_id] = (guild_id, channel_id, content)
        return message_id

    def start_thread(
        self,
        guild_id: str,
        channel_id: str,
        message_id: str,
        name: str,
        auto_archive_minutes: int,
    ) -> str:
        self._check_channel(guild_id, channel_id)
        if message_id not in self.messages:
            raise ChatClientError(f"Unknown message {message_id}")
        thread_id = f"thread-{next(self._ids)}"
        self.threads[thread_id] = LocalThread(
            thread_id, guild_id, channel_id, name, auto_archive_minutes
        )
        return thread_id

    def send_thread_message(self, thread_id: str, content: str) -> str:
        if not self.ready:
            raise BotNotReadyError("El cliente de chat no está listo.")
        thread = self.threads.get(thread_id)
        if thread is None:
            raise ChatClientError(f"Unknown thread {thread_id}")
        thread.messages.append(content)
        return f"msg-{next(self._ids)}"

    def delete_thread(self, guild_id: str, channel_id: str, thread_id: str) -> bool:
        self._check_channel(guild_id, channel_id)
        if self.threads.pop(thread_id, None) is None:
            log.warning("Thread %s not found on the chat platform", thread_id)
            return False
        return True
