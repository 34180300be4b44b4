# cube_challenge/config.py
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional

import pytz

DEFAULT_TIMEZONE = "Asia/Kolkata"
DEFAULT_POST_TIME = "16:00"
DEFAULT_DELETE_AFTER_HOURS = 24

_HHMM_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"", "0", "false", "no", "off"}


def parse_hhmm(value: str) -> tuple:
    """Convierte "HH:MM" en (hora, minuto).

    Raises:
        ValueError: Si el formato no es válido.
    """
    m = _HHMM_RE.match(value.strip())
    if not m:
        raise ValueError(f"Hora inválida (se espera HH:MM): {value!r}")
    return int(m.group(1)), int(m.group(2))


@dataclass(frozen=True)
class Settings:
    """Configuración de la aplicación, leída de variables de entorno.

    Attributes:
        storage_path: Archivo JSON de persistencia; None desactiva el guardado.
        timezone: Zona horaria por defecto de los canales nuevos.
        post_time: Hora de publicación por defecto (HH:MM).
        delete_after_hours: Horas que vive un hilo antes de borrarse.
        check_interval_minutes: Cada cuánto corre el scheduler.
        log_level: Nivel de logging ("INFO", "DEBUG", ...).
        strict_types: Si True, un tipo de puzzle desconocido es un error.
    """

    storage_path: Optional[str] = "data-storage.json"
    timezone: str = DEFAULT_TIMEZONE
    post_time: str = DEFAULT_POST_TIME
    delete_after_hours: int = DEFAULT_DELETE_AFTER_HOURS
    check_interval_minutes: int = 60
    log_level: str = "INFO"
    strict_types: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Construye la configuración desde `env` (por defecto `os.environ`).

        Raises:
            ValueError: Si alguna variable tiene un valor inválido; el mensaje
                incluye el nombre de la variable.
        """
        env = os.environ if env is None else env

        storage = env.get("CUBE_CHALLENGE_STORAGE", cls.storage_path)
        tz = env.get("CUBE_CHALLENGE_TIMEZONE", DEFAULT_TIMEZONE)
        try:
            pytz.timezone(tz)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"CUBE_CHALLENGE_TIMEZONE: zona horaria desconocida {tz!r}") from None

        post_time = env.get("CUBE_CHALLENGE_POST_TIME", DEFAULT_POST_TIME)
        try:
            parse_hhmm(post_time)
        except ValueError as exc:
            raise ValueError(f"CUBE_CHALLENGE_POST_TIME: {exc}") from None

        level = env.get("CUBE_CHALLENGE_LOG_LEVEL", "INFO").upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"CUBE_CHALLENGE_LOG_LEVEL: nivel inválido {level!r}")

        strict_raw = env.get("CUBE_CHALLENGE_STRICT_TYPES", "").strip().lower()
        if strict_raw not in _TRUE | _FALSE:
            raise ValueError(f"CUBE_CHALLENGE_STRICT_TYPES: valor inválido {strict_raw!r}")

        return cls(
            storage_path=storage or None,
            timezone=tz,
            post_time=post_time.strip(),
            delete_after_hours=_positive_int(
                env, "CUBE_CHALLENGE_DELETE_AFTER_HOURS", DEFAULT_DELETE_AFTER_HOURS
            ),
            check_interval_minutes=_positive_int(
                env, "CUBE_CHALLENGE_CHECK_INTERVAL_MINUTES", 60
            ),
            log_level=level,
            strict_types=strict_raw in _TRUE,
        )


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name}: se espera un entero, no {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name}: debe ser mayor que 0.")
    return value
