# cube_challenge/core/puzzle_types.py
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Dict, List, Union


class UnknownPuzzleType(ValueError):
    """Se lanza cuando un tag de puzzle no pertenece a `PuzzleType`."""


class PuzzleType(str, Enum):
    """Tipos de puzzle soportados por el reto diario.

    El valor de cada miembro es el tag tal como se muestra en el canal
    (por ejemplo "3x3 BLD"), por eso hereda de `str`.
    """

    SKEWB = "Skewb"
    THREE_BLD = "3x3 BLD"
    TWO = "2x2"
    THREE = "3x3"
    PYRAMINX = "Pyraminx"
    THREE_OH = "3x3 OH"
    CLOCK = "Clock"

    @classmethod
    def from_tag(cls, tag: Union[str, "PuzzleType"]) -> "PuzzleType":
        """Convierte un tag de texto en un `PuzzleType`.

        Args:
            tag: Tag del puzzle (ej: "Pyraminx") o un miembro de la enumeración.

        Returns:
            El miembro correspondiente.

        Raises:
            UnknownPuzzleType: Si el tag no corresponde a ningún puzzle conocido.
        """
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except ValueError:
            raise UnknownPuzzleType(f"Tipo de puzzle desconocido: {tag!r}") from None

    def __str__(self) -> str:
        return self.value


class Modifier(str, Enum):
    """Sufijo de un movimiento: ninguno, inverso (') o doble (2)."""

    NONE = ""
    INVERSE = "'"
    DOUBLE = "2"


# Lunes = 0 ... Domingo = 6 (igual que `date.weekday()`)
DAY_NAMES: List[str] = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

DAY_SCHEDULE: Dict[int, PuzzleType] = {
    0: PuzzleType.SKEWB,
    1: PuzzleType.THREE_BLD,
    2: PuzzleType.TWO,
    3: PuzzleType.THREE,
    4: PuzzleType.PYRAMINX,
    5: PuzzleType.THREE_OH,
    6: PuzzleType.CLOCK,
}


def puzzle_for_day(day: date) -> PuzzleType:
    """Devuelve el puzzle programado para el día de la semana de `day`."""
    return DAY_SCHEDULE[day.weekday()]


def day_name(day: date) -> str:
    """Nombre del día en inglés (ej: "Monday"), como aparece en los títulos."""
    return DAY_NAMES[day.weekday()]
