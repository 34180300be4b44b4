# cube_challenge/logic/challenge.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from cube_challenge.core.puzzle_types import PuzzleType, day_name, puzzle_for_day
from cube_challenge.logic.random_source import RandomSource
from cube_challenge.logic.scramble import generate_scramble, resolve_puzzle

FENCE = "```"


@dataclass(frozen=True)
class DailyChallenge:
    """Reto publicado en un hilo: día, puzzle y scramble.

    Attributes:
        day: Nombre del día (ej: "Monday").
        puzzle: Puzzle del reto.
        scramble: Scramble en una sola línea.
        manual: True si el reto se creó a mano desde el dashboard.
    """

    day: str
    puzzle: PuzzleType
    scramble: str
    manual: bool = False

    @property
    def title(self) -> str:
        """Nombre del hilo, por ejemplo "Friday Pyraminx Challenge"."""
        suffix = " (Manual)" if self.manual else ""
        return f"{self.day} {self.puzzle.value} Challenge{suffix}"

    @property
    def content(self) -> str:
        """Mensaje del hilo con el scramble dentro de un bloque de código."""
        day_line = f"{self.day} (Manual Challenge)" if self.manual else self.day
        intro = "a" if self.manual else "today's"
        return (
            f"# {self.puzzle.value} Scramble Challenge\n"
            f"**Day**: {day_line}\n"
            "\n"
            f"Here's {intro} {self.puzzle.value} scramble. Post your times below!\n"
            "\n"
            f"{FENCE}\n"
            f"{self.scramble}\n"
            f"{FENCE}\n"
            "\n"
            "Remember to use a timer and follow standard WCA regulations. Good luck!"
        )

    @property
    def announcement(self) -> str:
        """Mensaje corto en el canal, desde el que se abre el hilo."""
        if self.manual:
            return f"New manual challenge for {self.puzzle.value} is now available!"
        return "New daily challenge is now available!"


def daily_challenge(day: date, rng: Optional[RandomSource] = None) -> DailyChallenge:
    """Reto del día según el calendario semanal."""
    puzzle = puzzle_for_day(day)
    return DailyChallenge(day_name(day), puzzle, generate_scramble(puzzle, rng=rng))


def manual_challenge(
    puzzle: Union[PuzzleType, str],
    day: date,
    rng: Optional[RandomSource] = None,
    strict: bool = False,
) -> DailyChallenge:
    """Reto manual para un puzzle explícito (no el del calendario).

    Un tag desconocido usa el 3x3, salvo que `strict` sea True.
    """
    kind = resolve_puzzle(puzzle, strict)
    return DailyChallenge(day_name(day), kind, generate_scramble(kind, rng=rng), manual=True)


def extract_scramble(content: str) -> str:
    """Extrae el scramble del primer bloque de código de un mensaje.

    Raises:
        ValueError: Si el mensaje no tiene un bloque de código cerrado.
    """
    parts = content.split(FENCE)
    if len(parts) < 3:
        raise ValueError("El mensaje no contiene un bloque de código.")
    return parts[1].strip()
