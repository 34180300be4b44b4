# cube_challenge/logic/random_source.py
from __future__ import annotations

from typing import Iterable, List, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSourceError(RuntimeError):
    """La fuente de aleatoriedad no pudo entregar un valor válido."""


class RandomSource(Protocol):
    """Puerto mínimo de aleatoriedad que usan los generadores.

    Cualquier `random.Random` lo cumple, así que en producción basta con
    `random.Random()` y en tests se puede inyectar una instancia con semilla
    o un `ScriptedRandomSource`.
    """

    def randint(self, a: int, b: int) -> int:
        """Entero uniforme en el rango cerrado [a, b]."""
        ...


def choice(rng: RandomSource, seq: Sequence[T]) -> T:
    """Elige un elemento de `seq` usando exactamente un `randint`.

    No se usa `random.choice` para que el número y el orden de extracciones
    sea el mismo con cualquier implementación de `RandomSource`.

    Raises:
        ValueError: Si `seq` está vacía.
    """
    if not seq:
        raise ValueError("No se puede elegir de una secuencia vacía.")
    return seq[rng.randint(0, len(seq) - 1)]


class ScriptedRandomSource:
    """Fuente determinista que devuelve valores de una lista fija, en orden.

    Útil para reproducir exactamente un scramble en tests.

    Args:
        values: Valores a devolver en cada llamada a `randint`.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values: List[int] = list(values)
        self.draws: int = 0

    def randint(self, a: int, b: int) -> int:
        if self.draws >= len(self._values):
            raise RandomSourceError(
                f"Secuencia agotada tras {self.draws} extracciones."
            )
        value = self._values[self.draws]
        self.draws += 1
        if not a <= value <= b:
            raise RandomSourceError(
                f"Valor {value} fuera del rango [{a}, {b}] (extracción {self.draws})."
            )
        return value
