# cube_challenge/logic/scramble.py
from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from cube_challenge.core.puzzle_types import Modifier, PuzzleType, UnknownPuzzleType
from cube_challenge.logic.random_source import RandomSource, choice

log = logging.getLogger(__name__)

# --- Cubos de 6 caras ---
FACES: List[str] = ["U", "D", "L", "R", "F", "B"]
# Cada eje agrupa dos caras opuestas
AXES: List[Tuple[str, str]] = [("U", "D"), ("L", "R"), ("F", "B")]
CUBE_MODIFIERS: List[Modifier] = [Modifier.NONE, Modifier.INVERSE, Modifier.DOUBLE]
CUBE_LENGTH: int = 20

TWO_FACES: List[str] = ["R", "U", "F"]
TWO_LENGTH: int = 11

# --- Pyraminx ---
PYRAMINX_FACES: List[str] = ["R", "L", "U", "B"]
PYRAMINX_TIPS: List[str] = ["r", "l", "u", "b"]
PYRAMINX_MODIFIERS: List[Modifier] = [Modifier.NONE, Modifier.INVERSE]
PYRAMINX_LENGTH: Tuple[int, int] = (8, 10)
MAX_PYRAMINX_TIPS: int = 4

# --- Skewb ---
SKEWB_CORNERS: List[str] = ["R", "L", "U", "B"]
SKEWB_MODIFIERS: List[Modifier] = [Modifier.NONE, Modifier.INVERSE]
SKEWB_LENGTH: int = 9

# --- Clock ---
CLOCK_PINS: List[str] = ["UR", "DR", "DL", "UL"]
CLOCK_PIN_STATES: List[str] = ["u", "d"]
CLOCK_POSITIONS: List[str] = ["UR", "DR", "DL", "UL", "ALL"]
CLOCK_OFFSETS: Tuple[int, int] = (-5, 6)
CLOCK_REORIENT: str = "y2"

_AXIS_OF: Dict[str, int] = {f: i for i, pair in enumerate(AXES) for f in pair}

Generator = Callable[[RandomSource], str]


def _pick_sequence(
    rng: RandomSource,
    alphabet: Sequence[str],
    modifiers: Sequence[Modifier],
    length: int,
    use_axes: bool = False,
    lookback: bool = False,
) -> List[str]:
    """Bucle secuencial común a todos los puzzles de caras/esquinas.

    En cada posición se filtran las caras candidatas y luego se extrae una
    cara y un modificador (en ese orden, una extracción cada uno).

    Args:
        rng: Fuente de aleatoriedad.
        alphabet: Caras o esquinas permitidas.
        modifiers: Sufijos permitidos.
        length: Cantidad de movimientos a generar.
        use_axes: Si True, la cara nueva no puede compartir eje con la anterior.
            Si False, solo tiene que ser distinta de la anterior.
        lookback: Si True, también se excluye la cara de hace dos posiciones
            (evita patrones de ida y vuelta como "R U R").

    Returns:
        Lista de tokens renderizados (ej: ["R", "U'", "F2"]).
    """
    seq: List[str] = []
    last: Optional[str] = None
    second_last: Optional[str] = None

    for _ in range(length):
        candidates = list(alphabet)
        if last is not None:
            if use_axes:
                candidates = [f for f in candidates if _AXIS_OF[f] != _AXIS_OF[last]]
            else:
                candidates = [f for f in candidates if f != last]
        if lookback and second_last is not None:
            candidates = [f for f in candidates if f != second_last]

        # Siempre debe quedar algo para avanzar
        if not candidates:
            candidates = [f for f in alphabet if f != last]

        face = choice(rng, candidates)
        modifier = choice(rng, modifiers)
        seq.append(face + modifier.value)

        second_last, last = last, face

    return seq


def generate_3x3_scramble(rng: RandomSource) -> str:
    """Scramble de 3x3: 20 movimientos sin repetir eje y sin volver a la cara de hace dos."""
    return " ".join(
        _pick_sequence(rng, FACES, CUBE_MODIFIERS, CUBE_LENGTH, use_axes=True, lookback=True)
    )


def generate_3x3_bld_scramble(rng: RandomSource) -> str:
    """El blindfolded usa la misma gramática y longitud que el 3x3."""
    return generate_3x3_scramble(rng)


def generate_3x3_oh_scramble(rng: RandomSource) -> str:
    """El one-handed usa la misma gramática y longitud que el 3x3."""
    return generate_3x3_scramble(rng)


def generate_2x2_scramble(rng: RandomSource) -> str:
    """Scramble de 2x2: 11 movimientos sobre R, U, F.

    Con solo tres caras no hay pares opuestos, así que la regla de eje se
    reduce a no repetir la cara anterior.
    """
    return " ".join(_pick_sequence(rng, TWO_FACES, CUBE_MODIFIERS, TWO_LENGTH))


def generate_pyraminx_scramble(rng: RandomSource) -> str:
    """Scramble de Pyraminx.

    Primero se sortea la longitud (8 a 10), luego los movimientos principales
    y al final entre 0 y `MAX_PYRAMINX_TIPS` puntas (r, l, u, b), cada una a lo
    sumo una vez y con modificador "" o "'".
    """
    length = rng.randint(*PYRAMINX_LENGTH)
    seq = _pick_sequence(rng, PYRAMINX_FACES, PYRAMINX_MODIFIERS, length)

    remaining = list(PYRAMINX_TIPS)
    for _ in range(rng.randint(0, MAX_PYRAMINX_TIPS)):
        tip = choice(rng, remaining)
        remaining.remove(tip)
        seq.append(tip + choice(rng, PYRAMINX_MODIFIERS).value)

    return " ".join(seq)


def generate_skewb_scramble(rng: RandomSource) -> str:
    """Scramble de Skewb: 9 giros de esquina, sin repetir la esquina anterior."""
    return " ".join(_pick_sequence(rng, SKEWB_CORNERS, SKEWB_MODIFIERS, SKEWB_LENGTH))


def _clock_offsets(rng: RandomSource) -> List[str]:
    return [f"{pos}{rng.randint(*CLOCK_OFFSETS):+d}" for pos in CLOCK_POSITIONS]


def generate_clock_scramble(rng: RandomSource) -> str:
    """Scramble de Clock.

    Formato: "(UR,DR,DL,UL)" con cada pin en u/d, cinco giros posicionales
    con desplazamiento de -5 a +6 horas, "y2" y otros cinco giros.

    Ejemplo:
        "(u,d,d,u) UR+3 DR-1 DL+0 UL+6 ALL-5 y2 UR+2 DR+4 DL-3 UL+1 ALL+0"
    """
    pins = [choice(rng, CLOCK_PIN_STATES) for _ in CLOCK_PINS]
    seq: List[str] = ["(" + ",".join(pins) + ")"]
    seq.extend(_clock_offsets(rng))
    seq.append(CLOCK_REORIENT)
    seq.extend(_clock_offsets(rng))
    return " ".join(seq)


GENERATORS: Dict[PuzzleType, Generator] = {
    PuzzleType.THREE: generate_3x3_scramble,
    PuzzleType.THREE_BLD: generate_3x3_bld_scramble,
    PuzzleType.THREE_OH: generate_3x3_oh_scramble,
    PuzzleType.TWO: generate_2x2_scramble,
    PuzzleType.PYRAMINX: generate_pyraminx_scramble,
    PuzzleType.SKEWB: generate_skewb_scramble,
    PuzzleType.CLOCK: generate_clock_scramble,
}

DEFAULT_PUZZLE: PuzzleType = PuzzleType.THREE


def scramble_length(puzzle: PuzzleType) -> Tuple[int, int]:
    """Rango (min, max) de movimientos principales para cada puzzle.

    No cuenta el prefijo de pines del Clock ni las puntas del Pyraminx.
    Para el Clock cuenta los 11 tokens (5 + "y2" + 5).
    """
    if puzzle in (PuzzleType.THREE, PuzzleType.THREE_BLD, PuzzleType.THREE_OH):
        return CUBE_LENGTH, CUBE_LENGTH
    if puzzle is PuzzleType.TWO:
        return TWO_LENGTH, TWO_LENGTH
    if puzzle is PuzzleType.PYRAMINX:
        return PYRAMINX_LENGTH
    if puzzle is PuzzleType.SKEWB:
        return SKEWB_LENGTH, SKEWB_LENGTH
    n = 2 * len(CLOCK_POSITIONS) + 1
    return n, n


def resolve_puzzle(puzzle: Union[PuzzleType, str], strict: bool = False) -> PuzzleType:
    """Resuelve un tag a `PuzzleType`; los desconocidos caen en el 3x3.

    Raises:
        UnknownPuzzleType: Si `strict` es True y el tag no es válido.
    """
    try:
        return PuzzleType.from_tag(puzzle)
    except UnknownPuzzleType:
        if strict:
            raise
        log.warning("Unknown puzzle type %r, falling back to %s", puzzle, DEFAULT_PUZZLE.value)
        return DEFAULT_PUZZLE


def generate_scramble(
    puzzle: Union[PuzzleType, str],
    rng: Optional[RandomSource] = None,
    seed: Optional[int] = None,
    strict: bool = False,
) -> str:
    """Genera un scramble para el tipo de puzzle indicado.

    Args:
        puzzle: Miembro de `PuzzleType` o su tag de texto (ej: "Pyraminx").
        rng: Fuente de aleatoriedad opcional. Si es None se crea un
            `random.Random(seed)`.
        seed: Semilla opcional, solo se usa si no se pasa `rng`.
        strict: Si True, un tag desconocido lanza `UnknownPuzzleType`. Si False
            (por defecto) se usa el generador de 3x3 y se registra un warning.

    Returns:
        Movimientos separados por espacios, en una sola línea.

    Raises:
        UnknownPuzzleType: Si `strict` es True y el tag no es válido.
        RandomSourceError: Si la fuente inyectada no puede entregar valores.
    """
    kind = resolve_puzzle(puzzle, strict)

    if rng is None:
        rng = random.Random(seed)

    return GENERATORS[kind](rng)
