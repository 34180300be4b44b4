# cube_challenge/logic/moves.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

from cube_challenge.core.puzzle_types import Modifier, PuzzleType
from cube_challenge.logic import scramble as gen


@dataclass(frozen=True)
class Grammar:
    """Alfabeto y sufijos válidos de un puzzle."""

    faces: FrozenSet[str]
    modifiers: FrozenSet[Modifier]
    tips: FrozenSet[str] = frozenset()


_CUBE = Grammar(frozenset(gen.FACES), frozenset(gen.CUBE_MODIFIERS))

GRAMMARS: Dict[PuzzleType, Grammar] = {
    PuzzleType.THREE: _CUBE,
    PuzzleType.THREE_BLD: _CUBE,
    PuzzleType.THREE_OH: _CUBE,
    PuzzleType.TWO: Grammar(frozenset(gen.TWO_FACES), frozenset(gen.CUBE_MODIFIERS)),
    PuzzleType.PYRAMINX: Grammar(
        frozenset(gen.PYRAMINX_FACES),
        frozenset(gen.PYRAMINX_MODIFIERS),
        frozenset(gen.PYRAMINX_TIPS),
    ),
    PuzzleType.SKEWB: Grammar(frozenset(gen.SKEWB_CORNERS), frozenset(gen.SKEWB_MODIFIERS)),
}

_CLOCK_MOVE_RE = re.compile(r"^(UR|DR|DL|UL|ALL)([+-]\d+)$")
_CLOCK_PINS_RE = re.compile(r"^\(([ud]),([ud]),([ud]),([ud])\)$")


@dataclass(frozen=True)
class MoveToken:
    """Un movimiento: cara/esquina/posición más su sufijo.

    Para el Clock el sufijo es el desplazamiento con signo (`offset`) y
    `modifier` queda en `Modifier.NONE`.
    """

    face: str
    modifier: Modifier = Modifier.NONE
    offset: Optional[int] = None

    def __str__(self) -> str:
        if self.offset is not None:
            return f"{self.face}{self.offset:+d}"
        return self.face + self.modifier.value


@dataclass
class ParsedScramble:
    """Scramble separado en sus partes estructurales.

    Attributes:
        pins: Estado de los pines del Clock (UR, DR, DL, UL) o None.
        moves: Movimientos principales (en el Clock incluye "y2").
        tips: Puntas del Pyraminx, en orden.
    """

    pins: Optional[Tuple[str, str, str, str]] = None
    moves: List[MoveToken] = field(default_factory=list)
    tips: List[MoveToken] = field(default_factory=list)


def axis_of(face: str) -> int:
    """Índice del eje (0=UD, 1=LR, 2=FB) de una cara de cubo de 6 caras.

    Raises:
        ValueError: Si `face` no es una cara válida.
    """
    for i, pair in enumerate(gen.AXES):
        if face in pair:
            return i
    raise ValueError(f"Cara inválida: {face}")


def _clean(tok: str) -> str:
    return tok.strip().replace("’", "'").replace("‘", "'")


def _parse_clock_token(tok: str) -> MoveToken:
    if tok == gen.CLOCK_REORIENT:
        return MoveToken(tok)
    m = _CLOCK_MOVE_RE.match(tok)
    if not m:
        raise ValueError(f"Movimiento de Clock inválido: {tok}")
    offset = int(m.group(2))
    low, high = gen.CLOCK_OFFSETS
    if not low <= offset <= high:
        raise ValueError(f"Desplazamiento fuera de rango en: {tok}")
    return MoveToken(m.group(1), offset=offset)


def parse_token(puzzle: PuzzleType, tok: str) -> MoveToken:
    """Convierte un token de texto en un `MoveToken` validado para `puzzle`.

    Reglas:
    - Convierte comillas tipográficas (’ o ‘) a comilla simple (').
    - Corrige "R2'" -> "R2" (el inverso de un 180° es el mismo), solo en
      puzzles que admiten giros dobles.
    - Las puntas del Pyraminx (r, l, u, b) se aceptan como caras.

    Args:
        puzzle: Puzzle cuya gramática se usa.
        tok: Token (ej: "R", "U'", "F2", "UR+3").

    Returns:
        Token validado.

    Raises:
        ValueError: Si la cara o el sufijo no pertenecen a la gramática.
    """
    tok = _clean(tok)
    if not tok:
        raise ValueError("Token vacío.")

    if puzzle is PuzzleType.CLOCK:
        return _parse_clock_token(tok)

    grammar = GRAMMARS[puzzle]
    base, suf = tok[0], tok[1:]

    if base not in grammar.faces and base not in grammar.tips:
        raise ValueError(f"Movimiento inválido: {tok}")

    if suf == "2'" and Modifier.DOUBLE in grammar.modifiers:
        suf = "2"

    try:
        modifier = Modifier(suf)
    except ValueError:
        raise ValueError(f"Sufijo inválido en: {tok}") from None
    if modifier not in grammar.modifiers:
        raise ValueError(f"Sufijo inválido en: {tok}")

    return MoveToken(base, modifier)


def parse_scramble(puzzle: PuzzleType, text: str) -> ParsedScramble:
    """Separa y valida un scramble completo.

    En el Pyraminx las puntas solo pueden ir al final. En el Clock el primer
    token tiene que ser la configuración de pines "(x,x,x,x)".

    Args:
        puzzle: Puzzle cuya gramática se usa.
        text: Scramble con movimientos separados por espacios.

    Returns:
        El scramble separado en pines, movimientos y puntas.

    Raises:
        ValueError: Si algún token es inválido o está fuera de lugar.
    """
    tokens = [t for t in text.strip().split() if t.strip()]
    parsed = ParsedScramble()

    if puzzle is PuzzleType.CLOCK:
        if not tokens:
            raise ValueError("Scramble de Clock vacío.")
        m = _CLOCK_PINS_RE.match(tokens[0])
        if not m:
            raise ValueError(f"Configuración de pines inválida: {tokens[0]}")
        parsed.pins = (m.group(1), m.group(2), m.group(3), m.group(4))
        tokens = tokens[1:]

    tips = GRAMMARS[puzzle].tips if puzzle in GRAMMARS else frozenset()
    for t in tokens:
        move = parse_token(puzzle, t)
        if move.face in tips:
            parsed.tips.append(move)
        elif parsed.tips:
            raise ValueError(f"Movimiento después de las puntas: {t}")
        else:
            parsed.moves.append(move)

    return parsed
