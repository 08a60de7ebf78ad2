"""Piece: an owner and a kind, plus its text and glyph forms."""

from __future__ import annotations

from dataclasses import dataclass

from chesslogic.core.enums import PieceKind, Player

# White's letter per kind; Black uses the lowercase form.
_KIND_LETTERS: dict[PieceKind, str] = {
    PieceKind.PAWN: "P",
    PieceKind.KNIGHT: "N",
    PieceKind.BISHOP: "B",
    PieceKind.ROOK: "R",
    PieceKind.QUEEN: "Q",
    PieceKind.KING: "K",
}
_LETTER_KINDS: dict[str, PieceKind] = {v: k for k, v in _KIND_LETTERS.items()}

# Glyphs ordered by PieceKind value, pawn first.
_WHITE_GLYPHS = "♙♘♗♖♕♔"
_BLACK_GLYPHS = "♟♞♝♜♛♚"


@dataclass(frozen=True, slots=True)
class Piece:
    """What stands on a square. Promotion swaps in a new Piece."""

    owner: Player
    kind: PieceKind

    def __str__(self) -> str:
        letter = _KIND_LETTERS[self.kind]
        return letter if self.owner == Player.WHITE else letter.lower()

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Inverse of ``str(piece)``; ``ValueError`` for any other text."""
        kind = _LETTER_KINDS.get(char.upper()) if len(char) == 1 else None
        if kind is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        owner = Player.WHITE if char.isupper() else Player.BLACK
        return cls(owner, kind)

    @property
    def symbol(self) -> str:
        glyphs = _WHITE_GLYPHS if self.owner == Player.WHITE else _BLACK_GLYPHS
        return glyphs[self.kind - 1]
