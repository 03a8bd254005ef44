"""Packed integer value types and coordinate helpers.

Board layout (Little-Endian Rank-File mapping):
    a1=0, b1=1, ..., h1=7
    a2=8, b2=9, ..., h2=15
    ...
    a8=56, b8=57, ..., h8=63

Every primitive is a small wrapper around one unsigned integer of a fixed
bit width.  The wrappers never compare equal across types, so a ``File(4)``
cannot be confused with a ``Rank(4)`` or a ``Square(4)``.  Arithmetic goes
through the named helpers below, which truncate to the declared width the
same way the packed storage does.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Final, TypeVar

from chessnote.core.enums import Color

_P = TypeVar("_P", bound="PackedInt")


@dataclass(frozen=True, slots=True, order=True)
class PackedInt:
    """Unsigned integer of ``BITS`` width wrapped in a distinct type."""

    value: int
    BITS: ClassVar[int] = 8

    def __post_init__(self) -> None:
        assert 0 <= self.value < (1 << self.BITS), (
            f"{type(self).__name__} value {self.value} does not fit in {self.BITS} bits"
        )

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    @classmethod
    def mask(cls) -> int:
        return (1 << cls.BITS) - 1

    @classmethod
    def truncate(cls: type[_P], raw: int) -> _P:
        """Wrap *raw* into this type, dropping bits beyond the width."""
        return cls(raw & cls.mask())

    # ── Bit helpers ──────────────────────────────────────────────────────

    def and_(self: _P, other: _P | int) -> _P:
        return self.truncate(self.value & int(other))

    def or_(self: _P, other: _P | int) -> _P:
        return self.truncate(self.value | int(other))

    def xor(self: _P, other: _P | int) -> _P:
        return self.truncate(self.value ^ int(other))

    def shift_left(self: _P, bits: int) -> _P:
        return self.truncate(self.value << bits)

    def shift_right(self: _P, bits: int) -> _P:
        return self.truncate(self.value >> bits)

    def add(self: _P, delta: _P | int) -> _P:
        return self.truncate(self.value + int(delta))


@dataclass(frozen=True, slots=True, order=True)
class File(PackedInt):
    """File index 0–7 (a–h); 8 is the "could not parse" sentinel."""

    def __repr__(self) -> str:
        return f"File({file_name(self) if self.value < 8 else self.value})"


@dataclass(frozen=True, slots=True, order=True)
class Rank(PackedInt):
    """Rank index 0–7 (1–8); 8 is the "could not parse" sentinel."""

    def __repr__(self) -> str:
        return f"Rank({rank_name(self) if self.value < 8 else self.value})"


@dataclass(frozen=True, slots=True, order=True)
class Square(PackedInt):
    """Square index 0–63; 64 is ``SQ_NONE``."""

    def __repr__(self) -> str:
        return f"Square({square_name(self) if is_square_ok(self) else 'none'})"

    def __str__(self) -> str:
        return square_name(self)


FILE_A, FILE_B, FILE_C, FILE_D, FILE_E, FILE_F, FILE_G, FILE_H = (
    File(f) for f in range(8)
)
FILE_NB: Final = File(8)
FILES: Final = (FILE_A, FILE_B, FILE_C, FILE_D, FILE_E, FILE_F, FILE_G, FILE_H)

RANK_1, RANK_2, RANK_3, RANK_4, RANK_5, RANK_6, RANK_7, RANK_8 = (
    Rank(r) for r in range(8)
)
RANK_NB: Final = Rank(8)
RANKS: Final = (RANK_1, RANK_2, RANK_3, RANK_4, RANK_5, RANK_6, RANK_7, RANK_8)

SQ_NONE: Final = Square(64)

_FILE_CHARS: Final = "abcdefgh"
_RANK_CHARS: Final = "12345678"


def make_square(file: File, rank: Rank) -> Square:
    """Create square from file and rank."""
    assert file.value < 8 and rank.value < 8, "square out of range"
    return Square(rank.shift_left(3).value + file.value)


def file_of(sq: Square) -> File:
    return File(sq.value & 7)


def rank_of(sq: Square) -> Rank:
    return Rank(sq.value >> 3)


def is_square_ok(sq: Square) -> bool:
    """Check whether *sq* is on the board (excludes ``SQ_NONE``)."""
    return 0 <= sq.value <= 63


def file_name(file: File) -> str:
    return _FILE_CHARS[file.value]


def rank_name(rank: Rank) -> str:
    return _RANK_CHARS[rank.value]


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. Square(0) → 'a1', Square(63) → 'h8'."""
    return file_name(file_of(sq)) + rank_name(rank_of(sq))


def parse_file(ch: str) -> File:
    """Parse a file letter in either case; returns ``FILE_NB`` when invalid."""
    idx = _FILE_CHARS.find(ch.lower()) if len(ch) == 1 else -1
    return FILE_NB if idx < 0 else File(idx)


def parse_rank(ch: str) -> Rank:
    """Parse a rank digit; returns ``RANK_NB`` when invalid."""
    idx = _RANK_CHARS.find(ch) if len(ch) == 1 else -1
    return RANK_NB if idx < 0 else Rank(idx)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' (or 'E4') → Square(28)."""
    if len(name) != 2:
        raise ValueError(f"Invalid square name: {name!r}")
    file, rank = parse_file(name[0]), parse_rank(name[1])
    if file == FILE_NB or rank == RANK_NB:
        raise ValueError(f"Invalid square name: {name!r}")
    return make_square(file, rank)


# ── Side-relative helpers ───────────────────────────────────────────────────


def relative_square(color: Color, sq: Square) -> Square:
    """The square *sq* as seen from *color*'s side of the board."""
    assert color != Color.NO_COLOR
    return sq.xor(int(color) * 56)


def relative_rank(color: Color, rank: Rank) -> Rank:
    assert color != Color.NO_COLOR
    return rank.xor(int(color) * 7)


def relative_rank_of(color: Color, sq: Square) -> Rank:
    return relative_rank(color, rank_of(sq))


def flip_square(sq: Square) -> Square:
    """Mirror *sq* vertically (a1 ↔ a8)."""
    return sq.xor(56)


def opposite_colors(s1: Square, s2: Square) -> bool:
    """True when the two squares have different shades."""
    s = s1.value ^ s2.value
    return bool(((s >> 3) ^ s) & 1)


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Square(i) for i in range(0, 8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(i) for i in range(8, 16))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(i) for i in range(16, 24))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(i) for i in range(24, 32))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(i) for i in range(32, 40))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(i) for i in range(40, 48))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(i) for i in range(48, 56))
A8, B8, C8, D8, E8, F8, G8, H8 = (Square(i) for i in range(56, 64))

SQUARES: Final = tuple(Square(i) for i in range(64))
