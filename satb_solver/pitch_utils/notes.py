"""Spelled notes.

A `Note` keeps its spelling (letter, accidental, octave) but compares
enharmonically:

>>> Note.from_str("A#4") == Note.from_str("Bb4")
True
>>> Note.from_str("A#4").spelling == Note.from_str("Bb4").spelling
False
"""
from __future__ import annotations

import re
import typing as t
from dataclasses import dataclass
from enum import Enum

from satb_solver.constants import ACCIDENTAL_SYMBOLS, DEFAULT_OCTAVE, LETTER_OFFSETS
from satb_solver.pitch_utils.types import (
    ChromaticInterval,
    ChromaticPosition,
    MidiNumber,
    PitchClass,
)

NOTE_RE = re.compile(
    r"^(?P<letter>[A-Ga-g])(?P<accidental>##|#|bb|b|--|-)?(?P<octave>\d+)?$"
)


class Alphabet(Enum):
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    A = "A"
    B = "B"

    @property
    def offset(self) -> ChromaticInterval:
        return LETTER_OFFSETS[self.value]

    def next(self) -> Alphabet:
        """
        >>> Alphabet.E.next()
        <Alphabet.F: 'F'>
        >>> Alphabet.B.next()
        <Alphabet.C: 'C'>
        """
        members = list(Alphabet)
        return members[(members.index(self) + 1) % len(members)]


class Accidental(Enum):
    DOUBLE_FLAT = -2
    FLAT = -1
    NATURAL = 0
    SHARP = 1
    DOUBLE_SHARP = 2

    @property
    def alteration(self) -> ChromaticInterval:
        return self.value

    @property
    def symbol(self) -> str:
        return ACCIDENTAL_SYMBOLS[self.value]

    @classmethod
    def from_alteration(cls, alteration: int) -> Accidental:
        """
        >>> Accidental.from_alteration(-1)
        <Accidental.FLAT: -1>
        >>> Accidental.from_alteration(3)
        Traceback (most recent call last):
        ValueError: no accidental alters a note by 3 half-steps
        """
        try:
            return cls(alteration)
        except ValueError:
            raise ValueError(
                f"no accidental alters a note by {alteration} half-steps"
            ) from None

    @classmethod
    def from_symbol(cls, symbol: str | None) -> Accidental:
        """Accepts both "b" and music21's "-" for flats.

        >>> Accidental.from_symbol("--")
        <Accidental.DOUBLE_FLAT: -2>
        >>> Accidental.from_symbol(None)
        <Accidental.NATURAL: 0>
        """
        if not symbol:
            return cls.NATURAL
        symbol = symbol.replace("-", "b")
        for alteration, candidate in ACCIDENTAL_SYMBOLS.items():
            if candidate == symbol:
                return cls(alteration)
        raise ValueError(f"unknown accidental {symbol!r}")


# Spellings used when a note is rebuilt from a chromatic position
SHARP_SPELLINGS: tuple[tuple[Alphabet, Accidental], ...] = (
    (Alphabet.C, Accidental.NATURAL),
    (Alphabet.C, Accidental.SHARP),
    (Alphabet.D, Accidental.NATURAL),
    (Alphabet.D, Accidental.SHARP),
    (Alphabet.E, Accidental.NATURAL),
    (Alphabet.F, Accidental.NATURAL),
    (Alphabet.F, Accidental.SHARP),
    (Alphabet.G, Accidental.NATURAL),
    (Alphabet.G, Accidental.SHARP),
    (Alphabet.A, Accidental.NATURAL),
    (Alphabet.A, Accidental.SHARP),
    (Alphabet.B, Accidental.NATURAL),
)

Spelling = t.Tuple[Alphabet, Accidental, int]


@dataclass(frozen=True, eq=False)
class Note:
    alphabet: Alphabet
    accidental: Accidental = Accidental.NATURAL
    octave: int = DEFAULT_OCTAVE

    @classmethod
    def from_str(cls, note_str: str) -> Note:
        """
        >>> Note.from_str("F#3")
        Note('F#3')
        >>> Note.from_str("B-")
        Note('Bb4')
        >>> Note.from_str("H2")
        Traceback (most recent call last):
        ValueError: can't parse 'H2' as a note
        """
        m = NOTE_RE.match(note_str.strip())
        if m is None:
            raise ValueError(f"can't parse {note_str!r} as a note")
        octave = m.group("octave")
        return cls(
            Alphabet(m.group("letter").upper()),
            Accidental.from_symbol(m.group("accidental")),
            DEFAULT_OCTAVE if octave is None else int(octave),
        )

    @classmethod
    def from_id(cls, id_: ChromaticPosition) -> Note:
        """Builds the sharp-spelled note at a chromatic position.

        >>> Note.from_id(48)
        Note('C4')
        >>> Note.from_id(58)
        Note('A#4')
        """
        octave, pc = divmod(id_, 12)
        alphabet, accidental = SHARP_SPELLINGS[pc]
        return cls(alphabet, accidental, octave)

    @property
    def id(self) -> ChromaticPosition:
        """Half-steps above C0.

        >>> Note.from_str("C4").id, Note.from_str("B#3").id, Note.from_str("Cb4").id
        (48, 48, 47)
        """
        return 12 * self.octave + self.alphabet.offset + self.accidental.alteration

    @property
    def midi_number(self) -> MidiNumber:
        return self.id + 12

    @property
    def pitch_class(self) -> PitchClass:
        return self.id % 12

    @property
    def spelling(self) -> Spelling:
        return (self.alphabet, self.accidental, self.octave)

    @property
    def name(self) -> str:
        return self.alphabet.value + self.accidental.symbol

    def increment(self, steps: int = 1) -> Note:
        """
        >>> Note.from_str("E4").increment()
        Note('F4')
        >>> Note.from_str("B4").increment(2)
        Note('C#5')
        """
        return Note.from_id(self.id + steps)

    def decrement(self, steps: int = 1) -> Note:
        return Note.from_id(self.id - steps)

    def transpose_octaves(self, octaves: int) -> Note:
        """Moves by whole octaves, keeping the spelling."""
        return Note(self.alphabet, self.accidental, self.octave + octaves)

    def simplify(self) -> Note:
        """Respells double accidentals; other notes are returned unchanged.

        >>> Note.from_str("F##4").simplify()
        Note('G4')
        >>> Note.from_str("Gb4").simplify()
        Note('Gb4')
        """
        if self.accidental in (Accidental.DOUBLE_FLAT, Accidental.DOUBLE_SHARP):
            return Note.from_id(self.id)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Note):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __add__(self, steps: int) -> Note:
        if not isinstance(steps, int):
            return NotImplemented
        return self.increment(steps)

    @t.overload
    def __sub__(self, other: Note) -> ChromaticInterval:
        ...

    @t.overload
    def __sub__(self, other: int) -> Note:
        ...

    def __sub__(self, other):
        """
        >>> Note.from_str("E4") - Note.from_str("C4")
        4
        >>> Note.from_str("E4") - 4
        Note('C4')
        """
        if isinstance(other, Note):
            return self.id - other.id
        if isinstance(other, int):
            return self.decrement(other)
        return NotImplemented

    def __str__(self) -> str:
        return f"{self.name}{self.octave}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self}')"
