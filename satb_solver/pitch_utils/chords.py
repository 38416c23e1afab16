from __future__ import annotations

import logging
import typing as t
from dataclasses import dataclass
from enum import Enum, IntEnum
from types import MappingProxyType

from satb_solver.constants import (
    AUG_TRIAD,
    DIM_TRIAD,
    MAJOR_TRIAD,
    MINOR_TRIAD,
    ROMAN_NUMERALS,
    SEVENTH_FIGURES,
    TRIAD_FIGURES,
)
from satb_solver.pitch_utils.notes import Accidental, Note
from satb_solver.pitch_utils.scale import Key, Scale
from satb_solver.pitch_utils.types import ChromaticInterval, ScaleDegree

LOGGER = logging.getLogger(__name__)


class Tonality(Enum):
    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    AUGMENTED = "augmented"

    @property
    def intervals(self) -> tuple[ChromaticInterval, ...]:
        return TONALITY_INTERVALS[self]


TONALITY_INTERVALS: t.Mapping[Tonality, tuple[ChromaticInterval, ...]] = (
    MappingProxyType(
        {
            Tonality.MAJOR: MAJOR_TRIAD,
            Tonality.MINOR: MINOR_TRIAD,
            Tonality.DIMINISHED: DIM_TRIAD,
            Tonality.AUGMENTED: AUG_TRIAD,
        }
    )
)

TONALITY_SUFFIXES: t.Mapping[Tonality, str] = MappingProxyType(
    {
        Tonality.MAJOR: "",
        Tonality.MINOR: "",
        Tonality.DIMINISHED: "o",
        Tonality.AUGMENTED: "+",
    }
)
HALF_DIMINISHED_SUFFIX = "ø"


class Inversion(IntEnum):
    ROOT = 0
    FIRST = 1
    SECOND = 2
    THIRD = 3


@dataclass(frozen=True)
class Extension:
    """A chord member above the fifth, named by its generic interval above the
    root (7 for a seventh, 9 for a ninth...).

    `accidental`, if given, replaces the accidental the key would give the note.
    """

    degree: int
    accidental: Accidental | None = None

    def __post_init__(self):
        if self.degree < 2:
            raise ValueError(
                f"extension degree must be at least 2, got {self.degree}"
            )

    @property
    def figure(self) -> str:
        if self.accidental is None:
            return str(self.degree)
        return f"{self.accidental.symbol}{self.degree}"


@dataclass(frozen=True)
class RomanNumeral:
    """
    >>> RomanNumeral.major_chord(5, Inversion.FIRST)
    RomanNumeral(V6)
    >>> RomanNumeral.seventh_chord(2, Tonality.MINOR, Inversion.SECOND)
    RomanNumeral(ii43)
    >>> RomanNumeral.major_chord(8)
    Traceback (most recent call last):
    ValueError: degree must be between 1 and 7, got 8
    """

    degree: ScaleDegree
    quality: Tonality
    inversion: Inversion = Inversion.ROOT
    extensions: tuple[Extension, ...] = ()

    def __post_init__(self):
        if not 1 <= self.degree <= 7:
            raise ValueError(f"degree must be between 1 and 7, got {self.degree}")
        object.__setattr__(self, "inversion", Inversion(self.inversion))
        object.__setattr__(self, "extensions", tuple(self.extensions))
        ext_degrees = [ext.degree for ext in self.extensions]
        if len(set(ext_degrees)) != len(ext_degrees):
            raise ValueError(f"repeated extension in {ext_degrees}")
        if self.inversion >= self.cardinality:
            raise ValueError(
                f"a chord of {self.cardinality} notes has no inversion "
                f"{int(self.inversion)}"
            )

    @classmethod
    def major_chord(
        cls, degree: ScaleDegree, inversion=Inversion.ROOT
    ) -> RomanNumeral:
        return cls(degree, Tonality.MAJOR, inversion)

    @classmethod
    def minor_chord(
        cls, degree: ScaleDegree, inversion=Inversion.ROOT
    ) -> RomanNumeral:
        return cls(degree, Tonality.MINOR, inversion)

    @classmethod
    def diminished_chord(
        cls, degree: ScaleDegree, inversion=Inversion.ROOT
    ) -> RomanNumeral:
        return cls(degree, Tonality.DIMINISHED, inversion)

    @classmethod
    def augmented_chord(
        cls, degree: ScaleDegree, inversion=Inversion.ROOT
    ) -> RomanNumeral:
        return cls(degree, Tonality.AUGMENTED, inversion)

    @classmethod
    def seventh_chord(
        cls,
        degree: ScaleDegree,
        quality: Tonality,
        inversion=Inversion.ROOT,
        accidental: Accidental | None = None,
    ) -> RomanNumeral:
        return cls(degree, quality, inversion, (Extension(7, accidental),))

    @property
    def cardinality(self) -> int:
        return 3 + len(self.extensions)

    @property
    def figure(self) -> str:
        """
        >>> RomanNumeral.diminished_chord(7, Inversion.SECOND).figure
        'viio64'
        >>> RomanNumeral.augmented_chord(3).figure
        'III+'
        >>> RomanNumeral(5, Tonality.MAJOR, extensions=(Extension(9),)).figure
        'V[add9]'

        A diminished triad with a diatonic seventh is half-diminished:

        >>> RomanNumeral.seventh_chord(7, Tonality.DIMINISHED, Inversion.FIRST).figure
        'viiø65'
        """
        numeral = ROMAN_NUMERALS[self.degree - 1]
        if self.quality in (Tonality.MINOR, Tonality.DIMINISHED):
            numeral = numeral.lower()
        if [ext.degree for ext in self.extensions] == [7]:
            if (
                self.quality is Tonality.DIMINISHED
                and self.extensions[0].accidental is None
            ):
                numeral += HALF_DIMINISHED_SUFFIX
            else:
                numeral += TONALITY_SUFFIXES[self.quality]
            return numeral + SEVENTH_FIGURES[self.inversion]
        numeral += TONALITY_SUFFIXES[self.quality]
        figure = numeral + TRIAD_FIGURES[min(self.inversion, 2)]
        return figure + "".join(f"[add{ext.figure}]" for ext in self.extensions)

    def chord(self, key: Key) -> list[Note]:
        """Chord members from the bass up.

        >>> c_major = Key.major("C")
        >>> RomanNumeral.major_chord(1).chord(c_major)
        [Note('C4'), Note('E4'), Note('G4')]
        >>> RomanNumeral.major_chord(5, Inversion.FIRST).chord(c_major)
        [Note('B4'), Note('D5'), Note('G5')]

        The quality, not the key, decides the third and fifth:

        >>> RomanNumeral.major_chord(5).chord(Key.minor("A"))
        [Note('E5'), Note('G#5'), Note('B5')]

        Extensions take the key's accidental unless they give their own:

        >>> RomanNumeral.seventh_chord(5, Tonality.MAJOR).chord(Key.major("G"))
        [Note('D5'), Note('F#5'), Note('A5'), Note('C6')]
        >>> viio7 = RomanNumeral.seventh_chord(
        ...     7, Tonality.DIMINISHED, Inversion.THIRD, accidental=Accidental.FLAT
        ... )
        >>> viio7.chord(c_major)
        [Note('Ab5'), Note('B5'), Note('D6'), Note('F6')]
        """
        scale = key.scale
        root_i = self.degree - 1
        root = _stacked_note(scale, root_i, 0)
        members = [root]
        for steps_above, interval in zip((2, 4), self.quality.intervals[1:]):
            note = _stacked_note(scale, root_i, steps_above)
            members.append(_with_interval(note, root, interval))
        for extension in self.extensions:
            note = _stacked_note(scale, root_i, extension.degree - 1)
            if extension.accidental is not None:
                note = Note(note.alphabet, extension.accidental, note.octave)
            members.append(note)
        for _ in range(self.inversion):
            members = members[1:] + [members[0].transpose_octaves(1)]
        LOGGER.debug(f"{self.figure} in {key}: {' '.join(str(n) for n in members)}")
        return members

    def __repr__(self):
        return f"{self.__class__.__name__}({self.figure})"

    def __str__(self):
        return self.figure


def _stacked_note(scale: Scale, root_i: int, steps_above: int) -> Note:
    octaves, i = divmod(root_i + steps_above, len(scale))
    return scale[i].transpose_octaves(octaves)


def _with_interval(note: Note, root: Note, interval: ChromaticInterval) -> Note:
    """Respells `note` (keeping its letter) so that it lies `interval` half-steps
    above `root`.
    """
    adjustment = interval - (note - root)
    accidental = Accidental.from_alteration(note.accidental.alteration + adjustment)
    return Note(note.alphabet, accidental, note.octave)
