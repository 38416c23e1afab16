from __future__ import annotations

import logging
import typing as t
from dataclasses import dataclass
from enum import Enum
from functools import cached_property

from satb_solver.constants import (
    FLAT_ORDER,
    MAJOR_KEY_SIGNATURES,
    MAX_FALLBACK_STEPS,
    MINOR_KEY_SIGNATURES,
    SHARP_ORDER,
)
from satb_solver.exceptions import ScaleDegreeNotFound, UnresolvableKey
from satb_solver.pitch_utils.notes import Accidental, Alphabet, Note
from satb_solver.pitch_utils.types import ScaleDegree

LOGGER = logging.getLogger(__name__)


class Mode(Enum):
    MAJOR = "major"
    MINOR = "minor"


@dataclass(frozen=True)
class KeySignature:
    accidental: Accidental
    letters: tuple[Alphabet, ...]

    @classmethod
    def sharps(cls, n: int) -> KeySignature:
        """
        >>> KeySignature.sharps(2).letters
        (<Alphabet.F: 'F'>, <Alphabet.C: 'C'>)
        """
        if not 0 <= n <= len(SHARP_ORDER):
            raise UnresolvableKey(f"a key signature can't have {n} sharps")
        letters = tuple(Alphabet(letter) for letter in SHARP_ORDER[:n])
        return cls(Accidental.SHARP, letters)

    @classmethod
    def flats(cls, n: int) -> KeySignature:
        if not 0 <= n <= len(FLAT_ORDER):
            raise UnresolvableKey(f"a key signature can't have {n} flats")
        letters = tuple(Alphabet(letter) for letter in FLAT_ORDER[:n])
        return cls(Accidental.FLAT, letters)

    @classmethod
    def from_count(cls, count: int) -> KeySignature:
        """Positive counts are sharps, negative counts are flats."""
        if count < 0:
            return cls.flats(-count)
        return cls.sharps(count)

    def accidental_for(self, alphabet: Alphabet) -> Accidental:
        if alphabet in self.letters:
            return self.accidental
        return Accidental.NATURAL


class Scale:
    """Seven notes, one per letter, ascending from the tonic.

    >>> scale = Key.major("G4").scale
    >>> scale
    Scale(G4 A4 B4 C5 D5 E5 F#5)
    >>> scale[6]
    Note('F#5')
    >>> scale.index(Note.from_str("Gb2"))
    6
    """

    def __init__(self, notes: t.Sequence[Note]):
        if len(notes) != 7:
            raise ValueError(f"a scale needs 7 notes, got {len(notes)}")
        self._notes = tuple(notes)
        self._lookup_pc: dict[int, int] = {}
        for i, note in enumerate(self._notes):
            self._lookup_pc.setdefault(note.pitch_class, i)

    def __repr__(self):
        return f"{self.__class__.__name__}({' '.join(str(n) for n in self._notes)})"

    def __len__(self):
        return len(self._notes)

    def __iter__(self) -> t.Iterator[Note]:
        return iter(self._notes)

    def __getitem__(self, i: int) -> Note:
        return self._notes[i]

    def __contains__(self, note: Note) -> bool:
        return note.pitch_class in self._lookup_pc

    @property
    def notes(self) -> tuple[Note, ...]:
        return self._notes

    @property
    def tonic(self) -> Note:
        return self._notes[0]

    def index(self, note: Note) -> int:
        """0-based position of the note's pitch-class, ignoring octave and spelling."""
        try:
            return self._lookup_pc[note.pitch_class]
        except KeyError:
            raise IndexError(f"{note} is not in {self}")

    def degree(self, note: Note) -> ScaleDegree | None:
        """
        >>> c_major = Key.major("C").scale
        >>> c_major.degree(Note.from_str("G2"))
        5
        >>> c_major.degree(Note.from_str("G#2")) is None
        True
        """
        i = self._lookup_pc.get(note.pitch_class)
        if i is None:
            return None
        return i + 1


@dataclass(frozen=True)
class Key:
    signature: KeySignature
    root: Note
    mode: Mode = Mode.MAJOR

    def __post_init__(self):
        if self.root.accidental is not self.signature.accidental_for(
            self.root.alphabet
        ):
            raise UnresolvableKey(
                f"{self.root.name} is not diatonic to its own key signature"
            )

    @classmethod
    def major(cls, root: Note | str) -> Key:
        """
        >>> Key.major("F#")
        Key(F# major)
        >>> Key.major("G#")
        Traceback (most recent call last):
        satb_solver.exceptions.UnresolvableKey: there is no G# major key signature
        """
        return cls._from_table(root, Mode.MAJOR, MAJOR_KEY_SIGNATURES)

    @classmethod
    def minor(cls, root: Note | str) -> Key:
        return cls._from_table(root, Mode.MINOR, MINOR_KEY_SIGNATURES)

    @classmethod
    def _from_table(
        cls, root: Note | str, mode: Mode, table: t.Mapping[str, int]
    ) -> Key:
        if isinstance(root, str):
            root = Note.from_str(root)
        try:
            count = table[root.name]
        except KeyError:
            raise UnresolvableKey(
                f"there is no {root.name} {mode.value} key signature"
            ) from None
        return cls(KeySignature.from_count(count), root, mode)

    @classmethod
    def from_str(cls, key_str: str) -> Key:
        """Upper-case tonics are major, lower-case tonics minor.

        >>> Key.from_str("Bb")
        Key(Bb major)
        >>> Key.from_str("c#5").root
        Note('C#5')
        """
        key_str = key_str.strip().rstrip(":")
        if not key_str:
            raise UnresolvableKey("empty key")
        if key_str[0].isupper():
            return cls.major(key_str)
        return cls.minor(key_str)

    @cached_property
    def scale(self) -> Scale:
        alphabet = self.root.alphabet
        octave = self.root.octave
        notes = []
        for i in range(7):
            if i:
                alphabet = alphabet.next()
                if alphabet is Alphabet.C:
                    octave += 1
            accidental = self.signature.accidental_for(alphabet)
            notes.append(Note(alphabet, accidental, octave))
        return Scale(notes)

    def __repr__(self):
        return f"{self.__class__.__name__}({self})"

    def __str__(self):
        return f"{self.root.name} {self.mode.value}"


def scale_degree(note: Note, key: Key) -> ScaleDegree | None:
    """1-based scale degree of `note` in `key`, or None if it isn't diatonic.

    Spelling and octave are ignored:

    >>> scale_degree(Note.from_str("Cb6"), Key.major("G"))
    3
    """
    return key.scale.degree(note)


def resolve_scale_degree(
    note: Note, key: Key, max_steps: int = MAX_FALLBACK_STEPS
) -> ScaleDegree:
    """Like `scale_degree()` but chromatic notes are raised a half-step at a
    time until they land on the scale.

    >>> c_major = Key.major("C")
    >>> resolve_scale_degree(Note.from_str("F#4"), c_major)
    5
    >>> resolve_scale_degree(Note.from_str("Eb4"), c_major)
    3

    The fallback gives up after `max_steps` half-steps:

    >>> resolve_scale_degree(Note.from_str("Eb4"), c_major, max_steps=0)
    Traceback (most recent call last):
    satb_solver.exceptions.ScaleDegreeNotFound: no degree for Eb4 in C major
    """
    degree = scale_degree(note, key)
    steps = 0
    while degree is None:
        if steps >= max_steps:
            raise ScaleDegreeNotFound(
                f"no degree for {note} in {key}"
            )
        steps += 1
        degree = scale_degree(note.increment(steps), key)
    if steps:
        LOGGER.debug(f"{note} is chromatic in {key}; read as degree {degree}")
    return degree
