from __future__ import annotations

import logging
import typing as t
from dataclasses import dataclass

import pandas as pd

from satb_solver.pitch_utils.notes import Note
from satb_solver.pitch_utils.types import (
    ALL_VOICES,
    ALTO,
    BASS,
    SOPRANO,
    TENOR,
    UPPER_VOICES,
    Voice,
    voice_enum_to_string,
)

LOGGER = logging.getLogger(__name__)

Line = t.Tuple[Note, ...]


def notes(*note_strs: str) -> Line:
    """Helper to make writing lines convenient in doctests and tests.

    >>> notes("C4", "D4")
    (Note('C4'), Note('D4'))
    """
    return tuple(Note.from_str(s) for s in note_strs)


@dataclass(frozen=True)
class Solution:
    """One note per voice per step of a progression.

    >>> solution = Solution(
    ...     soprano=notes("G4", "D5"),
    ...     alto=notes("E4", "B4"),
    ...     tenor=notes("C4", "G4"),
    ...     bass=notes("C4", "G4"),
    ... )
    >>> len(solution)
    2
    >>> print(solution)
    soprano: G4 D5
    alto:    E4 B4
    tenor:   C4 G4
    bass:    C4 G4

    All four lines must have the same length:

    >>> Solution(notes("C4"), notes("C4"), notes("C4"), ())
    Traceback (most recent call last):
    ValueError: voices have unequal lengths: soprano=1, alto=1, tenor=1, bass=0
    """

    soprano: Line
    alto: Line
    tenor: Line
    bass: Line

    def __post_init__(self):
        for voice in ALL_VOICES:
            name = voice_enum_to_string[voice]
            object.__setattr__(self, name, tuple(getattr(self, name)))
        lengths = {len(line) for line in self.voices().values()}
        if len(lengths) != 1:
            raise ValueError(
                "voices have unequal lengths: "
                + ", ".join(
                    f"{voice_enum_to_string[voice]}={len(line)}"
                    for voice, line in self.voices().items()
                )
            )

    def __len__(self) -> int:
        return len(self.bass)

    def voices(self) -> dict[Voice, Line]:
        return {
            SOPRANO: self.soprano,
            ALTO: self.alto,
            TENOR: self.tenor,
            BASS: self.bass,
        }

    def upper_voices(self) -> dict[Voice, Line]:
        voices = self.voices()
        return {voice: voices[voice] for voice in UPPER_VOICES}

    def prepend(self, soprano: Note, alto: Note, tenor: Note, bass: Note) -> Solution:
        """Returns a new solution one step longer, with the given notes first."""
        return Solution(
            soprano=(soprano,) + self.soprano,
            alto=(alto,) + self.alto,
            tenor=(tenor,) + self.tenor,
            bass=(bass,) + self.bass,
        )

    def to_df(self) -> pd.DataFrame:
        """
        >>> solution = Solution(
        ...     notes("G4", "D5"),
        ...     notes("E4", "B4"),
        ...     notes("C4", "G4"),
        ...     notes("C3", "G2"),
        ... )
        >>> solution.to_df()  # doctest: +NORMALIZE_WHITESPACE
                  0   1
        soprano  G4  D5
        alto     E4  B4
        tenor    C4  G4
        bass     C3  G2
        """
        return pd.DataFrame(
            [[str(note) for note in line] for line in self.voices().values()],
            index=[voice_enum_to_string[voice] for voice in self.voices()],
        )

    def __str__(self):
        width = max(len(name) for name in voice_enum_to_string.values()) + 1
        return "\n".join(
            f"{voice_enum_to_string[voice] + ':':<{width}} "
            + " ".join(str(note) for note in line)
            for voice, line in self.voices().items()
        )
