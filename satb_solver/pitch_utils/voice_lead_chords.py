"""Enumerates every four-part voicing of a progression.

The bass of each step is the lowest note of its chord; soprano, alto and tenor
take every distinct ordering of the chord's upper-voice pool.

>>> c_major = Key.major("C")
>>> I, V = RomanNumeral.major_chord(1), RomanNumeral.major_chord(5)
>>> solutions = enumerate_solutions([I, V, I], c_major)
>>> len(solutions)
216
>>> print(solutions[0])
soprano: C4 G4 C4
alto:    E4 B4 E4
tenor:   G4 D5 G4
bass:    C4 G4 C4
"""
from __future__ import annotations

import itertools
import logging
import math
import typing as t

from satb_solver.exceptions import InvalidProgression, NoSolutions
from satb_solver.pitch_utils.chords import RomanNumeral, Tonality  # Used in doctests
from satb_solver.pitch_utils.notes import Note
from satb_solver.pitch_utils.scale import Key
from satb_solver.shared_classes import Solution
from satb_solver.utils.iterables import unique_items_in_order

LOGGER = logging.getLogger(__name__)

Voicing = t.Tuple[Note, Note, Note]
Progression = t.Sequence[RomanNumeral]


def upper_voice_pool(chord_notes: t.Sequence[Note]) -> tuple[Note, ...]:
    """The notes soprano, alto and tenor may take.

    Triads keep all three notes, so the bass pitch-class can turn up again in
    an upper voice:

    >>> c_major = Key.major("C")
    >>> upper_voice_pool(RomanNumeral.major_chord(1).chord(c_major))
    (Note('C4'), Note('E4'), Note('G4'))

    Larger chords lose their bass note:

    >>> V7 = RomanNumeral.seventh_chord(5, Tonality.MAJOR)
    >>> upper_voice_pool(V7.chord(c_major))
    (Note('B4'), Note('D5'), Note('F5'))
    """
    if len(chord_notes) <= 3:
        return tuple(chord_notes)
    return tuple(chord_notes[1:])


def distinct_voicings(pool: t.Sequence[Note]) -> list[Voicing]:
    """Every (soprano, alto, tenor) ordering of three notes from `pool`.

    Duplicates are dropped by spelling and octave, not by enharmonic equality,
    so the first of two identical orderings is kept:

    >>> c4, e4 = Note.from_str("C4"), Note.from_str("E4")
    >>> distinct_voicings([c4, e4, c4])
    [(Note('C4'), Note('E4'), Note('C4')), (Note('C4'), Note('C4'), Note('E4')), \
(Note('E4'), Note('C4'), Note('C4'))]

    >>> b_sharp3 = Note.from_str("B#3")
    >>> len(distinct_voicings([c4, e4, b_sharp3]))
    6

    A pool of fewer than three notes can't be voiced:

    >>> distinct_voicings([c4, e4])
    []
    """
    return unique_items_in_order(
        itertools.permutations(pool, 3),
        key=lambda voicing: tuple(note.spelling for note in voicing),
    )


def _realize_step(
    rn: RomanNumeral, key: Key, step_i: int
) -> tuple[Note, list[Voicing]]:
    chord_notes = rn.chord(key)
    voicings = distinct_voicings(upper_voice_pool(chord_notes))
    if not voicings:
        raise NoSolutions(
            f"step {step_i} ({rn.figure} in {key}) has no upper-voice voicing"
        )
    LOGGER.debug(f"step {step_i} {rn.figure}: {len(voicings)} voicings")
    return chord_notes[0], voicings


def _check_progression(progression: Progression) -> tuple[RomanNumeral, ...]:
    progression = tuple(progression)
    if not progression:
        raise InvalidProgression("progression is empty")
    return progression


def enumerate_solutions(progression: Progression, key: Key) -> list[Solution]:
    """Every solution of `progression`, first step's voicings outermost.

    >>> enumerate_solutions([], Key.major("C"))
    Traceback (most recent call last):
    satb_solver.exceptions.InvalidProgression: progression is empty
    """
    progression = _check_progression(progression)
    solutions = _enumerate_sub(progression, key, 0)
    LOGGER.debug(f"enumerated {len(solutions)} solutions")
    return solutions


def _enumerate_sub(
    progression: tuple[RomanNumeral, ...], key: Key, step_i: int
) -> list[Solution]:
    bass, voicings = _realize_step(progression[0], key, step_i)
    if len(progression) == 1:
        return [
            Solution((soprano,), (alto,), (tenor,), (bass,))
            for soprano, alto, tenor in voicings
        ]
    inner_solutions = _enumerate_sub(progression[1:], key, step_i + 1)
    return [
        solution.prepend(soprano, alto, tenor, bass)
        for soprano, alto, tenor in voicings
        for solution in inner_solutions
    ]


def yield_solutions(progression: Progression, key: Key) -> t.Iterator[Solution]:
    """Lazy version of `enumerate_solutions()`: same solutions, same order,
    without holding them all in memory.

    Chords are realized (and errors raised) when this function is called, not
    when the iterator is first advanced.

    >>> c_major = Key.major("C")
    >>> progression = [RomanNumeral.major_chord(1), RomanNumeral.minor_chord(6)]
    >>> list(yield_solutions(progression, c_major)) == enumerate_solutions(
    ...     progression, c_major
    ... )
    True
    """
    progression = _check_progression(progression)
    steps = [_realize_step(rn, key, i) for i, rn in enumerate(progression)]
    bass = tuple(bass_note for bass_note, _ in steps)
    return _yield_sub(bass, [voicings for _, voicings in steps])


def _yield_sub(
    bass: tuple[Note, ...], voicings_per_step: list[list[Voicing]]
) -> t.Iterator[Solution]:
    for combination in itertools.product(*voicings_per_step):
        soprano, alto, tenor = zip(*combination)
        yield Solution(soprano, alto, tenor, bass)


def count_solutions(progression: Progression, key: Key) -> int:
    """Number of solutions `enumerate_solutions()` would return, without
    building them.

    >>> c_major = Key.major("C")
    >>> I = RomanNumeral.major_chord(1)
    >>> count_solutions([I] * 10, c_major)
    60466176
    """
    progression = _check_progression(progression)
    return math.prod(
        len(_realize_step(rn, key, i)[1]) for i, rn in enumerate(progression)
    )
