"""Finds the smoothest four-part realization of a progression.

Every candidate solution is scored by how often its upper voices change scale
degree; the first solution with the lowest cost wins.

>>> c_major = Key.major("C")
>>> I, IV, V = (RomanNumeral.major_chord(d) for d in (1, 4, 5))
>>> solution = solve([I, IV, V, I], c_major)
>>> print(solution)
soprano: C4 C5 G4 G4
alto:    E4 F4 B4 C4
tenor:   G4 A4 D5 E4
bass:    C4 F4 G4 C4
>>> score_solution(c_major, solution)
7
"""
from __future__ import annotations

import logging
import textwrap
import typing as t
from dataclasses import dataclass

from satb_solver.constants import MAX_FALLBACK_STEPS
from satb_solver.exceptions import InvalidProgression, NoSolutions
from satb_solver.pitch_utils.chords import RomanNumeral  # Used in doctests
from satb_solver.pitch_utils.music21_handler import get_progression_from_rntxt
from satb_solver.pitch_utils.notes import Note
from satb_solver.pitch_utils.scale import Key, resolve_scale_degree
from satb_solver.pitch_utils.types import Cost, SettingsBase
from satb_solver.pitch_utils.voice_lead_chords import Progression, yield_solutions
from satb_solver.shared_classes import Solution, notes  # notes used in doctests

LOGGER = logging.getLogger(__name__)


@dataclass
class FourPartSolverSettings(SettingsBase):
    # Longer progressions are refused before enumeration; None means no limit
    max_steps: t.Optional[int] = None
    max_fallback_steps: int = MAX_FALLBACK_STEPS


def voice_cost(
    key: Key, line: t.Sequence[Note], max_fallback_steps: int = MAX_FALLBACK_STEPS
) -> Cost:
    """Number of adjacent pairs in `line` that change scale degree.

    The step size doesn't matter, only whether the voice moved:

    >>> c_major = Key.major("C")
    >>> voice_cost(c_major, notes("C4", "D4", "A4", "A3"))
    2

    Chromatic notes count as the next diatonic degree above, so F# and G are
    read as the same degree:

    >>> voice_cost(c_major, notes("F#4", "G4"))
    0
    """
    degrees = [resolve_scale_degree(note, key, max_fallback_steps) for note in line]
    return sum(min(abs(a - b) ** 2, 1) for a, b in zip(degrees, degrees[1:]))


def score_solution(
    key: Key, solution: Solution, max_fallback_steps: int = MAX_FALLBACK_STEPS
) -> Cost:
    """Sum of `voice_cost()` over soprano, alto and tenor. The bass isn't
    scored.

    >>> c_major = Key.major("C")
    >>> solution = Solution(
    ...     soprano=notes("G4", "D5", "G4"),
    ...     alto=notes("E4", "B4", "E4"),
    ...     tenor=notes("C4", "G4", "C4"),
    ...     bass=notes("C4", "G4", "C4"),
    ... )
    >>> score_solution(c_major, solution)
    6
    """
    return sum(
        voice_cost(key, line, max_fallback_steps)
        for line in solution.upper_voices().values()
    )


def _select(
    key: Key,
    solutions: t.Iterable[Solution],
    max_fallback_steps: int = MAX_FALLBACK_STEPS,
) -> tuple[Solution, Cost, int]:
    best = None
    best_cost = None
    n_scored = 0
    for solution in solutions:
        n_scored += 1
        cost = score_solution(key, solution, max_fallback_steps)
        if best_cost is None or cost < best_cost:
            LOGGER.debug(f"new best cost {cost} at candidate {n_scored}")
            best, best_cost = solution, cost
            if cost == 0:
                # Nothing can beat a cost of 0 and ties keep the earlier solution
                break
    if best is None or best_cost is None:
        raise NoSolutions("there are no solutions to choose from")
    return best, best_cost, n_scored


def best_solution(
    key: Key,
    solutions: t.Iterable[Solution],
    max_fallback_steps: int = MAX_FALLBACK_STEPS,
) -> Solution:
    """The first solution with the lowest cost.

    >>> best_solution(Key.major("C"), [])
    Traceback (most recent call last):
    satb_solver.exceptions.NoSolutions: there are no solutions to choose from
    """
    best, _, _ = _select(key, solutions, max_fallback_steps)
    return best


def _check_length(progression: Progression, settings: FourPartSolverSettings):
    if settings.max_steps is not None and len(progression) > settings.max_steps:
        raise InvalidProgression(
            f"progression has {len(progression)} steps; "
            f"the limit is {settings.max_steps}"
        )


def solve(
    progression: Progression,
    key: Key,
    settings: FourPartSolverSettings | None = None,
) -> Solution:
    return FourPartSolver(settings)(progression, key)


class FourPartSolver:
    """
    >>> solver = FourPartSolver(FourPartSolverSettings(max_steps=2))
    >>> solution = solver([RomanNumeral.major_chord(1)], Key.major("D"))
    >>> solver.last_cost, solver.last_n_candidates
    (0, 1)
    >>> solver([RomanNumeral.major_chord(1)] * 3, Key.major("D"))
    Traceback (most recent call last):
    satb_solver.exceptions.InvalidProgression: progression has 3 steps; the limit is 2
    """

    def __init__(self, settings: FourPartSolverSettings | None = None):
        if settings is None:
            settings = FourPartSolverSettings()
        self.settings = settings
        self.last_cost: Cost | None = None
        self.last_n_candidates: int | None = None
        LOGGER.debug(
            textwrap.fill(f"settings: {self.settings}", subsequent_indent=" " * 4)
        )

    def __call__(self, progression: Progression, key: Key) -> Solution:
        progression = tuple(progression)
        _check_length(progression, self.settings)
        best, cost, n_scored = _select(
            key,
            yield_solutions(progression, key),
            self.settings.max_fallback_steps,
        )
        self.last_cost = cost
        self.last_n_candidates = n_scored
        LOGGER.info(
            f"solved {len(progression)} chords in {key}: cost {cost} "
            f"after scoring {n_scored} candidates"
        )
        return best

    def solve_rntxt(self, rn_data: str) -> tuple[Key, Solution]:
        """Solves a RomanText string (or the path to a RomanText file).

        >>> rntxt = '''m1 G: I b3 V6
        ... m2 I'''
        >>> key, solution = FourPartSolver().solve_rntxt(rntxt)
        >>> print(solution)
        soprano: G4 F#5 G4
        alto:    B4 A5 B4
        tenor:   D5 D6 D5
        bass:    G4 F#5 G4
        """
        key, progression = get_progression_from_rntxt(rn_data)
        return key, self(progression, key)
