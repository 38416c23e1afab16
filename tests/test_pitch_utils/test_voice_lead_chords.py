import itertools

import pytest

from satb_solver.exceptions import InvalidProgression
from satb_solver.pitch_utils.chords import Extension, RomanNumeral, Tonality
from satb_solver.pitch_utils.notes import Note
from satb_solver.pitch_utils.voice_lead_chords import (
    count_solutions,
    distinct_voicings,
    enumerate_solutions,
    upper_voice_pool,
    yield_solutions,
)

V7 = RomanNumeral.seventh_chord(5, Tonality.MAJOR)
V9 = RomanNumeral(5, Tonality.MAJOR, extensions=(Extension(7), Extension(9)))


def line_str(line):
    return " ".join(str(note) for note in line)


def test_single_chord(c_major, I):
    solutions = enumerate_solutions([I], c_major)
    assert len(solutions) == 6
    assert all(line_str(solution.bass) == "C4" for solution in solutions)
    voicings = [
        (solution.soprano[0], solution.alto[0], solution.tenor[0])
        for solution in solutions
    ]
    assert voicings == list(itertools.permutations(I.chord(c_major)))


def test_two_chords(c_major, I, V):
    solutions = enumerate_solutions([I, V], c_major)
    assert len(solutions) == 36
    assert count_solutions([I, V], c_major) == 36
    first, second = solutions[:2]
    assert line_str(first.soprano) == "C4 G4"
    assert line_str(first.alto) == "E4 B4"
    assert line_str(first.tenor) == "G4 D5"
    assert line_str(second.soprano) == "C4 G4"
    assert line_str(second.alto) == "E4 D5"
    assert line_str(second.tenor) == "G4 B4"
    # The first step changes most slowly
    assert line_str(solutions[6].soprano) == "C4 G4"
    assert line_str(solutions[6].alto) == "G4 B4"


def test_solution_shape(c_major, I, IV):
    progression = [I, IV, V7, I]
    solutions = enumerate_solutions(progression, c_major)
    assert len(solutions) == count_solutions(progression, c_major) == 6**4
    chords = [rn.chord(c_major) for rn in progression]
    for solution in solutions:
        assert len(solution) == len(progression)
        for step, chord in enumerate(chords):
            assert solution.bass[step].spelling == chord[0].spelling
            upper = {
                solution.soprano[step].spelling,
                solution.alto[step].spelling,
                solution.tenor[step].spelling,
            }
            assert upper == {note.spelling for note in upper_voice_pool(chord)}


def test_seventh_chords_drop_the_bass(c_major):
    solutions = enumerate_solutions([V7], c_major)
    assert len(solutions) == 6
    for solution in solutions:
        assert line_str(solution.bass) == "G4"
        assert Note.from_str("G4") not in (
            solution.soprano[0],
            solution.alto[0],
            solution.tenor[0],
        )


def test_larger_chords(c_major):
    pool = upper_voice_pool(V9.chord(c_major))
    assert line_str(pool) == "B4 D5 F5 A5"
    assert len(distinct_voicings(pool)) == 24
    assert count_solutions([V9], c_major) == 24


def test_duplicate_spellings_are_dropped():
    c4, e4, g4 = (Note.from_str(s) for s in ("C4", "E4", "G4"))
    assert len(distinct_voicings([c4, c4, e4])) == 3
    assert len(distinct_voicings([c4, c4, c4])) == 1
    # Octave doublings are different spellings
    assert len(distinct_voicings([c4, c4.transpose_octaves(1), e4])) == 6
    assert len(distinct_voicings([c4, e4, g4, c4])) == 12


def test_yield_matches_enumerate(c_major, I, IV):
    progression = [I, IV, RomanNumeral.minor_chord(2), V7, I]
    assert list(yield_solutions(progression, c_major)) == enumerate_solutions(
        progression, c_major
    )


def test_minor_key(a_minor):
    progression = [
        RomanNumeral.minor_chord(1),
        RomanNumeral.major_chord(5),
        RomanNumeral.minor_chord(1),
    ]
    solutions = enumerate_solutions(progression, a_minor)
    assert len(solutions) == 216
    assert line_str(solutions[0].alto) == "C5 G#5 C5"


def test_empty_progression(c_major):
    with pytest.raises(InvalidProgression):
        enumerate_solutions([], c_major)
    with pytest.raises(InvalidProgression):
        count_solutions([], c_major)
    # Raised when called, before iteration starts
    with pytest.raises(InvalidProgression):
        yield_solutions([], c_major)
