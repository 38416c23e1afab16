import pytest

from satb_solver.exceptions import InvalidProgression, NoSolutions, ScaleDegreeNotFound
from satb_solver.four_part_solver import (
    FourPartSolver,
    FourPartSolverSettings,
    best_solution,
    score_solution,
    solve,
    voice_cost,
)
from satb_solver.pitch_utils.chords import RomanNumeral, Tonality
from satb_solver.pitch_utils.scale import Key
from satb_solver.pitch_utils.voice_lead_chords import enumerate_solutions
from satb_solver.shared_classes import Solution, notes


def test_score_solution(c_major):
    solution = Solution(
        soprano=notes("G4", "D5", "G4"),
        alto=notes("E4", "B4", "E4"),
        tenor=notes("C4", "G4", "C4"),
        bass=notes("C4", "G4", "C4"),
    )
    assert score_solution(c_major, solution) == 6


def test_bass_is_not_scored(c_major):
    solution = Solution(
        soprano=notes("C4", "C5"),
        alto=notes("E4", "E4"),
        tenor=notes("G4", "G3"),
        bass=notes("C3", "F3"),
    )
    assert score_solution(c_major, solution) == 0


@pytest.mark.parametrize(
    "line, expected",
    [
        (("C4",), 0),
        (("C4", "C4", "C4"), 0),
        (("C4", "C5"), 0),
        (("C4", "D4"), 1),
        (("C4", "B5"), 1),
        (("C4", "D4", "C4", "D4"), 3),
        (("C#4", "D4"), 0),
        (("Bb3", "B4", "C4"), 1),
    ],
)
def test_voice_cost(c_major, line, expected):
    assert voice_cost(c_major, notes(*line)) == expected


def test_voice_cost_fallback_limit(c_major):
    with pytest.raises(ScaleDegreeNotFound):
        voice_cost(c_major, notes("C4", "F#4"), max_fallback_steps=0)


def test_single_chord(c_major, I):
    solutions = enumerate_solutions([I], c_major)
    assert all(score_solution(c_major, solution) == 0 for solution in solutions)
    assert solve([I], c_major) == solutions[0]


def test_empty_progression(c_major):
    with pytest.raises(InvalidProgression):
        solve([], c_major)


def test_best_solution_without_candidates(c_major):
    with pytest.raises(NoSolutions):
        best_solution(c_major, [])
    with pytest.raises(NoSolutions):
        best_solution(c_major, iter(()))


def test_cost_is_zero_iff_upper_voices_hold(c_major, I):
    for solution in enumerate_solutions([I, I], c_major):
        n_moving = sum(
            line[0].spelling != line[1].spelling
            for line in solution.upper_voices().values()
        )
        assert score_solution(c_major, solution) == n_moving


PROGRESSIONS = [
    [
        RomanNumeral.major_chord(1),
        RomanNumeral.major_chord(4),
        RomanNumeral.major_chord(5),
        RomanNumeral.major_chord(1),
    ],
    [
        RomanNumeral.major_chord(1),
        RomanNumeral.minor_chord(6),
        RomanNumeral.seventh_chord(2, Tonality.MINOR, 1),
        RomanNumeral.seventh_chord(5, Tonality.MAJOR),
    ],
]


@pytest.mark.parametrize("progression", PROGRESSIONS)
@pytest.mark.parametrize("key", [Key.major("C"), Key.major("Ab"), Key.minor("E")])
def test_solve_finds_first_minimum(progression, key):
    solutions = enumerate_solutions(progression, key)
    costs = [score_solution(key, solution) for solution in solutions]
    best_i = costs.index(min(costs))
    solver = FourPartSolver()
    assert solver(progression, key) == solutions[best_i]
    assert solver.last_cost == costs[best_i]
    assert best_solution(key, solutions) == solutions[best_i]


def test_deterministic(c_major):
    progression = PROGRESSIONS[1]
    assert solve(progression, c_major) == solve(progression, c_major)


def test_tie_break_keeps_the_earliest(c_major, I, V):
    # I V I has many solutions of cost 4; the first holds G in the tenor
    solution = solve([I, V, I], c_major)
    assert score_solution(c_major, solution) == 4
    assert [str(note) for note in solution.tenor] == ["G4", "G4", "G4"]


def test_minor_progression(a_minor):
    i, iv, V = (
        RomanNumeral.minor_chord(1),
        RomanNumeral.minor_chord(4),
        RomanNumeral.major_chord(5),
    )
    solution = solve([i, iv, V, i], a_minor)
    # G# reads as degree 1, so one voice can hold the tonic degree throughout
    assert score_solution(a_minor, solution) == 5
    assert len(solution) == 4


def test_max_steps(c_major, I):
    settings = FourPartSolverSettings(max_steps=3)
    solve([I] * 3, c_major, settings)
    with pytest.raises(InvalidProgression):
        solve([I] * 4, c_major, settings)


def test_settings():
    assert FourPartSolverSettings().as_dict() == {
        "max_steps": None,
        "max_fallback_steps": 12,
    }


def test_solve_rntxt(rntxt_path):
    solver = FourPartSolver()
    key, solution = solver.solve_rntxt(rntxt_path)
    assert key == Key.major("C")
    assert len(solution) == 4
    assert [str(note) for note in solution.bass] == ["C4", "D5", "E4", "F4"]
    assert solver.last_n_candidates == 6**4
