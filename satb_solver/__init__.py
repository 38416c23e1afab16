from satb_solver.exceptions import (
    InvalidProgression,
    NoSolutions,
    ScaleDegreeNotFound,
    SolverError,
    UnresolvableKey,
)
from satb_solver.four_part_solver import (
    FourPartSolver,
    FourPartSolverSettings,
    best_solution,
    score_solution,
    solve,
    voice_cost,
)
from satb_solver.pitch_utils.chords import Extension, Inversion, RomanNumeral, Tonality
from satb_solver.pitch_utils.notes import Accidental, Alphabet, Note
from satb_solver.pitch_utils.scale import Key, Mode, resolve_scale_degree, scale_degree
from satb_solver.pitch_utils.voice_lead_chords import (
    count_solutions,
    enumerate_solutions,
    yield_solutions,
)
from satb_solver.shared_classes import Solution
