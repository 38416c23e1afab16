import pytest

from satb_solver.pitch_utils.chords import RomanNumeral
from satb_solver.pitch_utils.scale import Key

RULE_OF_OCTAVE = "m1 C: I b2 V43 b3 I6 b4 ii65"


@pytest.fixture
def c_major():
    return Key.major("C")


@pytest.fixture
def a_minor():
    return Key.minor("A")


@pytest.fixture
def I():
    return RomanNumeral.major_chord(1)


@pytest.fixture
def IV():
    return RomanNumeral.major_chord(4)


@pytest.fixture
def V():
    return RomanNumeral.major_chord(5)


@pytest.fixture
def rntxt_path(tmp_path):
    path = tmp_path / "rule_of_octave.txt"
    path.write_text(RULE_OF_OCTAVE)
    return str(path)
