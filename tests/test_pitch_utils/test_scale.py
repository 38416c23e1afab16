import pytest

from satb_solver.constants import MAJOR_KEY_SIGNATURES, MINOR_KEY_SIGNATURES
from satb_solver.exceptions import ScaleDegreeNotFound, UnresolvableKey
from satb_solver.pitch_utils.notes import Note
from satb_solver.pitch_utils.scale import (
    Key,
    KeySignature,
    Mode,
    Scale,
    resolve_scale_degree,
    scale_degree,
)


def scale_str(key):
    return " ".join(str(note) for note in key.scale)


@pytest.mark.parametrize(
    "key, expected",
    [
        (Key.major("C"), "C4 D4 E4 F4 G4 A4 B4"),
        (Key.major("F#"), "F#4 G#4 A#4 B4 C#5 D#5 E#5"),
        (Key.major("Bb"), "Bb4 C5 D5 Eb5 F5 G5 A5"),
        (Key.major("Cb3"), "Cb3 Db3 Eb3 Fb3 Gb3 Ab3 Bb3"),
        (Key.minor("A"), "A4 B4 C5 D5 E5 F5 G5"),
        (Key.minor("Eb"), "Eb4 F4 Gb4 Ab4 Bb4 Cb5 Db5"),
        (Key.minor("G#"), "G#4 A#4 B4 C#5 D#5 E5 F#5"),
    ],
)
def test_scale(key, expected):
    assert scale_str(key) == expected


@pytest.mark.parametrize(
    "mode, table",
    [(Mode.MAJOR, MAJOR_KEY_SIGNATURES), (Mode.MINOR, MINOR_KEY_SIGNATURES)],
)
def test_every_key_signature(mode, table):
    for tonic in table:
        key = Key.major(tonic) if mode is Mode.MAJOR else Key.minor(tonic)
        scale = key.scale
        assert scale.tonic == key.root
        assert len({note.alphabet for note in scale}) == 7
        assert len({note.pitch_class for note in scale}) == 7
        ids = [note.id for note in scale]
        assert ids == sorted(ids)
        assert ids[-1] - ids[0] < 12


@pytest.mark.parametrize("tonic", ["G#", "D#", "A#", "Fb"])
def test_missing_major_keys(tonic):
    with pytest.raises(UnresolvableKey):
        Key.major(tonic)


@pytest.mark.parametrize("tonic", ["Db", "Gb", "Cb", "E#"])
def test_missing_minor_keys(tonic):
    with pytest.raises(UnresolvableKey):
        Key.minor(tonic)


def test_key_validation():
    with pytest.raises(UnresolvableKey):
        Key(KeySignature.sharps(0), Note.from_str("F#4"))
    with pytest.raises(UnresolvableKey):
        KeySignature.sharps(8)
    with pytest.raises(UnresolvableKey):
        KeySignature.flats(-1)
    with pytest.raises(UnresolvableKey):
        Key.from_str(":")


def test_from_str():
    assert Key.from_str("a") == Key.minor("A")
    assert Key.from_str("Eb:") == Key.major("Eb")
    assert Key.from_str("f#").mode is Mode.MINOR
    assert str(Key.from_str("c#")) == "C# minor"


def test_scale_degree(c_major):
    for i, note in enumerate(c_major.scale):
        assert scale_degree(note, c_major) == i + 1
        assert scale_degree(note.transpose_octaves(-3), c_major) == i + 1
    assert scale_degree(Note.from_str("B#2"), c_major) == 1
    for chromatic in ("C#4", "Eb4", "F#4", "Ab4", "Bb4"):
        assert scale_degree(Note.from_str(chromatic), c_major) is None


@pytest.mark.parametrize(
    "note_str, key, expected",
    [
        ("C#4", Key.major("C"), 2),
        ("Bb3", Key.major("C"), 7),
        ("F4", Key.major("G"), 7),
        ("G#4", Key.minor("A"), 1),
        ("A4", Key.major("Eb"), 5),
        ("D4", Key.major("D"), 1),
    ],
)
def test_resolve_scale_degree(note_str, key, expected):
    assert resolve_scale_degree(Note.from_str(note_str), key) == expected


def test_resolve_scale_degree_gives_up(c_major):
    f_sharp = Note.from_str("F#4")
    assert resolve_scale_degree(f_sharp, c_major, max_steps=1) == 5
    with pytest.raises(ScaleDegreeNotFound):
        resolve_scale_degree(f_sharp, c_major, max_steps=0)
    # Diatonic notes never need the fallback
    assert resolve_scale_degree(Note.from_str("F4"), c_major, max_steps=0) == 4


def test_scale_needs_seven_notes():
    scale = Key.major("C").scale
    with pytest.raises(ValueError, match="got 2"):
        Scale(scale[:2])
    with pytest.raises(ValueError):
        Scale([*scale, scale[0]])
    assert len(Scale(scale.notes)) == 7
