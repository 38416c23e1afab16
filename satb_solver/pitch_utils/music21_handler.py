"""Reading RomanText with music21 and writing solutions back out as music21
scores.
"""
from __future__ import annotations

import logging
import os
import re
import typing as t

import music21

from satb_solver.constants import DEFAULT_OCTAVE, VOICE_RANGES
from satb_solver.exceptions import InvalidProgression
from satb_solver.pitch_utils.chords import Extension, Inversion, RomanNumeral, Tonality
from satb_solver.pitch_utils.notes import Accidental, Alphabet, Note
from satb_solver.pitch_utils.put_in_range import put_in_range
from satb_solver.pitch_utils.scale import Key, Mode
from satb_solver.pitch_utils.types import voice_enum_to_string
from satb_solver.shared_classes import Solution

LOGGER = logging.getLogger(__name__)

OUTPUT_FORMATS = {
    ".mid": "midi",
    ".midi": "midi",
    ".xml": "musicxml",
    ".musicxml": "musicxml",
}


def strip_added_tones(rn_data: str) -> str:
    """
    >>> rntxt = '''m1 f: i b2 V7[no3][add4] b2.25 V7[no5][no3][add6][add4]
    ... m2 Cad64 b1.75 V b2 i[no3][add#7][add4] b2.5 i[add9] b2.75 i'''
    >>> print(strip_added_tones(rntxt))
    m1 f: i b2 V7 b2.25 V7
    m2 Cad64 b1.75 V b2 i b2.5 i b2.75 i
    """
    if os.path.exists(rn_data):
        with open(rn_data) as inf:
            rn_data = inf.read()
    return re.sub(r"\[(no|add)[^\]]+\]", "", rn_data)


def parse_rntxt(rn_data: str) -> music21.stream.Score:  # type:ignore
    # forceSource=True disables music21's caching, which we want to do because
    #   music21 doesn't update cache after music21 itself is changed.
    return music21.converter.parse(
        rn_data, format="romanText", forceSource=True  # type:ignore
    )


def _note_from_pitch(
    pitch: music21.pitch.Pitch, octave: int = DEFAULT_OCTAVE  # type:ignore
) -> Note:
    alteration = 0 if pitch.accidental is None else int(pitch.accidental.alter)
    return Note(Alphabet(pitch.step), Accidental.from_alteration(alteration), octave)


def key_from_music21(m21_key: music21.key.Key) -> Key:  # type:ignore
    """
    >>> key_from_music21(music21.key.Key("e-"))
    Key(Eb minor)
    """
    root = _note_from_pitch(m21_key.tonic)
    if m21_key.mode == Mode.MINOR.value:
        return Key.minor(root)
    return Key.major(root)


def _tonality(third: int, fifth: int, figure: str) -> Tonality:
    for tonality in Tonality:
        if tonality.intervals[1:] == (third, fifth):
            return tonality
    raise InvalidProgression(f"{figure} has an unsupported chord quality")


def rn_from_music21(
    rn: music21.roman.RomanNumeral, key: Key  # type:ignore
) -> RomanNumeral:
    """
    >>> c_major = Key.major("C")
    >>> rn_from_music21(music21.roman.RomanNumeral("V65", "C"), c_major)
    RomanNumeral(V65)
    >>> rn_from_music21(music21.roman.RomanNumeral("viio7", "C"), c_major).chord(
    ...     c_major
    ... )
    [Note('B4'), Note('D5'), Note('F5'), Note('Ab5')]

    Applied chords and chromatic roots aren't supported:

    >>> rn_from_music21(music21.roman.RomanNumeral("V/V", "C"), c_major)
    Traceback (most recent call last):
    satb_solver.exceptions.InvalidProgression: applied chord V/V is not supported
    >>> rn_from_music21(music21.roman.RomanNumeral("bVI", "C"), c_major)
    Traceback (most recent call last):
    satb_solver.exceptions.InvalidProgression: chromatic root in bVI is not supported
    """
    figure = rn.figure
    if rn.secondaryRomanNumeral is not None:
        raise InvalidProgression(f"applied chord {figure} is not supported")
    degree = rn.scaleDegree
    if rn.frontAlterationAccidental is not None:
        if (
            key.mode is Mode.MINOR
            and degree == 7
            and rn.frontAlterationAccidental.alter > 0
        ):
            raise InvalidProgression(
                f"{figure} is built on the raised leading tone, which isn't in the "
                f"scale of {key}"
            )
        raise InvalidProgression(f"chromatic root in {figure} is not supported")
    root = rn.root()
    if key.scale[degree - 1].pitch_class != root.pitchClass:
        raise InvalidProgression(f"root of {figure} is not diatonic to {key}")
    if rn.third is None or rn.fifth is None:
        raise InvalidProgression(f"{figure} has no third or fifth")
    n_pitches = len(rn.pitches)
    if n_pitches not in (3, 4):
        raise InvalidProgression(f"{figure} has {n_pitches} notes, not 3 or 4")

    third = (rn.third.pitchClass - root.pitchClass) % 12
    fifth = (rn.fifth.pitchClass - root.pitchClass) % 12
    quality = _tonality(third, fifth, figure)

    extensions = ()
    if rn.seventh is not None:
        seventh = _note_from_pitch(rn.seventh)
        diatonic = key.scale[(degree + 5) % 7]
        if seventh.alphabet is not diatonic.alphabet:
            raise InvalidProgression(
                f"seventh of {figure} is spelled {seventh}, not on "
                f"{diatonic.alphabet.value}"
            )
        accidental = (
            None if seventh.accidental is diatonic.accidental else seventh.accidental
        )
        extensions = (Extension(7, accidental),)

    return RomanNumeral(degree, quality, Inversion(rn.inversion()), extensions)


def get_progression_from_rntxt(
    rn_data: str, no_added_tones: bool = True
) -> tuple[Key, tuple[RomanNumeral, ...]]:
    """Reads RomanText (or a path to a RomanText file) into a key and a
    progression.

    >>> rntxt = '''Time Signature: 3/4
    ... m1 g: i b2 iv6 b3 V7
    ... m2 i'''
    >>> key, progression = get_progression_from_rntxt(rntxt)
    >>> key
    Key(G minor)
    >>> progression
    (RomanNumeral(i), RomanNumeral(iv6), RomanNumeral(V7), RomanNumeral(i))

    The whole progression has to stay in one key:

    >>> get_progression_from_rntxt("m1 C: I b3 G: I")
    Traceback (most recent call last):
    satb_solver.exceptions.InvalidProgression: key changes from C to G at I
    """
    if no_added_tones:
        rn_data = strip_added_tones(rn_data)
    score = parse_rntxt(rn_data)
    m21_rns = list(score[music21.roman.RomanNumeral])  # type:ignore
    if not m21_rns:
        raise InvalidProgression("no roman numerals found")

    m21_key = m21_rns[0].key
    key = key_from_music21(m21_key)
    progression = []
    for m21_rn in m21_rns:
        key_name = m21_rn.key.tonicPitchNameWithCase
        if key_name != m21_key.tonicPitchNameWithCase:
            raise InvalidProgression(
                f"key changes from {m21_key.tonicPitchNameWithCase} to {key_name} "
                f"at {m21_rn.figure}"
            )
        progression.append(rn_from_music21(m21_rn, key))
    LOGGER.debug(
        f"read {len(progression)} chords in {key}: "
        + " ".join(rn.figure for rn in progression)
    )
    return key, tuple(progression)


def _m21_pitch_name(note: Note) -> str:
    return note.alphabet.value + note.accidental.symbol.replace("b", "-")


def _m21_name(note: Note) -> str:
    return f"{_m21_pitch_name(note)}{note.octave}"


def solution_to_score(
    solution: Solution,
    key: Key | None = None,
    quarter_length: float = 4.0,
    voice_ranges: t.Mapping[str, tuple[int, int]] = VOICE_RANGES,
) -> music21.stream.Score:  # type:ignore
    """Writes one part per voice, each note moved by octaves into its voice's
    range.

    >>> from satb_solver.shared_classes import notes
    >>> solution = Solution(
    ...     notes("G4", "D5"),
    ...     notes("E4", "B4"),
    ...     notes("C4", "G4"),
    ...     notes("C4", "G4"),
    ... )
    >>> score = solution_to_score(solution, Key.major("C"))
    >>> [part.id for part in score.parts]
    ['soprano', 'alto', 'tenor', 'bass']
    >>> [str(n.pitch) for n in score.parts[3].flatten().notes]
    ['C4', 'G3']
    >>> [str(n.pitch) for n in score.parts[0].flatten().notes]
    ['G4', 'D5']
    """
    score = music21.stream.Score()  # type:ignore
    for voice, line in solution.voices().items():
        name = voice_enum_to_string[voice]
        low, high = voice_ranges[name]
        part = music21.stream.Part()  # type:ignore
        part.id = name
        part.partName = name.title()
        if key is not None:
            m21_key = music21.key.Key(_m21_pitch_name(key.root), key.mode.value)
            part.append(m21_key)  # type:ignore
        for note in line:
            placed = put_in_range(note, low, high, fail_silently=True)
            part.append(
                music21.note.Note(  # type:ignore
                    _m21_name(placed), quarterLength=quarter_length
                )
            )
        score.insert(0, part)
    return score


def write_solution(
    solution: Solution, path: str, key: Key | None = None
) -> music21.stream.Score:  # type:ignore
    """Writes MIDI or MusicXML, depending on the extension of `path`.

    >>> write_solution(Solution((), (), (), ()), "out.wav")
    Traceback (most recent call last):
    ValueError: can't write '.wav' files; use one of .mid, .midi, .xml, .musicxml
    """
    ext = os.path.splitext(path)[1].lower()
    if ext not in OUTPUT_FORMATS:
        raise ValueError(
            f"can't write {ext!r} files; use one of {', '.join(OUTPUT_FORMATS)}"
        )
    score = solution_to_score(solution, key)
    LOGGER.info(f"writing {path}")
    score.write(OUTPUT_FORMATS[ext], fp=path)
    return score
