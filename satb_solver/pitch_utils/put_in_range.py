import math

from satb_solver.pitch_utils.notes import Note
from satb_solver.pitch_utils.types import MidiNumber


def put_in_range(
    note: Note,
    low: MidiNumber | None = None,
    high: MidiNumber | None = None,
    fail_silently: bool = False,
) -> Note:
    """Moves `note` by as few octaves as possible so that its MIDI number lies
    within the (inclusive) bounds. The spelling is kept.

    >>> put_in_range(Note.from_str("C1"), low=58, high=74)
    Note('C4')
    >>> put_in_range(Note.from_str("C5"), low=32, high=62)
    Note('C4')
    >>> put_in_range(Note.from_str("Cb3"), low=58, high=100)
    Note('Cb4')

    Raises an exception if the pitch-class isn't found between the bounds,
    unless fail_silently is True, in which case it returns a note below the
    lower bound:

    >>> put_in_range(Note.from_str("C4"), low=49, high=59)
    Traceback (most recent call last):
    ValueError: pitch-class 0 does not occur between low=49 and high=59

    >>> put_in_range(Note.from_str("C4"), low=49, high=59, fail_silently=True)
    Note('C3')
    """
    p = note.midi_number
    octaves = 0
    if low is not None:
        below = low - p
        if below > 0:
            octaves += math.ceil(below / 12)
    if high is not None:
        above = p + 12 * octaves - high
        if above > 0:
            octaves -= math.ceil(above / 12)
    if not fail_silently and low is not None:
        if p + 12 * octaves < low:
            raise ValueError(
                f"pitch-class {note.pitch_class} does not occur between "
                f"low={low} and high={high}"
            )
    return note.transpose_octaves(octaves)
