from types import MappingProxyType

DEFAULT_OCTAVE = 4

# Half-steps above C for each natural letter
LETTER_OFFSETS = MappingProxyType(
    {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
)

ACCIDENTAL_SYMBOLS = MappingProxyType({-2: "bb", -1: "b", 0: "", 1: "#", 2: "##"})

SHARP_ORDER = ("F", "C", "G", "D", "A", "E", "B")
FLAT_ORDER = ("B", "E", "A", "D", "G", "C", "F")

# Number of sharps (positive) or flats (negative) in the signature of each tonic
MAJOR_KEY_SIGNATURES = MappingProxyType(
    {
        "C": 0,
        "G": 1,
        "D": 2,
        "A": 3,
        "E": 4,
        "B": 5,
        "F#": 6,
        "C#": 7,
        "F": -1,
        "Bb": -2,
        "Eb": -3,
        "Ab": -4,
        "Db": -5,
        "Gb": -6,
        "Cb": -7,
    }
)
MINOR_KEY_SIGNATURES = MappingProxyType(
    {
        "A": 0,
        "E": 1,
        "B": 2,
        "F#": 3,
        "C#": 4,
        "G#": 5,
        "D#": 6,
        "A#": 7,
        "D": -1,
        "G": -2,
        "C": -3,
        "F": -4,
        "Bb": -5,
        "Eb": -6,
        "Ab": -7,
    }
)

MAJOR_TRIAD = (0, 4, 7)
MINOR_TRIAD = (0, 3, 7)
DIM_TRIAD = (0, 3, 6)
AUG_TRIAD = (0, 4, 8)

ROMAN_NUMERALS = ("I", "II", "III", "IV", "V", "VI", "VII")

# Inversion figures, indexed by inversion
TRIAD_FIGURES = ("", "6", "64")
SEVENTH_FIGURES = ("7", "65", "43", "42")

# One full octave of half-step raises before scale-degree resolution gives up
MAX_FALLBACK_STEPS = 12

# Inclusive MIDI ranges used when placing a solution in register
VOICE_RANGES = MappingProxyType(
    {
        "soprano": (60, 81),
        "alto": (53, 74),
        "tenor": (48, 69),
        "bass": (40, 62),
    }
)
