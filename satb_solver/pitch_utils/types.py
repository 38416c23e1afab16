import typing as t
from dataclasses import asdict, dataclass
from enum import Enum
from types import MappingProxyType

ChromaticPosition = int
ChromaticInterval = int
MidiNumber = int
PitchClass = int
ScaleDegree = int
Cost = int


class Voice(Enum):
    SOPRANO = 0
    ALTO = 1
    TENOR = 2
    BASS = 3


SOPRANO = Voice.SOPRANO
ALTO = Voice.ALTO
TENOR = Voice.TENOR
BASS = Voice.BASS

UPPER_VOICES = (SOPRANO, ALTO, TENOR)
ALL_VOICES = (SOPRANO, ALTO, TENOR, BASS)

voice_enum_to_string: t.Mapping[Voice, str] = MappingProxyType(
    {
        SOPRANO: "soprano",
        ALTO: "alto",
        TENOR: "tenor",
        BASS: "bass",
    }
)


@dataclass
class SettingsBase:
    def as_dict(self) -> dict[str, t.Any]:
        return asdict(self)
