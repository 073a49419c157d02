"""
Constants for the chord piano.
All magic strings and numbers are defined here for easy maintenance.
"""


# ============================================================================
# MIDI CONSTANTS
# ============================================================================
class Midi:
    """MIDI-related constants."""
    # Reference pitch: C in octave 4
    MIDDLE_C = 60
    REFERENCE_OCTAVE = 4

    # Velocity range
    VELOCITY_MIN = 0
    VELOCITY_MAX = 127

    # Note range
    NOTE_MIN = 0
    NOTE_MAX = 127

    CHANNEL_DEFAULT = 0


# ============================================================================
# MUSIC CONSTANTS
# ============================================================================
class Music:
    """Music theory constants."""
    NOTES_PER_OCTAVE = 12

    DEFAULT_KEY = "C"
    DEFAULT_MODE = "major"

    # Interval from a root to its relative minor / major
    RELATIVE_MINOR_STEP = 9
    RELATIVE_MAJOR_STEP = 3

    FIFTH_UP_STEP = 7
    FOURTH_UP_STEP = 5


# ============================================================================
# OCTAVE / INVERSION CONSTANTS
# ============================================================================
class Octave:
    """Octave shift applied on top of the chord's build octave."""
    MIN = -3
    MAX = 3
    DEFAULT = 0

    # Chords are built in this octave before the shift is applied
    BUILD = 4


class Inversion:
    """Inversion steps applied after the octave shift."""
    MIN = -3
    MAX = 3
    DEFAULT = 0


# ============================================================================
# BASS CONSTANTS
# ============================================================================
class Bass:
    """Bass-offset cursor labels and bass note placement."""
    ROOT = "BASS"
    OFF = "OFF"

    # Cycle order of the per-slot bass offset
    SEQUENCE = (
        "BASS", "+1", "+2", "+3", "+4", "+5",
        "-6", "-5", "-4", "-3", "-2", "-1", "OFF",
    )

    # C3; bass notes from F upwards drop another octave
    BASE_NOTE = 48
    DROP_FROM_INDEX = 5


# ============================================================================
# INSTRUMENTS
# ============================================================================
class Instrument:
    """Instrument identifiers understood by the audio collaborator."""
    BALAFON = "balafon"
    PIANO = "piano"
    RHODES = "rhodes"
    PLUCK = "pluck"
    PAD = "pad"
    STEEL_DRUM = "steel_drum"
    BASS = "bass"

    ALL = [BALAFON, PIANO, RHODES, PLUCK, PAD, STEEL_DRUM, BASS]

    DEFAULT = BALAFON
    # Used when an unknown instrument name is requested
    FALLBACK = PIANO


# ============================================================================
# FLAM (chord arpeggiation)
# ============================================================================
class Flam:
    """Flam values and their whole-note divisions."""
    OFF = "off"

    DIVISIONS = {
        "1/48": 48,
        "1/32": 32,
        "1/24": 24,
        "1/16": 16,
    }

    ALL = [OFF, "1/48", "1/32", "1/24", "1/16"]


# ============================================================================
# KEYBOARD LAYOUT
# ============================================================================
class KeyboardSize:
    """Keyboard layouts and how many chord slots each key carries."""
    XL = "XL"
    XXL = "XXL"
    XXXL = "XXXL"

    SLOTS = {
        XL: 1,
        XXL: 2,
        XXXL: 3,
    }

    # Cycle order of the size button
    ALL = [XL, XXL, XXXL]


# ============================================================================
# PLAYBACK
# ============================================================================
class Playback:
    """Progression playback constants."""
    DEFAULT_TEMPO = 120
    QUARTERS_PER_CHORD = 4

    # Balance between chord and bass volume (chord = fader, bass = 1 - fader)
    DEFAULT_FADER = 0.25
    FADER_SNAP_POINTS = (0, 0.125, 0.25, 0.375, 0.5, 0.625, 0.75, 0.875, 1)

    # Played chords kept for export; the oldest are dropped beyond this
    MAX_RECORDED_CHORDS = 256


# ============================================================================
# MIDI FILE EXPORT
# ============================================================================
class Export:
    """Standard MIDI file export constants."""
    FORMAT = 1
    TICKS_PER_BEAT = 96
    DEFAULT_DURATION = 96  # one quarter note
    PROGRAM = 108  # balafon slot
    VELOCITY = 100
    DEFAULT_NAME = "Chord Progression"
    MIME_TYPE = "audio/midi"
    FILE_EXTENSION = ".mid"
