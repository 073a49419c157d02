"""
Piano Chords - music theory engine for a chord piano instrument.
"""

from .music_theory import (
    NOTE_NAMES,
    FLAT_NOTE_NAMES,
    MODES,
    MODE_NAMES,
    FREE_MODE,
    UnknownNoteError,
    UnknownModeError,
    note_index,
    note_at,
    midi_note,
    note_name_from_midi,
    scale_notes,
    to_flat,
    to_sharp,
)
from .chord_table import (
    CHORD_INTERVALS,
    CHORD_SUFFIXES,
    ALL_CHORD_TYPES,
    chord_intervals,
)
from .chord_builder import (
    Chord,
    ChordModifier,
    get_chord_notes,
    create_chord,
    chord_display_name,
    transpose,
    invert,
)
from .diatonic import (
    is_diatonic,
    diatonic_chords,
    available_chord_types,
    fallback_chord_type,
    get_chord_suggestions,
    get_common_progressions,
)
from .keyboard_state import KeyboardState, SlotKey, Event
from .midi_export import (
    ChordProgression,
    MidiExport,
    export_progression_to_midi,
    write_midi_file,
)
from .playback import AudioSession, ProgressionPlayer
from .audio_protocol import AudioPlayer, UserChordProvider, StaticUserChord
from .piano_app import PianoApp, PianoSettings

__all__ = [
    # Notes and scales
    "NOTE_NAMES",
    "FLAT_NOTE_NAMES",
    "MODES",
    "MODE_NAMES",
    "FREE_MODE",
    "UnknownNoteError",
    "UnknownModeError",
    "note_index",
    "note_at",
    "midi_note",
    "note_name_from_midi",
    "scale_notes",
    "to_flat",
    "to_sharp",
    # Chord table
    "CHORD_INTERVALS",
    "CHORD_SUFFIXES",
    "ALL_CHORD_TYPES",
    "chord_intervals",
    # Chord builder
    "Chord",
    "ChordModifier",
    "get_chord_notes",
    "create_chord",
    "chord_display_name",
    "transpose",
    "invert",
    # Diatonic analysis
    "is_diatonic",
    "diatonic_chords",
    "available_chord_types",
    "fallback_chord_type",
    "get_chord_suggestions",
    "get_common_progressions",
    # Keyboard state
    "KeyboardState",
    "SlotKey",
    "Event",
    # Export and playback
    "ChordProgression",
    "MidiExport",
    "export_progression_to_midi",
    "write_midi_file",
    "AudioSession",
    "ProgressionPlayer",
    # Audio protocol
    "AudioPlayer",
    "UserChordProvider",
    "StaticUserChord",
    # Application
    "PianoApp",
    "PianoSettings",
]
