"""
Pure music theory calculations: pitch classes, spellings and scales.
"""
from .constants import Midi, Music


# Root note names (canonical sharp spelling)
NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Same pitch classes, flat spelling
FLAT_NOTE_NAMES = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

SHARP_TO_FLAT = dict(zip(NOTE_NAMES, FLAT_NOTE_NAMES))
FLAT_TO_SHARP = dict(zip(FLAT_NOTE_NAMES, NOTE_NAMES))

FREE_MODE = "free"

# Mode definitions as interval patterns from root (degrees 1-7)
MODES = {
    "major": [0, 2, 4, 5, 7, 9, 11],  # W-W-H-W-W-W-H
    "minor": [0, 2, 3, 5, 7, 8, 10],  # W-H-W-W-H-W-W
    "dorian": [0, 2, 3, 5, 7, 9, 10],
    "phrygian": [0, 1, 3, 5, 7, 8, 10],
    "lydian": [0, 2, 4, 6, 7, 9, 11],
    "mixolydian": [0, 2, 4, 5, 7, 9, 10],
    "locrian": [0, 1, 3, 5, 6, 8, 10],
}

# All selectable modes, in settings-panel order
MODE_NAMES = list(MODES.keys()) + [FREE_MODE]


class UnknownNoteError(ValueError):
    """Raised when a string is not one of the 12 note spellings."""


class UnknownModeError(ValueError):
    """Raised when a mode name is not one of MODE_NAMES."""


def is_note_name(note):
    """True if note is a sharp or flat spelling of a pitch class."""
    return note in SHARP_TO_FLAT or note in FLAT_TO_SHARP


def to_sharp(note):
    """Return the canonical sharp spelling of note."""
    if note in SHARP_TO_FLAT:
        return note
    try:
        return FLAT_TO_SHARP[note]
    except KeyError:
        raise UnknownNoteError("Unknown note name: " + repr(note)) from None


def to_flat(note):
    """Return the flat spelling of note."""
    return SHARP_TO_FLAT[to_sharp(note)]


def spell(note, use_flats=False):
    """Display spelling of a note. Never changes the pitch class."""
    return to_flat(note) if use_flats else to_sharp(note)


def note_index(note):
    """Pitch class (0-11) of a note name, either spelling."""
    return NOTE_NAMES.index(to_sharp(note))


def note_at(index):
    """Note name for a pitch class index; any integer wraps into 0-11."""
    return NOTE_NAMES[index % Music.NOTES_PER_OCTAVE]


def transpose_note(note, semitones):
    """Note name a number of semitones above (or below) note."""
    return note_at(note_index(note) + semitones)


def midi_note(note, octave):
    """
    Convert a note name and octave to a MIDI note number.

    C4 is MIDI 60. Results are not clamped to the 0-127 range.
    """
    return (Midi.MIDDLE_C
            + (octave - Midi.REFERENCE_OCTAVE) * Music.NOTES_PER_OCTAVE
            + note_index(note))


def note_name_from_midi(midi):
    """Convert MIDI note number to note name."""
    return note_at(midi)


def check_mode(mode):
    if mode != FREE_MODE and mode not in MODES:
        raise UnknownModeError("Unknown mode: " + repr(mode))
    return mode


def scale_notes(root, mode):
    """
    Notes of the scale built on root in the given mode.

    Args:
        root: Note name of degree 1
        mode: One of MODE_NAMES

    Returns:
        List of note names in degree order (index 0 = root), or all 12
        notes in fixed order for the free mode
    """
    check_mode(mode)
    if mode == FREE_MODE:
        return list(NOTE_NAMES)

    root_index = note_index(root)
    return [note_at(root_index + interval) for interval in MODES[mode]]


def scale_degree(note, root, mode):
    """
    1-based scale degree of note in the scale, or None if it is not a
    member. Flat spellings are matched by pitch class.
    """
    notes = scale_notes(root, mode)
    sharp = to_sharp(note)
    if sharp not in notes:
        return None
    return notes.index(sharp) + 1


def relative_minor(note):
    """Root of the relative minor of a major key."""
    return transpose_note(note, Music.RELATIVE_MINOR_STEP)


def relative_major(note):
    """Root of the relative major of a minor key."""
    return transpose_note(note, Music.RELATIVE_MAJOR_STEP)
