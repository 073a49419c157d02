"""
Diatonic analysis: which chords belong to a key, which chord types each
scale degree offers, and progression suggestions.
"""
import logging

from .chord_builder import create_chord
from .chord_table import ALL_CHORD_TYPES
from .constants import Music
from .music_theory import (
    FREE_MODE,
    check_mode,
    note_name_from_midi,
    scale_degree,
    scale_notes,
    transpose_note,
)

logger = logging.getLogger(__name__)

FALLBACK_CHORD_TYPE = "major"

# Chord types tried on every scale degree, in output order
DIATONIC_CANDIDATE_TYPES = (
    "major", "minor", "dim", "augmented",
    "7", "major7", "minor7", "major9", "minor9",
    "9", "sus2", "sus4", "add9", "m7b5", "m11",
    "dim7", "6", "69", "minor6", "minorMajor7",
    "major11", "13", "7sus4",
    "augmented7", "augmentedMajor7", "11",
)

# Chord types a key may cycle through, by scale degree
MAJOR_DEGREE_CHORD_TYPES = {
    "1": ["major", "major7", "major9", "major11", "6", "69", "add9", "sus2", "sus4", "7", "9", "11"],
    "2": ["minor", "minor7", "minor9", "m11", "minor6", "m7b5", "sus2", "sus4"],
    "3": ["minor", "minor7", "minor9", "m11", "minor6", "sus2", "sus4"],
    "4": ["major", "major7", "major9", "major11", "6", "add9", "sus2", "sus4", "11"],
    "5": ["major", "7", "9", "11", "7sus4", "sus4", "sus2", "add9", "13"],
    "6": ["minor", "minor7", "minor9", "m11", "minor6", "sus2", "sus4"],
    "7": ["dim", "dim7", "m7b5", "minor7", "7b5", "sus2"],
}

MINOR_DEGREE_CHORD_TYPES = {
    "1": ["minor", "minor7", "minor9", "m11", "minor6", "minorMajor7", "sus2", "sus4"],
    "2": ["dim", "dim7", "m7b5", "minor7", "7b5", "sus2"],
    "3": ["major", "major7", "major9", "add9", "6", "sus2", "sus4"],
    "4": ["minor", "minor7", "minor9", "m11", "minor6", "sus2", "sus4"],
    "5": ["minor", "minor7", "minor9", "m11", "minor6", "sus2", "sus4"],
    "6": ["major", "major7", "major9", "6", "add9", "sus2", "sus4"],
    "7": ["major", "7", "9", "11", "sus2", "sus4"],
}

# Named roman-numeral patterns (1-based degrees)
PROGRESSION_PATTERNS = [
    ("I-IV-V", [1, 4, 5]),
    ("I-V-vi-IV", [1, 5, 6, 4]),
    ("ii-V-I", [2, 5, 1]),
    ("I-vi-IV-V", [1, 6, 4, 5]),
    ("vi-IV-I-V", [6, 4, 1, 5]),
]

MIN_SUGGESTIONS = 3
BACKFILL_SUGGESTIONS = 5


def fallback_chord_type():
    """Chord type used whenever no valid type can be selected."""
    return FALLBACK_CHORD_TYPE


def select_chord_type(chord_types, cursor):
    """
    Pick the chord type a cursor points at.

    The cursor wraps around the list. An empty list yields the fallback
    type so a key always has something to show and play.
    """
    if not chord_types:
        return fallback_chord_type()
    return chord_types[cursor % len(chord_types)] or fallback_chord_type()


def degree_table(mode):
    """Per-degree chord-type table for a non-free mode."""
    return MINOR_DEGREE_CHORD_TYPES if mode == "minor" else MAJOR_DEGREE_CHORD_TYPES


def available_chord_types(note, key, mode):
    """
    Chord types a key can cycle through.

    Free mode offers the whole catalog on every key; otherwise the list
    depends on the note's scale degree, and notes outside the scale get
    nothing.
    """
    check_mode(mode)
    if mode == FREE_MODE:
        return list(ALL_CHORD_TYPES)

    degree = scale_degree(note, key, mode)
    if degree is None:
        return []
    return list(degree_table(mode).get(str(degree), []))


def is_chord_type_allowed(root, chord_type, key, mode):
    """True if chord_type is offered on root's scale degree."""
    return chord_type in available_chord_types(root, key, mode)


def is_diatonic(chord, key, mode):
    """
    Check if every note of a chord is in the scale, ignoring octave.
    """
    if mode == FREE_MODE:
        return True
    notes = scale_notes(key, mode)
    return all(note_name_from_midi(note) in notes for note in chord.notes)


def diatonic_chords(key, mode):
    """
    All diatonic chords of a key.

    Ordered by scale degree, then by DIATONIC_CANDIDATE_TYPES. Empty in
    free mode.
    """
    if mode == FREE_MODE:
        return []

    chords = []
    for root in scale_notes(key, mode):
        for chord_type in DIATONIC_CANDIDATE_TYPES:
            chord = create_chord(root, chord_type)
            if chord is not None and is_diatonic(chord, key, mode):
                chords.append(chord)
    return chords


def _same_chord(a, b):
    return a.root == b.root and a.type == b.type


def get_chord_suggestions(previous_chord, key, mode):
    """
    Suggest chords to play after previous_chord.

    Starts with diatonic chords a fifth or a fourth above the previous
    root, adds the relative minor (after a major chord) or relative major
    (after a minor chord), and tops up from the remaining diatonic chords
    when fewer than three were found.

    Args:
        previous_chord: Chord or None
        key: Key note name
        mode: Mode name

    Returns:
        List of Chord
    """
    candidates = diatonic_chords(key, mode)
    if previous_chord is None:
        return candidates

    suggestions = []
    fifth_up = transpose_note(previous_chord.root, Music.FIFTH_UP_STEP)
    fourth_up = transpose_note(previous_chord.root, Music.FOURTH_UP_STEP)
    for chord in candidates:
        if chord.root in (fifth_up, fourth_up):
            suggestions.append(chord)

    relative = None
    if previous_chord.type == "major":
        relative = (transpose_note(previous_chord.root, Music.RELATIVE_MINOR_STEP), "minor")
    elif previous_chord.type == "minor":
        relative = (transpose_note(previous_chord.root, Music.RELATIVE_MAJOR_STEP), "major")
    if relative is not None:
        for chord in candidates:
            if (chord.root, chord.type) == relative:
                suggestions.append(chord)

    if len(suggestions) < MIN_SUGGESTIONS:
        for chord in candidates:
            if len(suggestions) >= BACKFILL_SUGGESTIONS:
                break
            if not any(_same_chord(chord, s) for s in suggestions):
                suggestions.append(chord)

    logger.debug("%d suggestions after %s", len(suggestions), previous_chord.name)
    return suggestions


def get_common_progressions(key, mode="major"):
    """
    Common progressions mapped onto the key's diatonic chords.

    Each degree picks diatonic_chords[(degree - 1) % len]. That list holds
    several chord types per degree, so this is an approximation of a true
    roman-numeral lookup and is kept as-is for compatibility.

    Returns:
        List of {"name": str, "chords": [Chord]}
    """
    chords = diatonic_chords(key, mode)
    progressions = []
    for name, degrees in PROGRESSION_PATTERNS:
        if chords:
            picked = [chords[(degree - 1) % len(chords)] for degree in degrees]
        else:
            picked = []
        progressions.append({"name": name, "chords": picked})
    return progressions
