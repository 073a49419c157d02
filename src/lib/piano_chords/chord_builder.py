"""
Chord construction: MIDI notes, octave shift, inversion and chord names.
"""
import logging
import uuid
from dataclasses import dataclass, field, replace
from typing import List, Optional

from .chord_table import USER_CHORD_TYPE, chord_intervals, chord_suffix
from .constants import Export, Music, Octave
from .music_theory import is_note_name, midi_note, spell, to_sharp

logger = logging.getLogger(__name__)


def new_chord_id():
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ChordModifier:
    """Per-chord playback modifier used by progressions."""

    duration: float = 1.0  # beats
    velocity: int = 100
    articulation: Optional[str] = None  # staccato, legato or accent


@dataclass
class Chord:
    """A concrete chord: root, type and absolute MIDI notes."""

    root: str
    type: str
    notes: List[int]
    bass_note: str = ""
    id: str = field(default_factory=new_chord_id)
    duration: Optional[int] = None  # ticks
    inversion: int = 0
    voicing: Optional[int] = None
    name: Optional[str] = None

    def __post_init__(self):
        if not self.bass_note:
            self.bass_note = self.root

    @property
    def is_slash_chord(self):
        return to_sharp(self.bass_note) != to_sharp(self.root)


def get_chord_notes(root_midi, chord_type, bass_offset=0, user_intervals=None):
    """
    Get chord notes based on root note and chord type.

    The bass note is prepended, so the chord still carries its own root
    among the upper notes.

    Args:
        root_midi: MIDI note number of the chord root
        chord_type: Key of CHORD_INTERVALS
        bass_offset: Semitones from the root to the bass note
        user_intervals: Intervals for the "user" chord type

    Returns:
        List of MIDI note numbers, empty when the type has no intervals
    """
    intervals = chord_intervals(chord_type, user_intervals)
    if not intervals:
        return []
    return [root_midi + bass_offset] + [root_midi + interval for interval in intervals]


def chord_display_name(root, chord_type, bass_note=None, use_flats=False):
    """
    Chord name such as "Am7" or "C/E".

    The slash part is only added when the bass differs from the root.
    """
    name = spell(root, use_flats) + chord_suffix(chord_type)
    if bass_note and to_sharp(bass_note) != to_sharp(root):
        name += "/" + spell(bass_note, use_flats)
    return name


def create_chord(root, chord_type, octave=Octave.BUILD, bass_note=None,
                 modifier=None, user_intervals=None):
    """
    Build a chord object.

    Args:
        root: Root note name
        chord_type: Key of CHORD_INTERVALS
        octave: Octave of the root (4 puts C on MIDI 60)
        bass_note: Optional bass note name for slash chords
        modifier: Optional ChordModifier; its duration sets the chord length
        user_intervals: Intervals used when chord_type is "user"

    Returns:
        Chord, or None when nothing can be played
    """
    if not is_note_name(root) or (bass_note and not is_note_name(bass_note)):
        logger.debug("No chord for unknown note %r / %r", root, bass_note)
        return None

    root = to_sharp(root)
    bass = to_sharp(bass_note) if bass_note else root
    root_midi = midi_note(root, octave)
    notes = get_chord_notes(
        root_midi,
        chord_type,
        midi_note(bass, octave) - root_midi,
        user_intervals,
    )
    if not notes:
        if chord_type == USER_CHORD_TYPE:
            logger.debug("User chord requested without intervals")
        else:
            logger.debug("No intervals for chord type %r", chord_type)
        return None

    duration = None
    if modifier is not None:
        duration = int(round(modifier.duration * Export.TICKS_PER_BEAT))

    return Chord(
        root=root,
        type=chord_type,
        notes=notes,
        bass_note=bass,
        duration=duration,
        name=chord_display_name(root, chord_type, bass),
    )


def transpose(notes, octave_shift):
    """Shift every note by whole octaves."""
    return [note + Music.NOTES_PER_OCTAVE * octave_shift for note in notes]


def invert(notes, inversion):
    """
    Apply an inversion to a list of notes.

    Each positive step raises the first note an octave and moves it to the
    end; each negative step lowers the last note an octave and moves it to
    the front. The note count never changes.
    """
    result = list(notes)
    if not result:
        return result
    for _ in range(abs(inversion)):
        if inversion > 0:
            result.append(result.pop(0) + Music.NOTES_PER_OCTAVE)
        else:
            result.insert(0, result.pop() - Music.NOTES_PER_OCTAVE)
    return result


def apply_voicing(chord, octave_shift=0, inversion=0):
    """Copy of chord with octave shift and inversion applied to its notes."""
    notes = invert(transpose(chord.notes, octave_shift), inversion)
    return replace(chord, notes=notes, inversion=inversion)
