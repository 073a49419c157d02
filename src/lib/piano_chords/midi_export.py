"""
Standard MIDI file export of a chord progression.

The file is Format 1 with two tracks: tempo/name meta events, then the
notes on channel 0 with the balafon program selected.
"""
import io
import logging
import re
from dataclasses import dataclass, field
from typing import List, Tuple

import mido

from .chord_builder import Chord, new_chord_id
from .constants import Export, Midi, Music, Playback

logger = logging.getLogger(__name__)

MIDI_MIME_TYPE = Export.MIME_TYPE

# Largest value the 3-byte set_tempo field can hold
MAX_TEMPO_FIELD = 0xFFFFFF


@dataclass
class ChordProgression:
    """Ordered chords plus the tempo and key they were written in."""

    chords: List[Chord] = field(default_factory=list)
    tempo: float = Playback.DEFAULT_TEMPO
    name: str = ""
    time_signature: Tuple[int, int] = (4, 4)
    key: str = Music.DEFAULT_KEY
    mode: str = Music.DEFAULT_MODE
    id: str = field(default_factory=new_chord_id)


@dataclass(frozen=True)
class MidiExport:
    """Exported file bytes with the metadata a download needs."""

    data: bytes
    filename: str
    mime_type: str = MIDI_MIME_TYPE


def tempo_to_microseconds(tempo):
    """
    Microseconds per quarter note for a tempo in BPM.

    Export is best effort: a zero tempo gives 0 and other out-of-range
    values keep only the low 24 bits, as the file field would.
    """
    if not tempo:
        return 0
    return int(60000000 / tempo) & MAX_TEMPO_FIELD


def _data_byte(value):
    return int(value) & 0x7F


def _latin1(text):
    return text.encode("latin-1", "replace").decode("latin-1")


def suggested_filename(progression):
    """File name for a progression, e.g. "my-song.mid"."""
    slug = re.sub(r"[^A-Za-z0-9]+", "-", progression.name or "").strip("-").lower()
    return (slug or "chord-progression") + Export.FILE_EXTENSION


def build_tempo_track(progression):
    track = mido.MidiTrack()
    track.append(mido.MetaMessage("set_tempo", tempo=tempo_to_microseconds(progression.tempo), time=0))
    track.append(mido.MetaMessage("track_name", name=_latin1(progression.name or Export.DEFAULT_NAME), time=0))
    track.append(mido.MetaMessage("end_of_track", time=0))
    return track


def build_note_track(progression):
    """
    Note track: program change, then each chord's note-ons together and
    its note-offs together one chord duration later.
    """
    track = mido.MidiTrack()
    track.append(mido.Message("program_change", channel=Midi.CHANNEL_DEFAULT,
                              program=Export.PROGRAM, time=0))

    rest = 0
    for chord in progression.chords:
        duration = chord.duration if chord.duration is not None else Export.DEFAULT_DURATION
        duration = max(0, int(duration))
        if not chord.notes:
            rest += duration
            continue

        for i, note in enumerate(chord.notes):
            track.append(mido.Message("note_on", channel=Midi.CHANNEL_DEFAULT, note=_data_byte(note),
                                      velocity=Export.VELOCITY, time=rest if i == 0 else 0))
        rest = 0
        for i, note in enumerate(chord.notes):
            track.append(mido.Message("note_off", channel=Midi.CHANNEL_DEFAULT, note=_data_byte(note),
                                      velocity=0, time=duration if i == 0 else 0))

    track.append(mido.MetaMessage("end_of_track", time=rest))
    return track


def progression_to_midi_file(progression):
    """Build the mido.MidiFile for a progression."""
    midi_file = mido.MidiFile(type=Export.FORMAT, ticks_per_beat=Export.TICKS_PER_BEAT)
    midi_file.tracks.append(build_tempo_track(progression))
    midi_file.tracks.append(build_note_track(progression))
    return midi_file


def export_progression_to_midi(progression):
    """
    Serialize a progression to Standard MIDI File bytes.

    Args:
        progression: ChordProgression

    Returns:
        MidiExport with the file bytes, a suggested file name and the
        "audio/midi" media type
    """
    buffer = io.BytesIO()
    progression_to_midi_file(progression).save(file=buffer)
    data = buffer.getvalue()
    logger.debug("Exported %d chords (%d bytes)", len(progression.chords), len(data))
    return MidiExport(data=data, filename=suggested_filename(progression))


def write_midi_file(progression, path):
    """Export a progression straight to a .mid file and return its path."""
    export = export_progression_to_midi(progression)
    with open(path, "wb") as f:
        f.write(export.data)
    return path
