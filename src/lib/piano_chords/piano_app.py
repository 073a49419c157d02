"""
Main chord piano application.
Ties together the theory engine, keyboard state and the audio player.
Platform-independent - receives the audio player through dependency injection.
"""
import logging
from collections import deque
from dataclasses import dataclass, replace

from .audio_protocol import user_intervals_from
from .chord_builder import apply_voicing, create_chord
from .constants import Bass, Instrument, Inversion, KeyboardSize, Music, Octave, Playback
from .diatonic import get_chord_suggestions
from .keyboard_state import Event, KeyboardState, bass_offset_semitones
from .midi_export import ChordProgression, export_progression_to_midi
from .music_theory import note_at
from .playback import AudioSession, ProgressionPlayer

logger = logging.getLogger(__name__)


def bass_midi_note(bass_index):
    """MIDI note of the played bass: C3 upwards, F and above one octave lower."""
    note = Bass.BASE_NOTE + bass_index
    if bass_index >= Bass.DROP_FROM_INDEX:
        note -= Music.NOTES_PER_OCTAVE
    return note


@dataclass
class PianoSettings:
    """Everything the settings panel can change, as one value."""

    key: str = Music.DEFAULT_KEY
    mode: str = Music.DEFAULT_MODE
    octave: int = Octave.DEFAULT
    inversion: int = Inversion.DEFAULT
    instrument: str = Instrument.DEFAULT
    fader: float = Playback.DEFAULT_FADER
    use_flats: bool = False


class PianoApp:
    """
    Chord piano application.
    Platform-independent - receives the audio player through dependency injection.
    """

    def __init__(self, audio_player, key=Music.DEFAULT_KEY, mode=Music.DEFAULT_MODE,
                 size=KeyboardSize.XL, session=None, user_chord_provider=None):
        """
        Initialize the piano.

        Args:
            audio_player: AudioPlayer implementation
            key: Initial key
            mode: Initial mode
            size: Keyboard layout
            session: AudioSession (instrument, tempo, flam, fader)
            user_chord_provider: Optional UserChordProvider for the "user" type
        """
        self.audio = audio_player
        self.state = KeyboardState(key=key, mode=mode, size=size)
        self.session = session or AudioSession()
        self.user_chord_provider = user_chord_provider

        self.octave = Octave.DEFAULT
        self.inversion = Inversion.DEFAULT

        self.last_played_chord = None
        self.recording = deque(maxlen=Playback.MAX_RECORDED_CHORDS)
        self._progression_player = None

        self.state.subscribe(Event.MODE_CHANGED, self._on_mode_changed)

    def _on_mode_changed(self, data):
        self.audio.stop_chord()
        self.last_played_chord = None

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def set_key(self, key):
        self.state.set_key(key)

    def set_mode(self, mode):
        self.state.set_mode(mode)

    def set_octave(self, octave):
        """Set the octave shift (clamped to safe range)."""
        self.octave = max(Octave.MIN, min(Octave.MAX, octave))

    def change_octave(self, delta):
        self.set_octave(self.octave + delta)

    def set_inversion(self, inversion):
        """Set the inversion (clamped to safe range)."""
        self.inversion = max(Inversion.MIN, min(Inversion.MAX, inversion))

    def change_inversion(self, delta):
        self.set_inversion(self.inversion + delta)

    def set_instrument(self, name):
        self.session.set_instrument(name)

    @property
    def settings(self):
        """Snapshot of the current settings."""
        return PianoSettings(
            key=self.state.key,
            mode=self.state.mode,
            octave=self.octave,
            inversion=self.inversion,
            instrument=self.session.instrument,
            fader=self.session.fader,
            use_flats=self.state.use_flats,
        )

    def apply_settings(self, settings):
        """
        Apply a PianoSettings value.

        The key is applied before the mode.
        """
        self.state.use_flats = settings.use_flats
        self.state.update(key=settings.key, mode=settings.mode)
        self.set_octave(settings.octave)
        self.set_inversion(settings.inversion)
        self.set_instrument(settings.instrument)
        self.session.fader = max(0.0, min(1.0, settings.fader))

    # ------------------------------------------------------------------
    # Playing
    # ------------------------------------------------------------------
    def build_chord(self, note, slot=None):
        """
        Chord a slot would play now, with octave shift and inversion applied.

        Returns:
            Chord, or None for keys outside the scale and unplayable types
        """
        if not self.state.is_in_scale(note):
            return None

        chord_type = self.state.current_chord_type(note, slot)
        chord = create_chord(
            note,
            chord_type,
            user_intervals=user_intervals_from(self.user_chord_provider),
        )
        if chord is None:
            return None

        chord = apply_voicing(chord, self.octave, self.inversion)
        name = self.state.chord_name(note, slot) or chord.name
        # Lower slots show the plain chord name
        if slot is not None and slot > 0:
            name = name.split("/")[0]

        # The slash bass sounds through play_bass_note, not in the chord notes
        bass_note = chord.bass_note
        if bass_offset_semitones(self.state.bass_offset(note, slot)) is not None:
            bass_note = note_at(self.state.bass_index(note, slot))
        return replace(chord, name=name, bass_note=bass_note)

    def press_key(self, note, slot=None):
        """
        Handle a key (or key slot) press.

        Plays the slot's chord at the fader volume and its bass note at the
        opposite volume.

        Returns:
            The played Chord, or None if nothing was played
        """
        if slot is not None and KeyboardSize.SLOTS[self.state.size] == 1:
            slot = None
        self.state.last_pressed = self.state.slot_key(note, slot)
        if self.state.is_disabled(note, slot):
            return None

        chord = self.build_chord(note, slot)
        if chord is None:
            logger.debug("Nothing to play on %s (slot %s)", note, slot)
            return None

        self.audio.play_chord(chord.notes, self.session.instrument,
                             self.session.chord_volume, self.session.flam_delay)
        bass_note = bass_midi_note(self.state.bass_index(note, slot))
        self.audio.play_bass_note(bass_note, self.session.bass_volume)

        self.last_played_chord = chord
        self.state.current_chord = chord
        self.recording.append(chord)
        self.state.emit(Event.CHORD_TRIGGERED, {
            "note": chord.root,
            "slot": slot,
            "notes": list(chord.notes),
            "bass": bass_note,
            "name": chord.name,
        })
        return chord

    def release(self):
        """Stop the sounding chord."""
        self.audio.stop_chord()
        self.state.current_chord = None
        self.state.emit(Event.CHORD_CLEARED, None)

    def adjust_chord_type(self, direction):
        """Cycle the chord type of the last pressed slot."""
        return self.state.adjust_last_chord_type(direction)

    def adjust_bass_offset(self, direction):
        """Cycle the bass offset of the last pressed slot."""
        slot_key = self.state.last_pressed
        if slot_key is None:
            return None
        return self.state.step_bass_offset(slot_key.note, slot_key.slot, direction)

    def suggestions(self):
        """Chord suggestions following the last played chord."""
        return get_chord_suggestions(self.last_played_chord, self.state.key, self.state.mode)

    # ------------------------------------------------------------------
    # Progressions
    # ------------------------------------------------------------------
    def recorded_progression(self, name="", tempo=None):
        """Progression made of every chord played since the last clear."""
        return ChordProgression(
            chords=list(self.recording),
            tempo=tempo or self.session.bpm,
            name=name,
            key=self.state.key,
            mode=self.state.mode,
        )

    def clear_recording(self):
        self.recording.clear()

    def export_recording(self, name=""):
        """MIDI export of the recorded progression."""
        return export_progression_to_midi(self.recorded_progression(name))

    def play_progression(self, progression, on_chord_change=None, loop=False):
        """
        Start playing a progression on the running event loop.

        Any progression already playing is stopped first.

        Returns:
            The ProgressionPlayer driving playback
        """
        self.stop_progression()
        self._progression_player = ProgressionPlayer(
            self.audio,
            [chord.notes for chord in progression.chords],
            tempo=progression.tempo or Playback.DEFAULT_TEMPO,
            session=self.session,
            on_chord_change=on_chord_change,
            loop=loop,
        )
        self._progression_player.start()
        return self._progression_player

    def stop_progression(self):
        if self._progression_player is not None:
            self._progression_player.stop()
            self._progression_player = None

    def cleanup(self):
        """Clean shutdown - stop playback and silence everything."""
        self.stop_progression()
        self.audio.stop_chord()
