"""
Audio collaborator protocol definitions.
These are abstract base classes that each platform must implement.

This allows the same application code to drive:
- a MIDI output port on a desktop (see plat_computer)
- a sample player or oscillator bank on a phone
- recording mocks in the test suite
"""


class AudioPlayer:
    """Abstract interface for sounding chords, bass notes and clicks."""

    def play_chord(self, notes, instrument=None, volume=1.0, delay=0.0):
        """
        Sound a chord.

        Args:
            notes: List of MIDI note numbers
            instrument: Instrument identifier, or None for the current one
            volume: Float 0.0-1.0
            delay: Flam in seconds; note i starts i * delay after the first
        """
        raise NotImplementedError

    def play_bass_note(self, note, volume=1.0):
        """
        Sound a single bass note.

        Args:
            note: MIDI note number
            volume: Float 0.0-1.0
        """
        raise NotImplementedError

    def stop_chord(self):
        """
        Silence whatever chord is sounding.
        Must be safe to call repeatedly and with nothing playing.
        """
        raise NotImplementedError

    def play_click(self, number):
        """
        Sound a metronome click.

        Args:
            number: Beat within the chord, 1-4
        """
        raise NotImplementedError


class UserChordProvider:
    """Source of the user-defined chord for the "user" chord type."""

    @property
    def current_user_chord_type(self):
        """Name of the user chord, or None if none is defined."""
        raise NotImplementedError

    @property
    def current_user_chord_intervals(self):
        """Semitone offsets of the user chord (may be empty)."""
        raise NotImplementedError


class StaticUserChord(UserChordProvider):
    """User chord fixed at construction time."""

    def __init__(self, chord_type=None, intervals=()):
        self._chord_type = chord_type
        self._intervals = list(intervals)

    @property
    def current_user_chord_type(self):
        return self._chord_type

    @property
    def current_user_chord_intervals(self):
        return list(self._intervals)


def user_intervals_from(provider):
    """
    Intervals to pass to the chord builder for the "user" type.

    Returns:
        List of intervals, empty when there is no provider or no user chord
    """
    if provider is None or not provider.current_user_chord_type:
        return []
    return list(provider.current_user_chord_intervals or [])
