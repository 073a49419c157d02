"""
Progression playback: explicit audio session state and the quarter-note
stepping loop that drives an AudioPlayer.
"""
import asyncio
import logging
from dataclasses import dataclass

from .constants import Flam, Instrument, Playback

logger = logging.getLogger(__name__)


def resolve_instrument(name):
    """Instrument to use for a requested name; unknown names get the piano."""
    if name in Instrument.ALL:
        return name
    logger.debug("Unknown instrument %r, using %s", name, Instrument.FALLBACK)
    return Instrument.FALLBACK


def quarter_seconds(tempo):
    return 60.0 / tempo


def flam_delay(flam, bpm):
    """
    Delay between successive notes of a strummed chord, in seconds.

    A flam of 1/N spreads notes by two 1/N-of-a-whole-note steps; "off"
    and unknown values give no delay.
    """
    division = Flam.DIVISIONS.get(flam)
    if division is None:
        return 0.0
    whole = quarter_seconds(bpm) * 4
    return (whole / division) * 2


def flam_onsets(notes, delay):
    """
    Start time of each note of a strummed chord.

    Returns:
        List of (seconds after the first note, note), lowest index first
    """
    return [(i * delay, note) for i, note in enumerate(notes)]


@dataclass
class AudioSession:
    """Playback settings owned by one instrument session."""

    instrument: str = Instrument.DEFAULT
    bpm: float = Playback.DEFAULT_TEMPO
    flam: str = Flam.OFF
    fader: float = Playback.DEFAULT_FADER

    def set_instrument(self, name):
        self.instrument = resolve_instrument(name)

    def set_flam(self, flam):
        self.flam = flam if flam in Flam.ALL else Flam.OFF

    def set_bpm(self, bpm):
        self.bpm = bpm if bpm and bpm > 0 else Playback.DEFAULT_TEMPO

    @property
    def chord_volume(self):
        return self.fader

    @property
    def bass_volume(self):
        return 1.0 - self.fader

    @property
    def flam_delay(self):
        return flam_delay(self.flam, self.bpm)

    def next_fader_snap(self):
        """Advance the fader to the next snap point (wrapping)."""
        points = Playback.FADER_SNAP_POINTS
        current = next((i for i, p in enumerate(points) if abs(p - self.fader) < 0.01), -1)
        self.fader = points[(current + 1) % len(points)]
        return self.fader


def step_interval(tempo):
    """Seconds between quarter steps; four steps make one chord."""
    return quarter_seconds(tempo) / Playback.QUARTERS_PER_CHORD


def click_number(quarter_index):
    """Click sample (1-4) for a quarter step."""
    return quarter_index % Playback.QUARTERS_PER_CHORD + 1


def chord_index_for_step(quarter_index):
    """
    Chord started on a quarter step.

    Returns:
        quarter_index // 4 on chord boundaries, None between them
    """
    if quarter_index % Playback.QUARTERS_PER_CHORD != 0:
        return None
    return quarter_index // Playback.QUARTERS_PER_CHORD


class ProgressionPlayer:
    """
    Steps through a progression on an asyncio loop.

    Every quarter step plays a click; every fourth step stops the previous
    chord and plays the next one. stop() may be called at any time, any
    number of times.
    """

    def __init__(self, player, progression_notes, tempo=Playback.DEFAULT_TEMPO,
                 session=None, on_chord_change=None, loop=False, sleep=asyncio.sleep):
        """
        Args:
            player: AudioPlayer implementation
            progression_notes: List of chords, each a list of MIDI notes
            tempo: Beats per minute
            session: AudioSession for instrument and volume
            on_chord_change: Called with the chord index when a chord starts
            loop: Wrap around instead of finishing after the last chord
            sleep: Coroutine function used to wait between steps
        """
        self.player = player
        self.progression_notes = [list(notes) for notes in progression_notes]
        self.tempo = tempo if tempo and tempo > 0 else Playback.DEFAULT_TEMPO
        self.session = session or AudioSession(bpm=self.tempo)
        self.on_chord_change = on_chord_change
        self.loop = loop
        self._sleep = sleep
        self._stopped = False
        self._task = None
        self.step = 0

    @property
    def task(self):
        return self._task

    @property
    def is_playing(self):
        return self._task is not None and not self._task.done() and not self._stopped

    def _total_steps(self):
        return len(self.progression_notes) * Playback.QUARTERS_PER_CHORD

    def _play_step(self, quarter_index):
        self.player.play_click(click_number(quarter_index))

        chord_index = chord_index_for_step(quarter_index)
        if chord_index is None:
            return
        if self.loop and self.progression_notes:
            chord_index %= len(self.progression_notes)
        if chord_index < len(self.progression_notes):
            self.player.stop_chord()
            self.player.play_chord(
                self.progression_notes[chord_index],
                self.session.instrument,
                self.session.chord_volume,
                self.session.flam_delay,
            )
            if self.on_chord_change is not None:
                self.on_chord_change(chord_index)

    async def run(self):
        """Play until the progression ends or stop() is called."""
        interval = step_interval(self.tempo)
        while not self._stopped:
            if not self.loop and self.step >= self._total_steps():
                break
            if self.loop and not self.progression_notes:
                break
            logger.debug("Playing step %d", self.step + 1)
            self._play_step(self.step)
            self.step += 1
            if self._stopped:
                break
            await self._sleep(interval)
        self.player.stop_chord()

    def start(self):
        """Schedule run() on the running event loop and return the task."""
        self._stopped = False
        self._task = asyncio.ensure_future(self.run())
        return self._task

    def stop(self):
        """Stop scheduling and silence the current chord."""
        if self._stopped:
            return
        self._stopped = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self.player.stop_chord()
