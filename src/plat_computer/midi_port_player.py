#!/usr/bin/env python3
"""
Play chord progressions on a MIDI output port, or export them to a file.

    python src/plat_computer/midi_port_player.py list
    python src/plat_computer/midi_port_player.py play --key D --mode minor
    python src/plat_computer/midi_port_player.py export --key G -o g.mid
"""
import argparse
import asyncio
import sys
import threading
from functools import partial

import mido

from piano_chords import AudioPlayer, ChordProgression, PianoApp
from piano_chords.constants import Instrument, Midi, Playback
from piano_chords.diatonic import get_common_progressions
from piano_chords.midi_export import write_midi_file
from piano_chords.music_theory import MODE_NAMES
from piano_chords.playback import flam_onsets

# General MIDI programs standing in for the app's instruments
GM_PROGRAMS = {
    Instrument.BALAFON: 108,
    Instrument.PIANO: 0,
    Instrument.RHODES: 4,
    Instrument.PLUCK: 24,
    Instrument.PAD: 88,
    Instrument.STEEL_DRUM: 114,
    Instrument.BASS: 32,
}

CHORD_CHANNEL = 0
BASS_CHANNEL = 1
CLICK_CHANNEL = 9
CLICK_NOTES = {1: 76, 2: 77, 3: 77, 4: 77}  # wood blocks


def _velocity(volume):
    return max(Midi.VELOCITY_MIN, min(Midi.VELOCITY_MAX, int(round(volume * Midi.VELOCITY_MAX))))


def schedule_later(delay, callback):
    """Run callback on a timer thread after delay seconds."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class MidoAudioPlayer(AudioPlayer):
    """AudioPlayer that sends note messages to a mido output port."""

    def __init__(self, port, schedule=schedule_later):
        """
        Args:
            port: Open mido output port
            schedule: Called as schedule(delay, callback) for flammed notes;
                must return an object with cancel()
        """
        self.port = port
        self._schedule = schedule
        self._lock = threading.Lock()
        self._sounding = []  # (channel, note)
        self._pending = []
        self._instrument = None

    def _select(self, instrument):
        if instrument is None or instrument == self._instrument:
            return
        self._instrument = instrument
        self.port.send(mido.Message("program_change", channel=CHORD_CHANNEL,
                                    program=GM_PROGRAMS.get(instrument, 0)))

    def _note_on(self, channel, note, volume):
        if not Midi.NOTE_MIN <= note <= Midi.NOTE_MAX:
            return
        with self._lock:
            self.port.send(mido.Message("note_on", channel=channel, note=note, velocity=_velocity(volume)))
            self._sounding.append((channel, note))

    def play_chord(self, notes, instrument=None, volume=1.0, delay=0.0):
        self._select(instrument)
        for onset, note in flam_onsets(notes, delay):
            if onset <= 0:
                self._note_on(CHORD_CHANNEL, note, volume)
            else:
                self._pending.append(
                    self._schedule(onset, partial(self._note_on, CHORD_CHANNEL, note, volume)))

    def play_bass_note(self, note, volume=1.0):
        self._note_on(BASS_CHANNEL, note, volume)

    def stop_chord(self):
        for pending in self._pending:
            pending.cancel()
        self._pending = []
        with self._lock:
            for channel, note in self._sounding:
                self.port.send(mido.Message("note_off", channel=channel, note=note, velocity=0))
            self._sounding = []

    def play_click(self, number):
        note = CLICK_NOTES.get(number, CLICK_NOTES[1])
        self.port.send(mido.Message("note_on", channel=CLICK_CHANNEL, note=note, velocity=80))
        self.port.send(mido.Message("note_off", channel=CLICK_CHANNEL, note=note, velocity=0))


def list_outputs():
    """List all available MIDI output ports."""
    outputs = mido.get_output_names()
    if not outputs:
        print("No MIDI output ports found!")
        return []
    print("Available MIDI outputs:")
    for i, name in enumerate(outputs):
        print(f"  [{i}] {name}")
    return outputs


def demo_progression(key, mode, pattern, tempo):
    """One of the common progressions in the given key."""
    for progression in get_common_progressions(key, mode):
        if progression["name"] == pattern:
            return ChordProgression(
                chords=progression["chords"],
                tempo=tempo,
                name=key + " " + mode + " " + pattern,
                key=key,
                mode=mode,
            )
    raise SystemExit("Unknown progression: " + pattern)


async def play(port_name, progression, instrument):
    with mido.open_output(port_name) as outport:
        print(f"Opened port: {port_name}")
        app = PianoApp(MidoAudioPlayer(outport), key=progression.key, mode=progression.mode)
        app.set_instrument(instrument)

        def on_chord_change(index):
            print(f"[{index + 1}] {progression.chords[index].name}")

        player = app.play_progression(progression, on_chord_change=on_chord_change)
        try:
            await player.task
        finally:
            app.cleanup()


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("command", choices=["list", "play", "export"])
    parser.add_argument("--key", default="C")
    parser.add_argument("--mode", default="major", choices=MODE_NAMES)
    parser.add_argument("--progression", default="I-V-vi-IV")
    parser.add_argument("--tempo", type=float, default=Playback.DEFAULT_TEMPO)
    parser.add_argument("--instrument", default=Instrument.DEFAULT)
    parser.add_argument("--port", default=None)
    parser.add_argument("-o", "--output", default=None)
    args = parser.parse_args(argv)

    if args.command == "list":
        list_outputs()
        return 0

    progression = demo_progression(args.key, args.mode, args.progression, args.tempo)
    if not progression.chords:
        print("No diatonic chords in free mode, nothing to do.")
        return 1

    if args.command == "export":
        path = args.output or progression.name.replace(" ", "-").lower() + ".mid"
        write_midi_file(progression, path)
        print(f"Wrote {path}")
        return 0

    port_name = args.port
    if port_name is None:
        outputs = list_outputs()
        if not outputs:
            return 1
        port_name = outputs[0]
        print(f"\nUsing first available port: {port_name}")
    try:
        asyncio.run(play(port_name, progression, args.instrument))
    except KeyboardInterrupt:
        print("\nStopped by user.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
