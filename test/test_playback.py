"""
Unit tests for the audio session and progression stepping.
"""
import asyncio

from piano_chords.constants import Flam, Instrument
from piano_chords.playback import (
    AudioSession,
    ProgressionPlayer,
    chord_index_for_step,
    click_number,
    flam_delay,
    flam_onsets,
    resolve_instrument,
    step_interval,
)

from mock_audio import MockAudioPlayer, no_sleep

C_MAJOR = [60, 64, 67]
D_MINOR = [62, 65, 69]


async def _yield(seconds):
    await asyncio.sleep(0)


class TestAudioSession:
    """Tests for session settings."""

    def test_defaults(self):
        session = AudioSession()
        assert session.instrument == Instrument.BALAFON
        assert session.bpm == 120
        assert session.flam == Flam.OFF
        assert session.chord_volume == 0.25
        assert session.bass_volume == 0.75

    def test_unknown_instrument_falls_back_to_piano(self):
        session = AudioSession()
        session.set_instrument("theremin")
        assert session.instrument == Instrument.PIANO
        session.set_instrument(Instrument.RHODES)
        assert session.instrument == Instrument.RHODES
        assert resolve_instrument("pad") == "pad"

    def test_bpm(self):
        session = AudioSession()
        session.set_bpm(90)
        assert session.bpm == 90
        session.set_bpm(0)
        assert session.bpm == 120

    def test_flam(self):
        session = AudioSession()
        assert session.flam_delay == 0.0
        session.set_flam("1/16")
        assert session.flam_delay == 0.25
        session.set_flam("1/3")
        assert session.flam == Flam.OFF
        assert flam_delay("1/32", 60) == 0.25
        assert flam_delay("1/48", 120) == 2.0 / 48 * 2

    def test_flam_onsets(self):
        assert flam_onsets(C_MAJOR, 0.25) == [(0.0, 60), (0.25, 64), (0.5, 67)]
        assert flam_onsets(C_MAJOR, 0.0) == [(0.0, 60), (0.0, 64), (0.0, 67)]
        assert flam_onsets([], 0.25) == []

    def test_fader_snaps(self):
        session = AudioSession()
        assert session.next_fader_snap() == 0.375
        session.fader = 1
        assert session.next_fader_snap() == 0
        assert session.bass_volume == 1.0


class TestStepping:
    """Tests for the quarter-step helpers."""

    def test_step_interval(self):
        assert step_interval(120) == 0.125
        assert step_interval(60) == 0.25

    def test_click_numbers(self):
        assert [click_number(q) for q in range(9)] == [1, 2, 3, 4, 1, 2, 3, 4, 1]

    def test_chord_boundaries(self):
        assert chord_index_for_step(0) == 0
        assert chord_index_for_step(3) is None
        assert chord_index_for_step(4) == 1
        assert chord_index_for_step(9) is None


class TestProgressionPlayer:
    """Tests for playing a progression through an AudioPlayer."""

    def test_plays_each_chord_on_the_beat(self):
        audio = MockAudioPlayer()
        changes = []
        player = ProgressionPlayer(audio, [C_MAJOR, D_MINOR], tempo=120,
                                   on_chord_change=changes.append, sleep=no_sleep)
        asyncio.run(player.run())

        assert [call[1] for call in audio.of_kind("click")] == [1, 2, 3, 4, 1, 2, 3, 4]
        assert [call[1] for call in audio.of_kind("chord")] == [C_MAJOR, D_MINOR]
        assert changes == [0, 1]
        assert audio.calls[0] == ("click", 1)
        assert audio.calls[1] == ("stop",)
        assert audio.calls[-1] == ("stop",)
        assert player.step == 8

    def test_uses_session_instrument_and_volume(self):
        audio = MockAudioPlayer()
        session = AudioSession(instrument=Instrument.PAD, fader=0.5)
        player = ProgressionPlayer(audio, [C_MAJOR], session=session, sleep=no_sleep)
        asyncio.run(player.run())
        assert audio.of_kind("chord") == [("chord", C_MAJOR, Instrument.PAD, 0.5, 0.0)]

    def test_sleeps_one_quarter_step(self):
        audio = MockAudioPlayer()
        waits = []

        async def record_sleep(seconds):
            waits.append(seconds)

        player = ProgressionPlayer(audio, [C_MAJOR], tempo=60, sleep=record_sleep)
        asyncio.run(player.run())
        assert waits == [0.25] * 4

    def test_bad_tempo_falls_back(self):
        player = ProgressionPlayer(MockAudioPlayer(), [C_MAJOR], tempo=0)
        assert player.tempo == 120
        assert player.session.bpm == 120
        player.session.set_flam("1/16")
        assert player.session.flam_delay == 0.25

    def test_passes_flam_delay(self):
        audio = MockAudioPlayer()
        session = AudioSession(flam="1/32")
        player = ProgressionPlayer(audio, [C_MAJOR], session=session, sleep=no_sleep)
        asyncio.run(player.run())
        assert audio.of_kind("chord") == [("chord", C_MAJOR, Instrument.BALAFON, 0.25, 0.125)]

    def test_own_session_follows_tempo(self):
        player = ProgressionPlayer(MockAudioPlayer(), [C_MAJOR], tempo=60)
        assert player.session.bpm == 60

    def test_empty_progression(self):
        audio = MockAudioPlayer()
        player = ProgressionPlayer(audio, [], sleep=no_sleep)
        asyncio.run(player.run())
        assert audio.of_kind("chord") == []
        assert audio.calls == [("stop",)]

    def test_loop_until_stopped(self):
        audio = MockAudioPlayer()
        changes = []

        def on_chord_change(index):
            changes.append(index)
            if len(changes) == 5:
                player.stop()

        player = ProgressionPlayer(audio, [C_MAJOR, D_MINOR], loop=True,
                                   on_chord_change=on_chord_change, sleep=no_sleep)
        asyncio.run(player.run())
        assert changes == [0, 1, 0, 1, 0]
        assert audio.calls[-1] == ("stop",)

    def test_start_and_wait(self):
        audio = MockAudioPlayer()
        player = ProgressionPlayer(audio, [C_MAJOR, D_MINOR], sleep=no_sleep)

        async def main():
            task = player.start()
            assert player.task is task
            await task

        asyncio.run(main())
        assert not player.is_playing
        assert len(audio.of_kind("chord")) == 2

    def test_stop_cancels_task(self):
        audio = MockAudioPlayer()
        player = ProgressionPlayer(audio, [C_MAJOR, D_MINOR], loop=True, sleep=_yield)

        async def main():
            player.start()
            for _ in range(6):
                await asyncio.sleep(0)
            assert player.is_playing
            player.stop()
            await asyncio.gather(player.task, return_exceptions=True)

        asyncio.run(main())
        assert not player.is_playing
        assert player.task.done()
        assert audio.calls[-1] == ("stop",)

    def test_stop_is_idempotent(self):
        audio = MockAudioPlayer()
        player = ProgressionPlayer(audio, [C_MAJOR])
        player.stop()
        player.stop()
        assert audio.calls == [("stop",)]
