"""
Unit tests for notes, spellings and scales.
"""
import pytest

from piano_chords.music_theory import (
    FLAT_NOTE_NAMES,
    MODE_NAMES,
    MODES,
    NOTE_NAMES,
    UnknownModeError,
    UnknownNoteError,
    midi_note,
    note_at,
    note_index,
    note_name_from_midi,
    relative_major,
    relative_minor,
    scale_degree,
    scale_notes,
    spell,
    to_flat,
    to_sharp,
    transpose_note,
)


class TestNotes:
    """Tests for note names and pitch classes."""

    def test_note_names_from_midi(self):
        """Test MIDI note to name conversion."""
        assert note_name_from_midi(60) == "C"  # C4
        assert note_name_from_midi(61) == "C#"
        assert note_name_from_midi(62) == "D"
        assert note_name_from_midi(72) == "C"  # C5 (octave up)
        assert note_name_from_midi(69) == "A"  # A4 (440Hz)

    def test_index_round_trip(self):
        """Every pitch class survives note_index -> note_at."""
        for i in range(12):
            assert note_index(note_at(i)) == i
        for name in NOTE_NAMES:
            assert note_at(note_index(name)) == name

    def test_note_at_wraps(self):
        assert note_at(12) == "C"
        assert note_at(-1) == "B"
        assert note_at(25) == "C#"

    def test_flat_spellings_share_pitch_class(self):
        for sharp, flat in zip(NOTE_NAMES, FLAT_NOTE_NAMES):
            assert note_index(flat) == note_index(sharp)
            assert to_sharp(flat) == sharp
            assert to_flat(sharp) == flat

    def test_spell(self):
        assert spell("A#") == "A#"
        assert spell("A#", use_flats=True) == "Bb"
        assert spell("Bb") == "A#"
        assert spell("E", use_flats=True) == "E"

    def test_unknown_note_raises(self):
        with pytest.raises(UnknownNoteError):
            note_index("H")
        with pytest.raises(ValueError):
            to_sharp("Cb")

    def test_midi_note(self):
        """C4 is 60 and octaves are 12 apart."""
        assert midi_note("C", 4) == 60
        assert midi_note("A", 4) == 69
        assert midi_note("C", 5) == 72
        assert midi_note("Eb", 4) == 63
        for name in NOTE_NAMES:
            for octave in range(0, 8):
                assert midi_note(name, octave + 1) - midi_note(name, octave) == 12

    def test_transpose_note(self):
        assert transpose_note("C", 7) == "G"
        assert transpose_note("A", 3) == "C"
        assert transpose_note("C", -1) == "B"

    def test_relative_keys(self):
        assert relative_minor("C") == "A"
        assert relative_major("A") == "C"
        assert relative_minor("G") == "E"


class TestScales:
    """Tests for scale construction."""

    def test_c_major(self):
        assert scale_notes("C", "major") == ["C", "D", "E", "F", "G", "A", "B"]

    def test_a_minor(self):
        assert scale_notes("A", "minor") == ["A", "B", "C", "D", "E", "F", "G"]

    def test_d_dorian(self):
        assert scale_notes("D", "dorian") == ["D", "E", "F", "G", "A", "B", "C"]

    def test_flat_root_uses_sharp_names(self):
        assert scale_notes("Bb", "major") == ["A#", "C", "D", "D#", "F", "G", "A"]

    def test_scale_sizes(self):
        """Seven notes in every mode, twelve in free mode."""
        for root in NOTE_NAMES:
            for mode in MODES:
                notes = scale_notes(root, mode)
                assert len(notes) == 7
                assert notes[0] == root
                assert len(set(notes)) == 7
            assert scale_notes(root, "free") == NOTE_NAMES

    def test_mode_names(self):
        assert MODE_NAMES[0] == "major"
        assert "free" in MODE_NAMES
        assert len(MODE_NAMES) == 8

    def test_unknown_mode_raises(self):
        with pytest.raises(UnknownModeError):
            scale_notes("C", "aeolian")

    def test_scale_degree(self):
        assert scale_degree("C", "C", "major") == 1
        assert scale_degree("B", "C", "major") == 7
        assert scale_degree("C#", "C", "major") is None
        assert scale_degree("Db", "A", "major") == 3
