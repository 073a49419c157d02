"""
Unit tests for diatonic analysis, suggestions and progressions.
"""
from piano_chords.chord_builder import create_chord
from piano_chords.chord_table import ALL_CHORD_TYPES
from piano_chords.diatonic import (
    MAJOR_DEGREE_CHORD_TYPES,
    MINOR_DEGREE_CHORD_TYPES,
    PROGRESSION_PATTERNS,
    available_chord_types,
    diatonic_chords,
    fallback_chord_type,
    get_chord_suggestions,
    get_common_progressions,
    is_chord_type_allowed,
    is_diatonic,
    select_chord_type,
)
from piano_chords.music_theory import MODES, NOTE_NAMES, scale_notes


class TestDiatonic:
    """Tests for diatonic membership."""

    def test_is_diatonic(self):
        assert is_diatonic(create_chord("D", "minor7"), "C", "major")
        assert not is_diatonic(create_chord("D", "major"), "C", "major")
        assert is_diatonic(create_chord("D", "major"), "C", "free")

    def test_octave_does_not_matter(self):
        chord = create_chord("G", "7", octave=2)
        assert is_diatonic(chord, "C", "major")

    def test_diatonic_closure(self):
        """Every chord offered for a key only uses notes of its scale."""
        for key in NOTE_NAMES:
            for mode in MODES:
                scale = scale_notes(key, mode)
                chords = diatonic_chords(key, mode)
                assert chords
                for chord in chords:
                    assert chord.root in scale
                    assert is_diatonic(chord, key, mode)

    def test_c_major_chords_in_degree_order(self):
        chords = diatonic_chords("C", "major")
        names = [chord.name for chord in chords]
        assert names[0] == "C"
        assert "Dm7" in names
        assert "G7" in names
        assert "Bdim" in names
        assert "Bm7b5" in names
        assert "C7" not in names
        roots = [chord.root for chord in chords]
        order = scale_notes("C", "major")
        assert roots == sorted(roots, key=order.index)

    def test_free_mode_has_no_diatonic_chords(self):
        assert diatonic_chords("C", "free") == []


class TestAvailableChordTypes:
    """Tests for per-degree chord type lists."""

    def test_major_degrees(self):
        assert available_chord_types("C", "C", "major") == MAJOR_DEGREE_CHORD_TYPES["1"]
        assert available_chord_types("D", "C", "major")[0] == "minor"
        assert available_chord_types("B", "C", "major")[0] == "dim"

    def test_minor_uses_minor_table(self):
        assert available_chord_types("A", "A", "minor") == MINOR_DEGREE_CHORD_TYPES["1"]
        assert available_chord_types("B", "A", "minor")[0] == "dim"

    def test_other_modes_use_major_table(self):
        assert available_chord_types("D", "D", "dorian") == MAJOR_DEGREE_CHORD_TYPES["1"]
        assert available_chord_types("E", "D", "dorian") == MAJOR_DEGREE_CHORD_TYPES["2"]

    def test_out_of_scale_is_empty(self):
        assert available_chord_types("C#", "C", "major") == []

    def test_free_mode_offers_catalog(self):
        types = available_chord_types("C#", "C", "free")
        assert len(types) == 49
        assert tuple(types) == ALL_CHORD_TYPES

    def test_flat_note_matches_degree(self):
        assert available_chord_types("Bb", "F", "major") == MAJOR_DEGREE_CHORD_TYPES["4"]

    def test_is_chord_type_allowed(self):
        assert is_chord_type_allowed("G", "7", "C", "major")
        assert not is_chord_type_allowed("C", "minor", "C", "major")

    def test_select_chord_type(self):
        types = ["minor", "minor7"]
        assert select_chord_type(types, 0) == "minor"
        assert select_chord_type(types, 3) == "minor7"
        assert select_chord_type([], 5) == fallback_chord_type() == "major"


class TestSuggestions:
    """Tests for next-chord suggestions."""

    def test_without_previous_chord(self):
        suggestions = get_chord_suggestions(None, "C", "major")
        assert [c.name for c in suggestions] == [c.name for c in diatonic_chords("C", "major")]

    def test_after_c_major(self):
        suggestions = get_chord_suggestions(create_chord("C", "major"), "C", "major")
        assert len(suggestions) >= 3
        roots = {c.root for c in suggestions[:-1]}
        assert roots == {"F", "G"}
        assert (suggestions[-1].root, suggestions[-1].type) == ("A", "minor")

    def test_after_a_minor_adds_relative_major(self):
        suggestions = get_chord_suggestions(create_chord("A", "minor"), "C", "major")
        assert ("C", "major") in [(c.root, c.type) for c in suggestions]

    def test_backfill_stops_at_five(self):
        # Neither F# nor G# is in C major and A# minor is not diatonic
        suggestions = get_chord_suggestions(create_chord("C#", "major"), "C", "major")
        expected = diatonic_chords("C", "major")[:5]
        assert [(c.root, c.type) for c in suggestions] == [(c.root, c.type) for c in expected]

    def test_free_mode(self):
        assert get_chord_suggestions(None, "C", "free") == []
        assert get_chord_suggestions(create_chord("C", "major"), "C", "free") == []


class TestCommonProgressions:
    """Tests for the named progression patterns."""

    def test_names_and_lengths(self):
        progressions = get_common_progressions("C", "major")
        assert [p["name"] for p in progressions] == [name for name, _ in PROGRESSION_PATTERNS]
        for progression, (_, degrees) in zip(progressions, PROGRESSION_PATTERNS):
            assert len(progression["chords"]) == len(degrees)

    def test_degrees_index_diatonic_list(self):
        chords = diatonic_chords("G", "major")
        progressions = get_common_progressions("G", "major")
        first = progressions[0]["chords"]
        assert [c.name for c in first] == [chords[0].name, chords[3].name, chords[4].name]
        assert first[0].name == "G"

    def test_free_mode_progressions_are_empty(self):
        progressions = get_common_progressions("C", "free")
        assert len(progressions) == 5
        for progression in progressions:
            assert progression["chords"] == []
