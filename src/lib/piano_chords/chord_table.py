"""
Static chord-type table: intervals, display suffixes and catalog order.
"""
from types import MappingProxyType


USER_CHORD_TYPE = "user"
BASS_CHORD_TYPE = "bass"

# Chord quality based on intervals (semitones from root)
CHORD_INTERVALS = MappingProxyType({
    # Basic triads
    "major": (0, 4, 7),
    "minor": (0, 3, 7),
    "dim": (0, 3, 6),
    "augmented": (0, 4, 8),
    "5": (0, 7),

    # 7th chords
    "7": (0, 4, 7, 10),
    "major7": (0, 4, 7, 11),
    "M7": (0, 4, 7, 11),
    "minor7": (0, 3, 7, 10),
    "dim7": (0, 3, 6, 9),
    "m7b5": (0, 3, 6, 10),
    "φ7": (0, 3, 6, 10),
    "minorMajor7": (0, 3, 7, 11),

    # 9th chords
    "major9": (0, 4, 7, 11, 14),
    "minor9": (0, 3, 7, 10, 14),
    "9": (0, 4, 7, 10, 14),
    "add9": (0, 4, 7, 14),
    "7b9": (0, 4, 7, 10, 13),
    "7#9": (0, 4, 7, 10, 15),
    "dim9": (0, 3, 6, 9, 14),
    "aug9": (0, 4, 8, 10, 14),

    # 11th & 13th chords
    "11": (0, 4, 7, 10, 14, 17),
    "m11": (0, 3, 7, 10, 14, 17),
    "major11": (0, 4, 7, 11, 14, 17),
    "13": (0, 4, 7, 10, 14, 21),
    "13sus": (0, 5, 7, 10, 14, 21),
    "13b9": (0, 4, 7, 10, 13, 21),
    "m11b5": (0, 3, 6, 10, 14, 17),

    # Sus chords
    "sus2": (0, 2, 7),
    "sus4": (0, 5, 7),
    "7sus": (0, 5, 7, 10),
    "7sus4": (0, 5, 7, 10),
    "9sus": (0, 5, 7, 10, 14),
    "7sus2b9": (0, 2, 7, 10, 13),

    # 6th chords
    "6": (0, 4, 7, 9),
    "minor6": (0, 3, 7, 9),
    "69": (0, 4, 7, 9, 14),
    "m69": (0, 3, 7, 9, 14),

    # Altered/special chords
    "7#11": (0, 4, 7, 10, 18),
    "7b13": (0, 4, 7, 10, 20),
    "maj9#11": (0, 4, 7, 11, 14, 18),
    "m9b5": (0, 3, 6, 10, 14),
    "9#11": (0, 4, 7, 10, 14, 18),
    "maj7#5": (0, 4, 8, 11),
    "7alt": (0, 4, 8, 10, 15, 21),  # 7#5#9
    "7b5": (0, 4, 6, 10),
    "7#5": (0, 4, 8, 10),
    "augmented7": (0, 4, 8, 10),
    "augmentedMajor7": (0, 4, 8, 11),

    # Other
    BASS_CHORD_TYPE: (0,),
    USER_CHORD_TYPE: (),  # supplied by the caller
})

# Suffix appended to the root spelling in chord names
CHORD_SUFFIXES = MappingProxyType({
    "major": "",
    "minor": "m",
    "dim": "dim",
    "augmented": "aug",
    "5": "5",
    "major7": "maj7",
    "M7": "M7",
    "minor7": "m7",
    "7": "7",
    "dim7": "dim7",
    "m7b5": "m7b5",
    "φ7": "φ7",
    "minorMajor7": "mMaj7",
    "major9": "maj9",
    "minor9": "m9",
    "9": "9",
    "add9": "add9",
    "7b9": "7b9",
    "7#9": "7#9",
    "dim9": "dim9",
    "aug9": "aug9",
    "11": "11",
    "m11": "m11",
    "major11": "maj11",
    "13": "13",
    "13sus": "13sus",
    "13b9": "13b9",
    "m11b5": "m11b5",
    "sus2": "sus2",
    "sus4": "sus4",
    "7sus": "7sus",
    "7sus4": "7sus4",
    "9sus": "9sus",
    "7sus2b9": "7sus2b9",
    "6": "6",
    "minor6": "m6",
    "69": "69",
    "m69": "m69",
    "7#11": "7#11",
    "7b13": "7b13",
    "maj9#11": "maj9#11",
    "m9b5": "m9b5",
    "9#11": "9#11",
    "maj7#5": "maj7#5",
    "7alt": "7alt",
    "7b5": "7b5",
    "7#5": "7#5",
    "augmented7": "aug7",
    "augmentedMajor7": "augMaj7",
})

# Full catalog in preference order; every key offers all of these in free mode
ALL_CHORD_TYPES = (
    # Basic triads first
    "major", "minor", "dim", "augmented", "5",
    # 7th chords
    "major7", "M7", "minor7", "7", "dim7", "m7b5", "φ7", "minorMajor7",
    # 9th chords
    "major9", "minor9", "9", "add9", "7b9", "7#9", "dim9", "aug9",
    # 11th & 13th chords
    "11", "m11", "major11", "13", "13sus", "13b9", "m11b5",
    # Sus chords
    "sus2", "sus4", "7sus", "7sus4", "9sus", "7sus2b9",
    # 6th chords
    "6", "minor6", "69", "m69",
    # Altered/special chords
    "7#11", "7b13", "maj9#11", "m9b5", "9#11",
    "maj7#5", "7alt", "7b5", "7#5",
    "augmented7", "augmentedMajor7",
)

# Chord groups used by the random/priority pickers; RANDOM draws from all of them
CHORD_PRIORITIES = MappingProxyType({
    "TRIAD": ("major", "minor"),
    "FOUR_NOTE": (
        # Simple common 4-note chords
        "7", "major7", "minor7",
        # Uncommon 4-note chords
        "m7b5", "dim7",
        # Uncommon 3-note chords
        "augmented", "dim", "sus2", "sus4",
        # Basic triads
        "major", "minor",
    ),
    "HIGHER": (
        # Simpler 5-note chords
        "major9", "minor9", "9",
        # Complex 5-note chords
        "69", "11",
        # Complex 4-note chords
        "major7", "minor7", "7",
        # Simpler chords
        "major", "minor",
    ),
})


def chord_intervals(chord_type, user_intervals=None):
    """
    Interval set of a chord type.

    Args:
        chord_type: Key of CHORD_INTERVALS
        user_intervals: Intervals for the "user" placeholder type

    Returns:
        Tuple of semitone offsets; empty for unknown types and for "user"
        without intervals
    """
    if chord_type == USER_CHORD_TYPE:
        return tuple(user_intervals or ())
    return CHORD_INTERVALS.get(chord_type, ())


def chord_suffix(chord_type):
    """Display suffix for a chord type; unknown types use their own name."""
    return CHORD_SUFFIXES.get(chord_type, chord_type)


def priority_chord_types():
    """Union of all priority groups, first-seen order."""
    seen = []
    for group in CHORD_PRIORITIES.values():
        for chord_type in group:
            if chord_type not in seen:
                seen.append(chord_type)
    return seen


def chord_types_for_group(group, mode):
    """
    Chord types offered for a chord group.

    Free mode and the RANDOM group offer every prioritised type; unknown
    groups fall back to TRIAD.
    """
    if mode == "free" or group == "RANDOM":
        return priority_chord_types()
    return list(CHORD_PRIORITIES.get(group, CHORD_PRIORITIES["TRIAD"]))
