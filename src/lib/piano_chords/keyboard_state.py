"""
Keyboard state management - platform independent.
Tracks key/mode, the chord-type and bass-offset cursor of every key slot,
and emits events on change.
"""
import logging
import threading
from collections import namedtuple

from .chord_table import ALL_CHORD_TYPES
from .constants import Bass, KeyboardSize, Music
from .diatonic import available_chord_types, select_chord_type
from .chord_builder import chord_display_name
from .music_theory import (
    FREE_MODE,
    NOTE_NAMES,
    check_mode,
    note_at,
    note_index,
    scale_notes,
    spell,
    to_sharp,
)

logger = logging.getLogger(__name__)

UP = "up"
DOWN = "down"


class Event:
    """Event type constants for state changes."""

    SCALE_CHANGED = "scale_changed"
    MODE_CHANGED = "mode_changed"
    KEY_CHANGED = "key_changed"
    CHORD_TYPE_CHANGED = "chord_type_changed"
    BASS_OFFSET_CHANGED = "bass_offset_changed"
    CHORD_TRIGGERED = "chord_triggered"
    CHORD_CLEARED = "chord_cleared"


class SlotKey(namedtuple("SlotKey", ["note", "slot"])):
    """Identifies one chord slot: a key, plus a slot index on multi-slot layouts."""

    __slots__ = ()

    def __new__(cls, note, slot=None):
        return super().__new__(cls, to_sharp(note), slot)


def _step(direction):
    if direction == UP:
        return 1
    if direction == DOWN:
        return -1
    raise ValueError("Direction must be 'up' or 'down', got " + repr(direction))


def bass_offset_semitones(label):
    """
    Semitone offset named by a bass-offset label.

    Returns:
        Integer offset for "+1".."+5" and "-6".."-1", None for BASS/OFF
    """
    if label in (Bass.ROOT, Bass.OFF) or label not in Bass.SEQUENCE:
        return None
    return int(label)


class KeyboardState:
    """
    Centralized keyboard state container.

    Cursor maps are replaced as whole values under a single lock, so a
    cycling step (read, compute, replace) never interleaves with another.
    """

    def __init__(self, key=Music.DEFAULT_KEY, mode=Music.DEFAULT_MODE,
                 size=KeyboardSize.XL, use_flats=False):
        """
        Args:
            key: Key note name
            mode: One of MODE_NAMES
            size: KeyboardSize layout (slots per key)
            use_flats: Show flat spellings in free mode
        """
        if size not in KeyboardSize.SLOTS:
            raise ValueError("Unknown keyboard size: " + repr(size))
        self._key = to_sharp(key)
        self._mode = check_mode(mode)
        self._size = size
        self.use_flats = use_flats

        self._scale = scale_notes(self._key, self._mode)
        self._chord_type_indices = {}
        self._bass_offsets = {}
        self._lock = threading.Lock()

        self.last_pressed = None  # SlotKey
        self.current_chord = None
        self.disabled_keys = set()
        self.disabled_slots = {}

        # Event subscribers
        self._subscribers = {}

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def subscribe(self, event_type, callback):
        """
        Subscribe to an event type.

        Args:
            event_type: Event type constant from Event class
            callback: Function to call when event occurs, receives data dict
        """
        self._subscribers.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type, callback):
        """Remove a callback from an event type."""
        callbacks = self._subscribers.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event_type, data=None):
        """Emit an event to all subscribers."""
        for callback in list(self._subscribers.get(event_type, [])):
            callback(data)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def key(self):
        return self._key

    @property
    def mode(self):
        return self._mode

    @property
    def size(self):
        return self._size

    @property
    def scale(self):
        """Notes currently playable (all 12 in free mode)."""
        return list(self._scale)

    @property
    def chord_type_indices(self):
        return dict(self._chord_type_indices)

    @property
    def bass_offsets(self):
        return dict(self._bass_offsets)

    def set_chord_type_indices(self, indices):
        """Replace every chord-type cursor (e.g. when restoring a song)."""
        with self._lock:
            self._chord_type_indices = dict(indices)

    def slot_key(self, note, slot=None):
        """Cursor key of a slot; single-slot layouts ignore the slot index."""
        if self._size == KeyboardSize.XL:
            slot = None
        return SlotKey(note, slot)

    def is_in_scale(self, note):
        return self._mode == FREE_MODE or to_sharp(note) in self._scale

    # ------------------------------------------------------------------
    # Settings transitions
    # ------------------------------------------------------------------
    def set_mode(self, mode):
        """
        Change the mode, applying the cursor transition rules.

        Entering free mode keeps existing cursors and starts keys that were
        outside the old scale on the first type; any other mode change
        clears every cursor. Bass offsets are always cleared.
        """
        check_mode(mode)
        if mode == self._mode:
            return
        previous = self._mode

        with self._lock:
            if mode == FREE_MODE:
                previous_scale = scale_notes(self._key, previous)
                indices = dict(self._chord_type_indices)
                for note in NOTE_NAMES:
                    if note not in previous_scale:
                        indices.setdefault(SlotKey(note), 0)
                self._chord_type_indices = indices
            else:
                self._chord_type_indices = {}
            self._mode = mode
            self._scale = scale_notes(self._key, mode)
            self._bass_offsets = {}

        logger.debug("Mode %s -> %s, cursors %s", previous, mode,
                     "kept" if mode == FREE_MODE else "reset")
        self.current_chord = None
        self.emit(Event.MODE_CHANGED, {"mode": mode, "previous": previous})
        self.emit(Event.SCALE_CHANGED, {"scale": self.scale})
        self.emit(Event.CHORD_CLEARED, None)

    def set_key(self, key):
        """
        Change the key within the current mode.

        Chord-type cursors are untouched; bass offsets are cleared unless
        the mode is free.
        """
        key = to_sharp(key)
        if key == self._key:
            return
        with self._lock:
            self._key = key
            self._scale = scale_notes(key, self._mode)
            if self._mode != FREE_MODE:
                self._bass_offsets = {}
        self.emit(Event.KEY_CHANGED, {"key": key})
        self.emit(Event.SCALE_CHANGED, {"scale": self.scale})

    def update(self, key=None, mode=None):
        """Apply a settings change; the key is set before the mode."""
        if key is not None:
            self.set_key(key)
        if mode is not None:
            self.set_mode(mode)

    def set_size(self, size):
        if size not in KeyboardSize.SLOTS:
            raise ValueError("Unknown keyboard size: " + repr(size))
        self._size = size

    def cycle_size(self):
        """Cycle XL -> XXL -> XXXL -> XL."""
        index = KeyboardSize.ALL.index(self._size)
        self._size = KeyboardSize.ALL[(index + 1) % len(KeyboardSize.ALL)]
        return self._size

    # ------------------------------------------------------------------
    # Chord-type cursors
    # ------------------------------------------------------------------
    def available_chord_types(self, note):
        """Chord types the key can cycle through in the current key/mode."""
        if self._mode == FREE_MODE:
            return list(ALL_CHORD_TYPES)
        return available_chord_types(note, self._key, self._mode)

    def chord_type_index(self, note, slot=None):
        return self._chord_type_indices.get(self.slot_key(note, slot), 0)

    def current_chord_type(self, note, slot=None):
        """Chord type a slot plays now; falls back to major."""
        return select_chord_type(
            self.available_chord_types(note),
            self.chord_type_index(note, slot),
        )

    def step_chord_type(self, note, slot=None, direction=UP):
        """
        Move a slot's chord-type cursor one step up or down.

        Returns:
            New chord type, or None when the key offers nothing to cycle
        """
        step = _step(direction)
        if not self.is_in_scale(note):
            return None
        types = self.available_chord_types(note)
        if not types:
            return None

        slot_key = self.slot_key(note, slot)
        with self._lock:
            indices = dict(self._chord_type_indices)
            indices[slot_key] = (indices.get(slot_key, 0) + step) % len(types)
            self._chord_type_indices = indices

        chord_type = types[indices[slot_key]]
        self.emit(Event.CHORD_TYPE_CHANGED, {
            "note": slot_key.note,
            "slot": slot_key.slot,
            "chord_type": chord_type,
        })
        return chord_type

    def adjust_last_chord_type(self, direction):
        """Step the cursor of the most recently pressed slot."""
        if self.last_pressed is None:
            return None
        return self.step_chord_type(self.last_pressed.note, self.last_pressed.slot, direction)

    # ------------------------------------------------------------------
    # Bass-offset cursors
    # ------------------------------------------------------------------
    def bass_offset(self, note, slot=None):
        return self._bass_offsets.get(self.slot_key(note, slot), Bass.ROOT)

    def set_bass_offset(self, note, slot, label):
        if label not in Bass.SEQUENCE:
            raise ValueError("Unknown bass offset: " + repr(label))
        slot_key = self.slot_key(note, slot)
        with self._lock:
            offsets = dict(self._bass_offsets)
            offsets[slot_key] = label
            self._bass_offsets = offsets
        self.emit(Event.BASS_OFFSET_CHANGED, {
            "note": slot_key.note,
            "slot": slot_key.slot,
            "offset": label,
        })

    def step_bass_offset(self, note, slot=None, direction=UP):
        """Cycle a slot's bass offset through BASS, +1..+5, -6..-1, OFF."""
        step = _step(direction)
        current = self.bass_offset(note, slot)
        index = Bass.SEQUENCE.index(current)
        label = Bass.SEQUENCE[(index + step) % len(Bass.SEQUENCE)]
        self.set_bass_offset(note, slot, label)
        return label

    def bass_index(self, note, slot=None):
        """Pitch class of the bass note a slot plays."""
        offset = bass_offset_semitones(self.bass_offset(note, slot)) or 0
        return (note_index(note) + offset) % Music.NOTES_PER_OCTAVE

    # ------------------------------------------------------------------
    # Disabled keys and slots
    # ------------------------------------------------------------------
    def toggle_key_disabled(self, note):
        note = to_sharp(note)
        if note in self.disabled_keys:
            self.disabled_keys.discard(note)
        else:
            self.disabled_keys.add(note)

    def toggle_slot_disabled(self, note, slot):
        note = to_sharp(note)
        slots = set(self.disabled_slots.get(note, set()))
        slots.symmetric_difference_update({slot})
        self.disabled_slots[note] = slots

    def is_disabled(self, note, slot=None):
        note = to_sharp(note)
        if note in self.disabled_keys:
            return True
        slots = self.disabled_slots.get(note, set())
        if slot is not None and slot in slots:
            return True
        return len(slots) >= KeyboardSize.SLOTS[self._size] > 1

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------
    def display_note(self, note):
        """Spelling of a note on the keyboard; flats only in free mode."""
        if self._mode == FREE_MODE and self.use_flats:
            return spell(note, use_flats=True)
        return to_sharp(note)

    def chord_name(self, note, slot=None):
        """
        Name shown on a slot, including its slash bass.

        Returns:
            Name such as "Dm7/A", or "" for keys outside the scale
        """
        if not self.is_in_scale(note):
            return ""
        flats = self._mode == FREE_MODE and self.use_flats
        offset = bass_offset_semitones(self.bass_offset(note, slot))
        bass = None
        if offset is not None:
            bass = note_at(note_index(note) + offset)
        return chord_display_name(note, self.current_chord_type(note, slot), bass, flats)

    def get_display_data(self):
        """
        Get data needed for keyboard rendering.

        Returns:
            Dict with key, mode, scale and one entry per slot
        """
        slots = KeyboardSize.SLOTS[self._size]
        keys = []
        for note in NOTE_NAMES:
            for slot in range(slots):
                slot_index = slot if slots > 1 else None
                keys.append({
                    "note": note,
                    "slot": slot_index,
                    "label": self.display_note(note),
                    "in_scale": self.is_in_scale(note),
                    "disabled": self.is_disabled(note, slot_index),
                    "chord_name": self.chord_name(note, slot_index),
                    "bass_offset": self.bass_offset(note, slot_index),
                })
        return {
            "key": self._key,
            "mode": self._mode,
            "size": self._size,
            "scale": self.scale,
            "keys": keys,
            "current_chord": self.current_chord.name if self.current_chord else None,
        }
