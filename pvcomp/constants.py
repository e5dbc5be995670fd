NUM_KEYS = 88
TEXT_DECIMALS = 9

# MIDI note of the lowest piano key (A0)
LOWEST_MIDI_NOTE = 21

NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

def key_name(index: int) -> str:
    """Returns the scientific pitch name of key `index` (0 -> 'A0', 87 -> 'C8')."""
    midi = LOWEST_MIDI_NOTE + index
    return f"{NOTE_NAMES[midi % 12]}{midi // 12 - 1}"

KEY_NAMES = tuple(key_name(i) for i in range(NUM_KEYS))
