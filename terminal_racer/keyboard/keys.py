from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

ESC = 0x1B


class KeyKind(Enum):
    """What a decoded input event is."""
    NONE = auto()      # Nothing available this poll
    CHAR = auto()      # One byte, printable or control
    NAMED = auto()     # A recognized escape sequence
    SEQUENCE = auto()  # Any other escape sequence, raw bytes kept


@dataclass(frozen=True)
class KeyToken:
    """
    One decoded input event.

    Tokens compare by value, so bindings can be stored as tokens and matched
    with ==, whatever platform produced the bytes.
    """
    kind: KeyKind
    data: bytes = b""
    name: Optional[str] = None

    @classmethod
    def char(cls, value) -> "KeyToken":
        if isinstance(value, str):
            value = value.encode("latin-1")
        elif isinstance(value, int):
            value = bytes((value,))
        return cls(KeyKind.CHAR, value)

    @classmethod
    def sequence(cls, data: bytes) -> "KeyToken":
        return cls(KeyKind.SEQUENCE, bytes(data))

    @property
    def is_none(self) -> bool:
        return self.kind is KeyKind.NONE

    def describe(self) -> str:
        """Human readable label, used by the HUD and the menus."""
        if self.kind is KeyKind.NONE:
            return "NONE"
        if self.kind is KeyKind.NAMED:
            return self.name
        if self.data in (b"\n", b"\r"):
            return "ENTER"
        if self.data == b"\x1b":
            return "ESC"
        if self.data == b" ":
            return "SPACE"
        if self.data == b"\t":
            return "TAB"
        if self.kind is KeyKind.CHAR and 0x20 < self.data[0] < 0x7F:
            return chr(self.data[0])
        return "SEQ(" + " ".join(f"0x{b:02X}" for b in self.data) + ")"


NO_KEY = KeyToken(KeyKind.NONE)

UP_ARROW = KeyToken(KeyKind.NAMED, b"\x1b[A", "UP_ARROW")
DOWN_ARROW = KeyToken(KeyKind.NAMED, b"\x1b[B", "DOWN_ARROW")
RIGHT_ARROW = KeyToken(KeyKind.NAMED, b"\x1b[C", "RIGHT_ARROW")
LEFT_ARROW = KeyToken(KeyKind.NAMED, b"\x1b[D", "LEFT_ARROW")

# The only sequences given names; everything else stays a raw SEQUENCE
NAMED_SEQUENCES = {
    token.data: token for token in (UP_ARROW, DOWN_ARROW, RIGHT_ARROW, LEFT_ARROW)
}

KEY_NAMES = {
    "up": UP_ARROW,
    "down": DOWN_ARROW,
    "left": LEFT_ARROW,
    "right": RIGHT_ARROW,
    "space": KeyToken.char(" "),
    "tab": KeyToken.char("\t"),
    "enter": KeyToken.char("\r"),
}


def parse_key_name(text: str) -> KeyToken:
    """
    Turn a key given on the command line into a token.

    Accepts a single ASCII character ("a", "J") or one of the names in KEY_NAMES
    ("left", "up", "space", ...), case-insensitive for names.
    """
    if len(text) == 1 and ord(text) < 0x80:
        return KeyToken.char(text)
    token = KEY_NAMES.get(text.lower())
    if token is None:
        raise ValueError(f"Unknown key '{text}'. Use a single ASCII character or one of: {', '.join(KEY_NAMES)}")
    return token
