"""Cursor over the raw text of a boarding pass."""

# Project imports
from pbbcbp.errors import (
    InvalidEncoding,
    MalformedHex,
    MalformedInteger,
    TruncatedInput,
)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

class FieldCursor():
    """
    Reads fixed-width fields from BCBP text.

    The text is checked to be 7-bit ASCII on construction, so one
    character is always one byte and offsets can be reported as either.
    The offset only ever moves forward, by exactly the width read.
    """
    def __init__(self, raw: str | bytes):
        self.text: str = _to_ascii(raw)
        self.offset: int = 0

    def __len__(self):
        return len(self.text)

    def __repr__(self):
        return f"FieldCursor(offset={self.offset}, length={len(self.text)})"

    @property
    def remaining(self) -> int:
        """Number of characters not yet read."""
        return len(self.text) - self.offset

    @property
    def at_end(self) -> bool:
        """Whether every character has been read."""
        return self.offset >= len(self.text)

    def peek(self, length: int = 1) -> str | None:
        """Returns the next characters without consuming them."""
        if self.remaining < length:
            return None
        return self.text[self.offset:self.offset + length]

    def take_text(self, length: int, field: str | None = None) -> str:
        """Consumes the next length characters and returns them."""
        if length < 0:
            raise ValueError(f"Cannot read a negative length ({length}).")
        if self.remaining < length:
            raise TruncatedInput(length, self.remaining, self.offset, field)
        text = self.text[self.offset:self.offset + length]
        self.offset += length
        return text

    def take_hex(self, length: int, field: str | None = None) -> int:
        """Consumes the next length characters as a hexadecimal value."""
        start = self.offset
        text = self.take_text(length, field)
        return parse_hex(text, start, field)

    def take_int(self, length: int, field: str | None = None) -> int:
        """Consumes the next length characters as a decimal value."""
        start = self.offset
        text = self.take_text(length, field)
        return parse_int(text, start, field)


def parse_hex(text: str, offset: int, field: str | None = None) -> int:
    """Parses a hexadecimal size field."""
    # int(..., 16) also accepts signs, spaces, underscores and "0x".
    if text == "" or not set(text) <= _HEX_DIGITS:
        raise MalformedHex(text, offset, field)
    return int(text, 16)

def parse_int(text: str, offset: int, field: str | None = None) -> int:
    """Parses a space-padded decimal field."""
    stripped = text.strip()
    if stripped == "" or not (stripped.isascii() and stripped.isdigit()):
        raise MalformedInteger(text, offset, field)
    return int(stripped)

def _to_ascii(raw: str | bytes) -> str:
    """Checks that the input is ASCII text and returns it as a string."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            return bytes(raw).decode('ascii')
        except UnicodeDecodeError as err:
            raise InvalidEncoding(
                "Boarding pass data is not ASCII text", offset=err.start
            ) from err
    if not isinstance(raw, str):
        raise TypeError(
            f"Boarding pass data must be str or bytes, not "
            f"{type(raw).__name__}."
        )
    if not raw.isascii():
        offset = next(i for i, c in enumerate(raw) if ord(c) > 127)
        raise InvalidEncoding(
            "Boarding pass data is not ASCII text", offset=offset
        )
    return raw
