"""
Key decoding for the Mega text editor.

Turns the raw byte stream coming from the terminal into logical key events.
A key event is either a one-character string (a plain or control character)
or a member of the Key enum for the named special keys.
"""
import codecs
import enum


class Key(enum.Enum):
    """Named special keys."""
    ESCAPE = "escape"
    ARROW_UP = "up"
    ARROW_DOWN = "down"
    ARROW_LEFT = "left"
    ARROW_RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page-up"
    PAGE_DOWN = "page-down"
    DELETE = "delete"


ESC = 0x1B
ENTER = "\r"
BACKSPACE = "\x7f"

# ESC [ <letter>
CSI_LETTERS = {
    b"A": Key.ARROW_UP,
    b"B": Key.ARROW_DOWN,
    b"C": Key.ARROW_RIGHT,
    b"D": Key.ARROW_LEFT,
    b"H": Key.HOME,
    b"F": Key.END,
}

# ESC [ <digit> ~
CSI_TILDE = {
    b"1": Key.HOME,
    b"3": Key.DELETE,
    b"4": Key.END,
    b"5": Key.PAGE_UP,
    b"6": Key.PAGE_DOWN,
    b"7": Key.HOME,
    b"8": Key.END,
}

# ESC O <letter>
SS3_LETTERS = {
    b"H": Key.HOME,
    b"F": Key.END,
}


def ctrl_key(ch: str) -> str:
    """The character a terminal sends for Ctrl+`ch`."""
    return chr(ord(ch) & 0x1F)


def is_ctrl(key, ch: str) -> bool:
    return isinstance(key, str) and key == ctrl_key(ch)


class KeyDecoder:
    """
    Reads key events from `stream`, any object with a `read(n)` method returning
    bytes. An empty read means no input is available right now; it is how the
    terminal reports its read timeout and how an in-memory stream reports its end.
    """
    def __init__(self, stream):
        self.stream = stream
        self._pending = []
        # a byte read ahead of a broken UTF-8 sequence, decoded as the next key
        self._unread = None

    def _read_byte(self):
        if self._unread is not None:
            data, self._unread = self._unread, None
            return data
        data = self.stream.read(1)
        return data if data else None

    def read_key(self):
        """
        Decode one key. Returns a one-character string, a Key member, or None
        when no byte arrived.
        """
        if self._pending:
            return self._pending.pop(0)
        first = self._read_byte()
        if first is None:
            return None
        if first[0] == ESC:
            return self._read_escape()
        if first[0] < 0x80:
            return first.decode("ascii")
        return self._read_utf8(first)

    def _read_escape(self):
        seq0 = self._read_byte()
        if seq0 is None:
            return Key.ESCAPE
        seq1 = self._read_byte()
        if seq1 is None:
            return Key.ESCAPE

        if seq0 == b"[":
            if seq1.isdigit():
                seq2 = self._read_byte()
                if seq2 != b"~":
                    return Key.ESCAPE
                return CSI_TILDE.get(seq1, Key.ESCAPE)
            return CSI_LETTERS.get(seq1, Key.ESCAPE)
        if seq0 == b"O":
            return SS3_LETTERS.get(seq1, Key.ESCAPE)
        return Key.ESCAPE

    def _read_utf8(self, first):
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        text = decoder.decode(first)
        # a UTF-8 sequence is at most four bytes long
        for _ in range(3):
            if text:
                break
            data = self._read_byte()
            if data is None:
                break
            if not 0x80 <= data[0] < 0xC0:
                self._unread = data
                break
            text = decoder.decode(data)
        if not text:
            text = decoder.decode(b"", final=True)
        self._pending.extend(text[1:])
        return text[0]
