"""
Buffer module for Mega text editor.

Defines the Buffer class that owns the document: the logical lines of the file,
their tab-expanded render lines, the dirty flag and the file the text belongs to.
Every position taken here is in file coordinates; the buffer knows nothing about
the cursor or the viewport.
"""
import os

ENCODING = "utf-8"
ERRORS = "surrogateescape"


def expand_char(ch: str, render_col: int, tab_stop: int) -> str:
    """Return the render cells for `ch` when it starts at `render_col`."""
    if ch == "\t":
        return " " * (tab_stop - render_col % tab_stop)
    # other control characters show in caret notation, e.g. \r as ^M
    if ord(ch) < 0x20 or ch == "\x7f":
        return "^" + chr(ord(ch) ^ 0x40)
    return ch


def expand_line(line: str, tab_stop: int) -> list:
    """Expand a whole line into one cell string per character."""
    cells = []
    render_col = 0
    for ch in line:
        cell = expand_char(ch, render_col, tab_stop)
        cells.append(cell)
        render_col += len(cell)
    return cells


def split_lines(text: str) -> list:
    """
    Split file text on line feeds only; a final line feed does not start another
    line. Carriage returns, including CRLF ones, stay part of their line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


class Buffer:
    """Represents a text document (file content) with editing operations."""
    def __init__(self, filename: str = None, tab_stop: int = 8):
        self.filename = filename  # Path to file or None for an untitled document
        self.tab_stop = tab_stop
        self.lines = []
        # renders[i] holds the render cells of lines[i], one string per character
        self.renders = []
        self.dirty = False

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_length(self, row: int) -> int:
        """Length of the line at `row`, or 0 for the append row past the end."""
        if 0 <= row < len(self.lines):
            return len(self.lines[row])
        return 0

    def render(self, row: int) -> str:
        """The tab-expanded text of the line at `row`."""
        return "".join(self.renders[row])

    def render_column(self, row: int, col: int) -> int:
        """Translate a file column on `row` into a render column."""
        if row >= len(self.lines):
            return 0
        return sum(len(cell) for cell in self.renders[row][:col])

    def set_lines(self, lines) -> None:
        """Replace the document text with `lines`, re-expanding every render line."""
        self.lines = list(lines)
        self.renders = [expand_line(line, self.tab_stop) for line in self.lines]

    def load(self, filename: str) -> None:
        """
        Replace the whole document with the contents of `filename`.
        Raises OSError if the file cannot be read; the caller decides what that means.
        """
        with open(filename, 'r', encoding=ENCODING, errors=ERRORS, newline="") as f:
            content = f.read()
        self.set_lines(split_lines(content))
        self.filename = filename
        self.dirty = False

    def contents(self) -> bytes:
        """The document as it is persisted: lines joined by a newline, no trailing one."""
        return "\n".join(self.lines).encode(ENCODING, ERRORS)

    def save(self, prompt=None) -> int:
        """
        Write the document to its file and return the number of bytes written.

        `prompt(message)` is asked for a destination when the document is untitled,
        and for confirmation before overwriting an existing file under a freshly
        entered name. It returns the answer, or None when the user cancels.
        A cancelled prompt writes nothing and returns 0 with the dirty flag untouched.
        Raises OSError if the write fails.
        """
        filename = self.filename
        if filename is None:
            if prompt is None:
                return 0
            filename = prompt("Save as: %s (ESC to cancel)")
            if not filename:
                return 0
            if os.path.exists(filename):
                answer = prompt(f"{filename} exists. Overwrite? (y/n): %s")
                if not answer or answer[0] not in "yY":
                    return 0

        data = self.contents()
        with open(filename, 'wb') as f:
            f.write(data)
        self.filename = filename
        self.dirty = False
        return len(data)

    def append_line(self, text: str = "") -> None:
        """Add a line after the last one."""
        self.insert_line(len(self.lines), text)

    def insert_line(self, row: int, text: str = "") -> None:
        """Insert a new line at `row`, expanding its tabs from column 0."""
        self.lines.insert(row, text)
        self.renders.insert(row, expand_line(text, self.tab_stop))
        self.dirty = True

    def delete_line(self, row: int) -> None:
        """Remove the line at `row` from the document."""
        if row < 0 or row >= len(self.lines):
            return
        del self.lines[row]
        del self.renders[row]
        self.dirty = True

    def insert_char(self, row: int, col: int, ch: str) -> None:
        """
        Insert `ch` at file column `col` of `row`. Inserting on the append row
        (row == line_count) first creates a new empty line there.
        """
        if row == len(self.lines):
            self.append_line()
        line = self.lines[row]
        col = max(0, min(col, len(line)))
        render_col = self.render_column(row, col)
        self.lines[row] = line[:col] + ch + line[col:]
        self.renders[row].insert(col, expand_char(ch, render_col, self.tab_stop))
        self.dirty = True

    def insert_newline(self, row: int, col: int) -> None:
        """Break the line at `row` in two at `col`, or open an empty line above it at column 0."""
        if col == 0:
            self.insert_line(row, "")
            return
        line = self.lines[row]
        cells = self.renders[row]
        self.lines[row] = line[:col]
        self.renders[row] = cells[:col]
        self.lines.insert(row + 1, line[col:])
        self.renders.insert(row + 1, cells[col:])
        self.dirty = True

    def delete_char(self, row: int, col: int):
        """
        Delete the character before (row, col), joining the line onto the previous
        one when col is 0. Returns the resulting (row, col) cursor position.
        """
        if row >= len(self.lines) or (row == 0 and col == 0):
            return row, col
        if col > 0:
            line = self.lines[row]
            self.lines[row] = line[:col - 1] + line[col:]
            del self.renders[row][col - 1]
            self.dirty = True
            return row, col - 1

        prev_len = len(self.lines[row - 1])
        self.lines[row - 1] += self.lines[row]
        self.renders[row - 1].extend(self.renders[row])
        self.delete_line(row)
        return row - 1, prev_len
