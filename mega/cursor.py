"""
Cursor and viewport model for the Mega text editor.

The cursor lives in file coordinates (cx, cy). Its render column rx is derived
from the buffer before every frame, and the viewport offsets are clamped so the
cursor is always inside the visible window.
"""
from mega.ui.keys import Key


class Cursor:
    """File-coordinate cursor plus the scroll offsets of the window showing it."""
    def __init__(self):
        self.cx = 0
        self.cy = 0
        self.rx = 0
        self.row_offset = 0
        self.col_offset = 0

    @property
    def position(self):
        return self.cx, self.cy

    def move(self, key: Key, buf) -> None:
        """Apply a single arrow-key step, then clamp cx to the new line."""
        if key is Key.ARROW_LEFT:
            if self.cx > 0:
                self.cx -= 1
            elif self.cy > 0:
                self.cy -= 1
                self.cx = buf.line_length(self.cy)
        elif key is Key.ARROW_RIGHT:
            if self.cy < buf.line_count:
                if self.cx < buf.line_length(self.cy):
                    self.cx += 1
                else:
                    self.cy += 1
                    self.cx = 0
        elif key is Key.ARROW_UP:
            if self.cy > 0:
                self.cy -= 1
        elif key is Key.ARROW_DOWN:
            if self.cy < buf.line_count:
                self.cy += 1

        self.cx = min(self.cx, buf.line_length(self.cy))

    def home(self) -> None:
        self.cx = 0

    def end(self, buf) -> None:
        self.cx = buf.line_length(self.cy)

    def page(self, key: Key, buf, rows: int) -> None:
        """
        Jump to the top (PageUp) or bottom (PageDown) of the window, then step a
        whole window of rows one arrow move at a time.
        """
        if key is Key.PAGE_UP:
            self.cy = self.row_offset
            step = Key.ARROW_UP
        else:
            self.cy = min(self.row_offset + rows - 1, buf.line_count)
            step = Key.ARROW_DOWN
        self.cx = min(self.cx, buf.line_length(self.cy))
        for _ in range(rows):
            self.move(step, buf)

    def scroll(self, buf, rows: int, cols: int) -> None:
        """Recompute rx and pull the viewport onto the cursor."""
        self.rx = buf.render_column(self.cy, self.cx)

        if self.cy < self.row_offset:
            self.row_offset = self.cy
        if self.cy >= self.row_offset + rows:
            self.row_offset = self.cy - rows + 1
        if self.rx < self.col_offset:
            self.col_offset = self.rx
        if self.rx >= self.col_offset + cols:
            self.col_offset = self.rx - cols + 1
