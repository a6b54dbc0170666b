"""
mega/ui/screen.py

Implements all screen drawing for the Mega text editor. Every refresh builds one
complete frame (text rows, status bar, message bar, cursor placement) from the
current editor state and hands it to the terminal in a single write.
"""
import os
import time
from wcwidth import wcswidth

import mega
from mega.ui.keys import Key, BACKSPACE, ENTER, ctrl_key

# VT100 control sequences
CLEAR_SCREEN = "\x1b[2J"
CLEAR_REST_OF_LINE = "\x1b[K"
MOVE_CURSOR_TOP_LEFT = "\x1b[H"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
INVERT_COLORS = "\x1b[7m"
RESET_COLORS = "\x1b[m"

WELCOME = "Mega editor -- version {version}"
NO_NAME = "[No Name]"
FILENAME_WIDTH = 20


def move_cursor(row: int, col: int) -> str:
    """Sequence moving the terminal cursor to 1-based (row, col)."""
    return f"\x1b[{row};{col}H"


def text_width(text: str) -> int:
    """Display width of `text`, counting unprintable characters as one cell."""
    width = wcswidth(text)
    return width if width >= 0 else len(text)


def fit(text: str, width: int) -> str:
    """Trim `text` so it takes at most `width` cells."""
    while text and text_width(text) > width:
        text = text[:-1]
    return text


def encode_frame(frame) -> bytes:
    return "".join(frame).encode("utf-8", "surrogateescape")


def draw_welcome(context, frame) -> None:
    """Centered banner shown on an empty document."""
    cols = context.screen_cols
    message = fit(WELCOME.format(version=mega.__version__), cols)
    padding = (cols - text_width(message)) // 2
    if padding:
        frame.append("~")
        padding -= 1
    frame.append(" " * padding)
    frame.append(message)


def draw_rows(context, frame) -> None:
    """Draw the text area: visible slices of the render lines, or '~' past the end."""
    buf = context.buffer
    cursor = context.cursor
    rows = context.screen_rows
    cols = context.screen_cols

    for y in range(rows):
        file_row = y + cursor.row_offset
        if file_row < buf.line_count:
            render = buf.render(file_row)
            frame.append(render[cursor.col_offset:cursor.col_offset + cols])
        elif buf.line_count == 0 and y == rows // 2:
            draw_welcome(context, frame)
        else:
            frame.append("~")

        frame.append(CLEAR_REST_OF_LINE)
        if y < rows - 1:
            frame.append("\r\n")


def draw_status_bar(context, frame) -> None:
    """
    Inverse-video bar below the text area: file name, line count and modified
    flag on the left, current row / total rows flush right.
    """
    buf = context.buffer
    cols = context.screen_cols
    name = os.path.basename(buf.filename) if buf.filename else NO_NAME
    left = f"{fit(name, FILENAME_WIDTH)} - {buf.line_count} lines"
    if buf.dirty:
        left += " (modified)"
    right = f"{context.cursor.cy + 1}/{buf.line_count}"

    left = fit(left, cols)
    used = text_width(left)
    right_width = text_width(right)

    frame.append(move_cursor(context.screen_rows + 1, 1))
    frame.append(INVERT_COLORS)
    frame.append(left)
    if used + right_width <= cols:
        frame.append(" " * (cols - used - right_width))
        frame.append(right)
    else:
        frame.append(" " * (cols - used))
    frame.append(RESET_COLORS)
    frame.append("\r\n")


def draw_message_bar(context, frame) -> None:
    """Bottom line: the status message while it is fresh, otherwise nothing."""
    frame.append(CLEAR_REST_OF_LINE)
    message = context.status_message
    if message and time.time() - context.status_time < context.message_timeout:
        frame.append(fit(message, context.screen_cols))


def refresh_screen(context) -> None:
    """
    Re-draw the whole screen from the current state and write it out in one go.
    """
    cursor = context.cursor
    cursor.scroll(context.buffer, context.screen_rows, context.screen_cols)

    frame = [HIDE_CURSOR, MOVE_CURSOR_TOP_LEFT]
    draw_rows(context, frame)
    draw_status_bar(context, frame)
    draw_message_bar(context, frame)
    frame.append(move_cursor(cursor.cy - cursor.row_offset + 1,
                             cursor.rx - cursor.col_offset + 1))
    frame.append(SHOW_CURSOR)

    context.output.write(encode_frame(frame))


def clear_screen(context) -> None:
    """Wipe the terminal and home the cursor, used when the editor shuts down."""
    context.output.write(encode_frame([CLEAR_SCREEN, MOVE_CURSOR_TOP_LEFT]))


def prompt_input(context, prompt: str):
    """
    Ask a question in the message bar. `prompt` holds a %s where the typed text
    goes. Returns the entered string, or None if the user pressed Escape.
    """
    answer = ""
    while True:
        context.set_status_message(prompt % answer)
        refresh_screen(context)

        key = context.read_key()
        if key is Key.ESCAPE:
            context.set_status_message("")
            return None
        elif key is Key.DELETE or key in (BACKSPACE, ctrl_key('h')):
            answer = answer[:-1]
        elif key == ENTER:
            if answer:
                context.set_status_message("")
                return answer
        elif isinstance(key, str) and key.isprintable():
            answer += key
