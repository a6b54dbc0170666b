"""
Input handling for Mega text editor.

Dispatches one decoded key event to the matching buffer edit, cursor move or
command, and keeps the quit-confirmation counter up to date.
"""
from mega import commands
from mega.ui.keys import Key, BACKSPACE, ENTER, ctrl_key, is_ctrl

ARROWS = (Key.ARROW_UP, Key.ARROW_DOWN, Key.ARROW_LEFT, Key.ARROW_RIGHT)
SAVE = ctrl_key('s')
REFRESH = ctrl_key('l')
CTRL_H = ctrl_key('h')


def insert_char(context, ch: str) -> None:
    buf, cursor = context.buffer, context.cursor
    buf.insert_char(cursor.cy, cursor.cx, ch)
    cursor.cx += 1


def insert_newline(context) -> None:
    buf, cursor = context.buffer, context.cursor
    buf.insert_newline(cursor.cy, cursor.cx)
    cursor.cy += 1
    cursor.cx = 0


def delete_char(context) -> None:
    buf, cursor = context.buffer, context.cursor
    cursor.cy, cursor.cx = buf.delete_char(cursor.cy, cursor.cx)


def handle_special_key(context, key: Key) -> None:
    """Handle a named key."""
    cursor, buf = context.cursor, context.buffer
    if key in ARROWS:
        cursor.move(key, buf)
    elif key is Key.HOME:
        cursor.home()
    elif key is Key.END:
        cursor.end(buf)
    elif key in (Key.PAGE_UP, Key.PAGE_DOWN):
        cursor.page(key, buf, context.screen_rows)
    elif key is Key.DELETE:
        cursor.move(Key.ARROW_RIGHT, buf)
        delete_char(context)
    elif key is Key.ESCAPE:
        pass
    else:
        raise ValueError(f"unhandled key: {key!r}")


def handle_char(context, ch: str) -> None:
    """Handle a plain or control character."""
    if ch == ENTER:
        insert_newline(context)
    elif ch == SAVE:
        commands.save_file(context)
    elif ch in (BACKSPACE, CTRL_H):
        delete_char(context)
    elif ch == REFRESH:
        pass
    elif ch == "\t" or ch.isprintable():
        insert_char(context, ch)


def process_keypress(context, key) -> None:
    """Apply one key event to the editor."""
    if is_ctrl(key, "q"):
        commands.request_quit(context)
        return

    if isinstance(key, Key):
        handle_special_key(context, key)
    else:
        handle_char(context, key)
    context.quit_times = context.config["QUIT_TIMES"]
