"""
Commands for the Mega text editor.

Save and quit are the two actions that talk back to the user through the
message bar; they live here rather than in the key dispatcher.
"""
from mega import logger


def save_file(context) -> int:
    """Save the document, asking for a file name if it has none. Returns bytes written."""
    buf = context.buffer
    try:
        written = buf.save(prompt=lambda message: context.ui.prompt_input(context, message))
    except OSError as e:
        context.set_status_message(f"Can't save! I/O error: {e.strerror or e}")
        context.log_command(f"save failed: {buf.filename}: {e}")
        return 0

    if buf.filename is None:
        context.set_status_message("Save aborted")
        context.log_command("save aborted")
        return 0

    context.set_status_message(f"{written} bytes written to disk")
    context.log_command(f"save: {buf.filename} ({written} bytes)")
    return written


def request_quit(context) -> bool:
    """
    Handle a press of the quit key. A clean document quits at once; a dirty one
    needs the key pressed quit_times times in a row. Returns True when quitting.
    """
    if context.buffer.dirty:
        context.quit_times -= 1
        if context.quit_times > 0:
            times = "time" if context.quit_times == 1 else "times"
            context.set_status_message(
                "WARNING!!! File has unsaved changes. "
                f"Press Ctrl-Q {context.quit_times} more {times} to quit.")
            return False

    context.graceful_exit()
    return True
