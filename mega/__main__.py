"""
Main entry point and editor context for the Mega text editor.
"""
import sys
import time

from mega import buffer, config, cursor, logger
from mega.ui import input as ui_input, keys, screen
from mega.terminal import RawTerminal

# Rows taken by the status bar and the message bar
STATUS_ROWS = 2


class EditorContext:
    """
    Holds the state of one editing session: the document, the cursor and
    viewport, the status message and the quit counter, plus the terminal
    streams the session reads keys from and writes frames to.
    """
    def __init__(self, terminal, cfg=None):
        self.terminal = terminal
        self.output = terminal
        self.config = cfg if cfg is not None else config.default_config()

        columns, rows = terminal.grid_size()
        self.screen_rows = max(1, rows - STATUS_ROWS)
        self.screen_cols = max(1, columns)

        self.buffer = buffer.Buffer(tab_stop=self.config["TAB_STOP"])
        self.cursor = cursor.Cursor()
        self.decoder = keys.KeyDecoder(terminal)

        self.status_message = ""
        self.status_time = 0.0
        self.message_timeout = self.config["MESSAGE_TIMEOUT"]
        self.quit_times = self.config["QUIT_TIMES"]

        # "ui" interface (screen drawing and prompts)
        self.ui = screen

        # Running flag
        self.exit_flag = False

    def open_file(self, filename: str) -> None:
        """Load `filename`, or start an empty document bound to it if it does not exist."""
        try:
            self.buffer.load(filename)
        except FileNotFoundError:
            self.buffer.filename = filename
            self.set_status_message("New file")
            self.log_command(f"open: {filename} (new file)")
        else:
            self.log_command(f"open: {filename} ({self.buffer.line_count} lines)")

    def set_status_message(self, message: str) -> None:
        self.status_message = message
        self.status_time = time.time()

    def log_command(self, msg: str) -> None:
        logger.log(msg)

    def read_key(self):
        """Wait for the next key event."""
        key = self.decoder.read_key()
        while key is None:
            key = self.decoder.read_key()
        return key

    def process_keypress(self) -> None:
        ui_input.process_keypress(self, self.read_key())

    def graceful_exit(self) -> None:
        logger.log("Editor exited.")
        self.exit_flag = True

    def run(self) -> None:
        """Read, apply and redraw until the quit key is accepted or input ends."""
        try:
            while not self.exit_flag:
                self.ui.refresh_screen(self)
                self.process_keypress()
        except EOFError:
            self.graceful_exit()

    def shutdown(self) -> None:
        """Leave a clean screen behind; called on every exit path."""
        self.ui.clear_screen(self)


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    cfg = config.load_config()
    logger.set_log_file(cfg["LOG_FILE"])

    error = None
    with RawTerminal() as terminal:
        context = EditorContext(terminal, cfg)
        context.set_status_message("HELP: Ctrl-S = save | Ctrl-Q = quit")
        logger.log("Editor started.")
        try:
            if argv:
                try:
                    context.open_file(argv[0])
                except OSError as e:
                    context.log_command(f"open failed: {argv[0]}: {e}")
                    error = f"mega: cannot open {argv[0]}: {e.strerror or e}"
            if error is None:
                context.run()
        finally:
            context.shutdown()

    if error:
        print(error, file=sys.stderr)
        return 1
    return 0


def run():
    """
    Console-script entry point.
    """
    sys.exit(main())


if __name__ == "__main__":
    run()
