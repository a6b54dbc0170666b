"""
Terminal handling for the Mega text editor.

RawTerminal puts the controlling terminal into raw mode for the lifetime of a
`with` block and restores the saved mode on the way out, whatever the reason
for leaving. Reads are bounded: a read with nothing to deliver returns b"" after
a tenth of a second instead of blocking, so escape sequences cut short by the
sender do not hang the editor.
"""
import os
import select
import shutil
import sys
import termios

READ_TIMEOUT = 0.1


class RawTerminal:
    """Scoped raw mode on a terminal plus the byte-level I/O the editor needs."""
    def __init__(self, stdin=None, stdout=None):
        self.stdin_fd = (stdin or sys.stdin).fileno()
        self.stdout_fd = (stdout or sys.stdout).fileno()
        self._saved_mode = None

    def __enter__(self):
        self.enter_raw_mode()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.leave_raw_mode()
        return False

    def enter_raw_mode(self) -> None:
        fd = self.stdin_fd
        self._saved_mode = termios.tcgetattr(fd)
        mode = termios.tcgetattr(fd)
        # iflag, oflag, cflag, lflag, ispeed, ospeed, cc
        mode[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK
                     | termios.ISTRIP | termios.IXON)
        mode[1] &= ~termios.OPOST
        mode[2] |= termios.CS8
        mode[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        mode[6][termios.VMIN] = 0
        mode[6][termios.VTIME] = 1
        termios.tcsetattr(fd, termios.TCSAFLUSH, mode)

    def leave_raw_mode(self) -> None:
        if self._saved_mode is None:
            return
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_mode)
        self._saved_mode = None

    def grid_size(self):
        """Return the terminal size as (columns, rows)."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            size = shutil.get_terminal_size()
        return size.columns, size.lines

    def read(self, n: int = 1) -> bytes:
        """
        Read up to `n` bytes, or b"" if none arrive within READ_TIMEOUT.
        Raises EOFError once the input side has been closed.
        """
        ready, _, _ = select.select([self.stdin_fd], [], [], READ_TIMEOUT)
        if not ready:
            return b""
        data = os.read(self.stdin_fd, n)
        if not data:
            raise EOFError("terminal input closed")
        return data

    def write(self, data: bytes) -> None:
        """Write a whole frame to the terminal."""
        view = memoryview(data)
        while view:
            written = os.write(self.stdout_fd, view)
            view = view[written:]
