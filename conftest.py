import io

import pytest

from mega import config, logger
from mega.__main__ import EditorContext


class FakeTerminal:
    """
    Stands in for RawTerminal: keys come from a byte string, frames go to a
    bytearray. Like the real terminal it answers b"" when nothing is waiting,
    and raises EOFError when asked again after that.
    """
    def __init__(self, data=b"", cols=80, rows=24):
        self.input = io.BytesIO(data)
        self.written = bytearray()
        self.writes = 0
        self.cols = cols
        self.rows = rows
        self._empty_reads = 0

    def grid_size(self):
        return self.cols, self.rows

    def read(self, n=1):
        data = self.input.read(n)
        if data:
            self._empty_reads = 0
            return data
        self._empty_reads += 1
        if self._empty_reads > 1:
            raise EOFError("no more scripted input")
        return b""

    def write(self, data):
        self.written += data
        self.writes += 1

    def feed(self, data):
        pos = self.input.tell()
        self.input.seek(0, io.SEEK_END)
        self.input.write(data)
        self.input.seek(pos)
        self._empty_reads = 0


@pytest.fixture(autouse=True)
def log_to_tmp(tmp_path, monkeypatch):
    monkeypatch.setattr(logger, "LOG_FILE_PATH", str(tmp_path / "mega.log"))


@pytest.fixture
def make_context():
    def _make(data=b"", cols=80, rows=24, **overrides):
        cfg = config.default_config()
        cfg.update(overrides)
        return EditorContext(FakeTerminal(data, cols, rows), cfg)
    return _make
