"""
Logger module for the Mega text editor.

Provides a simple file-based logger for debugging and error tracking. The
terminal belongs to the renderer, so nothing is ever printed from here.
"""
import datetime
import os

# Replaced from the loaded configuration at startup
LOG_FILE_PATH = "mega.log"

def log(message: str) -> None:
    """Append a timestamped message to the log file."""
    try:
        directory = os.path.dirname(LOG_FILE_PATH)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(LOG_FILE_PATH, 'a', encoding='utf-8') as f:
            timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            f.write(f"[{timestamp}] {message}\n")
    except OSError:
        # An unwritable log file must not take the editor down with it.
        pass

def set_log_file(path: str) -> None:
    """Point the logger at a new file."""
    global LOG_FILE_PATH
    LOG_FILE_PATH = path
