"""
Configuration for the Mega text editor.

Settings live in a plain key=value file under the XDG config directory:

    # ~/.config/mega/mega.conf
    tab_stop=4
    quit_times=2
    message_timeout=5
    log_file=/tmp/mega.log
"""
import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "mega")
CONFIG_FILE = os.path.join(CONFIG_DIR, "mega.conf")
LOG_FILE = os.path.join(CONFIG_DIR, "mega.log")

# default settings
TAB_STOP_DEFAULT = 8
QUIT_TIMES_DEFAULT = 3
MESSAGE_TIMEOUT_DEFAULT = 5.0


def _positive_int(value):
    number = int(value)
    if number < 1:
        raise ValueError(value)
    return number


def _positive_float(value):
    number = float(value)
    if number <= 0:
        raise ValueError(value)
    return number


_PARSERS = {
    "tab_stop": ("TAB_STOP", _positive_int),
    "quit_times": ("QUIT_TIMES", _positive_int),
    "message_timeout": ("MESSAGE_TIMEOUT", _positive_float),
    "log_file": ("LOG_FILE", os.path.expanduser),
}


def default_config():
    return {
        "TAB_STOP": TAB_STOP_DEFAULT,
        "QUIT_TIMES": QUIT_TIMES_DEFAULT,
        "MESSAGE_TIMEOUT": MESSAGE_TIMEOUT_DEFAULT,
        "LOG_FILE": LOG_FILE,
    }


def load_config(path=None):
    """
    Read the config file at `path` (CONFIG_FILE by default) on top of the
    defaults. A missing file, unknown keys and bad values are all ignored.
    """
    cfg = default_config()
    path = path or CONFIG_FILE
    if not os.path.isfile(path):
        return cfg
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.readlines()
    except OSError:
        return cfg

    for line in lines:
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        entry = _PARSERS.get(key.strip().lower())
        if entry is None:
            continue
        name, parse = entry
        value = value.strip()
        if not value:
            continue
        try:
            cfg[name] = parse(value)
        except ValueError:
            continue
    return cfg
