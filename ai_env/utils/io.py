# ai_env/utils/io.py

import os
import sys
import shutil
import logging
from datetime import datetime

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

_handlers = []


def ensure_dir(path):
    os.makedirs(path, exist_ok=True)
    return path


def make_log_path(log_dir, now=None):
    now = now or datetime.now()
    return os.path.join(log_dir, f"ml_env_setup_{now.strftime('%Y%m%d_%H%M%S')}.log")


def setup_logging(log_file, level=logging.INFO):
    """
    Send log records to the run log file and to the console.

    Handlers installed by a previous call are replaced, so repeated runs in one
    process do not duplicate lines.

    Args:
        log_file (str): File the records are appended to.
        level (int): Root logger level.
    """
    root = logging.getLogger()
    for h in _handlers:
        root.removeHandler(h)
        h.close()
    _handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)
    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    console_handler = logging.StreamHandler(sys.stdout)
    for h in (file_handler, console_handler):
        h.setFormatter(formatter)
        root.addHandler(h)
        _handlers.append(h)
    root.setLevel(level)


def append_lines(log_file, lines):
    with open(log_file, 'a', encoding='utf-8') as f:
        for line in lines:
            f.write(line + "\n")


def is_available_to_store(path, p=10):
    # walk up to the first existing directory, the venv may not exist yet
    while not os.path.exists(path):
        parent = os.path.dirname(path)
        if parent == path:
            break
        path = parent
    total, used, free = shutil.disk_usage(path)
    free_space_percentile = int(free / total * 100)
    return free_space_percentile > p
