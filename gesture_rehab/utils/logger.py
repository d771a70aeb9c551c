"""
Logging setup and the exercise history logger.

Console output is kept short because it shares the terminal with the menu
prompts; the optional rotating file gets the full logger name.
"""

import os
import time
import logging
from logging.handlers import RotatingFileHandler

CONSOLE_FORMAT = "%(levelname)-7s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def _rotating_file(path, max_size_mb, backup_count):
    folder = os.path.dirname(path)
    if folder and not os.path.isdir(folder):
        os.makedirs(folder)
    handler = RotatingFileHandler(path, maxBytes=int(max_size_mb * 1024 * 1024),
                                  backupCount=backup_count)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logging(level="INFO", log_file=None, max_size_mb=10, backup_count=3):
    """Install the console handler and, with ``log_file``, a rotating file.

    Unknown level names fall back to INFO. Returns the root logger.
    """
    numeric = logging.getLevelName(str(level).upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    root.setLevel(numeric)

    handlers = [logging.StreamHandler()]
    handlers[0].setFormatter(logging.Formatter(CONSOLE_FORMAT))
    if log_file:
        handlers.append(_rotating_file(log_file, max_size_mb, backup_count))

    for handler in handlers:
        root.addHandler(handler)
    return root


class ExerciseLogger:
    """Session history of recordings and reps, echoed to ``exercise_events``."""

    def __init__(self):
        self.logger = logging.getLogger("exercise_events")
        self._entries = []

    def _add(self, kind, **fields):
        entry = {"kind": kind, "timestamp": time.time()}
        entry.update(fields)
        self._entries.append(entry)
        return entry

    def log_recording(self, gesture_name, num_steps, saved=True):
        """A recording ended; ``saved`` tells whether it went into the store."""
        self._add("recording", gesture=gesture_name, steps=num_steps, saved=saved)
        if saved:
            self.logger.info("Recorded %s (%d steps)", gesture_name, num_steps)
        else:
            self.logger.info("Recording discarded (%d steps)", num_steps)

    def log_rep(self, gesture_name, rep, target, strikes=0, resets=0, duration_s=None):
        self._add("rep", gesture=gesture_name, rep=rep, target=target,
                  strikes=strikes, resets=resets, duration_s=duration_s)
        took = "" if duration_s is None else " in %.1fs" % duration_s
        self.logger.info("%s rep %d/%d%s, %d strikes, %d resets",
                         gesture_name, rep, target, took, strikes, resets)

    def get_history(self, last_n=None):
        """All entries, or the ``last_n`` most recent ones."""
        if last_n:
            return self._entries[-last_n:]
        return list(self._entries)

    @property
    def total_reps(self):
        return len([e for e in self._entries if e["kind"] == "rep"])
