# logger.py
"""
Per-component log files for the inference pipeline.

Each stage logs through its own named logger ("fuzzifier", "rule_engine",
...). ``setup_logging`` gives every one of them a file under ``log_dir`` and
routes the "main" logger to the console as well. Records carry the index of
the evaluation that produced them, so lines from the different files can be
lined up after a batch run.
"""
import glob
import logging
import os
from contextvars import ContextVar

_EVAL_INDEX = ContextVar("eval_index", default=-1)

LOGGER_NAMES = [
    "main",
    "config",
    "controller",
    "fuzzifier",
    "rule_engine",
    "inference",
    "defuzzifier",
    "profiler",
]

LOG_FORMAT = "%(eval_index)06d | %(levelname)s | %(name)s | %(message)s"


def set_eval_index(index: int) -> None:
    """Tags subsequent log records with the index of the current evaluation."""
    _EVAL_INDEX.set(int(index))


class EvalIndexFilter(logging.Filter):
    def filter(self, record):
        record.eval_index = _EVAL_INDEX.get()
        return True


def _attach(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    handler.addFilter(EvalIndexFilter())
    return handler


def _drop_handlers(log: logging.Logger) -> None:
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()


def reset_logging() -> None:
    """Closes the component log files and hands records back to the root logger."""
    for name in LOGGER_NAMES:
        log = logging.getLogger(name)
        _drop_handlers(log)
        log.setLevel(logging.NOTSET)
        log.propagate = True


def setup_logging(
    log_dir: str = "logs",
    overwrite: bool = True,
    log_level: int = logging.DEBUG,
    console_level: int = logging.INFO,
    cleanup_rotated: bool = True,
) -> None:
    """
    Opens one log file per component and a console handler for "main".

    Args:
        log_dir (str): Directory for the ``<component>.log`` files.
        overwrite (bool): Truncate existing files instead of appending.
        log_level (int): Level of the component loggers and their files.
        console_level (int): Level of the console handler.
        cleanup_rotated (bool): Delete leftover ``*.log.N`` files first.
    """
    os.makedirs(log_dir, exist_ok=True)
    if cleanup_rotated:
        for stale in glob.glob(os.path.join(log_dir, "*.log.*")):
            os.remove(stale)

    mode = "w" if overwrite else "a"
    for name in LOGGER_NAMES:
        log = logging.getLogger(name)
        _drop_handlers(log)
        log.setLevel(log_level)
        log.propagate = False
        path = os.path.join(log_dir, f"{name}.log")
        log.addHandler(_attach(logging.FileHandler(path, mode=mode, encoding="utf-8"), log_level))

    main_log = logging.getLogger("main")
    main_log.addHandler(_attach(logging.StreamHandler(), console_level))
    main_log.info("Logging to %s (%d components).", os.path.abspath(log_dir), len(LOGGER_NAMES))
