# smaqc/logging/logging.py
import logging
import os
import sys
from pathlib import Path

from smaqc.logging.config import load_log_level, load_settings

ROOT_LOGGER = "smaqc"

# logger name -> log file of every logger that owns handlers
_CONFIGURED = {}


def _logger_name(name):
    """Map ``__file__`` of a package module to its dotted name.

    ``.../src/smaqc/metrics/ms1.py`` becomes ``smaqc.metrics.ms1`` so module
    loggers are children of ``smaqc`` and share its handlers. Other names
    pass through unchanged.
    """
    path = Path(str(name))
    if path.suffix != ".py":
        return str(name)

    parts = list(path.with_suffix("").parts)
    if ROOT_LOGGER not in parts:
        return path.stem
    start = len(parts) - 1 - parts[::-1].index(ROOT_LOGGER)
    dotted = parts[start:]
    if dotted[-1] == "__init__":
        dotted = dotted[:-1]
    return ".".join(dotted)


def resolve_log_dir(log_dir=None):
    if log_dir is not None:
        return Path(log_dir)
    env_dir = os.environ.get("SMAQC_LOG_DIR", "").strip()
    if env_dir:
        return Path(env_dir).expanduser()
    saved = load_settings().log_dir
    if saved:
        return Path(saved)
    return Path.home() / ".smaqc" / "logs"


def resolve_log_file(log_file=None, log_dir=None):
    if log_file is not None:
        return Path(log_file)
    return resolve_log_dir(log_dir) / "smaqc.log"


def _configure(
    name,
    level=None,
    log_file=None,
    log_dir=None,
    console=True,
    fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
):
    logger = logging.getLogger(name)
    if name in _CONFIGURED:
        return logger

    if level is None:
        level = load_log_level() or logging.INFO
    file_path = resolve_log_file(log_file, log_dir)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    logger.setLevel(level)
    logger.propagate = False
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    fh = logging.FileHandler(file_path, mode="a", encoding="utf-8")
    fh.setFormatter(formatter)
    logger.addHandler(fh)

    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setFormatter(formatter)
        logger.addHandler(ch)

    _CONFIGURED[name] = file_path
    return logger


def get_logger(name=ROOT_LOGGER, **options):
    """Return a configured logger.

    Modules call ``get_logger(__file__)`` and get a child of the ``smaqc``
    logger, which holds the file and stderr handlers; ``options`` then only
    apply if ``smaqc`` itself is not configured yet. Any other name gets its
    own handlers.

    Options: ``level`` (default: the persisted level, else INFO),
    ``log_file`` (default ``<log_dir>/smaqc.log``), ``log_dir`` (default
    ``SMAQC_LOG_DIR``, the persisted directory or ``~/.smaqc/logs``),
    ``console`` (also log to stderr), ``fmt`` and ``datefmt``.
    """
    name = _logger_name(name)
    if name.startswith(ROOT_LOGGER + "."):
        _configure(ROOT_LOGGER, **options)
        return logging.getLogger(name)
    return _configure(name, **options)


def reset_logger(name=None):
    """Drop the handlers of ``name`` (default: every configured logger).

    >>> logger = get_logger("demo", level=logging.DEBUG, console=False)
    >>> reset_logger("demo")
    >>> get_logger("demo", level=logging.INFO, console=False).level == logging.INFO
    True
    """
    names = list(_CONFIGURED) if name is None else [name]
    for n in names:
        logger = logging.getLogger(n)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        _CONFIGURED.pop(n, None)


def set_level(level, name=None):
    names = list(_CONFIGURED) if name is None else [name]
    for n in names:
        logging.getLogger(n).setLevel(level)


def get_configured_level(name=ROOT_LOGGER):
    level = logging.getLogger(name).getEffectiveLevel()
    return logging.getLevelName(level)


def configured_log_file(name=ROOT_LOGGER):
    """Log file of ``name`` if it is configured, else where it would go."""
    return _CONFIGURED.get(name) or resolve_log_file()
