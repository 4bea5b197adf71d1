from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from packages.shared.paths import log_path, ensure_app_dirs


def setup_logging(verbose: bool = False, log_to_file: bool = True) -> None:
    root = logging.getLogger()
    level = logging.DEBUG if verbose else logging.INFO
    root.setLevel(level)

    if root.handlers:
        return

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")

    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    # dbus-python is chatty at DEBUG
    logging.getLogger("dbus").setLevel(logging.WARNING)

    if not log_to_file:
        return

    try:
        ensure_app_dirs()
        fh = RotatingFileHandler(str(log_path()), maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    except OSError as e:
        root.warning("Could not open log file %s, logging to console only: %s", log_path(), e)
        return
    fh.setLevel(level)
    fh.setFormatter(fmt)
    root.addHandler(fh)
