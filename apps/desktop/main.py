import argparse
import logging
import sys
from typing import Optional, Sequence

from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication

from packages.core.errors import ServiceQueryError
from packages.core.logging_ import setup_logging
from packages.core.monitor.completion_monitor import CompletionMonitor
from packages.core.service.systemd_query import SystemdUnitQuery
from packages.shared.config import AppConfig
from packages.shared.store import ConfigStore
from .ui.timer import QtPollTimer
from .ui.tray import TrayNotifier

log = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="snapd-installation-monitor",
        description="Show a tray notice until snapd has finished seeding snaps.",
    )
    parser.add_argument("--unit", help="systemd unit to watch (default: snapd.seeded.service)")
    parser.add_argument("--poll-interval-ms", type=int, help="poll interval in milliseconds (default: 5000)")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, store: Optional[ConfigStore] = None) -> AppConfig:
    cfg = (store or ConfigStore()).load()
    overrides = {}
    if args.unit:
        overrides["target_unit"] = args.unit
    if args.poll_interval_ms is not None:
        overrides["poll_interval_ms"] = args.poll_interval_ms
    if overrides:
        cfg = AppConfig.model_validate({**cfg.model_dump(), **overrides})
    return cfg


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)
    try:
        cfg = build_config(args)
    except ValueError as e:
        print(f"snapd-installation-monitor: invalid option: {e}", file=sys.stderr)
        return 2

    app = QApplication(sys.argv[:1])
    icon = QIcon.fromTheme(cfg.icon_name)
    QApplication.setWindowIcon(icon)

    tray = TrayNotifier(icon, cfg.tooltip)
    monitor = CompletionMonitor(
        config=cfg.to_monitor_config(),
        query=SystemdUnitQuery(),
        sink=tray,
        timer=QtPollTimer(),
    )
    monitor.on_exit(app.exit)
    monitor.on_error(lambda msg: tray.set_tooltip(f"{cfg.tooltip}\n{msg}"))
    monitor.on_recovered(lambda: tray.set_tooltip(cfg.tooltip))

    try:
        phase = monitor.start()
    except ServiceQueryError as e:
        log.error("Cannot determine state of %s: %s", cfg.target_unit, e)
        print(f"snapd-installation-monitor: {e}", file=sys.stderr)
        return 1

    # QApplication.exit() is a no-op before exec(), so the fast path returns here
    if phase == "TERMINATED":
        return monitor.exit_code or 0

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
