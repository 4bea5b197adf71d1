"""
Print the systemd state of a unit the way the installation monitor sees it.

Usage:
    python scripts/check_unit_state.py [unit] [--watch]

With --watch the unit is polled every 5 seconds until it reports
active (exited), which is the condition the monitor exits on.
"""

import sys
import os
import time
import logging

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from packages.core.errors import ServiceQueryError
from packages.core.service.systemd_query import SystemdUnitQuery
from packages.shared.config import DEFAULT_TARGET_UNIT

logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
)

def main():
    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    watch = "--watch" in sys.argv[1:]
    unit = args[0] if args else DEFAULT_TARGET_UNIT

    print("=" * 60)
    print(f"Unit state check: {unit}")
    print("=" * 60)

    query = SystemdUnitQuery()
    poll_count = 0
    try:
        while True:
            poll_count += 1
            try:
                state = query.query(unit)
            except ServiceQueryError as e:
                print(f"[{poll_count:4d}] ERROR: {e}")
                if not watch:
                    return 1
            else:
                marker = "terminal" if state.is_terminal else "waiting"
                print(f"[{poll_count:4d}] {state}  -> {marker}")
                if state.is_terminal or not watch:
                    break
            time.sleep(5.0)
    except KeyboardInterrupt:
        print()
        print("Stopped by user")

    print("=" * 60)
    return 0

if __name__ == "__main__":
    sys.exit(main())
