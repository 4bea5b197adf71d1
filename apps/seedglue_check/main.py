import argparse
import logging
import sys
from typing import Optional, Sequence

from packages.core.errors import ExternalToolFailure
from packages.core.logging_ import setup_logging
from packages.core.seedglue.runner import DEFAULT_EXECUTABLE, SeedGlueRunner

log = logging.getLogger(__name__)

PREFIX = "[snapd-seed-glue autopkgtest]"
INVALID_SNAP = "absolutelyridiculouslongnamethatwilldefinitelyneverexist"

# Each step reruns the same seed, so later steps exercise add and remove
SEED_STEPS = [
    ("Testing snapd-seed-glue with hello...", ["hello"]),
    ("Add htop to the same seed...", ["hello", "htop"]),
    ("Remove htop and replace it with btop...", ["hello", "btop"]),
]


def run_checks(
    runner: SeedGlueRunner,
    seed: str = "hello_test",
    invalid_seed: str = "test_dir",
    invalid_snap: str = INVALID_SNAP,
) -> None:
    for message, snaps in SEED_STEPS:
        log.info("%s %s", PREFIX, message)
        runner.ensure_seeded(seed, snaps)

    log.info("%s Confirm that non-existent snaps will fail...", PREFIX)
    runner.expect_snap_not_found(invalid_seed, invalid_snap)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="snapd-seed-glue-check",
        description="Check snapd-seed-glue against its command-line contract.",
    )
    parser.add_argument("--executable", default=DEFAULT_EXECUTABLE, help="path to snapd-seed-glue")
    parser.add_argument("--seed", default="hello_test", help="seed used for the add/remove steps")
    parser.add_argument("--invalid-seed", default="test_dir", help="seed used for the unknown snap step")
    parser.add_argument("--invalid-snap", default=INVALID_SNAP, help="snap name that must not exist")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(verbose=args.verbose, log_to_file=False)

    runner = SeedGlueRunner(executable=args.executable, echo=print)
    try:
        run_checks(runner, seed=args.seed, invalid_seed=args.invalid_seed, invalid_snap=args.invalid_snap)
    except ExternalToolFailure as e:
        log.error("%s FAILED: %s", PREFIX, e)
        return 1

    log.info("%s All checks passed", PREFIX)
    return 0


if __name__ == "__main__":
    sys.exit(main())
