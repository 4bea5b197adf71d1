"""
Black-box driver for the snapd-seed-glue command-line tool.

The tool is only known through its command line: it is invoked as
``snapd-seed-glue --verbose --seed <seed> [snap ...]`` and judged by its exit
code and by substrings of its merged stdout/stderr.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from packages.core.errors import ExternalToolFailure

log = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "/usr/bin/snapd-seed-glue"
SUCCESS_MARKER = "Cleanup and validation completed"


def snap_not_found_message(snap: str) -> str:
    return f'cannot install snap "{snap}": snap not found'


@dataclass(frozen=True)
class CommandResult:
    command: List[str] = field(default_factory=list)
    output: str = ""
    exit_code: int = 0

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class SeedGlueRunner:
    def __init__(
        self,
        executable: str = DEFAULT_EXECUTABLE,
        echo: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._executable = executable
        self._echo = echo or (lambda line: log.info("%s", line))

    @property
    def executable(self) -> str:
        return self._executable

    def build_command(self, seed: str, snaps: Sequence[str]) -> List[str]:
        return [self._executable, "--verbose", "--seed", seed, *snaps]

    def run(self, seed: str, snaps: Sequence[str]) -> CommandResult:
        """Run the tool with stderr folded into stdout, echoing each line."""
        cmd = self.build_command(seed, snaps)
        log.debug("Running %s", " ".join(cmd))
        lines: List[str] = []
        try:
            with subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            ) as proc:
                for line in proc.stdout:
                    lines.append(line)
                    self._echo(line.rstrip("\n"))
                exit_code = proc.wait()
        except OSError as e:
            raise ExternalToolFailure(f"cannot run {self._executable}: {e}", command=cmd) from e

        return CommandResult(command=cmd, output="".join(lines), exit_code=exit_code)

    def ensure_seeded(self, seed: str, snaps: Sequence[str]) -> CommandResult:
        """Seed `snaps` into `seed` and require the tool to report success."""
        result = self.run(seed, snaps)
        if not result.ok:
            raise ExternalToolFailure(
                f"snapd-seed-glue exited with status {result.exit_code}",
                command=result.command,
                exit_code=result.exit_code,
                output=result.output,
            )
        if SUCCESS_MARKER not in result.output:
            raise ExternalToolFailure(
                f"snapd-seed-glue output lacks {SUCCESS_MARKER!r}",
                command=result.command,
                exit_code=result.exit_code,
                output=result.output,
            )
        return result

    def expect_snap_not_found(self, seed: str, snap: str) -> CommandResult:
        """Require the tool to reject a snap that does not exist in the store."""
        result = self.run(seed, [snap])
        if result.ok:
            raise ExternalToolFailure(
                f"snapd-seed-glue accepted unknown snap {snap!r}",
                command=result.command,
                exit_code=result.exit_code,
                output=result.output,
            )
        expected = snap_not_found_message(snap)
        if expected not in result.output:
            raise ExternalToolFailure(
                f"snapd-seed-glue output lacks {expected!r}",
                command=result.command,
                exit_code=result.exit_code,
                output=result.output,
            )
        return result
