from __future__ import annotations

"""
External Process Infrastructure.

Defines the pluggable interface every delegated tool goes through (git,
pandoc, the text agent, the mail hook). Implementations capture combined
stdout/stderr; a non-zero exit is surfaced with that output attached and
is never retried.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence

from standards.domain.errors import ExternalToolError

logger = logging.getLogger(__name__)

# Conventional shell statuses for "command not found" and "cannot execute"
COMMAND_NOT_FOUND = 127
COMMAND_NOT_EXECUTABLE = 126


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of one external invocation.

    Attributes:
        args: Full argument vector, executable first.
        returncode: Process exit status.
        output: Combined stdout and stderr text.
    """
    args: List[str]
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(ABC):
    """
    Abstract interface for running external tools.
    """

    @abstractmethod
    def run(self, args: Sequence[str], cwd: Optional[str] = None) -> CommandResult:
        """
        Execute a command and wait for it to finish.

        Args:
            args: Argument vector, executable first.
            cwd: Working directory for the process.

        Returns:
            CommandResult: Exit status and captured output.
        """
        pass


class SubprocessRunner(CommandRunner):
    """Runs commands with the subprocess module, blocking until exit."""

    def run(self, args: Sequence[str], cwd: Optional[str] = None) -> CommandResult:
        argv = [str(a) for a in args]
        logger.debug(f"Executing: {argv} (cwd={cwd})")

        try:
            completed = subprocess.run(
                argv,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            logger.debug(f"Executable not found: {argv[0]}")
            return CommandResult(args=argv, returncode=COMMAND_NOT_FOUND, output=str(e))
        except OSError as e:
            logger.debug(f"Cannot execute {argv[0]}: {e}")
            return CommandResult(args=argv, returncode=COMMAND_NOT_EXECUTABLE, output=str(e))

        return CommandResult(args=argv, returncode=completed.returncode,
                             output=completed.stdout or "")


def run_checked(
        runner: CommandRunner,
        args: Sequence[str],
        cwd: Optional[str] = None,
        description: Optional[str] = None,
) -> CommandResult:
    """
    Run a command and convert a non-zero exit into ExternalToolError.

    Args:
        runner: Process runner to delegate to.
        args: Argument vector, executable first.
        cwd: Working directory for the process.
        description: Human-readable action used in the error message.

    Returns:
        CommandResult: The successful result.

    Raises:
        ExternalToolError: If the process exited non-zero.
    """
    result = runner.run(args, cwd=cwd)
    if not result.ok:
        label = description or f"'{args[0]}' failed"
        logger.error(f"{label}: exit code {result.returncode}")
        raise ExternalToolError(label, result.args, result.returncode, result.output)
    return result
