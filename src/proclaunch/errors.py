"""Exceptions raised while configuring or running a program."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from proclaunch.models import CompletedProcess


class ProcessLaunchError(Exception):
    """Base class for all proclaunch errors."""


class UnsupportedEnvironment(ProcessLaunchError, RuntimeError):
    """The interpreter cannot create child processes."""


class ConfigurationError(ProcessLaunchError, ValueError):
    """A configured value is unusable, e.g. a missing explicit executable."""


class InvalidArgument(ProcessLaunchError, TypeError):
    """A command-line argument is neither an int nor a str."""


class ExecutableNotFound(ProcessLaunchError, FileNotFoundError):
    """No executable could be located for a program name."""


class SpawnFailure(ProcessLaunchError, OSError):
    """The host failed to start the child process."""


class UnexpectedExitCode(ProcessLaunchError):
    """The child exited with a code outside the expected set.

    The completed process is attached so its captured output stays readable.
    """

    def __init__(self, name: str, exit_code: int, process: CompletedProcess | None = None) -> None:
        super().__init__(f'program "{name}" failed with exit code {exit_code}')
        self.name = name
        self.exit_code = exit_code
        self.process = process
