"""Immutable launch configuration for an external program.

Every ``with_*`` method returns a new configuration and leaves the receiver
untouched, so a single configuration can be shared as a long-lived service
object across threads::

    git = LaunchConfiguration.for_program("git").with_default_arguments("-C", repo)
    process = git.run("status", "--short")
    for line in process.iter_stdout_lines():
        ...
"""

import logging
import os
from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

from proclaunch import executor
from proclaunch.arguments import Argument, normalize_arguments, normalize_exit_codes
from proclaunch.detection import (
    Platform,
    can_spawn_processes,
    current_platform,
    path_env_key,
    path_separator,
)
from proclaunch.errors import ConfigurationError, UnsupportedEnvironment
from proclaunch.models.completed_process import CompletedProcess

log = logging.getLogger(__name__)

PathArg = str | os.PathLike[str]


class LaunchConfiguration(BaseModel):
    """How to locate and invoke one program."""

    model_config = ConfigDict(frozen=True)

    name: str
    executable: str | None = None
    working_directory: str | None = None
    environment_overlay: tuple[tuple[str, str | None], ...] = ()
    default_arguments: tuple[str, ...] = ()
    combined_output: bool = False
    expected_exit_codes: frozenset[int] = frozenset({0})
    platform: Platform = Field(default_factory=current_platform)

    @classmethod
    def for_program(cls, name: str) -> "LaunchConfiguration":
        """Create a configuration; `name` is also the default executable name."""
        if not can_spawn_processes():
            raise UnsupportedEnvironment("this interpreter cannot create child processes")
        return cls(name=name)

    @property
    def environment(self) -> Mapping[str, str | None]:
        """Read-only view of the overlay; None values mark variables to unset."""
        return MappingProxyType(dict(self.environment_overlay))

    @property
    def search_path_key(self) -> str:
        return path_env_key(self.platform)

    def with_working_directory(self, working_directory: PathArg | None) -> "LaunchConfiguration":
        """Set the child's working directory; None inherits the caller's."""
        if working_directory is not None:
            working_directory = os.fspath(working_directory)
        if working_directory == self.working_directory:
            return self
        return self.model_copy(update={"working_directory": working_directory})

    def with_environment_variable(self, key: str, value: str | None) -> "LaunchConfiguration":
        """Set a variable for the child, or remove it when `value` is None."""
        if not key or "=" in key or "\0" in key:
            raise ConfigurationError(f"invalid environment variable name: {key!r}")
        if value is not None and "\0" in value:
            raise ConfigurationError(f"value of {key} contains a NUL character")
        environment = {**self.environment, key: value}
        return self.model_copy(update={"environment_overlay": tuple(environment.items())})

    def with_additional_path_variable(self, value: PathArg) -> "LaunchConfiguration":
        """Prepend `value` to the search path so it is searched first.

        To replace or unset the search path use `with_environment_variable`.
        """
        key = self.search_path_key
        current = executor.lookup_variable(self.environment, key, self.platform)
        if current is None:
            current = executor.lookup_variable(os.environ, key, self.platform) or ""
        value = os.fspath(value)
        updated = f"{value}{path_separator(self.platform)}{current}" if current else value
        log.debug("%s for %s is now %r", key, self.name, updated)
        return self.with_environment_variable(key, updated)

    def with_executable(self, executable: PathArg | None) -> "LaunchConfiguration":
        """Set an explicit executable instead of searching the path for `name`.

        The file is checked now, not when the program is run.
        """
        if executable is not None:
            executable = os.fspath(executable)
        if executable == self.executable:
            return self
        if executable is not None:
            if not os.path.exists(executable):
                raise ConfigurationError(f'executable "{executable}" does not exist')
            if not os.path.isfile(executable) or not os.access(executable, os.X_OK):
                raise ConfigurationError(f'"{executable}" is not an executable file')
        return self.model_copy(update={"executable": executable})

    def with_default_arguments(self, *args: Argument) -> "LaunchConfiguration":
        """Set arguments placed before the ones passed to `run()`."""
        default_arguments = normalize_arguments(args)
        if default_arguments == self.default_arguments:
            return self
        return self.model_copy(update={"default_arguments": default_arguments})

    def with_combined_output(self, combined_output: bool) -> "LaunchConfiguration":
        """Feed stderr into the stdout sink, like ``2>&1`` in a shell.

        With this set, the stderr sink of the result is always empty.
        """
        if combined_output == self.combined_output:
            return self
        return self.model_copy(update={"combined_output": combined_output})

    def with_expected_exit_codes(self, *codes: int) -> "LaunchConfiguration":
        """Set the exit codes that are not reported as failures."""
        expected = normalize_exit_codes(codes)
        if expected == self.expected_exit_codes:
            return self
        return self.model_copy(update={"expected_exit_codes": expected})

    def run(self, *args: Argument) -> CompletedProcess:
        """Run the program to completion and return its captured output."""
        return executor.run(self, *args)
