"""Run a configured program and capture its output.

A run goes through these steps, failing fast at each one:

1. normalize the runtime arguments
2. resolve the child's environment from the overlay
3. locate the executable, either the configured one or via the search path
4. start the child with stdout/stderr redirected into temporary files
5. wait for it to exit
6. rewind the capture files
7. check the exit code against the expected set

There is no timeout: a child that never exits blocks the caller.
"""

from __future__ import annotations

import logging
import ntpath
import os
import posixpath
import subprocess
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING

from proclaunch.arguments import Argument, normalize_arguments
from proclaunch.detection import (
    PATH_EXTENSIONS_ENV,
    Platform,
    path_env_key,
    path_separator,
    uses_path_extensions,
)
from proclaunch.errors import ExecutableNotFound, SpawnFailure, UnexpectedExitCode
from proclaunch.models.completed_process import CompletedProcess

if TYPE_CHECKING:
    from proclaunch.models.launch_configuration import LaunchConfiguration

log = logging.getLogger(__name__)


def lookup_variable(
    environment: Mapping[str, str | None], key: str, host: Platform
) -> str | None:
    """Look up `key`, ignoring case on Windows-like platforms."""
    if key in environment:
        return environment[key]
    if host is Platform.WINDOWS_LIKE:
        folded = key.upper()
        for name, value in environment.items():
            if name.upper() == folded:
                return value
    return None


def resolve_environment(config: LaunchConfiguration) -> dict[str, str] | None:
    """Return the child's environment, or None to inherit the caller's as-is."""
    if not config.environment:
        return None

    environment = dict(os.environ)
    for key, value in config.environment.items():
        if config.platform is Platform.WINDOWS_LIKE:
            folded = key.upper()
            for name in [name for name in environment if name.upper() == folded]:
                del environment[name]
        else:
            environment.pop(key, None)
        if value is not None:
            environment[key] = value
    return environment


def _candidates(
    name: str, search_path: str, extensions: list[str], host: Platform
) -> Iterator[str]:
    join = ntpath.join if host is Platform.WINDOWS_LIKE else posixpath.join
    for directory in search_path.split(path_separator(host)):
        if not directory:
            continue
        for ext in extensions:
            yield join(directory, name + ext)


def resolve_executable(config: LaunchConfiguration, environment: Mapping[str, str] | None) -> str:
    """Return the path of the executable to start.

    An explicit executable is returned verbatim; it was checked when it was
    configured. Otherwise the search path of the resolved environment is
    scanned for `config.name`. On Windows-like platforms each directory is
    tried with the bare name first, then with every PATHEXT extension.
    """
    if config.executable:
        return config.executable

    host = config.platform
    if environment is None:
        environment = os.environ
    key = path_env_key(host)
    search_path = lookup_variable(environment, key, host)
    if search_path is None:
        raise ExecutableNotFound(
            f'no executable configured for "{config.name}" and no {key} variable set'
        )

    extensions = [""]
    if uses_path_extensions(host):
        pathext = lookup_variable(environment, PATH_EXTENSIONS_ENV, host)
        if pathext:
            extensions.extend(ext for ext in pathext.split(";") if ext)

    for candidate in _candidates(config.name, search_path, extensions, host):
        if os.path.isfile(candidate):
            log.debug("resolved %s to %s", config.name, candidate)
            return candidate

    raise ExecutableNotFound(f'no executable named "{config.name}" found in {key}')


def run(config: LaunchConfiguration, *args: Argument) -> CompletedProcess:
    """Run `config`'s program with `args` appended to its default arguments.

    Raises UnexpectedExitCode when the exit code is not expected; the error
    carries the completed process so its output can still be read.
    """
    arguments = normalize_arguments(args)
    environment = resolve_environment(config)
    executable = resolve_executable(config, environment)
    argv = [executable, *config.default_arguments, *arguments]

    log.debug(
        "running %s: argv=%r cwd=%s env=%s",
        config.name,
        argv,
        config.working_directory or "(inherited)",
        "(inherited)" if environment is None else "(overlay)",
    )

    process = CompletedProcess(name=config.name)
    try:
        child = subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=process.stdout,
            stderr=subprocess.STDOUT if config.combined_output else process.stderr,
            cwd=config.working_directory,
            env=environment,
        )
    except (OSError, ValueError) as e:
        # Popen raises ValueError for NUL bytes or "=" in variable names
        process.close()
        raise SpawnFailure(f'failed to start "{config.name}" ({executable}): {e}') from e

    process.exit_code = child.wait()
    log.debug("%s exited with %d", config.name, process.exit_code)

    process.stdout.seek(0)
    process.stderr.seek(0)

    if process.exit_code not in config.expected_exit_codes:
        raise UnexpectedExitCode(config.name, process.exit_code, process)
    return process
