"""proclaunch - launch command-line programs with captured output."""

__version__ = "0.1.0"

from proclaunch.detection import Platform, current_platform
from proclaunch.errors import (
    ConfigurationError,
    ExecutableNotFound,
    InvalidArgument,
    ProcessLaunchError,
    SpawnFailure,
    UnexpectedExitCode,
    UnsupportedEnvironment,
)
from proclaunch.lines import lines_of
from proclaunch.models import CompletedProcess, LaunchConfiguration

__all__ = [
    "CompletedProcess",
    "ConfigurationError",
    "ExecutableNotFound",
    "InvalidArgument",
    "LaunchConfiguration",
    "Platform",
    "ProcessLaunchError",
    "SpawnFailure",
    "UnexpectedExitCode",
    "UnsupportedEnvironment",
    "__version__",
    "current_platform",
    "lines_of",
]
