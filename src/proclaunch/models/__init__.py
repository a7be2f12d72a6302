"""Model package for proclaunch."""

from proclaunch.models.completed_process import CompletedProcess
from proclaunch.models.launch_configuration import LaunchConfiguration

__all__ = [
    "CompletedProcess",
    "LaunchConfiguration",
]
