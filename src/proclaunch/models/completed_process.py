"""Result model for a finished child process."""

import tempfile
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import BinaryIO

from proclaunch.lines import lines_of


def _capture_sink() -> BinaryIO:
    return tempfile.TemporaryFile(mode="w+b")


@dataclass(eq=False)
class CompletedProcess:
    """Captured output and exit code of a program run.

    Both sinks are anonymous temporary files, rewound once the child exits.
    They are released by `close()`, by leaving a `with` block, or when the
    object is garbage collected.
    """

    name: str
    stdout: BinaryIO = field(default_factory=_capture_sink, repr=False)
    stderr: BinaryIO = field(default_factory=_capture_sink, repr=False)
    exit_code: int | None = None

    def iter_stdout_lines(self) -> Iterator[str]:
        return lines_of(self.stdout)

    def iter_stderr_lines(self) -> Iterator[str]:
        return lines_of(self.stderr)

    def close(self) -> None:
        self.stdout.close()
        self.stderr.close()

    def __enter__(self) -> "CompletedProcess":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
