"""Line iteration over captured output buffers."""

from collections.abc import Iterator
from typing import BinaryIO


def lines_of(buffer: BinaryIO, encoding: str = "utf-8") -> Iterator[str]:
    """Yield the lines of a rewound byte buffer without line terminators.

    The generator reads from the buffer's current position, so a second pass
    needs `buffer.seek(0)` and a fresh call.
    """
    for raw in buffer:
        yield raw.decode(encoding, errors="replace").rstrip("\r\n")
