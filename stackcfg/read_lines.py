import sys
from typing import List, TextIO


def read_lines(stream: TextIO) -> List[str]:
    """Read every line of `stream`, dropping the line terminator."""
    return [line.rstrip("\r\n") for line in stream]


def read_program(path: str) -> List[str]:
    if path == "-":
        return read_lines(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return read_lines(f)
