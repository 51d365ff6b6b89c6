"""Recognize the three instruction shapes that matter for block formation:
label declarations, branches and terminators. Every other line is opaque."""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BranchKind(Enum):
    UNCONDITIONAL = 1
    CONDITIONAL = 2


# Ops that jump to a label
BRANCH_OPS = {
    "b": BranchKind.UNCONDITIONAL,
    "bnz": BranchKind.CONDITIONAL,
    "bz": BranchKind.CONDITIONAL,
}

# Ops that end execution of the current path
TERMINATORS = ("err", "return")

# Longest mnemonic first so "bnz l" is never read as "b nz l"
_BRANCH_RE = re.compile(
    r"^(%s) (.*)" % "|".join(sorted(BRANCH_OPS, key=len, reverse=True))
)


@dataclass(frozen=True)
class Branch:
    op: str
    kind: BranchKind
    target: str

    @property
    def conditional(self) -> bool:
        return self.kind is BranchKind.CONDITIONAL


def get_label(line: str) -> Optional[str]:
    """Return the label declared by `line`, or None.

    A line declares a label when its first space-delimited token contains a
    colon. The name is everything before that colon.
    """
    colon_idx = line.split(" ")[0].find(":")
    if colon_idx <= 0:
        return None
    return line[:colon_idx]


def get_branch(line: str) -> Optional[Branch]:
    """Return the branch performed by `line`, or None."""
    match = _BRANCH_RE.match(line)
    if match is None:
        return None
    target = match.group(2).strip()
    if not target:
        return None
    op = match.group(1)
    return Branch(op, BRANCH_OPS[op], target)


def is_terminator(line: str, terminators=TERMINATORS) -> bool:
    """Check if an instruction ends the program."""
    return line.startswith(tuple(terminators))
