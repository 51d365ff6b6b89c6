"""Split a linear instruction stream into basic blocks.

A block can be entered in one of two ways: a label above it, or a branch
above it. So a label opens a new block, and a branch or terminator closes the
current one. Blocks are formed in a single pass; branch targets are left as
names and resolved later by `stackcfg.assemble`.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from stackcfg.classify import TERMINATORS, get_branch, get_label, is_terminator


@dataclass(eq=False)
class ConstructingBlock:
    body: List[str] = field(default_factory=list)
    label: Optional[str] = None
    # True when control may fall through into the next block
    flow: bool = False
    branch: Optional[str] = None
    dead: bool = False


def build_blocks(
    lines: Iterable[str], terminators=TERMINATORS
) -> Tuple[List[ConstructingBlock], Dict[str, ConstructingBlock]]:
    """Form the non-empty blocks of `lines` in program order.

    Returns (blocks, labels) where labels maps every declared label to the
    block it opens. Branch targets may refer to labels declared later.
    """
    blocks: List[ConstructingBlock] = []
    labels: Dict[str, ConstructingBlock] = {}

    cur = ConstructingBlock()
    for idx, line in enumerate(lines):
        # Labels are flown into from the previous block, even an empty one
        label = get_label(line)
        if label is not None:
            cur.flow = True
            blocks.append(cur)

            cur = ConstructingBlock(body=[line], label=label)
            if label in labels:
                logging.warning(f"Label {label!r} redeclared at line {idx + 1}; later declaration wins")
            labels[label] = cur
            logging.debug(f"line {idx + 1}: label {label!r} opens a block")
            continue

        cur.body.append(line)

        # Unconditional branches have one exit, conditional ones have two
        branch = get_branch(line)
        if branch is not None:
            cur.flow = branch.conditional
            cur.branch = branch.target
            blocks.append(cur)
            logging.debug(f"line {idx + 1}: {branch.op} {branch.target!r} closes a block")
            cur = ConstructingBlock(dead=not branch.conditional)
            continue

        # Anything straight after a terminator is dead code
        if is_terminator(line, terminators):
            blocks.append(cur)
            logging.debug(f"line {idx + 1}: terminator closes a block")
            cur = ConstructingBlock(dead=True)
            continue

    blocks.append(cur)

    return [b for b in blocks if b.body], labels
