"""Turn constructing blocks into a finished control flow graph.

Successor links are stored as block names, not object references, so the
graph can hold loops and shared targets while staying a plain ordered list.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from stackcfg.build_blocks import ConstructingBlock, build_blocks
from stackcfg.classify import TERMINATORS


class CFGError(ValueError):
    pass


class UnresolvedBranchTarget(CFGError):
    """A branch names a label that is never declared."""

    def __init__(self, label: str):
        super().__init__(f"branch target not found: '{label}'")
        self.label = label


@dataclass
class Block:
    label: str
    contents: List[str]
    dead: bool = False
    flow: Optional[str] = None
    branch: Optional[str] = None

    def successors(self) -> List[Tuple[str, str]]:
        succs = []
        if self.flow is not None:
            succs.append(("flow", self.flow))
        if self.branch is not None:
            succs.append(("branch", self.branch))
        return succs


class CFG:
    """Ordered basic blocks of one program; the first block is the entry."""

    def __init__(self, blocks: List[Block]):
        self.blocks = blocks
        self.block_map: Dict[str, Block] = {b.label: b for b in blocks}

    @property
    def entry(self) -> Optional[str]:
        return self.blocks[0].label if self.blocks else None

    def __getitem__(self, label: str) -> Block:
        return self.block_map[label]

    def __contains__(self, label: object) -> bool:
        return label in self.block_map

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def successors(self, label: str) -> List[Tuple[str, str]]:
        return self.block_map[label].successors()

    def edges(self) -> List[Tuple[str, str, str]]:
        """All (src, dst, kind) edges, in block order, flow edge first."""
        return [(b.label, dst, kind) for b in self.blocks for kind, dst in b.successors()]


@dataclass
class AssemblyResult:
    graph: Optional[CFG] = None
    errors: List[UnresolvedBranchTarget] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> CFG:
        if self.errors:
            raise self.errors[0]
        return self.graph


def _block_names(blocks: List[ConstructingBlock], labels: Dict[str, ConstructingBlock]) -> List[str]:
    names = []
    for idx, block in enumerate(blocks):
        # A label redeclared later belongs to the later block only
        if block.label is not None and labels.get(block.label) is block:
            names.append(block.label)
            continue
        name = f"b{idx}"
        while name in labels:
            name += "_"
        names.append(name)
    return names


def assemble_graph(blocks: List[ConstructingBlock], labels: Dict[str, ConstructingBlock]) -> AssemblyResult:
    """Name the blocks and connect fallthrough and branch edges.

    Every unresolved branch target is reported; no graph is produced if
    there is any.
    """
    names = _block_names(blocks, labels)
    name_of = {id(block): name for block, name in zip(blocks, names)}
    finished = [Block(name, list(block.body), block.dead) for block, name in zip(blocks, names)]

    # Fallthrough is positional, never looked up by label
    for i in range(len(blocks) - 1):
        if blocks[i].flow:
            finished[i].flow = finished[i + 1].label

    errors = []
    for block, real in zip(blocks, finished):
        if block.branch is None:
            continue
        target = labels.get(block.branch)
        if target is None:
            logging.debug(f"block {real.label}: unresolved branch target {block.branch!r}")
            errors.append(UnresolvedBranchTarget(block.branch))
            continue
        real.branch = name_of[id(target)]

    if errors:
        return AssemblyResult(errors=errors)
    return AssemblyResult(graph=CFG(finished))


def extract_blocks(lines: Iterable[str], terminators=TERMINATORS) -> CFG:
    """Build the CFG of `lines`, raising UnresolvedBranchTarget on a bad branch."""
    blocks, labels = build_blocks(lines, terminators)
    return assemble_graph(blocks, labels).unwrap()
