"""Split stack-machine assembly into basic blocks and link them into a CFG."""
from stackcfg.classify import BRANCH_OPS, TERMINATORS, Branch, BranchKind, get_branch, get_label, is_terminator
from stackcfg.build_blocks import ConstructingBlock, build_blocks
from stackcfg.assemble import (
    AssemblyResult,
    Block,
    CFG,
    CFGError,
    UnresolvedBranchTarget,
    assemble_graph,
    extract_blocks,
)

__version__ = "0.1.0"
