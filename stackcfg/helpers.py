from stackcfg.assemble import CFG


def cfg_to_json(cfg: CFG):
    """Export the CFG in the {"blocks", "cfg": {"entry", "edges"}} shape."""
    return {
        "blocks": [{"name": b.label, "instrs": list(b.contents), "dead": b.dead} for b in cfg],
        "cfg": {
            "entry": cfg.entry,
            "edges": edges_by_name(cfg),
        },
    }


def edges_by_name(cfg: CFG):
    return {b.label: [dst for _, dst in b.successors()] for b in cfg}


def preds_by_name(cfg: CFG):
    preds = {b.label: [] for b in cfg}
    for src, dst, _ in cfg.edges():
        if src not in preds[dst]:
            preds[dst].append(src)
    return preds


def reachable_block_names(cfg: CFG):
    """Names of the blocks some path from the entry reaches, over flow and branch edges."""
    seen = set()
    stack = [cfg.entry] if cfg.entry is not None else []
    while stack:
        label = stack.pop()
        if label not in seen:
            seen.add(label)
            stack.extend(dst for _, dst in cfg.successors(label))
    return seen


def unreachable_block_names(cfg: CFG):
    """Blocks no path from the entry reaches, in program order.

    Stricter than the `dead` flag, which only looks at the block right above.
    """
    reachable = reachable_block_names(cfg)
    return [b.label for b in cfg if b.label not in reachable]
