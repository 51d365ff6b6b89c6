"""Render a CFG as Graphviz DOT, or draw it with networkx and matplotlib."""
import sys

from stackcfg.assemble import CFG

DEAD_COLOR = "#bbbbbb"
LIVE_COLOR = "#e3848d"


def generate_graphviz_code(cfg: CFG, name: str = "program") -> str:
    def generate_graphviz_vertices():
        nodes = []
        for block in cfg:
            body = "\\n".join(block.contents).replace('"', "'")
            nodes.append(f'{block.label} [shape=box label="<{block.label}>\\n{body}"]')
        return "\n".join(nodes)

    def generate_graphviz_edges():
        return "\n".join(f"{src} -> {dst}" for src, dst, _ in cfg.edges())

    return f"digraph {name} {{\n{generate_graphviz_vertices()}\n\n{generate_graphviz_edges()}\n\n}}"


def to_networkx(cfg: CFG):
    import networkx as nx

    G = nx.DiGraph()
    for block in cfg:
        G.add_node(block.label, contents=list(block.contents), dead=block.dead)
    for src, dst, kind in cfg.edges():
        # A conditional branch to the next block gives two edges to one node
        if G.has_edge(src, dst):
            G[src][dst]["kind"] = "both"
        else:
            G.add_edge(src, dst, kind=kind)
    return G


def draw_cfg(cfg: CFG, out_png: str | None = None, title: str | None = None):
    import matplotlib.pyplot as plt
    import networkx as nx

    G = to_networkx(cfg)
    colors = [DEAD_COLOR if G.nodes[n]["dead"] else LIVE_COLOR for n in G.nodes]
    styles = ["dashed" if G[u][v]["kind"] == "flow" else "solid" for u, v in G.edges]

    plt.figure(figsize=(max(6, len(cfg) * 0.8), max(4, len(cfg) * 0.6)))
    pos = nx.spring_layout(G, seed=0)
    nx.draw(
        G,
        pos,
        with_labels=True,
        arrows=True,
        node_size=1200,
        node_color=colors,
        style=styles,
        font_size=9,
    )
    if title:
        plt.title(title)
    plt.tight_layout()
    if out_png:
        plt.savefig(out_png)
        print(f"Saved plot to {out_png}", file=sys.stderr)
    else:
        plt.show()
