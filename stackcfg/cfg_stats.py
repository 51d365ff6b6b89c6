"""Build CFGs for many assembly listings and report block statistics.

Usage: stackcfg-stats programs/ [--plot] [--out results.json]
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
from tqdm import tqdm

from stackcfg.assemble import assemble_graph
from stackcfg.build_blocks import build_blocks
from stackcfg.helpers import unreachable_block_names
from stackcfg.read_lines import read_program


def collect_targets(input_paths: List[str], ext: str) -> List[Path]:
    targets: List[Path] = []
    for p in input_paths:
        path = Path(p)
        if path.is_file():
            targets.append(path)
        elif path.is_dir():
            for child in path.iterdir():
                if child.is_file() and child.name.endswith(ext):
                    targets.append(child)
        else:
            print(f"Warning: {path} does not exist. Skipping.", file=sys.stderr)
    targets.sort()
    return targets


def analyze_program(path: Path) -> Dict[str, Any]:
    lines = read_program(str(path))
    rec: Dict[str, Any] = {"file": str(path), "lines": len(lines)}

    result = assemble_graph(*build_blocks(lines))
    if not result.ok:
        rec["verdict"] = "BAD: " + "; ".join(str(e) for e in result.errors)
        return rec

    cfg = result.graph
    edges = cfg.edges()
    rec.update({
        "verdict": "Good!",
        "blocks": len(cfg),
        "dead_blocks": sum(1 for b in cfg if b.dead),
        "unreachable_blocks": len(unreachable_block_names(cfg)),
        "flow_edges": sum(1 for _, _, kind in edges if kind == "flow"),
        "branch_edges": sum(1 for _, _, kind in edges if kind == "branch"),
    })
    return rec


def eval_results(results: List[Dict[str, Any]]) -> pd.DataFrame:
    df = pd.DataFrame(results)
    good = df[df["verdict"] == "Good!"] if len(df) else df

    with pd.option_context("display.max_rows", None, "display.width", 120):
        print(df.to_string(index=False))

    print(f"\nSuccessful programs: {len(good)}/{len(df)}")
    if len(good):
        print(f"Total blocks: {int(good['blocks'].sum())}")
        print(f"Dead blocks: {int(good['dead_blocks'].sum())}")
        print(f"Unreachable blocks: {int(good['unreachable_blocks'].sum())}")
        print(f"Mean blocks per program: {good['blocks'].mean():.2f}")
    return df


def plot(results: List[Dict[str, Any]], out_png: str | None = None):
    import matplotlib.pyplot as plt  # type: ignore

    good = [r for r in results if r["verdict"] == "Good!"]
    if not good:
        return

    good.sort(key=lambda r: r["blocks"])
    labels = [Path(r["file"]).name for r in good]
    xs = list(range(len(labels)))
    live = [r["blocks"] - r["dead_blocks"] for r in good]
    dead = [r["dead_blocks"] for r in good]

    plt.figure(figsize=(max(8, len(labels) * 0.18), 4))
    plt.bar(xs, live, label="live")
    plt.bar(xs, dead, bottom=live, label="dead")
    plt.ylabel("Basic blocks")
    plt.title("Basic blocks per program")
    plt.legend()
    plt.xticks(xs, labels, rotation=90, fontsize=7)
    plt.tight_layout()
    if out_png:
        plt.savefig(out_png)
        print(f"Saved plot to {out_png}")
    else:
        plt.show()


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(description="Report basic-block statistics for assembly listings.")
    ap.add_argument("paths", nargs="+", help="Listing files or directories")
    ap.add_argument("--ext", type=str, default=".txt", help="Extension of listings inside directories")
    ap.add_argument("--out", type=str, default=None, help="Write detailed JSON results here")
    ap.add_argument("--plot", action="store_true", help="Show/save matplotlib plot of block counts")
    ap.add_argument("--png", type=str, default=None, help="Save plot to PNG instead of showing")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s: %(message)s")

    targets = collect_targets(args.paths, args.ext)
    if not targets:
        print("No listings found.")
        return 0

    print(f"Target programs: {len(targets)}")

    results: List[Dict[str, Any]] = []
    for t in tqdm(targets):
        try:
            results.append(analyze_program(t))
        except (OSError, UnicodeDecodeError) as e:
            results.append({"file": str(t), "verdict": f"BAD: {e}"})

    eval_results(results)

    if args.out:
        with open(args.out, "w") as f:
            json.dump(results, f, indent=2)
            print(f"Wrote results to {args.out}")

    if args.plot or args.png:
        plot(results, out_png=args.png)

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
