"""Build the control flow graph of a stack-machine assembly listing.

Usage: python -m stackcfg [FILE] > program.dot
"""
import argparse
import json
import logging
import sys

from stackcfg.assemble import CFGError, extract_blocks
from stackcfg.classify import TERMINATORS
from stackcfg.graphviz_cfg import draw_cfg, generate_graphviz_code
from stackcfg.helpers import cfg_to_json
from stackcfg.read_lines import read_program


def main(argv=None):
    ap = argparse.ArgumentParser(description="Build a basic-block CFG from assembly lines.")
    ap.add_argument("path", nargs="?", default="-", help="Input file, one instruction per line (default: stdin)")
    ap.add_argument("--format", choices=["dot", "json"], default="dot", help="Output format")
    ap.add_argument("--name", default="program", help="Graph name in DOT output")
    ap.add_argument("--terminator", action="append", default=[], metavar="OP",
                    help="Extra op that ends the program (repeatable)")
    ap.add_argument("--vis", action="store_true", help="Draw the CFG with matplotlib")
    ap.add_argument("--png", type=str, default=None, help="Save the drawing to PNG instead of showing")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log block boundaries")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s: %(message)s")

    try:
        lines = read_program(args.path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        cfg = extract_blocks(lines, TERMINATORS + tuple(args.terminator))
    except CFGError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.format == "json":
        json.dump(cfg_to_json(cfg), sys.stdout, indent=2)
        print()
    else:
        print(generate_graphviz_code(cfg, args.name))

    if args.vis or args.png:
        draw_cfg(cfg, out_png=args.png, title=args.name)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
