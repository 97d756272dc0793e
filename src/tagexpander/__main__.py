# -------------------------------------
# tagexpander CLI entry point
# -------------------------------------
"""
CLI entry point.

Usage:
    python -m tagexpander grammar.yml
    python -m tagexpander grammar.json --rule "#hero# says hi" -n 5 --seed 1
    python -m tagexpander --scan "a #b.s# [c:d] e"
"""
import argparse
import sys

import yaml

from . import grammar_state as state
from .loader import dump_grammar_data, load_grammar
from .scanner import Act, Lit, scan_segments
from .table import print_table


def _print_scan(text: str) -> int:
    scan = scan_segments(text)
    for s in scan:
        if isinstance(s, Lit):
            print("LIT ", repr(s.raw))
        elif isinstance(s, Act):
            print("ACT ", repr(s.raw))
        else:
            print("TAG ", repr(s.raw))
    for e in scan.errors:
        print(f"error: {e}", file=sys.stderr)
    return 1 if scan.errors else 0


def _main() -> int:
    p = argparse.ArgumentParser(
        description="Expand tag grammars into text.",
    )
    p.add_argument("path", nargs="?", help="Grammar file (.json, .yml, .yaml)")
    p.add_argument("--rule", "-r", default="#origin#", help="Rule to expand (default: #origin#)")
    p.add_argument("--count", "-n", type=int, default=1, help="Number of texts to generate")
    p.add_argument("--seed", "-s", metavar="SEED", help="Seed the RNG (int, or 'auto')")
    p.add_argument("--max-depth", type=int, metavar="N", help="Expansion depth ceiling")
    p.add_argument("--errors", "-e", action="store_true", help="Print expansion errors to stderr")
    p.add_argument("--json", action="store_true", help="Print live rule stacks as JSON after generating")
    p.add_argument("--save", metavar="PATH", help="Write live rule stacks to a .json/.yml file")
    p.add_argument("--uses", action="store_true", help="Print symbol usage table after generating")
    p.add_argument("--scan", metavar="TEXT", help="Print the tokenizer segments of TEXT and exit")
    args = p.parse_args()

    if args.scan is not None:
        return _print_scan(args.scan)

    if args.path is None:
        p.error("path is required unless --scan is given")

    if args.seed is not None:
        state.seed(args.seed)

    try:
        grammar = load_grammar(args.path, max_depth=args.max_depth)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    n_errors = 0
    for i in range(args.count):
        if i:
            grammar.clear_state()
        root = grammar.expand(args.rule)
        print(root.finished_text)
        n_errors += len(root.errors)
        if args.errors:
            for e in root.errors:
                print(f"error: {e}", file=sys.stderr)

    if args.json:
        print(grammar.to_json())
    if args.save:
        dump_grammar_data(grammar.to_data(), args.save)
    if args.uses:
        print_table(grammar.usage_table())

    return 1 if (args.errors and n_errors) else 0


if __name__ == "__main__":
    raise SystemExit(_main())
