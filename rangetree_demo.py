#!/usr/bin/env python3
"""
rangetree demo - loads sample entries from a configuration file into an
interval tree and prints the entries found in a key range.
"""

import sys
import argparse
from pathlib import Path

from rangetree.config import Config
from rangetree.diagnostics import set_debug
from rangetree.interval_tree import IntervalTree


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="rangetree demo - range search over entries from a TOML file"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (default: auto-detect)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    parser.add_argument("start", help="Lower bound of the range")
    parser.add_argument("end", help="Upper bound of the range")
    return parser.parse_args(argv)


def coerce_keys(keys: list[str]):
    """Use int keys when every key is an integer literal, strings otherwise."""
    try:
        return [int(k) for k in keys], int
    except ValueError:
        return list(keys), str


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    if args.debug:
        set_debug(True)

    try:
        config = Config.load(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        print("\nExample configuration:")
        print("""
[General]
policy = "append"

[Entries]
1 = ["A", "E"]
3 = "B"
5 = "C"
""")
        return 1
    except Exception as e:
        print(f"Error loading configuration: {e}")
        return 1

    tree = IntervalTree.from_config(config.tree)
    raw_keys = list(config.entries)
    keys, key_type = coerce_keys(raw_keys)
    for key, raw_key in zip(keys, raw_keys):
        for value in config.entries[raw_key]:
            tree.insert(key, value)

    try:
        start, end = key_type(args.start), key_type(args.end)
    except ValueError:
        print(f"Error: range bounds must be {key_type.__name__} values")
        return 1

    for entry in tree.search(start, end):
        print(f"{entry.key}\t{entry.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
