#!/usr/bin/env python3
"""
gen_wrappers.py - safe wrapper generator entry point

Generates the safe LVGL wrapper sources from bindgen output.

Usage:
    python scripts/gen_wrappers.py BINDINGS [-o OUT_DIR] [--config FILE] [--no-ecs]
"""

import argparse
import logging
import os
import sys

# Add scripts directory to path
script_dir = os.path.dirname(os.path.abspath(__file__))
if script_dir not in sys.path:
    sys.path.insert(0, script_dir)

from wrapper_gen import CodegenError, Generator, load_config
from bindings import lvgl

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Generate safe LVGL wrappers from bindgen output')
    parser.add_argument('input',
                        help='bindgen output (.rs) or JSON IR (.json)')
    parser.add_argument('-o', '--output', default=os.environ.get('OUT_DIR', '.'),
                        help='Directory for generated.rs and widgets.rs (default: $OUT_DIR or .)')
    parser.add_argument('--config', default=None,
                        help='JSON generator config; replaces the built-in LVGL profile')
    parser.add_argument('--no-ecs', action='store_true',
                        help='Use the deny-list for builds without the ECS layer')
    parser.add_argument('--guard-str-returns', action='store_true',
                        help='Return Option<&CStr> and check string results for NULL')
    parser.add_argument('--list-functions', action='store_true',
                        help='Print every discovered function name and exit')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Also log expected skips')
    return parser


def make_generator(args) -> Generator:
    if args.config:
        gen = Generator(output_root=args.output, config=load_config(args.config))
    else:
        gen = Generator(output_root=args.output)
        # Apply LVGL-specific configuration
        lvgl.configure(gen, no_ecs=args.no_ecs)
    if args.guard_str_returns:
        gen.config.guard_str_returns = True
    return gen


def main(argv=None) -> int:
    args = create_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        gen = make_generator(args)
        if args.list_functions:
            for name in gen.load(args.input).function_names():
                print(name)
            return 0
        gen.generate(args.input)
    except CodegenError as exc:
        logger.error(str(exc))
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
