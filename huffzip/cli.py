"""
Command line front end.

    python -m huffzip compress INPUT [OUTPUT]
    python -m huffzip decompress INPUT [OUTPUT]
"""

import argparse
import logging
import os
import sys

import yaml

from .compression import compress, decompress
from .config_loader import load_config
from .errors import HuffmanError

logger = logging.getLogger(__name__)


def default_output(command, input_path, suffix):
    if command == "compress":
        return input_path + suffix
    if input_path.endswith(suffix) and len(input_path) > len(suffix):
        return input_path[:-len(suffix)]
    return input_path + ".out"


def build_parser():
    parser = argparse.ArgumentParser(prog="huffzip", description="Huffman file compressor.")
    parser.add_argument("--config", help="YAML configuration file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output.")
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (("compress", "Compress INPUT."), ("decompress", "Decompress INPUT.")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("input")
        sub.add_argument("output", nargs="?")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"huffzip: cannot load configuration: {exc}", file=sys.stderr)
        return 1

    level = logging.DEBUG if args.verbose else config["logging"]["level"]
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    chunk_size = config["io"]["chunk_size"]
    output = args.output or default_output(args.command, args.input, config["cli"]["suffix"])
    operation = compress if args.command == "compress" else decompress

    sink = None
    try:
        with open(args.input, "rb") as source, open(output, "wb") as sink:
            operation(source, sink, chunk_size)
    except (HuffmanError, OSError) as exc:
        logger.error("%s of %s failed: %s", args.command, args.input, exc)
        # Drop the partial output.
        if sink is not None:
            os.remove(output)
        return 1

    logger.info("%s: %s (%d bytes) -> %s (%d bytes)", args.command, args.input,
                os.path.getsize(args.input), output, os.path.getsize(output))
    return 0
