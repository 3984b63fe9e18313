"""
Command line front end: `huffpack compress INPUT OUTPUT` / `huffpack decompress INPUT OUTPUT`.
"""

import argparse
import logging
import sys

import yaml

from .compression import Compressor
from .config_loader import load_config
from .errors import HuffpackError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="huffpack", description="Huffman text compressor.")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every stage at DEBUG level")
    parser.add_argument("--config", default=None, help="YAML config file (default: $HUFFPACK_CONFIG or the bundled one)")

    commands = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (("compress", "compress a text file into a container"),
                            ("decompress", "restore a text file from a container")):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("input", help="file to read")
        sub.add_argument("output", help="file to write")
    return parser


def configure_logging(config, verbose: bool) -> None:
    level = "DEBUG" if verbose else config["logging"]["level"]
    logging.basicConfig(level=level.upper(), format=config["logging"]["format"])


def report(stats) -> str:
    return (f"{stats.input_size} -> {stats.output_size} bytes "
            f"(ratio {stats.ratio:.3f}, {stats.space_saving:+.1%} saved), "
            f"{stats.bits_per_symbol:.3f} bits/symbol over {stats.distinct_symbols} distinct symbols")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        configure_logging(config, args.verbose)
        compressor = Compressor(config)

        if args.command == "compress":
            stats = compressor.compress(args.input, args.output)
            print(f"✅ Compressed {args.input} -> {args.output}: {report(stats)}")
        else:
            compressor.decompress(args.input, args.output)
            print(f"✅ Decompressed {args.input} -> {args.output}")
    except (HuffpackError, OSError, UnicodeError, ValueError, yaml.YAMLError) as e:
        print(f"❌ {args.command} failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
