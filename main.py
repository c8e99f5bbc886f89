import argparse
import logging
import sys

from cinput.parsers import Char
from cinput.sources import stdin_source
from cinput.stream import RInStream
from cinput.utils import Config, configure_logging

VALUE_KINDS = {
    "int": int,
    "float": float,
    "bool": bool,
    "char": Char,
    "str": str,
}

parser = argparse.ArgumentParser(description="Split input into tokens, lines or typed values.")
parser.add_argument('-c', '--config', type=str, help='Path to the configuration file')
parser.add_argument('--verbose', action='store_true', help='Log refills and parse failures')

input_type = parser.add_mutually_exclusive_group()
input_type.add_argument('-f', '--file', type=str, help='Path to the input file')
input_type.add_argument('-s', '--string', type=str, help='Input text passed directly')

mode = parser.add_mutually_exclusive_group()
mode.add_argument('-t', '--tokens', action='store_true', help='Print tokens with their positions (default)')
mode.add_argument('-l', '--lines', action='store_true', help='Print lines')
mode.add_argument('-v', '--values', choices=sorted(VALUE_KINDS), help='Print values of this type until the first failure')


def run(stream: RInStream) -> None:
    if args.lines:
        while True:
            line = stream.read_line()
            if line is None:
                break
            print(line)
    elif args.values:
        for value in stream.values(VALUE_KINDS[args.values]):
            print(value)
    else:
        for token in stream.tokenizer:
            print(repr(token))

    if stream.error is not None:
        print(stream.error, file=sys.stderr)
        sys.exit(1)


args = parser.parse_args()

if args.config:
    try:
        config = Config.from_json_file(args.config)
    except Exception as e:
        print(f"Failed to load config: {e}", file=sys.stderr)
        sys.exit(1)
else:
    config = Config()

configure_logging(logging.DEBUG if args.verbose else config.log_level)

if args.file:
    try:
        with RInStream.from_path(args.file, config) as file_stream:
            run(file_stream)
    except OSError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        sys.exit(1)
elif args.string is not None:
    run(RInStream.from_bytes(args.string, config))
else:
    run(RInStream.from_source(stdin_source(), config))
