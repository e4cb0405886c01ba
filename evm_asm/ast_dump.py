import argparse
import logging
import sys
from pathlib import Path
from pprint import pprint

from evm_asm.asm_parser import parse_asm
from evm_asm.errors import ParseError


def main(cmdline) -> int:
    parser = argparse.ArgumentParser(description="Parse an assembly file and print the resulting nodes")
    parser.add_argument("source", action="store", type=Path)
    parser.add_argument("--raw", action="store_true", help="print node objects instead of assembly text")
    parser.add_argument("-v", "--verbose", action="store_true")
    ns = parser.parse_args(cmdline)
    logging.basicConfig(level=logging.DEBUG if ns.verbose else logging.WARNING)

    try:
        text = ns.source.read_text("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"{ns.source}: can't read file: {e}", file=sys.stderr)
        return 1
    try:
        program = parse_asm(text)
    except ParseError as e:
        print(f"{ns.source}: {e}", file=sys.stderr)
        return 1
    if ns.raw:
        pprint(program)
    else:
        for node in program:
            print(node)
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
