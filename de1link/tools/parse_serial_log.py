"""
Replay a captured serial log through the packet decoder.

Captured lines start with a three-character direction marker (for example
``<- `` or ``-> ``) followed by the frame text. Each line is printed back
with the frame replaced by its decoded packet, or annotated with the error
when it does not decode.
"""
import argparse
import json
import sys
from typing import Iterable, Iterator, TextIO

from de1link.core.errors import De1Error
from de1link.parsing.packets import Packet, as_dict

PREFIX_LENGTH = 3


def replay_lines(lines: Iterable[str], as_json: bool = False) -> Iterator[str]:
    for raw in lines:
        line = raw.rstrip("\r\n")
        if len(line) < PREFIX_LENGTH:
            continue
        prefix, text = line[:PREFIX_LENGTH], line[PREFIX_LENGTH:]
        try:
            packet = Packet.parse(text)
        except De1Error as exc:
            yield f"{prefix}{text} (error {exc!r})"
            continue
        if as_json:
            yield f"{prefix}{json.dumps(as_dict(packet))}"
        else:
            yield f"{prefix}{packet!r}"


def replay(stream: TextIO, out: TextIO, as_json: bool = False) -> None:
    for result in replay_lines(stream, as_json=as_json):
        print(result, file=out)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Decode a captured DE1 serial log.")
    parser.add_argument("log", nargs="?", type=argparse.FileType("r"), default=sys.stdin, help="Log file (default: stdin).")
    parser.add_argument("--json", action="store_true", help="Print decoded packets as JSON.")

    args = parser.parse_args(argv)
    replay(args.log, sys.stdout, as_json=args.json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
