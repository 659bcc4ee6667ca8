import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence

from intcalc.commands import Session

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="intcalc", description="Arbitrary-precision integer calculator")
    parser.add_argument("-d", "--debug", action="store_true", help="log tokens, operator stack and postfix form")
    parser.add_argument("-p", "--prompt", default="", help="prompt shown before each line (default: none)")
    parser.add_argument("files", nargs="*", type=Path, help="evaluate the lines of these files instead of stdin")
    return parser


def read_stdin(prompt: str) -> Iterator[str]:
    while True:
        try:
            yield input(prompt)
        except EOFError:
            return


def read_files(files: Iterable[Path]) -> Iterator[str]:
    for path in files:
        logger.debug("Reading %s", path)
        with path.open(encoding="utf-8") as f:
            for line in f:
                yield line


def run(session: Session, lines: Iterable[str]) -> None:
    for line in lines:
        reply = session.handle(line)
        if reply.text is not None:
            print(reply.text)
        if reply.finished:
            break


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    session = Session()
    lines = read_files(args.files) if args.files else read_stdin(args.prompt)
    try:
        run(session, lines)
    except (OSError, UnicodeDecodeError) as e:
        print(f"intcalc: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
