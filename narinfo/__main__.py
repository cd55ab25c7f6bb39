import sys
import json
import typing as t
import logging
import argparse

import uvloop
from hypercorn import Config
from hypercorn.asyncio import serve

from narinfo.app import create_app
from narinfo.errors import NarInfoError
from narinfo.record import ParserOptions, parse_narinfo


logger = logging.getLogger("narinfo.cli")


parser = argparse.ArgumentParser(description="Nix narinfo parser and validator.")
parser.add_argument("--verbose", action="store_const", const=logging.DEBUG, default=logging.INFO, dest="loglevel")
parser.add_argument("--optional-deriver", action="store_true", help="Accept narinfos without a Deriver line.")
parser.add_argument("--additive-references", action="store_true", help="Join repeated References lines.")
commands = parser.add_subparsers(dest="command", required=True)

check_cmd = commands.add_parser("check", help="Validate narinfo files ('-' reads stdin).")
check_cmd.add_argument("files", nargs="+")
check_cmd.add_argument("--dump", action="store_true", help="Print each parsed record as JSON.")

serve_cmd = commands.add_parser("serve", help="Run the HTTP validation service.")
serve_cmd.add_argument("--host", default="127.0.0.1")
serve_cmd.add_argument("--port", default=12305, type=int)


def options_from_args(args: argparse.Namespace) -> ParserOptions:
    options = ParserOptions.from_env()
    if args.optional_deriver:
        options = options._replace(deriver_required=False)
    if args.additive_references:
        options = options._replace(additive_references=True)
    return options


def read_document(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def check(paths: t.Sequence[str], options: ParserOptions, dump: bool = False) -> int:
    failures = 0
    for path in paths:
        try:
            document = read_document(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"{path}: cannot read: {e}")
            failures += 1
            continue

        try:
            info = parse_narinfo(document, options)
        except NarInfoError as e:
            logger.error(f"{path}: {e.kind}: {e}")
            failures += 1
            continue

        logger.info(f"{path}: ok ({info.storepath})")
        if dump:
            print(json.dumps(info.as_dict()))

    return 1 if failures else 0


async def main(host: str, port: int, options: ParserOptions):
    config = Config()
    config.bind = [f"{host}:{port}"]
    logger.info(f"Serving narinfo validation on {host}:{port}")
    await serve(create_app(options), config)


def run(argv: t.Optional[t.Sequence[str]] = None) -> int:
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.loglevel)
    options = options_from_args(args)

    if args.command == "serve":
        uvloop.run(main(args.host, args.port, options))
        return 0

    return check(args.files, options, args.dump)


if __name__ == "__main__":
    sys.exit(run())
