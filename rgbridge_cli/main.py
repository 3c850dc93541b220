"""rgbridge CLI entry point.

Verbs:
- search: run ripgrep and print structured results as JSON
- history: list, clear, clean up or relocate the search history
"""

import argparse
import logging

from rgbridge_cli.verbs import history, search


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rgbridge",
        description="Run ripgrep and get structured JSON results",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="verb", required=True)

    search.register(sub)
    history.register(sub)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    from rgbridge.utils.logger import get_logger
    get_logger(
        "rgbridge",
        console_level=logging.DEBUG if args.debug else logging.WARNING,
    )

    from rgbridge.config import initialize_config
    config = initialize_config()

    handler = args.handler
    handler(args, config)


if __name__ == "__main__":
    main()
