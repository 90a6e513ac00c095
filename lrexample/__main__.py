import argparse
import json
import logging
import sys

from .backtrace import load_backtrace
from .report import DEFAULT_EXAMPLE_LIMIT, explain


def main(args: list[str]) -> int:
    parser = argparse.ArgumentParser(
        prog="lrexample",
        description="Draw examples for the conflict described by a backtrace",
    )
    parser.add_argument("trace", help="Path to a JSON file containing the backtrace")
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_EXAMPLE_LIMIT,
        help=f"The most examples to show. The default is {DEFAULT_EXAMPLE_LIMIT}.",
    )
    parser.add_argument(
        "--lookahead",
        type=str,
        default=None,
        help="The token that was being looked at when the conflict happened.",
    )
    parser.add_argument(
        "--description",
        type=str,
        default=None,
        help="A short description of the conflict, like 'shift/reduce'.",
    )
    parser.add_argument("--verbose", action="store_true", help="Turn on debug logging.")

    parsed = parser.parse_args(args[1:])
    logging.basicConfig(level=logging.DEBUG if parsed.verbose else logging.WARNING)

    try:
        with open(parsed.trace, "r", encoding="utf-8") as f:
            data = json.load(f)
        backtrace = load_backtrace(data)
        explanation = explain(
            backtrace,
            lookahead=parsed.lookahead,
            description=parsed.description,
            limit=parsed.limit,
        )
    except (OSError, ValueError) as e:
        # NOTE: json.JSONDecodeError is a ValueError.
        print(f"lrexample: {e}", file=sys.stderr)
        return 1

    print(explanation)
    return 0


def run():
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    run()
