"""Turn backtraces into messages that a person can read."""

import dataclasses
import itertools
import logging
import typing

from .backtrace import BacktraceNode
from .example import Example, ExampleIterator, Symbol

DEFAULT_EXAMPLE_LIMIT = 5

report_log = logging.getLogger("lrexample.report")


@dataclasses.dataclass
class Explanation:
    """Everything we have to say about one conflict."""

    backtrace: BacktraceNode
    examples: typing.Tuple[Example, ...]

    # True if there were more examples than we were willing to show.
    truncated: bool = False

    lookahead: str | None = None
    description: str | None = None

    @property
    def path(self) -> str:
        """The symbols we have seen by the time we hit the conflict, as
        shown by the first example.
        """
        if len(self.examples) == 0:
            return ""
        example = self.examples[0]
        return " ".join(
            str(s) for s in example.symbols[: example.cursor] if isinstance(s, Symbol)
        )

    def format_lines(self) -> list[str]:
        lines = []
        header = f"When we have parsed '{self.path}'"
        if self.lookahead is not None:
            header += f" and see '{self.lookahead}'"
        header += ", the grammar is ambiguous"
        if self.description:
            header += f": {self.description}"
        lines.append(header)

        for index, example in enumerate(self.examples):
            lines.append("")
            lines.append(f"Example {index + 1}:")
            lines.append(f"  {example.format_symbols()}")
            lines.extend(f"  {line}".rstrip() for line in example.format_lines())

        if self.truncated:
            lines.append("")
            lines.append(f"(only the first {len(self.examples)} examples are shown)")
        return lines

    def __str__(self) -> str:
        return "\n".join(self.format_lines())


class AmbiguityError(Exception):
    explanations: list[Explanation]

    def __init__(self, explanations):
        self.explanations = explanations

    def __str__(self):
        return f"{len(self.explanations)} ambiguities:\n\n" + "\n\n".join(
            str(explanation) for explanation in self.explanations
        )


def explain(
    backtrace: BacktraceNode,
    *,
    lookahead: str | None = None,
    description: str | None = None,
    limit: int = DEFAULT_EXAMPLE_LIMIT,
) -> Explanation:
    """Explain the conflict at the given backtrace with up to `limit`
    examples. The examples are generated lazily, so a trace with an enormous
    number of histories is fine.
    """
    if limit <= 0:
        raise ValueError(f"The example limit must be positive, not {limit}")

    # Ask for one more than we need to find out if there are any more.
    examples = tuple(itertools.islice(ExampleIterator(backtrace), limit + 1))
    truncated = len(examples) > limit
    if truncated:
        examples = examples[:limit]

    rl = report_log
    if rl.isEnabledFor(logging.INFO):
        rl.info(
            f"{backtrace.item.format()}: {len(examples)} examples"
            + (" (truncated)" if truncated else "")
        )

    return Explanation(
        backtrace=backtrace,
        examples=examples,
        truncated=truncated,
        lookahead=lookahead,
        description=description,
    )
