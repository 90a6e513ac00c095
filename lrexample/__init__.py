"""Explain LR conflicts with examples.

Given the backtrace that a table builder produces for a conflict, generate
every example input that leads to it, and draw each one with the reductions
that produced it:

    W X Y Z
    |     |
    +-Foo-+

Use `ExampleIterator` to walk the examples for a backtrace, `Example.paint`
to draw one, and `explain` to wrap the whole thing up in a message.
"""

from .backtrace import BacktraceNode, Item, Production, dump_backtrace, load_backtrace
from .canvas import AsciiCanvas
from .example import Epsilon, Example, ExampleIterator, ExampleSymbol, Reduction, Symbol, unwind
from .report import DEFAULT_EXAMPLE_LIMIT, AmbiguityError, Explanation, explain

__all__ = [
    "AmbiguityError",
    "AsciiCanvas",
    "BacktraceNode",
    "DEFAULT_EXAMPLE_LIMIT",
    "Epsilon",
    "Example",
    "ExampleIterator",
    "ExampleSymbol",
    "Explanation",
    "Item",
    "Production",
    "Reduction",
    "Symbol",
    "dump_backtrace",
    "explain",
    "load_backtrace",
    "unwind",
]
