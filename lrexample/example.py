"""Compute example inputs from a backtrace, and draw them.

When the table builder finds a conflict it can usually explain *how* it got
there as a backtrace: the conflicting item, plus the items that could have led
up to it. Any given backtrace can have several alternative histories, and
each complete history gives us one example input, like:

    Expr + Expr * + Expr

with a bunch of reductions underneath showing which rule produced what.
The `ExampleIterator` walks all of the histories, and `Example.paint` draws
each one as a little diagram:

    Expr + Expr + Expr
    |         |
    +-Expr----+
"""

import dataclasses
import logging
import typing

from .backtrace import BacktraceNode, Item
from .canvas import AsciiCanvas


paint_log = logging.getLogger("lrexample.paint")


@dataclasses.dataclass(frozen=True)
class Symbol:
    value: typing.Any

    def __str__(self) -> str:
        return str(self.value)


@dataclasses.dataclass(frozen=True)
class Epsilon:
    """Stands in for the empty sequence a rule like `Foo -> ` reduces."""

    def __str__(self) -> str:
        return ""


ExampleSymbol = Symbol | Epsilon


@dataclasses.dataclass(frozen=True)
class Reduction:
    start: int  # inclusive
    end: int  # exclusive
    nonterminal: typing.Any


@dataclasses.dataclass
class Example:
    """One concrete input that demonstrates a conflict.

    `cursor` is the index in `symbols` where the conflict shows up.
    Reductions are listed innermost first, so a reduction never nests inside
    one that comes before it in the list.
    """

    cursor: int
    symbols: list[ExampleSymbol]
    reductions: list[Reduction]

    def lengths(self) -> list[int]:
        """Length of each symbol, in characters, assuming a mono-spaced font.
        There is also a final `0` marker which serves as the end position.
        """
        lengths = []
        for symbol in self.symbols:
            match symbol:
                case Symbol(value=value):
                    lengths.append(len(str(value)))
                case Epsilon():
                    lengths.append(1)  # displayed as " "
                case _:
                    typing.assert_never(symbol)
        lengths.append(0)
        return lengths

    def positions(self, lengths: list[int]) -> list[int]:
        """Start column of each symbol (and of the end marker), spaced so
        that there is room to draw the reductions underneath.
        """
        # Initially, position each symbol with one space in between:
        #
        #     A1 B2 C3 D4 E5 F6
        positions = []
        counter = 0
        for length in lengths:
            positions.append(counter)
            counter += length + 1

        # Each reduction gets drawn like this:
        #
        #    A1 B2 C3 D4 E5 F6
        #    |         |
        #    +-Label---+
        #
        # ...but if the label doesn't fit we have to spread the symbols out.
        # Everything after the reduction moves right, and the gaps inside the
        # reduction get wider, as evenly as we can make them (full
        # justification), with the leftmost gaps taking the remainder:
        #
        #    A1   B2  C3  D4 E5 F6
        #    |             |
        #    +-LongLabel22-+
        for reduction in self.reductions:
            start, end = reduction.start, reduction.end

            # Even an epsilon rule has an `Epsilon` in the symbol list, so
            # this is never empty.
            num_syms = end - start
            assert num_syms > 0, f"Empty reduction {reduction}"

            start_position = positions[start]
            end_position = positions[end - 1] + lengths[end - 1]

            # Room for `+-Label-+`.
            required_len = len(str(reduction.nonterminal)) + 4
            actual_len = end_position - start_position
            if actual_len >= required_len:
                continue

            difference = required_len - actual_len
            _shift(positions, end, len(positions), difference)

            if num_syms > 1:
                num_gaps = num_syms - 1
                amount, extra = divmod(difference, num_gaps)
                for i in range(num_gaps):
                    _shift(positions, start + 1 + i, end, amount + 1 if i < extra else amount)

        return positions

    def paint(self) -> list[str]:
        """Draw the example, returning the lines of the drawing."""
        lengths = self.lengths()
        positions = self.positions(lengths)
        rows = 1 + len(self.reductions) * 2
        canvas = AsciiCanvas(rows, positions[-1])

        for index, symbol in enumerate(self.symbols):
            match symbol:
                case Symbol(value=value):
                    canvas.write(0, positions[index], str(value))
                case Epsilon():
                    pass
                case _:
                    typing.assert_never(symbol)

        pl = paint_log
        for index, reduction in enumerate(self.reductions):
            start_column = positions[reduction.start]
            end_column = positions[reduction.end] - 1
            row = 2 + index * 2
            if pl.isEnabledFor(logging.DEBUG):
                pl.debug(f"{reduction} columns={start_column}..{end_column} row={row}")

            canvas.draw_vertical_line(range(1, row + 1), start_column)
            canvas.draw_vertical_line(range(1, row + 1), end_column - 1)
            canvas.draw_horizontal_line(row, range(start_column, end_column))

        # Labels go on last so that they win over any lines they overlap.
        for index, reduction in enumerate(self.reductions):
            canvas.write(2 + index * 2, positions[reduction.start] + 2, str(reduction.nonterminal))

        return canvas.to_strings()

    def format_lines(self) -> list[str]:
        return self.paint()

    def format(self) -> str:
        return "\n".join(self.format_lines())

    def format_symbols(self) -> str:
        """The symbols on one line, with a `*` where the conflict is."""
        bits = []
        for index, symbol in enumerate(self.symbols):
            if index == self.cursor:
                bits.append("*")
            if isinstance(symbol, Symbol):
                bits.append(str(symbol))
        if self.cursor == len(self.symbols):
            bits.append("*")
        return " ".join(bits)


def _shift(positions: list[int], start: int, end: int, amount: int):
    for i in range(start, end):
        positions[i] += amount


###############################################################################
# Enumerating examples
###############################################################################
iterate_log = logging.getLogger("lrexample.iterate")


def unwind(items: typing.Sequence[Item]) -> Example:
    """Reconstruct the example for one path through a backtrace.

    `items` runs from the earliest ancestor to the conflicting item. Each
    item's cursor symbol is expanded by the item after it, so something like

        S -> A * Foo C
        Foo -> W X * Y

    comes out as `A W X * Y C`, with a reduction to `Foo` over `W X Y` and a
    reduction to `S` over the whole thing.
    """
    assert len(items) > 0, "Cannot unwind an empty path"
    example = Example(cursor=0, symbols=[], reductions=[])
    _unwind(items, 0, example)
    return example


def _unwind(items: typing.Sequence[Item], index: int, example: Example):
    item = items[index]
    symbols = item.production.symbols
    start = len(example.symbols)

    # In `Foo -> W X * Y Z`, push "W X".
    example.symbols.extend(Symbol(s) for s in item.prefix)

    if index + 1 < len(items):
        # The next item expands the symbol at the cursor ("Y"), and then we
        # pick up again after it ("Z").
        _unwind(items, index + 1, example)
        if not item.at_end:
            example.symbols.extend(Symbol(s) for s in item.rest)
    else:
        # This is the conflicting item itself, nothing gets expanded.
        example.cursor = len(example.symbols)
        example.symbols.extend(Symbol(s) for s in symbols[item.position :])

    # Nothing pushed means this is an empty rule, like `Foo -> *`; the
    # reduction still needs something to sit under.
    if start == len(example.symbols):
        example.symbols.append(Epsilon())

    example.reductions.append(
        Reduction(
            start=start,
            end=len(example.symbols),
            nonterminal=item.production.nonterminal,
        )
    )


@dataclasses.dataclass
class _Frame:
    # Node we are exploring.
    node: BacktraceNode

    # Index of the next parent to explore.
    index: int = 0


class ExampleIterator:
    """Iterate over one example for each way of reaching a backtrace node.

    Every node with more than one parent is a branch point. We pick one parent
    at each branch point along the way, and every combination of picks gets
    exactly one example. This works like an odometer over an explicit stack of
    frames: the top of the stack is always the earliest ancestor on the
    current path, and the choice nearest the top turns over fastest.

    Only the current path is ever held in memory. Like any iterator this can
    only be consumed once.
    """

    _stack: list[_Frame]

    def __init__(self, backtrace: BacktraceNode):
        self._stack = [_Frame(backtrace)]
        self._populate()

    def __iter__(self) -> "ExampleIterator":
        return self

    def __next__(self) -> Example:
        if len(self._stack) == 0:
            raise StopIteration

        example = unwind([frame.node.item for frame in reversed(self._stack)])
        self._iterate()
        return example

    def _populate(self) -> bool:
        """Follow the first untried parent from the top of the stack, then
        keep following first parents until we hit a node with none.

        Returns True if anything was pushed.
        """
        il = iterate_log
        pushed = False
        while True:
            top = self._stack[-1]
            if top.index == len(top.node.parents):
                return pushed

            parent = top.node.parents[top.index]
            top.index += 1
            self._stack.append(_Frame(parent))
            pushed = True
            if il.isEnabledFor(logging.DEBUG):
                il.debug(f"push {parent.item.format()} (depth {len(self._stack)})")

    def _iterate(self):
        # The top of the stack should always be a leaf in the tree here.
        top = self._stack.pop()
        assert len(top.node.parents) == 0 and top.index == 0, f"{top} is not a leaf"

        il = iterate_log
        while len(self._stack) > 0:
            if self._populate():
                return

            top = self._stack.pop()
            if il.isEnabledFor(logging.DEBUG):
                il.debug(f"pop {top.node.item.format()} (depth {len(self._stack)})")
