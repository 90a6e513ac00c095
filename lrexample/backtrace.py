"""The inputs to the example generator: dotted productions and the backtrace
tree that leads up to a conflict.

None of this is built here. The automaton builder decides which items are
interesting and how they link together; we just read the result. The one
exception is the little JSON arena format at the bottom of this file, which
exists so that a trace can be written down, handed around, and loaded back
into nodes without needing the whole parser generator around.
"""

import dataclasses
import typing


class Production(typing.NamedTuple):
    """A grammar rule: a nonterminal and the symbols it expands to.

    Both the nonterminal and the symbols can be anything that prints nicely;
    we only ever call `str()` on them.
    """

    nonterminal: typing.Any
    symbols: typing.Tuple[typing.Any, ...]

    def __repr__(self) -> str:
        return "{name} -> {bits}".format(
            name=self.nonterminal,
            bits=" ".join(str(sym) for sym in self.symbols),
        )


class Item(typing.NamedTuple):
    """A dotted production, basically, a position within a rule.

    `position` is how many of the production's symbols have been recognized
    so far; it is somewhere in `0 <= position <= len(symbols)`.
    """

    production: Production
    position: int

    @classmethod
    def from_production(cls, production: Production, position: int = 0) -> "Item":
        if position < 0 or position > len(production.symbols):
            raise ValueError(
                f"Position {position} is out of range for `{production!r}`, "
                f"which has {len(production.symbols)} symbols"
            )
        return Item(production=production, position=position)

    @property
    def at_end(self) -> bool:
        return self.position == len(self.production.symbols)

    @property
    def prefix(self) -> typing.Tuple[typing.Any, ...]:
        return self.production.symbols[: self.position]

    @property
    def rest(self) -> typing.Tuple[typing.Any, ...]:
        return self.production.symbols[(self.position + 1) :]

    def format(self) -> str:
        bits = [
            ("* " + str(sym)) if i == self.position else str(sym)
            for i, sym in enumerate(self.production.symbols)
        ]
        if self.at_end:
            bits.append("*")
        return "{name} -> {bits}".format(
            name=self.production.nonterminal,
            bits=" ".join(bits),
        )

    def __repr__(self) -> str:
        return self.format()


@dataclasses.dataclass(frozen=True, eq=False)
class BacktraceNode:
    """One state in the trace that explains a conflict.

    Each parent is an alternative way of having arrived at this item. A node
    can be shared by several children, so the whole thing is really a DAG;
    nodes compare by identity so that nobody accidentally walks the entire
    graph to hash one.
    """

    item: Item
    parents: typing.Tuple["BacktraceNode", ...] = ()

    def __repr__(self) -> str:
        return f"<BacktraceNode {self.item.format()} parents:{len(self.parents)}>"


###############################################################################
# Arena format
###############################################################################
# {
#     "productions": [{"nonterminal": "Foo", "symbols": ["W", "X"]}, ...],
#     "nodes": [{"production": 0, "position": 1, "parents": [1, 2]}, ...],
#     "root": 0
# }


def _get(record: dict, key: str, what: str) -> typing.Any:
    try:
        return record[key]
    except (KeyError, TypeError):
        raise ValueError(f"{what} is missing the '{key}' field") from None


def _list(value: typing.Any, what: str, key: str) -> list:
    if not isinstance(value, list):
        raise ValueError(f"{what} has {key} {value!r}, which is not a list")
    return value


def _check_index(index: typing.Any, count: int, what: str) -> int:
    if not isinstance(index, int) or isinstance(index, bool) or not (0 <= index < count):
        raise ValueError(f"{what} refers to {index!r}, which is not an index below {count}")
    return index


def load_backtrace(data: dict) -> BacktraceNode:
    """Build a backtrace from the arena format.

    Parents that are referenced from several nodes become one shared node
    object. Raises ValueError if anything about the arena is off: missing
    fields, dangling indices, bad cursor positions, or a cycle.
    """
    productions = []
    records = _list(_get(data, "productions", "Backtrace"), "Backtrace", "productions")
    for i, record in enumerate(records):
        what = f"Production {i}"
        symbols = _list(_get(record, "symbols", what), what, "symbols")
        productions.append(
            Production(nonterminal=_get(record, "nonterminal", what), symbols=tuple(symbols))
        )

    records = _list(_get(data, "nodes", "Backtrace"), "Backtrace", "nodes")
    items: list[Item] = []
    parent_indices: list[list[int]] = []
    for i, record in enumerate(records):
        what = f"Node {i}"
        production = productions[
            _check_index(_get(record, "production", what), len(productions), what)
        ]
        position = _get(record, "position", what)
        if not isinstance(position, int) or isinstance(position, bool):
            raise ValueError(f"{what} has a non-integer position {position!r}")
        try:
            items.append(Item.from_production(production, position))
        except ValueError as e:
            raise ValueError(f"{what}: {e}") from None

        parents = _list(record.get("parents", []), what, "parents")
        parent_indices.append([_check_index(p, len(records), what) for p in parents])

    root = _check_index(_get(data, "root", "Backtrace"), len(records), "Backtrace root")

    # Build parents before children. `visiting` catches cycles, which the
    # builder upstream should never have produced.
    built: dict[int, BacktraceNode] = {}
    visiting: set[int] = set()

    def build(index: int) -> BacktraceNode:
        node = built.get(index)
        if node is not None:
            return node
        if index in visiting:
            raise ValueError(f"Node {index} is its own ancestor")

        visiting.add(index)
        parents = tuple(build(p) for p in parent_indices[index])
        visiting.remove(index)

        node = BacktraceNode(item=items[index], parents=parents)
        built[index] = node
        return node

    return build(root)


def dump_backtrace(node: BacktraceNode) -> dict:
    """Write a backtrace out in the arena format, the inverse of
    `load_backtrace`. Symbols and nonterminals are written with `str()`.
    """
    productions: list[dict] = []
    production_index: dict[Production, int] = {}
    nodes: list[dict] = []
    node_index: dict[int, int] = {}

    def visit(node: BacktraceNode) -> int:
        index = node_index.get(id(node))
        if index is not None:
            return index

        production = node.item.production
        pindex = production_index.get(production)
        if pindex is None:
            pindex = len(productions)
            production_index[production] = pindex
            productions.append(
                {
                    "nonterminal": str(production.nonterminal),
                    "symbols": [str(s) for s in production.symbols],
                }
            )

        index = len(nodes)
        node_index[id(node)] = index
        record: dict = {"production": pindex, "position": node.item.position}
        nodes.append(record)
        record["parents"] = [visit(parent) for parent in node.parents]
        return index

    root = visit(node)
    return {"productions": productions, "nodes": nodes, "root": root}
