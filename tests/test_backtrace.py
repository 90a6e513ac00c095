import pytest

from lrexample import BacktraceNode, Item, Production, dump_backtrace, load_backtrace


FOO = Production("Foo", ("W", "X", "Y", "Z"))


def test_item_format():
    assert Item.from_production(FOO, 2).format() == "Foo -> W X * Y Z"
    assert Item.from_production(FOO, 4).format() == "Foo -> W X Y Z *"
    assert Item.from_production(Production("Foo", ()), 0).format() == "Foo -> *"


def test_item_parts():
    item = Item.from_production(FOO, 1)
    assert item.prefix == ("W",)
    assert item.rest == ("Y", "Z")
    assert not item.at_end

    last = Item.from_production(FOO, 4)
    assert last.at_end
    assert last.prefix == FOO.symbols
    assert last.rest == ()


def test_item_position_out_of_range():
    with pytest.raises(ValueError):
        Item.from_production(FOO, 5)

    with pytest.raises(ValueError):
        Item.from_production(FOO, -1)


def test_nodes_compare_by_identity():
    item = Item.from_production(FOO, 0)
    assert BacktraceNode(item) != BacktraceNode(item)


def _arena():
    return {
        "productions": [
            {"nonterminal": "Foo", "symbols": ["W", "X"]},
            {"nonterminal": "S", "symbols": ["a", "Foo"]},
            {"nonterminal": "T", "symbols": ["Foo", "b"]},
            {"nonterminal": "Start", "symbols": ["S"]},
        ],
        "nodes": [
            {"production": 0, "position": 1, "parents": [1, 2]},
            {"production": 1, "position": 1, "parents": [3]},
            {"production": 2, "position": 0, "parents": [3]},
            {"production": 3, "position": 0},
        ],
        "root": 0,
    }


def test_load():
    root = load_backtrace(_arena())
    assert root.item.format() == "Foo -> W * X"

    s, t = root.parents
    assert s.item.format() == "S -> a * Foo"
    assert t.item.format() == "T -> * Foo b"

    # Shared parents come out as the same node.
    assert s.parents[0] is t.parents[0]
    assert s.parents[0].parents == ()


def test_dump():
    data = dump_backtrace(load_backtrace(_arena()))

    # The shared node is only written once.
    assert len(data["nodes"]) == 4
    assert len(data["productions"]) == 4
    assert data["nodes"][data["root"]] == {"production": 0, "position": 1, "parents": [1, 3]}
    assert data["nodes"][1]["parents"] == data["nodes"][3]["parents"]

    assert dump_backtrace(load_backtrace(data)) == data


@pytest.mark.parametrize(
    "change,message",
    [
        (lambda d: d.pop("root"), "root"),
        (lambda d: d.update(root=7), "7"),
        (lambda d: d["nodes"][1].update(parents=[9]), "Node 1"),
        (lambda d: d["nodes"][2].update(production=12), "Node 2"),
        (lambda d: d["nodes"][0].update(position=3), "Node 0"),
        (lambda d: d["nodes"][0].update(position="one"), "Node 0"),
        (lambda d: d["nodes"][3].pop("position"), "position"),
        (lambda d: d["productions"][0].update(symbols="W X"), "Production 0"),
        (lambda d: d["nodes"][3].update(parents=[0]), "ancestor"),
        (lambda d: d.update(nodes=5), "nodes"),
        (lambda d: d.update(productions={}), "productions"),
        (lambda d: d["nodes"][1].update(parents=3), "Node 1 has parents"),
        (lambda d: d["nodes"][0].update(position=True), "Node 0"),
    ],
)
def test_load_errors(change, message):
    data = _arena()
    change(data)
    with pytest.raises(ValueError, match=message):
        load_backtrace(data)


def test_load_not_a_dict():
    with pytest.raises(ValueError):
        load_backtrace([])
