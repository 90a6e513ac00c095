"""A tiny grid of characters to draw example diagrams on."""

import typing

VERTICAL = "|"
HORIZONTAL = "-"
CORNER = "+"


class AsciiCanvas:
    """A grid of characters, addressed by (row, column).

    The grid starts out at whatever size you ask for but grows as needed when
    you write outside of it, so the initial size is only a hint. Line drawing
    knows about crossings: a vertical stroke over a horizontal one (or the
    other way around) turns into a `+`.
    """

    _rows: list[list[str]]

    def __init__(self, rows: int = 0, columns: int = 0):
        self._rows = [[" "] * columns for _ in range(rows)]

    def _grow(self, row: int, column: int):
        while len(self._rows) <= row:
            self._rows.append([])
        line = self._rows[row]
        if len(line) <= column:
            line.extend(" " * (column + 1 - len(line)))

    def __getitem__(self, key: typing.Tuple[int, int]) -> str:
        row, column = key
        if row >= len(self._rows) or column >= len(self._rows[row]):
            return " "
        return self._rows[row][column]

    def __setitem__(self, key: typing.Tuple[int, int], value: str):
        row, column = key
        assert len(value) == 1, f"Cannot put {value!r} in a single cell"
        self._grow(row, column)
        self._rows[row][column] = value

    def write(self, row: int, column: int, text: typing.Iterable[str]):
        for offset, ch in enumerate(text):
            self[row, column + offset] = ch

    def draw_vertical_line(self, rows: range, column: int):
        for row in rows:
            match self[row, column]:
                case "-" | "+":
                    self[row, column] = CORNER
                case _:
                    self[row, column] = VERTICAL

    def draw_horizontal_line(self, row: int, columns: range):
        for column in columns:
            match self[row, column]:
                case "|" | "+":
                    self[row, column] = CORNER
                case _:
                    self[row, column] = HORIZONTAL

    def to_strings(self) -> list[str]:
        """The rows of the canvas, with trailing blanks removed."""
        return ["".join(row).rstrip() for row in self._rows]

    def __str__(self) -> str:
        return "\n".join(self.to_strings())
