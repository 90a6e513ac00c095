from lrexample import AsciiCanvas


def test_write_grows():
    canvas = AsciiCanvas(1, 3)
    canvas.write(2, 4, "hi")
    assert canvas.to_strings() == ["", "", "    hi"]


def test_read_outside_is_blank():
    canvas = AsciiCanvas(1, 1)
    assert canvas[5, 5] == " "
    assert canvas.to_strings() == [""]


def test_lines_cross():
    canvas = AsciiCanvas()
    canvas.draw_horizontal_line(1, range(0, 5))
    canvas.draw_vertical_line(range(0, 3), 2)
    assert canvas.to_strings() == [
        "  |",
        "--+--",
        "  |",
    ]


def test_lines_cross_other_order():
    canvas = AsciiCanvas()
    canvas.draw_vertical_line(range(0, 3), 2)
    canvas.draw_horizontal_line(1, range(0, 5))
    assert canvas.to_strings() == [
        "  |",
        "--+--",
        "  |",
    ]


def test_corners_stay_corners():
    canvas = AsciiCanvas()
    canvas.draw_vertical_line(range(0, 2), 0)
    canvas.draw_horizontal_line(1, range(0, 3))
    canvas.draw_vertical_line(range(0, 3), 0)
    canvas.draw_horizontal_line(1, range(0, 3))
    assert canvas.to_strings() == [
        "|",
        "+--",
        "|",
    ]


def test_text_overwrites_lines():
    canvas = AsciiCanvas()
    canvas.draw_horizontal_line(0, range(0, 7))
    canvas.write(0, 2, "Foo")
    assert str(canvas) == "--Foo--"
