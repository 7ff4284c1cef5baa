from rainbow_tags.models import Position, Range
from rainbow_tags.positions import LineIndex


def test_position_at_maps_offsets_to_lines():
    index = LineIndex("ab\ncd\n")

    assert index.position_at(0) == Position(0, 0)
    assert index.position_at(2) == Position(0, 2)
    assert index.position_at(3) == Position(1, 0)
    assert index.position_at(5) == Position(1, 2)
    assert index.position_at(6) == Position(2, 0)


def test_position_at_clamps_out_of_range_offsets():
    index = LineIndex("ab\ncd")

    assert index.position_at(-5) == Position(0, 0)
    assert index.position_at(100) == Position(1, 2)


def test_carriage_return_stays_on_its_line():
    index = LineIndex("a\r\nb")

    assert index.position_at(1) == Position(0, 1)
    assert index.position_at(2) == Position(0, 2)
    assert index.position_at(3) == Position(1, 0)


def test_range_at():
    index = LineIndex("<a>\n</a>")

    assert index.range_at(4, 6) == Range(Position(1, 0), Position(1, 2))


def test_empty_text():
    index = LineIndex("")

    assert index.position_at(0) == Position(0, 0)
