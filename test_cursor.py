import itertools
import random
import unittest

from mega.buffer import Buffer
from mega.cursor import Cursor
from mega.ui.keys import Key


def make_buffer(lines, tab_stop=8):
    buf = Buffer(tab_stop=tab_stop)
    buf.set_lines(lines)
    return buf


class CursorMoveTests(unittest.TestCase):
    def setUp(self):
        self.buf = make_buffer(["abc", "", "xyz"])
        self.cursor = Cursor()

    def press(self, *keys):
        for key in keys:
            self.cursor.move(key, self.buf)

    def test_down_down_right_on_80x24(self):
        self.press(Key.ARROW_DOWN, Key.ARROW_DOWN, Key.ARROW_RIGHT)
        self.cursor.scroll(self.buf, 22, 80)
        self.assertEqual(self.cursor.position, (1, 2))
        self.assertEqual(self.cursor.rx, 1)

    def test_down_stops_at_append_row(self):
        self.press(*[Key.ARROW_DOWN] * 10)
        self.assertEqual(self.cursor.cy, 3)
        self.assertEqual(self.cursor.cx, 0)

    def test_up_stops_at_first_row(self):
        self.press(Key.ARROW_UP)
        self.assertEqual(self.cursor.position, (0, 0))

    def test_right_at_line_end_wraps_to_next_line(self):
        self.press(*[Key.ARROW_RIGHT] * 4)
        self.assertEqual(self.cursor.position, (0, 1))

    def test_left_at_line_start_wraps_to_previous_line_end(self):
        self.cursor.cy = 2
        self.press(Key.ARROW_LEFT, Key.ARROW_LEFT)
        self.assertEqual(self.cursor.position, (3, 0))

    def test_vertical_move_clamps_column(self):
        self.cursor.cx = 3
        self.press(Key.ARROW_DOWN)
        self.assertEqual(self.cursor.position, (0, 1))

    def test_left_at_file_start_is_a_no_op(self):
        self.press(Key.ARROW_LEFT)
        self.assertEqual(self.cursor.position, (0, 0))

    def test_right_on_append_row_is_a_no_op(self):
        self.cursor.cy = 3
        self.press(Key.ARROW_RIGHT)
        self.assertEqual(self.cursor.position, (0, 3))

    def test_home_and_end(self):
        self.press(Key.ARROW_RIGHT)
        self.cursor.end(self.buf)
        self.assertEqual(self.cursor.cx, 3)
        self.cursor.home()
        self.assertEqual(self.cursor.cx, 0)

    def test_end_on_append_row_stays_at_zero(self):
        self.cursor.cy = 3
        self.cursor.end(self.buf)
        self.assertEqual(self.cursor.cx, 0)


def test_left_right_keep_column_within_line():
    buf = make_buffer(["a\tb", "", "longer line", "x"])
    cursor = Cursor()
    rng = random.Random(1234)
    for _ in range(500):
        cursor.move(rng.choice([Key.ARROW_LEFT, Key.ARROW_RIGHT,
                                Key.ARROW_UP, Key.ARROW_DOWN]), buf)
        assert 0 <= cursor.cy <= buf.line_count
        assert 0 <= cursor.cx <= buf.line_length(cursor.cy)


def test_left_then_right_returns_to_start():
    buf = make_buffer(["ab", "", "cde"])
    positions = [(cx, cy) for cy in range(buf.line_count)
                 for cx in range(buf.line_length(cy) + 1)]
    for cx, cy in positions:
        if (cx, cy) == (0, 0):
            continue
        cursor = Cursor()
        cursor.cx, cursor.cy = cx, cy
        cursor.move(Key.ARROW_LEFT, buf)
        cursor.move(Key.ARROW_RIGHT, buf)
        assert cursor.position == (cx, cy)


def test_render_column_never_behind_file_column():
    buf = make_buffer(["plain", "\tone tab", "a\tb\tc", ""])
    for cy in range(buf.line_count):
        line = buf.lines[cy]
        for cx in range(len(line) + 1):
            cursor = Cursor()
            cursor.cx, cursor.cy = cx, cy
            cursor.scroll(buf, 22, 80)
            assert cursor.rx >= cx
            if "\t" not in line[:cx]:
                assert cursor.rx == cx


def test_tab_at_column_zero_puts_cursor_on_the_tab_stop():
    buf = make_buffer(["\tx"])
    cursor = Cursor()
    cursor.cx = 1
    cursor.scroll(buf, 22, 80)
    assert cursor.rx == 8


def test_scroll_pulls_viewport_down_and_right():
    buf = make_buffer([str(i) * 100 for i in range(50)])
    cursor = Cursor()
    cursor.cy = 30
    cursor.cx = 90
    cursor.scroll(buf, 22, 80)
    assert cursor.row_offset == 30 - 22 + 1
    assert cursor.col_offset == 90 - 80 + 1

    cursor.cy = 2
    cursor.cx = 5
    cursor.scroll(buf, 22, 80)
    assert cursor.row_offset == 2
    assert cursor.col_offset == 5


def test_scroll_keeps_cursor_inside_window():
    buf = make_buffer(["x" * (i % 120) for i in range(200)])
    cursor = Cursor()
    rows, cols = 10, 40
    keys = itertools.cycle([Key.ARROW_DOWN] * 37 + [Key.ARROW_RIGHT] * 55
                           + [Key.PAGE_UP, Key.PAGE_DOWN, Key.PAGE_DOWN])
    for key in itertools.islice(keys, 400):
        if key in (Key.PAGE_UP, Key.PAGE_DOWN):
            cursor.page(key, buf, rows)
        else:
            cursor.move(key, buf)
        cursor.scroll(buf, rows, cols)
        assert cursor.row_offset <= cursor.cy < cursor.row_offset + rows
        assert cursor.col_offset <= cursor.rx < cursor.col_offset + cols


def test_page_down_moves_a_window_past_the_bottom_row():
    buf = make_buffer(["line"] * 100)
    cursor = Cursor()
    cursor.page(Key.PAGE_DOWN, buf, 22)
    assert cursor.cy == 21 + 22
    cursor.scroll(buf, 22, 80)
    assert cursor.row_offset == 43 - 22 + 1


def test_page_up_moves_a_window_above_the_top_row():
    buf = make_buffer(["line"] * 100)
    cursor = Cursor()
    cursor.cy = 60
    cursor.row_offset = 50
    cursor.page(Key.PAGE_UP, buf, 22)
    assert cursor.cy == 28


def test_page_down_stops_at_append_row():
    buf = make_buffer(["a", "b", "c"])
    cursor = Cursor()
    cursor.page(Key.PAGE_DOWN, buf, 22)
    assert cursor.cy == 3
    assert cursor.cx == 0


def test_page_up_stops_at_first_row():
    buf = make_buffer(["a", "b", "c"])
    cursor = Cursor()
    cursor.cy = 2
    cursor.page(Key.PAGE_UP, buf, 22)
    assert cursor.cy == 0
