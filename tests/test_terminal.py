import io

import pytest

from buddyround.terminal import (
    CLEAR_SCREEN,
    CURSOR_OFF,
    CURSOR_ON,
    Key,
    Terminal,
    decode_key,
)


def make_terminal(keys=""):
    out = io.StringIO()
    term = Terminal(out)
    term.input = io.StringIO(keys)
    return term, out


@pytest.mark.parametrize(
    "data, key",
    [
        ("\x1b[A", Key.UP),
        ("\x1b[B", Key.DOWN),
        ("\x1b[C", Key.RIGHT),
        ("\x1b[D", Key.LEFT),
        ("\xe0H", Key.UP),
        ("\xe0P", Key.DOWN),
        ("\xe0K", Key.LEFT),
        ("\xe0M", Key.RIGHT),
        ("\n", Key.ENTER),
        ("\r", Key.ENTER),
        (" ", Key.SPACE),
        ("\t", Key.TAB),
        ("\x1b", Key.ESC),
    ],
)
def test_decode_key_named(data, key):
    assert decode_key(data) is key


def test_decode_key_accepts_bytes():
    assert decode_key(b"\x1b[A") is Key.UP


def test_decode_key_plain_character_passes_through():
    assert decode_key("p") == "p"


def test_decode_key_empty_raises():
    with pytest.raises(ValueError):
        decode_key("")


def test_goto_writes_cursor_position():
    term, out = make_terminal()
    term.goto(3, 5)
    assert out.getvalue() == "\x1b[5;3f"


def test_clear_writes_clear_screen():
    term, out = make_terminal()
    term.clear()
    assert out.getvalue() == CLEAR_SCREEN


def test_write_appends_text():
    term, out = make_terminal()
    term.write("hola")
    term.write(" mundo")
    assert out.getvalue() == "hola mundo"


def test_read_key_sequence_of_keys():
    term, _ = make_terminal("\x1b[Bp\n")
    assert term.read_key() is Key.DOWN
    assert term.read_key() == "p"
    assert term.read_key() is Key.ENTER


def test_read_key_at_end_raises():
    term, _ = make_terminal("")
    with pytest.raises(EOFError):
        term.read_key()


def test_read_key_ctrl_c_interrupts():
    term, _ = make_terminal("\x03")
    with pytest.raises(KeyboardInterrupt):
        term.read_key()


def test_key_pending_reflects_input():
    term, _ = make_terminal("x")
    assert term.key_pending() is True
    assert term.read_key() == "x"
    assert term.key_pending() is False


def test_read_line_strips_newline_and_toggles_cursor():
    term, out = make_terminal("42\n")
    assert term.read_line() == "42"
    assert out.getvalue() == CURSOR_ON + CURSOR_OFF


def test_read_line_at_end_raises():
    term, _ = make_terminal("")
    with pytest.raises(EOFError):
        term.read_line()


def test_context_manager_hides_and_restores_cursor():
    term, out = make_terminal()
    with term as entered:
        assert entered is term
        assert out.getvalue() == CLEAR_SCREEN + CURSOR_OFF
    text = out.getvalue()
    assert CURSOR_ON in text
    assert text.endswith(CLEAR_SCREEN)


def test_size_follows_environment(monkeypatch):
    monkeypatch.setenv("COLUMNS", "100")
    monkeypatch.setenv("LINES", "40")
    term, _ = make_terminal()
    assert term.max_x() == 100
    assert term.max_y() == 40