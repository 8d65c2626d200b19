"""ANSI terminal output and single-key input for the interactive screens."""

from __future__ import annotations

import enum
import os
import select
import shutil
import sys
from typing import IO, Optional, Union

try:
    import termios
    import tty
except ImportError:  # Windows
    termios = None
    tty = None

try:
    import msvcrt
except ImportError:  # POSIX
    msvcrt = None


RESET_COLOR = "\x1b[0m"
CURSOR_ON = "\x1b[?25h"
CURSOR_OFF = "\x1b[?25l"
CLEAR_SCREEN = "\x1b[1;1H\x1b[2J"

FG_BLACK = "\x1b[30m"
FG_RED = "\x1b[31m"
FG_GREEN = "\x1b[32m"
FG_YELLOW = "\x1b[33m"
FG_BLUE = "\x1b[34m"
FG_MAGENTA = "\x1b[35m"
FG_CYAN = "\x1b[36m"
FG_WHITE = "\x1b[37m"
FG_DEFAULT = "\x1b[39m"


class Key(enum.Enum):
    """Named keys that the menus and the simulation react to."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    SPACE = "space"
    TAB = "tab"
    ESC = "esc"
    BACKSPACE = "backspace"


_SEQUENCES = {
    "\x1b[A": Key.UP,
    "\x1bOA": Key.UP,
    "\xe0H": Key.UP,
    "\x00H": Key.UP,
    "\x1b[B": Key.DOWN,
    "\x1bOB": Key.DOWN,
    "\xe0P": Key.DOWN,
    "\x00P": Key.DOWN,
    "\x1b[C": Key.RIGHT,
    "\x1bOC": Key.RIGHT,
    "\xe0M": Key.RIGHT,
    "\x00M": Key.RIGHT,
    "\x1b[D": Key.LEFT,
    "\x1bOD": Key.LEFT,
    "\xe0K": Key.LEFT,
    "\x00K": Key.LEFT,
    "\n": Key.ENTER,
    "\r": Key.ENTER,
    " ": Key.SPACE,
    "\t": Key.TAB,
    "\x1b": Key.ESC,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
}


def decode_key(data: Union[str, bytes]) -> Union[Key, str]:
    """Map the raw text of one key press to a Key, or return it unchanged."""
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    if not data:
        raise ValueError("empty key sequence")
    return _SEQUENCES.get(data, data)


def _is_final_byte(char: str) -> bool:
    return "@" <= char <= "~"


class Terminal:
    """A text terminal driven with ANSI escape sequences."""

    def __init__(self, stream: Optional[IO[str]] = None):
        self.stream = stream if stream is not None else sys.stdout
        self.input: IO[str] = sys.stdin

    def clear(self) -> None:
        self.write(CLEAR_SCREEN)

    def goto(self, x: int, y: int) -> None:
        self.write(f"\x1b[{y};{x}f")

    def write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def max_x(self) -> int:
        return shutil.get_terminal_size().columns

    def max_y(self) -> int:
        return shutil.get_terminal_size().lines

    def _input_is_tty(self) -> bool:
        try:
            return self.input.isatty()
        except (AttributeError, ValueError):
            return False

    def read_key(self) -> Union[Key, str]:
        """Block until one key is pressed and return it decoded."""
        if self._input_is_tty():
            if msvcrt is not None:
                raw = self._read_console()
            else:
                raw = self._read_tty()
        else:
            raw = self._read_stream()
        if raw == "\x03":
            raise KeyboardInterrupt
        return decode_key(raw)

    def _read_console(self) -> str:
        char = msvcrt.getwch()
        if char in ("\x00", "\xe0"):
            char += msvcrt.getwch()
        return char

    def _read_tty(self) -> str:
        fd = self.input.fileno()
        saved = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            data = os.read(fd, 1)
            if not data:
                raise EOFError("input closed")
            if data == b"\x1b":
                if select.select([fd], [], [], 0.05)[0]:
                    data += os.read(fd, 1)
                    if data[-1:] in (b"[", b"O"):
                        while select.select([fd], [], [], 0.05)[0]:
                            byte = os.read(fd, 1)
                            data += byte
                            if not byte or _is_final_byte(byte.decode("latin-1")):
                                break
            elif data[0] >= 0xC0:
                extra = 1 if data[0] < 0xE0 else 2 if data[0] < 0xF0 else 3
                data += os.read(fd, extra)
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        return data.decode("utf-8", errors="replace")

    def _read_stream(self) -> str:
        char = self.input.read(1)
        if not char:
            raise EOFError("input closed")
        if char == "\x1b" and self.key_pending():
            following = self.input.read(1)
            char += following
            if following in ("[", "O"):
                while True:
                    byte = self.input.read(1)
                    char += byte
                    if not byte or _is_final_byte(byte):
                        break
        return char

    def key_pending(self) -> bool:
        """Tell whether a key press is waiting to be read."""
        if self._input_is_tty():
            if msvcrt is not None:
                return bool(msvcrt.kbhit())
            fd = self.input.fileno()
            saved = termios.tcgetattr(fd)
            changed = list(saved)
            changed[3] &= ~termios.ICANON
            termios.tcsetattr(fd, termios.TCSANOW, changed)
            try:
                return bool(select.select([fd], [], [], 0)[0])
            finally:
                termios.tcsetattr(fd, termios.TCSANOW, saved)
        try:
            position = self.input.tell()
            char = self.input.read(1)
            self.input.seek(position)
        except (OSError, ValueError, AttributeError):
            return False
        return bool(char)

    def read_line(self) -> str:
        """Read one line of text with the cursor shown."""
        self.write(CURSOR_ON)
        try:
            line = self.input.readline()
        finally:
            self.write(CURSOR_OFF)
        if not line:
            raise EOFError("input closed")
        return line.rstrip("\r\n")

    def __enter__(self) -> "Terminal":
        self.clear()
        self.write(CURSOR_OFF)
        return self

    def __exit__(self, *args) -> None:
        self.write(RESET_COLOR + CURSOR_ON)
        self.clear()