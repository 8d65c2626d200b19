"""Interactive menus: title screens, parameter editing and simulation launch."""

from __future__ import annotations

import argparse
import random
from typing import Optional, Sequence

from .scheduler import run_continuous, run_stepwise
from .terminal import (
    FG_BLUE,
    FG_CYAN,
    FG_GREEN,
    FG_MAGENTA,
    FG_RED,
    FG_YELLOW,
    RESET_COLOR,
    Key,
    Terminal,
)
from .ui import (
    SUCCESS_MESSAGE,
    InputKind,
    Settings,
    centered_message,
    press_any_key,
    prompt_number,
)

MEMORY_SIZES = (1024, 4096, 8192)

_B, _C, _Y, _R = FG_BLUE, FG_CYAN, FG_YELLOW, FG_RED

_LOGO = (
    f"{_B}█▒  {_C}██████       {_C}██████ {_B}▒▒█████▒▒▒        ",
    f"{_B}███  {_C}███████   {_C}███████ {_B}▒█████████████     ",
    f"{_B}███▒ {_C}███████                      {_B}█████   ",
    f"{_B}███▒ {_C}███████               {_C}███████  {_B}▒███▒ ",
    f"{_B}███▒ {_C}███████        {_Y}██      {_C}████████ {_B}▒███▒",
    f"{_B}███▒ {_C}███████       {_Y}████ {_R}█    {_C}████████ {_B}▒███",
    f"{_B}███▒ {_C}███████      {_Y}████ {_R}███    {_C}███████ {_B}▒███",
    f"{_B}███▒ {_C}███████     {_Y}████ {_R}█████   {_C}███████ {_B}▒███",
    f"{_B}███▒ {_C}███████    {_Y}████ {_R}██████   {_C}███████ {_B}▒███",
    f"{_B}███▒ {_C}███████    {_Y}███ {_R}██████    {_C}███████ {_B}▒███",
    f"{_B}███▒ {_C}███████    {_Y}██ {_R}█████      {_C}███████ {_B}▒███",
    f"{_B}████ {_C}████████      {_R}████       {_C}███████ {_B}▒███",
    f"{_B} ███▒ {_C}████████      {_R}██        {_C}███████ {_B}▒███",
    f"{_B} ▒████  {_C}███████               ███████ {_B}▒███",
    f"{_B}   █████                      {_C}███████ {_B}▒███",
    f"{_B}     ▒████████████▒ {_C}████████   ███████ {_B}███{RESET_COLOR}",
)

_ARROW_RIGHT = (
    "   ▒▒▒▒▒▒▒▒    ",
    "  ▒        ▒   ",
    " ▒      ▒   ▒  ",
    "▒        ▒   ▒ ",
    "▒  ▒▒▒▒▒▒▒▒  ▒ ",
    "▒        ▒   ▒ ",
    " ▒      ▒   ▒  ",
    "  ▒        ▒   ",
    "   ▒▒▒▒▒▒▒▒    ",
)

_ARROW_LEFT = (
    "   ▒▒▒▒▒▒▒▒    ",
    "  ▒        ▒   ",
    " ▒   ▒      ▒  ",
    "▒   ▒        ▒ ",
    "▒  ▒▒▒▒▒▒▒▒  ▒ ",
    "▒   ▒        ▒ ",
    " ▒   ▒      ▒  ",
    "  ▒        ▒   ",
    "   ▒▒▒▒▒▒▒▒    ",
)

_TITLE_BUDDY = (
    "██████╗ ██╗   ██╗██████╗ ██████╗ ██╗   ██╗   ██████╗██╗   ██╗ ██████╗████████╗███████╗███╗   ███╗",
    "██╔══██╗██║   ██║██╔══██╗██╔══██╗╚██╗ ██╔╝  ██╔════╝╚██╗ ██╔╝██╔════╝╚══██╔══╝██╔════╝████╗ ████║",
    "██████╦╝██║   ██║██║  ██║██║  ██║ ╚████╔╝   ╚█████╗  ╚████╔╝ ╚█████╗    ██║   █████╗  ██╔████╔██║",
    "██╔══██╗██║   ██║██║  ██║██║  ██║  ╚██╔╝     ╚═══██╗  ╚██╔╝   ╚═══██╗   ██║   ██╔══╝  ██║╚██╔╝██║",
    "██████╦╝╚██████╔╝██████╔╝██████╔╝   ██║     ██████╔╝   ██║   ██████╔╝   ██║   ███████╗██║ ╚═╝ ██║",
    "╚═════╝  ╚═════╝ ╚═════╝ ╚═════╝    ╚═╝     ╚═════╝    ╚═╝   ╚═════╝    ╚═╝   ╚══════╝╚═╝     ╚═╝",
)

_TITLE_ROUND = (
    "   ██████╗  █████╗ ██╗   ██╗███╗  ██╗██████╗   ██████╗  █████╗ ██████╗ ██████╗ ██╗███╗  ██╗",
    "   ██╔══██╗██╔══██╗██║   ██║████╗ ██║██╔══██╗  ██╔══██╗██╔══██╗██╔══██╗██╔══██╗██║████╗ ██║",
    "   ██████╔╝██║  ██║██║   ██║██╔██╗██║██║  ██║  ██████╔╝██║  ██║██████╦╝██████╦╝██║██╔██╗██║",
    "   ██╔══██╗██║  ██║██║   ██║██║╚████║██║  ██║  ██╔══██╗██║  ██║██╔══██╗██╔══██╗██║██║╚████║",
    "   ██║  ██║╚█████╔╝╚██████╔╝██║ ╚███║██████╔╝  ██║  ██║╚█████╔╝██████╦╝██████╦╝██║██║ ╚███║",
    "   ╚═╝  ╚═╝ ╚════╝  ╚═════╝ ╚═╝  ╚══╝╚═════╝   ╚═╝  ╚═╝ ╚════╝ ╚═════╝ ╚═════╝ ╚═╝╚═╝  ╚══╝",
)

_MAIN_OPTIONS = (
    ("█▀█ █ █ ▄▀█ █▄ █ ▀█▀ █ █ █▀▄▀█   █▀ █ █▀ ▀█▀ █▀▀ █▀▄▀█ ▄▀█",
     "▀▀█ █▄█ █▀█ █ ▀█  █  █▄█ █ ▀ █   ▄█ █ ▄█  █  ██▄ █ ▀ █ █▀█"),
    ("█▀█ █ █ ▄▀█ █▄ █ ▀█▀ █ █ █▀▄▀█  █▀█ █▀█ █▀█ █▀▀ █▀▀ █▀ █▀█",
     "▀▀█ █▄█ █▀█ █ ▀█  █  █▄█ █ ▀ █  █▀▀ █▀▄ █▄█ █▄▄ ██▄ ▄█ █▄█"),
    ("▀█▀ ▄▀█ █▀▄▀█ ▄▀█ █▄ █ █▀█  █▀█ █▀█ █▀█ █▀▀ █▀▀ █▀ █▀█",
     " █  █▀█ █ ▀ █ █▀█ █ ▀█ █▄█  █▀▀ █▀▄ █▄█ █▄▄ ██▄ ▄█ █▄█"),
    ("▀█▀ ▄▀█ █▀▄▀█ ▄▀█ █▄ █ █▀█  █▀▄▀█ █▀▀ █▀▄▀█ █▀█ █▀█ █ ▄▀█",
     " █  █▀█ █ ▀ █ █▀█ █ ▀█ █▄█  █ ▀ █ ██▄ █ ▀ █ █▄█ █▀▄ █ █▀█"),
    ("█ █▄ █ ▀█▀ █▀▀ █▀█ █ █ ▄▀█ █   █▀█",
     "█ █ ▀█  █  ██▄ █▀▄ ▀▄▀ █▀█ █▄▄ █▄█"),
    ("█▀ █ █▀▄▀█ █ █ █   ▄▀█ █▀▀ █ █▀█ █▄ █",
     "▄█ █ █ ▀ █ █▄█ █▄▄ █▀█ █▄▄ █ █▄█ █ ▀█"),
    ("█▀ ▄▀█ █   █ █▀█",
     "▄█ █▀█ █▄▄ █ █▀▄"),
)
_MAIN_COLORS = (FG_CYAN, FG_MAGENTA, FG_BLUE, FG_GREEN, FG_YELLOW, FG_BLUE, FG_RED)

_PARAMETER_OPTIONS = (
    ("█▀▀ █▀█ █▄ █ █▀ █ █ █   ▀█▀ ▄▀█ █▀█",
     "█▄▄ █▄█ █ ▀█ ▄█ █▄█ █▄▄  █  █▀█ █▀▄"),
    ("█▀▄▀█ █▀█ █▀▄ █ █▀▀ █ █▀▀ ▄▀█ █▀█",
     "█ ▀ █ █▄█ █▄▀ █ █▀  █ █▄▄ █▀█ █▀▄"),
    ("█▀ ▄▀█ █   █ █▀█",
     "▄█ █▀█ █▄▄ █ █▀▄"),
)
_PARAMETER_COLORS = (FG_CYAN, FG_MAGENTA, FG_BLUE)

_SIMULATION_OPTIONS = (
    ("█▀ █ █▀▄▀█ █ █ █   ▄▀█ █▀▀ █ █▀█ █▄ █   █▀█",
     "▄█ █ █ ▀ █ █▄█ █▄▄ █▀█ █▄▄ █ █▄█ █ ▀█   █▄█"),
    ("█▀ █ █▀▄▀█ █ █ █   ▄▀█ █▀▀ █ █▀█ █▄ █   ▄█",
     "▄█ █ █ ▀ █ █▄█ █▄▄ █▀█ █▄▄ █ █▄█ █ ▀█    █"),
    ("█▀ █ █▀▄▀█ █ █ █   ▄▀█ █▀▀ █ █▀█ █▄ █   ▀█",
     "▄█ █ █ ▀ █ █▄█ █▄▄ █▀█ █▄▄ █ █▄█ █ ▀█   █▄"),
    ("█▀ ▄▀█ █   █ █▀█",
     "▄█ █▀█ █▄▄ █ █▀▄"),
)
_SIMULATION_COLORS = (FG_CYAN, FG_MAGENTA, FG_BLUE, FG_RED)

_DIGITS = (
    ("   ███   ", " █████   ", "    ██   ", "    ██   ", "    ██   ", "    ██   ", "  ██████ "),
    ("██     ██", "██     ██", "██     ██", " ███████ ", "       ██", "       ██", "       ██"),
    (" ███████ ", "██     ██", "██     ██", " ███████ ", "██     ██", "██     ██", " ███████ "),
)
_UP_ARROW = ("  █  ", " ███ ", "█ █ █", "  █  ", "  █  ", "  █  ")

# (consult label, settings attribute, input kind; None means the memory menu)
_PARAMETERS = (
    ("El Quantum maximo del sistema es: ", "system_quantum", InputKind.SYSTEM_QUANTUM),
    ("El Quantum maximo para los procesos es: ", "max_process_quantum", InputKind.PROCESS_QUANTUM),
    ("El tamaño maximo para los procesos en KB es: ", "max_process_size", InputKind.PROCESS_SIZE),
    ("El tamaño maximo de la memoria en KB es: ", "memory_size", None),
    ("El intervalo de tiempo de la simulación 2 en ms es: ", "interval_ms", InputKind.INTERVAL),
)

_SELECTED_MARK = ("    ▀▄  ", "▀▀▀▀▀█▀ ", "    ▀   ")
_PLAIN_MARK = ("        ", "        ", "        ")


def _move(selection: int, key, last: int, back=Key.UP, forward=Key.DOWN) -> int:
    if key is back and selection > 0:
        return selection - 1
    if key is forward and selection < last:
        return selection + 1
    return selection


class App:
    """The menu-driven application around the buddy / round-robin simulation."""

    def __init__(
        self,
        term: Terminal,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.term = term
        self.settings = settings if settings is not None else Settings()
        self.rng = rng if rng is not None else random.Random()

    # Drawing ---------------------------------------------------------------

    def _draw_lines(self, x: int, y: int, lines: Sequence[str]) -> None:
        for offset, line in enumerate(lines):
            self.term.goto(x, y + offset)
            self.term.write(line)

    def _draw_right_arrow(self) -> None:
        self.term.write(FG_BLUE)
        x = self.term.max_x() - 14
        y = self.term.max_y() - len(_ARROW_RIGHT)
        self._draw_lines(x, y, _ARROW_RIGHT)
        self.term.write(RESET_COLOR)

    def _draw_left_arrow(self) -> None:
        self.term.write(FG_BLUE)
        self._draw_lines(1, self.term.max_y() - len(_ARROW_LEFT), _ARROW_LEFT)
        self.term.write(RESET_COLOR)

    def _draw_options(self, options, colors, selection: int, width: int, height: int) -> None:
        term = self.term
        x = term.max_x() // 2 - width // 2
        y = term.max_y() // 2 - height // 2
        for index, ((top, bottom), color) in enumerate(zip(options, colors)):
            mark = _SELECTED_MARK if index == selection else _PLAIN_MARK
            term.write(color)
            self._draw_lines(x, y, (mark[0] + top, mark[1] + bottom, mark[2] + RESET_COLOR))
            y += 4

    def _first_screen(self) -> None:
        term = self.term
        term.clear()
        self._draw_right_arrow()
        x = term.max_x() // 4 - 43 // 2
        y = term.max_y() // 2 - 16 // 2
        self._draw_lines(x, y, _LOGO)
        x = term.max_x() // 3 + 18
        y = term.max_y() // 2 - 16 // 3
        term.goto(x, y)
        term.write(f"{FG_MAGENTA} Materia: Sistemas Operativos{RESET_COLOR}")

    def _second_screen(self) -> None:
        term = self.term
        term.clear()
        self._draw_left_arrow()
        self._draw_right_arrow()
        x = term.max_x() // 2 - 93 // 2
        y = term.max_y() // 2 - 12 // 2
        term.write(FG_BLUE)
        self._draw_lines(x, y, _TITLE_BUDDY)
        term.write(RESET_COLOR + FG_CYAN)
        self._draw_lines(x, y + len(_TITLE_BUDDY), _TITLE_ROUND)
        term.write(RESET_COLOR)

    def _third_screen(self, selection: int) -> None:
        self.term.clear()
        self._draw_left_arrow()
        self._draw_options(_MAIN_OPTIONS, _MAIN_COLORS, selection, 66, 20)

    def _draw_memory_choices(self, selection: int) -> None:
        term = self.term
        term.clear()
        cx, cy = term.max_x() // 2, term.max_y() // 2
        positions = (cx - 9 - 5 - 3, cx - 3, cx + 9 + 5 - 3)
        for index, (x, digit) in enumerate(zip(positions, _DIGITS)):
            term.write(FG_RED if index == selection else FG_BLUE)
            self._draw_lines(x, cy - 3, digit)
            term.write(RESET_COLOR)
        arrow_x = (cx - 14, cx, cx + 14)[selection]
        term.write(FG_RED)
        self._draw_lines(arrow_x, cy + 7, _UP_ARROW)
        term.write(RESET_COLOR)

    # Menus -----------------------------------------------------------------

    def _consult(self, parameter: int) -> None:
        label, attribute, _ = _PARAMETERS[parameter]
        term = self.term
        term.clear()
        term.goto(term.max_x() // 2 - 42 // 2, term.max_y() // 2)
        term.write(f"{label}{getattr(self.settings, attribute)}")
        press_any_key(term)

    def _modify(self, parameter: int) -> None:
        _, attribute, kind = _PARAMETERS[parameter]
        if kind is None:
            self._memory_menu()
            return
        value = prompt_number(self.term, kind, self.settings.memory_size)
        setattr(self.settings, attribute, value)

    def _memory_menu(self) -> None:
        selection = 0
        self.term.clear()
        while True:
            self._draw_memory_choices(selection)
            key = self.term.read_key()
            if key is Key.ENTER:
                self.settings.memory_size = MEMORY_SIZES[selection]
                self.term.clear()
                centered_message(self.term, SUCCESS_MESSAGE, FG_GREEN)
                self.term.clear()
                return
            selection = _move(selection, key, len(MEMORY_SIZES) - 1, Key.LEFT, Key.RIGHT)

    def _parameter_menu(self, parameter: int) -> None:
        selection = 0
        while True:
            self.term.clear()
            self._draw_options(_PARAMETER_OPTIONS, _PARAMETER_COLORS, selection, 44, 8)
            key = self.term.read_key()
            if key is Key.ENTER:
                if selection == 0:
                    self._consult(parameter)
                elif selection == 1:
                    self._modify(parameter)
                else:
                    return
            else:
                selection = _move(selection, key, len(_PARAMETER_OPTIONS) - 1)

    def _simulation_menu(self) -> None:
        selection = 0
        while True:
            self.term.clear()
            self._draw_options(_SIMULATION_OPTIONS, _SIMULATION_COLORS, selection, 44, 10)
            key = self.term.read_key()
            if key is not Key.ENTER:
                selection = _move(selection, key, len(_SIMULATION_OPTIONS) - 1)
                continue
            interval = self.settings.interval_ms
            if selection == 0:
                run_stepwise(self.term, self.settings, interval, False, self.rng)
            elif selection == 1:
                run_stepwise(self.term, self.settings, interval, True, self.rng)
            elif selection == 2:
                run_continuous(self.term, self.settings, interval, self.rng)
            else:
                return

    def run(self) -> None:
        """Show the title screens and menus until the exit option is chosen."""
        page, selection = 1, 0
        last = len(_MAIN_OPTIONS) - 1
        while True:
            if page == 1:
                self._first_screen()
            elif page == 2:
                self._second_screen()
            else:
                self._third_screen(selection)
            key = self.term.read_key()
            if key is Key.LEFT and page > 1:
                page -= 1
            elif key is Key.RIGHT and page < 3:
                page += 1
            elif page != 3:
                continue
            elif key in (Key.UP, Key.DOWN):
                selection = _move(selection, key, last)
            elif key is Key.ENTER:
                if selection < len(_PARAMETERS):
                    self._parameter_menu(selection)
                elif selection == 5:
                    self._simulation_menu()
                else:
                    return


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the interactive simulator."""
    parser = argparse.ArgumentParser(
        prog="buddyround",
        description="Buddy-system memory with round-robin scheduling simulator.",
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)
    rng = random.Random(args.seed)
    with Terminal() as term:
        try:
            App(term, Settings(), rng).run()
        except (KeyboardInterrupt, EOFError):
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())