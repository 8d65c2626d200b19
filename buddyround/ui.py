"""Shared screens: bordered messages, statistics and validated number input."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .terminal import (
    FG_BLUE,
    FG_GREEN,
    FG_RED,
    FG_YELLOW,
    RESET_COLOR,
    Key,
    Terminal,
)

PRESS_KEY_MESSAGE = "Presione la tecla espacio para volver"
SUCCESS_MESSAGE = "Dato Modificado Correctamente!"
INPUT_LINE = "-----"
MAX_INTERVAL_MS = 99999

_STATISTICS_BANNER = (
    "███████╗ ██████╗████████╗ █████╗ ██████╗ ██╗ ██████╗████████╗██╗ █████╗  █████╗  ██████╗",
    "██╔════╝██╔════╝╚══██╔══╝██╔══██╗██╔══██╗██║██╔════╝╚══██╔══╝██║██╔══██╗██╔══██╗██╔════╝",
    "█████╗  ╚█████╗    ██║   ███████║██║  ██║██║╚█████╗    ██║   ██║██║  ╚═╝███████║╚█████╗ ",
    "██╔══╝   ╚═══██╗   ██║   ██╔══██║██║  ██║██║ ╚═══██╗   ██║   ██║██║  ██╗██╔══██║ ╚═══██╗",
    "███████╗██████╔╝   ██║   ██║  ██║██████╔╝██║██████╔╝   ██║   ██║╚█████╔╝██║  ██║██████╔╝",
    "╚══════╝╚═════╝    ╚═╝   ╚═╝  ╚═╝╚═════╝ ╚═╝╚═════╝    ╚═╝   ╚═╝ ╚════╝ ╚═╝  ╚═╝╚═════╝ ",
)


@dataclass
class Settings:
    """Simulation parameters that the menus let the user change."""

    memory_size: int = 1024
    system_quantum: int = 2
    max_process_quantum: int = 10
    max_process_size: int = 50
    interval_ms: int = 500


class InputKind(enum.Enum):
    """Which parameter a number typed by the user is meant for."""

    SYSTEM_QUANTUM = 0
    PROCESS_QUANTUM = 1
    PROCESS_SIZE = 2
    INTERVAL = 3

    @property
    def prompt(self) -> str:
        return _PROMPTS[self]


_PROMPTS = {
    InputKind.SYSTEM_QUANTUM: "Ingrese el QUANTUM DEL SISTEMA(MAXIMO): ",
    InputKind.PROCESS_QUANTUM: "Ingrese el QUANTUM DEL PROCESO(MAXIMO): ",
    InputKind.PROCESS_SIZE: "Ingrese el TAMAÑO DEL PROCESO(MAXIMO) en KB: ",
    InputKind.INTERVAL: "Ingrese el intervalo de tiempo de la simulación 2 en ms: ",
}


class InputError(ValueError):
    """A typed value was rejected; the message is shown to the user."""


def validate_number(text: str, kind: InputKind, memory_size: int) -> int:
    """Check a typed number against the limits for its kind and return it."""
    if not text:
        raise InputError("Error: Ingrese algún número")
    if any(char not in "0123456789" for char in text):
        raise InputError("Error: Ingrese unicamente números positivos")
    value = int(text)
    if kind is InputKind.INTERVAL:
        if value > MAX_INTERVAL_MS:
            raise InputError(f"Error: EL numero es más grande que {MAX_INTERVAL_MS}")
    elif value > memory_size:
        raise InputError(f"Error: Excede el tamaño de memoria de {memory_size}KB")
    elif value <= 0:
        raise InputError("Error: El tamaño tiene que ser mayor a 0")
    return value


def press_any_key(term: Terminal) -> None:
    """Show the 'press a key' hint at the bottom and wait for a key."""
    term.goto(term.max_x() // 2 - 18, term.max_y() - 2)
    term.write(PRESS_KEY_MESSAGE)
    term.read_key()


def draw_border(term: Terminal) -> None:
    """Frame the whole screen with block characters."""
    width, height = term.max_x(), term.max_y()
    for y in range(height, -1, -1):
        term.goto(width, y)
        term.write("█")
        term.goto(0, y)
        term.write("█")
    for x in range(width, -1, -1):
        term.goto(x, height)
        term.write("█")
        term.goto(x, 0)
        term.write("█")
    term.write(RESET_COLOR)


def centered_message(term: Terminal, message: str, color: str = "") -> None:
    """Show one message in the middle of a framed screen until a key press."""
    term.clear()
    term.write(color)
    term.goto(term.max_x() // 2 - len(message) // 2, term.max_y() // 2 + 1)
    term.write(message)
    draw_border(term)
    press_any_key(term)
    term.clear()


def show_statistics(term: Terminal, served: int, percent: float) -> None:
    """Show the memory use and served-process count at the end of a run."""
    term.clear()
    cx, cy = term.max_x() // 2, term.max_y() // 2
    for offset, line in enumerate(_STATISTICS_BANNER):
        term.goto(cx - 44, cy - 8 + offset)
        term.write(line)
    term.goto(cx - 12, cy)
    term.write(f"{FG_YELLOW}{percent:g}% {FG_BLUE} De Memoria Usada")
    term.goto(cx - 12, cy + 1)
    label = " Proceso Atendido" if served == 1 else " Procesos Atendidos"
    term.write(f"{FG_YELLOW}{served}{FG_BLUE}{label}")
    term.write(RESET_COLOR + FG_BLUE)
    draw_border(term)
    press_any_key(term)
    term.clear()


def prompt_number(term: Terminal, kind: InputKind, memory_size: int) -> int:
    """Ask for a number until a valid one is typed, then confirm and return it."""
    prompt = kind.prompt
    while True:
        term.clear()
        cx, cy = term.max_x() // 2, term.max_y() // 2
        term.goto(cx - len(prompt) // 2, cy - 1)
        term.write(prompt)
        term.goto(cx + len(prompt) // 2, cy)
        term.write(INPUT_LINE)
        term.goto(cx + len(prompt) // 2, cy - 1)
        text = term.read_line()
        try:
            value = validate_number(text, kind, memory_size)
        except InputError as error:
            centered_message(term, str(error), FG_RED)
            continue
        term.clear()
        centered_message(term, SUCCESS_MESSAGE, FG_GREEN)
        return value


def wait_for_continue(term: Terminal) -> tuple[bool, bool]:
    """Wait for Enter (go on) or 'p' (stop); 'c' toggles process intake.

    Returns (go_on, intake_toggled), where intake_toggled tells whether 'c'
    was pressed an odd number of times.
    """
    toggled = False
    while True:
        key = term.read_key()
        if key in ("p", "P"):
            return False, toggled
        if key is Key.ENTER:
            return True, toggled
        if key in ("c", "C"):
            toggled = not toggled