import io
import random
import sys

import pytest

from buddyround.menus import App, main
from buddyround.terminal import Terminal
from buddyround.ui import Settings

UP = "\x1b[A"
DOWN = "\x1b[B"
RIGHT = "\x1b[C"
LEFT = "\x1b[D"
ENTER = "\n"
TO_MENU = RIGHT + RIGHT


def make_app(keys, settings=None):
    term = Terminal(io.StringIO())
    term.input = io.StringIO(keys)
    app = App(term, settings if settings is not None else Settings(), random.Random(1))
    return app, term


def exit_from(selection):
    return DOWN * (6 - selection) + ENTER


def test_exit_leaves_settings_untouched():
    app, term = make_app(TO_MENU + exit_from(0))
    app.run()
    assert app.settings == Settings()
    assert "Materia: Sistemas Operativos" in term.stream.getvalue()


def test_selection_is_bounded_and_left_on_first_page_is_ignored():
    app, term = make_app(LEFT + TO_MENU + DOWN * 12 + ENTER)
    app.run()
    assert term.input.read() == ""


def test_keys_on_title_pages_do_not_open_menus():
    app, term = make_app(ENTER + DOWN + RIGHT + ENTER + RIGHT + exit_from(0))
    app.run()
    assert app.settings == Settings()
    assert term.input.read() == ""


def test_modify_system_quantum():
    keys = TO_MENU + ENTER + DOWN + ENTER + "5\n" + " " + DOWN + ENTER + exit_from(0)
    app, term = make_app(keys)
    app.run()
    assert app.settings.system_quantum == 5
    assert "Dato Modificado Correctamente!" in term.stream.getvalue()


def test_modify_process_quantum_after_invalid_entries():
    keys = (
        TO_MENU + DOWN + ENTER + DOWN + ENTER
        + "abc\n" + " " + "0\n" + " " + "7\n" + " "
        + DOWN + ENTER + exit_from(1)
    )
    app, term = make_app(keys)
    app.run()
    out = term.stream.getvalue()
    assert app.settings.max_process_quantum == 7
    assert "Error: Ingrese unicamente números positivos" in out
    assert "Error: El tamaño tiene que ser mayor a 0" in out


def test_process_size_limited_by_memory():
    keys = (
        TO_MENU + DOWN * 2 + ENTER + DOWN + ENTER
        + "5000\n" + " " + "40\n" + " "
        + DOWN + ENTER + exit_from(2)
    )
    app, term = make_app(keys)
    app.run()
    assert app.settings.max_process_size == 40
    assert "Error: Excede el tamaño de memoria de 1024KB" in term.stream.getvalue()


@pytest.mark.parametrize("moves, expected", [("", 1024), (RIGHT, 4096), (RIGHT * 3, 8192)])
def test_memory_size_menu(moves, expected):
    keys = (
        TO_MENU + DOWN * 3 + ENTER + DOWN + ENTER
        + moves + ENTER + " "
        + DOWN + ENTER + exit_from(3)
    )
    app, _ = make_app(keys, Settings(memory_size=2048))
    app.run()
    assert app.settings.memory_size == expected


def test_consult_interval():
    keys = TO_MENU + DOWN * 4 + ENTER + ENTER + " " + DOWN * 2 + ENTER + exit_from(4)
    app, term = make_app(keys)
    app.run()
    out = term.stream.getvalue()
    assert "El intervalo de tiempo de la simulación 2 en ms es: 500" in out


def test_consult_memory_size_shows_current_value():
    keys = TO_MENU + DOWN * 3 + ENTER + ENTER + " " + DOWN * 2 + ENTER + exit_from(3)
    app, term = make_app(keys, Settings(memory_size=4096))
    app.run()
    assert "El tamaño maximo de la memoria en KB es: 4096" in term.stream.getvalue()


def test_stepwise_simulation_stopped_at_once():
    keys = TO_MENU + DOWN * 5 + ENTER + ENTER + "p" + " " + DOWN * 3 + ENTER + exit_from(5)
    app, term = make_app(keys)
    app.run()
    out = term.stream.getvalue()
    assert "Procesos Atendidos" in out
    assert "Presione enter para continuar o tecla 'p' para salir" in out
    assert term.input.read() == ""


def test_continuous_simulation_stopped_at_once():
    keys = (
        TO_MENU + DOWN * 5 + ENTER + DOWN * 2 + ENTER + "p" + " "
        + DOWN + ENTER + exit_from(5)
    )
    app, term = make_app(keys, Settings(interval_ms=0))
    app.run()
    out = term.stream.getvalue()
    assert ".-------MEMORIA ACTUAL---------." in out
    assert "Procesos Atendidos" in out
    assert term.input.read() == ""


def test_running_out_of_input_raises_eof():
    app, _ = make_app(TO_MENU + DOWN)
    with pytest.raises(EOFError):
        app.run()


def test_main_exits_cleanly(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(TO_MENU + exit_from(0)))
    assert main(["--seed", "3"]) == 0
    assert "Materia: Sistemas Operativos" in capsys.readouterr().out


def test_main_stops_when_input_ends(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(RIGHT))
    assert main([]) == 0
    assert "\x1b[?25h" in capsys.readouterr().out