"""Round-robin scheduling of random processes over buddy-system memory."""

from __future__ import annotations

import dataclasses
import random
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .buddy import Block, BuddyMemory, Process
from .terminal import (
    FG_BLUE,
    FG_CYAN,
    FG_MAGENTA,
    FG_RED,
    FG_YELLOW,
    RESET_COLOR,
    Terminal,
)
from .ui import Settings, show_statistics, wait_for_continue

PROCESS_COUNT = 1000
MEMORY_HEADER = ".-------MEMORIA ACTUAL---------."
CONTINUE_PROMPT = "Presione enter para continuar o tecla 'p' para salir"


def generate_processes(
    settings: Settings, rng: random.Random, count: int = PROCESS_COUNT
) -> list[Process]:
    """Create processes numbered from 1 with random size and quantum."""
    processes = []
    for pid in range(1, count + 1):
        size = rng.randint(1, settings.max_process_size)
        quantum = rng.randint(1, settings.max_process_quantum)
        processes.append(Process(pid, quantum, size))
    return processes


def render_queue(queue: Iterable[Process]) -> str:
    """List the queued processes, marking the first and the last."""
    items = list(queue)
    lines = []
    for position, proc in enumerate(items):
        line = f"Proceso {proc.pid} [{proc.pid},{proc.size},{proc.quantum}] "
        if position == 0:
            line += f"{FG_YELLOW}-> Principio de la Lista{RESET_COLOR}"
        elif position == len(items) - 1:
            line += f"{FG_YELLOW}-> Final de la Lista{RESET_COLOR}"
        lines.append(line + "\n")
    return "".join(lines)


@dataclass
class Execution:
    """What happened when the front process got its time slice."""

    process: Process
    remaining: int
    finished: bool


class RoundRobin:
    """A ready queue whose processes live in buddy-system memory."""

    def __init__(self, memory: BuddyMemory, quantum: int):
        self.memory = memory
        self.quantum = quantum
        self.queue: deque[Process] = deque()
        self.used = 0
        self.on_merge: Optional[Callable[[Block], None]] = None

    def try_admit(self, process: Process) -> bool:
        """Load the process into memory and queue it; return whether it fit."""
        if not self.memory.allocate(process):
            return False
        self.queue.append(dataclasses.replace(process))
        self.used += process.size
        return True

    def run_next(self) -> Optional[Execution]:
        """Give the front process one quantum; None if nothing is queued."""
        if not self.queue:
            return None
        proc = self.queue.popleft()
        self.memory.reduce_quantum(proc.pid, self.quantum)
        remaining = max(0, proc.quantum - self.quantum)
        finished = remaining <= 0
        if finished:
            self.used -= proc.size
            self.memory.release(proc.pid)
            self.memory.coalesce(self.on_merge)
        else:
            self.queue.append(dataclasses.replace(proc, quantum=remaining))
        return Execution(proc, remaining, finished)


class _Pauser:
    """Waits between steps and handles the continue / stop / intake keys."""

    def __init__(self, term: Terminal, interval_ms: int, timed: bool):
        self.term = term
        self.interval_ms = interval_ms
        self.timed = timed
        self.accepting = True

    def __call__(self) -> bool:
        if self.timed:
            time.sleep(self.interval_ms / 1000)
            if not self.term.key_pending():
                return True
        self.term.write(f"\n{CONTINUE_PROMPT}\n")
        go_on, toggled = wait_for_continue(self.term)
        if toggled:
            self.accepting = not self.accepting
        return go_on


def _write_state(term: Terminal, rr: RoundRobin) -> None:
    term.write(f"{FG_MAGENTA}{MEMORY_HEADER}{RESET_COLOR}\n\n")
    term.write(rr.memory.render() + "\n")
    term.write(f"\n{FG_MAGENTA}Lista de procesos {RESET_COLOR}\n\n")
    term.write(render_queue(rr.queue))


def _describe(proc: Process) -> str:
    return f"({proc.pid},{proc.size},{proc.quantum})"


def _finish(term: Terminal, settings: Settings, rr: RoundRobin, served: int):
    percent = float(rr.used * 100 // settings.memory_size)
    served = min(served, PROCESS_COUNT)
    term.write(FG_BLUE)
    show_statistics(term, served, percent)
    return served, percent


def run_stepwise(
    term: Terminal,
    settings: Settings,
    interval_ms: int,
    timed: bool,
    rng: Optional[random.Random] = None,
) -> tuple[int, float]:
    """Run the simulation showing every admission and every time slice.

    Returns the number of admitted processes and the memory use in percent.
    """
    rng = rng if rng is not None else random.Random()
    memory = BuddyMemory(settings.memory_size)
    rr = RoundRobin(memory, settings.system_quantum)
    rr.on_merge = lambda block: term.write(
        f"\nCondensando memoria..\n{memory.render()}\n"
    )
    pending = generate_processes(settings, rng, PROCESS_COUNT)
    pause = _Pauser(term, interval_ms, timed)
    served = 0
    index = 0
    term.clear()
    while index < len(pending):
        incoming = pending[index]
        _write_state(term, rr)
        term.write(f"\n{FG_BLUE}Proceso por entrar: {_describe(incoming)}{RESET_COLOR}\n")
        if not pause():
            break
        if rr.try_admit(incoming):
            term.write(f"\n{FG_YELLOW}El proceso logro ser asignado en memoria!!{RESET_COLOR}\n")
            served += 1
            index += 1
        else:
            term.write(f"{FG_RED}\nEl proceso NO logro ser asignado en memoria!!{RESET_COLOR}\n")
            if not rr.queue:
                # Cannot fit even in empty memory: drop it.
                index += 1
                continue
        front = rr.queue[0]
        term.write("\n")
        _write_state(term, rr)
        term.write(
            f"\n{FG_RED}Proceso a ejecutar: {FG_YELLOW}{_describe(front)}{RESET_COLOR}\n"
        )
        if not pause():
            break
        result = rr.run_next()
        proc = result.process
        term.write(f"\n{FG_CYAN}Proceso {proc.pid} EJECUTADO!!\n\n")
        term.write(f"Proceso {proc.pid}[{proc.pid},{proc.size},{proc.quantum}]\n")
        term.write(
            f"Proceso {proc.pid}[{proc.pid},{proc.size},{result.remaining}]"
            f"{RESET_COLOR}\n\n"
        )
        if result.finished:
            term.write(f"\n{memory.render()}\n\n")
    return _finish(term, settings, rr, served)


def run_continuous(
    term: Terminal,
    settings: Settings,
    interval_ms: int,
    rng: Optional[random.Random] = None,
) -> tuple[int, float]:
    """Run the simulation on a timer; 'c' stops and resumes taking processes.

    Returns the number of finished processes and the memory use in percent.
    """
    rng = rng if rng is not None else random.Random()
    memory = BuddyMemory(settings.memory_size)
    rr = RoundRobin(memory, settings.system_quantum)
    pending = generate_processes(settings, rng, PROCESS_COUNT)
    pause = _Pauser(term, interval_ms, timed=True)
    served = 0
    index = 0
    term.clear()
    while index < len(pending):
        term.clear()
        _write_state(term, rr)
        if pause.accepting:
            term.write(
                f"\n{FG_BLUE}Proceso por entrar: {_describe(pending[index])}{RESET_COLOR}\n"
            )
        if not pause():
            break
        if pause.accepting:
            if rr.try_admit(pending[index]):
                index += 1
            elif not rr.queue:
                index += 1
                continue
            term.clear()
            _write_state(term, rr)
        elif not rr.queue:
            break
        front = rr.queue[0]
        term.write(
            f"\n{FG_RED}Proceso a ejecutar: {FG_YELLOW}{_describe(front)}{RESET_COLOR}\n"
        )
        if not pause():
            break
        if rr.run_next().finished:
            served += 1
    return _finish(term, settings, rr, served)