import random
from collections import deque

from buddyround.buddy import BuddyMemory, Process
from buddyround.scheduler import (
    RoundRobin,
    generate_processes,
    render_queue,
    run_continuous,
    run_stepwise,
)
from buddyround.terminal import Key
from buddyround.ui import Settings


class FakeTerminal:
    """Keys beyond the last one count as pending; the last is kept for the end."""

    def __init__(self, keys=(), pending=False):
        self.keys = deque(keys)
        self.pending = pending
        self.output = []

    def clear(self):
        pass

    def goto(self, x, y):
        pass

    def write(self, text):
        self.output.append(text)

    def max_x(self):
        return 80

    def max_y(self):
        return 24

    def read_key(self):
        if not self.keys:
            raise EOFError
        return self.keys.popleft()

    def key_pending(self):
        return self.pending and len(self.keys) > 1

    def read_line(self):
        raise EOFError

    @property
    def text(self):
        return "".join(self.output)


def test_generate_processes_ranges():
    settings = Settings(max_process_size=20, max_process_quantum=5)
    procs = generate_processes(settings, random.Random(1), 200)
    assert [p.pid for p in procs] == list(range(1, 201))
    assert all(1 <= p.size <= 20 for p in procs)
    assert all(1 <= p.quantum <= 5 for p in procs)


def test_generate_processes_deterministic():
    settings = Settings()
    first = generate_processes(settings, random.Random(7), 50)
    second = generate_processes(settings, random.Random(7), 50)
    assert first == second


def test_render_queue_markers():
    text = render_queue([Process(1, 3, 10), Process(2, 4, 20)])
    lines = text.splitlines()
    assert lines[0].startswith("Proceso 1 [1,10,3] ")
    assert "Principio de la Lista" in lines[0]
    assert "Final de la Lista" in lines[1]


def test_render_queue_single():
    text = render_queue([Process(5, 1, 8)])
    assert "Principio de la Lista" in text
    assert "Final de la Lista" not in text


def test_render_queue_empty():
    assert render_queue([]) == ""


def test_admit_and_run_until_finished():
    memory = BuddyMemory(1024)
    rr = RoundRobin(memory, 2)
    assert rr.try_admit(Process(1, 3, 100))
    assert rr.used == 100
    first = rr.run_next()
    assert first.remaining == 1
    assert not first.finished
    assert [p.quantum for p in rr.queue] == [1]
    second = rr.run_next()
    assert second.finished
    assert rr.used == 0
    assert not rr.queue
    assert memory.root.is_leaf()
    assert memory.root.free


def test_quantum_kept_in_memory_in_sync():
    memory = BuddyMemory(1024)
    rr = RoundRobin(memory, 2)
    rr.try_admit(Process(1, 5, 40))
    rr.run_next()
    stored = [leaf.process for leaf in memory.leaves() if leaf.process]
    assert stored[0].quantum == rr.queue[0].quantum


def test_round_robin_rotates():
    rr = RoundRobin(BuddyMemory(1024), 1)
    rr.try_admit(Process(1, 5, 10))
    rr.try_admit(Process(2, 5, 10))
    rr.run_next()
    assert [p.pid for p in rr.queue] == [2, 1]


def test_admit_too_large():
    rr = RoundRobin(BuddyMemory(1024), 2)
    assert not rr.try_admit(Process(1, 3, 2000))
    assert not rr.queue
    assert rr.used == 0


def test_run_next_on_empty_queue():
    rr = RoundRobin(BuddyMemory(1024), 2)
    assert rr.run_next() is None


def test_on_merge_called():
    rr = RoundRobin(BuddyMemory(1024), 5)
    merged = []
    rr.on_merge = merged.append
    rr.try_admit(Process(1, 1, 10))
    rr.run_next()
    assert merged
    assert rr.memory.root.is_leaf()


def test_stepwise_stop_immediately():
    term = FakeTerminal(keys=["p", " "])
    served, percent = run_stepwise(term, Settings(), 0, False, random.Random(3))
    assert (served, percent) == (0, 0.0)
    assert "Procesos Atendidos" in term.text


def test_stepwise_timed_full_run():
    term = FakeTerminal(keys=[" "])
    served, percent = run_stepwise(term, Settings(), 0, True, random.Random(3))
    assert served == 1000
    assert 0.0 <= percent <= 100.0
    assert "EJECUTADO!!" in term.text
    assert not term.keys


def test_continuous_full_run():
    term = FakeTerminal(keys=[" "])
    served, percent = run_continuous(term, Settings(), 0, random.Random(5))
    assert 0 < served <= 1000
    assert 0.0 <= percent <= 100.0


def test_continuous_stop_intake_with_empty_queue_ends():
    term = FakeTerminal(keys=["c", Key.ENTER, " "], pending=True)
    served, percent = run_continuous(term, Settings(), 0, random.Random(5))
    assert (served, percent) == (0, 0.0)
    assert not term.keys