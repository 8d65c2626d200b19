# buddyround

An interactive terminal simulator for two classic operating-systems topics
working together: a **Buddy System** memory allocator and a **Round Robin**
process scheduler.

A run creates 1000 random processes. Each has a size in KB and a quantum.
They arrive one at a time, and each asks the buddy allocator for a block.
Blocks are split in halves, down to a smallest block of 32 KB, until one fits.
The process at the head of the ready queue then runs for one system quantum.
A process whose quantum reaches zero leaves the queue and its block is freed.
Free buddy pairs are then merged back together. A process that does not fit
waits until memory frees up. If it does not fit even when memory is empty, it
is dropped.

## Installation

```
pip install .
```

The package needs only the Python standard library, version 3.10 or newer.

## Running

```
buddyround
buddyround --seed 42
```

`--seed` fixes the random generator, so a run can be repeated exactly.
Ctrl+C, or the end of input, closes the program.

The first two screens are title pages. Move between them and the main menu
with the left and right arrow keys. In the menus, use the up and down arrows
to move and Enter to choose. The main menu has these entries:

- **system quantum** (default 2)
- **maximum process quantum** (default 10)
- **maximum process size** in KB (default 50)
- **memory size**: choose 1024 (the default), 4096 or 8192 KB
- **time interval** for the timed simulations, in ms (default 500)
- **simulation**
- **exit**

Each parameter entry has two options: one shows the current value and one
changes it. A new quantum or size must be a whole number greater than 0 and no
larger than the memory size. The interval may be at most 99999 ms.

There are three kinds of simulation:

1. **Step by step**: the program stops after each event. Press Enter to go on
   or `p` to stop.
2. **Timed**: events go forward on their own after the interval. If a key is
   pressed during the wait, the program asks again for Enter or `p`.
3. **Continuous**: a compact view that redraws itself after every interval.
   When paused, `c` switches the intake of new processes off or on, so the
   ready queue can drain. If intake is off and the queue is empty, the run
   ends.

When a simulation ends, a statistics screen shows how much memory is still in
use, as a percentage. It also shows how many processes were served. The step
modes count admitted processes. The continuous mode counts finished ones.

## Memory notation

Each leaf block of memory is shown as `[id,block_size(process_size),quantum]`.
Occupied blocks appear in green. A free block appears as `[0,size(0),0]`.

## Using it from Python

The parts of the simulation can be used without the menus:

```python
from buddyround.buddy import BuddyMemory, Process
from buddyround.scheduler import RoundRobin

memory = BuddyMemory(1024)
rr = RoundRobin(memory, quantum=2)
rr.try_admit(Process(pid=1, quantum=3, size=100))
print(memory.render())
result = rr.run_next()   # Execution(process, remaining, finished)
```

`BuddyMemory` provides `allocate`, `release`, `reduce_quantum`, `coalesce`,
`leaves` and `render`. `buddyround.scheduler.generate_processes` creates
random processes from a `buddyround.ui.Settings`.

## Tests

```
pip install .[test]
pytest
```