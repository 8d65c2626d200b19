"""Round Robin scheduling over a Buddy System allocator, simulated in the terminal."""

__version__ = "1.0.0"