"""Buddy-system memory: a binary tree of blocks that split and merge."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from .terminal import FG_GREEN, RESET_COLOR

MIN_BLOCK = 32


@dataclass
class Process:
    """A process with an id, remaining quantum and size in KB."""

    pid: int
    quantum: int
    size: int


@dataclass
class Block:
    """One node of the buddy tree."""

    size: int
    free: bool = True
    process: Optional[Process] = None
    left: Optional["Block"] = None
    right: Optional["Block"] = None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


class BuddyMemory:
    """Memory of a given size in KB managed with the buddy system."""

    def __init__(self, size: int):
        self.size = size
        self.root = Block(size)

    def allocate(self, process: Process) -> bool:
        """Place a copy of the process in a block; return whether it fit."""
        return self._assign(self.root, process)

    def _assign(self, block: Block, process: Process) -> bool:
        if block.size < process.size:
            return False
        half = block.size // 2
        if block.free and (process.size > half or half < MIN_BLOCK):
            block.process = dataclasses.replace(process)
            block.free = False
            return True
        if block.free:
            self._split(block)
        for child in (block.left, block.right):
            if child is not None and self._assign(child, process):
                return True
        return False

    @staticmethod
    def _split(block: Block) -> None:
        if block.is_leaf() and block.size > MIN_BLOCK:
            block.free = False
            block.left = Block(block.size // 2)
            block.right = Block(block.size // 2)

    def _find(self, process_id: int) -> Optional[Block]:
        stack = [self.root]
        while stack:
            block = stack.pop()
            if block.process is not None and block.process.pid == process_id:
                return block
            stack.extend(c for c in (block.right, block.left) if c is not None)
        return None

    def release(self, process_id: int) -> bool:
        """Free the block holding the process; return whether it was found."""
        block = self._find(process_id)
        if block is None:
            return False
        block.process = None
        block.free = True
        return True

    def reduce_quantum(self, process_id: int, amount: int) -> Optional[int]:
        """Take amount off the stored process's quantum, never below zero.

        Returns the remaining quantum, or None if the process is not here.
        """
        block = self._find(process_id)
        if block is None:
            return None
        block.process.quantum = max(0, block.process.quantum - amount)
        return block.process.quantum

    def coalesce(self, on_merge: Optional[Callable[[Block], None]] = None) -> int:
        """Merge free buddy pairs bottom-up; return how many merges happened.

        on_merge is called with each parent block just before it absorbs
        its children.
        """
        return self._coalesce(self.root, on_merge)

    def _coalesce(self, block: Block, on_merge) -> int:
        merged = 0
        for child in (block.left, block.right):
            if child is not None:
                merged += self._coalesce(child, on_merge)
        left, right = block.left, block.right
        if (
            left is not None
            and right is not None
            and left.process is None
            and right.process is None
            and left.free
            and right.free
        ):
            if on_merge is not None:
                on_merge(block)
            block.free = True
            block.left = None
            block.right = None
            merged += 1
        return merged

    def leaves(self) -> Iterator[Block]:
        """Yield the leaf blocks from left to right."""
        stack = [self.root]
        while stack:
            block = stack.pop()
            if block.is_leaf():
                yield block
            else:
                stack.extend(c for c in (block.right, block.left) if c is not None)

    def render(self) -> str:
        """Show every leaf as [id,block(size),quantum], occupied ones in green."""
        parts = []
        for leaf in self.leaves():
            proc = leaf.process
            if proc is None:
                parts.append(f"[0,{leaf.size}(0),0]")
            else:
                parts.append(
                    f"{FG_GREEN}[{proc.pid},{leaf.size}({proc.size}),"
                    f"{proc.quantum}]{RESET_COLOR}"
                )
        return "".join(parts)