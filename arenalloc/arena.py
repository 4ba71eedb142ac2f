"""Block-based arena allocator with alignment, checkpoints and reuse."""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import IO, NoReturn

from .errors import (
    ArenaError,
    ArenaErrorCode,
    InvalidAlignmentError,
    InvalidArenaError,
    InvalidSizeError,
    OutOfMemoryError,
)


def kb(n: int) -> int:
    """Return ``n`` kibibytes in bytes."""
    return 1024 * int(n)


def mb(n: int) -> int:
    """Return ``n`` mebibytes in bytes."""
    return 1024 * kb(n)


def gb(n: int) -> int:
    """Return ``n`` gibibytes in bytes."""
    return 1024 * mb(n)


def tb(n: int) -> int:
    """Return ``n`` tebibytes in bytes."""
    return 1024 * gb(n)


DEFAULT_BLOCK_SIZE = kb(64)
DEFAULT_ALIGNMENT = 8
_PAGE_SIZE = 4096

Allocator = Callable[[int], "bytearray | None"]
Deallocator = Callable[[bytearray], None]


def _is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def _align_forward(value: int, align: int) -> int:
    mask = align - 1
    return (value + mask) & ~mask


def _default_allocator(size: int) -> bytearray:
    return bytearray(size)


def _default_deallocator(memory: bytearray) -> None:
    return None


@dataclass(frozen=True)
class ArenaConfig:
    """Settings for an arena.

    ``allocator`` and ``deallocator`` must be given together; an allocator
    returns a writable buffer of the requested size, or ``None`` on failure.
    """

    block_size: int = DEFAULT_BLOCK_SIZE
    alignment: int = DEFAULT_ALIGNMENT
    fixed_size: bool = False
    allocator: Allocator | None = None
    deallocator: Deallocator | None = None


@dataclass(eq=False)
class Block:
    """A contiguous region of arena memory."""

    memory: bytearray
    size: int
    used: int = 0


@dataclass(frozen=True)
class Allocation:
    """A view of ``size`` bytes at ``offset`` inside a block."""

    block: Block
    offset: int
    size: int

    def __len__(self) -> int:
        return self.size

    def __bytes__(self) -> bytes:
        return self.tobytes()

    def tobytes(self) -> bytes:
        """Return a copy of the allocation's contents."""
        return bytes(self.block.memory[self.offset:self.offset + self.size])

    def write(self, data: bytes, offset: int = 0) -> None:
        """Copy ``data`` into the allocation starting at ``offset``."""
        data = bytes(data)
        if offset < 0 or offset + len(data) > self.size:
            raise ValueError(
                f"write of {len(data)} bytes at offset {offset} exceeds allocation of {self.size} bytes"
            )
        start = self.offset + offset
        self.block.memory[start:start + len(data)] = data


@dataclass(frozen=True)
class TempCheckpoint:
    """A saved arena position that ``Arena.temp_end`` rewinds to."""

    arena: Arena
    block: Block | None
    used: int
    total_used: int


class Arena:
    """A growable region allocator made of linked blocks."""

    def __init__(self, config: ArenaConfig | None = None) -> None:
        config = config if config is not None else ArenaConfig()
        if not _is_power_of_two(config.alignment):
            raise InvalidAlignmentError("alignment must be a power of two")
        if config.block_size <= 0:
            raise InvalidSizeError("block size must be positive")
        if (config.allocator is None) != (config.deallocator is None):
            raise InvalidArenaError("allocator and deallocator must be given together")

        self.config = config
        self.last_error = ArenaErrorCode.NONE
        self.total_allocated = 0
        self.total_used = 0
        self._allocate: Allocator = config.allocator or _default_allocator
        self._deallocate: Deallocator = config.deallocator or _default_deallocator
        self._lock = threading.RLock()
        first = self._create_block(0)
        self._blocks: list[Block] = [first]
        self._current: Block | None = first

    @property
    def blocks(self) -> tuple[Block, ...]:
        """The arena's blocks in chain order."""
        return tuple(self._blocks)

    @property
    def utilization(self) -> float:
        """Used bytes divided by allocated bytes, or 0.0 when nothing is allocated."""
        if self.total_allocated == 0:
            return 0.0
        return self.total_used / self.total_allocated

    def _fail(self, error: type[ArenaError], message: str | None = None) -> NoReturn:
        self.last_error = error.code
        raise error(message)

    def _create_block(self, min_size: int) -> Block:
        size = self.config.block_size
        if min_size > size:
            size = _align_forward(min_size, _PAGE_SIZE)
        memory = self._allocate(size)
        if memory is None:
            self._fail(OutOfMemoryError, f"allocator could not provide {size} bytes")
        self.total_allocated += size
        return Block(memory=memory, size=size)

    def _index_of(self, block: Block) -> int:
        return next(i for i, candidate in enumerate(self._blocks) if candidate is block)

    def _alloc(self, size: int, alignment: int) -> Allocation:
        with self._lock:
            if size <= 0:
                self._fail(InvalidSizeError, "allocation size must be positive")
            if self._current is None:
                self._fail(InvalidArenaError, "arena has been destroyed")
            if not _is_power_of_two(alignment):
                self._fail(InvalidAlignmentError, "alignment must be a power of two")

            block = self._current
            aligned = _align_forward(block.used, alignment)
            if aligned + size <= block.size:
                self.total_used += size + (aligned - block.used)
                block.used = aligned + size
                return Allocation(block, aligned, size)

            if self.config.fixed_size:
                self._fail(OutOfMemoryError, "fixed-size arena is full")

            index = self._index_of(block)
            for candidate in self._blocks[index + 1:]:
                aligned = _align_forward(candidate.used, alignment)
                if aligned + size <= candidate.size:
                    self._current = candidate
                    self.total_used += size + (aligned - candidate.used)
                    candidate.used = aligned + size
                    return Allocation(candidate, aligned, size)
                candidate.used = 0

            new_block = self._create_block(size)
            self._blocks.insert(index + 1, new_block)
            self._current = new_block
            new_block.used = size
            self.total_used += size
            return Allocation(new_block, 0, size)

    def alloc(self, size: int) -> Allocation:
        """Allocate ``size`` bytes at the configured alignment."""
        return self._alloc(size, self.config.alignment)

    def alloc_aligned(self, size: int, alignment: int) -> Allocation:
        """Allocate ``size`` bytes at ``alignment`` (a power of two)."""
        return self._alloc(size, alignment)

    def calloc(self, size: int) -> Allocation:
        """Allocate ``size`` zeroed bytes."""
        allocation = self.alloc(size)
        allocation.write(bytes(size))
        return allocation

    def resize(self, allocation: Allocation, new_size: int) -> Allocation:
        """Grow or shrink an allocation, in place when it is the most recent one."""
        with self._lock:
            if allocation.size <= 0 or new_size <= 0:
                self._fail(InvalidSizeError, "sizes must be positive")
            block = self._current
            if block is None:
                self._fail(InvalidArenaError, "arena has been destroyed")

            old_size = allocation.size
            is_last = allocation.block is block and allocation.offset == block.used - old_size
            if not is_last:
                contents = allocation.tobytes()
                moved = self.alloc(new_size)
                moved.write(contents[:min(old_size, new_size)])
                return moved

            if new_size > old_size and block.used + (new_size - old_size) > block.size:
                if self.config.fixed_size:
                    self._fail(OutOfMemoryError, "fixed-size arena is full")
                contents = allocation.tobytes()
                moved = self.alloc(new_size)
                moved.write(contents)
                block.used -= old_size
                self.total_used -= old_size
                return moved

            block.used = block.used - old_size + new_size
            self.total_used = self.total_used - old_size + new_size
            return Allocation(block, allocation.offset, new_size)

    def strdup(self, text: str | bytes) -> Allocation:
        """Copy ``text`` into the arena with a terminating NUL byte."""
        data = text.encode() if isinstance(text, str) else bytes(text)
        allocation = self.alloc(len(data) + 1)
        allocation.write(data + b"\x00")
        return allocation

    def temp_begin(self) -> TempCheckpoint:
        """Record the current position for a later ``temp_end``."""
        with self._lock:
            if self._current is None:
                return TempCheckpoint(self, None, 0, 0)
            return TempCheckpoint(self, self._current, self._current.used, self.total_used)

    def temp_end(self, temp: TempCheckpoint) -> None:
        """Rewind the arena to a checkpoint made by ``temp_begin``."""
        if temp.arena is not self:
            raise InvalidArenaError("checkpoint belongs to a different arena")
        if temp.block is None:
            return
        with self._lock:
            if self._current is None:
                return
            self._current = temp.block
            temp.block.used = temp.used
            self.total_used = temp.total_used

    @contextmanager
    def temp_scope(self) -> Iterator[TempCheckpoint]:
        """Context manager that rewinds all allocations made inside it."""
        temp = self.temp_begin()
        try:
            yield temp
        finally:
            self.temp_end(temp)

    def clear(self) -> None:
        """Mark every block empty, keeping the memory for reuse."""
        with self._lock:
            for block in self._blocks:
                block.used = 0
            self._current = self._blocks[0] if self._blocks else None
            self.total_used = 0

    def destroy(self) -> None:
        """Release every block; the arena cannot allocate afterwards."""
        with self._lock:
            for block in self._blocks:
                self._deallocate(block.memory)
            self._blocks = []
            self._current = None
            self.total_allocated = 0
            self.total_used = 0

    def usage_report(self, file: IO[str] | None = None) -> None:
        """Print allocated bytes, used bytes and utilization."""
        out = file if file is not None else sys.stdout
        print(f"Total allocated: {self.total_allocated} bytes", file=out)
        print(f"Total used: {self.total_used} bytes", file=out)
        print(f"Utilization: {self.utilization * 100.0:.2f}%", file=out)

    def __enter__(self) -> Arena:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.destroy()