# arenalloc

An arena allocator. Memory comes from large blocks and is released all at once. You never free single allocations.

## Features

- **Block growth.** When the current block lacks room, the arena tries the blocks that follow it in the chain. It resets each block it skips. If none fits, it adds a new block. An allocation larger than the configured block size gets its own block, rounded up to a multiple of 4096 bytes.
- **Alignment.** Every allocation is aligned to the configured default, which is 8. `alloc_aligned` takes its own alignment. An alignment must be a power of two.
- **Fixed-size arenas.** With `fixed_size=True` the arena never grows past its first block. When that block is full, it raises `OutOfMemoryError`.
- **Temporary checkpoints.** `temp_begin()` and `temp_end(checkpoint)` rewind the arena to an earlier position. `temp_scope()` does the same as a context manager.
- **Reuse.** `clear()` marks every block empty and keeps the memory. `destroy()` releases every block, and the arena cannot allocate after that. Using `Arena` in a `with` statement destroys it on exit.
- **Statistics.** The arena offers the attributes `total_allocated`, `total_used`, `utilization` and `blocks`, plus `last_error`. `usage_report(file=None)` prints a summary to standard output or to the file you give it.
- **Custom memory sources.** `ArenaConfig` takes an `allocator` and a `deallocator`, and you must give both. The allocator returns a writable buffer of the requested size, or `None` to signal failure.

The defaults are a block size of 64 KiB (`kb(64)`) and an alignment of 8. The helpers `kb`, `mb`, `gb` and `tb` convert binary units to bytes.

## Installation

```
pip install arenalloc
```

## Usage

```python
from arenalloc.arena import Arena, ArenaConfig, kb

with Arena(ArenaConfig(block_size=kb(1))) as arena:
    numbers = arena.alloc(5 * 4)
    numbers.write(b"\x01\x00\x00\x00", 0)

    greeting = arena.strdup("Hello from arena allocator!")
    print(greeting.tobytes())  # includes the terminating NUL byte

    with arena.temp_scope():
        scratch = arena.calloc(40)  # rewound when the scope ends

    buf = arena.alloc(16)
    buf = arena.resize(buf, 64)

    arena.usage_report()
```

### Allocations

Each method that allocates returns an `Allocation`. An `Allocation` is a view of `size` bytes at `offset` inside a `Block`:

- `write(data, offset=0)` copies bytes into the allocation. It raises `ValueError` if the data would run past the end.
- `tobytes()` and `bytes(allocation)` return a copy of the contents.
- `len(allocation)` is its size.

### Resizing

`resize(allocation, new_size)` works in place when the allocation is the most recent one in the current block and the block has room for it. Otherwise it makes a new allocation and copies the old contents into it. If the new size is smaller, the contents are cut to fit.

## Errors

Each failure raises a subclass of `ArenaError`, and sets the arena's `last_error` to the matching `ArenaErrorCode`:

- `OutOfMemoryError`
- `InvalidAlignmentError`
- `InvalidSizeError`
- `InvalidArenaError`

```python
from arenalloc.arena import Arena
from arenalloc.errors import InvalidSizeError, error_string

arena = Arena()
try:
    arena.alloc(0)
except InvalidSizeError as err:
    print(error_string(err.code))  # "Invalid size"
```

An invalid configuration raises an error when you construct `Arena`:

- an alignment that is not a power of two,
- a block size that is not positive,
- an allocator given without a deallocator, or a deallocator without an allocator.

## Example program

This command runs both demonstrations from `arenalloc.example`, `basic_usage_example` and `temp_arena_example`:

```
arenalloc-example
```

They print the values they store and a usage report for each arena.

## What it does not do

The arenas hand out views into Python `bytearray` buffers, not raw native memory or pointers. Typed records and arrays are packed into and out of those bytes by the caller, for example with `struct`. This is how the example program does it.

Every arena guards its operations with a re-entrant lock. You cannot switch the lock off.