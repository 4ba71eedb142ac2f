"""Demonstrations of arena allocation, typed records and temporary scopes."""

from __future__ import annotations

import argparse
import struct
import sys
from collections.abc import Sequence
from typing import IO

from .arena import DEFAULT_ALIGNMENT, Allocation, Arena, ArenaConfig, kb

# A record laid out as a 32-bit id, a 32-byte name and a 32-bit float.
_ITEM = struct.Struct("<i32sf")
_INT_SIZE = struct.calcsize("<i")


def _write_ints(allocation: Allocation, values: Sequence[int]) -> None:
    allocation.write(struct.pack(f"<{len(values)}i", *values))


def _read_ints(allocation: Allocation) -> list[int]:
    count = len(allocation) // _INT_SIZE
    return list(struct.unpack(f"<{count}i", allocation.tobytes()[: count * _INT_SIZE]))


def _pack_item(item_id: int, name: str, value: float) -> bytes:
    # Keep room for the terminating NUL, as a fixed C string buffer would.
    encoded = name.encode()[: _ITEM.size and 31]
    return _ITEM.pack(item_id, encoded, value)


def _unpack_item(data: bytes) -> tuple[int, str, float]:
    item_id, raw_name, value = _ITEM.unpack(data)
    return item_id, raw_name.split(b"\x00", 1)[0].decode(), value


def _c_string(allocation: Allocation) -> str:
    return allocation.tobytes().split(b"\x00", 1)[0].decode()


def _spaced(values: Sequence[int]) -> str:
    return "".join(f"{value} " for value in values)


def basic_usage_example(out: IO[str] | None = None) -> None:
    """Allocate arrays, a record and a string, then report usage."""
    out = sys.stdout if out is None else out
    print("\n=== Basic Usage Example ===", file=out)

    with Arena() as arena:
        int_array = arena.alloc(_INT_SIZE * 100)
        _write_ints(int_array, [i * 10 for i in range(100)])

        item = arena.alloc(_ITEM.size)
        item.write(_pack_item(42, "Test Item", 3.14))

        message = arena.strdup("Hello from arena allocator!")

        ints = _read_ints(int_array)
        item_id, name, value = _unpack_item(item.tobytes())
        print(f"int_array[5] = {ints[5]}", file=out)
        print(f"item: id={item_id}, name={name}, value={value:f}", file=out)
        print(f"message: {_c_string(message)}", file=out)

        items = arena.alloc(_ITEM.size * 5)
        for i in range(5):
            offset = i * _ITEM.size
            items.write(_pack_item(i, f"Item {i}", i * 1.5), offset=offset)
            record = items.tobytes()[offset:offset + _ITEM.size]
            item_id, name, value = _unpack_item(record)
            print(f"items[{i}]: id={item_id}, name={name}, value={value:f}", file=out)

        arena.usage_report(out)


def temp_arena_example(out: IO[str] | None = None) -> None:
    """Show that allocations inside a temporary scope are rewound."""
    out = sys.stdout if out is None else out
    print("\n=== Temporary Arena Example ===", file=out)

    config = ArenaConfig(block_size=kb(1), alignment=DEFAULT_ALIGNMENT, fixed_size=False)
    with Arena(config) as arena:
        permanent_data = arena.alloc(_INT_SIZE * 5)
        _write_ints(permanent_data, range(5))
        print(f"Initial data: {_spaced(_read_ints(permanent_data))}", file=out)

        with arena.temp_scope():
            temp_data = arena.alloc(_INT_SIZE * 10)
            _write_ints(temp_data, [100 + i for i in range(10)])
            print(
                f"After temp allocations - permanent: {_spaced(_read_ints(permanent_data))}"
                f", temp: {_spaced(_read_ints(temp_data))}",
                file=out,
            )

        print(f"After temp_end - permanent: {_spaced(_read_ints(permanent_data))}", file=out)

        more_data = arena.alloc(_INT_SIZE * 3)
        _write_ints(more_data, [200 + i for i in range(3)])
        print(f"New allocations after temp_end: {_spaced(_read_ints(more_data))}", file=out)

        arena.usage_report(out)


def main(argv: Sequence[str] | None = None) -> int:
    """Run both examples, writing to standard output."""
    parser = argparse.ArgumentParser(description="Run the arena allocator examples.")
    parser.parse_args(argv)
    basic_usage_example()
    temp_arena_example()
    return 0


if __name__ == "__main__":
    sys.exit(main())