import io
import re

from arenalloc.example import basic_usage_example, main, temp_arena_example


def _report(text):
    allocated = int(re.search(r"Total allocated: (\d+) bytes", text).group(1))
    used = int(re.search(r"Total used: (\d+) bytes", text).group(1))
    utilization = float(re.search(r"Utilization: ([\d.]+)%", text).group(1))
    return allocated, used, utilization


def test_basic_header_and_values():
    buffer = io.StringIO()
    basic_usage_example(buffer)
    text = buffer.getvalue()
    assert text.startswith("\n=== Basic Usage Example ===\n")
    assert "int_array[5] = 50\n" in text
    assert "item: id=42, name=Test Item, value=3.140000\n" in text
    assert "message: Hello from arena allocator!\n" in text


def test_basic_items_round_trip():
    buffer = io.StringIO()
    basic_usage_example(buffer)
    text = buffer.getvalue()
    lines = [line for line in text.splitlines() if line.startswith("items[")]
    assert len(lines) == 5
    for i, line in enumerate(lines):
        match = re.fullmatch(r"items\[(\d+)\]: id=(\d+), name=(.*), value=([\d.]+)", line)
        assert match is not None
        assert int(match.group(1)) == i
        assert int(match.group(2)) == i
        assert match.group(3) == f"Item {i}"
        assert float(match.group(4)) == i * 1.5


def test_basic_report_consistent():
    buffer = io.StringIO()
    basic_usage_example(buffer)
    text = buffer.getvalue()
    allocated, used, utilization = _report(text)
    assert allocated == 65536
    assert 0 < used <= allocated
    assert round(used / allocated * 100, 2) == utilization


def test_temp_example_rewinds():
    buffer = io.StringIO()
    temp_arena_example(buffer)
    text = buffer.getvalue()
    assert text.startswith("\n=== Temporary Arena Example ===\n")
    assert "Initial data: 0 1 2 3 4 \n" in text
    assert "After temp_end - permanent: 0 1 2 3 4 \n" in text
    assert "New allocations after temp_end: 200 201 202 \n" in text


def test_temp_example_scope_line():
    buffer = io.StringIO()
    temp_arena_example(buffer)
    text = buffer.getvalue()
    line = next(l for l in text.splitlines() if l.startswith("After temp allocations"))
    permanent, temp = line.split(", temp: ")
    assert permanent.split(": ")[1].split() == ["0", "1", "2", "3", "4"]
    assert [int(v) for v in temp.split()] == list(range(100, 110))


def test_temp_example_report():
    buffer = io.StringIO()
    temp_arena_example(buffer)
    text = buffer.getvalue()
    allocated, used, utilization = _report(text)
    assert allocated == 1024
    # Temp allocations were rewound, so only permanent and later data remain.
    assert used < 20 + 40 + 12 + 8
    assert round(used / allocated * 100, 2) == utilization


def test_main_runs_both(capsys):
    assert main([]) == 0
    captured = capsys.readouterr().out
    assert "=== Basic Usage Example ===" in captured
    assert "=== Temporary Arena Example ===" in captured
    assert captured.index("Basic Usage") < captured.index("Temporary Arena")
    assert captured.count("Total allocated:") == 2