"""Shared /proc fixtures; the repo root is on sys.path via pyproject's pythonpath."""

import pytest


# Trimmed from a 2-cpu host; cpu1 comes from an older kernel without "guest".
SAMPLE_STAT = """\
cpu  200 0 100 1600 20 0 0 0 10 0
cpu0 100 0 50 800 10 0 0 0 5 0
cpu1 100 0 50 800 10 0 0 0
intr 12345 24 9 0 0 0 0 0 0 1 0
ctxt 6789
btime 1600000000
processes 4242
procs_running 2
procs_blocked 0
softirq 5555 1 2 3 4 5 6 7 8 9 10
"""


@pytest.fixture()
def fake_proc(tmp_path):
    (tmp_path / "stat").write_text(SAMPLE_STAT)
    return tmp_path
