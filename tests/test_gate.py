from __future__ import annotations

import threading

from prefstore.gate import PreferencesGate
from prefstore.memory_store import MemoryFlatStore
from prefstore.versions import Versions


def test_get_returns_same_instance():
    gate = PreferencesGate(MemoryFlatStore(), app_version=2)
    assert gate.get() is gate.get()
    assert gate.get().check_update() == Versions(2, 2)


def test_concurrent_first_access_builds_once():
    gate = PreferencesGate(MemoryFlatStore())
    barrier = threading.Barrier(16)
    results = []
    errors = []

    def worker():
        barrier.wait()
        try:
            results.append(gate.get())
        except Exception as e:  # a second construction would raise IllegalUseError
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(results) == 16
    assert all(r is results[0] for r in results)
