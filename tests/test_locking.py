"""Readers never observe a cascade half-way through.

A writer is slowed down between cascade steps; reader threads firing during
that window must either see the full graph or the fully-cascaded one.
"""

from __future__ import annotations

import threading
import time

from blograph.adapters.ids.sequential import SequentialGenerator
from blograph.domain.models import EntityKind
from blograph.services.locking import ReadWriteLock
from blograph.services.orchestrator import GraphOrchestrator


class _SlowDeleteStore:
    """Wraps a store and sleeps on every delete."""

    def __init__(self, inner, delay: float) -> None:
        self._inner = inner
        self._delay = delay

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def delete_by_id(self, kind, entity_id):
        time.sleep(self._delay)
        return self._inner.delete_by_id(kind, entity_id)


class TestReadWriteLock:
    def test_readers_share(self):
        lock = ReadWriteLock()
        inside = threading.Barrier(2, timeout=2)

        def reader():
            with lock.read():
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=3)
        assert not any(t.is_alive() for t in threads)

    def test_writer_excludes_readers(self):
        lock = ReadWriteLock()
        events: list[str] = []
        writer_in = threading.Event()

        def writer():
            with lock.write():
                writer_in.set()
                time.sleep(0.2)
                events.append("write-done")

        def reader():
            writer_in.wait()
            with lock.read():
                events.append("read")

        w = threading.Thread(target=writer)
        r = threading.Thread(target=reader)
        w.start()
        r.start()
        w.join()
        r.join()
        assert events == ["write-done", "read"]


class TestCascadeAtomicity:
    def test_readers_see_before_or_after_only(self, sample, store):
        slow = _SlowDeleteStore(store, delay=0.05)
        orch = GraphOrchestrator(store=slow, ids=SequentialGenerator(start=100))

        full = (2, 3, 3)
        cascaded = (1, 1, 0)
        observed: list[tuple[int, int, int]] = []
        errors: list[Exception] = []

        def reader():
            try:
                for _ in range(20):
                    with orch.reading() as view:
                        users = view.queries.list_users()
                        posts = view.queries.list_posts()
                        comments = view.queries.list_comments()
                        for p in posts:
                            view.resolver.author_of(p)
                        for c in comments:
                            view.resolver.post_of(c)
                    observed.append((len(users), len(posts), len(comments)))
                    time.sleep(0.01)
            except Exception as exc:
                errors.append(exc)

        writer = threading.Thread(target=orch.delete_user, args=(sample["alice"].id,))
        readers = [threading.Thread(target=reader) for _ in range(5)]
        writer.start()
        for r in readers:
            r.start()
        writer.join()
        for r in readers:
            r.join()

        assert not errors
        assert set(observed) <= {full, cascaded}
        assert orch.stats() == {"users": 1, "posts": 1, "comments": 0}
        assert store.count(EntityKind.USER) == 1
