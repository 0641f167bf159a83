"""Tests for concurrent access"""
import threading
import time
from concurrent.futures import ThreadPoolExecutor
import pytest

from line_protocol import MetricContainer
from line_protocol.locks import ReadWriteLock


class TestConcurrentContainer:
    """Test that writers never lose updates"""

    def test_concurrent_add_tags_loses_nothing(self):
        metric = MetricContainer("cpu")
        workers = 32
        barrier = threading.Barrier(workers, timeout=10)

        def add_one(i):
            barrier.wait()
            metric.add_tags({f"tag{i}": str(i)})

        with ThreadPoolExecutor(max_workers=workers) as pool:
            list(pool.map(add_one, range(workers)))

        metric.contains_tags({f"tag{i}": str(i) for i in range(workers)})
        assert len(metric.tags) == workers

    def test_concurrent_readers_and_writers(self):
        metric = MetricContainer("cpu")
        rounds = 200

        def write(i):
            metric.add({f"t{i}": "x"}, {f"v{i}": i})
            metric.set_timestamp(i)

        def read(_):
            line = metric.output_with_timestamp()
            assert line.startswith("cpu,")
            return metric.snapshot()

        with ThreadPoolExecutor(max_workers=8) as pool:
            writes = [pool.submit(write, i) for i in range(rounds)]
            reads = [pool.submit(read, i) for i in range(rounds)]
            for future in writes + reads:
                future.result()

        assert len(metric.values) == rounds
        metric.contains_values({f"v{i}": i for i in range(rounds)})


class TestReadWriteLock:
    """Test the reader/writer lock"""

    def setup_method(self):
        self.lock = ReadWriteLock()

    def test_readers_share(self):
        inside = threading.Barrier(2, timeout=5)

        def reader():
            with self.lock.read_locked():
                # both readers must be inside at once to pass
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert not any(t.is_alive() for t in threads)

    def test_writer_excludes_readers(self):
        events = []
        self.lock.acquire_write()

        def reader():
            with self.lock.read_locked():
                events.append("read")

        t = threading.Thread(target=reader)
        t.start()
        time.sleep(0.05)
        events.append("write-done")
        self.lock.release_write()
        t.join(timeout=5)

        assert events == ["write-done", "read"]

    def test_reader_excludes_writer(self):
        events = []
        self.lock.acquire_read()

        def writer():
            with self.lock.write_locked():
                events.append("write")

        t = threading.Thread(target=writer)
        t.start()
        time.sleep(0.05)
        events.append("read-done")
        self.lock.release_read()
        t.join(timeout=5)

        assert events == ["read-done", "write"]

    def test_released_on_exception(self):
        with pytest.raises(RuntimeError):
            with self.lock.write_locked():
                raise RuntimeError("boom")

        with self.lock.write_locked():
            pass

    def test_unbalanced_release(self):
        with pytest.raises(RuntimeError):
            self.lock.release_read()
        with pytest.raises(RuntimeError):
            self.lock.release_write()
