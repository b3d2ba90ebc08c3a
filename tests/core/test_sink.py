# tests/core/test_sink.py
import queue
import threading

import pytest

from refresh_cache.core.sink import ErrorSink


def test_put_and_get_fifo():
    sink = ErrorSink(capacity=4)
    a, b = ValueError("a"), ValueError("b")

    assert sink.put(a) is True
    assert sink.put(b) is True
    assert len(sink) == 2

    assert sink.get(timeout=0.1) is a
    assert sink.get_nowait() is b
    assert sink.empty()


def test_full_sink_drops_without_blocking(captured_logs):
    sink = ErrorSink(capacity=1)

    assert sink.put(ValueError("kept")) is True
    assert sink.put(ValueError("lost")) is False

    assert sink.dropped == 1
    assert [str(e) for e in sink.drain()] == ["kept"]
    assert any("dropped: lost" in line for line in captured_logs)


def test_get_times_out_when_empty():
    sink = ErrorSink()

    with pytest.raises(queue.Empty):
        sink.get(timeout=0.01)


def test_invalid_capacity():
    with pytest.raises(ValueError):
        ErrorSink(capacity=0)


def test_dropped_count_with_concurrent_writers():
    sink = ErrorSink(capacity=1)
    sink.put(ValueError("kept"))

    def writer():
        for _ in range(200):
            sink.put(ValueError("lost"))

    threads = [threading.Thread(target=writer) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sink.dropped == 8 * 200
    assert len(sink) == 1
