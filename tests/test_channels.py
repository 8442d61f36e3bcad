from __future__ import annotations

import queue
import threading
import time

import pytest

from bldcmon.core.channels import Channel, ChannelClosed


def test_channel_preserves_send_order() -> None:
    channel: Channel[int] = Channel("numbers")
    for i in range(100):
        channel.send(i)

    assert len(channel) == 100
    assert channel.drain() == list(range(100))
    assert len(channel) == 0


def test_drain_on_empty_channel_returns_immediately() -> None:
    channel: Channel[int] = Channel()

    start = time.perf_counter()
    drained = channel.drain()
    elapsed = time.perf_counter() - start

    assert drained == []
    assert elapsed < 0.05


def test_receive_nowait_raises_empty() -> None:
    channel: Channel[str] = Channel()
    with pytest.raises(queue.Empty):
        channel.receive_nowait()
    channel.send("a")
    assert channel.receive_nowait() == "a"


def test_drain_limit_leaves_the_rest_queued() -> None:
    channel: Channel[int] = Channel()
    for i in range(5):
        channel.send(i)

    assert channel.drain(limit=2) == [0, 1]
    assert channel.drain() == [2, 3, 4]


def test_send_after_close_raises_channel_closed() -> None:
    channel: Channel[int] = Channel("status")
    channel.send(1)
    channel.close()

    assert channel.closed
    assert len(channel) == 0
    with pytest.raises(ChannelClosed) as excinfo:
        channel.send(2)
    assert excinfo.value.name == "status"


def test_try_send_reports_closed_channel() -> None:
    channel: Channel[int] = Channel()
    assert channel.try_send(1) is True
    channel.close()
    assert channel.try_send(2) is False
    channel.close()  # closing twice is harmless


def test_multiple_producers_keep_per_producer_order() -> None:
    channel: Channel[tuple[int, int]] = Channel()

    def produce(producer: int) -> None:
        for i in range(200):
            channel.send((producer, i))

    threads = [threading.Thread(target=produce, args=(p,)) for p in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    items = channel.drain()
    assert len(items) == 800
    for producer in range(4):
        assert [i for p, i in items if p == producer] == list(range(200))


def test_close_racing_senders_leaves_nothing_queued() -> None:
    channel: Channel[int] = Channel("commands")
    start = threading.Event()
    accepted: list[int] = [0, 0, 0, 0]

    def produce(producer: int) -> None:
        start.wait()
        while channel.try_send(producer):
            accepted[producer] += 1

    threads = [threading.Thread(target=produce, args=(p,)) for p in range(4)]
    for thread in threads:
        thread.start()
    start.set()
    time.sleep(0.02)
    channel.close()
    for thread in threads:
        thread.join(1.0)

    assert not any(thread.is_alive() for thread in threads)
    assert sum(accepted) > 0
    assert len(channel) == 0
    assert channel.drain() == []
