import threading
import time

import pytest

from names_dict.channel import BoundedChannel, ChannelClosed


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not reached in time")
        time.sleep(0.01)


def test_fifo_and_drain_after_close():
    channel = BoundedChannel(3)
    for name in ["Anna", "Max", "Otto"]:
        channel.put(name)
    assert channel.full()
    channel.close()
    assert list(channel) == ["Anna", "Max", "Otto"]
    with pytest.raises(ChannelClosed):
        channel.get()


def test_put_after_close_fails():
    channel = BoundedChannel(1)
    channel.close()
    channel.close()
    with pytest.raises(ChannelClosed):
        channel.put("Anna")


def test_put_blocks_while_full():
    channel = BoundedChannel(1)
    channel.put("Anna")
    done = threading.Event()

    def producer():
        channel.put("Max")
        done.set()

    thread = threading.Thread(target=producer)
    thread.start()
    time.sleep(0.1)
    assert not done.is_set()
    assert channel.get() == "Anna"
    thread.join(timeout=5)
    assert done.is_set()
    assert channel.get() == "Max"


def test_get_blocks_until_item_or_close():
    channel = BoundedChannel(1)
    received = []

    def consumer():
        received.extend(channel)

    thread = threading.Thread(target=consumer)
    thread.start()
    channel.put("Anna")
    wait_for(lambda: received == ["Anna"])
    assert thread.is_alive()
    channel.close()
    thread.join(timeout=5)
    assert not thread.is_alive()


def test_cancel_unblocks_producer():
    channel = BoundedChannel(1)
    channel.put("Anna")
    errors = []

    def producer():
        try:
            channel.put("Max")
        except ChannelClosed as exc:
            errors.append(exc)

    thread = threading.Thread(target=producer)
    thread.start()
    time.sleep(0.05)
    channel.cancel()
    thread.join(timeout=5)
    assert len(errors) == 1
    assert len(channel) == 0
    assert channel.cancelled


def test_cancel_unblocks_consumer_and_drops_items():
    channel = BoundedChannel(2)
    channel.put("Anna")
    channel.cancel()
    with pytest.raises(ChannelClosed):
        channel.get()


def test_invalid_capacity():
    with pytest.raises(ValueError):
        BoundedChannel(0)
