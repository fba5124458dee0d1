"""Tests for src.core.channel — EventChannel."""
import threading

import pytest

from src.core.channel import ChannelClosed, EventChannel
from src.core.events import DomainEvent


class TestEventChannel:
    def test_empty_returns_none(self):
        assert EventChannel().try_recv() is None

    def test_fifo(self):
        ch = EventChannel()
        ch.send(DomainEvent.ARM)
        ch.send(DomainEvent.TRIGGER)
        assert ch.try_recv() is DomainEvent.ARM
        assert ch.try_recv() is DomainEvent.TRIGGER
        assert ch.try_recv() is None

    def test_send_after_close_raises(self):
        ch = EventChannel()
        ch.close()
        with pytest.raises(ChannelClosed):
            ch.send(DomainEvent.RESET)

    def test_pending_items_survive_close(self):
        ch = EventChannel()
        ch.send(DomainEvent.ARM)
        ch.close()
        assert ch.try_recv() is DomainEvent.ARM

    def test_many_producers(self):
        ch = EventChannel()

        def produce():
            for _ in range(200):
                ch.send(DomainEvent.IGNORE)

        threads = [threading.Thread(target=produce) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        count = 0
        while ch.try_recv() is not None:
            count += 1
        assert count == 800
