"""
Tests unitaires pour ProgressBus.
"""

import asyncio

import pytest

from media_scraper.services.progress import ProgressBus, ProgressEvent, ProgressEventType


class TestEmit:
    def test_percent_is_rounded(self, progress_bus: ProgressBus) -> None:
        event = progress_bus.emit_progress("t1", ProgressEventType.PROGRESS, 1, 3)
        assert event.percent == 33
        assert progress_bus.emit_progress("t1", ProgressEventType.PROGRESS, 2, 3).percent == 67

    def test_zero_total(self, progress_bus: ProgressBus) -> None:
        assert progress_bus.emit_progress("t1", ProgressEventType.START, 0, 0).percent == 0

    def test_listeners_receive_events_in_order(self, progress_bus: ProgressBus) -> None:
        received: list[ProgressEvent] = []
        progress_bus.subscribe(received.append)

        progress_bus.emit_progress("t1", ProgressEventType.START, 0, 2)
        progress_bus.emit_progress("t1", ProgressEventType.COMPLETE, 2, 2, message="ok")

        assert [e.type for e in received] == [ProgressEventType.START, ProgressEventType.COMPLETE]
        assert received[1].to_dict() == {
            "type": "complete",
            "task_id": "t1",
            "current": 2,
            "total": 2,
            "percent": 100,
            "item": None,
            "message": "ok",
        }

    def test_failing_listener_does_not_block_others(self, progress_bus: ProgressBus) -> None:
        received = []

        def broken(event: ProgressEvent) -> None:
            raise RuntimeError("listener down")

        progress_bus.subscribe(broken)
        progress_bus.subscribe(received.append)

        progress_bus.emit_progress("t1", ProgressEventType.PROGRESS, 1, 2)

        assert len(received) == 1

    def test_unsubscribe(self, progress_bus: ProgressBus) -> None:
        received = []
        unsubscribe = progress_bus.subscribe(received.append)
        assert progress_bus.listener_count == 1

        unsubscribe()
        unsubscribe()
        progress_bus.emit_progress("t1", ProgressEventType.PROGRESS, 1, 2)

        assert received == []
        assert progress_bus.listener_count == 0

    def test_late_subscriber_misses_earlier_events(self, progress_bus: ProgressBus) -> None:
        progress_bus.emit_progress("t1", ProgressEventType.START, 0, 1)
        received = []
        progress_bus.subscribe(received.append)
        assert received == []


class TestStream:
    @pytest.mark.asyncio
    async def test_stream_filters_and_stops_after_complete(self, progress_bus: ProgressBus) -> None:
        collected: list[ProgressEvent] = []

        async def consume() -> None:
            async for event in progress_bus.stream("t1"):
                collected.append(event)

        consumer = asyncio.create_task(consume())
        await asyncio.sleep(0)

        progress_bus.emit_progress("t1", ProgressEventType.START, 0, 1)
        progress_bus.emit_progress("t2", ProgressEventType.START, 0, 1)
        progress_bus.emit_progress("t1", ProgressEventType.COMPLETE, 1, 1)
        progress_bus.emit_progress("t1", ProgressEventType.PROGRESS, 1, 1)

        await asyncio.wait_for(consumer, timeout=1)

        assert [(e.task_id, e.type) for e in collected] == [
            ("t1", ProgressEventType.START),
            ("t1", ProgressEventType.COMPLETE),
        ]
        assert progress_bus.listener_count == 0
