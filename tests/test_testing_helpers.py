"""Tests for the testing utilities."""

import anyio
import pytest

from procdog import Event, send
from procdog.events import report
from procdog.protocol import EVENT
from procdog.testing.helpers import drain, drain_events, make_monitor, recv_event, wait_for

pytestmark = pytest.mark.anyio


class TestTestingHelpers:
    """Test the testing helper utilities."""

    async def test_wait_for_success(self):
        flag = {"value": False}

        async def set_flag():
            await anyio.sleep(0.05)
            flag["value"] = True

        async with anyio.create_task_group() as tg:
            tg.start_soon(set_flag)
            await wait_for(lambda: flag["value"], timeout=1.0, interval=0.01)

    async def test_wait_for_timeout(self):
        with pytest.raises(TimeoutError):
            await wait_for(lambda: False, timeout=0.1, interval=0.01)

    async def test_report_mirrors_events_to_monitor(self):
        pid, mb = make_monitor()
        await report(Event.RESTARTING, "Restarting (run %d)...", 2, monitor=pid, run=2)
        assert await recv_event(mb, Event.RESTARTING) == {"run": 2}

    async def test_drain_events_keeps_order_and_skips_other_messages(self):
        pid, mb = make_monitor()
        await send(pid, (EVENT, Event.COMMAND_STARTED, {"pid": 1}))
        await send(pid, ("poll",))
        await send(pid, (EVENT, Event.EXITING, {"reason": "finished"}))

        assert await drain_events(mb) == [
            (Event.COMMAND_STARTED, {"pid": 1}),
            (Event.EXITING, {"reason": "finished"}),
        ]
        assert await drain(mb) == [("poll",)]
