"""Tests for the browser session lifecycle."""

from __future__ import annotations

import asyncio

import pytest

from conftest import FakeLauncher
from cvforge.core.errors import ProcessLaunchError, RenderTimeoutError
from cvforge.rendering.browser import (
    VALID_TRANSITIONS,
    BrowserSession,
    BrowserState,
    InvalidTransitionError,
    can_transition,
    run_with_budget,
)


# ---------------------------------------------------------------------------
# VALID_TRANSITIONS structure
# ---------------------------------------------------------------------------


class TestValidTransitions:
    def test_all_states_have_entries(self):
        for state in BrowserState:
            assert state in VALID_TRANSITIONS, f"{state.value} missing from VALID_TRANSITIONS"

    def test_closed_only_relaunches(self):
        assert VALID_TRANSITIONS[BrowserState.CLOSED] == {BrowserState.LAUNCHING}

    def test_rendering_can_be_forced_closed(self):
        assert can_transition(BrowserState.RENDERING, BrowserState.CLOSED)

    def test_cannot_render_while_launching(self):
        assert not can_transition(BrowserState.LAUNCHING, BrowserState.RENDERING)

    def test_error_message_lists_valid_targets(self):
        err = InvalidTransitionError(BrowserState.CLOSED, BrowserState.READY)
        assert "CLOSED" in str(err)
        assert "LAUNCHING" in str(err)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class TestBrowserSession:
    async def test_starts_uninitialized(self, fake_launcher: FakeLauncher):
        session = BrowserSession(fake_launcher)
        assert session.state is BrowserState.UNINITIALIZED
        assert fake_launcher.browsers == []

    async def test_lazy_launch_then_reuse(self, fake_launcher: FakeLauncher):
        session = BrowserSession(fake_launcher)
        first = await session.acquire()
        second = await session.acquire()
        assert first is second
        assert session.launch_count == 1
        assert session.state is BrowserState.READY

    async def test_concurrent_acquire_launches_once(self):
        launcher = FakeLauncher(launch_delay=0.05)
        session = BrowserSession(launcher)
        handles = await asyncio.gather(*(session.acquire() for _ in range(5)))
        assert len({id(h) for h in handles}) == 1
        assert len(launcher.browsers) == 1

    async def test_page_moves_through_rendering(self, fake_launcher: FakeLauncher):
        session = BrowserSession(fake_launcher)
        async with session.page() as page:
            assert session.state is BrowserState.RENDERING
        assert session.state is BrowserState.READY
        assert page.closed

    async def test_page_closed_on_error(self, fake_launcher: FakeLauncher):
        session = BrowserSession(fake_launcher)
        with pytest.raises(RuntimeError):
            async with session.page() as page:
                raise RuntimeError("boom")
        assert page.closed
        assert fake_launcher.browsers[0].closed
        assert session.state is BrowserState.CLOSED

    async def test_stale_failure_keeps_relaunched_browser(self, fake_launcher: FakeLauncher):
        session = BrowserSession(fake_launcher)
        entered = asyncio.Event()
        release = asyncio.Event()

        async def slow_render() -> None:
            async with session.page():
                entered.set()
                await release.wait()
                raise RuntimeError("Target page, context or browser has been closed")

        slow = asyncio.create_task(slow_render())
        await entered.wait()

        # A second render on the first browser fails and tears it down.
        with pytest.raises(RuntimeError):
            async with session.page():
                raise RuntimeError("timeout")
        assert fake_launcher.browsers[0].closed

        # A third render relaunches; the slow render fails while it runs.
        async with session.page() as page:
            release.set()
            with pytest.raises(RuntimeError):
                await slow
            assert not fake_launcher.browsers[1].closed
            assert session.state is BrowserState.RENDERING

        assert page.closed
        assert len(fake_launcher.browsers) == 2
        assert not fake_launcher.browsers[1].closed
        assert session.state is BrowserState.READY

    async def test_close_is_terminal_until_next_use(self, fake_launcher: FakeLauncher):
        session = BrowserSession(fake_launcher)
        await session.acquire()
        await session.close()
        assert session.state is BrowserState.CLOSED
        assert fake_launcher.browsers[0].closed

        await session.acquire()
        assert session.state is BrowserState.READY
        assert len(fake_launcher.browsers) == 2

    async def test_close_without_launch(self, fake_launcher: FakeLauncher):
        session = BrowserSession(fake_launcher)
        await session.close()
        await session.close()
        assert session.state is BrowserState.CLOSED

    async def test_launch_timeout(self):
        launcher = FakeLauncher(launch_delay=1.0)
        session = BrowserSession(launcher, launch_timeout=0.05)
        with pytest.raises(RenderTimeoutError) as exc_info:
            await session.acquire()
        assert exc_info.value.stage == "launch"
        assert session.state is BrowserState.CLOSED

    async def test_launch_failure(self):
        session = BrowserSession(FakeLauncher(fail=OSError("no chromium")))
        with pytest.raises(ProcessLaunchError, match="no chromium"):
            await session.acquire()
        assert session.state is BrowserState.CLOSED

    async def test_launch_timeout_is_passed_to_launcher(self, fake_launcher: FakeLauncher):
        session = BrowserSession(fake_launcher, launch_timeout=12.5)
        await session.acquire()
        assert fake_launcher.timeouts == [12.5]

    async def test_close_failure_is_swallowed(self, fake_launcher: FakeLauncher):
        session = BrowserSession(fake_launcher)
        browser = await session.acquire()

        async def broken_close() -> None:
            raise RuntimeError("already dead")

        browser.close = broken_close  # type: ignore[method-assign]
        await session.close()
        assert session.state is BrowserState.CLOSED


class TestRunWithBudget:
    async def test_returns_value(self):
        async def quick() -> int:
            return 42

        assert await run_with_budget("stage", 1.0, quick()) == 42

    async def test_times_out(self):
        with pytest.raises(RenderTimeoutError) as exc_info:
            await run_with_budget("rasterization", 0.01, asyncio.sleep(1))
        assert exc_info.value.seconds == 0.01
        assert "rasterization" in str(exc_info.value)
