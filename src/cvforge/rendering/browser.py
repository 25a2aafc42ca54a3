"""Headless browser lifecycle.

One :class:`BrowserSession` owns at most one Chromium process and hands out
one page per render. The process is launched lazily on first use, reused by
later renders, and torn down on :meth:`BrowserSession.close` or after a
render stage times out or crashes, so the next render relaunches cleanly.

    UNINITIALIZED → LAUNCHING → READY ⇄ RENDERING → CLOSED → LAUNCHING → ...
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, Protocol, TypeVar

from playwright.async_api import Browser, Playwright, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from cvforge.core.errors import ProcessLaunchError, RenderTimeoutError
from cvforge.rendering.config import LAUNCH_TIMEOUT

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# States and valid transitions
# ---------------------------------------------------------------------------


class BrowserState(str, enum.Enum):
    UNINITIALIZED = "UNINITIALIZED"
    LAUNCHING = "LAUNCHING"
    READY = "READY"
    RENDERING = "RENDERING"
    CLOSED = "CLOSED"


VALID_TRANSITIONS: dict[BrowserState, set[BrowserState]] = {
    BrowserState.UNINITIALIZED: {
        BrowserState.LAUNCHING,
        BrowserState.CLOSED,  # close() before any render
    },
    BrowserState.LAUNCHING: {
        BrowserState.READY,
        BrowserState.CLOSED,  # launch failed or timed out
    },
    BrowserState.READY: {
        BrowserState.RENDERING,
        BrowserState.CLOSED,
    },
    BrowserState.RENDERING: {
        BrowserState.READY,
        BrowserState.CLOSED,  # forced cleanup after crash/timeout
    },
    BrowserState.CLOSED: {
        BrowserState.LAUNCHING,  # next render relaunches
    },
}


class InvalidTransitionError(Exception):
    """Raised when the session is driven into a state it cannot reach."""

    def __init__(self, current: BrowserState, target: BrowserState):
        self.current = current
        self.target = target
        valid = ", ".join(sorted(s.value for s in VALID_TRANSITIONS[current]))
        super().__init__(
            f"Cannot transition from {current.value} to {target.value}. "
            f"Valid transitions from {current.value}: {valid}."
        )


def can_transition(current: BrowserState, target: BrowserState) -> bool:
    """Return True if moving from *current* to *target* is valid."""
    return target in VALID_TRANSITIONS.get(current, set())


# ---------------------------------------------------------------------------
# Process handles
# ---------------------------------------------------------------------------


class PageLike(Protocol):
    async def set_content(self, html: str, **kwargs: Any) -> None: ...

    async def pdf(self, **kwargs: Any) -> bytes: ...

    async def close(self) -> None: ...


class BrowserHandle(Protocol):
    async def new_page(self) -> PageLike: ...

    async def close(self) -> None: ...


Launcher = Callable[[float], Awaitable[BrowserHandle]]


class ChromiumHandle:
    """A launched Chromium plus the Playwright driver that owns it."""

    def __init__(self, playwright: Playwright, browser: Browser):
        self._playwright = playwright
        self._browser = browser

    async def new_page(self) -> PageLike:
        return await self._browser.new_page()

    async def close(self) -> None:
        try:
            await self._browser.close()
        finally:
            await self._playwright.stop()


def chromium_launcher(*, headless: bool = True) -> Launcher:
    """Return a launcher that starts Playwright's Chromium."""

    async def launch(timeout: float) -> BrowserHandle:
        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.launch(
                headless=headless,
                timeout=timeout * 1000,
            )
        except BaseException:
            await playwright.stop()
            raise
        return ChromiumHandle(playwright, browser)

    return launch


async def run_with_budget(stage: str, seconds: float, awaitable: Awaitable[T]) -> T:
    """Await *awaitable*, raising ``RenderTimeoutError`` once *seconds* elapse."""
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except (asyncio.TimeoutError, PlaywrightTimeoutError):
        raise RenderTimeoutError(stage, seconds) from None


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class BrowserSession:
    """Owns one lazily-launched browser process shared by concurrent renders."""

    def __init__(
        self,
        launcher: Launcher | None = None,
        *,
        launch_timeout: float = LAUNCH_TIMEOUT,
    ):
        self._launcher = launcher or chromium_launcher()
        self._launch_timeout = launch_timeout
        self._lock = asyncio.Lock()
        self._handle: BrowserHandle | None = None
        self._state = BrowserState.UNINITIALIZED
        self._active_pages = 0
        self.launch_count = 0

    @property
    def state(self) -> BrowserState:
        return self._state

    def _transition(self, target: BrowserState) -> None:
        if not can_transition(self._state, target):
            raise InvalidTransitionError(self._state, target)
        logger.debug("Browser session %s → %s", self._state.value, target.value)
        self._state = target

    async def acquire(self) -> BrowserHandle:
        """Return the running browser, launching it if there is none.

        Serialized so concurrent callers never launch two processes.
        """
        async with self._lock:
            if self._handle is not None:
                return self._handle

            self._transition(BrowserState.LAUNCHING)
            self.launch_count += 1
            logger.info("Launching headless browser (attempt %d)", self.launch_count)
            try:
                handle = await run_with_budget(
                    "launch", self._launch_timeout, self._launcher(self._launch_timeout)
                )
            except RenderTimeoutError:
                self._transition(BrowserState.CLOSED)
                raise
            except Exception as exc:
                self._transition(BrowserState.CLOSED)
                raise ProcessLaunchError(f"Could not start headless browser: {exc}") from exc

            self._handle = handle
            self._transition(BrowserState.READY)
            return handle

    @asynccontextmanager
    async def page(self) -> AsyncIterator[PageLike]:
        """Open a page in the shared browser; the page is always closed on exit.

        If the block raises, the browser this page came from is torn down
        before the error propagates. A browser relaunched by another render
        in the meantime is left alone.
        """
        handle = await self.acquire()
        self._active_pages += 1
        if self._state is BrowserState.READY:
            self._transition(BrowserState.RENDERING)
        try:
            page = await handle.new_page()
            try:
                yield page
            finally:
                try:
                    await page.close()
                except Exception as exc:
                    logger.debug("Ignoring page close failure: %s", exc)
        except Exception as exc:
            logger.warning("Render failed (%s); tearing down browser", exc)
            await self.teardown(handle)
            raise
        finally:
            self._active_pages -= 1
            if self._active_pages == 0 and self._state is BrowserState.RENDERING:
                self._transition(BrowserState.READY)

    async def teardown(self, handle: BrowserHandle | None = None) -> None:
        """Close the browser process if any and move to CLOSED.

        With *handle*, only that browser is closed: if it has already been
        replaced by a relaunch this is a no-op. A failure while closing is
        logged, never raised, so it cannot mask the error that triggered the
        teardown.
        """
        async with self._lock:
            if handle is not None and handle is not self._handle:
                logger.debug("Browser already replaced; skipping teardown")
                return
            handle, self._handle = self._handle, None
            if self._state is not BrowserState.CLOSED:
                self._transition(BrowserState.CLOSED)
            if handle is None:
                return
            logger.info("Closing headless browser")
            try:
                await handle.close()
            except Exception:
                logger.exception("Failed to close headless browser")

    async def close(self) -> None:
        await self.teardown()
