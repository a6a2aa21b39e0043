"""Helpers for driving async store calls from synchronous code."""

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

T = TypeVar("T")


def _run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion in a new event loop.

    For synchronous hosts (WSGI apps, shutdown hooks, cron scripts). Must not
    be called from inside a running event loop.
    """
    return asyncio.run(coro)
