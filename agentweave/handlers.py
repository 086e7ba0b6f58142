"""Decorators for writing one-way event handlers and request/response handlers."""

from __future__ import annotations

import functools
import inspect
from typing import Any, Awaitable, Callable


async def _call(func: Callable[..., Any], args: tuple, kwargs: dict) -> Any:
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def event_handler(func: Callable[..., Any]) -> Callable[..., Awaitable[None]]:
    """Wrap a handler so it runs for its effect and never produces a response."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> None:
        await _call(func, args, kwargs)
        return None

    return wrapper


def rpc_handler(func: Callable[..., Any]) -> Callable[..., Awaitable[Any]]:
    """Wrap a handler whose result is sent back as the response."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        return await _call(func, args, kwargs)

    return wrapper