"""CLI utilities."""

import asyncio
import functools
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

T = TypeVar("T")


def async_command(func: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., T]:
    """Run an async typer command on a fresh event loop."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        return asyncio.run(func(*args, **kwargs))

    return wrapper
