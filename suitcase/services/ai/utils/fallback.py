"""
AI 服务统一兜底装饰器

Failure chain for one capability call:

    TryLive -> TryLive2 (optional) -> Static -> Done

Each step runs at most once and strictly in order. There is no retry loop and
no backoff. Live steps are bounded by the owner's ``timeout`` attribute.
"""
import asyncio
import functools
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from suitcase.services.ai.errors import ConfigurationError


async def _bounded(awaitable: Awaitable[Any], timeout: Optional[float]) -> Any:
    if timeout is not None:
        return await asyncio.wait_for(awaitable, timeout)
    return await awaitable


def _describe(error: Exception) -> str:
    if isinstance(error, asyncio.TimeoutError):
        return "timed out"
    return f"{type(error).__name__}: {error}"


def ai_fallback(
    fallback_func: Callable[..., Awaitable[Any]],
    secondary_func: Optional[Callable[..., Awaitable[Any]]] = None,
    log_level: str = "warning",
    log_message: Optional[str] = None
):
    """
    AI 服务统一兜底装饰器（异步方法）

    Args:
        fallback_func: 静态兜底协程，与被装饰方法参数相同，必须不抛异常
        secondary_func: 可选的第二次在线尝试（TryLive2）
        log_level: 日志级别（warning/info/error）
        log_message: 自定义日志消息，默认使用函数名

    The decorated coroutine's owner may define ``timeout`` (seconds) to bound
    each live attempt; a timeout is treated like any other failure.
    When the owner's ``is_live()`` returns False the owner is bound to the
    static provider itself: the live steps are skipped and ``fallback_func``
    runs exactly once.
    ``ConfigurationError`` skips TryLive2 and goes straight to the static step.

    Usage:
        class Assistant:
            timeout = 30

            @ai_fallback(
                fallback_func=lambda self, query: self.fallback.search_books(query),
            )
            async def search_books(self, query):
                return await self.provider.search_books(query)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            message = log_message or func.__name__
            timeout = getattr(self, "timeout", None)

            is_live = getattr(self, "is_live", None)
            if callable(is_live) and not is_live():
                return await fallback_func(self, *args, **kwargs)

            try:
                return await _bounded(func(self, *args, **kwargs), timeout)
            except ConfigurationError as e:
                logger.info(f"{message}: 未配置凭证，直接使用静态兜底 ({e})")
                return await fallback_func(self, *args, **kwargs)
            except Exception as e:
                getattr(logger, log_level)(f"{message} 失败: {_describe(e)}")

            if secondary_func is not None:
                try:
                    return await _bounded(secondary_func(self, *args, **kwargs), timeout)
                except Exception as e:
                    getattr(logger, log_level)(f"{message} 二次尝试失败: {_describe(e)}")

            return await fallback_func(self, *args, **kwargs)
        return wrapper
    return decorator


def silent_fallback(
    return_value: Any = None,
    return_func: Optional[Callable[..., Any]] = None
):
    """
    静默兜底装饰器 - 失败时静默返回默认值

    Used by the static provider, which must never raise.

    Args:
        return_value: 默认返回值
        return_func: 根据调用参数生成默认值（优先于 return_value）

    Usage:
        @silent_fallback(return_value="Summary unavailable offline.")
        async def get_book_summary(self, title):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                logger.debug(f"{func.__name__} 使用离线数据: {_describe(e)}")
                if return_func is not None:
                    return return_func(*args, **kwargs)
                return return_value
        return wrapper
    return decorator


__all__ = [
    "ai_fallback",
    "silent_fallback",
]
