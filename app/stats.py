from datetime import timedelta
import time
from typing import Any, Callable, Awaitable

import statsd
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.config import get_config


class Stats:
    def timing(self, key: str, value: int) -> None:
        raise NotImplementedError

    def inc(self, key: str, count: int = 1, rate: int = 1) -> None:
        raise NotImplementedError


class NoopStats(Stats):
    def timing(self, key: str, value: int) -> None:
        """Empty method due to NoopStats implementation"""
        pass

    def inc(self, key: str, count: int = 1, rate: int = 1) -> None:
        """Empty method due to NoopStats implementation"""
        pass


class MemoryClient:
    """
    Keeps stats in memory, used when stats are enabled without a statsd host.
    Keys get the same prefix a statsd client would give them.
    """

    def __init__(self, prefix: str | None = None) -> None:
        self.prefix = prefix
        self.memory: dict[str, Any] = {}

    def __key(self, stat: str) -> str:
        return f"{self.prefix}.{stat}" if self.prefix else stat

    def timing(self, stat: str, delta: timedelta | float, rate: int = 1) -> None:
        """Record a timing stat. | rate unused"""
        if isinstance(delta, timedelta):
            delta = delta.total_seconds() * 1000.0
        self.memory.setdefault(self.__key(stat), []).append(delta)

    def incr(self, stat: str, count: int = 1, rate: int = 1) -> None:
        """Increment a stat by `count`. | rate unused"""
        key = self.__key(stat)
        self.memory[key] = self.memory.get(key, 0) + count

    def get_memory(self) -> dict[str, Any]:
        return self.memory


class Statsd(Stats):
    def __init__(self, client: statsd.StatsClient | MemoryClient):
        self.client = client

    def timing(self, key: str, value: int) -> None:
        self.client.timing(key, value)

    def inc(self, key: str, count: int = 1, rate: int = 1) -> None:
        self.client.incr(key, count, rate)


_STATS: Stats = NoopStats()


def setup_stats() -> None:
    config = get_config()

    if config.stats.enabled is False:
        return
    in_memory = config.stats.host is None or config.stats.host == ""
    client = (
        MemoryClient(prefix=config.stats.module_name)
        if in_memory
        else statsd.StatsClient(
            config.stats.host, config.stats.port or 8125, prefix=config.stats.module_name
        )
    )
    global _STATS
    _STATS = Statsd(client)


def get_stats() -> Stats:
    return _STATS


class StatsdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to record the number of requests and the response time per endpoint
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start_time = time.monotonic()
        response = await call_next(request)
        response_time = int((time.monotonic() - start_time) * 1000)

        route = request.scope.get("route")
        path = getattr(route, "path", request.url.path)
        key = f"http.{request.method.lower()}.{path}"
        get_stats().inc(f"{key}.{response.status_code}")
        get_stats().timing(f"{key}.response_time", response_time)

        return response
