"""
Graceful shutdown handling for the payroll API.
Lets in-flight requests finish and releases the database pool.
"""

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

logger = logging.getLogger("payroll.shutdown")

_SHUTDOWN_BODY = json.dumps({"error": "Service is shutting down", "retry_after": 5}).encode()


class GracefulShutdownManager:
    """
    Tracks in-flight requests and runs cleanup callbacks on shutdown.
    """

    def __init__(self, timeout: int = 30):
        self._shutdown_requested = False
        self._timeout = timeout
        self._shutdown_callbacks: list[Callable] = []
        self._request_count = 0
        self._lock = asyncio.Lock()

    @property
    def shutdown_requested(self) -> bool:
        return self._shutdown_requested

    async def increment_requests(self) -> None:
        async with self._lock:
            self._request_count += 1

    async def decrement_requests(self) -> None:
        async with self._lock:
            self._request_count -= 1

    @property
    def pending_requests(self) -> int:
        return self._request_count

    def add_shutdown_callback(self, callback: Callable) -> None:
        """Register a callback (plain or async) to run during shutdown."""
        self._shutdown_callbacks.append(callback)

    async def shutdown(self) -> None:
        """
        Stop accepting requests, wait for in-flight ones up to the timeout,
        then run the cleanup callbacks in registration order.
        """
        if self._shutdown_requested:
            return

        self._shutdown_requested = True
        logger.info("Graceful shutdown initiated...")

        loop = asyncio.get_running_loop()
        start_time = loop.time()
        while self._request_count > 0:
            if loop.time() - start_time > self._timeout:
                logger.warning(
                    f"Shutdown timeout reached with {self._request_count} pending requests"
                )
                break
            logger.info(f"Waiting for {self._request_count} pending requests...")
            await asyncio.sleep(0.5)

        for callback in self._shutdown_callbacks:
            try:
                result = callback()
                if asyncio.iscoroutine(result):
                    await result
            except Exception:
                logger.exception("Error in shutdown callback")

        logger.info("Graceful shutdown complete")


_shutdown_manager: Optional[GracefulShutdownManager] = None


def get_shutdown_manager() -> GracefulShutdownManager:
    """Get the process-wide shutdown manager."""
    global _shutdown_manager
    if _shutdown_manager is None:
        _shutdown_manager = GracefulShutdownManager()
    return _shutdown_manager


def reset_shutdown_manager() -> GracefulShutdownManager:
    """Install a fresh manager; called on every application startup."""
    global _shutdown_manager
    _shutdown_manager = GracefulShutdownManager()
    return _shutdown_manager


@asynccontextmanager
async def lifespan_manager(app):
    """
    FastAPI lifespan context manager for startup/shutdown.

    Usage:
        app = FastAPI(lifespan=lifespan_manager)
    """
    from payroll_api.db.session import engine

    logger.info("Application starting up...")
    shutdown_manager = reset_shutdown_manager()

    async def cleanup_database():
        logger.info("Closing database connections...")
        await engine.dispose()
        logger.info("Database connections closed")

    shutdown_manager.add_shutdown_callback(cleanup_database)

    logger.info("Application startup complete")

    try:
        yield
    finally:
        logger.info("Application shutting down...")
        await shutdown_manager.shutdown()


class RequestTrackingMiddleware:
    """
    Middleware that tracks in-flight requests for graceful shutdown.
    New requests get a 503 once shutdown has started.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        shutdown_manager = get_shutdown_manager()
        if shutdown_manager.shutdown_requested:
            await send({
                "type": "http.response.start",
                "status": 503,
                "headers": [
                    [b"content-type", b"application/json"],
                    [b"connection", b"close"],
                ],
            })
            await send({
                "type": "http.response.body",
                "body": _SHUTDOWN_BODY,
            })
            return

        await shutdown_manager.increment_requests()
        try:
            await self.app(scope, receive, send)
        finally:
            await shutdown_manager.decrement_requests()
