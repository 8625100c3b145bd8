"""Asynchronous dispatch of permission checks.

Transports report completion through a callback, possibly from a thread
owned by the transport. ``SingleShotReply`` turns that callback into a single
awaitable so a check suspends exactly once and resolves exactly once.
"""

import asyncio
import threading
from collections.abc import Callable
from typing import Any, Protocol

import structlog

from spicecheck.errors import DispatchFailure
from spicecheck.schemas import CheckRequest


logger = structlog.get_logger()

ReplyCallback = Callable[[BaseException | None, int | None], None]
CancelCall = Callable[[], Any]


class CheckTransport(Protocol):
    """Anything able to submit a check request to the authorization service.

    The transport must call ``callback(error, permissionship)`` once the call
    completes. It may do so from any thread.
    """

    def submit(
        self,
        request: CheckRequest,
        callback: ReplyCallback,
    ) -> CancelCall | None:
        """Start the call.

        Args:
            request: The check to perform
            callback: Completion callback taking (error, permissionship)

        Returns:
            A function cancelling the in-flight call, or None if the
            transport cannot cancel
        """
        ...

    def close(self) -> None:
        """Release the underlying client."""
        ...


class SingleShotReply:
    """Single-fire bridge from a completion callback to an asyncio future.

    Must be created inside the event loop that awaits it. The instance itself
    is the callback handed to the transport.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()
        self.future: asyncio.Future[int] = self._loop.create_future()
        self._lock = threading.Lock()
        self._fired = False

    @property
    def fired(self) -> bool:
        """Whether the transport has already replied."""
        return self._fired

    def __call__(
        self,
        error: BaseException | None,
        value: int | None = None,
    ) -> None:
        with self._lock:
            if self._fired:
                logger.warning(
                    "duplicate_reply_ignored",
                    error=str(error) if error is not None else None,
                    value=value,
                )
                return
            self._fired = True

        if error is not None and value is not None:
            # Error wins; the value is dropped.
            logger.warning(
                "contradictory_reply",
                error=str(error),
                discarded_value=value,
            )

        try:
            self._loop.call_soon_threadsafe(self._settle, error, value)
        except RuntimeError:
            logger.debug("reply_after_loop_closed", error=str(error), value=value)

    def _settle(self, error: BaseException | None, value: int | None) -> None:
        if self.future.done():
            # Awaiter already gave up (timeout or cancellation)
            logger.debug("late_reply_dropped", value=value)
            return

        if error is not None:
            failure = DispatchFailure(error=error)
            failure.__cause__ = error
            self.future.set_exception(failure)
        elif value is None:
            self.future.set_exception(
                DispatchFailure("Transport completed without error or permissionship")
            )
        else:
            self.future.set_result(int(value))


class CheckDispatcher:
    """Sends one check request per call and awaits its single reply."""

    def __init__(self, transport: CheckTransport, timeout: float | None = None) -> None:
        """Initialize the dispatcher.

        Args:
            transport: Client used to reach the authorization service
            timeout: Seconds to wait for a reply; None waits indefinitely
        """
        self.transport = transport
        self.timeout = timeout

    async def dispatch(self, request: CheckRequest) -> int:
        """Perform the check and return the raw permissionship code.

        Args:
            request: The check to perform

        Returns:
            The permissionship code sent by the service

        Raises:
            DispatchFailure: If the call failed, was rejected or timed out
        """
        reply = SingleShotReply()

        try:
            cancel = self.transport.submit(request, reply)
        except Exception as exc:
            raise DispatchFailure(error=exc) from exc

        try:
            return await asyncio.wait_for(reply.future, timeout=self.timeout)
        except TimeoutError as exc:
            _cancel_call(cancel)
            timeout_error = TimeoutError(f"No reply within {self.timeout}s")
            raise DispatchFailure(error=timeout_error) from exc
        except asyncio.CancelledError:
            _cancel_call(cancel)
            raise


def _cancel_call(cancel: CancelCall | None) -> None:
    """Cancel an in-flight transport call, if the transport allows it."""
    if cancel is None:
        return
    try:
        cancel()
    except Exception as exc:
        logger.warning("transport_cancel_failed", error=str(exc))
