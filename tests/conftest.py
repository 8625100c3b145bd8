"""Pytest configuration and shared fixtures."""

import threading
from collections.abc import Callable, Generator
from typing import Any

import pytest

from spicecheck.dispatch import ReplyCallback
from spicecheck.schemas import CheckRequest, ObjectReference, build_check_request


class FakeTransport:
    """In-memory transport that answers every check with a fixed reply.

    Attributes:
        requests: Requests submitted so far
        callbacks: Reply callbacks handed over by the dispatcher
        cancelled: Number of times an in-flight call was cancelled
        closed: Whether close() was called
    """

    def __init__(
        self,
        permissionship: int | None = None,
        error: BaseException | None = None,
        *,
        reply: bool = True,
        in_thread: bool = False,
    ) -> None:
        self.permissionship = permissionship
        self.error = error
        self.reply = reply
        self.in_thread = in_thread
        self.requests: list[CheckRequest] = []
        self.callbacks: list[ReplyCallback] = []
        self.cancelled = 0
        self.closed = False
        self.threads: list[threading.Thread] = []

    def submit(self, request: CheckRequest, callback: ReplyCallback) -> Callable[[], None]:
        self.requests.append(request)
        self.callbacks.append(callback)
        if self.reply:
            if self.in_thread:
                thread = threading.Thread(
                    target=callback, args=(self.error, self.permissionship)
                )
                self.threads.append(thread)
                thread.start()
            else:
                callback(self.error, self.permissionship)
        return self.cancel

    def cancel(self) -> None:
        self.cancelled += 1

    def close(self) -> None:
        self.closed = True

    def join(self, timeout: float = 5.0) -> None:
        """Wait for reply threads started by submit()."""
        for thread in self.threads:
            thread.join(timeout)


@pytest.fixture
def fake_transport() -> Generator[Callable[..., FakeTransport], None, None]:
    """Get a factory for FakeTransports.

    Reply threads of every transport built through it are joined on teardown.
    """
    transports: list[FakeTransport] = []

    def factory(*args: Any, **kwargs: Any) -> FakeTransport:
        transport = FakeTransport(*args, **kwargs)
        transports.append(transport)
        return transport

    yield factory

    for transport in transports:
        transport.join()
        assert not any(thread.is_alive() for thread in transport.threads)


@pytest.fixture
def task() -> ObjectReference:
    """The resource used throughout the tests."""
    return ObjectReference(object_type="task", object_id="task-001")


@pytest.fixture
def user() -> ObjectReference:
    """The subject used throughout the tests."""
    return ObjectReference(object_type="user", object_id="user-001")


@pytest.fixture
def view_request(task: ObjectReference, user: ObjectReference) -> CheckRequest:
    """Can user-001 view task-001?"""
    return build_check_request(task, "view", user)
