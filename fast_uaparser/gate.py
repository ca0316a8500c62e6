"""At-most-once construction of a shared value.

The gate moves ``UNINITIALIZED -> INITIALIZING -> READY | FAILED``. The
build runs with the lock held, so callers arriving while it is in flight
block until it finishes and then observe the terminal state. ``FAILED`` is
sticky: the first :class:`InitError` is raised again on every access.
"""

import enum
import logging
import threading
import time
from collections.abc import Callable
from types import TracebackType
from typing import Generic, NoReturn, TypeVar

from .errors import InitError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class State(enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class InitGate(Generic[T]):
    def __init__(self, build: Callable[[], T], name: str = "rule table") -> None:
        self._build = build
        self._name = name
        self._lock = threading.Lock()
        self._state = State.UNINITIALIZED
        self._value: T | None = None
        self._error: InitError | None = None
        self._error_tb: TracebackType | None = None

    @property
    def state(self) -> State:
        return self._state

    def get(self, timeout: float | None = None) -> T:
        if self._state is State.READY:
            return self._value  # type: ignore[return-value]
        self.ensure(timeout)
        return self._value  # type: ignore[return-value]

    def ensure(self, timeout: float | None = None) -> bool:
        """Build the value unless already built.

        Returns ``True`` if this call performed the build. Raises the
        stored :class:`InitError` if a build has failed before, and
        ``TimeoutError`` if ``timeout`` elapses while another thread is
        building.
        """
        if self._state is State.READY:
            return False
        if self._state is State.FAILED:
            self._raise_failure()

        acquired = self._lock.acquire(timeout=-1 if timeout is None else timeout)
        if not acquired:
            raise TimeoutError(f"{self._name} still initializing after {timeout}s")
        try:
            if self._state is State.READY:
                return False
            if self._state is State.FAILED:
                self._raise_failure()

            self._state = State.INITIALIZING
            logger.debug("building %s", self._name)
            start = time.perf_counter()
            try:
                value = self._build()
            except InitError as e:
                logger.error("failed to build %s: %s", self._name, e)
                self._error = e
                self._error_tb = e.__traceback__
                self._state = State.FAILED
                raise
            except BaseException:
                self._state = State.UNINITIALIZED
                raise

            self._value = value
            self._state = State.READY
            logger.info(
                "built %s in %.1fms", self._name, (time.perf_counter() - start) * 1000
            )
            return True
        finally:
            self._lock.release()

    def _raise_failure(self) -> NoReturn:
        # restore the build traceback so repeated raises do not pile up frames
        raise self._error.with_traceback(self._error_tb)  # type: ignore[union-attr]
