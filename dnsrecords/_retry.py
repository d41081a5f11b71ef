'''
simple retry policy for resolve attempts

Raises
------
NoAttemptsLeftError
    _raised from the last exception when all attempts are exhausted_
'''

import functools
import logging
import random
import time
from collections.abc import Callable
from typing import ParamSpec, TypeVar

from dnsrecords._errors import ResolveFailed

P = ParamSpec("P")
R = TypeVar("R")

logger = logging.getLogger(__name__)


class NoAttemptsLeftError(Exception):
    ...


class retry_policy:

    def __init__(
        self,
        *,
        attempts: int = 3,
        delay: float = 0.25,
        jitter: float = 0.1,
        retry_on: tuple[type[BaseException], ...] = (ResolveFailed,),
    ) -> None:
        '''
        Parameters
        ----------
        attempts : int, optional
            The maximum number of attempts, by default 3
        delay : float, optional
            The base delay between attempts, by default 0.25
        jitter : float, optional
            The jitter factor to apply to the delay, by default 0.1
        retry_on : tuple[type[BaseException], ...], optional
            The exceptions that count as a failed attempt,
            by default (ResolveFailed,)
        '''
        if attempts < 1:
            raise ValueError(f"attempts must be at least 1, got {attempts}")
        self.attempts: int = attempts
        self.delay: float = delay
        self.jitter: float = jitter
        self.retry_on = retry_on

    def get_timeout(self, attempt_no: int) -> float:
        base = self.delay * attempt_no

        if self.jitter:
            j = base * self.jitter
            base += random.uniform(-j, j)

        return max(0.0, base)

    def call_with_retries(
        self,
        func: Callable[P, R],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> R:
        last_exc: BaseException | None = None
        for attempt_no in range(1, self.attempts + 1):
            try:
                return func(*args, **kwargs)
            except self.retry_on as exc:
                logger.warning(f"Attempt {attempt_no}/{self.attempts} failed: {exc}")
                if attempt_no == self.attempts:
                    raise NoAttemptsLeftError(
                        f"Failed after {self.attempts} attempts: {exc}"
                    ) from exc
                last_exc = exc
                pause = self.get_timeout(attempt_no)
                if pause:
                    time.sleep(pause)

        raise NoAttemptsLeftError(
            f"Failed after {self.attempts} attempts: {last_exc}"
        ) from last_exc

    def __call__(self, func: Callable[P, R]) -> Callable[P, R]:

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            return self.call_with_retries(func, *args, **kwargs)

        return wrapper
