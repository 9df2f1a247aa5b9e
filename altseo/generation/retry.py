import time
from collections.abc import Callable
from typing import TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from altseo.generation.exceptions import GenerationNetworkError, ProviderStatusError
from altseo.logging.logger import Log

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_INITIAL_DELAY_SECONDS = 1.0


def is_transient(exc: BaseException) -> bool:
    """Transport failures and HTTP 429/5xx are worth another attempt."""
    if isinstance(exc, GenerationNetworkError):
        return True
    return isinstance(exc, ProviderStatusError) and exc.retryable


def call_with_backoff(
    call: Callable[[], T],
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    initial_delay: float = DEFAULT_INITIAL_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> T | None:
    """Run call, retrying transient provider failures with exponential backoff.

    The first retry waits initial_delay and each following one doubles it.
    When every attempt fails the provider gave nothing usable, so None is
    returned instead of raising; callers treat that as "nothing generated".
    Non-retryable HTTP errors propagate immediately.
    """
    attempts = max(1, max_attempts)

    def _log_retry(state: RetryCallState) -> None:
        delay = state.next_action.sleep if state.next_action else 0
        Log.warning(
            f"AI provider call failed (attempt {state.attempt_number}/{attempts}), "
            f"retrying in {delay:g}s: {state.outcome.exception()}"
        )

    def _give_up(state: RetryCallState) -> None:
        Log.warning(
            f"AI provider still failing after {attempts} attempts: "
            f"{state.outcome.exception()}"
        )
        return None

    retrying = Retrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=initial_delay),
        retry=retry_if_exception(is_transient),
        before_sleep=_log_retry,
        retry_error_callback=_give_up,
        sleep=sleep,
    )
    return retrying(call)


def max_tokens_for_model(model: str) -> int:
    """Completion token ceiling used for a model family."""
    if model.startswith("gpt-4"):
        return 4000
    if model.startswith("gpt-3.5-turbo"):
        return 3000
    return 1000
