"""
Bounded, retried unit of work shared by the create and cancel booking paths.

Every attempt runs a complete unit of work under `anyio.fail_after`. Lock
contention and timeouts are retried with exponential backoff; every other
failure is translated into the error taxonomy and surfaced. The unit of work
has always rolled back by the time an error leaves an attempt.
"""

import time
from typing import Awaitable, Callable, TypeVar

import anyio
from sqlalchemy.exc import DBAPIError

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import ContentionError, CustomBaseError, InternalError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics


_T = TypeVar('_T')

# Driver messages meaning "another transaction holds what we need" (SQLite, PostgreSQL)
CONTENTION_MARKERS = (
    'database is locked',
    'database table is locked',
    'lock timeout',
    'lock_not_available',
    'could not serialize access',
    'deadlock detected',
)


def is_contention_error(e: BaseException) -> bool:
    if isinstance(e, TimeoutError):
        return True
    if isinstance(e, DBAPIError):
        message = str(e).lower()
        return any(marker in message for marker in CONTENTION_MARKERS)
    return False


def translate_error(e: Exception) -> CustomBaseError:
    if isinstance(e, CustomBaseError):
        return e
    if is_contention_error(e):
        return ContentionError('Booking is busy, please retry shortly')
    return InternalError()


async def run_booking_transaction(
    *, operation: str, unit_of_work: Callable[[], Awaitable[_T]]
) -> _T:
    """
    Run `unit_of_work` (one full attempt, including its own commit) with a
    timeout, retrying on contention.

    Raises:
        CustomBaseError: the domain error of the attempt, ContentionError once
            retries are exhausted, or InternalError for anything unexpected
    """
    max_retries = settings.BOOKING_CONTENTION_MAX_RETRIES
    delay = settings.BOOKING_CONTENTION_RETRY_BASE_DELAY
    start_time = time.perf_counter()
    result = 'success'

    try:
        for attempt in range(1, max_retries + 2):
            try:
                with anyio.fail_after(settings.BOOKING_TRANSACTION_TIMEOUT_SECONDS):
                    return await unit_of_work()
            except CustomBaseError:
                raise
            except Exception as e:
                error = translate_error(e)
                if isinstance(error, ContentionError) and attempt <= max_retries:
                    Logger.base.warning(
                        f'⏳ [{operation.upper()}-BOOKING] {attempt}/{max_retries}: '
                        f'{type(e).__name__}, retry in {delay:.3f}s'
                    )
                    metrics.record_contention_retry(operation=operation)
                    await anyio.sleep(delay)
                    delay *= 2
                    continue
                if isinstance(error, InternalError):
                    Logger.base.opt(exception=e).error(
                        f'💥 [{operation.upper()}-BOOKING] Unexpected failure: {type(e).__name__}'
                    )
                raise error from e
        raise ContentionError('Booking is busy, please retry shortly')  # pragma: no cover
    except CustomBaseError as e:
        result = e.kind
        raise
    finally:
        metrics.record_booking_transaction(
            operation=operation, result=result, duration=time.perf_counter() - start_time
        )
