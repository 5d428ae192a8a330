# museum/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, wait_none, retry_if_exception_type

from museum.domain.errors import ConcurrencyConflict, OrderNumberCollision
from museum.utils.settings import BOOKING_CONFLICT_ATTEMPTS, ORDER_NUMBER_ATTEMPTS


def conflict_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(BOOKING_CONFLICT_ATTEMPTS),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=0.5),
        retry=retry_if_exception_type(ConcurrencyConflict),
    )


def order_number_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(ORDER_NUMBER_ATTEMPTS),
        wait=wait_none(),
        retry=retry_if_exception_type(OrderNumberCollision),
    )
