import logging
import time
import uuid
from contextlib import contextmanager
from typing import Generator, Optional

import ulid  # provided by the 'ulid-py' package
from django.core.cache import cache

logger = logging.getLogger(__name__)

MIN_CODE_LENGTH = 6
MAX_CODE_LENGTH = 26


def make_promo_code(length: int = 10, prefix: str = "") -> str:
    """Generate a short unique promo code.

    Uses ULID (time-ordered, 26 chars, Crockford base32) and keeps the
    random tail, since the leading characters only encode the timestamp and
    would be shared by codes generated in the same batch.

    Args:
        length: Length of the random part (between 6 and 26).
        prefix: Optional campaign prefix, upper-cased and prepended as is.

    Returns:
        An uppercase, URL-safe code.
    """
    length = max(MIN_CODE_LENGTH, min(length, MAX_CODE_LENGTH))
    return f"{prefix.strip().upper()}{ulid.new().str[-length:]}"


@contextmanager
def redis_lock(
    key: str,
    ttl: int = 5,
    spin: float = 0.02,
    max_wait: float = 2.0,
) -> Generator[None, None, None]:
    """A simple Redis spin-lock using django-redis low-level client.

    Falls back to a no-op lock when the cache backend is not Redis or Redis
    is unreachable, leaving the database row locks to serialise writers.
    """
    token = str(uuid.uuid4())
    deadline = time.time() + max_wait
    acquired = False

    try:
        client = cache.client.get_client(False)  # type: ignore[attr-defined]
    except AttributeError:
        logger.debug("redis lock disabled: cache backend has no redis client")
        client = None

    if client is None:
        yield
        return

    while time.time() < deadline:
        try:
            acquired = client.set(name=key, value=token, nx=True, ex=ttl)
        except Exception as exc:
            logger.warning("redis lock fell back to noop: %s", exc)
            client = None
            break
        if acquired:
            break
        time.sleep(spin)

    if client is None:
        yield
        return

    if not acquired:
        raise TimeoutError(f"lock timeout: {key}")

    try:
        yield
    finally:
        try:
            val: Optional[bytes] = client.get(key)
            if val and (val.decode() == token):
                client.delete(key)
        except Exception as exc:
            logger.warning("redis lock release failed key=%s: %s", key, exc)


__all__ = [
    "make_promo_code",
    "redis_lock",
]
