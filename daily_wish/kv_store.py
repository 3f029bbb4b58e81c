import logging
from typing import Any, Protocol

import httpx

from .settings import KVSettings

logger = logging.getLogger(__name__)


class KVStoreError(RuntimeError):
    """The key-value store could not complete a command."""


class KVStore(Protocol):
    name: str

    def get_int(self, key: str) -> int:
        """Counter value, 0 when the key is missing."""
        ...

    def incr(self, key: str) -> int:
        """Atomically increment and return the new value."""
        ...

    def sadd(self, key: str, member: str) -> bool:
        """Add to a set; True only if the member was newly added."""
        ...

    def sismember(self, key: str, member: str) -> bool:
        ...

    def srem(self, key: str, member: str) -> bool:
        """Remove from a set; True if the member was present."""
        ...

    def close(self) -> None:
        ...


class NullKVStore:
    """Stand-in used when no store is configured: reads zero, writes nothing."""

    name = "null"

    def get_int(self, key: str) -> int:
        return 0

    def incr(self, key: str) -> int:
        return 0

    def sadd(self, key: str, member: str) -> bool:
        return False

    def sismember(self, key: str, member: str) -> bool:
        return False

    def srem(self, key: str, member: str) -> bool:
        return False

    def close(self) -> None:
        pass


class RestKVStore:
    """
    Redis-over-REST client (the Upstash / Vercel KV wire format).

    Each command is POSTed as a JSON array, e.g. ``["INCR", "key"]``, and the
    reply is ``{"result": ...}`` or ``{"error": "..."}``.
    """

    name = "rest"

    def __init__(self, url: str, token: str, timeout: float = 5.0, client: httpx.Client | None = None):
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=url.rstrip("/"),
            timeout=httpx.Timeout(timeout),
            headers={
                "authorization": f"Bearer {token}",
                "user-agent": "daily-wish/1",
            },
        )

    def command(self, *args: str) -> Any:
        try:
            resp = self._client.post("/", json=list(args))
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPError as e:
            raise KVStoreError(f"{args[0]} failed: {e}") from e
        except ValueError as e:
            raise KVStoreError(f"{args[0]} returned a non-JSON reply") from e

        if not isinstance(body, dict):
            raise KVStoreError(f"{args[0]} returned an unexpected reply: {body!r}")
        if "error" in body:
            raise KVStoreError(f"{args[0]} failed: {body['error']}")
        return body.get("result")

    def int_command(self, *args: str) -> int:
        value = self.command(*args)
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise KVStoreError(f"{args[0]} {args[1]} returned a non-integer reply: {value!r}") from e

    def get_int(self, key: str) -> int:
        value = self.command("GET", key)
        if value is None:
            return 0
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise KVStoreError(f"GET {key} is not an integer: {value!r}") from e

    def incr(self, key: str) -> int:
        return self.int_command("INCR", key)

    def sadd(self, key: str, member: str) -> bool:
        return self.int_command("SADD", key, member) == 1

    def sismember(self, key: str, member: str) -> bool:
        return self.int_command("SISMEMBER", key, member) == 1

    def srem(self, key: str, member: str) -> bool:
        return self.int_command("SREM", key, member) == 1

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


def build_store(kv_settings: KVSettings) -> KVStore:
    if not kv_settings.configured:
        logger.warning("KV_REST_API_URL / KV_REST_API_TOKEN not set; votes will not be stored")
        return NullKVStore()
    logger.info("Using REST key-value store at %s", kv_settings.rest_api_url)
    return RestKVStore(kv_settings.rest_api_url, kv_settings.rest_api_token, timeout=kv_settings.timeout)
