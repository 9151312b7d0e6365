import json
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple
from urllib.parse import urlparse

import requests

from pushover_cli.encoder import EncodedForm, validate_and_encode
from pushover_cli.errors import (
    ConfigError,
    DeliveryRejectedError,
    InvalidTokenError,
    NotInitializedError,
    TransportError,
    TransportInitError,
)
from pushover_cli.message import Message
from pushover_cli.schema import TOKEN_LENGTH, printable_ascii_len
from pushover_cli.utils import DEFAULT_API_URL, DEFAULT_TIMEOUT, SubmitResult, mask_token

logger = logging.getLogger(__name__)

STATUS_DELIVERED = 1


# ========== Config ==========
@dataclass(frozen=True)
class ApiConfig:
    token: str
    url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def create(cls, token: str, url: Optional[str] = None, timeout: Optional[float] = None) -> "ApiConfig":
        if not isinstance(token, str):
            raise InvalidTokenError("token must be a string")
        length = printable_ascii_len(token)
        if length < 0:
            raise InvalidTokenError("token contains non-printable characters")
        if length != TOKEN_LENGTH:
            raise InvalidTokenError(f"expected {TOKEN_LENGTH} characters, got {length}")

        url = url or DEFAULT_API_URL
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise TransportInitError(f"Unusable API endpoint: {url!r}")
        if timeout is None:
            timeout = DEFAULT_TIMEOUT
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError(f"timeout must be a positive number of seconds, got {timeout!r}")
        return cls(token=token, url=url, timeout=timeout)


# ========== Transport ==========
class HttpClient:
    def __init__(self, url: str, timeout: float = DEFAULT_TIMEOUT):
        self.url = url
        self.timeout = timeout

    def post_form(self, fields: Sequence[Tuple[str, str]]) -> SubmitResult:
        """POST ``fields`` as multipart/form-data, keeping their order.

        Any HTTP response is returned, whatever its status code. Failures to
        build or deliver the request raise instead.
        """
        files = [(name, (None, value)) for name, value in fields]
        try:
            resp = requests.post(self.url, files=files, timeout=self.timeout)
        except (requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema,
                requests.exceptions.InvalidURL) as exc:
            raise TransportInitError(f"Cannot prepare request to {self.url}: {exc}") from exc
        except requests.exceptions.RequestException as exc:
            logger.warning("POST %s failed: %s", self.url, exc)
            raise TransportError(f"Request to {self.url} failed: {exc}") from exc

        logger.debug("POST %s -> %s", self.url, resp.status_code)
        return SubmitResult(ok=resp.ok, status_code=resp.status_code, text=resp.text)


def parse_status(text: str) -> Tuple[Optional[int], Dict[str, Any]]:
    """Pull the integer ``status`` out of a JSON response body."""
    try:
        body = json.loads(text)
    except (TypeError, ValueError):
        return None, {}
    if not isinstance(body, dict):
        return None, {}
    status = body.get("status")
    if isinstance(status, bool) or not isinstance(status, int):
        return None, body
    return status, body


# ========== Client handle ==========
class Client:
    def __init__(self, config: ApiConfig):
        self.config = config
        self.http = HttpClient(config.url, config.timeout)

    def __repr__(self):
        return f"Client(url={self.config.url!r}, token={mask_token(self.config.token)!r})"

    def encode(self, msg: Message) -> EncodedForm:
        return validate_and_encode(msg, self.config.token)

    def send(self, msg: Message) -> SubmitResult:
        form = self.encode(msg)
        result = self.http.post_form(form)

        status, body = parse_status(result.text)
        request_id = body.get("request")
        if status != STATUS_DELIVERED:
            errors = body.get("errors")
            if not isinstance(errors, list):
                errors = None
            logger.info("Delivery rejected: http=%s status=%s request=%s", result.status_code, status, request_id)
            raise DeliveryRejectedError(status, errors, request_id, result.status_code)

        result.request_id = request_id
        logger.info("Delivered message to %s (request=%s)", mask_token(msg.user), request_id)
        return result


# ========== Process-wide default ==========
# The handle is immutable, re-initializing swaps it under the lock so a
# concurrent send sees either the old or the new config.
_lock = threading.Lock()
_default_client: Optional[Client] = None


def initialize(token: str, url: Optional[str] = None, timeout: Optional[float] = None) -> Client:
    global _default_client
    client = Client(ApiConfig.create(token, url, timeout))
    with _lock:
        _default_client = client
    logger.debug("Initialized %r", client)
    return client


def get_client() -> Client:
    with _lock:
        client = _default_client
    if client is None:
        raise NotInitializedError()
    return client


def send(msg: Message) -> SubmitResult:
    return get_client().send(msg)


def reset() -> None:
    global _default_client
    with _lock:
        _default_client = None
