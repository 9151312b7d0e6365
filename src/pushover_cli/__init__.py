"""Client and command line tool for the Pushover messages API."""
from pushover_cli.client import ApiConfig, Client, HttpClient, get_client, initialize, reset, send
from pushover_cli.encoder import encode, validate, validate_and_encode
from pushover_cli.errors import (
    BlankRequiredFieldError,
    ConfigError,
    DeliveryRejectedError,
    InvalidTokenError,
    MessageFormatError,
    NotInitializedError,
    PushoverError,
    TransportError,
    TransportInitError,
)
from pushover_cli.message import Message
from pushover_cli.utils import DEFAULT_API_URL, SubmitResult

__all__ = [
    "ApiConfig",
    "BlankRequiredFieldError",
    "Client",
    "ConfigError",
    "DEFAULT_API_URL",
    "DeliveryRejectedError",
    "HttpClient",
    "InvalidTokenError",
    "Message",
    "MessageFormatError",
    "NotInitializedError",
    "PushoverError",
    "SubmitResult",
    "TransportError",
    "TransportInitError",
    "encode",
    "get_client",
    "initialize",
    "reset",
    "send",
    "validate",
    "validate_and_encode",
]
