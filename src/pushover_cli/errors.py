from typing import List, Optional


class PushoverError(Exception):
    """Base error for everything this package raises."""


class ConfigError(PushoverError):
    """Raised when configuration is missing, unreadable or out of range."""


class NotInitializedError(PushoverError):
    def __init__(self):
        super().__init__("Library not initialized, call initialize(token) first.")


class InvalidTokenError(PushoverError):
    def __init__(self, reason: str):
        super().__init__(f"Invalid API token: {reason}")
        self.reason = reason


# ========== Validation ==========
class FieldError(PushoverError):
    """A validation failure tied to one message field."""

    def __init__(self, field: str, detail: str):
        super().__init__(f"{field}: {detail}")
        self.field = field
        self.detail = detail


class BlankRequiredFieldError(FieldError):
    def __init__(self, field: str):
        super().__init__(field, "required field is blank")


class MessageFormatError(FieldError):
    pass


# ========== Transport ==========
class TransportInitError(PushoverError):
    """The request could not be prepared (bad endpoint, unusable URL)."""


class TransportError(PushoverError):
    """The request was prepared but no response came back."""


class DeliveryRejectedError(PushoverError):
    """The server answered, but did not confirm delivery."""

    def __init__(
            self,
            status: Optional[int],
            errors: Optional[List[str]] = None,
            request_id: Optional[str] = None,
            http_status: Optional[int] = None,
    ):
        self.status = status
        self.errors = [str(err) for err in errors or []]
        self.request_id = request_id
        self.http_status = http_status
        detail = "; ".join(self.errors) if self.errors else f"status={status}"
        super().__init__(f"Delivery rejected: {detail}")
