from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from pushover_cli.errors import MessageFormatError


# ========== Models ==========
@dataclass
class Message:
    """One notification. Slots follow the order of ``schema.FIELDS``.

    Text fields left as ``None`` or ``""`` are not sent. ``time`` takes epoch
    seconds or a ``datetime``; ``0`` means unset. ``priority``, ``retry`` and
    ``expire`` are clamped in place when the message is encoded.
    """
    user: str = ""
    message: str = ""
    title: Optional[str] = None
    device: Optional[str] = None
    url: Optional[str] = None
    url_title: Optional[str] = None
    time: Union[int, datetime, None] = 0
    sound: Optional[str] = None
    priority: int = 0
    retry: int = 0
    expire: int = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Message":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise MessageFormatError(unknown[0], "unknown field")
        return cls(**{k: v for k, v in data.items() if v is not None})
