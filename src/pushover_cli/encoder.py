"""
Validation and form encoding for outgoing messages.

The checks run in a fixed order and the first failure wins:

1. every required field must be non-blank (``BlankRequiredFieldError``);
2. every field is type checked and length-ranged in table order
   (``MessageFormatError``);
3. bounded fields are clamped in place, which never fails;
4. fields whose dependency does not hold are left out of the form;
5. the remaining non-empty fields are rendered to text in table order.
"""
import logging
from datetime import datetime
from typing import Any, List, Sequence, Tuple

from pushover_cli.errors import BlankRequiredFieldError, MessageFormatError
from pushover_cli.schema import FIELDS, Bounded, FieldKind, FieldSchema, LengthRange

logger = logging.getLogger(__name__)

EncodedForm = List[Tuple[str, str]]


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _check_type(field: FieldSchema, value: Any) -> None:
    if field.kind is FieldKind.TEXT:
        if value is not None and not isinstance(value, str):
            raise MessageFormatError(field.name, f"expected text, got {type(value).__name__}")
        return
    if value is None:
        return
    if isinstance(value, bool):
        raise MessageFormatError(field.name, "expected an integer, got bool")
    if field.kind is FieldKind.TIMESTAMP and isinstance(value, datetime):
        return
    if not isinstance(value, int):
        raise MessageFormatError(field.name, f"expected an integer, got {type(value).__name__}")


def validate(msg: Any, schema: Sequence[FieldSchema] = FIELDS) -> None:
    """Check ``msg`` against ``schema``, clamping bounded fields in place."""
    for field in schema:
        if field.required and _is_blank(field.get(msg)):
            raise BlankRequiredFieldError(field.name)

    for field in schema:
        value = field.get(msg)
        _check_type(field, value)
        constraint = field.constraint
        if not isinstance(constraint, LengthRange):
            continue
        if _is_blank(value) and not field.required:
            continue
        if not constraint.accepts(value):
            raise MessageFormatError(
                field.name,
                f"must be {constraint.min_len}-{constraint.max_len} printable ASCII characters",
            )

    for field in schema:
        constraint = field.constraint
        if isinstance(constraint, Bounded):
            value = field.get(msg) or 0
            clamped = constraint.clamp(value)
            if clamped != value:
                logger.debug("Clamped %s from %s to %s", field.name, value, clamped)
            field.set(msg, clamped)


def render(kind: FieldKind, value: Any) -> str:
    if kind is FieldKind.TEXT:
        return value
    if isinstance(value, datetime):
        value = int(value.timestamp())
    return str(int(value))


def encode(msg: Any, schema: Sequence[FieldSchema] = FIELDS) -> EncodedForm:
    """Render an already validated message to ``(name, text)`` pairs."""
    form: EncodedForm = []
    for field in schema:
        if not field.dependency.holds(msg):
            continue
        value = field.get(msg)
        if _is_blank(value):
            continue
        form.append((field.name, render(field.kind, value)))
    return form


def validate_and_encode(msg: Any, token: str, schema: Sequence[FieldSchema] = FIELDS) -> EncodedForm:
    validate(msg, schema)
    form = [("token", token)] + encode(msg, schema)
    logger.debug("Encoded form fields: %s", ", ".join(name for name, _ in form))
    return form
