"""Classification of completed HTTP exchanges into bodies or errors."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from tines_sdk.errors import ErrorMessage, ErrorType, TinesError

__all__ = ["classify_response", "extract_error_messages"]


class _ErrorEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    errors: list[ErrorMessage] = []


_MESSAGE_LIST = TypeAdapter(list[ErrorMessage])


def _as_bytes(body: bytes | str | None) -> bytes:
    if body is None:
        return b""
    if isinstance(body, str):
        return body.encode("utf-8")
    return body


def extract_error_messages(body: bytes | str | None) -> list[ErrorMessage]:
    """Pull error messages out of an error response body.

    Endpoints disagree on the error shape, so three interpretations are
    tried in order: an object with an ``errors`` list, a bare list of
    messages, and finally the raw text wrapped in a single message. This
    function never raises.
    """

    raw = _as_bytes(body)

    try:
        envelope = _ErrorEnvelope.model_validate_json(raw)
    except ValidationError:
        pass
    else:
        if envelope.errors:
            return envelope.errors

    try:
        return _MESSAGE_LIST.validate_json(raw)
    except ValidationError:
        pass

    if raw:
        return [ErrorMessage(message="message", details=raw.decode("utf-8", errors="replace"))]
    return []


def classify_response(status_code: int, body: bytes | str | None) -> bytes:
    """Return ``body`` for successful responses, raise :class:`TinesError` otherwise.

    Status codes in ``[200, 400)`` are successes. ``4xx`` responses become
    ``request`` errors and ``5xx`` responses become ``server`` errors; both
    carry the status code and the messages extracted from the body.
    """

    raw = _as_bytes(body)
    if status_code >= 500:
        raise TinesError(ErrorType.SERVER, extract_error_messages(raw), status_code=status_code)
    if status_code >= 400:
        raise TinesError(ErrorType.REQUEST, extract_error_messages(raw), status_code=status_code)
    return raw
