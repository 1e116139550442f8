"""
Response envelope handling.

Every Tumblr response is wrapped as ``{"meta": {...}, "response": ...}``.
``unwrap`` checks the HTTP status and ``meta.status``, raises ``ApiError``
for failures and returns the ``response`` member; ``decode`` additionally
validates it against a pydantic model or type.
"""

import json
import logging
from typing import Any, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from .constants import is_success_status
from .exceptions import ApiError, ApiErrorDetail, DecodingError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_json(body: Union[bytes, str]) -> Any:
    """Parse a response body; raises ``ValueError`` on malformed JSON."""
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return json.loads(body)


def _error_details(payload: Any) -> List[ApiErrorDetail]:
    if not isinstance(payload, dict):
        return []

    errors = payload.get("errors")
    response = payload.get("response")
    if errors is None and isinstance(response, dict):
        errors = response.get("errors")

    if not isinstance(errors, list):
        return []

    details = []
    for item in errors:
        if not isinstance(item, dict):
            continue
        try:
            details.append(ApiErrorDetail.model_validate(item))
        except ValidationError:
            details.append(ApiErrorDetail(title=str(item.get("title") or ""), detail=None, code=None))
    return details


def _meta(payload: Any) -> dict:
    if isinstance(payload, dict) and isinstance(payload.get("meta"), dict):
        return payload["meta"]
    return {}


def unwrap(
    status: int,
    body: Union[bytes, str],
    url: Optional[str] = None,
    reason: Optional[str] = None,
) -> Any:
    """
    Validate an envelope and return its ``response`` member.

    Args:
        status: HTTP status code
        body: Raw response body
        url: Request URL, for error reporting
        reason: HTTP reason phrase, used when the body is not JSON

    Raises:
        ApiError: If the HTTP status or ``meta.status`` is outside 2xx
        DecodingError: If a successful response is not a JSON envelope
    """
    try:
        payload = parse_json(body)
    except (ValueError, UnicodeDecodeError) as e:
        if not is_success_status(status):
            raise ApiError(reason or f"HTTP {status}", status=status, url=url)
        raise DecodingError("Response body is not valid JSON", details=str(e))

    meta = _meta(payload)
    meta_status = meta.get("status", status)
    if not isinstance(meta_status, int) or isinstance(meta_status, bool):
        meta_status = status

    if not is_success_status(status) or not is_success_status(meta_status):
        error_status = status if not is_success_status(status) else meta_status
        message = meta.get("msg") or reason or f"HTTP {error_status}"
        error = ApiError(str(message), status=error_status, errors=_error_details(payload), url=url)
        logger.warning(f"API error: {error}")
        raise error

    if not isinstance(payload, dict) or "response" not in payload:
        raise DecodingError("Envelope has no response member", details=url)

    return payload["response"]


def decode(payload: Any, model: Union[Type[T], Any], member: Optional[str] = None) -> T:
    """
    Validate ``payload`` (or ``payload[member]``) against a model or type.

    Raises:
        DecodingError: If the payload does not fit the model
    """
    if member is not None:
        if not isinstance(payload, dict) or member not in payload:
            raise DecodingError("Response member missing", details=member)
        payload = payload[member]

    try:
        if isinstance(model, type) and issubclass(model, BaseModel):
            return model.model_validate(payload)
        return TypeAdapter(model).validate_python(payload)
    except ValidationError as e:
        raise DecodingError("Response does not match the expected shape", details=str(e))
