"""
Response envelope decoding.

The backend reports application errors with a `msg` field, often with
HTTP 200. Bodies are decoded once into Success or Failure.
"""

import json
from dataclasses import dataclass
from typing import Any

import httpx

from .errors import MalformedResponseError


@dataclass(frozen=True)
class Success:
    """A parsed body without a `msg` field."""

    payload: Any


@dataclass(frozen=True)
class Failure:
    """A parsed body that carries a `msg` field."""

    message: str
    payload: dict[str, Any]


def decode_response(response: httpx.Response) -> Success | Failure:
    """
    Decode a backend response into an envelope.

    Any object with a `msg` key is a Failure, whatever else it contains
    and whatever the HTTP status.

    Raises:
        MalformedResponseError: If the body is not valid JSON
    """
    text = response.text
    try:
        data = json.loads(text)
    except ValueError as e:
        raise MalformedResponseError(
            "Invalid response body.",
            raw_text=text,
            status_code=response.status_code,
        ) from e

    if isinstance(data, dict) and "msg" in data:
        return Failure(message=str(data["msg"]), payload=data)

    return Success(payload=data)
