import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from sentry_sender.errors import EncodingError


def encode_event(event: Any) -> str:
    """
    Serialize an event into the JSON request body.

    Args:
        event: An Event model or a plain mapping.

    Returns:
        str: The JSON document.

    Raises:
        EncodingError: If the event is of another type or holds values that
            cannot be represented in JSON.
    """
    try:
        if isinstance(event, BaseModel):
            return event.model_dump_json(exclude_none=True)

        if isinstance(event, Mapping):
            return json.dumps(dict(event))
    except (TypeError, ValueError) as e:
        raise EncodingError(reason=repr(e)) from e

    raise EncodingError(reason=f"unsupported event type {type(event).__name__}")
