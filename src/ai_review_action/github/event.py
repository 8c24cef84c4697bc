"""
Webhook Event Payload

Loads the pull request event that triggered the workflow run.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError, model_validator

from ..errors import EventPayloadError


logger = logging.getLogger(__name__)

ACTION_OPENED = "opened"
ACTION_SYNCHRONIZE = "synchronize"


class WebhookEvent(BaseModel):
    """Fields of a pull_request event the reviewer relies on"""
    action: str
    owner: str
    repo: str
    number: int
    before: Optional[str] = None
    after: Optional[str] = None
    event_name: Optional[str] = None

    @model_validator(mode='after')
    def check_commit_range(self):
        if self.action == ACTION_SYNCHRONIZE and not (self.before and self.after):
            raise ValueError("synchronize events need 'before' and 'after' commits")
        return self

    @classmethod
    def from_payload(cls, payload: dict, event_name: Optional[str] = None) -> "WebhookEvent":
        """
        Build from a decoded webhook payload.

        Raises:
            EventPayloadError: If required fields are missing
        """
        try:
            repository = payload['repository']
            return cls(
                action=payload.get('action') or "",
                owner=repository['owner']['login'],
                repo=repository['name'],
                number=payload['number'],
                before=payload.get('before'),
                after=payload.get('after'),
                event_name=event_name,
            )
        except (KeyError, TypeError) as e:
            raise EventPayloadError(f"Event payload is missing {e}") from e
        except ValidationError as e:
            raise EventPayloadError(f"Invalid event payload: {e}") from e


def load_event(event_path: Optional[str], event_name: Optional[str] = None) -> WebhookEvent:
    """
    Read and validate the event payload file.

    Args:
        event_path: Path to the JSON payload (GITHUB_EVENT_PATH)
        event_name: Name of the triggering event, for logging

    Returns:
        Parsed WebhookEvent
    """
    if not event_path:
        raise EventPayloadError("GITHUB_EVENT_PATH is not set")

    try:
        payload = json.loads(Path(event_path).read_text(encoding='utf-8'))
    except OSError as e:
        raise EventPayloadError(f"Cannot read event payload {event_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise EventPayloadError(f"Event payload {event_path} is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise EventPayloadError(f"Event payload {event_path} is not a JSON object")

    event = WebhookEvent.from_payload(payload, event_name=event_name)
    logger.info(f"Loaded {event_name or 'pull_request'} event: action={event.action} "
                f"{event.owner}/{event.repo}#{event.number}")
    return event
