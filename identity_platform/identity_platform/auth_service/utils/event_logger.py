"""
Event logger utility for authentication events.
"""
from datetime import datetime, timezone
from typing import Optional
import sys
import logging
import os

logger = logging.getLogger(__name__)


ALLOWED_EVENT_TYPES = {
    "register_success",
    "register_failure",
    "login_success",
    "login_failure",
    "token_verified",
    "token_rejected",
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """
    Send logs to stdout and, when ``log_dir`` is usable, to auth_events.log.
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    # Continue without the file handler if the directory cannot be created
    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(log_dir, "auth_events.log")))
        except OSError as e:
            print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def mask_email(email: Optional[str]) -> Optional[str]:
    """Keep the first character and the domain: ``alice@x.com`` -> ``a***@x.com``."""
    if not email:
        return email
    local, sep, domain = email.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


def log_auth_event(
    event_type: str,
    user_id: Optional[str] = None,
    email: Optional[str] = None,
    kind: Optional[str] = None,
) -> None:
    """
    Write one audit line for an authentication event.

    Args:
        event_type: One of ALLOWED_EVENT_TYPES
        user_id: Identity of the user, when known
        email: Email the caller supplied; logged masked
        kind: Failure kind for *_failure / token_rejected events

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    level = logging.INFO if kind is None else logging.WARNING
    logger.log(
        level,
        "AUTH %s user_id=%s email=%s kind=%s timestamp=%s",
        event_type, user_id, mask_email(email), kind, datetime.now(timezone.utc).isoformat()
    )
