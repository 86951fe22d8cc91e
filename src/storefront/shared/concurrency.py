"""Retrying commands that lost a write race.

A session owns at most one cart (unique ``session_id``) and a cart at most one
line per catalogue reference (derived line id), so two requests racing to
create the same row collide. Protean reports the collision in one of three
ways: a duplicate caught when the aggregate is added, a stale aggregate
version, or the database constraint failing when the unit of work commits.
The loser is simply processed again: on the second pass the row exists and
the command turns into an update.
"""

import structlog
from protean.exceptions import ExpectedVersionError, TransactionError, ValidationError
from protean.utils.globals import current_domain

from storefront.shared.errors import ConflictError

logger = structlog.get_logger(__name__)

DUPLICATE_MARKER = "is already present"


def _is_duplicate(exc) -> bool:
    messages = getattr(exc, "messages", None) or {}
    if not isinstance(messages, dict):
        return False
    return any(DUPLICATE_MARKER in str(message) for errors in messages.values() for message in errors)


def _is_constraint_failure(exc) -> bool:
    extra_info = getattr(exc, "extra_info", None) or {}
    return extra_info.get("original_exception") == "IntegrityError"


def is_write_conflict(exc) -> bool:
    """True when ``exc`` means another request wrote the same row first."""
    if isinstance(exc, ExpectedVersionError):
        return True
    if isinstance(exc, TransactionError):
        return _is_constraint_failure(exc)
    if isinstance(exc, ValidationError):
        return _is_duplicate(exc)
    return False


def process_with_retry(command, attempts=3):
    """Process ``command`` synchronously, retrying on write conflicts."""
    for attempt in range(1, attempts + 1):
        try:
            return current_domain.process(command, asynchronous=False)
        except (ExpectedVersionError, TransactionError, ValidationError) as exc:
            if not is_write_conflict(exc):
                raise
            logger.warning(
                "Write conflict while processing command",
                command=command.__class__.__name__,
                attempt=attempt,
                error=str(exc),
            )

    raise ConflictError(f"{command.__class__.__name__} kept conflicting with concurrent updates; retry the request")
