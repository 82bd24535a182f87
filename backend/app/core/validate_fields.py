"""Field Validation — pure checks shared by task, folder and orchestrator logic.

Invariants:
    - Every function is PURE: returns the parsed value or raises ValidationError
    - Identifier format is checked before any storage lookup
    - Status must be a TaskStatus member; dueDate must be a calendar date
    - Titles and folder names are non-empty after stripping; no length cap

Design Decisions:
    - Raise instead of returning error dicts: these run inside request handlers,
      the global handler turns ValidationError into a 400 envelope
    - Naive datetimes are read as UTC so stored deadlines compare consistently
"""

from datetime import date, datetime, timezone
from uuid import UUID

from app.core.domain_types import TaskStatus
from app.core.errors import ValidationError


def parse_entity_id(raw: object, field: str = "id") -> UUID:
    """Parse a task/folder identifier. Malformed input never reaches storage."""
    if isinstance(raw, UUID):
        return raw
    if raw is None or not str(raw).strip():
        raise ValidationError(f"Missing {field} parameter.", field)
    try:
        return UUID(str(raw).strip())
    except ValueError:
        raise ValidationError(f"Invalid {field} format.", field)


def validate_title(raw: object, field: str = "title") -> str:
    """Require non-empty text. Returns the stripped value."""
    if raw is None:
        raise ValidationError(f"{field.capitalize()} is required.", field)
    value = str(raw).strip()
    if not value:
        raise ValidationError(f"{field.capitalize()} cannot be empty.", field)
    return value


def parse_status(raw: object) -> TaskStatus | None:
    """None when absent; otherwise must be an enumerated status."""
    if raw is None:
        return None
    if isinstance(raw, TaskStatus):
        return raw
    try:
        return TaskStatus(str(raw))
    except ValueError:
        allowed = ", ".join(s.value for s in TaskStatus)
        raise ValidationError(
            f"Invalid status value. Allowed: {allowed}.", "status",
        )


def parse_due_date(raw: object) -> datetime | None:
    """None when absent; accepts ISO 8601 dates and datetimes."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, date):
        parsed = datetime(raw.year, raw.month, raw.day)
    else:
        try:
            parsed = datetime.fromisoformat(str(raw).strip())
        except ValueError:
            raise ValidationError("Invalid date format.", "dueDate")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def build_task_patch(
    title: object = None, status: object = None, due_date: object = None,
) -> dict:
    """Collect only the supplied task fields. Empty patch is rejected."""
    patch: dict = {}
    if title is not None:
        patch["title"] = validate_title(title)
    parsed_status = parse_status(status)
    if parsed_status is not None:
        patch["status"] = parsed_status.value
    parsed_due = parse_due_date(due_date)
    if parsed_due is not None:
        patch["due_date"] = parsed_due
    if not patch:
        raise ValidationError(
            "Provide at least title or status to update.", "body",
        )
    return patch
