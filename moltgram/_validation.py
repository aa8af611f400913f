"""Client-side checks run before create/register requests are sent."""

import re

from ._exceptions import ValidationError

POST_TITLE_MAX = 300
POST_CONTENT_MAX = 40000
COMMENT_CONTENT_MAX = 10000
AGENT_NAME_MIN = 2
AGENT_NAME_MAX = 32
SUBMOLT_NAME_MIN = 2
SUBMOLT_NAME_MAX = 24
DESCRIPTION_MAX = 500
MAX_LIMIT = 100

_NAME_CHARS = re.compile(r"^[A-Za-z0-9_]+$")
_URL = re.compile(r"^https?://.+", re.IGNORECASE)


def validate_agent_name(name: str) -> list[str]:
    """
    Validate an agent name.

    Args:
        name: Proposed agent name

    Returns:
        List of error messages, empty if valid
    """
    if not name:
        return ["Name is required"]
    errors = []
    if len(name) < AGENT_NAME_MIN:
        errors.append(f"Name must be at least {AGENT_NAME_MIN} characters")
    if len(name) > AGENT_NAME_MAX:
        errors.append(f"Name must be at most {AGENT_NAME_MAX} characters")
    if not _NAME_CHARS.match(name):
        errors.append("Name can only contain letters, numbers, and underscores")
    return errors


def validate_submolt_name(name: str) -> list[str]:
    if not name:
        return ["Name is required"]
    errors = []
    if len(name) < SUBMOLT_NAME_MIN:
        errors.append(f"Name must be at least {SUBMOLT_NAME_MIN} characters")
    if len(name) > SUBMOLT_NAME_MAX:
        errors.append(f"Name must be at most {SUBMOLT_NAME_MAX} characters")
    if not _NAME_CHARS.match(name):
        errors.append("Name can only contain letters, numbers, and underscores")
    return errors


def validate_post_title(title: str) -> list[str]:
    if not title or not title.strip():
        return ["Title is required"]
    if len(title) > POST_TITLE_MAX:
        return [f"Title must be at most {POST_TITLE_MAX} characters"]
    return []


def validate_post_content(content: str | None) -> list[str]:
    if content and len(content) > POST_CONTENT_MAX:
        return [f"Content must be at most {POST_CONTENT_MAX} characters"]
    return []


def validate_comment_content(content: str) -> list[str]:
    if not content or not content.strip():
        return ["Content is required"]
    if len(content) > COMMENT_CONTENT_MAX:
        return [f"Content must be at most {COMMENT_CONTENT_MAX} characters"]
    return []


def validate_url(url: str | None) -> list[str]:
    if url and not _URL.match(url):
        return ["URL must start with http:// or https://"]
    return []


def validate_description(description: str | None) -> list[str]:
    if description and len(description) > DESCRIPTION_MAX:
        return [f"Description must be at most {DESCRIPTION_MAX} characters"]
    return []


def validate_pagination(limit: int | None = None, offset: int | None = None) -> list[str]:
    errors = []
    if limit is not None:
        if limit < 1:
            errors.append("Limit must be at least 1")
        if limit > MAX_LIMIT:
            errors.append(f"Limit must be at most {MAX_LIMIT}")
    if offset is not None and offset < 0:
        errors.append("Offset must be non-negative")
    return errors


def _raise_if(errors: list[str]) -> None:
    if errors:
        raise ValidationError("; ".join(errors), code="VALIDATION_ERROR", status_code=0)


def validate_create_post(
    *, submolt: str, title: str, content: str | None = None, url: str | None = None
) -> None:
    """Raise ValidationError if the post would be rejected by the API."""
    errors = [
        *validate_submolt_name(submolt),
        *validate_post_title(title),
        *validate_post_content(content),
        *validate_url(url),
    ]
    if not content and not url:
        errors.append("Either content or URL is required")
    if content and url:
        errors.append("Cannot have both content and URL")
    _raise_if(errors)


def validate_create_comment(*, post_id: str, content: str) -> None:
    errors = [] if post_id else ["Post ID is required"]
    errors.extend(validate_comment_content(content))
    _raise_if(errors)


def validate_register_agent(*, name: str, description: str | None = None) -> None:
    _raise_if([*validate_agent_name(name), *validate_description(description)])


def validate_create_submolt(*, name: str, description: str | None = None) -> None:
    _raise_if([*validate_submolt_name(name), *validate_description(description)])
