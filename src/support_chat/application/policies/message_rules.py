from __future__ import annotations

from support_chat.application.exceptions import ValidationError


def normalize_content(content: str | None, max_length: int | None = None) -> str | None:
    """Blank text counts as no text."""
    if content is None or not content.strip():
        return None
    if max_length is not None and len(content) > max_length:
        raise ValidationError(f"Message content exceeds {max_length} characters")
    return content


def assert_has_body(content: str | None, attachment_id: int | None) -> None:
    if content is None and attachment_id is None:
        raise ValidationError("Message needs content or an attachment")
