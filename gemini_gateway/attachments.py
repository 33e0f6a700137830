"""
Attachment Resolver

Turns a caller-supplied attachment into content parts appended after the
prompt. Two kinds of attachment exist:

  - PlainText:   a raw string, sent as one text part.
  - DocumentRef: a file on disk plus optional text. Supported documents
                 are sent inline as binary, followed by a short
                 description; unreadable files degrade to a text notice.

Resolution never raises. A malformed attachment yields no parts, and a
failed file read yields a fallback text part.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from gemini_gateway.errors import AttachmentReadError
from gemini_gateway.logging import get_logger
from gemini_gateway.parts import ContentPart, InlineBinaryPart, TextPart

logger = get_logger("attachments")

# Extension (lowercase) → MIME type of documents sent inline.
DOCUMENT_MIME_TYPES: dict[str, str] = {
    ".pdf": "application/pdf",
}

DEFAULT_DESCRIPTION = "the attached document"
DEFAULT_PLACEHOLDER = "content attachment"
PRESENTER_TEXT = "You are presenting this document."
AUDIENCE_TEXT = "Someone else is presenting this document."
FAILED_ATTACH_NOTICE = "[Failed to attach PDF. Using description instead]: "


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class DocumentRef:
    filepath: Optional[str] = None
    description: Optional[str] = None
    is_presenter: bool = False
    text_prompt: Optional[str] = None

    @property
    def mime_type(self) -> Optional[str]:
        """MIME type if filepath names a supported document, else None."""
        if not self.filepath:
            return None
        return DOCUMENT_MIME_TYPES.get(Path(self.filepath).suffix.lower())


Attachment = Union[PlainText, DocumentRef]


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _as_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _as_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


def coerce_attachment(value: Any) -> Optional[Attachment]:
    """Normalize str / mapping / variant input into an Attachment.

    Mappings may use either camelCase (filepath, textPrompt, isPresenter)
    or snake_case keys. Anything unrecognized becomes None.
    """
    if value is None:
        return None
    if isinstance(value, (PlainText, DocumentRef)):
        return value
    if isinstance(value, str):
        return PlainText(value)
    if isinstance(value, Mapping):
        return DocumentRef(
            filepath=_as_text(_pick(value, "filepath", "file_path", "path")),
            description=_as_text(_pick(value, "description")),
            is_presenter=_as_flag(_pick(value, "isPresenter", "is_presenter")),
            text_prompt=_as_text(_pick(value, "textPrompt", "text_prompt")),
        )
    logger.debug("Ignoring unsupported attachment of type %s", type(value).__name__)
    return None


def read_document(filepath: str) -> bytes:
    """Read a whole file as bytes. The handle is closed on every path."""
    try:
        return Path(filepath).read_bytes()
    except FileNotFoundError as e:
        raise AttachmentReadError(filepath, "file not found") from e
    except (OSError, ValueError) as e:
        raise AttachmentReadError(filepath, str(e)) from e


def describe_document(ref: DocumentRef) -> str:
    role = PRESENTER_TEXT if ref.is_presenter else AUDIENCE_TEXT
    return f"This is {ref.description or DEFAULT_DESCRIPTION}. {role}"


def failed_attachment_text(ref: DocumentRef) -> str:
    fallback = ref.text_prompt or ref.description or DEFAULT_PLACEHOLDER
    return f"{FAILED_ATTACH_NOTICE}{fallback}"


def _resolve_document(ref: DocumentRef, mime_type: str) -> list[ContentPart]:
    logger.info(
        "Attaching document: %s", ref.filepath,
        extra={"filepath": ref.filepath, "mime_type": mime_type},
    )
    try:
        data = read_document(ref.filepath)
    except AttachmentReadError as e:
        logger.warning(
            "Attachment unavailable, using text fallback: %s", e,
            extra={"filepath": ref.filepath, "error": e.reason},
        )
        return [TextPart(failed_attachment_text(ref))]

    return [
        InlineBinaryPart(mime_type=mime_type, data=data),
        TextPart(describe_document(ref)),
    ]


def resolve_attachment(value: Any) -> list[ContentPart]:
    """Resolve an attachment into the parts that follow the prompt."""
    attachment = coerce_attachment(value)

    if attachment is None:
        return []

    if isinstance(attachment, PlainText):
        return [TextPart(attachment.text)]

    mime_type = attachment.mime_type
    if mime_type is not None:
        return _resolve_document(attachment, mime_type)

    # Unsupported or missing file path: only the text prompt survives.
    if attachment.text_prompt:
        return [TextPart(attachment.text_prompt)]
    return []
