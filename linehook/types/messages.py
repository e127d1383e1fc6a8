from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Discriminator, Field, Tag, ValidationInfo, field_validator

from .enums import OutboundMessageType
from .events import LineModel, type_discriminator

MAX_TEXT_LENGTH = 5000
MAX_URL_LENGTH = 2000


def _require_https(v: str, field: str) -> str:
    if not isinstance(v, str) or not v:
        raise ValueError(f"{field} is required")
    if len(v) > MAX_URL_LENGTH:
        raise ValueError(f"{field} exceeds {MAX_URL_LENGTH} characters")
    if not v.startswith("https://"):
        raise ValueError(f"{field} must use https scheme")
    return v


class OutboundMessage(LineModel):
    """Base class for message objects sent through reply or push.

    Subclasses set the `type` discriminator and carry the payload fields the
    platform documents for that message type. `quick_reply` and `sender` are
    shared by every type.

    Example:
        >>> from linehook.types import TextMessage
        >>> TextMessage(text="Hello").to_payload()
        {'type': 'text', 'text': 'Hello'}
    """

    quick_reply: Optional[Dict[str, Any]] = None
    sender: Optional[Dict[str, Any]] = None

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the platform's camelCase JSON shape, dropping unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class TextMessage(OutboundMessage):
    """Plain text message.

    Fields:
        text: up to 5000 characters
        quote_token: quote a previously received message
        emojis: LINE emoji substitutions
    """

    type: Literal["text"] = "text"
    text: str
    quote_token: Optional[str] = None
    emojis: Optional[List[Dict[str, Any]]] = None

    @field_validator("text")
    @classmethod
    def _validate_text(cls, v: str) -> str:
        if not v:
            raise ValueError("text is required")
        if len(v) > MAX_TEXT_LENGTH:
            raise ValueError(f"text exceeds {MAX_TEXT_LENGTH} characters")
        return v


class ImageMessage(OutboundMessage):
    type: Literal["image"] = "image"
    original_content_url: str
    preview_image_url: str

    @field_validator("original_content_url", "preview_image_url")
    @classmethod
    def _validate_urls(cls, v: str, info: ValidationInfo) -> str:
        return _require_https(v, info.field_name)


class VideoMessage(OutboundMessage):
    type: Literal["video"] = "video"
    original_content_url: str
    preview_image_url: str
    tracking_id: Optional[str] = None

    @field_validator("original_content_url", "preview_image_url")
    @classmethod
    def _validate_urls(cls, v: str, info: ValidationInfo) -> str:
        return _require_https(v, info.field_name)


class AudioMessage(OutboundMessage):
    """Audio clip; `duration` is in milliseconds."""

    type: Literal["audio"] = "audio"
    original_content_url: str
    duration: int = Field(gt=0)

    @field_validator("original_content_url")
    @classmethod
    def _validate_url(cls, v: str) -> str:
        return _require_https(v, "original_content_url")


class LocationMessage(OutboundMessage):
    type: Literal["location"] = "location"
    title: str
    address: str
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class StickerMessage(OutboundMessage):
    type: Literal["sticker"] = "sticker"
    package_id: str
    sticker_id: str
    quote_token: Optional[str] = None


Message = Annotated[
    Union[
        Annotated[TextMessage, Tag(OutboundMessageType.TEXT.value)],
        Annotated[ImageMessage, Tag(OutboundMessageType.IMAGE.value)],
        Annotated[VideoMessage, Tag(OutboundMessageType.VIDEO.value)],
        Annotated[AudioMessage, Tag(OutboundMessageType.AUDIO.value)],
        Annotated[LocationMessage, Tag(OutboundMessageType.LOCATION.value)],
        Annotated[StickerMessage, Tag(OutboundMessageType.STICKER.value)],
    ],
    Discriminator(type_discriminator(frozenset(t.value for t in OutboundMessageType))),
]
