from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator
from pydantic.alias_generators import to_camel

from .enums import EventType, MessageType, SourceType

UNKNOWN_TAG = "unknown"


class LineModel(BaseModel):
    """Base for every model read from (or written to) the LINE platform.

    The platform speaks camelCase JSON; Python code uses snake_case attribute
    names. Unmodelled keys are kept so nothing the platform sends is lost.
    Instances are frozen: handlers receive events as read-only values.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )


def type_discriminator(known: frozenset[str]) -> Callable[[Any], str]:
    """Build a discriminator that maps unrecognised `type` values to the unknown variant."""

    def _tag(value: Any) -> str:
        kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
        if isinstance(kind, Enum):
            kind = kind.value
        return kind if kind in known else UNKNOWN_TAG

    return _tag


class EventSource(LineModel):
    """Origin of an event.

    Attributes:
        type: user, group or room.
        user_id: Sending user. Always present for `user`, optional in groups/rooms.
        group_id: Group chat identifier when `type` is group.
        room_id: Room identifier when `type` is room.
    """

    type: Optional[SourceType] = None
    user_id: Optional[str] = None
    group_id: Optional[str] = None
    room_id: Optional[str] = None

    @property
    def conversation_id(self) -> Optional[str]:
        """Identifier to push to when answering the conversation this source belongs to."""
        return self.group_id or self.room_id or self.user_id


class DeliveryContext(LineModel):
    is_redelivery: bool = False


# --- Message contents -------------------------------------------------------


class TextMessageContent(LineModel):
    type: Literal["text"] = "text"
    id: Optional[str] = None
    text: str = ""
    quote_token: Optional[str] = None
    quoted_message_id: Optional[str] = None
    emojis: Optional[List[Dict[str, Any]]] = None
    mention: Optional[Dict[str, Any]] = None


class ImageMessageContent(LineModel):
    type: Literal["image"] = "image"
    id: Optional[str] = None
    quote_token: Optional[str] = None
    content_provider: Optional[Dict[str, Any]] = None
    image_set: Optional[Dict[str, Any]] = None


class VideoMessageContent(LineModel):
    type: Literal["video"] = "video"
    id: Optional[str] = None
    quote_token: Optional[str] = None
    duration: Optional[int] = None
    content_provider: Optional[Dict[str, Any]] = None


class AudioMessageContent(LineModel):
    type: Literal["audio"] = "audio"
    id: Optional[str] = None
    duration: Optional[int] = None
    content_provider: Optional[Dict[str, Any]] = None


class FileMessageContent(LineModel):
    type: Literal["file"] = "file"
    id: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None


class LocationMessageContent(LineModel):
    type: Literal["location"] = "location"
    id: Optional[str] = None
    title: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class StickerMessageContent(LineModel):
    type: Literal["sticker"] = "sticker"
    id: Optional[str] = None
    quote_token: Optional[str] = None
    package_id: Optional[str] = None
    sticker_id: Optional[str] = None
    sticker_resource_type: Optional[str] = None
    keywords: Optional[List[str]] = None
    text: Optional[str] = None


class UnknownMessageContent(LineModel):
    """Message content of a type this package does not model yet."""

    type: str
    id: Optional[str] = None


MessageContent = Annotated[
    Union[
        Annotated[TextMessageContent, Tag(MessageType.TEXT.value)],
        Annotated[ImageMessageContent, Tag(MessageType.IMAGE.value)],
        Annotated[VideoMessageContent, Tag(MessageType.VIDEO.value)],
        Annotated[AudioMessageContent, Tag(MessageType.AUDIO.value)],
        Annotated[FileMessageContent, Tag(MessageType.FILE.value)],
        Annotated[LocationMessageContent, Tag(MessageType.LOCATION.value)],
        Annotated[StickerMessageContent, Tag(MessageType.STICKER.value)],
        Annotated[UnknownMessageContent, Tag(UNKNOWN_TAG)],
    ],
    Discriminator(type_discriminator(frozenset(m.value for m in MessageType))),
]


# --- Events -----------------------------------------------------------------


class Postback(LineModel):
    data: str = ""
    params: Optional[Dict[str, Any]] = None


class Beacon(LineModel):
    hwid: Optional[str] = None
    type: Optional[str] = None
    dm: Optional[str] = None


class BaseEvent(LineModel):
    """Fields shared by all webhook events."""

    mode: str = "active"
    timestamp: Optional[int] = None
    source: Optional[EventSource] = None
    webhook_event_id: Optional[str] = None
    delivery_context: Optional[DeliveryContext] = None


class MessageEvent(BaseEvent):
    """A user sent a message. `message.type` selects the content shape.

    `message` is None when the platform omitted the content object; such
    events still reach wildcard and bare `message` handlers.
    """

    type: Literal["message"] = "message"
    reply_token: Optional[str] = None
    message: Optional[MessageContent] = None


class UnsendEvent(BaseEvent):
    type: Literal["unsend"] = "unsend"
    unsend: Dict[str, Any] = Field(default_factory=dict)


class FollowEvent(BaseEvent):
    type: Literal["follow"] = "follow"
    reply_token: Optional[str] = None
    follow: Optional[Dict[str, Any]] = None


class UnfollowEvent(BaseEvent):
    type: Literal["unfollow"] = "unfollow"


class JoinEvent(BaseEvent):
    type: Literal["join"] = "join"
    reply_token: Optional[str] = None


class LeaveEvent(BaseEvent):
    type: Literal["leave"] = "leave"


class MemberJoinedEvent(BaseEvent):
    type: Literal["memberJoined"] = "memberJoined"
    reply_token: Optional[str] = None
    joined: Dict[str, Any] = Field(default_factory=dict)


class MemberLeftEvent(BaseEvent):
    type: Literal["memberLeft"] = "memberLeft"
    left: Dict[str, Any] = Field(default_factory=dict)


class PostbackEvent(BaseEvent):
    type: Literal["postback"] = "postback"
    reply_token: Optional[str] = None
    postback: Optional[Postback] = None


class VideoPlayCompleteEvent(BaseEvent):
    type: Literal["videoPlayComplete"] = "videoPlayComplete"
    reply_token: Optional[str] = None
    video_play_complete: Dict[str, Any] = Field(default_factory=dict)


class BeaconEvent(BaseEvent):
    type: Literal["beacon"] = "beacon"
    reply_token: Optional[str] = None
    beacon: Optional[Beacon] = None


class AccountLinkEvent(BaseEvent):
    type: Literal["accountLink"] = "accountLink"
    reply_token: Optional[str] = None
    link: Dict[str, Any] = Field(default_factory=dict)


class ThingsEvent(BaseEvent):
    type: Literal["things"] = "things"
    reply_token: Optional[str] = None
    things: Dict[str, Any] = Field(default_factory=dict)


class UnknownEvent(BaseEvent):
    """Event of a type the platform added after this package was written.

    Only wildcard handlers and handlers registered for nothing else see these;
    the raw fields stay available as extra attributes.
    """

    type: str


Event = Annotated[
    Union[
        Annotated[MessageEvent, Tag(EventType.MESSAGE.value)],
        Annotated[UnsendEvent, Tag(EventType.UNSEND.value)],
        Annotated[FollowEvent, Tag(EventType.FOLLOW.value)],
        Annotated[UnfollowEvent, Tag(EventType.UNFOLLOW.value)],
        Annotated[JoinEvent, Tag(EventType.JOIN.value)],
        Annotated[LeaveEvent, Tag(EventType.LEAVE.value)],
        Annotated[MemberJoinedEvent, Tag(EventType.MEMBER_JOINED.value)],
        Annotated[MemberLeftEvent, Tag(EventType.MEMBER_LEFT.value)],
        Annotated[PostbackEvent, Tag(EventType.POSTBACK.value)],
        Annotated[VideoPlayCompleteEvent, Tag(EventType.VIDEO_PLAY_COMPLETE.value)],
        Annotated[BeaconEvent, Tag(EventType.BEACON.value)],
        Annotated[AccountLinkEvent, Tag(EventType.ACCOUNT_LINK.value)],
        Annotated[ThingsEvent, Tag(EventType.THINGS.value)],
        Annotated[UnknownEvent, Tag(UNKNOWN_TAG)],
    ],
    Discriminator(type_discriminator(frozenset(e.value for e in EventType))),
]


class WebhookPayload(LineModel):
    """Verified webhook request body.

    Attributes:
        destination: Bot user id of the channel the events were sent to.
        events: Events in the order the platform delivered them.

    Example:
        >>> WebhookPayload.model_validate({"destination": "U1"}).events
        []
    """

    destination: str = ""
    events: List[Event] = Field(default_factory=list)

    @field_validator("destination", mode="before")
    @classmethod
    def _null_destination(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("events", mode="before")
    @classmethod
    def _null_events(cls, v: Any) -> Any:
        return [] if v is None else v
