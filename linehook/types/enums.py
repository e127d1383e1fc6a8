from __future__ import annotations

from enum import Enum


class EventType(str, Enum):
    """Webhook event types delivered by the LINE platform.

    The value is the exact `type` discriminator found in the webhook body and
    doubles as the bare-type handler selector.

    Example:
        >>> from linehook.types import EventType
        >>> EventType("follow") is EventType.FOLLOW
        True
    """

    MESSAGE = "message"
    UNSEND = "unsend"
    FOLLOW = "follow"
    UNFOLLOW = "unfollow"
    JOIN = "join"
    LEAVE = "leave"
    MEMBER_JOINED = "memberJoined"
    MEMBER_LEFT = "memberLeft"
    POSTBACK = "postback"
    VIDEO_PLAY_COMPLETE = "videoPlayComplete"
    BEACON = "beacon"
    ACCOUNT_LINK = "accountLink"
    THINGS = "things"


class MessageType(str, Enum):
    """Content types of an inbound `message` event.

    Used to build the composite `message:<subtype>` selector.
    """

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    FILE = "file"
    LOCATION = "location"
    STICKER = "sticker"


class SourceType(str, Enum):
    """Where an event originated: a 1:1 chat, a group chat or a multi-person room."""

    USER = "user"
    GROUP = "group"
    ROOM = "room"


class OutboundMessageType(str, Enum):
    """Message objects accepted by the reply and push endpoints."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    LOCATION = "location"
    STICKER = "sticker"


WILDCARD = "*"
