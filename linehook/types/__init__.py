"""Core types for the LINE webhook package.

This package centralizes enums, inbound event models, outbound message
models, protocols and result/API schemas so modules import them from one
place rather than from submodules.

Usage:
    from linehook.types import MessageEvent, TextMessage, EventType
"""

from .enums import WILDCARD, EventType, MessageType, OutboundMessageType, SourceType
from .events import (
    AccountLinkEvent,
    AudioMessageContent,
    BaseEvent,
    Beacon,
    BeaconEvent,
    DeliveryContext,
    Event,
    EventSource,
    FileMessageContent,
    FollowEvent,
    ImageMessageContent,
    JoinEvent,
    LeaveEvent,
    LineModel,
    LocationMessageContent,
    MemberJoinedEvent,
    MemberLeftEvent,
    MessageContent,
    MessageEvent,
    Postback,
    PostbackEvent,
    StickerMessageContent,
    TextMessageContent,
    ThingsEvent,
    UnfollowEvent,
    UnknownEvent,
    UnknownMessageContent,
    UnsendEvent,
    VideoMessageContent,
    VideoPlayCompleteEvent,
    WebhookPayload,
)
from .messages import (
    AudioMessage,
    ImageMessage,
    LocationMessage,
    Message,
    OutboundMessage,
    StickerMessage,
    TextMessage,
    VideoMessage,
)
from .protocols import LoggerProtocol, MessagingTransport
from .results import SendResult, SentMessage
from .api import PushMessageRequest, SendMessageResponse

__all__ = [
    "WILDCARD",
    "EventType",
    "MessageType",
    "OutboundMessageType",
    "SourceType",
    "LineModel",
    "BaseEvent",
    "Event",
    "EventSource",
    "DeliveryContext",
    "MessageEvent",
    "UnsendEvent",
    "FollowEvent",
    "UnfollowEvent",
    "JoinEvent",
    "LeaveEvent",
    "MemberJoinedEvent",
    "MemberLeftEvent",
    "PostbackEvent",
    "Postback",
    "VideoPlayCompleteEvent",
    "BeaconEvent",
    "Beacon",
    "AccountLinkEvent",
    "ThingsEvent",
    "UnknownEvent",
    "MessageContent",
    "TextMessageContent",
    "ImageMessageContent",
    "VideoMessageContent",
    "AudioMessageContent",
    "FileMessageContent",
    "LocationMessageContent",
    "StickerMessageContent",
    "UnknownMessageContent",
    "WebhookPayload",
    "OutboundMessage",
    "Message",
    "TextMessage",
    "ImageMessage",
    "VideoMessage",
    "AudioMessage",
    "LocationMessage",
    "StickerMessage",
    "MessagingTransport",
    "LoggerProtocol",
    "SendResult",
    "SentMessage",
    "PushMessageRequest",
    "SendMessageResponse",
]
