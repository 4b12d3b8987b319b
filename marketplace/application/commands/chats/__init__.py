"""Chat commands."""

from .resolve_chat import ResolveChatCommand, ResolveChatHandler, ResolvedChat
from .send_chat_message import (
    NEW_MESSAGE_EVENT,
    SendChatMessageCommand,
    SendChatMessageHandler,
)

__all__ = [
    "NEW_MESSAGE_EVENT",
    "ResolveChatCommand",
    "ResolveChatHandler",
    "ResolvedChat",
    "SendChatMessageCommand",
    "SendChatMessageHandler",
]
