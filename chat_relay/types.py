"""
Chat Relay Type Definitions

This module provides TypedDict definitions for the Chat API resources the
relay handles and for the results the gateway returns.
"""

from typing import Any, Dict, TypedDict


# =============================================================================
# Chat API resources
# =============================================================================

class ChatUser(TypedDict, total=False):
    """A Chat user as embedded in a space."""
    name: str
    displayName: str
    email: str
    type: str


class SingleUserBotDm(TypedDict, total=False):
    """The user side of a one-to-one conversation with the bot."""
    user: ChatUser


class ChatSpace(TypedDict, total=False):
    """A Chat space as returned by spaces.list."""
    name: str
    displayName: str
    spaceType: str  # SPACE, GROUP_CHAT, DIRECT_MESSAGE
    singleUserBotDm: SingleUserBotDm


class ChatMessage(TypedDict, total=False):
    """A Chat message as returned by spaces.messages.create."""
    name: str
    text: str
    createTime: str
    sender: Dict[str, Any]
    space: Dict[str, Any]
    thread: Dict[str, Any]


class SendToUserResult(TypedDict):
    """Result of resolving a DM space and sending to it."""
    result: ChatMessage
    space: str
