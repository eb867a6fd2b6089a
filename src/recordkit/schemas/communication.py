"""Communication contracts — messages, conversations, channels, notifications."""

from __future__ import annotations

from typing import Literal

from recordkit.domain.record import RECORD, defaulted, extend, optional, required, stamped
from recordkit.domain.registry import contract_key, register_contract
from recordkit.domain.types import Timestamp, UrlStr, UuidStr, non_empty, text

DOMAIN = "communication"

NotificationType = Literal["info", "warning", "error"]

MESSAGE = extend(
    RECORD,
    "Message",
    {
        "sender_id": required(
            UuidStr, "The unique identifier (UUID) of the user who sent the message."
        ),
        "receiver_id": required(
            UuidStr, "The unique identifier (UUID) of the user who received the message."
        ),
        "content": required(text("Message content is required."), "The content of the message."),
        "sent_at": stamped("The date and time when the message was sent."),
        "read_at": optional(
            Timestamp, "The date and time when the message was read, if applicable."
        ),
        "conversation_id": optional(
            UuidStr, "The unique identifier (UUID) of the conversation this message belongs to."
        ),
    },
    doc="A communication sent from one user to another.",
)

CONVERSATION = extend(
    RECORD,
    "Conversation",
    {
        "participants": required(
            non_empty(UuidStr, min_items=2),
            "User UUIDs of the participants in the conversation.",
        ),
        "last_message_at": optional(
            Timestamp, "The date and time when the last message in the conversation was sent."
        ),
        "messages": optional(list[UuidStr], "Message UUIDs associated with this conversation."),
    },
    doc="A thread of messages between multiple users.",
)

NOTIFICATION = extend(
    RECORD,
    "Notification",
    {
        "user_id": required(UuidStr, "The UUID of the user to whom the notification was sent."),
        "title": required(
            text("Notification title is required."), "The title of the notification."
        ),
        "content": optional(str, "The content or body of the notification."),
        "type": defaulted(NotificationType, "info", "The type of the notification."),
        "sent_at": stamped("The date and time when the notification was sent."),
        "read_at": optional(Timestamp, "The date and time when the notification was read."),
        "action_url": optional(UrlStr, "URL for a call to action or further information."),
    },
    doc="An alert or message sent to a user.",
)

CHANNEL = extend(
    RECORD,
    "Channel",
    {
        "name": required(
            text("Channel name is required."), "The name of the communication channel."
        ),
        "description": optional(str, "A short description of the channel's purpose or topic."),
        "participants": optional(list[UuidStr], "User UUIDs participating in the channel."),
        "is_private": defaulted(
            bool, False, "Whether the channel is only accessible by invited participants."
        ),
        "messages": optional(list[UuidStr], "Message UUIDs associated with the channel."),
    },
    doc="A group or topic-based communication space.",
)

REACTION = extend(
    RECORD,
    "Reaction",
    {
        "message_id": required(
            UuidStr, "The UUID of the message this reaction is associated with."
        ),
        "user_id": required(UuidStr, "The UUID of the user who reacted."),
        "reaction_type": required(text(), "The type of reaction (emoji, like, heart, ...)."),
        "created_at": stamped("The date and time when the reaction was made."),
    },
    doc="A user's reaction to a message.",
)

THREAD = extend(
    RECORD,
    "Thread",
    {
        "parent_message_id": required(
            UuidStr, "The UUID of the parent message that started this thread."
        ),
        "messages": required(list[UuidStr], "Message UUIDs that are part of this thread."),
    },
    doc="A nested discussion within a message.",
)

MENTION = extend(
    RECORD,
    "Mention",
    {
        "message_id": required(UuidStr, "The UUID of the message where the user was mentioned."),
        "mentioned_user_id": required(UuidStr, "The UUID of the user who was mentioned."),
        "mentioned_by_user_id": required(
            UuidStr, "The UUID of the user who mentioned the other user."
        ),
    },
    doc="A user mentioned in a message.",
)

TYPING_INDICATOR = extend(
    RECORD,
    "TypingIndicator",
    {
        "conversation_id": optional(
            UuidStr, "The UUID of the conversation where the user is typing."
        ),
        "channel_id": optional(UuidStr, "The UUID of the channel where the user is typing."),
        "user_id": required(UuidStr, "The UUID of the user who is currently typing."),
        "started_at": stamped("The date and time when the typing indicator started."),
        "ended_at": optional(Timestamp, "The date and time when the typing indicator ended."),
    },
    doc="A user typing in a conversation or channel.",
)

CONTRACTS = (
    MESSAGE,
    CONVERSATION,
    NOTIFICATION,
    CHANNEL,
    REACTION,
    THREAD,
    MENTION,
    TYPING_INDICATOR,
)

for _contract in CONTRACTS:
    register_contract(contract_key(DOMAIN, _contract), _contract)
