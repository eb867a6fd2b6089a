"""File-management contracts — files, folders, sharing, auditing, quotas."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from recordkit.domain.record import (
    RECORD,
    FieldSpec,
    SchemaModel,
    defaulted,
    extend,
    optional,
    required,
    stamped,
)
from recordkit.domain.registry import contract_key, register_contract
from recordkit.domain.types import Timestamp, UuidStr, text, url

DOMAIN = "documents"

AccessType = Literal["public", "private", "restricted"]
FileAction = Literal["created", "modified", "viewed", "deleted", "restored", "downloaded"]
ActivityAction = Literal["viewed", "downloaded", "commented", "shared"]
FileEventType = Literal["uploaded", "updated", "shared", "commented", "accessed"]
DownloadStatus = Literal["pending", "approved", "rejected", "completed"]
AuditEventType = Literal[
    "created", "updated", "deleted", "accessed", "shared", "downloaded", "viewed", "failed"
]
EncryptionMethod = Literal["AES", "RSA", "SHA-256", "None"]

FileUrl = url("Must be a valid URL.")


class TimeWindow(SchemaModel):
    """Optional start/end bounds during which access is allowed."""

    start_time: Timestamp | None = None
    end_time: Timestamp | None = None


class FileAccess(SchemaModel):
    """Access management options for a file."""

    access_type: AccessType = Field(default="private", description="The access level of the file.")
    users: list[UuidStr] | None = Field(default=None, description="User UUIDs with access.")
    groups: list[UuidStr] | None = Field(default=None, description="Group UUIDs with access.")
    allowed_regions: list[str] | None = None
    allowed_ips: list[str] | None = Field(default=None, alias="allowedIPs")
    access_time: TimeWindow | None = None
    max_accesses: float | None = None
    passcode: str | None = None


class FolderAccess(SchemaModel):
    """Access management options for a folder."""

    access_type: AccessType = "private"
    users: list[UuidStr] | None = None
    groups: list[UuidStr] | None = None


class AccessConditions(SchemaModel):
    """Conditions of an access control policy."""

    allowed_ips: list[str] | None = Field(default=None, alias="allowedIPs")
    expiration: Timestamp | None = None
    max_accesses: float | None = None
    passcode: str | None = None
    allowed_regions: list[str] | None = None
    time_range: TimeWindow | None = None


FILE = extend(
    RECORD,
    "File",
    {
        "file_name": required(text("File name is required."), "The name of the file."),
        "file_type": required(text("File type is required."), "The MIME type of the file."),
        "file_size": required(float, "The size of the file in bytes."),
        "file_url": required(FileUrl, "The URL where the file is hosted."),
        "description": optional(str, "A short description of the file."),
        "tags": optional(list[str], "Tags for categorizing the file."),
        "version": defaulted(str, "v1.0", "The version number of the file."),
        "is_public": defaulted(bool, False, "Whether the file is publicly accessible."),
        "access_management": required(FileAccess, "Access management options for the file."),
    },
    doc="A document or media file.",
)

FILE_CATEGORY = extend(
    RECORD,
    "FileCategory",
    {
        "name": required(text("Category name is required."), "The name of the file category."),
        "description": optional(str, "A description of the file category."),
        "parent_category_id": optional(UuidStr, "The UUID of the parent category."),
    },
    doc="A category for organizing files.",
)

FILE_VERSION = extend(
    RECORD,
    "FileVersion",
    {
        "file_id": required(UuidStr, "The UUID of the file this version belongs to."),
        "version": required(text("Version number is required."), "The version number."),
        "change_log": optional(str, "The changes made in this version."),
        "file_url": required(FileUrl, "The URL where this version is hosted."),
        "created_at": stamped("When this version was created."),
    },
    doc="A version of a file.",
)

FILE_HISTORY = extend(
    RECORD,
    "FileHistory",
    {
        "file_id": required(UuidStr, "The UUID of the file this entry belongs to."),
        "action": required(FileAction, "The action performed on the file."),
        "performed_by": required(UuidStr, "The UUID of the user who performed the action."),
        "timestamp": stamped("When the action was performed."),
    },
    doc="An action performed on a file.",
)

USER_ACTIVITY = extend(
    RECORD,
    "UserActivity",
    {
        "user_id": required(UuidStr, "The UUID of the user."),
        "file_id": required(UuidStr, "The UUID of the file involved."),
        "action": required(ActivityAction, "The action taken by the user."),
        "timestamp": stamped("When the activity occurred."),
    },
    doc="User activity related to a file.",
)

FILE_COMMENT = extend(
    RECORD,
    "FileComment",
    {
        "file_id": required(UuidStr, "The UUID of the file the comment is about."),
        "author_id": required(UuidStr, "The UUID of the user who made the comment."),
        "comment": required(text("Comment text is required."), "The content of the comment."),
        "created_at": stamped("When the comment was created."),
    },
    doc="A comment made on a file.",
)

EVENT_NOTIFICATION = extend(
    RECORD,
    "EventNotification",
    {
        "file_id": required(UuidStr, "The UUID of the file involved in the event."),
        "event_type": required(FileEventType, "The event that triggered the notification."),
        "recipient_id": required(UuidStr, "The UUID of the user receiving the notification."),
        "message": optional(str, "Message included in the notification."),
        "created_at": stamped("When the notification was created."),
    },
    doc="A notification about a file event.",
)

FOLDER = extend(
    RECORD,
    "Folder",
    {
        "name": required(text("Folder name is required."), "The name of the folder."),
        "parent_folder_id": optional(UuidStr, "The UUID of the parent folder."),
        "description": optional(str, "A short description of the folder."),
        "access_management": required(FolderAccess, "Access management options for the folder."),
    },
    doc="A hierarchical container for files.",
)

SHARED_LINK = extend(
    RECORD,
    "SharedLink",
    {
        "file_id": required(UuidStr, "The UUID of the file being shared."),
        "url": required(FileUrl, "The shareable URL for the file."),
        "expires_at": optional(Timestamp, "When the link expires."),
        "passcode": optional(str, "Passcode required to open the link."),
        "max_accesses": optional(float, "How many times the link can be opened."),
        "allowed_ips": FieldSpec(
            list[str] | None,
            default=None,
            alias="allowedIPs",
            description="IP addresses allowed to open the link.",
        ),
    },
    doc="A shareable link to a file.",
)

DOWNLOAD_REQUEST = extend(
    RECORD,
    "DownloadRequest",
    {
        "file_id": required(UuidStr, "The UUID of the requested file."),
        "requested_by": required(UuidStr, "The UUID of the requesting user."),
        "status": required(DownloadStatus, "The current status of the request."),
        "requested_at": stamped("When the download was requested."),
        "reviewed_by": optional(UuidStr, "The UUID of the reviewer."),
        "reviewed_at": optional(Timestamp, "When the request was reviewed."),
    },
    doc="A user-initiated request to download a file.",
)

AUDIT_LOG = extend(
    RECORD,
    "AuditLog",
    {
        "event_type": required(AuditEventType, "The type of event being logged."),
        "file_id": optional(UuidStr, "The UUID of the file involved."),
        "user_id": optional(UuidStr, "The UUID of the user involved."),
        "description": optional(str, "A detailed description of the event."),
        "ip_address": optional(str, "The IP address the event originated from."),
        "timestamp": stamped("When the event occurred."),
    },
    doc="A security or activity event related to file sharing.",
)

FILE_METADATA = extend(
    RECORD,
    "FileMetadata",
    {
        "file_id": required(UuidStr, "The UUID of the file this metadata applies to."),
        "metadata": required(dict[str, Any], "Key-value metadata attributes."),
        "created_at": stamped("When the metadata was created."),
    },
    doc="Additional metadata for a file.",
)

ACCESS_CONTROL_POLICY = extend(
    RECORD,
    "AccessControlPolicy",
    {
        "file_id": required(UuidStr, "The UUID of the file."),
        "policy_name": required(text("Policy name is required."), "The name of the policy."),
        "conditions": required(AccessConditions, "Conditions for the policy."),
    },
    doc="Advanced access control rules for a file.",
)

FILE_ENCRYPTION = extend(
    RECORD,
    "FileEncryption",
    {
        "file_id": required(UuidStr, "The UUID of the file."),
        "encryption_method": required(EncryptionMethod, "The method protecting the file."),
        "is_encrypted": defaulted(bool, False, "Whether the file is currently encrypted."),
        "encryption_key": optional(str, "The key, or a reference to it."),
    },
    doc="Encryption status of a file.",
)

QUOTA = extend(
    RECORD,
    "Quota",
    {
        "user_id": optional(UuidStr, "The UUID of the user the quota applies to."),
        "group_id": optional(UuidStr, "The UUID of the group the quota applies to."),
        "total_storage_limit": required(float, "The total storage limit in bytes."),
        "used_storage": defaulted(float, 0, "Storage currently used, in bytes."),
        "last_updated": stamped("When the quota information was last updated."),
    },
    doc="A storage limit for a user or group.",
)

CONTRACTS = (
    FILE,
    FILE_CATEGORY,
    FILE_VERSION,
    FILE_HISTORY,
    USER_ACTIVITY,
    FILE_COMMENT,
    EVENT_NOTIFICATION,
    FOLDER,
    SHARED_LINK,
    DOWNLOAD_REQUEST,
    AUDIT_LOG,
    FILE_METADATA,
    ACCESS_CONTROL_POLICY,
    FILE_ENCRYPTION,
    QUOTA,
)

for _contract in CONTRACTS:
    register_contract(contract_key(DOMAIN, _contract), _contract)
