"""Resource-specific models and client operations."""

from .audit_logs import AuditLog, AuditLogList, AuditLogsMixin
from .credentials import (
    Credential,
    CredentialList,
    CredentialMultiRequest,
    CredentialRequestOptions,
    CredentialsMixin,
    CredentialType,
)
from .folders import FOLDER_CONTENT_TYPES, Folder, FolderList, FoldersMixin
from .info import InfoMixin, StackInfo, TenantInfo, WorkerStats
from .resources import Resource, ResourceElement, ResourceList, ResourcesMixin
from .stories import (
    StoriesMixin,
    Story,
    StoryImportMode,
    StoryImportRequest,
    StoryList,
    StoryVersion,
    StoryVersionCreateRequest,
)

__all__ = [
    "AuditLog",
    "AuditLogList",
    "AuditLogsMixin",
    "Credential",
    "CredentialList",
    "CredentialMultiRequest",
    "CredentialRequestOptions",
    "CredentialType",
    "CredentialsMixin",
    "FOLDER_CONTENT_TYPES",
    "Folder",
    "FolderList",
    "FoldersMixin",
    "InfoMixin",
    "Resource",
    "ResourceElement",
    "ResourceList",
    "ResourcesMixin",
    "StackInfo",
    "StoriesMixin",
    "Story",
    "StoryImportMode",
    "StoryImportRequest",
    "StoryList",
    "StoryVersion",
    "StoryVersionCreateRequest",
    "TenantInfo",
    "WorkerStats",
]
