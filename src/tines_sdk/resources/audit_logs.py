"""Tenant audit logs."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from tines_sdk.core.api_client import BaseTinesClient
from tines_sdk.filters import ListFilter
from tines_sdk.pagination import PageMeta, PageSequence

__all__ = ["AuditLog", "AuditLogList", "AuditLogsMixin"]


class AuditLog(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None
    operation_name: str | None = None
    inputs: Any = None
    outputs: Any = None
    request_ip: str | None = None
    request_user_agent: str | None = None
    story_id: int | None = None
    tenant_id: int | None = None
    user_email: str | None = None
    user_id: int | None = None
    user_name: str | None = None


class AuditLogList(BaseModel):
    model_config = ConfigDict(extra="ignore")

    audit_logs: list[AuditLog] | None = None
    meta: PageMeta | None = None


class AuditLogsMixin(BaseTinesClient):
    def list_audit_logs(self, list_filter: ListFilter | None = None) -> PageSequence[AuditLog]:
        """Iterate over audit logs.

        ``operation_name`` narrows the listing to one logged operation; names
        are case-sensitive.
        """

        return self._list("/api/v1/audit_logs", list_filter or ListFilter(), AuditLogList, "audit_logs")
