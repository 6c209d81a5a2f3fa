"""Tenant information endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from tines_sdk.core.api_client import BaseTinesClient

__all__ = ["StackInfo", "TenantInfo", "WorkerStats", "InfoMixin"]


class StackInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    type: str | None = None
    region: str | None = None
    egress_ips: list[str] | None = None


class TenantInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    stack: StackInfo = Field(default_factory=StackInfo)


class WorkerStats(BaseModel):
    model_config = ConfigDict(extra="ignore")

    current_workers: int | None = None
    max_workers: int | None = None
    queue_count: int | None = None
    queue_latency: int | None = None


class InfoMixin(BaseTinesClient):
    def get_info(self) -> TenantInfo:
        body = self.do_request("GET", "/api/v1/info")
        return self._decode(TenantInfo, body)

    def get_worker_stats(self) -> WorkerStats:
        body = self.do_request("GET", "/api/v1/info/worker_stats")
        return self._decode(WorkerStats, body)
