"""
Service settings — where to listen and what the host looks like.

Loaded from cosi.yml, then overridden by ``COSI_*`` environment
variables. Every field has a default, so an empty file is valid.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class EndpointSettings(BaseModel):
    """Optional endpoint groups. Disabled groups are not routed at all."""

    package_list: bool = True      # GET /packages
    binaries: bool = True          # GET /binaries
    kubernetes: bool = True        # GET/POST /kubernetes


class Settings(BaseModel):
    """Runtime configuration for the HTTP service and CLI."""

    host: str = "0.0.0.0"
    port: int = Field(default=80, ge=1, le=65535)

    os_release_path: str = "/etc/os-release"
    search_path: str | None = None          # None → process PATH
    command_timeout: float | None = None    # None → wait forever

    endpoints: EndpointSettings = Field(default_factory=EndpointSettings)
