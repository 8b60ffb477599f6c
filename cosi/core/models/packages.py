"""
Request models — package lists and service status queries.

Both are validated with Pydantic; a ``ValidationError`` from either is
a client error (HTTP 400) at the route layer.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictBool, field_validator


class PackageLists(BaseModel):
    """Packages to install and to uninstall, in request order."""

    installed: list[str] = Field(default_factory=list)
    uninstalled: list[str] = Field(default_factory=list)

    @field_validator("installed", "uninstalled")
    @classmethod
    def _check_names(cls, names: list[str]) -> list[str]:
        cleaned = []
        for name in names:
            name = name.strip()
            if not name:
                raise ValueError("package names must not be empty")
            # A leading dash would be parsed as a package-manager option
            if name.startswith("-"):
                raise ValueError(f"invalid package name: {name!r}")
            cleaned.append(name)
        return cleaned

    @property
    def empty(self) -> bool:
        return not self.installed and not self.uninstalled


class PackageRequest(BaseModel):
    """Body of ``POST /packages``::

        {"packages": {"installed": ["curl"], "uninstalled": ["nano"]}}
    """

    packages: PackageLists = Field(default_factory=PackageLists)


class ServiceStatusQuery(BaseModel):
    """Body of ``POST /systemctl/status``."""

    failed: StrictBool = False
