"""
Domain models — Pydantic types shared by services, routes and the CLI.

All models are re-exported here for convenient access:

    from cosi.core.models import CommandResult, PackageRequest, Settings
"""

from cosi.core.models.bootstrap import BootstrapReport, BootstrapStep, StepRecord
from cosi.core.models.command import CommandError, CommandResult
from cosi.core.models.packages import PackageLists, PackageRequest, ServiceStatusQuery
from cosi.core.models.settings import EndpointSettings, Settings

__all__ = [
    # bootstrap.py
    "BootstrapReport",
    "BootstrapStep",
    "StepRecord",
    # command.py
    "CommandError",
    "CommandResult",
    # packages.py
    "PackageLists",
    "PackageRequest",
    "ServiceStatusQuery",
    # settings.py
    "EndpointSettings",
    "Settings",
]
