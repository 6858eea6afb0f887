"""
Domain models — Pydantic types for the setup engine.

    from devsetup.core.models import DesiredState, Detector, Resolution
"""

from devsetup.core.models.catalog import PackageItem, PackageSection
from devsetup.core.models.state import (
    DesiredState,
    Detector,
    DetectorKind,
    Outcome,
    Resolution,
)

__all__ = [
    "DesiredState",
    "Detector",
    "DetectorKind",
    "Outcome",
    "PackageItem",
    "PackageSection",
    "Resolution",
]
