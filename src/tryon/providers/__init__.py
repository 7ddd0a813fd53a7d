"""Drivers for the third-party try-on image providers."""

from .job_models import JobState, TryOnResult
from .polling import JobPoller
from .providers_base import ProviderDriver
from .providers_fashn import FashnDriver, GarmentTryOnRequest
from .providers_kie import JewelryTryOnRequest, KieDriver

__all__ = [
    "FashnDriver",
    "GarmentTryOnRequest",
    "JewelryTryOnRequest",
    "JobPoller",
    "JobState",
    "KieDriver",
    "ProviderDriver",
    "TryOnResult",
]
