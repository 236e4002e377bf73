"""API services and resource handles."""

from htb.services.base import BaseService, ServiceClient
from htb.services.seasons import SeasonHandle, SeasonsService

__all__ = [
    "BaseService",
    "SeasonHandle",
    "SeasonsService",
    "ServiceClient",
]
