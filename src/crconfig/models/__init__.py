"""CRConfig Models and Data Types."""

from .delivery_service import (
    SOA,
    BypassDestination,
    DeepCachingType,
    DeliveryService,
    Dispersion,
    LatLon,
    MatchItem,
    MatchSet,
    ProtocolSettings,
    StaticDNSEntry,
    TTLs,
)
from .rows import DeliveryServiceRow, ProfileParameterRow, RegexRow, StaticDNSRow

__all__ = [
    "DeliveryService",
    "ProtocolSettings",
    "SOA",
    "TTLs",
    "LatLon",
    "MatchItem",
    "MatchSet",
    "BypassDestination",
    "Dispersion",
    "StaticDNSEntry",
    "DeepCachingType",
    "DeliveryServiceRow",
    "RegexRow",
    "StaticDNSRow",
    "ProfileParameterRow",
]
