"""
Delivery service configuration records.

These are the value types produced by a synthesis run. Each type knows
how to render itself into the dictionary shape traffic routers consume,
which carries most booleans and some integers as strings and omits
optional fields that are not set.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


def _bool_str(value: bool) -> str:
    return "true" if value else "false"


class DeepCachingType(str, Enum):
    """Deep caching modes."""
    NEVER = 'NEVER'
    ALWAYS = 'ALWAYS'
    INVALID = 'INVALID'

    @classmethod
    def from_string(cls, value: str) -> "DeepCachingType":
        """Parse a deep caching type, case-insensitively. Empty means NEVER."""
        value = value.strip().upper()
        if not value:
            return cls.NEVER
        try:
            return cls(value)
        except ValueError:
            return cls.INVALID


@dataclass(frozen=True)
class ProtocolSettings:
    """Which schemes a delivery service accepts."""
    accept_http: bool = True
    accept_https: bool = False
    redirect_to_https: bool = False

    def to_dict(self) -> dict[str, Any]:
        # acceptHttp is implied when true
        result: dict[str, Any] = {
            "acceptHttps": _bool_str(self.accept_https),
            "redirectToHttps": _bool_str(self.redirect_to_https),
        }
        if not self.accept_http:
            result["acceptHttp"] = _bool_str(self.accept_http)
        return result


@dataclass(frozen=True)
class SOA:
    """DNS start-of-authority parameters, all in seconds except admin."""
    admin: str
    expire: str
    minimum: str
    refresh: str
    retry: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "admin": self.admin,
            "expire": self.expire,
            "minimum": self.minimum,
            "refresh": self.refresh,
            "retry": self.retry,
        }


@dataclass(frozen=True)
class TTLs:
    """Per-record-type TTLs, string encoded."""
    a: str
    aaaa: str
    ns: str
    soa: str

    def to_dict(self) -> dict[str, Any]:
        return {"A": self.a, "AAAA": self.aaaa, "NS": self.ns, "SOA": self.soa}


@dataclass(frozen=True)
class LatLon:
    """Location used when a client cannot be geolocated."""
    lat: float
    lon: float

    def to_dict(self) -> dict[str, Any]:
        return {"lat": self.lat, "long": self.lon}


@dataclass(frozen=True)
class MatchItem:
    """A single (match type, regex) rule."""
    match_type: str
    regex: str

    def to_dict(self) -> dict[str, Any]:
        return {"match-type": self.match_type, "regex": self.regex}


@dataclass(frozen=True)
class MatchSet:
    """
    Ordered match rules for one set number of a delivery service.

    An empty match list is a placeholder for a set number that has no
    routable rules; placeholders keep list positions aligned with set numbers.
    """
    protocol: str
    match_list: tuple[MatchItem, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.match_list

    def to_dict(self) -> dict[str, Any]:
        return {
            "protocol": self.protocol,
            "matchlist": [m.to_dict() for m in self.match_list],
        }


@dataclass(frozen=True)
class BypassDestination:
    """Fallback target for one routing axis."""
    # DNS axis
    ip: Optional[str] = None
    ip6: Optional[str] = None
    ttl: Optional[int] = None
    cname: Optional[str] = None
    # HTTP axis
    fqdn: Optional[str] = None
    port: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self == BypassDestination()

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.ip:
            result["ip"] = self.ip
        if self.ip6:
            result["ip6"] = self.ip6
        if self.cname:
            result["cname"] = self.cname
        if self.ttl is not None:
            result["ttl"] = self.ttl
        if self.fqdn:
            result["fqdn"] = self.fqdn
        if self.port is not None:
            result["port"] = self.port
        return result


@dataclass(frozen=True)
class Dispersion:
    """Initial dispersion policy for HTTP delivery services."""
    limit: int
    shuffled: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"limit": str(self.limit), "shuffled": _bool_str(self.shuffled)}


@dataclass(frozen=True)
class StaticDNSEntry:
    """A static DNS record served for a delivery service."""
    name: str
    ttl: int
    value: str
    type: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "ttl": self.ttl, "value": self.value, "type": self.type}


@dataclass(frozen=True)
class DeliveryService:
    """
    Complete routing configuration for one delivery service.

    `routing_protocol` is the routing axis (DNS or HTTP) derived from the
    delivery service type; it decides which axis-specific fields are set.
    """

    xml_id: str
    routing_protocol: str
    protocol: ProtocolSettings
    soa: SOA
    ttls: TTLs
    geo_location_provider: str
    ssl_enabled: bool = False
    ttl: Optional[int] = None
    routing_name: Optional[str] = None
    deep_caching_type: DeepCachingType = DeepCachingType.NEVER

    # Geo policy
    coverage_zone_only: bool = False
    geo_limit_redirect_url: Optional[str] = None
    geo_enabled: tuple[str, ...] = ()  # ISO country codes
    miss_location: Optional[LatLon] = None

    # Routing rules
    match_sets: tuple[MatchSet, ...] = ()
    domains: tuple[str, ...] = ()
    static_dns_entries: tuple[StaticDNSEntry, ...] = ()

    # Axis specific
    bypass_destination: dict[str, BypassDestination] = field(default_factory=dict)
    max_dns_ips_for_location: Optional[int] = None
    regional_geo_blocking: Optional[str] = None
    anonymous_blocking_enabled: Optional[str] = None
    dispersion: Optional[Dispersion] = None
    ip6_routing_enabled: bool = False

    # Header rewrites
    response_headers: dict[str, str] = field(default_factory=dict)
    request_headers: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to the router wire dictionary."""
        result: dict[str, Any] = {
            "coverageZoneOnly": _bool_str(self.coverage_zone_only),
            "deepCachingType": self.deep_caching_type.value,
            "geolocationProvider": self.geo_location_provider,
            "ip6RoutingEnabled": _bool_str(self.ip6_routing_enabled),
            "protocol": self.protocol.to_dict(),
            "soa": self.soa.to_dict(),
            "sslEnabled": _bool_str(self.ssl_enabled),
            "ttls": self.ttls.to_dict(),
        }
        if self.ttl is not None:
            result["ttl"] = self.ttl
        if self.routing_name is not None:
            result["routingName"] = self.routing_name
        if self.geo_limit_redirect_url is not None:
            result["geoLimitRedirectURL"] = self.geo_limit_redirect_url
        if self.geo_enabled:
            result["geoEnabled"] = [{"countryCode": c} for c in self.geo_enabled]
        if self.miss_location is not None:
            result["missLocation"] = self.miss_location.to_dict()
        if self.match_sets:
            result["matchsets"] = [m.to_dict() for m in self.match_sets]
        if self.domains:
            result["domains"] = list(self.domains)
        if self.static_dns_entries:
            result["staticDnsEntries"] = [e.to_dict() for e in self.static_dns_entries]
        if self.bypass_destination:
            result["bypassDestination"] = {
                axis: dest.to_dict() for axis, dest in self.bypass_destination.items()
            }
        if self.max_dns_ips_for_location is not None:
            result["maxDnsIpsForLocation"] = self.max_dns_ips_for_location
        if self.regional_geo_blocking is not None:
            result["regionalGeoBlocking"] = self.regional_geo_blocking
        if self.anonymous_blocking_enabled is not None:
            result["anonymousBlockingEnabled"] = self.anonymous_blocking_enabled
        if self.dispersion is not None:
            result["dispersion"] = self.dispersion.to_dict()
        if self.response_headers:
            result["responseHeaders"] = dict(self.response_headers)
        if self.request_headers:
            result["requestHeaders"] = list(self.request_headers)
        return result
