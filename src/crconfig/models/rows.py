"""Store row types consumed by the synthesizer."""

from dataclasses import dataclass, fields
from typing import Any, Optional


@dataclass(frozen=True)
class DeliveryServiceRow:
    """
    One denormalized delivery service row.

    Joined with its type and profile names. Nullable columns are None
    when the database value is NULL.
    """

    xml_id: Optional[str]
    type: Optional[str]
    miss_lat: Optional[float] = None
    miss_long: Optional[float] = None
    protocol: Optional[int] = None
    ttl: Optional[int] = None
    routing_name: Optional[str] = None
    geo_provider: Optional[int] = None
    geo_limit: Optional[int] = None
    geo_limit_countries: Optional[str] = None
    geolimit_redirect_url: Optional[str] = None
    initial_dispersion: Optional[int] = None
    regional_geo_blocking: Optional[bool] = False
    max_dns_answers: Optional[int] = None
    profile: Optional[str] = None
    dns_bypass_ip: Optional[str] = None
    dns_bypass_ip6: Optional[str] = None
    dns_bypass_ttl: Optional[int] = None
    dns_bypass_cname: Optional[str] = None
    http_bypass_fqdn: Optional[str] = None
    ipv6_routing_enabled: Optional[bool] = None
    deep_caching_type: Optional[str] = None
    tr_request_headers: Optional[str] = None
    tr_response_headers: Optional[str] = None
    anonymous_blocking_enabled: Optional[bool] = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeliveryServiceRow":
        """Create from a column-name keyed mapping, ignoring unknown columns."""
        names = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in names}
        # numeric columns arrive as Decimal
        for key in ("miss_lat", "miss_long"):
            if values.get(key) is not None:
                values[key] = float(values[key])
        return cls(**values)


@dataclass(frozen=True)
class RegexRow:
    """A delivery service regex with its type names and set number."""

    pattern: str
    type: str
    ds_type: str
    set_number: int
    xml_id: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RegexRow":
        return cls(
            pattern=data["pattern"],
            type=data["type"],
            ds_type=data["ds_type"],
            set_number=int(data.get("set_number") or 0),
            xml_id=data["xml_id"],
        )


@dataclass(frozen=True)
class StaticDNSRow:
    """A static DNS entry of an active delivery service."""

    xml_id: str
    name: str
    ttl: int
    value: str
    type: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StaticDNSRow":
        return cls(
            xml_id=data["xml_id"],
            name=data["name"],
            ttl=int(data["ttl"]),
            value=str(data["value"]),
            type=data["type"],
        )


@dataclass(frozen=True)
class ProfileParameterRow:
    """A parameter attached to a server profile in the CDN."""

    profile: str
    name: str
    value: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProfileParameterRow":
        return cls(
            profile=data["profile"],
            name=data["name"],
            value=str(data["value"]),
        )
