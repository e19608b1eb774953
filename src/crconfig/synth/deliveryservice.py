"""
Delivery Service Row Decoder

Turns one denormalized delivery service row, together with the maps
precomputed for the whole CDN, into a complete DeliveryService record.

Decoding is a pure transform: no store access happens here. The
defaulting rules are the ones traffic routers have always been fed.
Some columns are null-checked and some deliberately are not (geo limit
treats NULL as 0, deep caching keeps NEVER for NULL); keep them that way.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Optional

from ..errors import DeliveryServiceDecodeError
from ..logging import get_logger
from ..models.delivery_service import (
    SOA,
    BypassDestination,
    DeepCachingType,
    DeliveryService,
    Dispersion,
    LatLon,
    MatchSet,
    ProtocolSettings,
    StaticDNSEntry,
    TTLs,
)
from ..models.rows import DeliveryServiceRow
from ..utils.constants import (
    CDN_SOA_ADMIN,
    CDN_SOA_EXPIRE,
    CDN_SOA_MINIMUM,
    CDN_SOA_REFRESH,
    CDN_SOA_RETRY,
    DEFAULT_GEO_PROVIDER_CODE,
    DEFAULT_PROTOCOL_CODE,
    DEFAULT_TLD_TTL_NS,
    DEFAULT_TLD_TTL_SOA,
    GEO_LIMIT_CZF_ONLY,
    GEO_LIMIT_NONE,
    GEO_PROVIDERS,
    HEADER_DELIMITER,
    HEADER_VALUE_STRIP,
    PROTOCOL_DNS,
    PROTOCOL_HTTP,
    PROTOCOLS,
    TLD_TTL_NS_PARAM,
    TLD_TTL_SOA_PARAM,
)
from .regexes import get_protocol_str

logger = get_logger(__name__)

# plain decimal integers only
INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def make_cdn_soa() -> SOA:
    """The SOA record shared by every delivery service of a CDN."""
    return SOA(
        admin=CDN_SOA_ADMIN,
        expire=str(CDN_SOA_EXPIRE),
        minimum=str(CDN_SOA_MINIMUM),
        refresh=str(CDN_SOA_REFRESH),
        retry=str(CDN_SOA_RETRY),
    )


@dataclass(frozen=True)
class DecodeContext:
    """CDN-wide inputs shared by every row decode of a run."""

    ds_params: dict[str, str] = field(default_factory=dict)
    match_sets: dict[str, tuple[MatchSet, ...]] = field(default_factory=dict)
    domains: dict[str, tuple[str, ...]] = field(default_factory=dict)
    static_dns_entries: dict[str, tuple[StaticDNSEntry, ...]] = field(default_factory=dict)
    soa: SOA = field(default_factory=make_cdn_soa)


def resolve_ttl_param(
    ds_params: dict[str, str],
    name: str,
    default: int,
    **log_fields: Any,
) -> int:
    """
    Return an integer TTL parameter, or the default.

    Values that are not integers are logged and ignored.
    """
    raw = ds_params.get(name)
    if raw is None:
        return default
    if not INTEGER_RE.fullmatch(raw):
        logger.error(
            "TTL parameter is not a number, skipping",
            parameter=name,
            value=raw,
            **log_fields,
        )
        return default
    return int(raw)


def parse_response_headers(raw: Optional[str]) -> dict[str, str]:
    """Parse 'Name: value' pairs joined by the header delimiter into a mapping."""
    headers: dict[str, str] = {}
    if not raw:
        return headers
    for hdr in raw.split(HEADER_DELIMITER):
        name, sep, value = hdr.partition(":")
        headers[name.strip()] = value.strip(HEADER_VALUE_STRIP) if sep else ""
    return headers


def parse_request_headers(raw: Optional[str]) -> tuple[str, ...]:
    """Parse request header rewrites, keeping only the header names."""
    if not raw:
        return ()
    return tuple(hdr.partition(":")[0].strip() for hdr in raw.split(HEADER_DELIMITER))


def _miss_location(row: DeliveryServiceRow) -> Optional[LatLon]:
    if row.miss_lat is not None and row.miss_long is not None:
        return LatLon(lat=row.miss_lat, lon=row.miss_long)
    if row.miss_lat is not None:
        logger.warning(
            "Delivery service has miss latitude but not longitude, omitting miss location",
            xml_id=row.xml_id,
        )
    elif row.miss_long is not None:
        logger.warning(
            "Delivery service has miss longitude but not latitude, omitting miss location",
            xml_id=row.xml_id,
        )
    return None


def _protocol(row: DeliveryServiceRow) -> ProtocolSettings:
    code = row.protocol if row.protocol in PROTOCOLS else DEFAULT_PROTOCOL_CODE
    accept_http, accept_https, redirect = PROTOCOLS[code]
    return ProtocolSettings(
        accept_http=accept_http,
        accept_https=accept_https,
        redirect_to_https=redirect,
    )


def _geo_provider(row: DeliveryServiceRow) -> str:
    code = row.geo_provider if row.geo_provider in GEO_PROVIDERS else DEFAULT_GEO_PROVIDER_CODE
    return GEO_PROVIDERS[code]


def _dns_bypass(row: DeliveryServiceRow) -> Optional[BypassDestination]:
    dest = BypassDestination(
        ip=row.dns_bypass_ip or None,
        ip6=row.dns_bypass_ip6 or None,
        ttl=row.dns_bypass_ttl,
        cname=row.dns_bypass_cname or None,
    )
    return None if dest.is_empty else dest


def _http_bypass(row: DeliveryServiceRow) -> Optional[BypassDestination]:
    if not row.http_bypass_fqdn:
        return None
    fqdn, sep, port = row.http_bypass_fqdn.partition(":")
    return BypassDestination(fqdn=fqdn, port=port if sep else None)


def _check_required(row: DeliveryServiceRow) -> None:
    if not row.xml_id:
        raise DeliveryServiceDecodeError(row.xml_id, "missing xml_id")
    if row.type is None:
        raise DeliveryServiceDecodeError(row.xml_id, "missing type")
    if row.regional_geo_blocking is None:
        raise DeliveryServiceDecodeError(row.xml_id, "regional_geo_blocking is NULL")
    if row.anonymous_blocking_enabled is None:
        raise DeliveryServiceDecodeError(row.xml_id, "anonymous_blocking_enabled is NULL")


def make_delivery_service(row: DeliveryServiceRow, ctx: DecodeContext) -> DeliveryService:
    """
    Decode one delivery service row.

    Args:
        row: Delivery service row
        ctx: CDN-wide parameters, match sets, domains and static entries

    Returns:
        The complete DeliveryService record

    Raises:
        DeliveryServiceDecodeError: the row is missing required state
    """
    _check_required(row)
    xml_id = row.xml_id
    routing_protocol = get_protocol_str(row.type)
    protocol = _protocol(row)

    deep_caching_type = DeepCachingType.NEVER
    if row.deep_caching_type is not None:
        deep_caching_type = DeepCachingType.from_string(row.deep_caching_type)

    match_sets = ctx.match_sets.get(xml_id)
    if match_sets is None:
        logger.warning("No regex matchsets for delivery service", xml_id=xml_id)
    domains = ctx.domains.get(xml_id)
    if domains is None:
        logger.warning("No host regex for delivery service", xml_id=xml_id)
    static_dns_entries = ctx.static_dns_entries.get(xml_id)
    if static_dns_entries is None:
        logger.warning("No static DNS entries for delivery service", xml_id=xml_id)

    # Geo limit: NULL behaves as 0
    geo_limit = row.geo_limit or GEO_LIMIT_NONE
    coverage_zone_only = geo_limit == GEO_LIMIT_CZF_ONLY
    geo_limit_redirect_url: Optional[str] = None
    geo_enabled: tuple[str, ...] = ()
    if geo_limit != GEO_LIMIT_NONE:
        if routing_protocol == PROTOCOL_HTTP:
            geo_limit_redirect_url = row.geolimit_redirect_url or ""
        if geo_limit != GEO_LIMIT_CZF_ONLY and row.geo_limit_countries is not None:
            geo_enabled = tuple(c.strip() for c in row.geo_limit_countries.split(","))

    ns_seconds = DEFAULT_TLD_TTL_NS
    soa_seconds = DEFAULT_TLD_TTL_SOA
    if row.profile is not None:
        soa_seconds = resolve_ttl_param(
            ctx.ds_params, TLD_TTL_SOA_PARAM, DEFAULT_TLD_TTL_SOA,
            xml_id=xml_id, profile=row.profile,
        )
        ns_seconds = resolve_ttl_param(
            ctx.ds_params, TLD_TTL_NS_PARAM, DEFAULT_TLD_TTL_NS,
            xml_id=xml_id, profile=row.profile,
        )
    ttl_str = str(row.ttl) if row.ttl is not None else ""
    ttls = TTLs(a=ttl_str, aaaa=ttl_str, ns=str(ns_seconds), soa=str(soa_seconds))

    bypass_destination: dict[str, BypassDestination] = {}
    max_dns_ips_for_location = None
    regional_geo_blocking = None
    anonymous_blocking_enabled = None
    dispersion = None
    if routing_protocol == PROTOCOL_DNS:
        dns_bypass = _dns_bypass(row)
        if dns_bypass is not None:
            bypass_destination[PROTOCOL_DNS] = dns_bypass
        max_dns_ips_for_location = row.max_dns_answers
    else:
        http_bypass = _http_bypass(row)
        if http_bypass is not None:
            bypass_destination[PROTOCOL_HTTP] = http_bypass
        regional_geo_blocking = "true" if row.regional_geo_blocking else "false"
        anonymous_blocking_enabled = "true" if row.anonymous_blocking_enabled else "false"
        if row.initial_dispersion is not None:
            dispersion = Dispersion(limit=row.initial_dispersion, shuffled=True)

    return DeliveryService(
        xml_id=xml_id,
        routing_protocol=routing_protocol,
        protocol=protocol,
        soa=ctx.soa,
        ttls=ttls,
        geo_location_provider=_geo_provider(row),
        ssl_enabled=protocol.accept_https,
        ttl=row.ttl,
        routing_name=row.routing_name,
        deep_caching_type=deep_caching_type,
        coverage_zone_only=coverage_zone_only,
        geo_limit_redirect_url=geo_limit_redirect_url,
        geo_enabled=geo_enabled,
        miss_location=_miss_location(row),
        match_sets=match_sets or (),
        domains=domains or (),
        static_dns_entries=static_dns_entries or (),
        bypass_destination=bypass_destination,
        max_dns_ips_for_location=max_dns_ips_for_location,
        regional_geo_blocking=regional_geo_blocking,
        anonymous_blocking_enabled=anonymous_blocking_enabled,
        dispersion=dispersion,
        ip6_routing_enabled=bool(row.ipv6_routing_enabled),
        response_headers=parse_response_headers(row.tr_response_headers),
        request_headers=parse_request_headers(row.tr_request_headers),
    )
