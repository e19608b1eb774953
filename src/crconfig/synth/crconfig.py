"""
Document Assembler

Drives a single synthesis pass for one CDN: resolves parameters, builds
the match set and static DNS maps, decodes every active delivery service
and places the records, the shared SOA and the CDN-wide TTLs into one
document. Any fatal error aborts the pass; no partial document is ever
returned.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from ..database.base import Store, StoreReader
from ..logging import get_logger, timed_phase
from ..models.delivery_service import SOA, DeliveryService
from ..utils.constants import (
    DEFAULT_TLD_TTL_NS,
    DEFAULT_TLD_TTL_SOA,
    LOG_REQUEST_HEADERS_PARAM,
    TLD_TTL_NS_PARAM,
    TLD_TTL_SOA_PARAM,
)
from .deliveryservice import (
    DecodeContext,
    make_cdn_soa,
    make_delivery_service,
    resolve_ttl_param,
)
from .parameters import resolve_ds_params
from .regexes import get_ds_regexes_domains
from .static_dns import get_static_dns_entries

logger = get_logger(__name__)

GENERATOR_NAME = "crconfig"


@dataclass(frozen=True)
class CRConfig:
    """The consolidated routing configuration of one CDN."""

    cdn: str
    domain: str
    soa: SOA
    ttls: dict[str, str]
    delivery_services: dict[str, DeliveryService] = field(default_factory=dict)
    log_request_headers: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        config: dict[str, Any] = {
            "domain_name": self.domain,
            "soa": self.soa.to_dict(),
            "ttls": dict(self.ttls),
        }
        if self.log_request_headers is not None:
            config[LOG_REQUEST_HEADERS_PARAM] = self.log_request_headers
        return {
            "stats": {"CDN_name": self.cdn, "generator": GENERATOR_NAME},
            "config": config,
            "deliveryServices": {
                xml_id: ds.to_dict() for xml_id, ds in self.delivery_services.items()
            },
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize with sorted keys; equal input gives identical bytes."""
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)


def make_delivery_services(
    cdn: str,
    domain: str,
    reader: StoreReader,
    ds_params: dict[str, str],
    soa: SOA,
) -> dict[str, DeliveryService]:
    """
    Build {xml_id: DeliveryService} for every active delivery service.

    Args:
        cdn: CDN name
        domain: CDN domain suffix
        reader: Store reader bound to the run's snapshot
        ds_params: Resolved delivery service parameters
        soa: Shared SOA record
    """
    match_sets, domains = get_ds_regexes_domains(cdn, domain, reader)
    static_dns_entries = get_static_dns_entries(cdn, reader)
    ctx = DecodeContext(
        ds_params=ds_params,
        match_sets=match_sets,
        domains=domains,
        static_dns_entries=static_dns_entries,
        soa=soa,
    )

    dses: dict[str, DeliveryService] = {}
    for row in reader.delivery_services(cdn):
        ds = make_delivery_service(row, ctx)
        dses[ds.xml_id] = ds
    return dses


def make_cdn_ttls(ds_params: dict[str, str]) -> dict[str, str]:
    """CDN-wide NS and SOA TTLs after parameter overrides."""
    ns = resolve_ttl_param(ds_params, TLD_TTL_NS_PARAM, DEFAULT_TLD_TTL_NS)
    soa = resolve_ttl_param(ds_params, TLD_TTL_SOA_PARAM, DEFAULT_TLD_TTL_SOA)
    return {"NS": str(ns), "SOA": str(soa)}


@timed_phase("build")
def build_crconfig(cdn: str, domain: str, store: Store) -> CRConfig:
    """
    Run one synthesis pass for a CDN.

    All reads go through a single store snapshot.

    Raises:
        CRConfigError: on store failure, parameter conflict or an
            inconsistent delivery service row
    """
    logger.info("Building CRConfig", cdn=cdn, domain=domain)
    with store.snapshot() as reader:
        ds_params = resolve_ds_params(cdn, reader)
        soa = make_cdn_soa()
        delivery_services = make_delivery_services(cdn, domain, reader, ds_params, soa)

    crconfig = CRConfig(
        cdn=cdn,
        domain=domain,
        soa=soa,
        ttls=make_cdn_ttls(ds_params),
        delivery_services=delivery_services,
        log_request_headers=ds_params.get(LOG_REQUEST_HEADERS_PARAM),
    )
    logger.info(
        "CRConfig built",
        cdn=cdn,
        delivery_services=len(delivery_services),
    )
    return crconfig
