"""
CRConfig synthesis.

Components, leaves first:
    - parameters: server profile parameter resolution
    - regexes: match set and domain assembly
    - static_dns: static DNS entry assembly
    - deliveryservice: per-row delivery service decoding
    - crconfig: document assembly for one CDN
"""

from .crconfig import CRConfig, build_crconfig, make_delivery_services
from .deliveryservice import DecodeContext, make_delivery_service
from .parameters import get_ds_params, resolve_ds_params
from .regexes import build_match_sets
from .static_dns import build_static_dns_entries

__all__ = [
    "CRConfig",
    "build_crconfig",
    "make_delivery_services",
    "DecodeContext",
    "make_delivery_service",
    "get_ds_params",
    "resolve_ds_params",
    "build_match_sets",
    "build_static_dns_entries",
]
