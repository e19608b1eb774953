"""CRConfig Utilities."""

from .constants import (
    DS_PARAM_NAMES,
    GEO_PROVIDERS,
    HEADER_DELIMITER,
    PROTOCOL_DNS,
    PROTOCOL_HTTP,
    PROTOCOLS,
)

__all__ = [
    'DS_PARAM_NAMES',
    'GEO_PROVIDERS',
    'HEADER_DELIMITER',
    'PROTOCOL_DNS',
    'PROTOCOL_HTTP',
    'PROTOCOLS',
]
