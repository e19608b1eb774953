"""
CRConfig synthesizer for a CDN control plane.

Reads delivery services, their routing regexes, server profile parameters
and static DNS entries for one CDN and assembles the routing configuration
document consumed by traffic routers.
"""

from .errors import (
    CRConfigError,
    DeliveryServiceDecodeError,
    ParameterConflictError,
    StoreError,
)
from .models import DeliveryService, MatchSet
from .synth import CRConfig, build_crconfig

__version__ = '1.0.0'

__all__ = [
    'build_crconfig',
    'CRConfig',
    'DeliveryService',
    'MatchSet',
    'CRConfigError',
    'StoreError',
    'ParameterConflictError',
    'DeliveryServiceDecodeError',
]
