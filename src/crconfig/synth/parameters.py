"""
Parameter Resolver

Collects the parameters of every server profile in a CDN and flattens the
delivery-service relevant ones into a single mapping. Two profiles that
define the same parameter with different values are a data error.
"""

from ..database.base import StoreReader
from ..errors import ParameterConflictError
from ..logging import get_logger
from ..utils.constants import DS_PARAM_NAMES

logger = get_logger(__name__)


def get_server_profile_params(cdn: str, reader: StoreReader) -> dict[str, dict[str, str]]:
    """Return {profile: {parameter name: value}} for servers in the CDN."""
    params: dict[str, dict[str, str]] = {}
    rows = reader.server_profile_parameters(cdn)
    for row in rows:
        params.setdefault(row.profile, {})[row.name] = row.value
    logger.debug("Loaded server profile parameters", cdn=cdn, rows=len(rows), profiles=len(params))
    return params


def get_ds_params(server_params: dict[str, dict[str, str]]) -> dict[str, str]:
    """
    Flatten server profile parameters into delivery service parameters.

    Only names in DS_PARAM_NAMES are considered. Profiles are scanned in
    name order so the reported conflict does not depend on input order.

    Raises:
        ParameterConflictError: two profiles disagree on a parameter
    """
    resolved: dict[str, tuple[str, str]] = {}  # name -> (value, profile)
    for profile in sorted(server_params):
        profile_params = server_params[profile]
        for name in DS_PARAM_NAMES:
            if name not in profile_params:
                continue
            value = profile_params[name]
            seen = resolved.get(name)
            if seen is not None and seen[0] != value:
                raise ParameterConflictError(
                    parameter=name,
                    profile=profile,
                    value=value,
                    other_profile=seen[1],
                    other_value=seen[0],
                )
            if seen is None:
                resolved[name] = (value, profile)
    return {name: value for name, (value, _) in resolved.items()}


def resolve_ds_params(cdn: str, reader: StoreReader) -> dict[str, str]:
    """Fetch and resolve the delivery service parameters of a CDN."""
    return get_ds_params(get_server_profile_params(cdn, reader))
