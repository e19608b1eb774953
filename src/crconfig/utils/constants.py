"""CRConfig Constants and Defaulting Values."""

# CDN-wide SOA record (seconds). Shared by every delivery service.
CDN_SOA_MINIMUM: int = 30
CDN_SOA_EXPIRE: int = 604800  # 7 days
CDN_SOA_RETRY: int = 7200  # 2 hours
CDN_SOA_REFRESH: int = 28800  # 8 hours
CDN_SOA_ADMIN: str = "traffic_ops"

# TLD TTL defaults, overridable through profile parameters
DEFAULT_TLD_TTL_NS: int = 3600
DEFAULT_TLD_TTL_SOA: int = 86400

TLD_TTL_NS_PARAM: str = "tld.ttls.NS"
TLD_TTL_SOA_PARAM: str = "tld.ttls.SOA"
LOG_REQUEST_HEADERS_PARAM: str = "LogRequestHeaders"

# Server profile parameters relevant to delivery services.
# Order matters only for which conflict gets reported first.
DS_PARAM_NAMES: tuple[str, ...] = (
    "tld.soa.admin",
    "tld.soa.expire",
    "tld.soa.minimum",
    "tld.soa.refresh",
    "tld.soa.retry",
    TLD_TTL_SOA_PARAM,
    TLD_TTL_NS_PARAM,
    LOG_REQUEST_HEADERS_PARAM,
)

# Geolocation providers by database code
GEO_PROVIDER_MAXMIND: str = "maxmindGeolocationService"
GEO_PROVIDER_NEUSTAR: str = "neustarGeolocationService"
GEO_PROVIDERS: dict[int, str] = {
    0: GEO_PROVIDER_MAXMIND,
    1: GEO_PROVIDER_NEUSTAR,
}
DEFAULT_GEO_PROVIDER_CODE: int = 0

# Protocol code -> (accept_http, accept_https, redirect_to_https)
PROTOCOLS: dict[int, tuple[bool, bool, bool]] = {
    0: (True, False, False),  # HTTP
    1: (False, True, False),  # HTTPS
    2: (True, True, False),  # HTTP and HTTPS
    3: (True, True, True),  # HTTP to HTTPS
}
DEFAULT_PROTOCOL_CODE: int = 0

# Geo-limit codes
GEO_LIMIT_NONE: int = 0
GEO_LIMIT_CZF_ONLY: int = 1

# Routing axes
PROTOCOL_DNS: str = "DNS"
PROTOCOL_HTTP: str = "HTTP"
DNS_TYPE_PREFIX: str = "DNS"

# Regex type name -> match type
REGEX_MATCH_TYPES: dict[str, str] = {
    "HOST_REGEXP": "HOST",
    "PATH_REGEXP": "PATH",
    "HEADER_REGEXP": "HEADER",
}
HOST_REGEX_TYPE: str = "HOST_REGEXP"

# Traffic router header rewrites are stored as one column joined by this token
HEADER_DELIMITER: str = "__RETURN__"
HEADER_VALUE_STRIP: str = ' \t\r\n"'

# Static DNS entry type names carry this suffix in the type table
STATIC_DNS_TYPE_SUFFIX: str = "_RECORD"
