"""SQL for the CRConfig read operations. Every query takes the CDN name."""

DELIVERY_SERVICES_SQL = """
SELECT d.xml_id, d.miss_lat, d.miss_long, d.protocol, d.ccr_dns_ttl AS ttl,
       d.routing_name, d.geo_provider, t.name AS type, d.geo_limit,
       d.geo_limit_countries, d.geolimit_redirect_url, d.initial_dispersion,
       d.regional_geo_blocking, d.max_dns_answers, p.name AS profile,
       d.dns_bypass_ip, d.dns_bypass_ip6, d.dns_bypass_ttl, d.dns_bypass_cname,
       d.http_bypass_fqdn, d.ipv6_routing_enabled, d.deep_caching_type,
       d.tr_request_headers, d.tr_response_headers, d.anonymous_blocking_enabled
FROM deliveryservice AS d
INNER JOIN type AS t ON t.id = d.type
LEFT OUTER JOIN profile AS p ON p.id = d.profile
WHERE d.cdn_id = (SELECT id FROM cdn WHERE name = %s)
AND d.active = true
"""

STATIC_DNS_ENTRIES_SQL = """
SELECT d.xml_id, e.host AS name, e.ttl, e.address AS value, t.name AS type
FROM staticdnsentry AS e
INNER JOIN deliveryservice AS d ON d.id = e.deliveryservice
INNER JOIN type AS t ON t.id = e.type
WHERE d.cdn_id = (SELECT id FROM cdn WHERE name = %s)
AND d.active = true
ORDER BY e.id
"""

REGEXES_SQL = """
SELECT r.pattern, t.name AS type, dt.name AS ds_type,
       COALESCE(dr.set_number, 0) AS set_number, d.xml_id
FROM regex AS r
INNER JOIN deliveryservice_regex AS dr ON r.id = dr.regex
INNER JOIN deliveryservice AS d ON d.id = dr.deliveryservice
INNER JOIN type AS t ON t.id = r.type
INNER JOIN type AS dt ON dt.id = d.type
WHERE d.cdn_id = (SELECT id FROM cdn WHERE name = %s)
AND d.active = true
ORDER BY dr.set_number ASC
"""

SERVER_PROFILE_PARAMETERS_SQL = """
SELECT parameter.name, parameter.value, profile.name AS profile
FROM profile
INNER JOIN profile_parameter AS pp ON pp.profile = profile.id
INNER JOIN parameter ON parameter.id = pp.parameter
WHERE profile.id IN (
    SELECT profile FROM server
    WHERE server.cdn_id = (SELECT id FROM cdn WHERE name = %s)
)
"""
