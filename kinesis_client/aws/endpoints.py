"""
Static endpoint resolution of the Kinesis service.

The regions of the ``aws`` partition share the default endpoint pattern, the table only lists the regions which
deviate from it (other partitions and the FIPS pseudo-regions).
"""
from typing import Dict, List, NamedTuple, Optional

from kinesis_client import config
from kinesis_client.constants import (
    ENDPOINT_REGION_PLACEHOLDER,
    KINESIS_SERVICE_NAME,
    SIGNATURE_VERSION_V4,
)


class EndpointMetadata(NamedTuple):
    """
    Where and how a request is sent.

    Attributes:
        endpoint        The base URL of the service (scheme, host and optional port)
        sign_region     The region used in the credential scope of the signature
        sign_service    The service name used in the credential scope of the signature
        sign_versions   The signature versions supported by the endpoint
    """

    endpoint: str
    sign_region: str
    sign_service: str
    sign_versions: List[str]


DEFAULT_ENDPOINT_PATTERN = "https://{service}.{region}.amazonaws.com"

# region -> (endpoint pattern, sign region); a sign region of None means the requested region
KINESIS_ENDPOINTS: Dict[str, tuple] = {
    "cn-north-1": ("https://{service}.{region}.amazonaws.com.cn", None),
    "cn-northwest-1": ("https://{service}.{region}.amazonaws.com.cn", None),
    "us-iso-east-1": ("https://{service}.{region}.c2s.ic.gov", None),
    "us-isob-east-1": ("https://{service}.{region}.sc2s.sgov.gov", None),
    "fips-us-east-1": ("https://{service}-fips.us-east-1.amazonaws.com", "us-east-1"),
    "fips-us-east-2": ("https://{service}-fips.us-east-2.amazonaws.com", "us-east-2"),
    "fips-us-west-1": ("https://{service}-fips.us-west-1.amazonaws.com", "us-west-1"),
    "fips-us-west-2": ("https://{service}-fips.us-west-2.amazonaws.com", "us-west-2"),
    "us-gov-east-1": (DEFAULT_ENDPOINT_PATTERN, None),
    "us-gov-west-1": (DEFAULT_ENDPOINT_PATTERN, None),
}


def resolve_endpoint(
    region: Optional[str],
    endpoint_url: Optional[str] = None,
    service: str = KINESIS_SERVICE_NAME,
    endpoints: Dict[str, tuple] = None,
) -> EndpointMetadata:
    """
    Resolves the endpoint and the signing parameters for the given region.

    :param region: the region of the request, ``config.DEFAULT_REGION`` is used if it is not set
    :param endpoint_url: a custom endpoint which replaces the endpoint of the table, the placeholder ``%region%`` is
                         replaced with the region of the request
    :param service: the name of the service (host prefix and signing name)
    :param endpoints: the table of regions which deviate from the default endpoint pattern
    :return: the resolved EndpointMetadata
    """
    region = region or config.DEFAULT_REGION
    if endpoints is None:
        endpoints = KINESIS_ENDPOINTS

    if endpoint_url:
        endpoint = endpoint_url.replace(ENDPOINT_REGION_PLACEHOLDER, region).rstrip("/")
        return EndpointMetadata(endpoint, region, service, [SIGNATURE_VERSION_V4])

    pattern, sign_region = endpoints.get(region, (DEFAULT_ENDPOINT_PATTERN, None))
    endpoint = pattern.format(service=service, region=region)
    return EndpointMetadata(endpoint, sign_region or region, service, [SIGNATURE_VERSION_V4])
