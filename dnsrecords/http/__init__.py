'''
**dnsrecords.http**
---------

The HTTP client used by the DNS-over-HTTPS backend, an `httpx.Client`
preconfigured for DNS JSON API endpoints.
'''
from dnsrecords.http._client import (
    DNS_JSON,
    ClientConfig,
    DohClient,
)

__all__ = [
    'DNS_JSON',
    'ClientConfig',
    'DohClient',
]
