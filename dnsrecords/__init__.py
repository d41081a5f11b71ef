'''
**dnsrecords**
-------------


DNS record lookups returning typed, immutable records.
See: `dnsrecords._core` for the `Dns` facade and `dnsrecords._records` for the records.
'''
from dnsrecords._backends import (
    DEFAULT_DOH_URL,
    DnsPythonBackend,
    DohBackend,
    ResolveBackend,
)
from dnsrecords._client import ResolverClient, normalize_hostname
from dnsrecords._core import Dns, get_reversename
from dnsrecords._errors import CouldNotFetchDns, InvalidArgument, ResolveFailed
from dnsrecords._handlers import (
    CallableHandler,
    Handler,
    HandlerRegistry,
    RecordHandler,
    default_handlers,
)
from dnsrecords._models import ResolverConfig
from dnsrecords._records import (
    RECORD_TYPES,
    AAAARecord,
    ARecord,
    CAARecord,
    CNAMERecord,
    DNSRecord,
    MXRecord,
    NSRecord,
    PTRRecord,
    Record,
    SOARecord,
    SRVRecord,
    TXTRecord,
    make_record,
    parse_record,
)
from dnsrecords._types import RecordFlag, TypeResolver

__all__ = [
    "DEFAULT_DOH_URL",
    "DnsPythonBackend",
    "DohBackend",
    "ResolveBackend",
    "ResolverClient",
    "normalize_hostname",
    "Dns",
    "get_reversename",
    "CouldNotFetchDns",
    "InvalidArgument",
    "ResolveFailed",
    "CallableHandler",
    "Handler",
    "HandlerRegistry",
    "RecordHandler",
    "default_handlers",
    "ResolverConfig",
    "RECORD_TYPES",
    "AAAARecord",
    "ARecord",
    "CAARecord",
    "CNAMERecord",
    "DNSRecord",
    "MXRecord",
    "NSRecord",
    "PTRRecord",
    "Record",
    "SOARecord",
    "SRVRecord",
    "TXTRecord",
    "make_record",
    "parse_record",
    "RecordFlag",
    "TypeResolver",
]
