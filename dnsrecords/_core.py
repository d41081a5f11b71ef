import logging
from collections.abc import Iterable
from typing import Any, Self

import dns.exception
import dns.reversename

from dnsrecords._backends import ResolveBackend
from dnsrecords._client import ResolverClient, normalize_hostname
from dnsrecords._errors import InvalidArgument
from dnsrecords._handlers import Handler, HandlerRegistry
from dnsrecords._models import ResolverConfig
from dnsrecords._types import TypeResolver, TypeSpec

logger = logging.getLogger(__name__)


def get_reversename(ip: str) -> str:
    '''
    Get the reverse DNS name for an IP address.

    Parameters
    ----------
    ip : str

    Returns
    -------
    str
        e.g. `1.73.1.5.in-addr.arpa` for `5.1.73.1`

    Raises
    ------
    InvalidArgument
    '''
    try:
        addr = dns.reversename.from_address(ip.strip())
    except (dns.exception.SyntaxError, ValueError) as e:
        raise InvalidArgument(f"Invalid IP address {ip}: {e}") from e
    return str(addr).rstrip('.')


class Dns:
    '''
    DNS record lookups returning typed records.

    >>> Dns.query().use_nameserver('1.1.1.1').get_records('example.com', ['A', 'MX'])

    Configuration is per instance and is changed in place by the fluent
    setters, so use separate instances for concurrent lookups.
    '''

    def __init__(
        self,
        config: ResolverConfig | None = None,
        *,
        backend: ResolveBackend | None = None,
        handlers: Iterable[Handler] | None = None,
        client: ResolverClient | None = None,
    ) -> None:
        self._config = config or ResolverConfig()
        self._client = client or ResolverClient(
            backend,
            retry_delay=self._config.retry_delay,
        )
        self._registry = HandlerRegistry()
        if handlers is not None:
            self._registry.use_handlers(handlers)

    @classmethod
    def query(cls) -> Self:
        return cls()

    def use_nameserver(self, nameserver: str) -> Self:
        if not nameserver or not nameserver.strip():
            raise InvalidArgument("Nameserver must not be empty")
        self._config.nameserver = nameserver.strip()
        return self

    def get_nameserver(self) -> str | None:
        return self._config.nameserver

    def set_timeout(self, timeout: float) -> Self:
        if timeout <= 0:
            raise InvalidArgument(f"Timeout must be positive, got {timeout}")
        self._config.timeout = timeout
        return self

    def get_timeout(self) -> float:
        return self._config.timeout

    def set_retries(self, retries: int) -> Self:
        if retries < 0:
            raise InvalidArgument(f"Retries must not be negative, got {retries}")
        self._config.retries = retries
        return self

    def get_retries(self) -> int:
        return self._config.retries

    def use_handlers(self, handlers: Iterable[Handler]) -> Self:
        '''
        Register handlers by the record type each one declares, replacing
        the handler currently used for that type.

        Parameters
        ----------
        handlers : Iterable[Handler]

        Returns
        -------
        Self
        '''
        self._registry.use_handlers(handlers)
        return self

    def use_backend(self, backend: ResolveBackend) -> Self:
        self._client.backend = backend
        return self

    def get_records(self, hostname: str, types: TypeSpec = None) -> list[Any]:
        '''
        Look up the records of a hostname.

        Parameters
        ----------
        hostname : str
            the name to look up, a reverse name (`...in-addr.arpa`) for PTR
        types : TypeSpec, optional
            a `RecordFlag` (may be OR-combined), a type name, a list of either,
            or None / "*" for every known type, by default None

        Returns
        -------
        list[Any]
            records of the requested types in answer order; the results of
            custom handlers are returned as they are

        Raises
        ------
        InvalidArgument
            If the hostname is empty or the type spec is not recognized.
        CouldNotFetchDns
            If every attempt to reach the nameserver failed.
        '''
        host = normalize_hostname(hostname)
        rtypes = TypeResolver(self._registry.known_types()).resolve(types)
        raw_answers = self._client.query(
            host,
            rtypes,
            nameserver=self._config.nameserver,
            timeout=self._config.timeout,
            retries=self._config.retries,
        )

        requested = set(rtypes)
        records = []
        for answer in raw_answers:
            rtype = str(answer.get('type', '')).upper()
            if not self._registry.handles(rtype):
                logger.debug(f"No handler for {rtype} answer of {answer.get('host')}, skipping")
                continue

            result = self._registry.resolve(rtype).handle(answer)
            if rtype in requested:
                records.append(result)

        logger.debug(f"Found {len(records)} records for {host}")
        return records

    def get_reverse_records(self, ip: str) -> list[Any]:
        return self.get_records(get_reversename(ip), 'PTR')

    @property
    def config(self) -> ResolverConfig:
        return self._config

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    @property
    def client(self) -> ResolverClient:
        return self._client
