'''
Resolve backends: the primitives that talk to nameservers and hand back
raw answer mappings (`host`, `class`, `ttl`, `type` + rdata fields).

A backend raises `ResolveFailed` when an attempt fails and the query is
worth retrying, and returns an empty list when the name does not exist.
'''
import ipaddress
import logging
import time
from collections.abc import Sequence
from typing import Any, Protocol

import dns.exception
import dns.name
import dns.rcode
import dns.rdata
import dns.rdataclass
import dns.rdatatype
import dns.resolver
import httpx

from dnsrecords import http
from dnsrecords._errors import InvalidArgument, ResolveFailed
from dnsrecords._parser import RawAnswer, iter_rrsets, raw_answer

logger = logging.getLogger(__name__)

DEFAULT_DOH_URL = 'https://cloudflare-dns.com/dns-query'


class ResolveBackend(Protocol):
    def resolve(
        self,
        hostname: str,
        rtypes: Sequence[str],
        nameserver: str | None = None,
        timeout: float = 2,
    ) -> list[RawAnswer]:
        ...


def _check_rtype(rtype: str) -> dns.rdatatype.RdataType:
    try:
        return dns.rdatatype.from_text(rtype)
    except dns.rdatatype.UnknownRdatatype as exc:
        raise InvalidArgument(f"{rtype} is not a DNS record type") from exc


def _remaining(deadline: float, what: str) -> float:
    left = deadline - time.monotonic()
    if left <= 0:
        raise ResolveFailed(f"Attempt timed out before {what}")
    return left


def _is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


class DnsPythonBackend:
    '''
    Resolves through `dns.resolver.Resolver`, one query per record type.

    Every rrset of the answer section is returned, which includes the
    CNAME chain leading to the requested records.
    '''

    def __init__(
        self,
        *,
        filename: str = '/etc/resolv.conf',
        configure: bool = True,
        port: int = 53,
        tcp: bool = False,
    ) -> None:
        self.filename = filename
        self.configure = configure
        self.port = port
        self.tcp = tcp

    def _make_resolver(self, timeout: float) -> dns.resolver.Resolver:
        resolver = dns.resolver.Resolver(
            filename=self.filename,
            configure=self.configure,
        )
        resolver.timeout = timeout
        resolver.lifetime = timeout
        resolver.port = self.port
        return resolver

    def nameserver_addresses(
        self,
        nameserver: str,
        timeout: float,
        deadline: float | None = None,
    ) -> list[str]:
        '''
        Addresses to send queries to for a nameserver given by IP or hostname.

        Parameters
        ----------
        nameserver : str
        timeout : float
        deadline : float | None, optional
            `time.monotonic()` value the lookup must finish by,
            by default now + timeout

        Returns
        -------
        list[str]

        Raises
        ------
        ResolveFailed
            If the nameserver hostname does not resolve.
        '''
        if _is_ip_literal(nameserver):
            return [nameserver]

        if deadline is None:
            deadline = time.monotonic() + timeout

        resolver = self._make_resolver(timeout)
        addresses: list[str] = []
        for rtype in ('A', 'AAAA'):
            lifetime = _remaining(deadline, f"resolving nameserver {nameserver}")
            try:
                answer = resolver.resolve(
                    nameserver,
                    rtype,
                    lifetime=lifetime,
                    raise_on_no_answer=False,
                    search=False,
                )
            except dns.resolver.NXDOMAIN as exc:
                raise ResolveFailed(f"Nameserver {nameserver} does not exist") from exc
            except dns.exception.DNSException as exc:
                raise ResolveFailed(f"Could not resolve nameserver {nameserver}: {exc}") from exc
            addresses.extend(rdata.address for rdata in answer)

        if not addresses:
            raise ResolveFailed(f"Nameserver {nameserver} has no addresses")
        return addresses

    def resolve(
        self,
        hostname: str,
        rtypes: Sequence[str],
        nameserver: str | None = None,
        timeout: float = 2,
    ) -> list[RawAnswer]:
        for rtype in rtypes:
            _check_rtype(rtype)

        deadline = time.monotonic() + timeout
        resolver = self._make_resolver(timeout)
        if nameserver:
            resolver.nameservers = self.nameserver_addresses(nameserver, timeout, deadline)

        answers: list[RawAnswer] = []
        seen: set[tuple[Any, ...]] = set()
        for rtype in rtypes:
            logger.debug(f"Querying {rtype} records for {hostname}")
            lifetime = _remaining(deadline, f"the {rtype} query for {hostname}")
            try:
                answer = resolver.resolve(
                    hostname,
                    rtype,
                    tcp=self.tcp,
                    lifetime=lifetime,
                    raise_on_no_answer=False,
                    search=False,
                )
            except dns.resolver.NXDOMAIN:
                logger.debug(f"Domain {hostname} does not exist")
                return []
            except dns.exception.DNSException as exc:
                raise ResolveFailed(f"{rtype} query for {hostname} failed: {exc}") from exc

            for rrset in answer.response.answer:
                key = (rrset.name, rrset.rdclass, rrset.rdtype)
                if key in seen:
                    continue
                seen.add(key)
                answers.extend(iter_rrsets([rrset]))

        return answers


def doh_url(nameserver: str | None, default: str = DEFAULT_DOH_URL) -> str:
    '''
    The DNS JSON API endpoint for a nameserver; a bare host maps
    to `https://<host>/dns-query`.

    Parameters
    ----------
    nameserver : str | None
    default : str, optional
        used when no nameserver is set, by default DEFAULT_DOH_URL

    Returns
    -------
    str
    '''
    if not nameserver:
        return default
    if '://' in nameserver:
        return nameserver
    return f'https://{nameserver.strip("/")}/dns-query'


def _presentation_data(rdtype: dns.rdatatype.RdataType, data: str) -> str:
    # some providers send TXT data unquoted
    if rdtype == dns.rdatatype.TXT and not data.startswith('"'):
        escaped = data.replace('\\', '\\\\').replace('"', '\\"')
        return f'"{escaped}"'
    return data


def answer_from_json(entry: Any) -> RawAnswer | None:
    '''
    Convert one entry of a DNS JSON `Answer` list into a raw answer.

    Parameters
    ----------
    entry : Any
        `{"name": ..., "type": <int>, "TTL": ..., "data": ...}`

    Returns
    -------
    RawAnswer | None
        None when the entry cannot be parsed
    '''
    try:
        host = entry.get('name', '')
        ttl = int(entry.get('TTL', 0))
        rdtype = dns.rdatatype.RdataType.make(int(entry['type']))
        rdata = dns.rdata.from_text(
            dns.rdataclass.IN,
            rdtype,
            _presentation_data(rdtype, str(entry['data'])),
            origin=dns.name.root,
        )
    except (AttributeError, KeyError, TypeError, ValueError, dns.exception.DNSException) as exc:
        logger.warning(f"Skipping malformed DNS JSON answer {entry!r}: {exc}")
        return None

    return raw_answer(host, ttl, rdata)


class DohBackend:
    '''
    Resolves through a DNS-over-HTTPS JSON API (`application/dns-json`),
    one GET request per record type.
    '''

    def __init__(
        self,
        client: http.DohClient | None = None,
        *,
        default_url: str = DEFAULT_DOH_URL,
    ) -> None:
        self._client = client or http.DohClient()
        self.default_url = default_url

    def _fetch(self, url: str, hostname: str, rtype: str, timeout: float) -> dict[str, Any]:
        try:
            response = self._client.get(
                url,
                params={'name': hostname, 'type': rtype},
                timeout=timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise ResolveFailed(f"{rtype} query for {hostname} via {url} failed: {exc}") from exc
        except ValueError as exc:
            raise ResolveFailed(f"Invalid DNS JSON response from {url}: {exc}") from exc

        if not isinstance(payload, dict):
            raise ResolveFailed(f"DNS JSON response from {url} is not an object: {payload!r}")
        return payload

    def resolve(
        self,
        hostname: str,
        rtypes: Sequence[str],
        nameserver: str | None = None,
        timeout: float = 2,
    ) -> list[RawAnswer]:
        for rtype in rtypes:
            _check_rtype(rtype)

        url = doh_url(nameserver, self.default_url)
        deadline = time.monotonic() + timeout
        answers: list[RawAnswer] = []
        seen: set[tuple[Any, ...]] = set()

        for rtype in rtypes:
            logger.debug(f"Querying {rtype} records for {hostname} via {url}")
            remaining = _remaining(deadline, f"the {rtype} query for {hostname}")
            payload = self._fetch(url, hostname, rtype, remaining)

            status = payload.get('Status')
            if status == dns.rcode.NXDOMAIN:
                logger.debug(f"Domain {hostname} does not exist")
                return []
            if status != dns.rcode.NOERROR:
                rcode = dns.rcode.to_text(status) if isinstance(status, int) else status
                raise ResolveFailed(f"{rtype} query for {hostname} via {url} returned {rcode}")

            for entry in payload.get('Answer') or ():
                answer = answer_from_json(entry)
                if answer is None:
                    continue
                key = tuple(sorted((k, str(v)) for k, v in answer.items() if k != 'ttl'))
                if key in seen:
                    continue
                seen.add(key)
                answers.append(answer)

        return answers

    def close(self) -> None:
        self._client.close()
