"""Pytest configuration and fixtures."""

from collections.abc import Sequence
from typing import Any

import pytest

from dnsrecords import Dns, ResolveFailed, ResolverClient, ResolverConfig


def raw(host: str, rtype: str, ttl: int = 300, **fields: Any) -> dict[str, Any]:
    """Build a raw answer the way the resolve backends do."""
    answer = {"host": host, "class": "IN", "ttl": ttl, "type": rtype}
    answer.update(fields)
    return answer


SPATIE_ANSWERS: dict[str, list[dict[str, Any]]] = {
    "A": [raw("spatie.be.", "A", 900, address="138.197.187.74")],
    "AAAA": [raw("spatie.be.", "AAAA", 900, address="2a03:b0c0:2:d0::11a1:1")],
    "NS": [
        raw("spatie.be.", "NS", 86400, target="ns1.openminds.be."),
        raw("spatie.be.", "NS", 86400, target="ns2.openminds.be."),
    ],
    "SOA": [
        raw(
            "spatie.be.", "SOA", 86400,
            mname="ns1.openminds.be.",
            rname="admin.openminds.be.",
            serial=2020100801,
            refresh=14400,
            retry=3600,
            expire=604800,
            minimum=86400,
        )
    ],
    "MX": [
        raw("spatie.be.", "MX", 300, priority=10, exchange="aspmx.l.google.com."),
        raw("spatie.be.", "MX", 300, priority=20, exchange="alt1.aspmx.l.google.com."),
    ],
    "TXT": [raw("spatie.be.", "TXT", 300, text="v=spf1 include:_spf.google.com ~all")],
    "CAA": [raw("spatie.be.", "CAA", 300, flags=0, tag="issue", value="letsencrypt.org")],
}

ONE_PER_TYPE: dict[str, list[dict[str, Any]]] = {
    "A": [raw("spatie.be.", "A", address="138.197.187.74")],
    "AAAA": [raw("spatie.be.", "AAAA", address="2a03:b0c0:2:d0::11a1:1")],
    "CNAME": [raw("spatie.be.", "CNAME", target="spatie.github.io.")],
    "NS": [raw("spatie.be.", "NS", target="ns1.openminds.be.")],
    "PTR": [raw("spatie.be.", "PTR", target="spatie.be.")],
    "SOA": SPATIE_ANSWERS["SOA"],
    "MX": [raw("spatie.be.", "MX", priority=10, exchange="aspmx.l.google.com.")],
    "SRV": [raw("spatie.be.", "SRV", priority=10, weight=5, port=5060, target="sip.spatie.be.")],
    "TXT": SPATIE_ANSWERS["TXT"],
    "CAA": SPATIE_ANSWERS["CAA"],
}


class FakeBackend:
    """Resolve backend returning canned answers per record type."""

    def __init__(
        self,
        answers: dict[str, list[dict[str, Any]]] | None = None,
        *,
        failures: int = 0,
    ) -> None:
        self.answers = answers or {}
        self.failures = failures
        self.calls: list[dict[str, Any]] = []

    def resolve(
        self,
        hostname: str,
        rtypes: Sequence[str],
        nameserver: str | None = None,
        timeout: float = 2,
    ) -> list[dict[str, Any]]:
        self.calls.append({
            "hostname": hostname,
            "rtypes": list(rtypes),
            "nameserver": nameserver,
            "timeout": timeout,
        })
        if len(self.calls) <= self.failures:
            raise ResolveFailed(f"attempt {len(self.calls)} timed out")

        results = []
        for rtype in rtypes:
            results.extend(dict(answer) for answer in self.answers.get(rtype, []))
        return results


class FailingBackend(FakeBackend):
    """Backend whose every attempt fails."""

    def __init__(self) -> None:
        super().__init__(failures=10**6)


def make_dns(backend: FakeBackend) -> Dns:
    return Dns(ResolverConfig(retry_delay=0), backend=backend)


@pytest.fixture
def spatie_backend() -> FakeBackend:
    """Backend answering like spatie.be."""
    return FakeBackend(SPATIE_ANSWERS)


@pytest.fixture
def dns_client(spatie_backend: FakeBackend) -> Dns:
    """Dns facade backed by the spatie.be answers."""
    return make_dns(spatie_backend)


@pytest.fixture
def resolver_client(spatie_backend: FakeBackend) -> ResolverClient:
    return ResolverClient(spatie_backend, retry_delay=0)
