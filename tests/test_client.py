"""Tests for the resolver client."""

import pytest

from conftest import SPATIE_ANSWERS, FailingBackend, FakeBackend
from dnsrecords import (
    CouldNotFetchDns,
    DnsPythonBackend,
    InvalidArgument,
    ResolverClient,
    normalize_hostname,
)


class TestNormalizeHostname:
    """Tests for hostname sanitizing."""

    @pytest.mark.parametrize("hostname, expected", [
        ("spatie.be", "spatie.be"),
        ("  Spatie.BE ", "spatie.be"),
        ("https://spatie.be", "spatie.be"),
        ("http://spatie.be/blog/post?x=1", "spatie.be"),
        ("1.73.1.5.in-addr.arpa.", "1.73.1.5.in-addr.arpa."),
    ])
    def test_normalizes(self, hostname, expected):
        assert normalize_hostname(hostname) == expected

    @pytest.mark.parametrize("hostname", ["", "   ", "https://", "/path", None, 42])
    def test_rejects_empty(self, hostname):
        with pytest.raises(InvalidArgument):
            normalize_hostname(hostname)


class TestQuery:
    """Tests for ResolverClient.query."""

    def test_defaults_to_dnspython_backend(self):
        assert isinstance(ResolverClient().backend, DnsPythonBackend)

    def test_returns_raw_answers(self, resolver_client, spatie_backend):
        answers = resolver_client.query("spatie.be", ["NS", "MX"], nameserver="1.1.1.1", timeout=5)

        assert [answer["type"] for answer in answers] == ["NS", "NS", "MX", "MX"]
        assert spatie_backend.calls == [{
            "hostname": "spatie.be",
            "rtypes": ["NS", "MX"],
            "nameserver": "1.1.1.1",
            "timeout": 5,
        }]

    def test_blank_hostname_never_reaches_backend(self, resolver_client, spatie_backend):
        with pytest.raises(InvalidArgument):
            resolver_client.query("  ", ["A"])
        assert spatie_backend.calls == []

    def test_requires_types(self, resolver_client):
        with pytest.raises(InvalidArgument):
            resolver_client.query("spatie.be", [])

    def test_rejects_negative_retries(self, resolver_client):
        with pytest.raises(InvalidArgument):
            resolver_client.query("spatie.be", ["A"], retries=-1)


class TestRetries:
    """retries=N allows N retries after the first attempt."""

    @pytest.mark.parametrize("retries", [0, 1, 2, 5])
    def test_attempts_are_retries_plus_one(self, retries):
        backend = FailingBackend()
        client = ResolverClient(backend, retry_delay=0)

        with pytest.raises(CouldNotFetchDns) as exc_info:
            client.query("spatie.be", ["A"], nameserver="dns.spatie.be", retries=retries)

        assert len(backend.calls) == retries + 1
        assert exc_info.value.attempts == retries + 1
        assert exc_info.value.hostname == "spatie.be"
        assert exc_info.value.nameserver == "dns.spatie.be"
        assert "dns.spatie.be" in str(exc_info.value)

    def test_every_attempt_uses_same_settings(self):
        backend = FakeBackend(SPATIE_ANSWERS, failures=2)
        client = ResolverClient(backend, retry_delay=0)

        answers = client.query("spatie.be", ["A"], nameserver="1.1.1.1", timeout=3, retries=2)

        assert [answer["address"] for answer in answers] == ["138.197.187.74"]
        assert len(backend.calls) == 3
        assert all(call == backend.calls[0] for call in backend.calls)

    def test_invalid_argument_is_not_retried(self):
        class RejectingBackend(FakeBackend):
            def resolve(self, hostname, rtypes, nameserver=None, timeout=2):
                self.calls.append(hostname)
                raise InvalidArgument("FOO is not a DNS record type")

        backend = RejectingBackend()
        with pytest.raises(InvalidArgument):
            ResolverClient(backend, retry_delay=0).query("spatie.be", ["FOO"])
        assert len(backend.calls) == 1

    def test_failure_without_nameserver_mentions_default(self):
        with pytest.raises(CouldNotFetchDns) as exc_info:
            ResolverClient(FailingBackend(), retry_delay=0).query("spatie.be", ["A"], retries=0)
        assert exc_info.value.nameserver is None
        assert "default nameserver" in str(exc_info.value)
