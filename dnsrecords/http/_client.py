import dataclasses as dc
import logging

import httpx


logger = logging.getLogger(__name__)

DNS_JSON = 'application/dns-json'


def _base_limits() -> httpx.Limits:
    return httpx.Limits(
        max_connections=10,
        max_keepalive_connections=5,
        keepalive_expiry=15,
    )


def _base_timeouts() -> httpx.Timeout:
    return httpx.Timeout(
        connect=2.0,
        read=2.0,
        write=2.0,
        pool=2.0,
    )


def _default_headers() -> dict[str, str]:
    return {
        'Accept': DNS_JSON,
        'User-Agent': 'dnsrecords',
    }


def log_request(request: httpx.Request) -> None:
    logger.debug(f'Sending request: {request.method} {request.url}')


@dc.dataclass(slots=True)
class ClientConfig:
    '''
    Configuration options for the DNS-over-HTTPS client.
    The timeout here is a ceiling, each query passes its own
    per-attempt timeout.
    '''
    timeout: httpx.Timeout = dc.field(default_factory=_base_timeouts)
    limits: httpx.Limits = dc.field(default_factory=_base_limits)
    http2: bool = True
    follow_redirects: bool = True
    trust_env: bool = False


class DohClient(httpx.Client):
    '''
    Thin wrapper around httpx.Client with defaults for
    DNS JSON API endpoints.
    '''

    def __init__(
        self,
        *,
        headers: dict[str, str] | None = None,
        config: ClientConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config: ClientConfig = config or ClientConfig()

        if transport is None:
            transport = httpx.HTTPTransport(
                http2=self._config.http2,
                trust_env=self._config.trust_env,
            )

        all_headers = _default_headers()
        if headers:
            all_headers.update(headers)

        super().__init__(
            transport=transport,
            limits=self._config.limits,
            timeout=self._config.timeout,
            headers=all_headers,
            follow_redirects=self._config.follow_redirects,
            trust_env=self._config.trust_env,
            event_hooks={'request': [log_request]},
        )

    @property
    def config(self) -> ClientConfig:
        return self._config
