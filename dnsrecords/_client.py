import logging
import re
from collections.abc import Sequence

from dnsrecords._backends import DnsPythonBackend, ResolveBackend
from dnsrecords._errors import CouldNotFetchDns, InvalidArgument, ResolveFailed
from dnsrecords._parser import RawAnswer
from dnsrecords._retry import NoAttemptsLeftError, retry_policy

logger = logging.getLogger(__name__)

_SCHEME = re.compile(r'^[a-z][a-z0-9+.-]*://', re.IGNORECASE)


def normalize_hostname(hostname: str) -> str:
    '''
    Strip whitespace, a URL scheme and any path from a hostname and
    lowercase it.

    Parameters
    ----------
    hostname : str

    Returns
    -------
    str

    Raises
    ------
    InvalidArgument
        If nothing is left of the hostname.
    '''
    if not isinstance(hostname, str):
        raise InvalidArgument(f"Hostname must be a string, got {type(hostname).__name__}")

    host = _SCHEME.sub('', hostname.strip())
    host = host.split('/', 1)[0].strip().lower()
    if not host:
        raise InvalidArgument("A hostname is required, got an empty string")
    return host


class ResolverClient:
    '''
    Runs queries against a resolve backend with a retry policy.
    '''

    def __init__(
        self,
        backend: ResolveBackend | None = None,
        *,
        retry_delay: float = 0.1,
    ) -> None:
        self.backend: ResolveBackend = backend or DnsPythonBackend()
        self.retry_delay = retry_delay

    def query(
        self,
        hostname: str,
        rtypes: Sequence[str],
        *,
        nameserver: str | None = None,
        timeout: float = 2,
        retries: int = 2,
    ) -> list[RawAnswer]:
        '''
        Query every type in `rtypes` for a hostname in one backend call,
        retrying failed attempts.

        Parameters
        ----------
        hostname : str
        rtypes : Sequence[str]
            canonical record type names
        nameserver : str | None, optional
            nameserver override, by default None (system default)
        timeout : float, optional
            seconds allowed for each attempt, by default 2
        retries : int, optional
            attempts made after a failed first attempt, by default 2

        Returns
        -------
        list[RawAnswer]

        Raises
        ------
        InvalidArgument
            If the hostname is blank or no types are given.
        CouldNotFetchDns
            If all `retries + 1` attempts failed.
        '''
        host = normalize_hostname(hostname)
        if not rtypes:
            raise InvalidArgument("At least one record type is required")
        if retries < 0:
            raise InvalidArgument(f"Retries must not be negative, got {retries}")

        policy = retry_policy(
            attempts=retries + 1,
            delay=self.retry_delay,
            retry_on=(ResolveFailed,),
        )
        logger.debug(
            f"Resolving {host} ({', '.join(rtypes)}) via {nameserver or 'default nameserver'}"
        )
        try:
            return policy.call_with_retries(
                self.backend.resolve,
                host,
                list(rtypes),
                nameserver,
                timeout,
            )
        except NoAttemptsLeftError as exc:
            raise CouldNotFetchDns(host, nameserver, policy.attempts) from exc
