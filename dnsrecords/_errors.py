class InvalidArgument(ValueError):
    '''
    Raised before any network activity when a hostname, type spec,
    configuration value or record field is rejected.

    Parent: ValueError
    '''


class ResolveFailed(Exception):
    '''
    Raised by a resolve backend when a single attempt fails
    (timeout, unreachable nameserver, server failure). The resolver
    client retries on it.
    '''


class CouldNotFetchDns(Exception):
    '''
    Raised when every attempt of a query failed.

    Attributes
    ----------
    hostname : str
    nameserver : str | None
        The nameserver override, None when the system default was used
    attempts : int
    '''

    def __init__(self, hostname: str, nameserver: str | None, attempts: int) -> None:
        self.hostname = hostname
        self.nameserver = nameserver
        self.attempts = attempts
        server = nameserver or 'the default nameserver'
        super().__init__(
            f"Could not fetch DNS records for {hostname} using {server} "
            f"after {attempts} attempts"
        )
