import dataclasses as dc


@dc.dataclass(slots=True)
class ResolverConfig:
    '''
    Options for DNS lookups.

    `retries` counts the attempts made after the first one failed,
    so a query makes at most `retries + 1` attempts. `timeout` bounds
    each attempt as a whole, across the queries it makes for every type.
    '''
    nameserver: str | None = None
    timeout: float = 2
    retries: int = 2
    retry_delay: float = 0.1

    @property
    def attempts(self) -> int:
        return self.retries + 1
