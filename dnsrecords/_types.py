import enum
import logging
from collections.abc import Iterable

from dnsrecords._errors import InvalidArgument

logger = logging.getLogger(__name__)


class RecordFlag(enum.IntFlag):
    '''
    Bitmask flags for record types, using the values of the
    platform `DNS_*` constants so flags can be OR-combined.
    '''
    A = 1
    NS = 2
    CNAME = 16
    SOA = 32
    PTR = 2048
    CAA = 8192
    MX = 16384
    TXT = 32768
    SRV = 33554432
    AAAA = 134217728
    ALL = A | NS | CNAME | SOA | PTR | CAA | MX | TXT | SRV | AAAA


ALL_TYPES = '*'

_FLAG_NAMES: dict[int, str] = {
    flag.value: flag.name
    for flag in RecordFlag
    if flag is not RecordFlag.ALL and flag.name is not None
}

TypeSpec = None | int | str | Iterable[int | str]


class TypeResolver:
    '''
    Normalizes a type spec (flag, type name, list of either, or "all")
    into canonical type names known to a handler registry.
    '''

    __slots__ = ('_known',)

    def __init__(self, known_types: Iterable[str]) -> None:
        self._known: tuple[str, ...] = tuple(known_types)

    @property
    def known_types(self) -> tuple[str, ...]:
        return self._known

    def resolve(self, spec: TypeSpec = None) -> tuple[str, ...]:
        '''
        Resolve a type spec to the canonical type names it selects.

        Parameters
        ----------
        spec : TypeSpec, optional
            None or "*" select every known type, by default None

        Returns
        -------
        tuple[str, ...]
            type names, ordered like the registry's known types

        Raises
        ------
        InvalidArgument
            If any part of the spec is empty or unknown.
        '''
        if spec is None or spec == ALL_TYPES:
            return self._known

        names = self._collect(spec)
        resolved = tuple(name for name in self._known if name in names)
        logger.debug(f"Resolved type spec {spec!r} to {resolved}")
        return resolved

    def _collect(self, spec: object) -> set[str]:
        if isinstance(spec, bool):
            raise InvalidArgument(f"Invalid record type: {spec!r}")

        if isinstance(spec, int):
            return self._from_flags(spec)

        if isinstance(spec, str):
            if spec.strip() == ALL_TYPES:
                return set(self._known)
            return {self._from_name(spec)}

        if isinstance(spec, (list, tuple, set, frozenset)):
            if not spec:
                raise InvalidArgument("No record types given")
            names: set[str] = set()
            for item in spec:
                names |= self._collect(item)
            return names

        raise InvalidArgument(f"Invalid record type specification: {spec!r}")

    def _from_flags(self, flags: int) -> set[str]:
        if flags == RecordFlag.ALL:
            return set(self._known)

        if flags <= 0 or flags & ~RecordFlag.ALL.value:
            raise InvalidArgument(f"Invalid record type flag: {flags}")

        names = {
            name for value, name in _FLAG_NAMES.items()
            if flags & value
        }
        for name in names:
            if name not in self._known:
                raise InvalidArgument(f"No handler for record type flag {name}")
        return names

    def _from_name(self, name: str) -> str:
        normalized = name.strip().upper()
        if not normalized:
            raise InvalidArgument("Record type name must not be empty")

        if normalized not in self._known:
            raise InvalidArgument(f"Invalid record type: {name!r}")
        return normalized
