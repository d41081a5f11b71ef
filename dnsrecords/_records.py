import dataclasses as dc
import shlex
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar, Self

from dnsrecords._errors import InvalidArgument


def normalize_domain(value: Any) -> str:
    '''
    Lowercase a domain name and make it fully qualified (single trailing dot).

    Parameters
    ----------
    value : Any

    Returns
    -------
    str
    '''
    name = str(value).strip().lower().rstrip('.')
    return f'{name}.'


def _quote(text: str) -> str:
    escaped = text.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class Record:
    '''
    Base class of every DNS resource record.

    The record type is a class level tag (`rtype`) so a record can never
    disagree with its variant; `type` exposes it as a read-only attribute.
    '''
    rtype: ClassVar[str] = ''
    _int_fields: ClassVar[tuple[str, ...]] = ()
    _domain_fields: ClassVar[tuple[str, ...]] = ()
    _rdata_fields: ClassVar[tuple[str, ...]] = ()
    _rdata_join: ClassVar[str] = ' '

    host: str
    ttl: int
    record_class: str = 'IN'

    def __post_init__(self) -> None:
        object.__setattr__(self, 'host', normalize_domain(self.host))
        object.__setattr__(self, 'record_class', str(self.record_class).strip().upper())

        for name in ('ttl', *self._int_fields):
            try:
                object.__setattr__(self, name, int(getattr(self, name)))
            except (TypeError, ValueError) as exc:
                raise InvalidArgument(
                    f"{self.rtype} field '{name}' must be an integer, got {getattr(self, name)!r}"
                ) from exc

        if self.ttl < 0:
            raise InvalidArgument(f"TTL must not be negative, got {self.ttl}")

        for name in self._domain_fields:
            object.__setattr__(self, name, normalize_domain(getattr(self, name)))

    @classmethod
    def make(cls, fields: Mapping[str, Any]) -> Self:
        '''
        Build a record from a raw field mapping, the shape produced by the
        resolve backends (`host`, `class`, `ttl`, `type` + the variant's fields).

        Parameters
        ----------
        fields : Mapping[str, Any]

        Returns
        -------
        Self

        Raises
        ------
        InvalidArgument
            If the mapping describes another record type or misses a field.
        '''
        if not cls.rtype:
            raise InvalidArgument("Record is abstract, use make_record() or a record variant")

        given = str(fields.get('type', cls.rtype)).strip().upper()
        if given != cls.rtype:
            raise InvalidArgument(f"Cannot make a {cls.rtype} record from a {given} answer")

        kwargs = {}
        for field in dc.fields(cls):
            key = 'class' if field.name == 'record_class' else field.name
            if key in fields:
                kwargs[field.name] = fields[key]

        try:
            return cls(**kwargs)
        except TypeError as exc:
            raise InvalidArgument(f"Incomplete {cls.rtype} record fields: {exc}") from exc

    def rdata_text(self) -> str:
        return ' '.join(str(getattr(self, name)) for name in self._rdata_fields)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            'host': self.host,
            'class': self.record_class,
            'ttl': self.ttl,
            'type': self.rtype,
        }
        for name in self._rdata_fields:
            data[name] = getattr(self, name)
        return data

    def __str__(self) -> str:
        return f"{self.host}\t{self.ttl}\t{self.record_class}\t{self.rtype}\t{self.rdata_text()}"

    @property
    def type(self) -> str:
        return self.rtype


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class ARecord(Record):
    rtype: ClassVar[str] = 'A'
    _rdata_fields: ClassVar[tuple[str, ...]] = ('address',)

    address: str


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class AAAARecord(Record):
    rtype: ClassVar[str] = 'AAAA'
    _rdata_fields: ClassVar[tuple[str, ...]] = ('address',)

    address: str


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class CNAMERecord(Record):
    rtype: ClassVar[str] = 'CNAME'
    _domain_fields: ClassVar[tuple[str, ...]] = ('target',)
    _rdata_fields: ClassVar[tuple[str, ...]] = ('target',)

    target: str


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class NSRecord(Record):
    rtype: ClassVar[str] = 'NS'
    _domain_fields: ClassVar[tuple[str, ...]] = ('target',)
    _rdata_fields: ClassVar[tuple[str, ...]] = ('target',)

    target: str


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class PTRRecord(Record):
    rtype: ClassVar[str] = 'PTR'
    _domain_fields: ClassVar[tuple[str, ...]] = ('target',)
    _rdata_fields: ClassVar[tuple[str, ...]] = ('target',)

    target: str


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class SOARecord(Record):
    rtype: ClassVar[str] = 'SOA'
    _int_fields: ClassVar[tuple[str, ...]] = ('serial', 'refresh', 'retry', 'expire', 'minimum')
    _domain_fields: ClassVar[tuple[str, ...]] = ('mname', 'rname')
    _rdata_fields: ClassVar[tuple[str, ...]] = (
        'mname', 'rname', 'serial', 'refresh', 'retry', 'expire', 'minimum',
    )

    mname: str
    rname: str
    serial: int
    refresh: int
    retry: int
    expire: int
    minimum: int


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class MXRecord(Record):
    rtype: ClassVar[str] = 'MX'
    _int_fields: ClassVar[tuple[str, ...]] = ('priority',)
    _domain_fields: ClassVar[tuple[str, ...]] = ('exchange',)
    _rdata_fields: ClassVar[tuple[str, ...]] = ('priority', 'exchange')

    priority: int
    exchange: str


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class SRVRecord(Record):
    rtype: ClassVar[str] = 'SRV'
    _int_fields: ClassVar[tuple[str, ...]] = ('priority', 'weight', 'port')
    _domain_fields: ClassVar[tuple[str, ...]] = ('target',)
    _rdata_fields: ClassVar[tuple[str, ...]] = ('priority', 'weight', 'port', 'target')

    priority: int
    weight: int
    port: int
    target: str


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class TXTRecord(Record):
    rtype: ClassVar[str] = 'TXT'
    _rdata_fields: ClassVar[tuple[str, ...]] = ('text',)
    _rdata_join: ClassVar[str] = ''

    text: str

    def rdata_text(self) -> str:
        return _quote(self.text)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class CAARecord(Record):
    rtype: ClassVar[str] = 'CAA'
    _int_fields: ClassVar[tuple[str, ...]] = ('flags',)
    _rdata_fields: ClassVar[tuple[str, ...]] = ('flags', 'tag', 'value')

    flags: int
    tag: str
    value: str

    def rdata_text(self) -> str:
        return f"{self.flags} {self.tag} {_quote(self.value)}"


DNSRecord = (
    ARecord |
    AAAARecord |
    CNAMERecord |
    NSRecord |
    PTRRecord |
    SOARecord |
    MXRecord |
    SRVRecord |
    TXTRecord |
    CAARecord
)

RECORD_TYPES: Mapping[str, type[Record]] = MappingProxyType({
    record_cls.rtype: record_cls
    for record_cls in (
        ARecord,
        AAAARecord,
        CNAMERecord,
        NSRecord,
        PTRRecord,
        SOARecord,
        MXRecord,
        SRVRecord,
        TXTRecord,
        CAARecord,
    )
})


def _record_class_for(rtype: Any) -> type[Record]:
    name = str(rtype).strip().upper()
    try:
        return RECORD_TYPES[name]
    except KeyError:
        raise InvalidArgument(f"Unsupported record type: {name!r}") from None


def make_record(fields: Mapping[str, Any]) -> Record:
    '''
    Build the record variant named by `fields['type']`.

    Parameters
    ----------
    fields : Mapping[str, Any]

    Returns
    -------
    Record
    '''
    if 'type' not in fields:
        raise InvalidArgument("Record fields are missing 'type'")
    return _record_class_for(fields['type']).make(fields)


def parse_record(line: str) -> Record:
    '''
    Parse a zone file style line (`host ttl class type rdata...`), the format
    `str(record)` and `dig +noall +answer` produce.

    Quoted TXT strings are concatenated, the last rdata field of any other
    type absorbs the remaining tokens.

    Parameters
    ----------
    line : str

    Returns
    -------
    Record

    Raises
    ------
    InvalidArgument
        If the line is malformed or names an unsupported type.
    '''
    try:
        parts = shlex.split(line)
    except ValueError as exc:
        raise InvalidArgument(f"Malformed record line {line!r}: {exc}") from exc

    if len(parts) < 5:
        raise InvalidArgument(f"Malformed record line {line!r}")

    host, ttl, record_class, rtype, *rdata = parts
    record_cls = _record_class_for(rtype)
    names = record_cls._rdata_fields

    if len(rdata) < len(names):
        raise InvalidArgument(f"Not enough {record_cls.rtype} fields in {line!r}")

    head = len(names) - 1
    values = [*rdata[:head], record_cls._rdata_join.join(rdata[head:])]

    fields: dict[str, Any] = dict(zip(names, values))
    fields.update(host=host, ttl=ttl, type=record_cls.rtype)
    fields['class'] = record_class
    return record_cls.make(fields)
