import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

import dns.rdatatype

from dnsrecords._errors import InvalidArgument
from dnsrecords._records import RECORD_TYPES, Record

logger = logging.getLogger(__name__)


@runtime_checkable
class Handler(Protocol):
    '''
    Converts one raw answer of the type named by `rtype` into a result,
    normally a `Record`.
    '''
    rtype: str

    def handle(self, fields: Mapping[str, Any]) -> Any:
        ...


class RecordHandler:
    '''
    Default handler, builds the record variant for its type with `make()`.
    '''

    __slots__ = ('rtype', 'record_cls')

    def __init__(self, record_cls: type[Record]) -> None:
        self.record_cls = record_cls
        self.rtype: str = record_cls.rtype

    def handle(self, fields: Mapping[str, Any]) -> Record:
        return self.record_cls.make(fields)

    def __repr__(self) -> str:
        return f"RecordHandler({self.record_cls.__name__})"


class CallableHandler:
    __slots__ = ('rtype', 'func')

    def __init__(self, rtype: str, func: Callable[[Mapping[str, Any]], Any]) -> None:
        self.rtype = rtype
        self.func = func

    def handle(self, fields: Mapping[str, Any]) -> Any:
        return self.func(fields)

    def __repr__(self) -> str:
        return f"CallableHandler({self.rtype!r}, {self.func!r})"


def default_handlers() -> tuple[RecordHandler, ...]:
    return tuple(RecordHandler(record_cls) for record_cls in RECORD_TYPES.values())


def _type_name(rtype: Any) -> str:
    name = str(rtype).strip().upper()
    if not name:
        raise InvalidArgument("Handler record type must not be empty")
    return name


class HandlerRegistry:
    '''
    Table of record type name -> handler.

    Each registry owns its table, seeded with the default handlers unless
    an explicit handler list is given. Registering a type a second time
    replaces the previous handler.
    '''

    __slots__ = ('_handlers',)

    def __init__(self, handlers: Iterable[Handler] | None = None) -> None:
        self._handlers: dict[str, Handler] = {}
        self.use_handlers(default_handlers() if handlers is None else handlers)

    def register(
        self,
        rtype: str,
        handler: Handler | Callable[[Mapping[str, Any]], Any],
    ) -> None:
        '''
        Register a handler for a record type.

        Parameters
        ----------
        rtype : str
            the record type name, case-insensitive
        handler : Handler | Callable[[Mapping[str, Any]], Any]
            a handler object, or a plain callable taking the raw answer

        Raises
        ------
        InvalidArgument
            If the type name is empty, not a DNS record type dnspython
            knows, or the handler is not usable.
        '''
        name = _type_name(rtype)
        try:
            dns.rdatatype.from_text(name)
        except dns.rdatatype.UnknownRdatatype as exc:
            raise InvalidArgument(f"{name} is not a DNS record type") from exc
        if not isinstance(handler, Handler):
            if not callable(handler):
                raise InvalidArgument(f"Handler for {name} must be callable or define handle()")
            handler = CallableHandler(name, handler)

        if name in self._handlers:
            logger.debug(f"Replacing {name} handler {self._handlers[name]!r} with {handler!r}")
        self._handlers[name] = handler

    def use_handlers(self, handlers: Iterable[Handler]) -> None:
        for handler in handlers:
            rtype = getattr(handler, 'rtype', None)
            if rtype is None:
                raise InvalidArgument(f"Handler {handler!r} does not declare an rtype")
            self.register(rtype, handler)

    def resolve(self, rtype: str) -> Handler:
        name = _type_name(rtype)
        try:
            return self._handlers[name]
        except KeyError:
            raise InvalidArgument(f"No handler registered for record type {name}") from None

    def known_types(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def handles(self, rtype: str) -> bool:
        return str(rtype).strip().upper() in self._handlers

    def handle(self, fields: Mapping[str, Any]) -> Any:
        '''
        Dispatch a raw answer to the handler registered for its `type`.

        Parameters
        ----------
        fields : Mapping[str, Any]

        Returns
        -------
        Any
            whatever the handler produces, a `Record` for the defaults
        '''
        return self.resolve(fields['type']).handle(fields)

    def __contains__(self, rtype: object) -> bool:
        return isinstance(rtype, str) and self.handles(rtype)

    def __len__(self) -> int:
        return len(self._handlers)
