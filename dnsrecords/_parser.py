
from __future__ import annotations

import functools
from collections.abc import Iterable, Iterator
from typing import Any

import dns.rdata
import dns.rdataclass
import dns.rdatatype
import dns.rrset
from dns.rdtypes.ANY.CAA import CAA as R_CAA
from dns.rdtypes.ANY.CNAME import CNAME as R_CNAME
from dns.rdtypes.ANY.MX import MX as R_MX
from dns.rdtypes.ANY.NS import NS as R_NS
from dns.rdtypes.ANY.PTR import PTR as R_PTR
from dns.rdtypes.ANY.SOA import SOA as R_SOA
from dns.rdtypes.ANY.TXT import TXT as R_TXT
from dns.rdtypes.IN.A import A as R_A
from dns.rdtypes.IN.AAAA import AAAA as R_AAAA
from dns.rdtypes.IN.SRV import SRV as R_SRV

RawAnswer = dict[str, Any]


def _name(n: Any) -> str:
    return "" if n is None else str(n)


def _text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return value.decode(errors="ignore")
    return str(value)


def _txt_join(r: R_TXT) -> str:
    if getattr(r, "strings", None):
        return "".join(_text(s) for s in r.strings)
    return r.to_text().strip('"')


@functools.singledispatch
def parse_rdata(r: dns.rdata.Rdata) -> dict[str, Any]:
    '''
    Convert the rdata of one DNS record into its type specific fields,
    using singledispatch on the dnspython rdata class.

    Types without a dedicated parser keep their presentation format
    under `data`.

    Parameters
    ----------
    r : dns.rdata.Rdata

    Returns
    -------
    dict[str, Any]
    '''
    return {"data": r.to_text()}


@parse_rdata.register
def _(r: R_A) -> dict[str, Any]:
    return {"address": r.address}


@parse_rdata.register
def _(r: R_AAAA) -> dict[str, Any]:
    return {"address": r.address}


@parse_rdata.register
def _(r: R_MX) -> dict[str, Any]:
    return {"priority": int(r.preference), "exchange": _name(r.exchange)}


@parse_rdata.register
def _(r: R_NS) -> dict[str, Any]:
    return {"target": _name(r.target)}


@parse_rdata.register
def _(r: R_CNAME) -> dict[str, Any]:
    return {"target": _name(r.target)}


@parse_rdata.register
def _(r: R_PTR) -> dict[str, Any]:
    return {"target": _name(r.target)}


@parse_rdata.register
def _(r: R_SOA) -> dict[str, Any]:
    return {
        "mname": _name(r.mname),
        "rname": _name(r.rname),
        "serial": int(r.serial),
        "refresh": int(r.refresh),
        "retry": int(r.retry),
        "expire": int(r.expire),
        "minimum": int(r.minimum),
    }


@parse_rdata.register
def _(r: R_SRV) -> dict[str, Any]:
    return {
        "priority": int(r.priority),
        "weight": int(r.weight),
        "port": int(r.port),
        "target": _name(r.target),
    }


@parse_rdata.register
def _(r: R_TXT) -> dict[str, Any]:
    return {"text": _txt_join(r)}


@parse_rdata.register
def _(r: R_CAA) -> dict[str, Any]:
    return {"flags": int(r.flags), "tag": _text(r.tag), "value": _text(r.value)}


def raw_answer(
    host: Any,
    ttl: int,
    rdata: dns.rdata.Rdata,
) -> RawAnswer:
    '''
    Build the raw answer mapping the handlers consume:
    `host`, `class`, `ttl`, `type` and the rdata fields.

    Parameters
    ----------
    host : Any
        owner name of the record
    ttl : int
    rdata : dns.rdata.Rdata

    Returns
    -------
    RawAnswer
    '''
    answer: RawAnswer = {
        "host": _name(host),
        "class": dns.rdataclass.to_text(rdata.rdclass),
        "ttl": int(ttl),
        "type": dns.rdatatype.to_text(rdata.rdtype),
    }
    answer.update(parse_rdata(rdata))
    return answer


def iter_rrsets(rrsets: Iterable[dns.rrset.RRset]) -> Iterator[RawAnswer]:
    for rrset in rrsets:
        for rdata in rrset:
            yield raw_answer(rrset.name, rrset.ttl, rdata)
