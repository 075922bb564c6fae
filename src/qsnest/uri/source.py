import ipaddress as _ip
import typing as _ty

import uritools as _uritools

_IPAddress = _ip.IPv4Address | _ip.IPv6Address


class Source(_ty.NamedTuple):
    scheme: _ty.Optional[str]
    userinfo: _ty.Optional[str]
    host: str | _IPAddress
    port: _ty.Optional[int]

    def __bool__(self):
        if not self.scheme:
            return False
        return True

    @classmethod
    def from_uri(cls, uri: str) -> "tuple[Source, str | None]":
        """Split `uri` into its source and its raw, still encoded, query.

        Raises ValueError when the host or port is malformed.
        """
        parsed = _uritools.urisplit(uri)
        # gethost and getport reject what a URL parser would refuse
        source = cls(
            parsed.getscheme(),
            parsed.userinfo,
            parsed.gethost() or "",
            parsed.getport(),
        )
        return source, parsed.query
