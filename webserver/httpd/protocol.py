# httpd/protocol.py
from typing import BinaryIO, Iterable, Optional, Tuple

from httpd.utils import http_date

MAX_LINE_BYTES = 64 * 1024


class TransportFailure(ConnectionError):
    """The peer went away before a request line arrived."""


class RequestLineTooLong(ValueError):
    pass


def read_line(stream: BinaryIO) -> str:
    """Read one request line, stripping the ``\\n`` or ``\\r\\n`` terminator.

    A partial line cut short by EOF is returned as-is; EOF before any byte
    raises TransportFailure.
    """
    # room for the terminator on a line that is exactly at the limit
    buf = stream.readline(MAX_LINE_BYTES + 2)
    if not buf:
        raise TransportFailure("Socket closed")
    if buf.endswith(b"\n"):
        buf = buf[:-1]
    if buf.endswith(b"\r"):
        buf = buf[:-1]
    if len(buf) > MAX_LINE_BYTES:
        raise RequestLineTooLong(f"Request line exceeds {MAX_LINE_BYTES} bytes")
    return buf.decode("utf-8", errors="replace")


def build_head(version: str, status: str,
               headers: Optional[Iterable[Tuple[str, str]]] = None,
               date: Optional[str] = None) -> bytes:
    """Status line, Date header, extra headers in order, blank line."""
    if date is None:
        date = http_date()
    lines = [f"{version} {status}", f"Date: {date}"]
    for k, v in headers or ():
        lines.append(f"{k}: {v}")
    header_block = "\r\n".join(lines) + "\r\n\r\n"
    return header_block.encode("utf-8")

