# httpd/responder.py
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator, List, Optional, Tuple

from httpd.classifier import Malformed, NotFound, Ok, Outcome, Unsupported
from httpd.config import DEFAULT_CONFIG, ServerConfig
from httpd.protocol import build_head

STATUS_OK = "200 OK"
STATUS_BAD_REQUEST = "400 Bad Request"
STATUS_NOT_FOUND = "404 File not found"
STATUS_NOT_IMPLEMENTED = "501 Not Implemented"

ALLOW = "GET, HEAD"

_ERROR_STATUS = {
    Malformed: STATUS_BAD_REQUEST,
    NotFound: STATUS_NOT_FOUND,
    Unsupported: STATUS_NOT_IMPLEMENTED,
}


@dataclass(frozen=True)
class Response:
    status_line: str
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body_path: Optional[str] = None

    def head(self, config: ServerConfig = DEFAULT_CONFIG, date: Optional[str] = None) -> bytes:
        return build_head(config.http_version, self.status_line, self.headers, date)

    def iter_body(self, chunk_size: int) -> Iterator[bytes]:
        if self.body_path is None:
            return
        with open(self.body_path, "rb") as f:
            while True:
                chunk = f.read(chunk_size)
                if not chunk:
                    break
                yield chunk


def build_response(outcome: Outcome, config: ServerConfig = DEFAULT_CONFIG) -> Response:
    """Turn a classifier outcome into status line, ordered headers and body source.

    Only a GET that classified as Ok carries a body; HEAD still reports
    Content-Length but sends nothing after the blank line.
    """
    if not isinstance(outcome, Ok):
        return Response(_ERROR_STATUS[type(outcome)])

    headers = [
        ("Location", outcome.target),
        ("Server", config.server_name),
        ("Allow", ALLOW),
        ("Content-Length", str(outcome.file_length)),
        ("Content-Type", outcome.content_type),
    ]
    body_path = outcome.path if outcome.method == "GET" else None
    return Response(STATUS_OK, headers, body_path)


def write_response(response: Response, outs: BinaryIO,
                   config: ServerConfig = DEFAULT_CONFIG) -> int:
    """Write head then body to ``outs``; returns the number of body bytes sent."""
    outs.write(response.head(config))
    sent = 0
    for chunk in response.iter_body(config.chunk_size):
        outs.write(chunk)
        sent += len(chunk)
    return sent
