# httpd/classifier.py
"""Request-line classification.

A raw request line becomes exactly one outcome:

    Malformed    -> the line is not ``<GET|HEAD|POST> /<target> HTTP/1.0``
    NotFound     -> well-formed, but the file is missing or a directory
    Unsupported  -> well-formed POST for an existing file
    Ok           -> well-formed GET or HEAD for an existing file

Structural checks run before any filesystem lookup, so a malformed line
for a missing file is still Malformed.
"""
from dataclasses import dataclass
from typing import Callable, Optional, Union

from httpd.config import DEFAULT_CONFIG, ServerConfig
from httpd.utils import FileInfo, is_within, stat_path

METHODS = ("GET", "HEAD", "POST")
SUPPORTED_METHODS = ("GET", "HEAD")

CONTENT_TYPES = (
    ((".htm", ".html"), "text/html"),
    ((".gif",), "image/gif"),
    ((".jpg",), "image/jpeg"),
)
DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class ParsedRequest:
    method: str
    target: str
    version: str


@dataclass(frozen=True)
class Malformed:
    pass


@dataclass(frozen=True)
class NotFound:
    target: str


@dataclass(frozen=True)
class Unsupported:
    method: str


@dataclass(frozen=True)
class Ok:
    method: str
    target: str
    file_length: int
    content_type: str
    path: str


Outcome = Union[Malformed, NotFound, Unsupported, Ok]

StatFn = Callable[[str], FileInfo]


def parse_request_line(request_line: str,
                       config: ServerConfig = DEFAULT_CONFIG) -> Optional[ParsedRequest]:
    parts = request_line.split(" ")
    if len(parts) != 3:
        return None
    method, target, version = parts
    if method not in METHODS:
        return None
    if len(target) < 1 or target[0] != "/":
        return None
    if version != config.http_version:
        return None
    return ParsedRequest(method, target, version)


def resolve_path(target: str, config: ServerConfig = DEFAULT_CONFIG) -> str:
    # Plain concatenation: "/../x" is not normalized away.
    if target == "/":
        return config.root + config.homepage
    return config.root + target


def content_type(target: str) -> str:
    name = target.lower()
    for suffixes, mime in CONTENT_TYPES:
        if name.endswith(suffixes):
            return mime
    return DEFAULT_CONTENT_TYPE


def classify(request_line: str,
             config: ServerConfig = DEFAULT_CONFIG,
             stat: StatFn = stat_path) -> Outcome:
    request = parse_request_line(request_line, config)
    if request is None:
        return Malformed()

    path = resolve_path(request.target, config)
    if config.contain_paths and not is_within(path, config.root):
        return NotFound(request.target)

    info = stat(path)
    if not info.exists or info.is_directory:
        return NotFound(request.target)

    if request.method not in SUPPORTED_METHODS:
        return Unsupported(request.method)

    return Ok(
        method=request.method,
        target=request.target,
        file_length=info.length,
        content_type=content_type(request.target),
        path=path,
    )


def describe(outcome: Outcome) -> str:
    """Short label for log lines."""
    name = type(outcome).__name__
    detail = getattr(outcome, "target", None) or getattr(outcome, "method", None)
    return f"{name}({detail})" if detail else name

