# httpd/config.py
import argparse
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Sequence

# Defaults
HTTP_VERSION = "HTTP/1.0"
SERVER_NAME = "WebServer/1.0"
HOMEPAGE = "/index.html"
ROOT = "root"
HOST = ""
PORT = 0
BACKLOG = 50
CHUNK_SIZE = 1024
LINGER_SECONDS = 5
LOG_LEVEL = "INFO"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass(frozen=True)
class ServerConfig:
    """Settings shared read-only by every connection handler."""
    http_version: str = HTTP_VERSION
    server_name: str = SERVER_NAME
    homepage: str = HOMEPAGE
    root: str = ROOT
    host: str = HOST
    port: int = PORT
    backlog: int = BACKLOG
    chunk_size: int = CHUNK_SIZE
    linger_seconds: int = LINGER_SECONDS
    contain_paths: bool = False
    log_level: str = LOG_LEVEL


DEFAULT_CONFIG = ServerConfig()


def _env_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}")


def _env_log_level(environ: Mapping[str, str]) -> str:
    level = environ.get("WEBSERVER_LOG_LEVEL", LOG_LEVEL).upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"WEBSERVER_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    return level


def from_environ(environ: Mapping[str, str] = os.environ) -> ServerConfig:
    return replace(
        DEFAULT_CONFIG,
        root=environ.get("WEBSERVER_ROOT", ROOT),
        host=environ.get("WEBSERVER_HOST", HOST),
        port=_env_int(environ, "WEBSERVER_PORT", PORT),
        log_level=_env_log_level(environ),
    )


def build_parser(base: ServerConfig = DEFAULT_CONFIG) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webserver",
        description="Serve files from a directory over HTTP/1.0",
    )
    parser.add_argument("--root", default=base.root, help="directory files are served from")
    parser.add_argument("--host", default=base.host, help="interface to bind (default: all)")
    parser.add_argument("--port", type=int, default=base.port, help="TCP port, 0 picks a free one")
    parser.add_argument("--chunk-size", type=int, default=base.chunk_size)
    parser.add_argument(
        "--linger",
        type=int,
        default=base.linger_seconds,
        help="SO_LINGER timeout in seconds applied to accepted sockets",
    )
    parser.add_argument(
        "--contain-paths",
        action=argparse.BooleanOptionalAction,
        default=base.contain_paths,
        help="answer 404 for targets that resolve outside the root",
    )
    parser.add_argument(
        "--log-level",
        default=base.log_level,
        choices=LOG_LEVELS,
        type=str.upper,
    )
    return parser


def load_config(argv: Optional[Sequence[str]] = None,
                environ: Mapping[str, str] = os.environ) -> ServerConfig:
    """Build the server configuration.

    Precedence, lowest first: module defaults, ``WEBSERVER_*`` environment
    variables, command line flags.
    """
    base = from_environ(environ)
    args = build_parser(base).parse_args(argv)
    if args.chunk_size <= 0:
        raise ValueError("chunk size must be positive")
    return replace(
        base,
        root=args.root,
        host=args.host,
        port=args.port,
        chunk_size=args.chunk_size,
        linger_seconds=args.linger,
        contain_paths=args.contain_paths,
        log_level=args.log_level,
    )
