# httpd/server_tcp.py
import logging
import socket
import struct
import sys
import threading

from httpd.classifier import Malformed, classify, describe
from httpd.config import DEFAULT_CONFIG, load_config
from httpd.protocol import RequestLineTooLong, read_line
from httpd.responder import build_response, write_response

POLL_SECONDS = 0.5


def handle_client(conn, addr, config=DEFAULT_CONFIG):
    """Serve exactly one request on ``conn`` and close it."""
    logging.info(f"Connected: {addr}")
    try:
        with conn.makefile("rb") as ins, conn.makefile("wb") as outs:
            try:
                request_line = read_line(ins)
                logging.info(f"REQ: {request_line}")
                outcome = classify(request_line, config)
            except RequestLineTooLong as e:
                logging.warning(f"{addr}: {e}")
                outcome = Malformed()

            response = build_response(outcome, config)
            sent = write_response(response, outs, config)
            outs.flush()
            logging.info(f"RESP: {response.status_line} {describe(outcome)} body={sent}")
    except ConnectionError as e:
        logging.warning(f"Transport failure from {addr}: {e}")
    except OSError as e:
        # e.g. the file vanished between the stat and the open
        logging.warning(f"I/O error while serving {addr}: {e}")
    except Exception:
        logging.exception("Handler Error")
    finally:
        conn.close()


def set_linger(conn, seconds):
    conn.setsockopt(socket.SOL_SOCKET, socket.SO_LINGER, struct.pack("ii", 1, seconds))


def open_listener(config=DEFAULT_CONFIG):
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    s.bind((config.host, config.port))
    s.listen(config.backlog)
    return s


def accept_loop(s, config=DEFAULT_CONFIG, stop=None):
    """Accept connections, one daemon thread each.

    Runs until ``stop`` is set (polled every POLL_SECONDS) or the listener
    is closed.
    """
    if stop is not None:
        s.settimeout(POLL_SECONDS)
    while stop is None or not stop.is_set():
        try:
            conn, addr = s.accept()
        except socket.timeout:
            continue
        except OSError as e:
            if s.fileno() == -1:
                logging.info("Listener closed")
                return
            logging.error(f"Accept failed: {e}")
            continue
        try:
            set_linger(conn, config.linger_seconds)
        except OSError as e:
            logging.warning(f"Could not set linger on {addr}: {e}")
        t = threading.Thread(target=handle_client, args=(conn, addr, config), daemon=True)
        t.start()


def serve(config=DEFAULT_CONFIG):
    s = open_listener(config)
    logging.info(f"Port number is: {s.getsockname()[1]}")
    try:
        accept_loop(s, config)
    except KeyboardInterrupt:
        logging.info("Shutting down server...")
    finally:
        s.close()


def main(argv=None):
    try:
        config = load_config(argv)
    except ValueError as e:
        print(f"webserver: {e}", file=sys.stderr)
        return 2
    logging.basicConfig(level=config.log_level)
    serve(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
