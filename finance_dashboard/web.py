from __future__ import annotations

import argparse
import json
import logging
import os
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs, urlparse, unquote

from finance_dashboard.config import LOG_LEVELS, default_config, load_config
from finance_dashboard.core.ledger import Ledger
from finance_dashboard.core.models import ValidationError
from finance_dashboard.dashboard import PERIODS, build_dashboard
from finance_dashboard.utils import filter_transactions_by_month

STATIC_DIR = Path(__file__).with_name("web_ui")

logger = logging.getLogger(__name__)


def _json_response(handler: BaseHTTPRequestHandler, payload: Any, status: int = 200) -> None:
    body = json.dumps(payload).encode("utf-8")
    handler.send_response(status)
    handler.send_header("Content-Type", "application/json")
    handler.send_header("Cache-Control", "no-store")
    handler.send_header("Content-Length", str(len(body)))
    handler.end_headers()
    handler.wfile.write(body)


def _parse_tx_id(path: str, prefix: str) -> int | None:
    tail = path[len(prefix):].strip("/")
    try:
        return int(tail)
    except ValueError:
        return None


class DashboardHandler(BaseHTTPRequestHandler):
    """JSON API over a single shared ledger.

    ``ThreadingHTTPServer`` serves requests concurrently, so every ledger read
    and write happens under ``lock``.
    """

    ledger: Ledger = None  # type: ignore[assignment]
    lock: threading.Lock = None  # type: ignore[assignment]
    config: dict = None  # type: ignore[assignment]
    static_dir = STATIC_DIR

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)

    def _dashboard(self, period: str = "all") -> dict:
        return build_dashboard(self.ledger, self.config, period=period).to_dict()

    def do_GET(self) -> None:
        parsed = urlparse(self.path)
        if parsed.path.startswith("/api/"):
            self._handle_api_get(parsed)
            return
        self._handle_static(parsed.path)

    def _handle_api_get(self, parsed) -> None:
        query = parse_qs(parsed.query)
        try:
            if parsed.path == "/api/dashboard":
                period = _get_param(query, "period") or "all"
                if period not in PERIODS:
                    _json_response(self, {"error": "period must be all or month"}, status=400)
                    return
                with self.lock:
                    payload = self._dashboard(period)
                _json_response(self, payload)
                return

            if parsed.path == "/api/transactions":
                month = _get_param(query, "month")
                with self.lock:
                    txs = self.ledger.list()
                try:
                    if month:
                        txs = filter_transactions_by_month(txs, month)
                except ValidationError as exc:
                    _json_response(self, {"error": str(exc)}, status=400)
                    return
                payload = [tx.to_dict() for tx in txs]
                _json_response(self, payload)
                return
        except Exception as exc:
            logger.exception("Failed to serve %s", parsed.path)
            _json_response(self, {"error": str(exc)}, status=500)
            return

        _json_response(self, {"error": "not found"}, status=404)

    def do_POST(self) -> None:
        parsed = urlparse(self.path)
        if parsed.path != "/api/transactions":
            _json_response(self, {"error": "not found"}, status=404)
            return

        try:
            length = int(self.headers.get("Content-Length") or 0)
            data = json.loads(self.rfile.read(length) or b"{}")
        except ValueError:
            _json_response(self, {"error": "request body must be JSON"}, status=400)
            return
        if not isinstance(data, dict):
            _json_response(self, {"error": "request body must be a JSON object"}, status=400)
            return

        try:
            with self.lock:
                tx = self.ledger.add(
                    data.get("description"),
                    data.get("amount"),
                    data.get("kind", "expense"),
                    date=data.get("date"),
                )
                dashboard = self._dashboard()
        except ValidationError as exc:
            _json_response(self, {"error": str(exc)}, status=400)
            return
        except Exception as exc:
            logger.exception("Failed to add transaction")
            _json_response(self, {"error": str(exc)}, status=500)
            return

        _json_response(self, {"transaction": tx.to_dict(), "dashboard": dashboard}, status=201)

    def do_DELETE(self) -> None:
        parsed = urlparse(self.path)
        prefix = "/api/transactions/"
        if not parsed.path.startswith(prefix):
            _json_response(self, {"error": "not found"}, status=404)
            return
        tx_id = _parse_tx_id(parsed.path, prefix)
        if tx_id is None:
            _json_response(self, {"error": "transaction id must be an integer"}, status=400)
            return

        with self.lock:
            removed = self.ledger.remove(tx_id)
            dashboard = self._dashboard()
        _json_response(
            self,
            {"removed": removed, "dashboard": dashboard},
            status=200 if removed else 404,
        )

    def _handle_static(self, raw_path: str) -> None:
        static_root = Path(self.static_dir).resolve()
        path = raw_path or "/"
        if path == "/":
            path = "/index.html"
        resolved = (static_root / unquote(path.lstrip("/"))).resolve()
        if static_root not in resolved.parents or not resolved.is_file():
            self.send_error(404)
            return

        content_type = _guess_content_type(resolved)
        body = resolved.read_bytes()
        self.send_response(200)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Cache-Control", "no-store")
        self.end_headers()
        self.wfile.write(body)


def _guess_content_type(path: Path) -> str:
    if path.suffix == ".html":
        return "text/html; charset=utf-8"
    if path.suffix == ".css":
        return "text/css; charset=utf-8"
    if path.suffix == ".js":
        return "text/javascript; charset=utf-8"
    return "application/octet-stream"


def _get_param(query: dict[str, list[str]], key: str) -> str | None:
    values = query.get(key)
    return values[0] if values else None


def make_handler(ledger: Ledger | None = None, config: dict | None = None) -> type[DashboardHandler]:
    """Bind a fresh handler class to one ledger, its lock and a config."""
    return type(
        "DashboardHandler",
        (DashboardHandler,),
        {
            "ledger": ledger if ledger is not None else Ledger(),
            "lock": threading.Lock(),
            "config": config or default_config(),
            "static_dir": STATIC_DIR,
        },
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Personal finance web dashboard")
    parser.add_argument("--config", dest="config_path", default=None, help="Path to YAML config")
    parser.add_argument("--host", default=None, help="Host to bind (default from config: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind (default from config: 8000)")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("CASHBOARD_LOG_LEVEL", "WARNING").upper(),
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging verbosity (default: $CASHBOARD_LOG_LEVEL or WARNING)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid log level {args.log_level!r}; choose from {', '.join(LOG_LEVELS)}")

    logging.basicConfig(level=args.log_level)
    cfg = load_config(args.config_path)
    host = args.host or cfg["web"]["host"]
    port = args.port or int(cfg["web"]["port"])

    server = ThreadingHTTPServer((host, port), make_handler(Ledger(), cfg))
    print(f"Finance dashboard running at http://{host}:{port}")
    server.serve_forever()


if __name__ == "__main__":
    main()
