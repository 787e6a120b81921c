"""HTTP server for agent-reputation using stdlib http.server.

Routes:
    GET    /health                          — health check
    POST   /api/agents/register             — register (or re-register) an agent
    GET    /api/agents/search               — search by reputation and skills
    GET    /api/agents/{id}/reputation      — reputation and trust score
    POST   /api/agents/{id}/reviews         — submit a review
    GET    /api/agents/{id}/trust-graph     — bounded trust graph
    GET    /api/agents/{id}/skills          — verified skills
    POST   /api/skills/verify               — add a skill verification
    GET    /api/skills/{skill}/agents       — agents holding a skill
    GET    /api/leaderboard                 — ranking by reputation category

Usage:
    python -m agent_reputation.server.app --port 3001
    PORT=9000 python -m agent_reputation.server.app
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import re
import urllib.parse
from http.server import BaseHTTPRequestHandler, HTTPServer

from agent_reputation.server import routes

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3001

_AGENT_RESOURCE_PATTERN = re.compile(
    r"^/api/agents/([^/]+)/(reputation|reviews|trust-graph|skills)$"
)
_SKILL_AGENTS_PATTERN = re.compile(r"^/api/skills/([^/]+)/agents$")


class ReputationRequestHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the agent-reputation server.

    Implements routing for GET, POST, and OPTIONS. All request bodies and
    responses use JSON. Every response allows cross-origin access.
    """

    def log_message(self, format: str, *args: object) -> None:
        """Override to route access logs through the Python logging system."""
        logger.debug(format, *args)

    # ── GET ───────────────────────────────────────────────────────────────────

    def do_GET(self) -> None:
        """Handle all GET requests by routing on the URL path."""
        parsed = urllib.parse.urlparse(self.path)
        path = parsed.path.rstrip("/")
        params = urllib.parse.parse_qs(parsed.query)

        if path == "/health":
            self._send_json(*routes.handle_health())
            return
        if path == "/api/agents/search":
            self._send_json(
                *routes.handle_search(
                    min_reputation=self._first_param(params, "minReputation"),
                    skills=self._first_param(params, "skills"),
                    limit=self._first_param(params, "limit"),
                )
            )
            return
        if path == "/api/leaderboard":
            self._send_json(
                *routes.handle_leaderboard(
                    category=self._first_param(params, "category"),
                    limit=self._first_param(params, "limit"),
                )
            )
            return

        match = _AGENT_RESOURCE_PATTERN.match(path)
        if match:
            agent_id = urllib.parse.unquote(match.group(1))
            resource = match.group(2)
            if resource == "reputation":
                self._send_json(*routes.handle_get_reputation(agent_id))
                return
            if resource == "trust-graph":
                self._send_json(
                    *routes.handle_trust_graph(
                        agent_id, depth=self._first_param(params, "depth")
                    )
                )
                return
            if resource == "skills":
                self._send_json(*routes.handle_get_skills(agent_id))
                return

        match = _SKILL_AGENTS_PATTERN.match(path)
        if match:
            skill = urllib.parse.unquote(match.group(1))
            self._send_json(*routes.handle_skill_agents(skill))
            return

        self._send_json(
            404, {"error": "Not found", "detail": f"No route for GET {path}"}
        )

    # ── POST ──────────────────────────────────────────────────────────────────

    def do_POST(self) -> None:
        """Handle all POST requests by routing on the URL path."""
        parsed = urllib.parse.urlparse(self.path)
        path = parsed.path.rstrip("/")

        body = self._read_json_body()
        if body is None:
            return

        if path == "/api/agents/register":
            self._send_json(*routes.handle_register(body))
            return
        if path == "/api/skills/verify":
            self._send_json(*routes.handle_verify_skill(body))
            return

        match = _AGENT_RESOURCE_PATTERN.match(path)
        if match and match.group(2) == "reviews":
            agent_id = urllib.parse.unquote(match.group(1))
            self._send_json(*routes.handle_submit_review(agent_id, body))
            return

        self._send_json(
            404, {"error": "Not found", "detail": f"No route for POST {path}"}
        )

    # ── OPTIONS ───────────────────────────────────────────────────────────────

    def do_OPTIONS(self) -> None:
        """Answer CORS preflight requests."""
        self.send_response(204)
        self._send_cors_headers()
        self.send_header("Content-Length", "0")
        self.end_headers()

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _send_cors_headers(self) -> None:
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "GET, POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")

    def _send_json(self, status: int, data: dict[str, object]) -> None:
        """Serialize *data* to JSON and send an HTTP response with *status*."""
        body = json.dumps(data, default=str).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self._send_cors_headers()
        self.end_headers()
        self.wfile.write(body)

    def _read_json_body(self) -> dict[str, object] | None:
        """Read and parse the JSON request body.

        Returns None (and sends a 400 error response) if the Content-Length
        header is malformed, parsing fails, or the body is not a JSON object.
        """
        try:
            content_length = int(self.headers.get("Content-Length", 0))
        except ValueError:
            content_length = -1
        if content_length < 0:
            self._send_json(
                400, {"error": "Invalid request", "detail": "Malformed Content-Length header."}
            )
            return None
        if content_length == 0:
            return {}

        raw = self.rfile.read(content_length)
        try:
            parsed = json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            self._send_json(400, {"error": "Invalid JSON", "detail": str(exc)})
            return None
        if not isinstance(parsed, dict):
            self._send_json(
                400, {"error": "Invalid JSON", "detail": "Body must be a JSON object."}
            )
            return None
        return parsed

    @staticmethod
    def _first_param(
        params: dict[str, list[str]], key: str
    ) -> str | None:
        """Return the first value for *key* from query parameters, or None."""
        values = params.get(key)
        return values[0] if values else None


def create_server(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> HTTPServer:
    """Create (but do not start) the agent-reputation HTTP server.

    Parameters
    ----------
    host:
        Bind address (default ``"0.0.0.0"``, all interfaces).
    port:
        TCP port to listen on (default 3001).

    Returns
    -------
    HTTPServer
        A configured server instance ready to call ``serve_forever()`` on.
    """
    server = HTTPServer((host, port), ReputationRequestHandler)
    logger.info("agent-reputation server created at http://%s:%d", host, port)
    return server


def run_server(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Create and run the agent-reputation HTTP server (blocking)."""
    server = create_server(host=host, port=port)
    logger.info("Serving agent-reputation on http://%s:%d (Ctrl-C to stop)", host, port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down agent-reputation server.")
    finally:
        server.server_close()


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="agent-reputation HTTP server",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--host", default=os.environ.get("HOST", DEFAULT_HOST), help="Bind address"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("PORT", DEFAULT_PORT)),
        help="TCP port",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


if __name__ == "__main__":
    args = _build_arg_parser().parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level))
    run_server(host=args.host, port=args.port)
