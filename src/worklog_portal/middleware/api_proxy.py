from __future__ import annotations

import logging

import httpx
from flask import Flask, Response, jsonify, request

from ..api.errors import NETWORK_MESSAGE

logger = logging.getLogger(__name__)

HOP_BY_HOP = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "transfer-encoding",
    "upgrade",
    "host",
    "content-length",
    "content-encoding",
}


def register(app: Flask, container) -> None:
    """Pass ``/api/*`` through to the backend; the backend enforces auth per request."""

    @app.route("/api/<path:subpath>", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], endpoint="api_proxy")
    def api_proxy(subpath: str):
        headers = {k: v for k, v in request.headers.items() if k.lower() not in HOP_BY_HOP and k.lower() != "cookie"}
        # Only the backend session travels upstream; portal cookies stay here.
        token = request.cookies.get(container.cookie_name)
        if token:
            headers["Cookie"] = f"{container.cookie_name}={token}"
        try:
            upstream = container.http.request(
                request.method,
                f"/{subpath}",
                params=list(request.args.items(multi=True)),
                content=request.get_data(),
                headers=headers,
            )
        except httpx.HTTPError as exc:
            logger.warning("Proxy to backend failed for /%s: %s", subpath, exc)
            return jsonify({"status": 502, "error": "Bad Gateway", "message": NETWORK_MESSAGE}), 502

        passthrough = [(k, v) for k, v in upstream.headers.multi_items() if k.lower() not in HOP_BY_HOP]
        return Response(upstream.content, status=upstream.status_code, headers=passthrough)
