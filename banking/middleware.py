"""Request middleware: trace id propagation and access logging."""

from __future__ import annotations

import time
import uuid
from contextlib import ExitStack

from flask import Flask, Response, g, request

from banking import logger
from banking.trace import KEY, get_trace_id, with_trace_id

TRACE_HEADER = "Trace-Id"


def install_trace_id(app: Flask) -> None:
    """Give every request a trace id, taken from the ``Trace-Id`` header or generated."""

    @app.before_request
    def _assign_trace_id() -> None:
        trace_id = request.headers.get(TRACE_HEADER, "") or str(uuid.uuid4())
        setattr(g, KEY, trace_id)
        scope = ExitStack()
        scope.enter_context(with_trace_id(trace_id))
        g._trace_scope = scope

    @app.teardown_request
    def _release_trace_id(exc: BaseException | None) -> None:
        scope = g.pop("_trace_scope", None)
        if scope is not None:
            scope.close()


def install_request_logger(app: Flask) -> None:
    """Log one entry per request with its method, path, status and latency."""

    @app.before_request
    def _start_clock() -> None:
        g._request_started = time.perf_counter()

    @app.after_request
    def _log_request(response: Response) -> Response:
        started = g.get("_request_started")
        latency = time.perf_counter() - started if started is not None else 0.0
        path = request.path
        query = request.query_string.decode("latin-1")
        if query:
            path = f"{path}?{query}"
        logger.info(
            "request",
            method=request.method,
            path=path,
            ip=request.remote_addr or "",
            status=response.status_code,
            latency=latency,
            user_agent=request.user_agent.string,
            trace_id=get_trace_id(),
        )
        return response