# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import re
import secrets
import time
from collections.abc import Mapping

from flask import Flask, Response, g, request

from course_archive.shared.config import load_config
from course_archive.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")
_SECRET_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})
_SECRET_PARAMS = ("password", "token", "key", "secret")


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr or "unknown"


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _masked_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        name: _fingerprint(value) if name.lower() in _SECRET_HEADERS else value
        for name, value in headers.items()
    }


def _masked_params(params: Mapping[str, str]) -> dict[str, str]:
    return {
        name: "<redacted>" if any(s in name.lower() for s in _SECRET_PARAMS) else value
        for name, value in params.items()
    }


def _incoming_request_id() -> str:
    # Client ids end up in log lines; anything unusual is replaced.
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if _REQUEST_ID_RE.match(supplied):
        return supplied
    return secrets.token_urlsafe(8)


def configure_request_logging(app: Flask) -> None:
    verbose = load_config().debug_logging

    @app.before_request
    def _start() -> None:
        set_correlation_id(_incoming_request_id())
        g.request_started = time.perf_counter()
        if verbose:
            logger.debug(
                f"-> {request.method} {request.path} from {_client_ip()} "
                f"args={_masked_params(request.args)} "
                f"headers={_masked_headers(request.headers)} "
                f"body={request.content_length or 0}B"
            )
        else:
            logger.info(f"-> {request.method} {request.path} from {_client_ip()}")

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed = time.perf_counter() - g.get("request_started", time.perf_counter())
        subject = g.get("user_id")
        logger.info(
            f"<- {request.method} {request.path} {response.status_code} "
            f"in {elapsed * 1000:.1f}ms" + (f" user={subject}" if subject is not None else "")
        )
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"{type(exc).__name__} while serving {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
