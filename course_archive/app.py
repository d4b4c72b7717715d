# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import importlib
from typing import Any, Protocol, cast

from flask import Flask

from course_archive.infrastructure.container import container
from course_archive.infrastructure.db import init_db
from course_archive.interfaces.http.controllers.misc_controller import MiscController
from course_archive.shared.config import load_config
from course_archive.shared.logging import logger, setup_logging
from course_archive.shared.middleware.error_handler import configure_error_handling
from course_archive.shared.middleware.request_logger import configure_request_logging


class _CORSCallable(Protocol):
    def __call__(self, app: Flask, **kwargs: Any) -> Any: ...


_flask_cors = importlib.import_module("flask_cors")
CORS = cast(_CORSCallable, _flask_cors.CORS)


_config = load_config()


def create_app() -> Flask:
    init_db()
    setup_logging(debug_mode=_config.debug_logging)

    container.admin_setup.warn_if_unprovisioned()

    app = Flask(__name__)
    configure_error_handling(app)
    configure_request_logging(app)

    app.config.update(SECRET_KEY=_config.secret_key)

    CORS(
        app,
        resources={r"/api/*": {"origins": _config.security.allowed_origins}},
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    app.register_blueprint(MiscController().as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.fields_controller.as_blueprint())
    app.register_blueprint(container.courses_controller.as_blueprint())
    app.register_blueprint(container.stats_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("Cache-Control", "no-store")

        if _config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    logger.info(f"Flask app initialized (env={_config.app_env})")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
