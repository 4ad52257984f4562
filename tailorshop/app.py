# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from tailorshop.infrastructure.container import Container
from tailorshop.infrastructure.db import init_db
from tailorshop.shared.config import AppConfig, load_config
from tailorshop.shared.logging import logger, setup_logging
from tailorshop.shared.middleware.error_handler import configure_error_handling
from tailorshop.shared.middleware.rate_limit import ENABLED_KEY
from tailorshop.shared.middleware.request_logger import configure_request_logging

EXTENSION_KEY = "tailorshop.container"


def create_app(config: AppConfig | None = None) -> Flask:
    config = config or load_config()
    setup_logging("DEBUG" if config.debug_logging else config.log_level, config.log_file)

    container = Container(config)
    init_db(container.engine)

    app = Flask(__name__)
    if config.security.trusted_proxies:
        app.wsgi_app = ProxyFix(  # type: ignore[method-assign]
            app.wsgi_app, x_for=config.security.trusted_proxies
        )
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    app.config.update(SECRET_KEY=config.secret_key)
    app.config[ENABLED_KEY] = config.security.enable_rate_limit
    app.extensions[EXTENSION_KEY] = container

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}},
        "expose_headers": ["X-Request-ID"],
    }
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.requisitions_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")

        resp.headers.setdefault("Referrer-Policy", "no-referrer")

        resp.headers.setdefault("X-Content-Type-Options", "nosniff")

        resp.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")

        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info(f"Flask app initialized (env={config.app_env})")
    return app


def get_container(app: Flask) -> Container:
    return app.extensions[EXTENSION_KEY]
