# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from portal.domain.users.repositories import SessionStore
from portal.infrastructure.container import Container
from portal.shared.config import AppConfig, load_config
from portal.shared.logging import logger, setup_logging
from portal.shared.middleware.error_handler import configure_error_handling
from portal.shared.middleware.request_logger import configure_request_logging
from portal.shared.middleware.security_headers import configure_security_headers


def create_app(
    config: AppConfig | None = None,
    *,
    session_store: SessionStore | None = None,
) -> Flask:
    config = config or load_config()
    setup_logging(level=config.log_level, log_file=config.log_file)

    container = Container(config, session_store=session_store)

    # Static assets are served from the site root; directories never get an index.
    app = Flask(
        __name__,
        static_folder=str(config.server.public_dir),
        static_url_path="",
    )
    app.json.ensure_ascii = False  # type: ignore[attr-defined]
    if config.security.trust_proxy:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)  # type: ignore[method-assign]

    configure_request_logging(app, config)
    configure_error_handling(app, config)
    configure_security_headers(app, config)
    container.access_gate.install(app)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.pages_controller.as_blueprint())

    app.extensions["portal.container"] = container

    logger.info("Flask app initialized")
    return app


def main() -> None:
    config = load_config()
    app = create_app(config)
    host, port = config.server.host, config.server.port
    logger.info(f"✅ Servidor escuchando en http://{host}:{port}")
    logger.info(f"   DEMO_USER={config.credentials.username}")
    app.run(host=host, port=port)


if __name__ == "__main__":
    main()
