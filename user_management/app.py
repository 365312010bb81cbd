# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from user_management.container import Container
from user_management.infrastructure.db import init_db
from user_management.shared.config import AppConfig, load_config
from user_management.shared.logging import logger, setup_logging
from user_management.shared.middleware.error_handler import configure_error_handling
from user_management.shared.middleware.request_logger import configure_request_logging
from user_management.shared.middleware.security_headers import configure_security_headers


def create_app(config: AppConfig | None = None, *, container: Container | None = None) -> Flask:
    config = config or (container.config if container else load_config())
    setup_logging(level=config.log_level, log_file=config.log_file)

    # Raises ConfigurationError before anything is wired or served.
    config.validate_required()

    container = container or Container(config)
    # Eagerly build the token service so a bad key fails here, not per request.
    _ = container.token_service
    init_db(container.engine)

    app = Flask(__name__)
    app.extensions["user_management.container"] = container
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    configure_security_headers(app, enable_hsts=config.security.enable_hsts)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    CORS(app, **cors_kwargs)
    app.register_blueprint(container.users_controller.as_blueprint())

    logger.info(f"Flask app initialized (env={config.app_env})")
    return app
