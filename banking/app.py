"""Application factory and command-line entry point for the banking API server."""

from __future__ import annotations

import argparse
import html
import os
import sys
from collections.abc import Sequence

import yaml
from flask import Flask, Response, abort, redirect, send_from_directory

from banking import logger
from banking.config import Config, setup
from banking.handlers import AccountHandler
from banking.middleware import install_request_logger, install_trace_id
from banking.service import AccountService
from banking.storage import MemoryStorage

DEFAULT_CONFIG = "./config/config.yaml"
_MODES = ("", "debug", "release", "test")


def _swagger_page(api_path: str) -> str:
    url = html.escape(api_path, quote=True)
    return (
        "<!DOCTYPE html>\n"
        '<html><head><meta charset="utf-8"><title>API documentation</title></head>\n'
        f'<body><h1>API documentation</h1><p>OpenAPI specification: <a href="{url}">{url}</a></p>'
        "</body></html>\n"
    )


def create_app(config: Config | None = None) -> Flask:
    """Build the Flask application with its middleware and routes."""
    config = config or Config()
    mode = config.server.mode
    if mode not in _MODES:
        raise ValueError(f"unknown server mode: {mode}")

    app = Flask(__name__, static_folder=None)
    app.config["SERVER_MODE"] = mode or "debug"
    app.testing = mode == "test"

    install_request_logger(app)
    install_trace_id(app)

    @app.get("/ping")
    def ping() -> dict[str, str]:
        return {"message": "pong"}

    service = AccountService(MemoryStorage())
    app.register_blueprint(AccountHandler(service).blueprint())

    @app.get("/api/<path:filename>")
    def api_files(filename: str) -> Response:
        return send_from_directory(os.path.abspath("api"), filename)

    api_path = config.swagger.api_path

    @app.get("/swagger/", defaults={"resource": ""})
    @app.get("/swagger/<path:resource>")
    def swagger(resource: str) -> Response | str:
        if resource == "":
            return redirect("/swagger/index.html")
        if resource == "index.html":
            return _swagger_page(api_path)
        abort(404)

    return app


def main(argv: Sequence[str] | None = None) -> int:
    """Load the configuration, set up logging and serve the API."""
    parser = argparse.ArgumentParser(description="Run the banking API server.")
    parser.add_argument("-c", dest="config", default="", help="config file path")
    args = parser.parse_args(argv)

    config_file = args.config or DEFAULT_CONFIG
    print("configname ", config_file)

    try:
        config = setup(config_file)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"failed to load config {exc}", file=sys.stderr)
        return 1

    try:
        logger.init(config.logger.level, config.logger.format, config.logger.dir)
    except OSError as exc:
        print(f"failed to init logger {exc}", file=sys.stderr)
        return 1

    try:
        app = create_app(config)
        port = int(config.server.port)
    except ValueError as exc:
        print(f"failed to start server {exc}", file=sys.stderr)
        return 1

    app.run(host="0.0.0.0", port=port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())