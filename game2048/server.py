"""Serves the pre-built front-end assets."""
import logging
import os

from flask import Flask, send_from_directory
from flask_cors import CORS

from .config import ConfigError, ServerConfig

logger = logging.getLogger(__name__)


def create_app(config=None):
    config = config or ServerConfig()
    static_dir = os.path.abspath(config.static_dir)

    app = Flask(__name__, static_folder=None)
    CORS(app, resources={r"/*": {"origins": "*"}})
    app.config['STATIC_DIR'] = static_dir
    app.config['INDEX_FILE'] = config.index_file

    @app.route('/', defaults={'path': ''})
    @app.route('/<path:path>')
    def serve_asset(path):
        """Serve a file, or the index document for a directory."""
        if not path or os.path.isdir(os.path.join(static_dir, path)):
            path = '/'.join(part for part in (path.rstrip('/'), config.index_file) if part)
        return send_from_directory(static_dir, path)

    return app


def main():
    try:
        config = ServerConfig.from_env()
    except ConfigError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error("FATAL: %s", e)
        raise SystemExit(1)

    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    if not os.path.isdir(config.static_dir):
        logger.warning("Static directory %s does not exist", config.static_dir)

    app = create_app(config)
    logger.info("Server starting on http://%s:%d", config.host, config.port)
    app.run(host=config.host, port=config.port, debug=False)


if __name__ == '__main__':
    main()
