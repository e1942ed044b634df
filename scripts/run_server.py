#!/usr/bin/env python3
"""
Run the NLP Gateway web API.

Configuration is read from the environment, .env and config/config.yaml.
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from nlp_gateway.config import reload_config
from nlp_gateway.logger import setup_logger
from nlp_gateway.web import create_app


def main() -> None:
    """Start the development server."""
    import argparse

    config = reload_config()

    parser = argparse.ArgumentParser(description="Run the NLP Gateway API")
    parser.add_argument("--host", default=config.web.host, help="Bind address")
    parser.add_argument("--port", type=int, default=config.web.port, help="Bind port")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    args = parser.parse_args()

    setup_logger(config.logging)

    app = create_app(config)
    app.run(host=args.host, port=args.port, debug=args.debug or config.web.debug)


if __name__ == "__main__":
    main()
