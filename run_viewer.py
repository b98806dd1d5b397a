#!/usr/bin/env python
"""
DAO Viewer API Server Runner.

Usage:
    python run_viewer.py

Environment:
    DEFAULT_NETWORK   mainnet | testnet (default mainnet)
    VIEWER_HOST       bind address (default 0.0.0.0)
    VIEWER_PORT       port (default 8000, or PORT)
"""

import logging
import sys

import uvicorn
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from dao_viewer.config import ViewerConfig  # noqa: E402


def main():
    """Run the DAO viewer API server."""
    config = ViewerConfig.from_env()

    # Setup logging
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s | %(levelname)s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    logger = logging.getLogger(__name__)

    logger.info(
        f"Starting DAO Viewer API on {config.host}:{config.port} "
        f"(default network: {config.default_network.value})"
    )

    try:
        uvicorn.run(
            "dao_viewer.api:create_app",
            factory=True,
            host=config.host,
            port=config.port,
            reload=config.is_development,
            log_level=config.log_level.lower(),
            access_log=True,
        )
    except Exception as e:
        logger.error(f"Failed to start DAO viewer: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
