#!/usr/bin/env python3
"""
Bank Ledger Entry Point

Starts the FastAPI server with the bank ledger teller endpoints.
"""

import sys

from bank_ledger.api import run_server
from bank_ledger.config import get_config
from bank_ledger.logging_config import setup_logging


if __name__ == "__main__":
    config = get_config()
    logger = setup_logging(config.log_level, "bank_ledger", config.log_format, config.log_file)

    logger.info("Starting Bank Ledger API on %s:%s", config.api_host, config.api_port)
    if config.transaction_log_enabled:
        logger.info("Transaction log: %s", config.transaction_log_path)

    try:
        run_server()
    except KeyboardInterrupt:
        logger.info("Shutting down Bank Ledger API")
    except Exception:
        logger.exception("Error starting server")
        sys.exit(1)
