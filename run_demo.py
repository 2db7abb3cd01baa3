#!/usr/bin/env python3
"""
Storefront Demo Script
This script provisions the storefront schema if needed and runs one order operation.
"""

import logging
import sys

from src.main import main

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logger.info("Starting storefront demo...")
    logger.info("Credentials are read from MYSQLUSER / MYSQLPASS")
    sys.exit(main())
