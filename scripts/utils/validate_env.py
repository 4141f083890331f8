#!/usr/bin/env python3
"""
Environment validation script for CryptoMap.
Checks the API key and configuration before running against CoinGecko.
"""

import logging
import os
import sys
from pathlib import Path

from cryptomap.config import ConfigLoader

logger = logging.getLogger(__name__)


def validate_environment():
    """Validate the environment variables the client reads."""
    api_key = os.getenv("COINGECKO_API_KEY", "").strip()
    if not api_key:
        logger.error("Missing required environment variable: COINGECKO_API_KEY")
        logger.error("Set it to your CoinGecko key, e.g.: export COINGECKO_API_KEY=CG-...")
        return False

    if not api_key.startswith("CG-"):
        logger.warning("COINGECKO_API_KEY does not look like a CoinGecko key (CG-...)")

    base_url = os.getenv("COINGECKO_BASE_URL")
    if base_url and not base_url.startswith(("http://", "https://")):
        logger.error(f"COINGECKO_BASE_URL must be an http(s) URL, got {base_url!r}")
        return False

    logger.info("✅ Environment validation passed")
    return True


def check_config_files():
    """Check that the configuration directory holds the expected files."""
    config_dir = Path(os.getenv("CRYPTOMAP_CONFIG_DIR", "config"))
    expected_files = [config_dir / name for name in ConfigLoader.CONFIG_FILES]

    missing_files = [path.name for path in expected_files if not path.exists()]

    if missing_files:
        # defaults cover every setting, so this is not fatal
        logger.warning(f"Missing configuration files (defaults used): {', '.join(missing_files)}")
        return True

    logger.info("✅ All configuration files found")
    return True


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    logger.info("Starting environment validation...")

    success = True
    success &= validate_environment()
    success &= check_config_files()

    if success:
        logger.info("🎉 All validation checks passed!")
        sys.exit(0)
    else:
        logger.error("❌ Validation failed")
        sys.exit(1)
