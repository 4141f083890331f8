"""Provider adapters for market data."""
