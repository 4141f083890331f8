"""CoinGecko market-data ingestion."""
