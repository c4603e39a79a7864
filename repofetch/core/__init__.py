"""Core building blocks: transports, fetchers and configuration."""
