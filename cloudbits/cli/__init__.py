"""Command-line interface for cloudBit subscriptions."""
