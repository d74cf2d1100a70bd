"""Inspect how a ``devtool`` string maps onto loader source map flags."""
