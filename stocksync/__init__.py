"""StockSync: offline-first inventory and order tracking."""

__version__ = "1.0.0"
