"""Local cache storage implementations."""
