"""Infrastructure adapters: local cache storage and remote gateway."""
