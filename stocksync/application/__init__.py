"""Application layer: use cases, DTOs, notifications and service wiring."""
