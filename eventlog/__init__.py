"""Transactional outbox event log."""
