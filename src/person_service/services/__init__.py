"""Persistence gateway and resource services."""
