"""Operational scripts for the registry database."""
