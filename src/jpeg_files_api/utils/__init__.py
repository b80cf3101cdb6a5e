"""Shared helpers for the JPEG Files API."""
