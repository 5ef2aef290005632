"""Adaptadores de I/O (HTTP) sobre la API."""
