"""Locust load test for the public auction listing endpoint."""

__version__ = "0.1.0"
