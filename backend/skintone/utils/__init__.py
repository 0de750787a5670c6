"""Logging, request id and metrics helpers."""
