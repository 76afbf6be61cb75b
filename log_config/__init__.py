"""Logging setup shared by every module."""
