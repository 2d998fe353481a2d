"""Shared infrastructure for fast-intercom-conversations."""
