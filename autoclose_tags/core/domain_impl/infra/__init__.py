"""Infra domain package: settings storage."""
