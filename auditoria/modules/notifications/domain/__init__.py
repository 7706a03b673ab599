"""Notifications domain layer."""
