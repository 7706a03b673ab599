"""Bounded contexts of the administrative backend."""
