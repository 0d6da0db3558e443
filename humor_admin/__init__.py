"""Superadmin dashboard for the caption-on-image humor platform."""

__version__ = "0.1.0"
