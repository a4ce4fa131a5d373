"""
Presentation Layer Package

This package contains the presentation layer components,
which are responsible for handling HTTP requests and responses:
controllers, exception handlers and request middleware.
"""

from siteops.presentation import controllers

__all__ = ["controllers"]
