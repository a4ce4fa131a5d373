"""
Application Layer Package

Use cases and DTOs that turn the domain's health, metrics and logging
rules into what the HTTP API serves.
"""

from siteops.application import dtos, use_cases

__all__ = ["dtos", "use_cases"]
