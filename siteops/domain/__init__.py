"""
Domain Layer Package

Core rules of the operations backend: error classification, retry
semantics, log records and health aggregation. Nothing here depends on
FastAPI, httpx or the file system.
"""

from siteops.domain import entities, gateways, ports, services

__all__ = ["entities", "gateways", "ports", "services"]
