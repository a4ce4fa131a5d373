"""
Infrastructure Layer Package

Adapters to the outside world: log files, HTTP log submission, the error
webhook, GitHub and e-mail connectivity, and the in-process monitoring
services.
"""
