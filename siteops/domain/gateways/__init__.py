from .connectivity_gateway import IConnectivityGateway

__all__ = ["IConnectivityGateway"]
