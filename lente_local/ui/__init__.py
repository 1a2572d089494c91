from .workers import GatewayWorker, QtTaskRunner

__all__ = [
    "GatewayWorker",
    "QtTaskRunner",
]
