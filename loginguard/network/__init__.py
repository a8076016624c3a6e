"""Connectivity status publishing and probing."""

from loginguard.network.connectivity import ConnectivityPublisher
from loginguard.network.probe import ConnectivityProbe

__all__ = ["ConnectivityProbe", "ConnectivityPublisher"]
