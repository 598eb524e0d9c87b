"""Supply chain negotiation engine — balanced mitigation strategy selection."""

__version__ = "0.1.0"
