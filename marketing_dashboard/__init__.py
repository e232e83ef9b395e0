"""Marketing analytics dashboard: breakdown aggregation for demographic, device, region and weekly views."""

__version__ = "0.1.0"
