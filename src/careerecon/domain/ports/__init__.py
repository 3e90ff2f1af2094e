"""Ports (interfaces) implemented by the infrastructure layer."""

from careerecon.domain.ports.data_providers import TimeSeriesDataProvider

__all__ = ["TimeSeriesDataProvider"]
