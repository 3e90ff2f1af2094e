"""Application services built on the data providers."""

from careerecon.application.economic_data import CareerEconomicService

__all__ = ["CareerEconomicService"]
