"""Synthetic data generators for the customer extract."""

from churn_analytics.generators.extract import ExtractGenerator

__all__ = ["ExtractGenerator"]
