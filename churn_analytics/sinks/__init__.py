"""Output sinks for analysis results and the star schema."""

from churn_analytics.sinks.console import ConsoleSink
from churn_analytics.sinks.json_file import JsonFileSink
from churn_analytics.sinks.postgres import PostgresSink

__all__ = ["ConsoleSink", "JsonFileSink", "PostgresSink"]
