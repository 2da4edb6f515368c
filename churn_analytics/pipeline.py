"""Load-once, query-many churn analysis run."""

import logging
from pathlib import Path
from typing import Any, Iterable

from churn_analytics.analytics.queries import run_all
from churn_analytics.models import CustomerRecord
from churn_analytics.source import read_extract
from churn_analytics.store.star_schema import StarSchemaStore, load_star_schema

logger = logging.getLogger(__name__)


class ChurnAnalysis:
    """Load a customer extract into the star schema and run the churn analyses.

    The schema is loaded once; every analysis is a pure read over it.

    Parameters
    ----------
    records : Iterable[CustomerRecord]
        Records of the flat extract. Keys are validated before anything is loaded.
    places : int
        Decimal places for churn rates and shares.
    """

    def __init__(self, records: Iterable[CustomerRecord], places: int = 2) -> None:
        self.places = places
        self.store: StarSchemaStore = load_star_schema(records)
        self.results: dict[str, list[Any]] = {}

    @classmethod
    def from_csv(cls, path: str | Path, places: int = 2) -> "ChurnAnalysis":
        """Build an analysis from a CSV extract."""
        return cls(read_extract(path), places=places)

    def run(self) -> dict[str, list[Any]]:
        """Run all eight analyses.

        Returns
        -------
        dict[str, list]
            Analysis name -> result rows.
        """
        logger.info("Running churn analyses over %d customers", len(self.store))
        self.results = run_all(self.store, places=self.places)
        return self.results

    def export(self, sinks: list[Any]) -> None:
        """Write every result set to each sink.

        Parameters
        ----------
        sinks : list[Any]
            Sinks exposing ``write_batch(name, rows)``.
        """
        if not self.results:
            self.run()

        for sink in sinks:
            for name, rows in self.results.items():
                sink.write_batch(name, rows)

        logger.info("Exported %d result sets to %d sinks", len(self.results), len(sinks))
