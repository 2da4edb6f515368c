"""Console sink rendering result sets as text tables."""

from typing import Any

from churn_analytics.sinks.serialization import to_dict


class ConsoleSink:
    """Print result sets to stdout as aligned tables."""

    def __init__(self, max_records: int | None = None) -> None:
        """Initialize console sink.

        Parameters
        ----------
        max_records : int | None
            Maximum rows to print per result set (None for all).
        """
        self.max_records = max_records
        self._counts: dict[str, int] = {}

    def write_batch(self, name: str, rows: list[Any]) -> None:
        """Print a result set."""
        print(f"\n{'='*60}")
        print(f"{name} ({len(rows)} rows)")
        print("=" * 60)

        display_rows = rows[: self.max_records] if self.max_records else rows
        print(render_table([to_dict(row) for row in display_rows]))

        if self.max_records and len(rows) > self.max_records:
            print(f"... and {len(rows) - self.max_records} more rows")

        self._counts[name] = self._counts.get(name, 0) + len(rows)

    def close(self) -> None:
        """Print summary."""
        print(f"\n{'='*60}")
        print("Console Sink Summary")
        print("=" * 60)
        for name, count in self._counts.items():
            print(f"  {name}: {count} rows")


def render_table(rows: list[dict]) -> str:
    """Render dict rows as a fixed-width table.

    Columns that are empty in every row are left out.
    """
    if not rows:
        return "(no rows)"

    columns = [c for c in rows[0] if any(row.get(c) is not None for row in rows)]
    cells = [["" if row.get(c) is None else str(row.get(c)) for c in columns] for row in rows]
    widths = [max(len(c), *(len(line[i]) for line in cells)) for i, c in enumerate(columns)]

    lines = [
        "  ".join(c.ljust(w) for c, w in zip(columns, widths)),
        "  ".join("-" * w for w in widths),
    ]
    for line in cells:
        lines.append("  ".join(v.ljust(w) for v, w in zip(line, widths)))
    return "\n".join(lines)
