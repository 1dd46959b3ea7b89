"""Table rendering utilities for CLI output."""

from collections import Counter

from rich.table import Table


def create_snapshot_table(entries: list[dict], title_suffix: str = "") -> Table:
    """Create a table for displaying archived conversations.

    Args:
        entries: List of entry dictionaries with document_id, title, filename, size, status
        title_suffix: Optional suffix for table title

    Returns:
        Rich Table object ready for display
    """
    title = f"Conversations ({len(entries)} total){title_suffix}"
    table = Table(title=title)
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Status", style="yellow")
    table.add_column("Size", justify="right", style="dim")

    status_colors = {
        "tracked": "green",
        "stale": "red",
        "missing": "yellow",
    }

    for entry in entries:
        status_color = status_colors.get(entry["status"], "white")
        table.add_row(
            entry["document_id"],
            entry["title"] or "-",
            f"[{status_color}]{entry['status']}[/{status_color}]",
            f"{entry['size'] / 1024:,.1f} KB" if entry["filename"] else "-",
        )

    return table


def format_status_summary(entries: list[dict]) -> str:
    """Create a summary string of entry counts by status.

    Args:
        entries: List of entry dictionaries with 'status' key

    Returns:
        Formatted summary string like "1 stale, 3 tracked"
    """
    status_counts = Counter(e["status"] for e in entries)
    return ", ".join(f"{count} {status}" for status, count in sorted(status_counts.items()))
