# ABOUTME: Rich table utilities for the CLI: run summaries, channel counts, logging status
# ABOUTME: Provides pre-configured table generators for common data display patterns

from typing import Any

from rich.box import ROUNDED, SIMPLE
from rich.console import Console
from rich.table import Table


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a two-column key-value table.

    Args:
        title: Table title with emoji/styling
        data: Dictionary of key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, width=None, no_wrap=False)
    table.add_column("Value", style=value_style, width=None, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_multi_column_table(
    title: str,
    columns: list[tuple[str, str]],
    rows: list[list[str]],
    title_style: str = "bold cyan",
    header_style: str = "bold magenta",
    alternate_row_styles: list[str] | None = None,
    box_style=ROUNDED,
) -> Table:
    """Create a multi-column table with zebra striping.

    Args:
        title: Table title with emoji/styling
        columns: List of (column_name, column_style) tuples
        rows: List of row data
        title_style: Style for the table title
        header_style: Style for column headers
        alternate_row_styles: Alternating row styles for zebra striping
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style=header_style,
        border_style="cyan",
        title_justify="left",
        row_styles=alternate_row_styles or ["", "dim"],
        expand=True,
    )

    for name, style in columns:
        table.add_column(name, style=style)

    for row in rows:
        table.add_row(*row)

    return table


def create_extraction_summary_table(stats: Any) -> Table:
    """Create the summary table of an extraction run.

    Args:
        stats: ExtractionStats of the run

    Returns:
        Styled run summary table
    """
    summary_data = {
        "📄 Pages": f"{stats.pages:,}",
        "🏷️ Entities": f"{stats.entities:,}",
        "📂 Categories": f"{stats.categories:,}",
        "🎯 Classified Categories": f"{stats.classified_categories:,}",
        "🌍 Language Labels": f"{stats.language_labels:,}",
        "✅ Types Kept": f"{stats.types_kept:,}",
        "🚫 Types Dropped": f"{stats.types_dropped:,}",
        "🗑️ Entities Discarded": f"{stats.entities_discarded:,}",
        "⚠️ Skipped Links": f"{stats.skipped_links:,}",
    }

    return create_key_value_table(
        title="📊 Extraction Summary",
        data=summary_data,
        title_style="bold green",
        key_style="cyan",
        value_style="white",
        box_style=SIMPLE,
    )


def create_channel_counts_table(facts_written: dict[str, int], descriptions: dict[str, str]) -> Table:
    """Create a table of facts written per output channel.

    Args:
        facts_written: Channel name -> number of facts
        descriptions: Channel name -> description

    Returns:
        Styled channel table
    """
    rows = [
        [name, f"{facts_written.get(name, 0):,}", description] for name, description in descriptions.items()
    ]
    return create_multi_column_table(
        title="📦 Output Channels",
        columns=[("Channel", "bold blue"), ("Facts", "green"), ("Contents", "white")],
        rows=rows,
    )


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🧱 Structlog Routed": "Yes" if status["structlog_configured"] else "No",
    }

    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["json"]:
        logging_data["📊 JSON Log"] = status["log_files"]["json"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing and style.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()  # Add spacing before
    console.print(table)
    console.print()  # Add spacing after
