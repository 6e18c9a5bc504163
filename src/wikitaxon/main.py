# ABOUTME: Main CLI application entry point using asyncclick
# ABOUTME: Provides commands for category extraction, single category classification and logging status

from pathlib import Path

import asyncclick as click
from rich.console import Console
from rich.panel import Panel

from wikitaxon.config import get_config
from wikitaxon.extraction import (
    CategoryExtractor,
    ExtractionError,
    ExtractionResources,
    category_to_class,
    open_corpus,
)
from wikitaxon.facts import Channel, open_channel_writers
from wikitaxon.utils.logging import (
    LoggingMode,
    configure_logging,
    create_page_progress,
    get_logging_status,
    with_pipeline_context,
)
from wikitaxon.utils.rich_tables import (
    create_channel_counts_table,
    create_extraction_summary_table,
    create_logging_status_table,
    print_rich_table,
)

console = Console()


def _load_resources(resources: Path | None) -> ExtractionResources:
    path = resources or get_config().resources_file
    if path is None:
        raise click.UsageError("No resources file given (use --resources or WIKITAXON_RESOURCES_FILE)")
    try:
        return ExtractionResources.load(path)
    except ExtractionError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise SystemExit(1) from e


@click.command()
@click.argument("corpus", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--resources", "-r", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Resources JSON file"
)
@click.option(
    "--output", "-o", type=click.Path(file_okay=False, path_type=Path), default=Path("facts"), show_default=True
)
@click.pass_context
def extract(ctx, corpus: Path, resources: Path | None, output: Path):
    """
    📚 Extract types, classes and labels from the category links of a page dump.

    Writes one TSV file per output channel into the output directory.
    """
    json_output = ctx.obj["json_output"]
    config = get_config()
    loaded = _load_resources(resources)

    with with_pipeline_context("category_extraction", corpus=str(corpus)) as logger:
        logger.info("Starting extraction", output=str(output))
        extractor = CategoryExtractor.from_resources(loaded, config)

        try:
            with open_corpus(corpus, config.corpus_encoding) as reader, open_channel_writers(output) as writers:
                if json_output:
                    stats = extractor.extract(reader, writers)
                else:
                    _, _, tracker = create_page_progress(console, total=config.expected_pages)
                    with tracker:
                        stats = extractor.extract(reader, writers, progress=tracker)
        except ExtractionError as e:
            logger.error("Extraction failed", error=str(e))
            console.print(f"[red]❌ {e}[/red]")
            raise SystemExit(1) from e

        logger.info("Extraction complete", pages=stats.pages, facts=stats.facts_written)

    if json_output:
        click.echo(stats.model_dump_json())
        return

    console.print(Panel.fit(f"✅ Facts written to [bold green]{output}[/bold green]", border_style="magenta"))
    print_rich_table(console, create_extraction_summary_table(stats))
    descriptions = {channel.value: channel.description for channel in Channel}
    print_rich_table(console, create_channel_counts_table(stats.facts_written, descriptions))


@click.command()
@click.argument("category")
@click.option(
    "--resources", "-r", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Resources JSON file"
)
def classify(category: str, resources: Path | None):
    """
    🎯 Show the WordNet class a category name maps to.
    """
    loaded = _load_resources(resources)
    concept = category_to_class(category, loaded.nonconceptual_words, loaded.preferred_meanings)
    if concept is None:
        console.print(f"[yellow]No class for category '{category}'[/yellow]")
        return
    click.echo(concept)


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

    # Use config defaults when CLI parameters are not provided
    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status)
    print_rich_table(console, logging_table)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    🗂️ wikitaxon - typed knowledge-graph facts from Wikipedia categories

    Turns category tags of a Wikipedia page dump into rdf:type facts,
    category classes linked to WordNet, and multilingual labels.
    """
    # Store global options in context for commands to access
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    # Initialize logging once here instead of in each command
    _initialize_logging(json, log_level, log_file)

    # Show help if no command provided
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Add commands to the main group
app.add_command(extract)
app.add_command(classify)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
