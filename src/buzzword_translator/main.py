"""Main CLI entry point for the Corporate Buzzword Translator.

This module provides the command-line interface for looking up corporate
jargon and its plain-language translation. It is a thin presentation layer
over :class:`buzzword_translator.search.BuzzwordSearchEngine`.
"""

import json
import random
import sys
import traceback
from typing import Any, Dict, List, Optional

import click

from .__version__ import __version__
from .config.logging import configure_logging, get_logger
from .config.settings import Settings, load_settings
from .exceptions import ConfigurationError, DictionaryLoadError
from .search import BuzzwordSearchEngine, load_dictionary_file
from .search.highlight import highlight_matches
from .search.models import (
    DictionaryEntry,
    InvalidReason,
    MatchResult,
    SearchOutcome,
    SearchStatus,
    Suggestion,
)

logger = get_logger(__name__)


class CLIError(Exception):
    """Base CLI error with user-friendly messages."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(message)


class CLIContext:
    """Global CLI context management."""

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        config_file: Optional[str] = None,
        dictionary: Optional[str] = None,
        seed: Optional[int] = None,
    ):
        self.verbose = verbose
        self.quiet = quiet
        self.config_file = config_file
        self.seed = seed
        self.settings = self.load_settings(dictionary)
        self._engine: Optional[BuzzwordSearchEngine] = None

    def load_settings(self, dictionary: Optional[str]) -> Settings:
        """Load settings from environment and the optional config file."""
        overrides: Dict[str, Any] = {}
        if dictionary:
            overrides["dictionary"] = {"path": dictionary}
        try:
            return load_settings(self.config_file, overrides)
        except ConfigurationError as e:
            raise CLIError(e.message, "Check YAML syntax and setting names") from e

    @property
    def engine(self) -> BuzzwordSearchEngine:
        """Search engine, built on first use."""
        if self._engine is None:
            rng = random.Random(self.seed) if self.seed is not None else None
            try:
                self._engine = BuzzwordSearchEngine.from_settings(self.settings, rng)
            except DictionaryLoadError as e:
                raise CLIError(
                    f"Unable to load dictionary: {e.message}",
                    "Check the dictionary file, or omit --dictionary to use "
                    "the bundled buzzwords",
                ) from e
            logger.debug(
                "Search engine ready",
                entries=len(self._engine.dictionary),
                source=self._engine.dictionary.source,
            )
        return self._engine


def handle_cli_error(error: Exception, ctx: Optional[click.Context] = None):
    """Global CLI error handler."""
    if isinstance(error, CLIError):
        click.echo(f"Error: {error.message}", err=True)
        if error.suggestion:
            click.echo(f"Suggestion: {error.suggestion}", err=True)
    elif isinstance(error, click.ClickException):
        error.show()
    else:
        verbose = bool(ctx and ctx.obj and ctx.obj.get("verbose"))
        click.echo(f"Unexpected error: {error}", err=True)
        if verbose:
            click.echo(traceback.format_exc(), err=True)
        else:
            click.echo("Run with --verbose for detailed error information", err=True)

    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="buzzword-translator")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output with detailed logging",
)
@click.option(
    "--quiet", "-q", is_flag=True, help="Enable quiet mode with minimal output"
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="Configuration file path (YAML format)",
)
@click.option(
    "--dictionary",
    "-d",
    type=click.Path(exists=True),
    help="Dictionary file (JSON or YAML list of entries)",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for random picks and suggestions",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    config: Optional[str],
    dictionary: Optional[str],
    seed: Optional[int],
):
    """Corporate Buzzword Translator

    Look up corporate jargon and get a plain-language translation. Queries are
    typo tolerant: near misses are still found by keyword and fuzzy matching.

    \b
    Examples:
      buzzword-translator search synergy
      buzzword-translator search "circle bak"
      buzzword-translator random
      buzzword-translator examples --count 5
    """
    if verbose and quiet:
        raise click.BadParameter("Cannot use both --verbose and --quiet options")

    ctx.ensure_object(dict)
    try:
        cli_context = CLIContext(
            verbose=verbose,
            quiet=quiet,
            config_file=config,
            dictionary=dictionary,
            seed=seed,
        )
    except CLIError as e:
        handle_cli_error(e, ctx)

    ctx.obj["cli_context"] = cli_context
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    log_settings = cli_context.settings.logging
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"
    else:
        level = log_settings.level

    configure_logging(
        level=level,
        log_file=log_settings.file_path,
        json_logs=log_settings.json_format,
        enable_performance_logging=log_settings.enable_performance,
    )


def _get_engine(ctx: click.Context) -> BuzzwordSearchEngine:
    try:
        return ctx.obj["cli_context"].engine
    except CLIError as e:
        handle_cli_error(e, ctx)


@cli.command()
@click.argument("query")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--no-suggestions",
    is_flag=True,
    help="Do not print suggestions or popular terms",
)
@click.pass_context
def search(ctx: click.Context, query: str, output_format: str, no_suggestions: bool):
    """Search for a buzzword.

    \b
    QUERY: Phrase, keyword or misspelling to look up

    \b
    Examples:
      buzzword-translator search "low hanging fruit"
      buzzword-translator search teamwork --format json
    """
    engine = _get_engine(ctx)
    outcome = engine.search(query)

    suggestions: List[Suggestion] = []
    if not no_suggestions and outcome.ok:
        if outcome.results:
            suggestions = engine.suggest_related(outcome.results, query)
        else:
            suggestions = engine.suggest_similar(query)

    examples: List[str] = []
    if outcome.status is SearchStatus.EMPTY:
        examples = engine.example_phrases()

    popular: List[str] = []
    if not no_suggestions and _offers_popular(outcome):
        popular = engine.popular_phrases()

    if output_format == "json":
        data = outcome.to_dict()
        for result, result_data in zip(outcome.results, data.get("results", [])):
            result_data["highlighted_phrase"] = highlight_matches(
                result.phrase, result.matched_terms
            )
        if outcome.ok and not no_suggestions:
            data["suggestions"] = [s.to_dict() for s in suggestions]
        if examples:
            data["examples"] = examples
        if popular:
            data["popular"] = popular
        click.echo(json.dumps(data, indent=2))
    else:
        _display_outcome(outcome, suggestions, examples, popular)

    if outcome.status in (SearchStatus.INVALID, SearchStatus.ERROR):
        sys.exit(1)


@cli.command()
@click.argument("query")
@click.pass_context
def suggest(ctx: click.Context, query: str):
    """Show terms similar to QUERY."""
    engine = _get_engine(ctx)
    suggestions = engine.suggest_similar(query)
    if not suggestions:
        click.echo(f"No similar terms found for '{query}'.")
        return
    click.echo("Similar terms you might be looking for:")
    for suggestion in suggestions:
        click.echo(f"  - {suggestion.phrase}: {suggestion.translation}")


@cli.command(name="random")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def random_entry(ctx: click.Context, output_format: str):
    """Show a random buzzword."""
    entry = _get_engine(ctx).random_entry()
    if output_format == "json":
        click.echo(json.dumps(entry.to_dict(), indent=2))
    else:
        _display_entry(entry)


@cli.command()
@click.option(
    "--count", "-n", type=click.IntRange(min=1), default=None, help="Number of examples"
)
@click.pass_context
def examples(ctx: click.Context, count: Optional[int]):
    """Show popular example buzzwords."""
    phrases = _get_engine(ctx).example_phrases(count)
    click.echo("Try one of these popular terms:")
    for phrase in phrases:
        click.echo(f"  - {phrase}")


@cli.command()
@click.argument("path", type=click.Path(exists=True), required=False)
@click.pass_context
def validate(ctx: click.Context, path: Optional[str]):
    """Validate a dictionary file.

    Reports how many entries are usable and how many would be dropped.
    Without PATH the configured (or bundled) dictionary is checked.
    """
    cli_context = ctx.obj["cli_context"]
    try:
        if path:
            dictionary = load_dictionary_file(
                path, cli_context.settings.dictionary.max_invalid_ratio
            )
        else:
            dictionary = cli_context.engine.dictionary
    except DictionaryLoadError as e:
        handle_cli_error(
            CLIError(
                f"Dictionary is not usable: {e}",
                "Every entry needs a non-empty phrase and translation",
            ),
            ctx,
        )

    click.echo(f"Dictionary: {dictionary.source or path}")
    click.echo(f"  Valid entries:   {len(dictionary)}")
    click.echo(f"  Dropped entries: {dictionary.dropped}")
    click.echo(f"  Categories:      {len(dictionary.categories)}")


def _offers_popular(outcome: SearchOutcome) -> bool:
    if outcome.status is SearchStatus.INVALID:
        return outcome.reason in (InvalidReason.TOO_SHORT, InvalidReason.TOO_LONG)
    return outcome.ok and not outcome.results


def _display_outcome(
    outcome: SearchOutcome,
    suggestions: List[Suggestion],
    examples: List[str],
    popular: List[str],
) -> None:
    if outcome.status is SearchStatus.EMPTY:
        click.echo("Enter a buzzword to translate. Try one of these popular terms:")
        for phrase in examples:
            click.echo(f"  - {phrase}")
        return

    if outcome.status is SearchStatus.INVALID:
        click.echo(outcome.hint, err=True)
        _display_popular(popular, "Try one of these popular terms:")
        return

    if outcome.status is SearchStatus.ERROR:
        click.echo(f"Something went wrong: {outcome.message}", err=True)
        return

    if not outcome.results:
        click.echo(f"No buzzwords found for '{outcome.query}'.")
        if suggestions:
            click.echo("Similar terms you might be looking for:")
            for suggestion in suggestions:
                click.echo(f"  - {suggestion.phrase}")
        _display_popular(popular, "Or try these popular terms:")
        return

    click.echo(f"Found {len(outcome.results)} result(s) for '{outcome.query}':")
    for position, result in enumerate(outcome.results, start=1):
        _display_result(position, result)

    if suggestions:
        click.echo("\nYou might also like:")
        for suggestion in suggestions:
            click.echo(f"  - {suggestion.phrase}")


def _display_popular(popular: List[str], heading: str) -> None:
    if not popular:
        return
    click.echo(heading)
    for phrase in popular:
        click.echo(f"  - {phrase}")


def _display_result(position: int, result: MatchResult) -> None:
    click.echo(
        f"\n{position}. {result.phrase} "
        f"[{result.match_type.value}, {result.relevance_score:.2f}]"
    )
    click.echo(f"   {result.translation}")
    if result.context:
        click.echo(f"   Context: {result.context}")
    if result.alternatives:
        click.echo(f"   Alternatives: {', '.join(result.alternatives)}")
    for meaning in result.secondary_meanings:
        click.echo(f"   Also: {meaning.translation}")
        if meaning.context:
            click.echo(f"         {meaning.context}")


def _display_entry(entry: DictionaryEntry) -> None:
    click.echo(entry.phrase)
    click.echo(f"   {entry.translation}")
    if entry.context:
        click.echo(f"   Context: {entry.context}")
    if entry.alternatives:
        click.echo(f"   Alternatives: {', '.join(entry.alternatives)}")
    for meaning in entry.secondary_meanings:
        click.echo(f"   Also: {meaning.translation}")


if __name__ == "__main__":
    cli()
