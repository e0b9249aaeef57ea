"""
Interview Timeline Command Line Interface

Main CLI entry point for analyzing interview transcripts, inspecting
delivery metrics and managing configuration.
"""

import sys
import click
from pathlib import Path
from typing import Optional

from .. import __version__
from ..analysis.markers import MARKER_VIEWS
from ..utils.config import ConfigManager, load_config
from ..utils.logger import setup_logging


# Global context for CLI
class CLIContext:
    """CLI context for sharing state between commands."""
    def __init__(self):
        self.config = None
        self.logger = None
        self.verbose = False
        self.quiet = False


pass_context = click.make_pass_decorator(CLIContext, ensure=True)


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False),
              help='Configuration file path')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              default=None, help='Logging level')
@click.option('--quiet', '-q', is_flag=True, help='Suppress console output')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
@click.version_option(version=__version__, prog_name='Interview Timeline')
@pass_context
def cli(ctx: CLIContext, config: Optional[str], log_level: Optional[str], quiet: bool, verbose: bool):
    """
    Interview Timeline - Transcript Analysis Engine

    Segments interview transcripts into question/answer exchanges, scores
    every answer and highlights the moments worth reviewing.
    """
    ctx.quiet = quiet
    ctx.verbose = verbose

    try:
        if config:
            config_path = Path(config)
            ctx.config = ConfigManager(config_path.parent).load_config(config_path.stem)
        else:
            ctx.config = load_config("default")

        if log_level:
            ctx.config.logging.level = log_level

        if quiet:
            ctx.config.logging.level = 'ERROR'
        elif verbose:
            ctx.config.logging.level = 'DEBUG'

        ctx.logger = setup_logging(ctx.config.logging)

        if verbose:
            click.echo(f"Interview Timeline v{__version__}", err=True)
            click.echo(f"Cache: {ctx.config.cache.backend}", err=True)

    except Exception as e:
        click.echo(f"Initialization failed: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('transcript', type=click.Path(exists=True, dir_okay=False))
@click.option('--session-id', '-s', type=str,
              help='Session id (default: from the file, else the file name)')
@click.option('--output', '-o', type=click.Path(dir_okay=False),
              help='Write the JSON result to this file')
@click.option('--format', '-f', 'output_format', type=click.Choice(['json', 'table']),
              default='table', help='Output format')
@click.option('--cache/--no-cache', 'use_cache', default=True,
              help='Serve and store results through the configured cache')
@click.option('--view', type=click.Choice(list(MARKER_VIEWS)), default='all',
              help='Marker view to include')
@pass_context
def analyze(ctx: CLIContext, transcript: str, session_id: Optional[str], output: Optional[str],
            output_format: str, use_cache: bool, view: str):
    """
    Analyze an interview transcript.

    TRANSCRIPT is a JSON file holding a list of turns, or an object with
    "sessionId" and "turns".
    """
    from .commands.analyze import analyze_transcript_command

    try:
        result = analyze_transcript_command(
            transcript_path=Path(transcript),
            session_id=session_id,
            output_path=Path(output) if output else None,
            format=output_format,
            use_cache=use_cache,
            view=view,
            config=ctx.config,
            quiet=ctx.quiet,
        )

        if result['output'] and not ctx.quiet:
            click.echo(f"Timeline written: {result['output']}")
        if ctx.verbose:
            ctx.logger.log_analysis_summary({**result['summary'], 'cached': result['cached']})

    except Exception as e:
        click.echo(f"Analysis failed: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('transcript', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', type=click.Path(dir_okay=False),
              help='Write the JSON metrics to this file')
@click.option('--format', '-f', 'output_format', type=click.Choice(['json', 'table']),
              default='table', help='Output format')
@pass_context
def metrics(ctx: CLIContext, transcript: str, output: Optional[str], output_format: str):
    """Compute delivery metrics (talk ratio, fillers, pace, latency)."""
    from .commands.analyze import metrics_command

    try:
        result = metrics_command(
            transcript_path=Path(transcript),
            output_path=Path(output) if output else None,
            format=output_format,
            quiet=ctx.quiet,
        )

        if result['output'] and not ctx.quiet:
            click.echo(f"Metrics written: {result['output']}")

    except Exception as e:
        click.echo(f"Metrics failed: {e}", err=True)
        sys.exit(1)


@cli.command('hash')
@click.argument('transcript', type=click.Path(exists=True, dir_okay=False))
@pass_context
def hash_transcript(ctx: CLIContext, transcript: str):
    """Print the transcript content hash used as the cache key."""
    from .commands.analyze import hash_command

    try:
        hash_command(Path(transcript))
    except Exception as e:
        click.echo(f"Hashing failed: {e}", err=True)
        sys.exit(1)


@cli.group()
@pass_context
def config(ctx: CLIContext):
    """Configuration management commands."""
    pass


@config.command('show')
@click.option('--section', type=str, help='Show specific configuration section')
@click.option('--quiet', '-q', is_flag=True, help='Quiet output')
@pass_context
def config_show(ctx: CLIContext, section: Optional[str], quiet: bool):
    """Show current configuration."""
    from .commands.config import show_config

    try:
        show_config(ctx.config, section, quiet or ctx.quiet)
    except Exception as e:
        click.echo(f"Failed to show config: {e}", err=True)
        sys.exit(1)


@config.command('validate')
@pass_context
def config_validate(ctx: CLIContext):
    """Validate current configuration."""
    from .commands.config import validate_config

    try:
        is_valid = validate_config(ctx.config, ctx.quiet)
    except Exception as e:
        click.echo(f"Config validation failed: {e}", err=True)
        sys.exit(1)
    if not is_valid:
        sys.exit(1)


def main():
    """Main CLI entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user")
        sys.exit(130)
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
