"""
Interview Timeline CLI Configuration Commands

Configuration display and validation commands.
"""

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from ...utils.config import MARKER_TYPES, TimelineConfig

SECTIONS = {
    'vocabulary': lambda config: config.analysis.vocabulary,
    'scoring': lambda config: config.analysis.scoring,
    'markers': lambda config: config.analysis.markers,
    'cache': lambda config: config.cache,
    'logging': lambda config: config.logging,
    'server': lambda config: config.server,
}


def show_config(config: TimelineConfig, section: str = None, quiet: bool = False):
    """Display current configuration."""
    console = Console()

    if quiet:
        if section:
            if section not in SECTIONS:
                click.echo(f"Section '{section}' not found")
                return
            for key, value in SECTIONS[section](config).model_dump().items():
                click.echo(f"{section}.{key}={value}")
        else:
            click.echo(f"Follow-up similarity: {config.analysis.scoring.follow_up_similarity}")
            click.echo(f"Cache: {config.cache.backend}")
            click.echo(f"Log level: {config.logging.level}")
        return

    console.print("[bold blue]Interview Timeline Configuration[/bold blue]")

    if section:
        _show_config_section(console, config, section)
    else:
        _show_all_config_sections(console, config)


def _show_config_section(console: Console, config: TimelineConfig, section_name: str):
    """Show a specific configuration section."""
    if section_name not in SECTIONS:
        console.print(f"[red]Section '{section_name}' not found[/red]")
        console.print(f"Available sections: {', '.join(SECTIONS)}")
        return

    table = Table(title=f"{section_name.title()} Configuration")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_column("Description", style="yellow")

    descriptions = _get_config_descriptions()

    for key, value in SECTIONS[section_name](config).model_dump().items():
        description = descriptions.get(f"{section_name}.{key}", "")

        if isinstance(value, list):
            display_value = ", ".join(str(v) for v in value)
        elif isinstance(value, dict):
            display_value = ", ".join(f"{k}={v}" for k, v in value.items())
        else:
            display_value = str(value)

        table.add_row(key, display_value, description)

    console.print(table)


def _show_all_config_sections(console: Console, config: TimelineConfig):
    """Show all configuration sections in a summary format."""
    scoring = config.analysis.scoring
    markers = config.analysis.markers

    console.print(Panel(
        f"Follow-up Similarity: [green]{scoring.follow_up_similarity}[/green]\n"
        f"Evidence Snippet Length: [green]{scoring.snippet_max_length}[/green]\n"
        f"Question Snippet Length: [green]{scoring.question_snippet_length}[/green]\n"
        f"Sentence Snippet Length: [green]{scoring.sentence_snippet_length}[/green]",
        title="Scoring Settings",
        border_style="blue"
    ))

    console.print(Panel(
        f"Strong Answer: [green]avg >= {markers.strong_min_average}, "
        f"specificity >= {markers.strong_min_specificity}[/green]\n"
        f"Weak Answer: [green]score <= {markers.weak_max_score}[/green]\n"
        f"Deep Follow-up Depth: [green]{markers.follow_up_min_depth}[/green]\n"
        f"Pause Thresholds: [green]{markers.pause_min_latency_sec:g}/"
        f"{markers.pause_moderate_latency_sec:g}/{markers.pause_severe_latency_sec:g}s[/green]\n"
        f"Caps: [green]{', '.join(f'{k}={v}' for k, v in markers.limits.items())}[/green]",
        title="Marker Settings",
        border_style="green"
    ))

    console.print(Panel(
        f"Backend: [green]{config.cache.backend}[/green]\n"
        f"Path: [green]{config.cache.path}[/green]",
        title="Cache Settings",
        border_style="yellow"
    ))

    console.print(Panel(
        f"Level: [green]{config.logging.level}[/green]\n"
        f"Console Format: [green]{config.logging.console_format}[/green]\n"
        f"Log To File: [green]{config.logging.log_to_file}[/green]\n"
        f"Log Directory: [green]{config.logging.log_dir}[/green]",
        title="Logging Settings",
        border_style="cyan"
    ))


def validate_config(config: TimelineConfig, quiet: bool = False) -> bool:
    """Validate cross-field constraints of the current configuration."""
    console = Console()

    if not quiet:
        console.print("[bold blue]Validating Configuration[/bold blue]")

    errors = []
    warnings = []

    markers = config.analysis.markers
    if not (markers.pause_min_latency_sec
            <= markers.pause_moderate_latency_sec
            <= markers.pause_severe_latency_sec):
        errors.append("Pause thresholds must be ordered: min <= moderate <= severe")

    if markers.strong_min_average <= markers.weak_max_score:
        errors.append("Strong answer average must be above the weak answer threshold")

    missing = [marker_type for marker_type in MARKER_TYPES if markers.limits.get(marker_type, 0) == 0]
    if missing:
        warnings.append(f"Marker types disabled by a cap of 0: {', '.join(missing)}")

    scoring = config.analysis.scoring
    if scoring.follow_up_similarity == 0:
        warnings.append("Follow-up similarity of 0 marks every question as a follow-up")

    if config.cache.backend == "memory":
        warnings.append("Memory cache does not persist between CLI invocations")

    if quiet:
        for error in errors:
            click.echo(f"Error: {error}")
        for warning in warnings:
            click.echo(f"Warning: {warning}")
        return len(errors) == 0

    if errors:
        console.print(Panel(
            "\n".join(f"• {error}" for error in errors),
            title="Configuration Errors",
            border_style="red"
        ))

    if warnings:
        console.print(Panel(
            "\n".join(f"• {warning}" for warning in warnings),
            title="Configuration Warnings",
            border_style="yellow"
        ))

    if not errors and not warnings:
        console.print("[green]Configuration is valid![/green]")
    elif not errors:
        console.print("[green]Configuration is valid with warnings[/green]")
    else:
        console.print("[red]Configuration has errors that must be fixed[/red]")

    return len(errors) == 0


def _get_config_descriptions() -> dict:
    """Get descriptions for configuration settings."""
    return {
        'scoring.follow_up_similarity': 'Jaccard similarity marking a follow-up question',
        'scoring.snippet_max_length': 'Maximum segment evidence snippet length',
        'scoring.question_snippet_length': 'Maximum question evidence length',
        'scoring.sentence_snippet_length': 'Maximum first-sentence evidence length',

        'markers.strong_min_average': 'Minimum average score for a strong answer',
        'markers.strong_min_specificity': 'Minimum specificity for a strong answer',
        'markers.weak_max_score': 'Relevance/structure/clarity at or below this is weak',
        'markers.follow_up_min_depth': 'Follow-up depth that triggers a deep follow-up',
        'markers.confidence_dip_max_specificity': 'Specificity ceiling for a confidence dip',
        'markers.pause_min_latency_sec': 'Latency (seconds) that starts a pause marker',
        'markers.limits': 'Maximum markers kept per type',

        'cache.backend': 'Result store (memory, file)',
        'cache.path': 'JSON file used by the file backend',
        'cache.max_entries': 'Sessions kept by the memory backend (0 = unbounded)',

        'logging.level': 'Logging verbosity level',
        'logging.console_format': 'Console output format',
        'logging.log_to_file': 'Write a rotating log file',
        'logging.log_dir': 'Log file directory',

        'server.host': 'HTTP tool server bind address',
        'server.port': 'HTTP tool server port',
    }
