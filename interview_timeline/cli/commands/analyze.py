"""
Interview Timeline CLI Analysis Commands

Implementation of the analyze, metrics and hash commands.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from ...analysis.assembler import build_transcript_hash, get_timeline_analyzer
from ...analysis.markers import filter_markers
from ...analysis.metrics import compute_transcript_metrics
from ...cache.storage import create_timeline_store, get_or_compute_timeline
from ...core.models import TimelineAnalysisResult, TranscriptTurn
from ...core.schemas import parse_transcript
from ...utils.config import TimelineConfig


def load_transcript_file(path: Path) -> Tuple[str, List[TranscriptTurn]]:
    """
    Load a transcript JSON file.

    The file holds either a list of turns or an object with ``sessionId`` and
    ``turns``. Without a session id the file stem is used.

    Raises:
        ValueError: If the document has neither shape
        pydantic.ValidationError: If a turn is invalid
    """
    with open(path, 'r', encoding='utf-8') as f:
        document = json.load(f)

    session_id = path.stem
    if isinstance(document, dict):
        session_id = document.get('sessionId') or document.get('session_id') or session_id
        document = document.get('turns')

    if not isinstance(document, list):
        raise ValueError("Transcript must be a list of turns or an object with a 'turns' list")

    return str(session_id), parse_transcript(document)


def _write_json(payload: Dict[str, Any], output_path: Optional[Path]):
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + "\n", encoding='utf-8')
    else:
        click.echo(text)


def analyze_transcript_command(
    transcript_path: Path,
    session_id: Optional[str],
    output_path: Optional[Path],
    format: str,
    use_cache: bool,
    view: str,
    config: TimelineConfig,
    quiet: bool = False,
) -> Dict[str, Any]:
    """Analyze a transcript file and print or save the timeline."""
    file_session_id, turns = load_transcript_file(transcript_path)
    session_id = session_id or file_session_id
    analyzer = get_timeline_analyzer(config.analysis)

    cached = False
    if use_cache:
        store = create_timeline_store(config.cache)
        result, cached = get_or_compute_timeline(store, session_id, turns, analyzer)
    else:
        result = analyzer.analyze(session_id, turns)

    markers = filter_markers(result.markers, view)

    if format == 'json' or output_path:
        payload = result.to_dict()
        payload['markers'] = [marker.to_dict() for marker in markers]
        _write_json(payload, output_path)
    elif not quiet:
        _render_timeline(Console(), result, markers, cached)

    return {
        'session_id': session_id,
        'transcript_hash': result.transcript_hash,
        'segments': len(result.segments),
        'markers': len(markers),
        'cached': cached,
        'summary': result.summary(),
        'output': str(output_path) if output_path else None,
    }


def _render_timeline(console: Console, result: TimelineAnalysisResult, markers, cached: bool):
    source = "cache" if cached else "computed"
    console.print(f"[bold blue]Timeline for {result.session_id}[/bold blue] "
                  f"[dim]({result.transcript_hash}, {source})[/dim]")

    segment_table = Table(title="Segments")
    segment_table.add_column("#", style="cyan", justify="right")
    segment_table.add_column("Question", style="white")
    segment_table.add_column("Avg", style="green", justify="right")
    segment_table.add_column("Rel/Str/Spe/Imp/Cla", style="yellow")
    segment_table.add_column("Follow-ups", justify="right")
    segment_table.add_column("Latency", justify="right")

    for segment in result.segments:
        scores = "/".join(f"{value:g}" for value in segment.scores.values())
        latency = f"{segment.latency_sec:g}s" if segment.latency_sec is not None else "-"
        segment_table.add_row(
            str(segment.segment_index),
            segment.question[:60],
            f"{segment.average_score:.1f}",
            scores,
            str(segment.follow_up_count),
            latency,
        )
    console.print(segment_table)

    marker_table = Table(title="Markers")
    marker_table.add_column("Turn", style="cyan", justify="right")
    marker_table.add_column("Type", style="magenta")
    marker_table.add_column("Label", style="white")
    marker_table.add_column("Severity", justify="right")
    marker_table.add_column("Confidence", justify="right")

    for marker in markers:
        marker_table.add_row(
            str(marker.event_turn_index),
            marker.type,
            marker.short_label,
            f"{marker.severity:g}",
            f"{marker.confidence:.2f}",
        )
    console.print(marker_table)

    if result.momentum_points:
        series = " ".join(f"{point.value:g}" for point in result.momentum_points)
        console.print(f"Momentum: [green]{series}[/green]")


def metrics_command(
    transcript_path: Path,
    output_path: Optional[Path],
    format: str,
    quiet: bool = False,
) -> Dict[str, Any]:
    """Compute delivery metrics for a transcript file."""
    _, turns = load_transcript_file(transcript_path)
    metrics = compute_transcript_metrics(turns)

    if format == 'json' or output_path:
        _write_json(metrics.to_dict(), output_path)
    elif not quiet:
        console = Console()
        table = Table(title="Delivery Metrics")
        table.add_column("Q", style="cyan", justify="right")
        table.add_column("Question", style="white")
        table.add_column("Words", justify="right")
        table.add_column("WPM", justify="right")
        table.add_column("Latency", justify="right")
        table.add_column("Fillers", justify="right")
        for row in metrics.per_response:
            table.add_row(
                str(row.question_index),
                row.question_snippet,
                str(row.word_count),
                str(row.wpm) if row.wpm is not None else "-",
                f"{row.latency_sec}s" if row.latency_sec is not None else "-",
                str(row.filler_count),
            )
        console.print(table)
        console.print(
            f"Talk ratio (candidate): [green]{metrics.talk_ratio_user:.0%}[/green]  "
            f"Filler rate: [green]{metrics.filler_rate:g}/100 words[/green]"
        )

    return {
        'responses': metrics.response_count,
        'filler_rate': metrics.filler_rate,
        'output': str(output_path) if output_path else None,
    }


def hash_command(transcript_path: Path) -> str:
    """Print the content hash used as the cache key for a transcript file."""
    _, turns = load_transcript_file(transcript_path)
    transcript_hash = build_transcript_hash(turns)
    click.echo(transcript_hash)
    return transcript_hash
