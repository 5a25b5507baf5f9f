"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets several commands reuse the same tables/panels.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain import models


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in `--json` mode)."""

    title = Text("Speech to Text", style="bold cyan")
    subtitle = Text("Recognition • Custom models • Jobs", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _status_style(status: str | None) -> str:
    if status in ("available", "completed", "analyzed", "ok"):
        return "green"
    if status in ("failed", "invalid", "undetermined"):
        return "red"
    return "yellow"


def build_models_table(items: models.SpeechModels) -> Table:
    table = Table(title="Base Models")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Language", style="white")
    table.add_column("Rate", style="white", justify="right")
    table.add_column("Custom LM", style="green")
    table.add_column("Speakers", style="green")
    for m in sorted(items.models, key=lambda x: x.name):
        table.add_row(
            m.name,
            m.language,
            str(m.rate),
            "yes" if m.supported_features.custom_language_model else "no",
            "yes" if m.supported_features.speaker_labels else "no",
        )
    return table


def build_jobs_table(items: list[models.RecognitionJob]) -> Table:
    table = Table(title="Recognition Jobs")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Created", style="dim")
    table.add_column("Updated", style="dim")
    table.add_column("User token", style="magenta")
    for job in items:
        table.add_row(
            job.id,
            Text(job.status, style=_status_style(job.status)),
            job.created,
            job.updated or "",
            job.user_token or "",
        )
    return table


def build_customizations_table(
    items: list[models.LanguageModel] | list[models.AcousticModel],
    *,
    title: str,
) -> Table:
    """Table shared by custom language and acoustic models."""

    table = Table(title=title)
    table.add_column("Customization ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Base model", style="white")
    table.add_column("Status", style="white")
    table.add_column("Progress", style="dim", justify="right")
    for m in items:
        table.add_row(
            m.customization_id,
            m.name or "",
            m.base_model_name or "",
            Text(m.status or "", style=_status_style(m.status)),
            f"{m.progress}%" if m.progress is not None else "",
        )
    return table


def build_corpora_table(items: models.Corpora) -> Table:
    table = Table(title="Corpora")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Words", style="white", justify="right")
    table.add_column("OOV", style="white", justify="right")
    table.add_column("Status", style="white")
    table.add_column("Error", style="red")
    for c in items.corpora:
        table.add_row(
            c.name,
            str(c.total_words),
            str(c.out_of_vocabulary_words),
            Text(c.status, style=_status_style(c.status)),
            c.error or "",
        )
    return table


def build_words_table(items: models.Words) -> Table:
    table = Table(title="Words")
    table.add_column("Word", style="cyan", no_wrap=True)
    table.add_column("Sounds like", style="white")
    table.add_column("Display as", style="white")
    table.add_column("Count", style="white", justify="right")
    table.add_column("Source", style="dim")
    for w in items.words:
        table.add_row(w.word, ", ".join(w.sounds_like), w.display_as, str(w.count), ", ".join(w.source))
    return table


def build_audio_table(items: models.AudioResources) -> Table:
    table = Table(title=f"Audio Resources ({items.total_minutes_of_audio:.1f} min)")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Duration (s)", style="white", justify="right")
    table.add_column("Type", style="white")
    table.add_column("Status", style="white")
    for a in items.audio:
        table.add_row(
            a.name,
            f"{a.duration:g}",
            a.details.type or "",
            Text(a.status, style=_status_style(a.status)),
        )
    return table


def build_transcript_panel(results: models.SpeechRecognitionResults) -> Panel:
    """Panel with the best transcript, keywords and speaker turns."""

    title = Text("Transcript", style="bold yellow")
    body = Text()
    transcript = results.transcript
    body.append(transcript + "\n" if transcript else "(no speech recognized)\n")

    keywords: dict[str, int] = {}
    for result in results.results or []:
        for keyword, hits in (result.keywords_result or {}).items():
            keywords[keyword] = keywords.get(keyword, 0) + len(hits)
    if keywords:
        body.append("\nKeywords:\n", style="bold")
        for keyword, count in keywords.items():
            body.append(f"- {keyword} ({count})\n")

    if results.speaker_labels:
        speakers = sorted({label.speaker for label in results.speaker_labels})
        body.append(f"\nSpeakers: {', '.join(str(s) for s in speakers)}", style="dim")

    for warning in results.warnings or []:
        body.append(f"\nWarning: {warning}", style="red")

    return Panel(body, title=title, border_style="yellow")
