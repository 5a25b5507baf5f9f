"""Command line over `SpeechToTextV1` (typer + rich).

Examples:
- `stt models list`
- `stt recognize call.wav --content-type audio/wav --keyword hello`
- `stt --json jobs check <job-id>`
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Optional

import typer
from pydantic import BaseModel
from rich.console import Console

from adapters.json_exporter import dump_result_json, export_result_json
from adapters.service import DetailedResponse
from adapters.speech_to_text import SpeechToTextV1
from cli import doctor
from cli.ui_components import (
    build_audio_table,
    build_corpora_table,
    build_customizations_table,
    build_jobs_table,
    build_models_table,
    build_transcript_panel,
    build_words_table,
    print_banner,
)
from core.domain import options as opts
from core.domain.models import CustomWord
from core.errors import ServiceResponseError, SpeechToTextError

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, help="Speech to Text V1 client.")
models_app = typer.Typer(no_args_is_help=True, help="Base models.")
jobs_app = typer.Typer(no_args_is_help=True, help="Asynchronous recognition jobs.")
lm_app = typer.Typer(no_args_is_help=True, help="Custom language models.")
corpora_app = typer.Typer(no_args_is_help=True, help="Corpora of a custom language model.")
words_app = typer.Typer(no_args_is_help=True, help="Words of a custom language model.")
am_app = typer.Typer(no_args_is_help=True, help="Custom acoustic models.")
audio_app = typer.Typer(no_args_is_help=True, help="Audio resources of a custom acoustic model.")
user_data_app = typer.Typer(no_args_is_help=True, help="User data management.")

app.add_typer(models_app, name="models")
app.add_typer(jobs_app, name="jobs")
app.add_typer(lm_app, name="language-models")
app.add_typer(corpora_app, name="corpora")
app.add_typer(words_app, name="words")
app.add_typer(am_app, name="acoustic-models")
app.add_typer(audio_app, name="audio")
app.add_typer(user_data_app, name="user-data")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_state: dict[str, Any] = {"json": False, "output": None}


def build_service() -> SpeechToTextV1:
    return SpeechToTextV1()


def _call(operation: Callable[[SpeechToTextV1], DetailedResponse[Any]]) -> DetailedResponse[Any]:
    """Run one operation; client errors print in red and exit with code 1."""

    try:
        service = build_service()
    except (SpeechToTextError, ValueError) as exc:
        _console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=1)

    try:
        with service as stt:
            logger.debug("Using service at %s", stt.service_url)
            return operation(stt)
    except ServiceResponseError as exc:
        _console.print(f"[red]Service error:[/red] {exc}")
        raise typer.Exit(code=1)
    except SpeechToTextError as exc:
        _console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1)


def _show(response: DetailedResponse[Any], render: Callable[[Any], Any] | None = None) -> None:
    result: BaseModel | None = response.result
    if response.decode_error:
        _console.print(f"[yellow]Warning:[/yellow] {response.decode_error}")
    if result is None:
        if _state["json"]:
            typer.echo(response.raw.decode("utf-8", errors="replace") or "{}")
        else:
            _console.print(f"[green]Done[/green] (HTTP {response.status_code})")
        return
    if _state["output"] is not None:
        saved = export_result_json(result=result, output_path=_state["output"])
        if not _state["json"]:
            _console.print(f"[green]Saved[/green] {saved}")
    if _state["json"] or render is None:
        typer.echo(dump_result_json(result))
        return
    _console.print(render(result))


def _open_file(path: Path):
    if not path.is_file():
        raise typer.BadParameter(f"file not found: {path}")
    return path.open("rb")


@app.callback()
def main(
    json_output: bool = typer.Option(False, "--json", help="Print raw JSON results."),
    log_level: str = typer.Option("WARNING", "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
    banner: bool = typer.Option(False, "--banner", help="Show the banner before the output."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Also write the JSON result to this file."
    ),
) -> None:
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    _state["json"] = json_output
    _state["output"] = output
    if banner and not json_output:
        print_banner(_console)


# --- Models ------------------------------------------------------------------


@models_app.command("list")
def models_list() -> None:
    _show(_call(lambda stt: stt.list_models()), build_models_table)


@models_app.command("get")
def models_get(model_id: str) -> None:
    _show(_call(lambda stt: stt.get_model(opts.GetModelOptions(model_id=model_id))))


# --- Recognition -------------------------------------------------------------


@app.command()
def recognize(
    audio_file: Path = typer.Argument(..., help="Audio file to transcribe."),
    content_type: str = typer.Option(..., "--content-type", "-c", help="e.g. audio/wav, audio/flac."),
    model: Optional[str] = typer.Option(None, "--model", "-m"),
    customization_id: Optional[str] = typer.Option(None, "--customization-id"),
    keyword: Optional[list[str]] = typer.Option(None, "--keyword", "-k", help="Repeatable."),
    keywords_threshold: Optional[float] = typer.Option(None, "--keywords-threshold"),
    timestamps: bool = typer.Option(False, "--timestamps"),
    speaker_labels: bool = typer.Option(False, "--speaker-labels"),
) -> None:
    """Transcribe an audio file synchronously."""

    with _open_file(audio_file) as audio:
        options = opts.RecognizeOptions(
            audio=audio,
            content_type=content_type,
            model=model,
            customization_id=customization_id,
            keywords=keyword or None,
            keywords_threshold=keywords_threshold,
            timestamps=timestamps or None,
            speaker_labels=speaker_labels or None,
        )
        response = _call(lambda stt: stt.recognize(options))
    _show(response, build_transcript_panel)


# --- Jobs --------------------------------------------------------------------


@jobs_app.command("list")
def jobs_list() -> None:
    _show(_call(lambda stt: stt.check_jobs()), lambda r: build_jobs_table(r.recognitions))


@jobs_app.command("check")
def jobs_check(job_id: str) -> None:
    response = _call(lambda stt: stt.check_job(opts.CheckJobOptions(job_id=job_id)))
    job = response.result
    if job is not None and not _state["json"]:
        _console.print(build_jobs_table([job]))
        for results in job.results or []:
            _console.print(build_transcript_panel(results))
        return
    _show(response)


@jobs_app.command("create")
def jobs_create(
    audio_file: Path = typer.Argument(...),
    content_type: str = typer.Option(..., "--content-type", "-c"),
    model: Optional[str] = typer.Option(None, "--model", "-m"),
    callback_url: Optional[str] = typer.Option(None, "--callback-url"),
    events: Optional[list[str]] = typer.Option(None, "--events", help="Repeatable, e.g. recognitions.completed."),
    user_token: Optional[str] = typer.Option(None, "--user-token"),
) -> None:
    """Submit an asynchronous recognition job."""

    with _open_file(audio_file) as audio:
        options = opts.CreateJobOptions(
            audio=audio,
            content_type=content_type,
            model=model,
            callback_url=callback_url,
            events=events or None,
            user_token=user_token,
        )
        response = _call(lambda stt: stt.create_job(options))
    _show(response, lambda job: build_jobs_table([job]))


@jobs_app.command("delete")
def jobs_delete(job_id: str) -> None:
    _show(_call(lambda stt: stt.delete_job(opts.DeleteJobOptions(job_id=job_id))))


# --- Custom language models --------------------------------------------------


@lm_app.command("list")
def lm_list(language: Optional[str] = typer.Option(None, "--language", "-l")) -> None:
    response = _call(
        lambda stt: stt.list_language_models(opts.ListLanguageModelsOptions(language=language))
    )
    _show(response, lambda r: build_customizations_table(r.customizations, title="Custom Language Models"))


@lm_app.command("get")
def lm_get(customization_id: str) -> None:
    response = _call(
        lambda stt: stt.get_language_model(opts.GetLanguageModelOptions(customization_id=customization_id))
    )
    _show(response, lambda m: build_customizations_table([m], title="Custom Language Model"))


@lm_app.command("create")
def lm_create(
    name: str,
    base_model_name: str = typer.Option(..., "--base-model"),
    dialect: Optional[str] = typer.Option(None, "--dialect"),
    description: Optional[str] = typer.Option(None, "--description"),
) -> None:
    options = opts.CreateLanguageModelOptions(
        name=name, base_model_name=base_model_name, dialect=dialect, description=description
    )
    response = _call(lambda stt: stt.create_language_model(options))
    _show(response, lambda m: build_customizations_table([m], title="Custom Language Model"))


@lm_app.command("delete")
def lm_delete(customization_id: str) -> None:
    options = opts.DeleteLanguageModelOptions(customization_id=customization_id)
    _show(_call(lambda stt: stt.delete_language_model(options)))


@lm_app.command("train")
def lm_train(
    customization_id: str,
    word_type_to_add: Optional[str] = typer.Option(None, "--word-type", help="all or user."),
) -> None:
    options = opts.TrainLanguageModelOptions(
        customization_id=customization_id, word_type_to_add=word_type_to_add
    )
    _show(_call(lambda stt: stt.train_language_model(options)))


# --- Corpora -----------------------------------------------------------------


@corpora_app.command("list")
def corpora_list(customization_id: str) -> None:
    options = opts.ListCorporaOptions(customization_id=customization_id)
    _show(_call(lambda stt: stt.list_corpora(options)), build_corpora_table)


@corpora_app.command("add")
def corpora_add(
    customization_id: str,
    corpus_name: str,
    corpus_file: Path = typer.Argument(..., help="Plain-text corpus."),
    allow_overwrite: bool = typer.Option(False, "--allow-overwrite"),
) -> None:
    with _open_file(corpus_file) as fh:
        options = opts.AddCorpusOptions(
            customization_id=customization_id,
            corpus_name=corpus_name,
            corpus_file=fh,
            allow_overwrite=allow_overwrite or None,
        )
        response = _call(lambda stt: stt.add_corpus(options))
    _show(response)


@corpora_app.command("delete")
def corpora_delete(customization_id: str, corpus_name: str) -> None:
    options = opts.DeleteCorpusOptions(customization_id=customization_id, corpus_name=corpus_name)
    _show(_call(lambda stt: stt.delete_corpus(options)))


# --- Words -------------------------------------------------------------------


@words_app.command("list")
def words_list(
    customization_id: str,
    word_type: Optional[str] = typer.Option(None, "--word-type", help="all, user or corpora."),
    sort: Optional[str] = typer.Option(None, "--sort", help="alphabetical or count."),
) -> None:
    options = opts.ListWordsOptions(customization_id=customization_id, word_type=word_type, sort=sort)
    _show(_call(lambda stt: stt.list_words(options)), build_words_table)


@words_app.command("add")
def words_add(
    customization_id: str,
    word: list[str] = typer.Argument(..., help="One or more words."),
    sounds_like: Optional[list[str]] = typer.Option(None, "--sounds-like", help="Only with a single word."),
    display_as: Optional[str] = typer.Option(None, "--display-as", help="Only with a single word."),
) -> None:
    if len(word) == 1:
        options = opts.AddWordOptions(
            customization_id=customization_id,
            word_name=word[0],
            sounds_like=sounds_like or None,
            display_as=display_as,
        )
        _show(_call(lambda stt: stt.add_word(options)))
        return
    words_options = opts.AddWordsOptions(
        customization_id=customization_id,
        words=[CustomWord(word=w) for w in word],
    )
    _show(_call(lambda stt: stt.add_words(words_options)))


@words_app.command("delete")
def words_delete(customization_id: str, word_name: str) -> None:
    options = opts.DeleteWordOptions(customization_id=customization_id, word_name=word_name)
    _show(_call(lambda stt: stt.delete_word(options)))


# --- Custom acoustic models --------------------------------------------------


@am_app.command("list")
def am_list(language: Optional[str] = typer.Option(None, "--language", "-l")) -> None:
    response = _call(
        lambda stt: stt.list_acoustic_models(opts.ListAcousticModelsOptions(language=language))
    )
    _show(response, lambda r: build_customizations_table(r.customizations, title="Custom Acoustic Models"))


@am_app.command("get")
def am_get(customization_id: str) -> None:
    response = _call(
        lambda stt: stt.get_acoustic_model(opts.GetAcousticModelOptions(customization_id=customization_id))
    )
    _show(response, lambda m: build_customizations_table([m], title="Custom Acoustic Model"))


@am_app.command("create")
def am_create(
    name: str,
    base_model_name: str = typer.Option(..., "--base-model"),
    description: Optional[str] = typer.Option(None, "--description"),
) -> None:
    options = opts.CreateAcousticModelOptions(
        name=name, base_model_name=base_model_name, description=description
    )
    response = _call(lambda stt: stt.create_acoustic_model(options))
    _show(response, lambda m: build_customizations_table([m], title="Custom Acoustic Model"))


@am_app.command("delete")
def am_delete(customization_id: str) -> None:
    options = opts.DeleteAcousticModelOptions(customization_id=customization_id)
    _show(_call(lambda stt: stt.delete_acoustic_model(options)))


@am_app.command("train")
def am_train(
    customization_id: str,
    custom_language_model_id: Optional[str] = typer.Option(None, "--custom-language-model-id"),
) -> None:
    options = opts.TrainAcousticModelOptions(
        customization_id=customization_id, custom_language_model_id=custom_language_model_id
    )
    _show(_call(lambda stt: stt.train_acoustic_model(options)))


# --- Audio resources ---------------------------------------------------------


@audio_app.command("list")
def audio_list(customization_id: str) -> None:
    options = opts.ListAudioOptions(customization_id=customization_id)
    _show(_call(lambda stt: stt.list_audio(options)), build_audio_table)


@audio_app.command("add")
def audio_add(
    customization_id: str,
    audio_name: str,
    audio_file: Path = typer.Argument(...),
    content_type: str = typer.Option(..., "--content-type", "-c"),
    contained_content_type: Optional[str] = typer.Option(None, "--contained-content-type"),
    allow_overwrite: bool = typer.Option(False, "--allow-overwrite"),
) -> None:
    with _open_file(audio_file) as audio:
        options = opts.AddAudioOptions(
            customization_id=customization_id,
            audio_name=audio_name,
            audio_resource=audio,
            content_type=content_type,
            contained_content_type=contained_content_type,
            allow_overwrite=allow_overwrite or None,
        )
        response = _call(lambda stt: stt.add_audio(options))
    _show(response)


@audio_app.command("delete")
def audio_delete(customization_id: str, audio_name: str) -> None:
    options = opts.DeleteAudioOptions(customization_id=customization_id, audio_name=audio_name)
    _show(_call(lambda stt: stt.delete_audio(options)))


# --- User data ---------------------------------------------------------------


@user_data_app.command("delete")
def user_data_delete(
    customer_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    if not yes:
        typer.confirm(f"Delete all data for customer '{customer_id}'?", abort=True)
    options = opts.DeleteUserDataOptions(customer_id=customer_id)
    _show(_call(lambda stt: stt.delete_user_data(options)))


def run() -> None:
    app()
