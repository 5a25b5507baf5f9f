"""Result models (Pydantic v2).

These mirror the JSON payloads of the Speech to Text V1 service:
- unknown keys are ignored, so new service fields never break decoding;
- optional keys default to `None`; `model_fields_set` tells "the service
  omitted it" apart from "the service sent an empty value";
- keys the service always sends are declared required.

Status fields stay plain strings; see `core.domain.status` for the known
values and their lifecycles.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.status import AudioStatus, CorpusStatus, JobStatus, ModelStatus


class _ResultModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# --- Base models -----------------------------------------------------------


class SupportedFeatures(_ResultModel):
    custom_language_model: bool = Field(
        ...,
        description="Whether the model can be customized with a custom language model.",
    )
    speaker_labels: bool = Field(
        ...,
        description="Whether `speaker_labels` can be requested with the model.",
    )


class SpeechModel(_ResultModel):
    """A base model available for recognition (e.g. `en-US_BroadbandModel`)."""

    name: str = Field(..., description="Model name, used as `model` query value.")
    language: str = Field(..., description="Language identifier, e.g. `en-US`.")
    rate: int = Field(..., description="Minimum sampling rate in Hertz.")
    url: str = Field(..., description="URI of the model.")
    supported_features: SupportedFeatures
    description: str = Field(..., description="Brief description of the model.")


class SpeechModels(_ResultModel):
    models: list[SpeechModel]


# --- Recognition -----------------------------------------------------------


class KeywordResult(_ResultModel):
    normalized_text: str
    start_time: float
    end_time: float
    confidence: float


class WordAlternativeResult(_ResultModel):
    confidence: float
    word: str


class WordAlternativeResults(_ResultModel):
    start_time: float
    end_time: float
    alternatives: list[WordAlternativeResult]


class SpeechRecognitionAlternative(_ResultModel):
    transcript: str
    confidence: float | None = None
    # Each entry is `[word, start, end]` / `[word, confidence]`.
    timestamps: list[list[str | float]] | None = None
    word_confidence: list[list[str | float]] | None = None


class SpeechRecognitionResult(_ResultModel):
    final_results: bool = Field(..., alias="final")
    alternatives: list[SpeechRecognitionAlternative]
    keywords_result: dict[str, list[KeywordResult]] | None = Field(
        default=None,
        description="Spotted keywords, keyed by the keyword as requested.",
    )
    word_alternatives: list[WordAlternativeResults] | None = None


class SpeakerLabelsResult(_ResultModel):
    from_: float = Field(..., alias="from")
    to: float
    speaker: int
    confidence: float
    final_results: bool = Field(..., alias="final")


class SpeechRecognitionResults(_ResultModel):
    """Outcome of `recognize`, or the results attached to a completed job."""

    results: list[SpeechRecognitionResult] | None = None
    result_index: int | None = None
    speaker_labels: list[SpeakerLabelsResult] | None = None
    warnings: list[str] | None = None

    @property
    def transcript(self) -> str:
        """Best alternative of every final result, joined in order."""

        parts: list[str] = []
        for result in self.results or []:
            if not result.alternatives:
                continue
            text = result.alternatives[0].transcript.strip()
            if text:
                parts.append(text)
        return " ".join(parts)


# --- Asynchronous jobs -----------------------------------------------------


class RecognitionJob(_ResultModel):
    """An asynchronous recognition job.

    `results` is only attached once `status` is `completed`.
    """

    id: str = Field(..., description="Job ID, used in `check_job` / `delete_job`.")
    status: str = Field(
        ...,
        description="`waiting`, `processing`, `completed` or `failed`.",
    )
    created: str = Field(..., description="Creation time (ISO 8601, UTC).")
    updated: str | None = Field(default=None, description="Last status change (UTC).")
    url: str | None = Field(default=None, description="URL to poll the job.")
    user_token: str | None = None
    results: list[SpeechRecognitionResults] | None = None
    warnings: list[str] | None = None

    @property
    def job_status(self) -> JobStatus | None:
        return JobStatus.parse(self.status)

    @property
    def is_terminal(self) -> bool:
        status = self.job_status
        return status is not None and status.is_terminal()


class RecognitionJobs(_ResultModel):
    recognitions: list[RecognitionJob]


class RegisterStatus(_ResultModel):
    status: str = Field(..., description="`created` or `already created`.")
    url: str = Field(..., description="The registered callback URL.")


# --- Custom language models ------------------------------------------------


class LanguageModel(_ResultModel):
    """A custom language model."""

    customization_id: str = Field(..., description="GUID of the custom model.")
    created: str | None = None
    language: str | None = None
    dialect: str | None = None
    versions: list[str] | None = None
    owner: str | None = None
    name: str | None = None
    description: str | None = None
    base_model_name: str | None = None
    status: str | None = Field(
        default=None,
        description="`pending`, `ready`, `training`, `available`, `upgrading` or `failed`.",
    )
    progress: int | None = Field(default=None, description="Training progress (0-100).")
    warnings: str | None = None

    @property
    def model_status(self) -> ModelStatus | None:
        return ModelStatus.parse(self.status)


class LanguageModels(_ResultModel):
    customizations: list[LanguageModel]


class Corpus(_ResultModel):
    name: str
    total_words: int
    out_of_vocabulary_words: int
    status: str = Field(..., description="`analyzed`, `being_processed` or `undetermined`.")
    error: str | None = None

    @property
    def corpus_status(self) -> CorpusStatus | None:
        return CorpusStatus.parse(self.status)


class Corpora(_ResultModel):
    corpora: list[Corpus]


class WordError(_ResultModel):
    element: str


class Word(_ResultModel):
    word: str
    sounds_like: list[str]
    display_as: str
    count: int
    source: list[str] = Field(
        ...,
        description="Corpora that contained the word, or `user` if added directly.",
    )
    error: list[WordError] | None = None


class Words(_ResultModel):
    words: list[Word]


class CustomWord(_ResultModel):
    """A custom word sent with `add_words`.

    Only the fields that are set are serialized.
    """

    word: str | None = None
    sounds_like: list[str] | None = None
    display_as: str | None = None


# --- Custom acoustic models ------------------------------------------------


class AcousticModel(_ResultModel):
    """A custom acoustic model."""

    customization_id: str = Field(..., description="GUID of the custom model.")
    created: str | None = None
    language: str | None = None
    versions: list[str] | None = None
    owner: str | None = None
    name: str | None = None
    description: str | None = None
    base_model_name: str | None = None
    status: str | None = None
    progress: int | None = None
    warnings: str | None = None

    @property
    def model_status(self) -> ModelStatus | None:
        return ModelStatus.parse(self.status)


class AcousticModels(_ResultModel):
    customizations: list[AcousticModel]


class AudioDetails(_ResultModel):
    type: str | None = Field(default=None, description="`audio`, `archive` or `undetermined`.")
    codec: str | None = None
    frequency: int | None = None
    compression: str | None = Field(default=None, description="`zip` or `gzip` for archives.")


class AudioResource(_ResultModel):
    duration: float
    name: str
    details: AudioDetails
    status: str = Field(..., description="`ok`, `being_processed` or `invalid`.")

    @property
    def audio_status(self) -> AudioStatus | None:
        return AudioStatus.parse(self.status)


class AudioResources(_ResultModel):
    total_minutes_of_audio: float
    audio: list[AudioResource]


class AudioListing(_ResultModel):
    """An audio file (top-level fields) or an archive (`container` + `audio`)."""

    duration: float | None = None
    name: str | None = None
    details: AudioDetails | None = None
    status: str | None = None
    container: AudioResource | None = None
    audio: list[AudioResource] | None = None
