"""Request options, one model per operation.

Every field is declared with `wire_field()`, which records:
- where the value travels (`path`, `query`, `header`, `body`, `form`,
  `payload`);
- whether it is required before a request may be issued;
- the wire name when it differs from the attribute (`Content-Type`, ...).

All fields default to `None`, meaning "omit from the request". Declaration
order is significant: path parameters are substituted and query parameters
are emitted in that order.

Required fields are checked by the request builder, not at construction, so
an options object can be filled in gradually; value types are still
validated by pydantic when the object is built.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict
from pydantic.fields import FieldInfo

from core.domain.models import CustomWord


class Wire(str, Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    BODY = "body"
    FORM = "form"
    PAYLOAD = "payload"


@dataclass(frozen=True)
class WireSpec:
    location: Wire
    name: str
    required: bool


def wire_field(
    location: Wire,
    *,
    required: bool = False,
    name: str | None = None,
    description: str | None = None,
) -> Any:
    extra: dict[str, Any] = {"wire": location.value, "required": required}
    if name:
        extra["wire_name"] = name
    return Field(default=None, description=description, json_schema_extra=extra)


def wire_spec(field_name: str, info: FieldInfo) -> WireSpec | None:
    """Read the wire metadata of a field; `None` for untagged fields (`headers`)."""

    extra = info.json_schema_extra
    if not isinstance(extra, dict) or "wire" not in extra:
        return None
    return WireSpec(
        location=Wire(extra["wire"]),
        name=str(extra.get("wire_name") or field_name),
        required=bool(extra.get("required", False)),
    )


class AudioContentType(str, Enum):
    """Audio formats accepted by `recognize`, `create_job` and `add_audio`."""

    BASIC = "audio/basic"
    FLAC = "audio/flac"
    L16 = "audio/l16"
    MP3 = "audio/mp3"
    MPEG = "audio/mpeg"
    MULAW = "audio/mulaw"
    OGG = "audio/ogg"
    OGG_OPUS = "audio/ogg;codecs=opus"
    OGG_VORBIS = "audio/ogg;codecs=vorbis"
    WAV = "audio/wav"
    WEBM = "audio/webm"
    WEBM_OPUS = "audio/webm;codecs=opus"
    WEBM_VORBIS = "audio/webm;codecs=vorbis"
    # Archives, `add_audio` only.
    ZIP = "application/zip"
    GZIP = "application/gzip"


class RequestOptions(BaseModel):
    """Base for every options model."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True, protected_namespaces=())

    headers: dict[str, str] | None = Field(
        default=None,
        description="Extra request headers (e.g. `X-Watson-Learning-Opt-Out`, `X-Watson-Metadata`).",
    )


def _customization_id(kind: str = "custom model") -> Any:
    return wire_field(Wire.PATH, required=True, description=f"Customization ID (GUID) of the {kind}.")


# --- Models ------------------------------------------------------------------


class ListModelsOptions(RequestOptions):
    pass


class GetModelOptions(RequestOptions):
    model_id: str | None = wire_field(
        Wire.PATH, required=True, description="Base model name, e.g. `en-US_BroadbandModel`."
    )


# --- Recognition -------------------------------------------------------------


class RecognizeOptions(RequestOptions):
    """Options for a synchronous `recognize` call.

    `audio` is sent as the raw request body (bytes or a readable binary
    stream); the caller keeps ownership of the stream and closes it.
    """

    audio: Any = wire_field(Wire.PAYLOAD)
    content_type: str | None = wire_field(Wire.HEADER, required=True, name="Content-Type")
    model: str | None = wire_field(Wire.QUERY)
    customization_id: str | None = wire_field(Wire.QUERY)
    acoustic_customization_id: str | None = wire_field(Wire.QUERY)
    base_model_version: str | None = wire_field(Wire.QUERY)
    customization_weight: float | None = wire_field(Wire.QUERY)
    inactivity_timeout: int | None = wire_field(Wire.QUERY)
    keywords: list[str] | None = wire_field(Wire.QUERY)
    keywords_threshold: float | None = wire_field(Wire.QUERY)
    max_alternatives: int | None = wire_field(Wire.QUERY)
    word_alternatives_threshold: float | None = wire_field(Wire.QUERY)
    word_confidence: bool | None = wire_field(Wire.QUERY)
    timestamps: bool | None = wire_field(Wire.QUERY)
    profanity_filter: bool | None = wire_field(Wire.QUERY)
    smart_formatting: bool | None = wire_field(Wire.QUERY)
    speaker_labels: bool | None = wire_field(Wire.QUERY)


class CreateJobOptions(RequestOptions):
    """Options for `create_job` (asynchronous recognition)."""

    audio: Any = wire_field(Wire.PAYLOAD)
    content_type: str | None = wire_field(Wire.HEADER, required=True, name="Content-Type")
    model: str | None = wire_field(Wire.QUERY)
    callback_url: str | None = wire_field(Wire.QUERY)
    events: str | list[str] | None = wire_field(
        Wire.QUERY, description="Callback events, see `core.domain.status.JobEvent`."
    )
    user_token: str | None = wire_field(Wire.QUERY)
    results_ttl: int | None = wire_field(Wire.QUERY, description="Minutes the results stay available.")
    customization_id: str | None = wire_field(Wire.QUERY)
    acoustic_customization_id: str | None = wire_field(Wire.QUERY)
    base_model_version: str | None = wire_field(Wire.QUERY)
    customization_weight: float | None = wire_field(Wire.QUERY)
    inactivity_timeout: int | None = wire_field(Wire.QUERY)
    keywords: list[str] | None = wire_field(Wire.QUERY)
    keywords_threshold: float | None = wire_field(Wire.QUERY)
    max_alternatives: int | None = wire_field(Wire.QUERY)
    word_alternatives_threshold: float | None = wire_field(Wire.QUERY)
    word_confidence: bool | None = wire_field(Wire.QUERY)
    timestamps: bool | None = wire_field(Wire.QUERY)
    profanity_filter: bool | None = wire_field(Wire.QUERY)
    smart_formatting: bool | None = wire_field(Wire.QUERY)
    speaker_labels: bool | None = wire_field(Wire.QUERY)


class CheckJobOptions(RequestOptions):
    job_id: str | None = wire_field(Wire.PATH, required=True)


class CheckJobsOptions(RequestOptions):
    pass


class DeleteJobOptions(RequestOptions):
    job_id: str | None = wire_field(Wire.PATH, required=True)


class RegisterCallbackOptions(RequestOptions):
    callback_url: str | None = wire_field(Wire.QUERY, required=True)
    user_secret: str | None = wire_field(
        Wire.QUERY, description="Secret used to sign callback notifications (HMAC-SHA1)."
    )


class UnregisterCallbackOptions(RequestOptions):
    callback_url: str | None = wire_field(Wire.QUERY, required=True)


# --- Custom language models --------------------------------------------------


class CreateLanguageModelOptions(RequestOptions):
    name: str | None = wire_field(Wire.BODY, required=True)
    base_model_name: str | None = wire_field(Wire.BODY, required=True)
    dialect: str | None = wire_field(Wire.BODY)
    description: str | None = wire_field(Wire.BODY)


class ListLanguageModelsOptions(RequestOptions):
    language: str | None = wire_field(Wire.QUERY)


class GetLanguageModelOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom language model")


class DeleteLanguageModelOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom language model")


class TrainLanguageModelOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom language model")
    word_type_to_add: str | None = wire_field(Wire.QUERY, description="`all` or `user`.")
    customization_weight: float | None = wire_field(Wire.QUERY)


class ResetLanguageModelOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom language model")


class UpgradeLanguageModelOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom language model")


class ListCorporaOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom language model")


class AddCorpusOptions(RequestOptions):
    """Upload a plain-text corpus as multipart form data (`corpus_file`)."""

    customization_id: str | None = _customization_id("custom language model")
    corpus_name: str | None = wire_field(Wire.PATH, required=True)
    allow_overwrite: bool | None = wire_field(Wire.QUERY)
    corpus_file: Any = wire_field(
        Wire.FORM, required=True, description="Text content: bytes, str or a binary file object."
    )
    corpus_filename: str | None = None


class GetCorpusOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom language model")
    corpus_name: str | None = wire_field(Wire.PATH, required=True)


class DeleteCorpusOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom language model")
    corpus_name: str | None = wire_field(Wire.PATH, required=True)


class ListWordsOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom language model")
    word_type: str | None = wire_field(Wire.QUERY, description="`all`, `user` or `corpora`.")
    sort: str | None = wire_field(
        Wire.QUERY, description="`alphabetical` or `count`, optionally prefixed with `+`/`-`."
    )


class AddWordsOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom language model")
    words: list[CustomWord] | None = wire_field(Wire.BODY, required=True)


class AddWordOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom language model")
    word_name: str | None = wire_field(Wire.PATH, required=True)
    word: str | None = wire_field(Wire.BODY)
    sounds_like: list[str] | None = wire_field(Wire.BODY)
    display_as: str | None = wire_field(Wire.BODY)


class GetWordOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom language model")
    word_name: str | None = wire_field(Wire.PATH, required=True)


class DeleteWordOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom language model")
    word_name: str | None = wire_field(Wire.PATH, required=True)


# --- Custom acoustic models --------------------------------------------------


class CreateAcousticModelOptions(RequestOptions):
    name: str | None = wire_field(Wire.BODY, required=True)
    base_model_name: str | None = wire_field(Wire.BODY, required=True)
    description: str | None = wire_field(Wire.BODY)


class ListAcousticModelsOptions(RequestOptions):
    language: str | None = wire_field(Wire.QUERY)


class GetAcousticModelOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom acoustic model")


class DeleteAcousticModelOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom acoustic model")


class TrainAcousticModelOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom acoustic model")
    custom_language_model_id: str | None = wire_field(Wire.QUERY)


class ResetAcousticModelOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom acoustic model")


class UpgradeAcousticModelOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom acoustic model")
    custom_language_model_id: str | None = wire_field(Wire.QUERY)


class ListAudioOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom acoustic model")


class AddAudioOptions(RequestOptions):
    """Add an audio file or archive (`application/zip`, `application/gzip`)."""

    customization_id: str | None = _customization_id("custom acoustic model")
    audio_name: str | None = wire_field(Wire.PATH, required=True)
    audio_resource: Any = wire_field(Wire.PAYLOAD)
    content_type: str | None = wire_field(Wire.HEADER, required=True, name="Content-Type")
    contained_content_type: str | None = wire_field(
        Wire.HEADER,
        name="Contained-Content-Type",
        description="Format of the audio files inside an archive.",
    )
    allow_overwrite: bool | None = wire_field(Wire.QUERY)


class GetAudioOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom acoustic model")
    audio_name: str | None = wire_field(Wire.PATH, required=True)


class DeleteAudioOptions(RequestOptions):
    customization_id: str | None = _customization_id("custom acoustic model")
    audio_name: str | None = wire_field(Wire.PATH, required=True)


# --- User data ---------------------------------------------------------------


class DeleteUserDataOptions(RequestOptions):
    customer_id: str | None = wire_field(
        Wire.QUERY, required=True, description="Customer ID sent earlier in `X-Watson-Metadata`."
    )


def iter_wire_fields(options_type: type[RequestOptions]) -> list[tuple[str, WireSpec]]:
    """Tagged fields of an options model, in declaration order."""

    out: list[tuple[str, WireSpec]] = []
    for field_name, info in options_type.model_fields.items():
        spec = wire_spec(field_name, info)
        if spec is not None:
            out.append((field_name, spec))
    return out


def required_fields(options_type: type[RequestOptions]) -> list[str]:
    return [name for name, spec in iter_wire_fields(options_type) if spec.required]
