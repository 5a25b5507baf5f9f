"""Declarative table of the Speech to Text V1 REST endpoints.

Each `Endpoint` fixes the HTTP method, the literal path segments that
surround the path parameters, the options model it accepts, the result model
it decodes into (or `None` when no body is expected) and how the body is
sent. `adapters.request_builder` turns an endpoint plus an options object
into a request; nothing here performs I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel

from core.domain import models
from core.domain import options as opts


class BodyMode(str, Enum):
    NONE = "none"
    PAYLOAD = "payload"
    JSON = "json"
    MULTIPART = "multipart"


@dataclass(frozen=True)
class Endpoint:
    name: str
    method: str
    segments: tuple[str, ...]
    options_type: type[opts.RequestOptions]
    result_type: type[BaseModel] | None = None
    body: BodyMode = BodyMode.NONE

    @property
    def options_optional(self) -> bool:
        """True when the options object may be omitted (no required fields)."""

        return not opts.required_fields(self.options_type)


_MODELS = ("v1/models",)
_RECOGNITIONS = ("v1/recognitions",)
_CUSTOM = ("v1/customizations",)
_ACOUSTIC = ("v1/acoustic_customizations",)


LIST_MODELS = Endpoint("list_models", "GET", _MODELS, opts.ListModelsOptions, models.SpeechModels)
GET_MODEL = Endpoint("get_model", "GET", _MODELS, opts.GetModelOptions, models.SpeechModel)

RECOGNIZE = Endpoint(
    "recognize",
    "POST",
    ("v1/recognize",),
    opts.RecognizeOptions,
    models.SpeechRecognitionResults,
    BodyMode.PAYLOAD,
)
CHECK_JOB = Endpoint("check_job", "GET", _RECOGNITIONS, opts.CheckJobOptions, models.RecognitionJob)
CHECK_JOBS = Endpoint("check_jobs", "GET", _RECOGNITIONS, opts.CheckJobsOptions, models.RecognitionJobs)
CREATE_JOB = Endpoint(
    "create_job",
    "POST",
    _RECOGNITIONS,
    opts.CreateJobOptions,
    models.RecognitionJob,
    BodyMode.PAYLOAD,
)
DELETE_JOB = Endpoint("delete_job", "DELETE", _RECOGNITIONS, opts.DeleteJobOptions)
REGISTER_CALLBACK = Endpoint(
    "register_callback",
    "POST",
    ("v1/register_callback",),
    opts.RegisterCallbackOptions,
    models.RegisterStatus,
)
UNREGISTER_CALLBACK = Endpoint(
    "unregister_callback", "POST", ("v1/unregister_callback",), opts.UnregisterCallbackOptions
)

CREATE_LANGUAGE_MODEL = Endpoint(
    "create_language_model",
    "POST",
    _CUSTOM,
    opts.CreateLanguageModelOptions,
    models.LanguageModel,
    BodyMode.JSON,
)
LIST_LANGUAGE_MODELS = Endpoint(
    "list_language_models", "GET", _CUSTOM, opts.ListLanguageModelsOptions, models.LanguageModels
)
GET_LANGUAGE_MODEL = Endpoint(
    "get_language_model", "GET", _CUSTOM, opts.GetLanguageModelOptions, models.LanguageModel
)
DELETE_LANGUAGE_MODEL = Endpoint(
    "delete_language_model", "DELETE", _CUSTOM, opts.DeleteLanguageModelOptions
)
TRAIN_LANGUAGE_MODEL = Endpoint(
    "train_language_model", "POST", _CUSTOM + ("train",), opts.TrainLanguageModelOptions
)
RESET_LANGUAGE_MODEL = Endpoint(
    "reset_language_model", "POST", _CUSTOM + ("reset",), opts.ResetLanguageModelOptions
)
UPGRADE_LANGUAGE_MODEL = Endpoint(
    "upgrade_language_model", "POST", _CUSTOM + ("upgrade_model",), opts.UpgradeLanguageModelOptions
)

LIST_CORPORA = Endpoint(
    "list_corpora", "GET", _CUSTOM + ("corpora",), opts.ListCorporaOptions, models.Corpora
)
ADD_CORPUS = Endpoint(
    "add_corpus",
    "POST",
    _CUSTOM + ("corpora",),
    opts.AddCorpusOptions,
    None,
    BodyMode.MULTIPART,
)
GET_CORPUS = Endpoint(
    "get_corpus", "GET", _CUSTOM + ("corpora",), opts.GetCorpusOptions, models.Corpus
)
DELETE_CORPUS = Endpoint("delete_corpus", "DELETE", _CUSTOM + ("corpora",), opts.DeleteCorpusOptions)

LIST_WORDS = Endpoint("list_words", "GET", _CUSTOM + ("words",), opts.ListWordsOptions, models.Words)
ADD_WORDS = Endpoint(
    "add_words", "POST", _CUSTOM + ("words",), opts.AddWordsOptions, None, BodyMode.JSON
)
ADD_WORD = Endpoint("add_word", "PUT", _CUSTOM + ("words",), opts.AddWordOptions, None, BodyMode.JSON)
GET_WORD = Endpoint("get_word", "GET", _CUSTOM + ("words",), opts.GetWordOptions, models.Word)
DELETE_WORD = Endpoint("delete_word", "DELETE", _CUSTOM + ("words",), opts.DeleteWordOptions)

CREATE_ACOUSTIC_MODEL = Endpoint(
    "create_acoustic_model",
    "POST",
    _ACOUSTIC,
    opts.CreateAcousticModelOptions,
    models.AcousticModel,
    BodyMode.JSON,
)
LIST_ACOUSTIC_MODELS = Endpoint(
    "list_acoustic_models", "GET", _ACOUSTIC, opts.ListAcousticModelsOptions, models.AcousticModels
)
GET_ACOUSTIC_MODEL = Endpoint(
    "get_acoustic_model", "GET", _ACOUSTIC, opts.GetAcousticModelOptions, models.AcousticModel
)
DELETE_ACOUSTIC_MODEL = Endpoint(
    "delete_acoustic_model", "DELETE", _ACOUSTIC, opts.DeleteAcousticModelOptions
)
TRAIN_ACOUSTIC_MODEL = Endpoint(
    "train_acoustic_model", "POST", _ACOUSTIC + ("train",), opts.TrainAcousticModelOptions
)
RESET_ACOUSTIC_MODEL = Endpoint(
    "reset_acoustic_model", "POST", _ACOUSTIC + ("reset",), opts.ResetAcousticModelOptions
)
UPGRADE_ACOUSTIC_MODEL = Endpoint(
    "upgrade_acoustic_model", "POST", _ACOUSTIC + ("upgrade_model",), opts.UpgradeAcousticModelOptions
)

LIST_AUDIO = Endpoint(
    "list_audio", "GET", _ACOUSTIC + ("audio",), opts.ListAudioOptions, models.AudioResources
)
ADD_AUDIO = Endpoint(
    "add_audio",
    "POST",
    _ACOUSTIC + ("audio",),
    opts.AddAudioOptions,
    None,
    BodyMode.PAYLOAD,
)
GET_AUDIO = Endpoint("get_audio", "GET", _ACOUSTIC + ("audio",), opts.GetAudioOptions, models.AudioListing)
DELETE_AUDIO = Endpoint("delete_audio", "DELETE", _ACOUSTIC + ("audio",), opts.DeleteAudioOptions)

DELETE_USER_DATA = Endpoint("delete_user_data", "DELETE", ("v1/user_data",), opts.DeleteUserDataOptions)


ALL_ENDPOINTS: tuple[Endpoint, ...] = (
    LIST_MODELS,
    GET_MODEL,
    RECOGNIZE,
    CHECK_JOB,
    CHECK_JOBS,
    CREATE_JOB,
    DELETE_JOB,
    REGISTER_CALLBACK,
    UNREGISTER_CALLBACK,
    CREATE_LANGUAGE_MODEL,
    LIST_LANGUAGE_MODELS,
    GET_LANGUAGE_MODEL,
    DELETE_LANGUAGE_MODEL,
    TRAIN_LANGUAGE_MODEL,
    RESET_LANGUAGE_MODEL,
    UPGRADE_LANGUAGE_MODEL,
    LIST_CORPORA,
    ADD_CORPUS,
    GET_CORPUS,
    DELETE_CORPUS,
    LIST_WORDS,
    ADD_WORDS,
    ADD_WORD,
    GET_WORD,
    DELETE_WORD,
    CREATE_ACOUSTIC_MODEL,
    LIST_ACOUSTIC_MODELS,
    GET_ACOUSTIC_MODEL,
    DELETE_ACOUSTIC_MODEL,
    TRAIN_ACOUSTIC_MODEL,
    RESET_ACOUSTIC_MODEL,
    UPGRADE_ACOUSTIC_MODEL,
    LIST_AUDIO,
    ADD_AUDIO,
    GET_AUDIO,
    DELETE_AUDIO,
    DELETE_USER_DATA,
)
