"""Public Speech to Text V1 client.

One method per REST operation. Every method:
1. validates its options object (`ValidationError`, no I/O);
2. maps it onto a request (`adapters.request_builder`);
3. sends it through the injected `httpx.Client`;
4. returns a `DetailedResponse` with the typed result.

Usage:

    with SpeechToTextV1() as stt:
        resp = stt.recognize(RecognizeOptions(audio=f, content_type="audio/wav"))
        print(resp.result.transcript)

Nothing is retried or polled; long-running work (jobs, training) is tracked
by the caller with the `check_*` / `get_*` methods.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adapters import endpoints as ep
from adapters.endpoints import Endpoint
from adapters.http_client import build_client
from adapters.request_builder import build_request
from adapters.service import DetailedResponse, ServiceCore
from core.config import ServiceSettings
from core.domain import models
from core.domain import options as opts

logger = logging.getLogger(__name__)


class SpeechToTextV1:
    """Client for the Speech to Text V1 service.

    Args:
        settings: connection settings; read from the environment when omitted.
        client: a ready `httpx.Client`. When given, it is used as-is (its
            auth, headers and transport) and is not closed by `close()`.
    """

    def __init__(
        self,
        settings: ServiceSettings | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self.settings = settings or ServiceSettings()
        self._owns_client = client is None
        self._client = client if client is not None else build_client(self.settings)
        self._core = ServiceCore(self._client, self.settings.url)

    @property
    def service_url(self) -> str:
        return self._core.base_url

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "SpeechToTextV1":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _invoke(self, endpoint: Endpoint, options: opts.RequestOptions | None) -> DetailedResponse[Any]:
        descriptor = build_request(endpoint, options)
        return self._core.request(descriptor, endpoint.result_type)

    # --- Models --------------------------------------------------------------

    def list_models(
        self, options: opts.ListModelsOptions | None = None
    ) -> DetailedResponse[models.SpeechModels]:
        """List the base models available for recognition."""

        return self._invoke(ep.LIST_MODELS, options)

    def get_model(self, options: opts.GetModelOptions) -> DetailedResponse[models.SpeechModel]:
        return self._invoke(ep.GET_MODEL, options)

    # --- Recognition ---------------------------------------------------------

    def recognize(
        self, options: opts.RecognizeOptions
    ) -> DetailedResponse[models.SpeechRecognitionResults]:
        """Transcribe audio in a single synchronous request.

        `options.audio` is streamed as the request body and `content_type`
        names its format (see `AudioContentType`). The caller opens and
        closes the audio stream.
        """

        return self._invoke(ep.RECOGNIZE, options)

    def check_job(self, options: opts.CheckJobOptions) -> DetailedResponse[models.RecognitionJob]:
        """Status of one job; `results` is filled once it has completed."""

        return self._invoke(ep.CHECK_JOB, options)

    def check_jobs(
        self, options: opts.CheckJobsOptions | None = None
    ) -> DetailedResponse[models.RecognitionJobs]:
        return self._invoke(ep.CHECK_JOBS, options)

    def create_job(self, options: opts.CreateJobOptions) -> DetailedResponse[models.RecognitionJob]:
        """Submit audio for asynchronous recognition.

        With `callback_url` (registered beforehand with `register_callback`)
        the service notifies the caller about `events`; otherwise poll with
        `check_job`.
        """

        return self._invoke(ep.CREATE_JOB, options)

    def delete_job(self, options: opts.DeleteJobOptions) -> DetailedResponse[Any]:
        return self._invoke(ep.DELETE_JOB, options)

    def register_callback(
        self, options: opts.RegisterCallbackOptions
    ) -> DetailedResponse[models.RegisterStatus]:
        """Allowlist a callback URL; the service sends it a verification request first."""

        return self._invoke(ep.REGISTER_CALLBACK, options)

    def unregister_callback(self, options: opts.UnregisterCallbackOptions) -> DetailedResponse[Any]:
        return self._invoke(ep.UNREGISTER_CALLBACK, options)

    # --- Custom language models ---------------------------------------------

    def create_language_model(
        self, options: opts.CreateLanguageModelOptions
    ) -> DetailedResponse[models.LanguageModel]:
        return self._invoke(ep.CREATE_LANGUAGE_MODEL, options)

    def list_language_models(
        self, options: opts.ListLanguageModelsOptions | None = None
    ) -> DetailedResponse[models.LanguageModels]:
        return self._invoke(ep.LIST_LANGUAGE_MODELS, options)

    def get_language_model(
        self, options: opts.GetLanguageModelOptions
    ) -> DetailedResponse[models.LanguageModel]:
        return self._invoke(ep.GET_LANGUAGE_MODEL, options)

    def delete_language_model(self, options: opts.DeleteLanguageModelOptions) -> DetailedResponse[Any]:
        return self._invoke(ep.DELETE_LANGUAGE_MODEL, options)

    def train_language_model(self, options: opts.TrainLanguageModelOptions) -> DetailedResponse[Any]:
        """Start training; the model goes `ready -> training -> available`.

        Poll `get_language_model` until `status` leaves `training`.
        """

        return self._invoke(ep.TRAIN_LANGUAGE_MODEL, options)

    def reset_language_model(self, options: opts.ResetLanguageModelOptions) -> DetailedResponse[Any]:
        """Remove every corpus and word; the model keeps its ID and metadata."""

        return self._invoke(ep.RESET_LANGUAGE_MODEL, options)

    def upgrade_language_model(
        self, options: opts.UpgradeLanguageModelOptions
    ) -> DetailedResponse[Any]:
        return self._invoke(ep.UPGRADE_LANGUAGE_MODEL, options)

    # --- Corpora -------------------------------------------------------------

    def list_corpora(self, options: opts.ListCorporaOptions) -> DetailedResponse[models.Corpora]:
        return self._invoke(ep.LIST_CORPORA, options)

    def add_corpus(self, options: opts.AddCorpusOptions) -> DetailedResponse[Any]:
        """Upload a plain-text corpus (multipart part `corpus_file`).

        The service analyzes it asynchronously; `get_corpus` reports
        `being_processed` until it is `analyzed`.
        """

        return self._invoke(ep.ADD_CORPUS, options)

    def get_corpus(self, options: opts.GetCorpusOptions) -> DetailedResponse[models.Corpus]:
        return self._invoke(ep.GET_CORPUS, options)

    def delete_corpus(self, options: opts.DeleteCorpusOptions) -> DetailedResponse[Any]:
        return self._invoke(ep.DELETE_CORPUS, options)

    # --- Words ---------------------------------------------------------------

    def list_words(self, options: opts.ListWordsOptions) -> DetailedResponse[models.Words]:
        return self._invoke(ep.LIST_WORDS, options)

    def add_words(self, options: opts.AddWordsOptions) -> DetailedResponse[Any]:
        return self._invoke(ep.ADD_WORDS, options)

    def add_word(self, options: opts.AddWordOptions) -> DetailedResponse[Any]:
        """Add or replace one word (`PUT .../words/{word_name}`)."""

        return self._invoke(ep.ADD_WORD, options)

    def get_word(self, options: opts.GetWordOptions) -> DetailedResponse[models.Word]:
        return self._invoke(ep.GET_WORD, options)

    def delete_word(self, options: opts.DeleteWordOptions) -> DetailedResponse[Any]:
        return self._invoke(ep.DELETE_WORD, options)

    # --- Custom acoustic models ---------------------------------------------

    def create_acoustic_model(
        self, options: opts.CreateAcousticModelOptions
    ) -> DetailedResponse[models.AcousticModel]:
        return self._invoke(ep.CREATE_ACOUSTIC_MODEL, options)

    def list_acoustic_models(
        self, options: opts.ListAcousticModelsOptions | None = None
    ) -> DetailedResponse[models.AcousticModels]:
        return self._invoke(ep.LIST_ACOUSTIC_MODELS, options)

    def get_acoustic_model(
        self, options: opts.GetAcousticModelOptions
    ) -> DetailedResponse[models.AcousticModel]:
        return self._invoke(ep.GET_ACOUSTIC_MODEL, options)

    def delete_acoustic_model(self, options: opts.DeleteAcousticModelOptions) -> DetailedResponse[Any]:
        return self._invoke(ep.DELETE_ACOUSTIC_MODEL, options)

    def train_acoustic_model(self, options: opts.TrainAcousticModelOptions) -> DetailedResponse[Any]:
        """Start training on the added audio.

        `custom_language_model_id` pairs the training with a custom language
        model built on the same base model.
        """

        return self._invoke(ep.TRAIN_ACOUSTIC_MODEL, options)

    def reset_acoustic_model(self, options: opts.ResetAcousticModelOptions) -> DetailedResponse[Any]:
        return self._invoke(ep.RESET_ACOUSTIC_MODEL, options)

    def upgrade_acoustic_model(
        self, options: opts.UpgradeAcousticModelOptions
    ) -> DetailedResponse[Any]:
        return self._invoke(ep.UPGRADE_ACOUSTIC_MODEL, options)

    # --- Audio resources -----------------------------------------------------

    def list_audio(self, options: opts.ListAudioOptions) -> DetailedResponse[models.AudioResources]:
        return self._invoke(ep.LIST_AUDIO, options)

    def add_audio(self, options: opts.AddAudioOptions) -> DetailedResponse[Any]:
        """Add an audio file or archive to a custom acoustic model.

        For archives set `content_type` to `application/zip` or
        `application/gzip` and `contained_content_type` to the format of the
        files inside.
        """

        return self._invoke(ep.ADD_AUDIO, options)

    def get_audio(self, options: opts.GetAudioOptions) -> DetailedResponse[models.AudioListing]:
        return self._invoke(ep.GET_AUDIO, options)

    def delete_audio(self, options: opts.DeleteAudioOptions) -> DetailedResponse[Any]:
        return self._invoke(ep.DELETE_AUDIO, options)

    # --- User data -----------------------------------------------------------

    def delete_user_data(self, options: opts.DeleteUserDataOptions) -> DetailedResponse[Any]:
        """Delete all data tagged with `customer_id` via `X-Watson-Metadata`."""

        logger.info("Deleting user data for a customer ID")
        return self._invoke(ep.DELETE_USER_DATA, options)
