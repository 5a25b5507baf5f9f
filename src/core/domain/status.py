"""Service-side states surfaced through result `status` fields.

Transitions happen on the service; the client only names the values so
callers can poll with `check_job`, `get_language_model`, `get_corpus`, etc.
Result models keep `status` as a plain string, so values added by the
service later never break decoding. Use `parse()` to map a raw string to an
enum member (or `None` when the value is unknown).
"""

from __future__ import annotations

from enum import Enum


class _StatusEnum(str, Enum):
    @classmethod
    def parse(cls, value: str | None):
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class ModelStatus(_StatusEnum):
    """Lifecycle of a custom language or acoustic model.

    pending -> ready -> training -> available; available -> upgrading;
    training -> failed.
    """

    PENDING = "pending"
    READY = "ready"
    TRAINING = "training"
    AVAILABLE = "available"
    UPGRADING = "upgrading"
    FAILED = "failed"

    def is_busy(self) -> bool:
        """The service rejects corpora/words/audio changes in these states."""

        return self in (ModelStatus.PENDING, ModelStatus.TRAINING, ModelStatus.UPGRADING)

    def accepts_data_changes(self) -> bool:
        return not self.is_busy()


class JobStatus(_StatusEnum):
    """Lifecycle of an asynchronous recognition job."""

    WAITING = "waiting"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


class CorpusStatus(_StatusEnum):
    BEING_PROCESSED = "being_processed"
    ANALYZED = "analyzed"
    UNDETERMINED = "undetermined"

    def is_final(self) -> bool:
        return self is not CorpusStatus.BEING_PROCESSED


class AudioStatus(_StatusEnum):
    BEING_PROCESSED = "being_processed"
    OK = "ok"
    INVALID = "invalid"

    def is_final(self) -> bool:
        return self is not AudioStatus.BEING_PROCESSED


class JobEvent(_StatusEnum):
    """Callback notifications that `create_job` can subscribe to."""

    STARTED = "recognitions.started"
    COMPLETED = "recognitions.completed"
    COMPLETED_WITH_RESULTS = "recognitions.completed_with_results"
    FAILED = "recognitions.failed"


class WordType(_StatusEnum):
    """Word filter for `list_words` and `train_language_model`."""

    ALL = "all"
    USER = "user"
    CORPORA = "corpora"


class RegisterStatusValue(_StatusEnum):
    CREATED = "created"
    ALREADY_CREATED = "already created"
