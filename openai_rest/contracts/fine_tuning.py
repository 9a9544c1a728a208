from __future__ import annotations

from typing import List, Optional, Union

from pydantic import Field

from .common import ApiResponse, RequestModel, WireEnum, WireModel
from .models import FineTuningModel

# "auto" or a concrete number
HyperValue = Union[int, float, str]


class FineTuningJobStatus(WireEnum):
    VALIDATING_FILES = "validating_files"
    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class EventLevel(WireEnum):
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class HyperParameters(WireModel):
    batch_size: Optional[HyperValue] = None
    learning_rate_multiplier: Optional[HyperValue] = None
    n_epochs: Optional[HyperValue] = None


class CreateFineTuningJobRequest(RequestModel):
    model: FineTuningModel
    training_file: str
    hyperparameters: Optional[HyperParameters] = None
    suffix: Optional[str] = None
    validation_file: Optional[str] = None
    seed: Optional[int] = None

    @classmethod
    def for_file(cls, model: Union[FineTuningModel, str], training_file: str) -> "CreateFineTuningJobRequest":
        return cls(model=model, training_file=training_file)


class FineTuningJobError(WireModel):
    code: Optional[str] = None
    message: Optional[str] = None
    param: Optional[str] = None


class FineTuningJob(ApiResponse):
    id: str
    object: str = "fine_tuning.job"
    created_at: int
    finished_at: Optional[int] = None
    model: str
    fine_tuned_model: Optional[str] = None
    organization_id: Optional[str] = None
    status: FineTuningJobStatus
    hyperparameters: Optional[HyperParameters] = None
    training_file: str
    validation_file: Optional[str] = None
    result_files: List[str] = Field(default_factory=list)
    trained_tokens: Optional[int] = None
    error: Optional[FineTuningJobError] = None
    seed: Optional[int] = None
    estimated_finish: Optional[int] = None


class FineTuningJobEvent(WireModel):
    id: str
    object: str = "fine_tuning.job.event"
    created_at: int
    level: EventLevel
    message: str
    type: Optional[str] = None
