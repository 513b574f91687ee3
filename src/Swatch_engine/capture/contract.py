# src/Swatch_engine/capture/contract.py
from __future__ import annotations

# Request/response shapes of the rapid-add capture service.
# The matching pipeline itself lives outside this package; only the contract is defined here.

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Tuple, runtime_checkable


# ---------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------

class CaptureStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    NEEDS_ANSWER = "needs_answer"
    MATCHED = "matched"
    UNMATCHED = "unmatched"

    @property
    def terminal(self) -> bool:
        return self in (CaptureStatus.MATCHED, CaptureStatus.UNMATCHED)


class CaptureFrameType(str, Enum):
    BARCODE = "barcode"
    LABEL = "label"
    COLOR = "color"
    OTHER = "other"


class QuestionType(str, Enum):
    SINGLE_SELECT = "single_select"
    MULTI_SELECT = "multi_select"
    FREE_TEXT = "free_text"
    BOOLEAN = "boolean"


# ---------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CaptureQuestion:
    """
    Does:
        A follow-up question the pipeline asks when it cannot decide on a match.
    """
    question_id: str
    prompt: str
    type: QuestionType = QuestionType.SINGLE_SELECT
    options: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CaptureAnswer:
    question_id: str
    answer: Any


@dataclass(frozen=True, slots=True)
class StartCaptureResponse:
    capture_id: str
    status: CaptureStatus


@dataclass(frozen=True, slots=True)
class FrameResponse:
    status: CaptureStatus


@dataclass(frozen=True, slots=True)
class CaptureStepResponse:
    """
    Does:
        Response of answer_question / finalize. question is set iff status is NEEDS_ANSWER.
    """
    status: CaptureStatus
    question: Optional[CaptureQuestion] = None

    def __post_init__(self) -> None:
        if (self.status == CaptureStatus.NEEDS_ANSWER) != (self.question is not None):
            raise ValueError("question must be present exactly when status is 'needs_answer'")


@dataclass(frozen=True, slots=True)
class CaptureStatusResponse:
    status: CaptureStatus
    question: Optional[CaptureQuestion] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------
# Service contract
# ---------------------------------------------------------------------

@runtime_checkable
class CaptureService(Protocol):
    def start_capture(self, metadata: Dict[str, Any]) -> StartCaptureResponse: ...

    def add_frame(
        self,
        capture_id: str,
        frame_type: CaptureFrameType,
        image_bytes: bytes,
        quality: Optional[Dict[str, Any]] = None,
    ) -> FrameResponse: ...

    def answer_question(self, capture_id: str, answer: CaptureAnswer) -> CaptureStepResponse: ...

    def finalize(self, capture_id: str) -> CaptureStepResponse: ...

    def get_status(self, capture_id: str) -> CaptureStatusResponse: ...


def parse_status(value: Any) -> CaptureStatus:
    """
    Does:
        Decode a wire status string ("needs_answer", ...) into CaptureStatus.
    """
    try:
        return CaptureStatus(str(value).strip().lower())
    except ValueError as e:
        raise ValueError(f"Unknown capture status: {value!r}") from e
