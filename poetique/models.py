"""Canonical analysis result and the response schema sent to the model.

The result is atomic: every field is required at every level, so a payload
missing e.g. ``cieEvaluation`` fails validation as a whole. Validation is
strict, so a mistyped value fails the same way.
"""
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        # no coercion: "3" is not a mark, true is not an integer
        strict=True,
    )


class Meaning(_Model):
    explicit: str
    implicit: str


class Tone(_Model):
    description: str
    effects: str


class LiteraryDevice(_Model):
    device: str
    example: str
    effect: str


class ExamQuestion(_Model):
    question: str
    marks: int = Field(ge=0)
    model_answer: str
    key_points: List[str]


class CieEvaluation(_Model):
    ao1: str
    ao2: str
    ao3: str
    ao4: str
    total_mark: float = Field(ge=0)
    max_mark: float = Field(ge=0)
    grade: str
    examiner_comments: str


class AnalysisResult(_Model):
    title: str
    author: str
    ocr_content: str
    meaning: Meaning
    tone: Tone
    structure: str
    context: str
    personal_response: str
    literary_devices: List[LiteraryDevice]
    exam_questions: List[ExamQuestion]
    cie_evaluation: CieEvaluation


# ---------- Response schema (OpenAPI subset accepted by Gemini) ----------
def _string() -> Dict[str, Any]:
    return {"type": "string"}


def _number() -> Dict[str, Any]:
    return {"type": "number"}


def _object(**properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
    }


def _array(items: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "array", "items": items}


RESPONSE_SCHEMA: Dict[str, Any] = _object(
    title=_string(),
    author=_string(),
    ocrContent=_string(),
    meaning=_object(explicit=_string(), implicit=_string()),
    tone=_object(description=_string(), effects=_string()),
    structure=_string(),
    context=_string(),
    personalResponse=_string(),
    literaryDevices=_array(_object(device=_string(), example=_string(), effect=_string())),
    examQuestions=_array(
        _object(
            question=_string(),
            marks={"type": "integer"},
            modelAnswer=_string(),
            keyPoints=_array(_string()),
        )
    ),
    cieEvaluation=_object(
        ao1=_string(),
        ao2=_string(),
        ao3=_string(),
        ao4=_string(),
        totalMark=_number(),
        maxMark=_number(),
        grade=_string(),
        examinerComments=_string(),
    ),
)
