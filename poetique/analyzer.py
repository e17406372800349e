"""Analysis client: one Gemini call per poem image, strict JSON back."""
import base64
import logging
from dataclasses import dataclass
from typing import Any, Optional

from langchain_core.output_parsers import StrOutputParser
from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import ValidationError

from poetique.config import Settings
from poetique.errors import EmptyResponseError, SchemaError, TransportError
from poetique.models import RESPONSE_SCHEMA, AnalysisResult
from poetique.prompts import make_analysis_prompt

logger = logging.getLogger(__name__)

DEFAULT_MIME = "image/jpeg"


@dataclass(frozen=True)
class ImagePayload:
    """Base64 image data plus its declared media type."""

    data: str
    mime_type: str = DEFAULT_MIME

    @classmethod
    def from_bytes(cls, raw: bytes, mime_type: Optional[str] = None) -> "ImagePayload":
        return cls(base64.b64encode(raw).decode("ascii"), mime_type or DEFAULT_MIME)

    @classmethod
    def from_data_url(cls, url: str) -> "ImagePayload":
        # data:<mime>;base64,<payload>
        header, sep, payload = url.partition(",")
        if not sep or not header.startswith("data:"):
            raise ValueError("not a data URL")
        mime_type = header[len("data:"):].split(";", 1)[0] or DEFAULT_MIME
        return cls(payload, mime_type)


def build_model(settings: Settings) -> ChatGoogleGenerativeAI:
    kwargs: dict = {}
    if settings.request_timeout is not None:
        kwargs["timeout"] = settings.request_timeout
    return ChatGoogleGenerativeAI(
        model=settings.model_name,
        temperature=settings.temperature,
        google_api_key=settings.api_key,
        response_mime_type="application/json",
        response_schema=RESPONSE_SCHEMA,
        max_retries=1,  # a single attempt
        **kwargs,
    )


def parse_result(text: Optional[str]) -> AnalysisResult:
    if not text or not text.strip():
        raise EmptyResponseError("no content")
    try:
        return AnalysisResult.model_validate_json(text)
    except ValidationError as e:
        logger.warning("Response failed schema validation: %s", e.error_count())
        raise SchemaError("malformed response") from e


class AnalysisClient:
    def __init__(self, settings: Settings, model: Optional[Runnable] = None):
        self.settings = settings
        self.model = model
        self._chain: Optional[Runnable] = None

    def _get_chain(self) -> Runnable:
        # Built on first use so a missing/invalid key surfaces as a request failure.
        if self._chain is None:
            if self.model is None:
                self.model = build_model(self.settings)
            self._chain = make_analysis_prompt(self.settings.question_count) | self.model | StrOutputParser()
        return self._chain

    def analyze(self, image: ImagePayload) -> AnalysisResult:
        logger.info("Requesting analysis (%s, %d b64 chars)", image.mime_type, len(image.data))
        try:
            out: Any = self._get_chain().invoke({"mime_type": image.mime_type, "image_data": image.data})
        except Exception as e:
            logger.error("Analysis request failed: %s", e)
            raise TransportError(str(e) or type(e).__name__) from e
        result = parse_result(out if isinstance(out, str) else None)
        logger.info("Analysis received: %r by %r, %d questions", result.title, result.author, len(result.exam_questions))
        return result
