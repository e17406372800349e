"""Session view state: idle -> processing -> completed | error, reset to idle.

All state lives in a mutable mapping so the same controller drives
``st.session_state`` in the app and a plain dict in tests.
"""
import logging
from enum import Enum
from typing import Dict, MutableMapping, Optional

from poetique.analyzer import AnalysisClient, ImagePayload
from poetique.errors import AnalysisError
from poetique.models import AnalysisResult

logger = logging.getLogger(__name__)


class Status(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


# session keys
STATUS = "status"
RESULT = "result"
ERROR = "error"
ERROR_KIND = "error_kind"
PREVIEW = "preview"
VISIBLE = "visible_answers"
TOKEN = "request_token"
UPLOADER_NONCE = "uploader_nonce"
EXPORT = "export_document"
LAST_UPLOAD = "last_upload_id"


class ViewStateController:
    def __init__(self, store: MutableMapping):
        self.store = store
        store.setdefault(STATUS, Status.IDLE)
        store.setdefault(RESULT, None)
        store.setdefault(ERROR, None)
        store.setdefault(ERROR_KIND, None)
        store.setdefault(PREVIEW, None)
        store.setdefault(VISIBLE, {})
        store.setdefault(TOKEN, 0)
        store.setdefault(UPLOADER_NONCE, 0)
        store.setdefault(EXPORT, None)
        store.setdefault(LAST_UPLOAD, None)

    # ---------- read ----------
    @property
    def status(self) -> Status:
        return Status(self.store[STATUS])

    @property
    def result(self) -> Optional[AnalysisResult]:
        return self.store[RESULT]

    @property
    def error(self) -> Optional[str]:
        return self.store[ERROR]

    @property
    def error_kind(self) -> Optional[str]:
        return self.store[ERROR_KIND]

    @property
    def preview(self) -> Optional[bytes]:
        return self.store[PREVIEW]

    @property
    def uploader_key(self) -> str:
        return f"poem_upload_{self.store[UPLOADER_NONCE]}"

    # ---------- transitions ----------
    def _clear_outcome(self) -> None:
        self.store[RESULT] = None
        self.store[ERROR] = None
        self.store[ERROR_KIND] = None
        self.store[EXPORT] = None
        self.store[VISIBLE] = {}

    def begin(self, preview: Optional[bytes] = None) -> int:
        """Start a new upload; returns the token the resolution must present."""
        self._clear_outcome()
        self.store[PREVIEW] = preview
        self.store[TOKEN] += 1
        self.store[STATUS] = Status.PROCESSING
        return self.store[TOKEN]

    def is_current(self, token: int) -> bool:
        return token == self.store[TOKEN] and self.status is Status.PROCESSING

    def resolve(self, token: int, result: AnalysisResult) -> bool:
        if not self.is_current(token):
            logger.info("Dropping stale analysis result (token %d)", token)
            return False
        self._clear_outcome()
        self.store[RESULT] = result
        self.store[STATUS] = Status.COMPLETED
        return True

    def fail(self, token: int, error: AnalysisError) -> bool:
        if not self.is_current(token):
            logger.info("Dropping stale analysis failure (token %d): %s", token, error.kind)
            return False
        self._clear_outcome()
        self.store[ERROR] = error.user_message
        self.store[ERROR_KIND] = error.kind
        self.store[STATUS] = Status.ERROR
        return True

    def reset(self) -> None:
        self._clear_outcome()
        self.store[PREVIEW] = None
        self.store[LAST_UPLOAD] = None
        self.store[TOKEN] += 1  # in-flight calls can no longer land
        self.store[UPLOADER_NONCE] += 1
        self.store[STATUS] = Status.IDLE

    def analyze(self, client: AnalysisClient, image: ImagePayload, preview: Optional[bytes] = None) -> Status:
        token = self.begin(preview)
        try:
            result = client.analyze(image)
        except AnalysisError as e:
            logger.warning("Analysis failed (%s): %s", e.kind, e)
            self.fail(token, e)
        else:
            self.resolve(token, result)
        return self.status

    def handle_upload(self, client: AnalysisClient, file_id: str, raw: bytes, mime_type: Optional[str] = None) -> bool:
        """Analyze an uploaded file once; reruns with the same file are no-ops.

        Returns True when an analysis ran.
        """
        if file_id == self.store[LAST_UPLOAD]:
            return False
        self.store[LAST_UPLOAD] = file_id
        self.analyze(client, ImagePayload.from_bytes(raw, mime_type), preview=raw)
        return True

    # ---------- answer visibility ----------
    def is_answer_visible(self, index: int) -> bool:
        return bool(self.store[VISIBLE].get(index, False))

    def toggle_answer(self, index: int) -> None:
        visible = dict(self.store[VISIBLE])
        visible[index] = not visible.get(index, False)
        self.store[VISIBLE] = visible

    def visible_answers(self) -> Dict[int, bool]:
        return dict(self.store[VISIBLE])

    def show_all_answers(self, count: int) -> None:
        self.store[VISIBLE] = {i: True for i in range(count)}

    def restore_visibility(self, snapshot: Dict[int, bool]) -> None:
        self.store[VISIBLE] = dict(snapshot)

    # ---------- export ----------
    @property
    def export_document(self):
        return self.store[EXPORT]

    def set_export_document(self, document) -> None:
        self.store[EXPORT] = document
