"""Report layout shared by the page and the PDF capture."""
import re
from dataclasses import dataclass
from typing import List, Mapping

from poetique.models import AnalysisResult

REPORT_PREFIX = "CIE_Literature_Report_"
AO_LABELS = (
    ("ao1", "AO1: Knowledge & Context"),
    ("ao2", "AO2: Analysis of Form"),
    ("ao3", "AO3: Evaluation"),
    ("ao4", "AO4: Historical Links"),
)


@dataclass(frozen=True)
class Block:
    style: str
    text: str


def format_mark(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def score_label(result: AnalysisResult) -> str:
    ev = result.cie_evaluation
    return f"{format_mark(ev.total_mark)} / {format_mark(ev.max_mark)}"


def export_filename(result: AnalysisResult) -> str:
    title = re.sub(r"\s+", "_", result.title)
    return f"{REPORT_PREFIX}{title}.pdf"


def answer_toggle_label(visible: bool) -> str:
    return "Hide Model Answer" if visible else "View Model Answer"


def report_blocks(result: AnalysisResult, visible_answers: Mapping[int, bool]) -> List[Block]:
    """Flatten the report into styled blocks in reading order.

    Model answers and key points are included only for questions whose
    entry in ``visible_answers`` is true.
    """
    ev = result.cie_evaluation
    blocks = [
        Block("title", f"\"{result.title}\""),
        Block("subtitle", f"Examining the works of {result.author}"),
        Block("badge", f"CIE GRADE: {ev.grade}    SCORE: {score_label(result)}"),
        Block("heading", "Poem Text"),
        Block("poem", result.ocr_content),
        Block("heading", "Critical Reading"),
        Block("label", "Explicit Meaning"),
        Block("body", result.meaning.explicit),
        Block("label", "Implicit Meaning"),
        Block("body", result.meaning.implicit),
        Block("heading", "Tone & Atmosphere"),
        Block("quote", result.tone.description),
        Block("label", "Effectiveness"),
        Block("body", result.tone.effects),
        Block("heading", "AO2: Literary Devices"),
    ]
    for item in result.literary_devices:
        blocks.append(Block("label", f"{item.device}  \"{item.example}\""))
        blocks.append(Block("body", item.effect))

    blocks += [
        Block("heading", "Structure"),
        Block("body", result.structure),
        Block("heading", "AO4: Context"),
        Block("body", result.context),
        Block("heading", "AO3: Personal Response"),
        Block("body", result.personal_response),
        Block("heading", "CIE Literature Practice Paper"),
    ]
    for idx, eq in enumerate(result.exam_questions):
        blocks.append(Block("question", f"{idx + 1}. {eq.question} [{eq.marks}]"))
        if visible_answers.get(idx, False):
            blocks.append(Block("label", "Level 6 Model Response"))
            blocks.append(Block("answer", eq.model_answer))
            if eq.key_points:
                blocks.append(Block("keypoints", " | ".join(eq.key_points)))

    blocks.append(Block("heading", "Summative Examiner Feedback"))
    for field, label in AO_LABELS:
        blocks.append(Block("label", label))
        blocks.append(Block("body", getattr(ev, field)))
    blocks += [
        Block("label", "Final Assessment Notes"),
        Block("quote", f"\"{ev.examiner_comments}\""),
        Block("footer", "POETIQUE CIE ADVISORY PANEL"),
    ]
    return blocks
