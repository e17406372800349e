# app.py
"""
Poetique — Streamlit app: poem image -> CIE literature analysis report

Features:
 - Upload a photo of a poem; Gemini (via langchain) returns a structured CIE analysis.
 - Report: poem text, meaning, tone, AO2 devices, structure, context, personal response.
 - Exam practice paper with model answers shown per question on demand.
 - Summative examiner feedback (AO1-AO4), predicted mark and grade.
 - Export the full report as an A4 PDF.

Run:
    streamlit run app.py
"""

import streamlit as st

from poetique.analyzer import AnalysisClient
from poetique.charts import score_gauge
from poetique.config import Settings, configure_logging
from poetique.exporter import ReportExporter
from poetique.models import AnalysisResult
from poetique.report import AO_LABELS, answer_toggle_label, score_label
from poetique.state import Status, ViewStateController

# ---------- Config ----------
SETTINGS = Settings.from_env()
configure_logging(SETTINGS)

IMAGE_TYPES = ["png", "jpg", "jpeg", "webp", "gif"]

# ---------- Page config ----------
st.set_page_config(page_title="Poetique", layout="wide")
st.title("Poetique — CIE Examiner Module")


@st.cache_resource
def get_client() -> AnalysisClient:
    return AnalysisClient(SETTINGS)


@st.cache_resource
def get_exporter() -> ReportExporter:
    return ReportExporter(SETTINGS)


controller = ViewStateController(st.session_state)

# ---------- Sidebar ----------
with st.sidebar:
    st.header("Upload")
    uploaded_file = st.file_uploader("Upload Poem Image", type=IMAGE_TYPES, key=controller.uploader_key)
    if controller.preview:
        st.image(controller.preview, caption="Uploaded poem")
    if controller.status is not Status.IDLE:
        st.write("---")
        st.button("New Analysis", key="new_analysis", on_click=controller.reset)

# ---------- Upload -> analysis ----------
if uploaded_file is not None:
    with st.spinner("Analyzing Literary Structures... this usually takes 10-15 seconds."):
        ran = controller.handle_upload(get_client(), uploaded_file.file_id, uploaded_file.getvalue(), uploaded_file.type)
    if ran:
        st.rerun()


# ---------- Report rendering ----------
def render_header(result: AnalysisResult):
    ev = result.cie_evaluation
    st.markdown(f"## \"{result.title}\"")
    st.markdown(f"*Examining the works of {result.author}*")
    c1, c2, c3 = st.columns([1, 1, 2])
    with c1:
        st.metric("CIE Grade", ev.grade)
    with c2:
        st.metric("Score", score_label(result))
    with c3:
        st.plotly_chart(score_gauge(ev), use_container_width=True)


def render_export(result: AnalysisResult):
    if st.button("Export A4 PDF", key="export_pdf"):
        with st.spinner("Generating..."):
            outcome = get_exporter().export(result, controller)
        if outcome.ok:
            controller.set_export_document(outcome.document)
        else:
            st.warning(outcome.warning)
    document = controller.export_document
    if document is not None:
        st.download_button(
            f"Download PDF ({document.page_count} pages)",
            data=document.data,
            file_name=document.filename,
            mime="application/pdf",
        )


def render_analysis(result: AnalysisResult):
    left, right = st.columns([5, 7])
    with left:
        st.subheader("Poem Text")
        st.text(result.ocr_content)
    with right:
        st.subheader("Critical Reading")
        st.caption("EXPLICIT MEANING")
        st.write(result.meaning.explicit)
        st.caption("IMPLICIT MEANING")
        st.write(result.meaning.implicit)

        st.subheader("Tone & Atmosphere")
        st.markdown(f"> {result.tone.description}")
        st.caption("EFFECTIVENESS")
        st.write(result.tone.effects)

        st.subheader("AO2: Literary Devices")
        for item in result.literary_devices:
            st.markdown(f"**{item.device.upper()}** — *\"{item.example}\"*")
            st.write(item.effect)

        s1, s2 = st.columns(2)
        with s1:
            st.markdown("#### Structure")
            st.write(result.structure)
        with s2:
            st.markdown("#### AO4: Context")
            st.write(result.context)

        st.subheader("AO3: Personal Response")
        st.write(result.personal_response)


def render_exam_practice(result: AnalysisResult):
    st.write("---")
    st.header("CIE Literature Practice Paper")
    for idx, eq in enumerate(result.exam_questions):
        st.markdown(f"**{idx + 1}.** {eq.question} `[{eq.marks}]`")
        visible = controller.is_answer_visible(idx)
        st.button(
            answer_toggle_label(visible),
            key=f"toggle_answer_{idx}",
            on_click=controller.toggle_answer,
            args=(idx,),
        )
        if visible:
            st.caption("LEVEL 6 MODEL RESPONSE")
            st.info(eq.model_answer)
            if eq.key_points:
                st.caption(" · ".join(kp.upper() for kp in eq.key_points))


def render_feedback(result: AnalysisResult):
    ev = result.cie_evaluation
    st.write("---")
    st.header("Summative Examiner Feedback")
    cols = st.columns(2)
    for i, (field, label) in enumerate(AO_LABELS):
        with cols[i % 2]:
            st.caption(label.upper())
            st.write(getattr(ev, field))
    st.caption("FINAL ASSESSMENT NOTES")
    st.markdown(f"*\"{ev.examiner_comments}\"*")


# ---------- Main layout ----------
status = controller.status

if status is Status.IDLE:
    st.subheader("Unlock Deep Literary Insights with AI-Powered Analysis")
    st.write(
        "Upload an image of a poem. Poetique evaluates language, structure, tone, and context "
        "against CIE marking standards to provide expert-level analysis."
    )
    st.info("Upload a poem image in the sidebar to start.")
    st.caption("CIE Mark Scheme · AO1-AO4 Analysis · Tone & Context")

elif status is Status.PROCESSING:
    st.info("Analyzing Literary Structures...")

elif status is Status.ERROR:
    st.subheader("Analysis Failed")
    st.error(controller.error)
    st.button("Try Another Image", key="try_again", on_click=controller.reset)

elif status is Status.COMPLETED and controller.result is not None:
    result = controller.result
    render_header(result)
    render_export(result)
    render_analysis(result)
    render_exam_practice(result)
    render_feedback(result)

# ---------- Footer ----------
st.write("---")
st.caption("Built with Gemini (via langchain) + Streamlit + PyMuPDF. Monitor model usage & quota.")
