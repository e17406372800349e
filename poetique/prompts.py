from langchain_core.prompts import ChatPromptTemplate

from poetique.config import QUESTION_COUNT

TASK_INSTRUCTION = (
    "Perform a complete CIE standard literary analysis. "
    "Include a set of Exam Practice questions and answers at the end."
)


def make_system_instruction(question_count: int = QUESTION_COUNT) -> str:
    return (
        "You are a Senior CIE (Cambridge Assessment International Education) English Literature Examiner.\n"
        "Analyze the poem in the provided image with academic rigor following the 0475 IGCSE "
        "or 9695 A-Level standards.\n\n"
        "CRITICAL REQUIREMENTS:\n"
        "1. Analysis must cover Tone, Structure, Context, Personal Response, and Literary Devices.\n"
        f"2. Generate exactly {question_count} typical CIE exam-style questions "
        "(e.g. \"In what ways does the poet...\", \"How does the poet vividly convey...\").\n"
        "3. For each question, provide a high-scoring model answer (Level 5/6) that integrates AOs, "
        "and a short list of key points.\n"
        "4. Provide a predicted mark and grade.\n\n"
        "AOs FOCUS:\n"
        "- AO1: Detailed knowledge of the text.\n"
        "- AO2: Appreciation of the writer's choices of language, form, and structure.\n"
        "- AO3: Personal and evaluative response.\n"
        "- AO4: Historical/Social Context (where applicable).\n"
    )


def make_analysis_prompt(question_count: int = QUESTION_COUNT) -> ChatPromptTemplate:
    """System persona + one human turn carrying the image and the task text.

    Template variables: ``mime_type`` and ``image_data`` (raw base64).
    """
    return ChatPromptTemplate.from_messages(
        [
            ("system", make_system_instruction(question_count)),
            (
                "human",
                [
                    {"type": "image_url", "image_url": {"url": "data:{mime_type};base64,{image_data}"}},
                    {"type": "text", "text": TASK_INSTRUCTION},
                ],
            ),
        ]
    )
