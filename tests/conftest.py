import copy
import json

import pytest

from poetique.config import Settings
from poetique.models import AnalysisResult

PAYLOAD = {
    "title": "The Road Not Taken",
    "author": "Robert Frost",
    "ocrContent": "Two roads diverged in a yellow wood,\nAnd sorry I could not travel both",
    "meaning": {
        "explicit": "A traveller chooses between two paths.",
        "implicit": "Choices shape identity, and we narrate them after the fact.",
    },
    "tone": {
        "description": "Reflective and quietly ironic.",
        "effects": "Invites the reader to question the speaker's certainty.",
    },
    "structure": "Four stanzas of five lines, ABAAB rhyme scheme.",
    "context": "Written in 1915, partly as a joke on Edward Thomas.",
    "personalResponse": "The sigh in the last stanza is ambiguous.",
    "literaryDevices": [
        {"device": "Metaphor", "example": "Two roads diverged", "effect": "Roads stand for life choices."},
        {"device": "Imagery", "example": "yellow wood", "effect": "Autumn suggests maturity."},
    ],
    "examQuestions": [
        {
            "question": "In what ways does Frost present the act of choosing?",
            "marks": 25,
            "modelAnswer": "ANSWER ONE: Frost frames choice as both arbitrary and defining.",
            "keyPoints": ["ambiguity", "retrospection"],
        },
        {
            "question": "How does the poet vividly convey the setting?",
            "marks": 25,
            "modelAnswer": "ANSWER TWO: The yellow wood establishes autumnal reflection.",
            "keyPoints": ["imagery", "season"],
        },
        {
            "question": "Explore the effect of the final stanza.",
            "marks": 25,
            "modelAnswer": "ANSWER THREE: The sigh undercuts the triumphant claim.",
            "keyPoints": ["irony"],
        },
    ],
    "cieEvaluation": {
        "ao1": "Secure knowledge of the text.",
        "ao2": "Perceptive comments on form.",
        "ao3": "Sustained personal response.",
        "ao4": "Some contextual awareness.",
        "totalMark": 18,
        "maxMark": 25,
        "grade": "A",
        "examinerComments": "A thoughtful, well-supported reading.",
    },
}


@pytest.fixture
def payload():
    return copy.deepcopy(PAYLOAD)


@pytest.fixture
def payload_json(payload):
    return json.dumps(payload)


@pytest.fixture
def result(payload):
    return AnalysisResult.model_validate(payload)


@pytest.fixture
def settings():
    return Settings(api_key="test-key", capture_width=300, capture_scale=1)
