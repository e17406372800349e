import json

import pytest
from pydantic import ValidationError

from poetique.models import RESPONSE_SCHEMA, AnalysisResult


class TestAnalysisResult:
    def test_valid_payload(self, payload):
        result = AnalysisResult.model_validate(payload)
        assert result.title == "The Road Not Taken"
        assert result.ocr_content.count("\n") == 1
        assert len(result.exam_questions) == 3
        assert result.exam_questions[1].key_points == ["imagery", "season"]
        assert result.cie_evaluation.total_mark == 18
        assert result.cie_evaluation.max_mark == 25

    def test_device_order_preserved(self, payload):
        result = AnalysisResult.model_validate(payload)
        assert [d.device for d in result.literary_devices] == ["Metaphor", "Imagery"]

    def test_empty_title_and_author_allowed(self, payload):
        payload["title"] = ""
        payload["author"] = ""
        result = AnalysisResult.model_validate(payload)
        assert result.title == ""

    def test_missing_top_level_field_rejected(self, payload):
        del payload["cieEvaluation"]
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(payload)

    def test_missing_nested_field_rejected(self, payload):
        del payload["examQuestions"][0]["modelAnswer"]
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(payload)

    def test_negative_marks_rejected(self, payload):
        payload["examQuestions"][0]["marks"] = -1
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(payload)

    def test_wrong_type_rejected(self, payload):
        payload["literaryDevices"] = "metaphor"
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(payload)

    @pytest.mark.parametrize(
        "section, index, key, value",
        [
            ("examQuestions", 0, "marks", "3"),
            ("examQuestions", 0, "marks", True),
            ("examQuestions", 0, "marks", 3.5),
            ("cieEvaluation", None, "totalMark", "18"),
            ("cieEvaluation", None, "maxMark", False),
            ("cieEvaluation", None, "grade", 7),
            ("meaning", None, "explicit", 1),
        ],
    )
    def test_mistyped_value_rejected(self, payload, section, index, key, value):
        target = payload[section] if index is None else payload[section][index]
        target[key] = value
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate_json(json.dumps(payload))

    def test_integer_mark_accepted_as_number(self, payload):
        payload["cieEvaluation"]["totalMark"] = 18
        payload["cieEvaluation"]["maxMark"] = 25.0
        result = AnalysisResult.model_validate_json(json.dumps(payload))
        assert result.cie_evaluation.total_mark == 18
        assert result.cie_evaluation.max_mark == 25

    def test_total_above_max_not_enforced(self, payload):
        payload["cieEvaluation"]["totalMark"] = 30
        result = AnalysisResult.model_validate(payload)
        assert result.cie_evaluation.total_mark == 30

    def test_unknown_keys_ignored(self, payload):
        payload["confidence"] = 0.9
        result = AnalysisResult.model_validate_json(json.dumps(payload))
        assert not hasattr(result, "confidence")

    def test_result_is_immutable(self, payload):
        result = AnalysisResult.model_validate(payload)
        with pytest.raises(ValidationError):
            result.title = "Other"


class TestResponseSchema:
    def test_every_top_level_field_required(self, payload):
        assert set(RESPONSE_SCHEMA["required"]) == set(payload)

    def test_nested_objects_fully_required(self):
        props = RESPONSE_SCHEMA["properties"]
        assert props["cieEvaluation"]["required"] == [
            "ao1", "ao2", "ao3", "ao4", "totalMark", "maxMark", "grade", "examinerComments",
        ]
        question = props["examQuestions"]["items"]
        assert set(question["required"]) == {"question", "marks", "modelAnswer", "keyPoints"}
        assert question["properties"]["keyPoints"] == {"type": "array", "items": {"type": "string"}}
