"""
Sanitizer tests
"""
import pytest

from examgen.schemas.exam import GeneratedQuestion, to_text
from examgen.services.sanitizer import sanitize_exam, sanitize_question

from conftest import make_exam, make_question


class TestSanitizeExamShape:
    """Top-level shape"""

    @pytest.mark.parametrize("value", [
        None,
        "text",
        42,
        [make_question(1)],
        {},
        {"titulo": "T"},
        {"questoes": None},
        {"questoes": "Q1"},
        {"questoes": {"0": make_question(1)}},
    ])
    def test_unusable_shape_yields_no_questions(self, value):
        draft = sanitize_exam(value)
        assert draft.questions == []

    def test_title_and_topic_kept_as_text(self):
        draft = sanitize_exam({"titulo": "Prova", "tema": 2024, "questoes": []})
        assert draft.title == "Prova"
        assert draft.topic == "2024"

    def test_title_and_topic_absent(self):
        draft = sanitize_exam({"questoes": [make_question(1)]})
        assert draft.title is None
        assert draft.topic is None
        assert len(draft.questions) == 1

    def test_well_formed_exam_is_unchanged(self):
        exam = make_exam(3)
        draft = sanitize_exam(exam)
        assert draft.title == exam["titulo"]
        assert draft.topic == exam["tema"]
        assert [q.to_wire() for q in draft.questions] == exam["questoes"]

    def test_order_preserved(self):
        draft = sanitize_exam(make_exam(5))
        assert [q.statement for q in draft.questions] == [f"Questão {i}" for i in range(1, 6)]


class TestSanitizeQuestion:
    """Per-question defaults"""

    def test_missing_correct_option_defaults_to_a(self):
        q = sanitize_question({"enunciado": "Q"})
        assert q.correct_option == "A"

    @pytest.mark.parametrize("value, expected", [
        ("z", "A"),
        ("x", "A"),
        ("E", "A"),
        ("", "A"),
        (None, "A"),
        (2, "A"),
        ("b", "B"),
        (" c ", "C"),
        ("D", "D"),
        (["B"], "A"),
    ])
    def test_correct_option(self, value, expected):
        assert sanitize_question({"gabarito": value}).correct_option == expected

    @pytest.mark.parametrize("raw", [None, "Q1", 5, ["a"], True])
    def test_non_object_becomes_empty_question(self, raw):
        q = sanitize_question(raw)
        assert q.statement == ""
        assert q.option_a == q.option_b == q.option_c == q.option_d == ""
        assert q.correct_option == "A"
        assert q.explanation is None
        assert q.difficulty_level is None

    def test_missing_text_fields_are_empty_strings(self):
        q = sanitize_question({"enunciado": "Q1", "gabarito": "x"})
        assert q.statement == "Q1"
        assert q.option_a == ""
        assert q.option_d == ""
        assert q.explanation is None
        assert q.difficulty_level is None

    def test_values_coerced_to_text(self):
        q = sanitize_question({
            "enunciado": 12,
            "alternativaA": 1.0,
            "alternativaB": True,
            "alternativaC": {"x": 1},
            "alternativaD": [1, 2],
            "explicacao": 3.5,
        })
        assert q.statement == "12"
        assert q.option_a == "1"
        assert q.option_b == "true"
        assert q.option_c == '{"x": 1}'
        assert q.option_d == "[1, 2]"
        assert q.explanation == "3.5"

    def test_null_explanation_stays_absent(self):
        q = sanitize_question({"explicacao": None})
        assert q.explanation is None
        assert "explicacao" not in q.to_wire()

    def test_empty_explanation_kept(self):
        assert sanitize_question({"explicacao": ""}).explanation == ""

    @pytest.mark.parametrize("value, expected", [
        ("fácil", "fácil"),
        ("FACIL", "fácil"),
        ("médio", "médio"),
        ("medio", "médio"),
        ("Difícil", "difícil"),
        ("dificil", "difícil"),
        ("extremo", None),
        ("", None),
        (None, None),
        (1, None),
    ])
    def test_difficulty(self, value, expected):
        assert sanitize_question({"dificuldade": value}).difficulty_level == expected

    def test_unknown_fields_dropped(self):
        q = sanitize_question({"enunciado": "Q", "extra": "x", "createdAt": "2020-01-01"})
        wire = q.to_wire()
        assert "extra" not in wire
        assert "createdAt" not in wire

    def test_invalid_model_falls_back_to_default(self, monkeypatch, capture_logs):
        from examgen.services import sanitizer

        monkeypatch.setattr(sanitizer, "validate_with_model", lambda cls, data: (None, [{"msg": "boom"}]))
        q = sanitizer.sanitize_question({"enunciado": "Q"})
        assert q == GeneratedQuestion()
        assert "question_sanitize_fallback" in capture_logs.get_messages()

    @pytest.mark.parametrize("raw", [
        {"enunciado": float("nan")},
        {"gabarito": {"a": [1, {"b": None}]}},
        {"alternativaA": [[[[[]]]]]},
        {"dificuldade": ["fácil"]},
        {"enunciado": "x" * 100000},
    ])
    def test_never_raises(self, raw):
        assert isinstance(sanitize_question(raw), GeneratedQuestion)


class TestToText:

    def test_basic(self):
        assert to_text(None) == ""
        assert to_text("a") == "a"
        assert to_text(False) == "false"
        assert to_text(2.0) == "2"
        assert to_text(2.5) == "2.5"
        assert to_text("ação") == "ação"
        assert to_text({"k": "ç"}) == '{"k": "ç"}'
