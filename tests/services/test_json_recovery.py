"""
JSON recovery tests
"""
import pytest

from examgen.core.exceptions import MalformedOutputError
from examgen.services.json_recovery import recover_json


class TestRecoverJson:

    def test_plain_json(self):
        assert recover_json('{"questoes": []}') == {"questoes": []}

    def test_non_object_json_is_returned_as_is(self):
        assert recover_json("[1, 2]") == [1, 2]

    def test_prose_around_object(self):
        text = 'Here is the exam: {"questoes":[{"enunciado":"Q1","gabarito":"x"}]} Hope this helps!'
        assert recover_json(text) == {"questoes": [{"enunciado": "Q1", "gabarito": "x"}]}

    def test_code_fence(self):
        text = '```json\n{"titulo": "T", "questoes": []}\n```'
        assert recover_json(text) == {"titulo": "T", "questoes": []}

    def test_braces_inside_strings(self):
        text = 'ok {"enunciado": "use {x}"} fim'
        assert recover_json(text) == {"enunciado": "use {x}"}

    @pytest.mark.parametrize("text", [
        "",
        None,
        "no json here",
        "only an opening { brace",
        "} reversed {",
        "{not: valid, json}",
        'prefix {"a": 1} middle {"b": 2} suffix',
    ])
    def test_unrecoverable(self, text):
        with pytest.raises(MalformedOutputError):
            recover_json(text)

    def test_error_carries_bounded_excerpt(self):
        text = "x" * 2000
        with pytest.raises(MalformedOutputError) as exc_info:
            recover_json(text)
        err = exc_info.value
        assert err.status_code == 500
        assert err.raw == "x" * 800
        body = err.to_dict()
        assert body["error"] == "Resposta inválida do modelo"
        assert len(body["raw"]) == 800
