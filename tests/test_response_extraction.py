from __future__ import annotations

from types import SimpleNamespace

from chat_intake.services.extraction import extract_reply_text, find_first_text


def test_direct_text_attribute_wins():
    response = SimpleNamespace(text="  Canada offers post-study work permits.  ", candidates=[])
    assert extract_reply_text(response) == "Canada offers post-study work permits."


def test_gemini_candidate_shape():
    response = {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": "Apply early for September intake."}]}}
        ]
    }
    assert extract_reply_text(response) == "Apply early for September intake."


def test_openai_choice_shape():
    response = {"id": "r-1", "choices": [{"index": 0, "message": {"content": "Most programs need IELTS 6.5."}}]}
    assert extract_reply_text(response) == "Most programs need IELTS 6.5."


def test_short_strings_are_accepted_on_second_pass():
    response = {"meta": {"status": "ok"}}
    assert find_first_text(response, min_length=8) is None
    assert extract_reply_text(response) == "ok"


def test_preferred_keys_are_searched_before_other_fields():
    response = {"model_version": "gemini-2.5-flash-001", "output": {"text": "Short intake list."}}
    assert extract_reply_text(response) == "Short intake list."


def test_cycles_do_not_recurse_forever():
    node = {"name": 1}
    node["self"] = node
    node["children"] = [node]
    assert extract_reply_text(node) is None


def test_properties_that_raise_are_ignored():
    class Flaky:
        @property
        def text(self):
            raise ValueError("response was blocked")

        def __init__(self):
            self.candidates = [SimpleNamespace(content=SimpleNamespace(parts=[SimpleNamespace(text="Fallback answer text")]))]

    assert extract_reply_text(Flaky()) == "Fallback answer text"


def test_missing_payload_yields_none():
    assert extract_reply_text(None) is None
    assert extract_reply_text({}) is None
    assert extract_reply_text({"candidates": []}) is None
