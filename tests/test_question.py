from __future__ import annotations

import pytest

from remote_prompt.question import (
    AnswerSet,
    Computed,
    Question,
    Static,
    as_questions,
    dynamic,
)
from remote_prompt.resolver import resolve_fields


class TestDynamicFields:
    def test_plain_values_become_static(self):
        q = Question(name="a", message="Name?", default="bob", choices=["x", "y"])
        assert q.message == Static("Name?")
        assert q.default == Static("bob")
        assert q.choices == Static(["x", "y"])

    def test_callables_become_computed(self):
        q = Question(name="a", message=lambda answers: "hi")
        assert isinstance(q.message, Computed)
        assert q.is_dynamic
        assert not q.is_resolved

    def test_variant_passes_through(self):
        s = Static(3)
        assert dynamic(s) is s
        assert dynamic(None) is None

    def test_when_makes_question_dynamic(self):
        assert Question(name="a", when=lambda answers: True).is_dynamic
        assert not Question(name="a", message="static").is_dynamic

    def test_validate_and_filter_do_not_make_question_dynamic(self):
        q = Question(name="a", validate=lambda v: True, filter=str.upper)
        assert not q.is_dynamic

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            Question(name="")


class TestVisibility:
    def test_no_when_is_visible(self):
        assert Question(name="a").is_visible(AnswerSet())

    def test_false_hides(self):
        assert not Question(name="a", when=lambda answers: False).is_visible(AnswerSet())

    def test_falsy_hides(self):
        assert not Question(name="a", when=lambda answers: 0).is_visible(AnswerSet())

    def test_none_means_ask(self):
        assert Question(name="a", when=lambda answers: None).is_visible(AnswerSet())

    def test_when_sees_answers(self):
        q = Question(name="b", when=lambda answers: answers.get("a") == "yes")
        assert q.is_visible(AnswerSet({"a": "yes"}))
        assert not q.is_visible(AnswerSet({"a": "no"}))


class TestResolver:
    def test_resolves_computed_fields_in_place(self):
        q = Question(
            name="greet",
            message=lambda answers: f"Hello {answers['name']}?",
            default=lambda answers: answers["name"].upper(),
            choices=lambda answers: [answers["name"], "other"],
        )
        result = resolve_fields(q, AnswerSet({"name": "ann"}))
        assert result is q
        assert q.message == Static("Hello ann?")
        assert q.default == Static("ANN")
        assert q.choices == Static(["ann", "other"])
        assert q.is_resolved

    def test_static_fields_untouched(self):
        q = Question(name="a", message="Plain")
        resolve_fields(q, AnswerSet())
        assert q.message == Static("Plain")
        assert q.default is None

    def test_idempotent(self):
        calls = []

        def message(answers):
            calls.append(1)
            return "computed"

        q = Question(name="a", message=message)
        answers = AnswerSet()
        resolve_fields(q, answers)
        resolve_fields(q, answers)
        assert q.message == Static("computed")
        assert len(calls) == 1


class TestWireForm:
    def test_only_set_fields_serialized(self):
        q = Question(name="a", message="A?", validate=lambda v: True, filter=str)
        assert q.to_wire() == {"name": "a", "type": "text", "message": "A?"}

    def test_extra_forwarded(self):
        q = Question.from_dict({"name": "a", "type": "confirm", "message": "Ok?", "hint": "x"})
        assert q.extra == {"hint": "x"}
        assert q.to_wire() == {"name": "a", "type": "confirm", "message": "Ok?", "hint": "x"}

    def test_unresolved_field_is_an_error(self):
        q = Question(name="a", message=lambda answers: "later")
        with pytest.raises(ValueError):
            q.to_wire()

    def test_from_dict_requires_name(self):
        with pytest.raises(ValueError):
            Question.from_dict({"message": "no name"})


class TestAnswerSet:
    def test_preserves_insertion_order(self):
        answers = AnswerSet()
        answers["b"] = 1
        answers["a"] = 2
        assert list(answers) == ["b", "a"]

    def test_name_set_once(self):
        answers = AnswerSet({"a": 1})
        with pytest.raises(KeyError):
            answers["a"] = 2
        assert answers["a"] == 1

    def test_no_deletion(self):
        answers = AnswerSet({"a": 1})
        with pytest.raises(TypeError):
            del answers["a"]

    def test_equality_with_dict(self):
        assert AnswerSet({"a": 1, "b": 2}) == {"a": 1, "b": 2}
        assert {} == AnswerSet()

    def test_commit(self):
        answers = AnswerSet({"a": 1})
        answers.commit({"b": 2, "c": 3})
        assert answers.to_dict() == {"a": 1, "b": 2, "c": 3}


class TestAsQuestions:
    def test_single_question(self):
        q = Question(name="a")
        assert as_questions(q) == [q]

    def test_single_dict(self):
        result = as_questions({"name": "a", "message": "A?"})
        assert [q.name for q in result] == ["a"]

    def test_mixed_sequence(self):
        result = as_questions([Question(name="a"), {"name": "b"}])
        assert [q.name for q in result] == ["a", "b"]

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            as_questions(["a"])
