"""Question and answer data model.

A ``Question`` is a named unit of input. Its ``message``, ``default`` and
``choices`` fields are dynamic: each holds either ``Static(value)`` or
``Computed(fn)``, where ``fn`` receives the answers collected so far.
Plain values and plain callables are normalized into the variant when the
question is built, so callers can write questions the same way they would
for an inquirer-style prompt library.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")

DYNAMIC_FIELDS = ("message", "default", "choices")


@dataclass(frozen=True)
class Static(Generic[T]):
    """A field value known up front."""

    value: T


@dataclass(frozen=True)
class Computed(Generic[T]):
    """A field value computed from previously collected answers."""

    fn: Callable[["AnswerSet"], T]

    def __call__(self, answers: "AnswerSet") -> T:
        return self.fn(answers)


Dynamic = Union[Static[T], Computed[T]]


def dynamic(value: Any) -> Dynamic | None:
    """Wrap a raw field value into the ``Static | Computed`` variant."""
    if value is None or isinstance(value, (Static, Computed)):
        return value
    if callable(value):
        return Computed(value)
    return Static(value)


class AnswerSet(MutableMapping[str, Any]):
    """Ordered mapping of question name to accepted answer.

    Grows monotonically: a name can be set once and never removed.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = {}
        if initial:
            for key, value in initial.items():
                self[key] = value

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if key in self._data:
            raise KeyError(f"answer for '{key}' is already set")
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        raise TypeError("answers cannot be removed once collected")

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return dict(self._data) == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"AnswerSet({self._data!r})"

    def commit(self, staged: Mapping[str, Any]) -> None:
        """Store a batch of validated answers."""
        for key, value in staged.items():
            self[key] = value

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)


@dataclass
class Question:
    """A question to ask, locally or through a remote peer."""

    name: str
    message: Dynamic[str] | None = None
    default: Dynamic[Any] | None = None
    choices: Dynamic[list[Any]] | None = None
    when: Callable[[AnswerSet], Any] | None = None
    validate: Callable[[Any], Any] | None = None
    filter: Callable[[Any], Any] | None = None
    type: str = "text"
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            raise ValueError("Question requires a non-empty name")
        self.message = dynamic(self.message)
        self.default = dynamic(self.default)
        self.choices = dynamic(self.choices)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Question:
        """Build a Question from an inquirer-style dictionary."""
        known = {
            "name", "message", "default", "choices",
            "when", "validate", "filter", "type",
        }
        if "name" not in data:
            raise ValueError("Question dictionary is missing 'name'")
        kwargs = {k: v for k, v in data.items() if k in known}
        kwargs["extra"] = {k: v for k, v in data.items() if k not in known}
        return cls(**kwargs)

    @property
    def is_dynamic(self) -> bool:
        """True when any of ``when``/``message``/``default``/``choices`` is a function."""
        if self.when is not None:
            return True
        return any(isinstance(getattr(self, f), Computed) for f in DYNAMIC_FIELDS)

    @property
    def is_resolved(self) -> bool:
        return not any(isinstance(getattr(self, f), Computed) for f in DYNAMIC_FIELDS)

    def is_visible(self, answers: AnswerSet) -> bool:
        """Evaluate ``when``. Only a falsy, non-None result hides the question."""
        if self.when is None:
            return True
        result = self.when(answers)
        return result is None or bool(result)

    def value_of(self, field_name: str) -> Any:
        """Return the concrete value of a resolved dynamic field."""
        current = getattr(self, field_name)
        if current is None:
            return None
        if isinstance(current, Computed):
            raise ValueError(f"Field '{field_name}' of question '{self.name}' is not resolved")
        return current.value

    def to_wire(self) -> dict[str, Any]:
        """JSON-serializable form sent to the peer."""
        payload: dict[str, Any] = {"name": self.name, "type": self.type}
        for field_name in DYNAMIC_FIELDS:
            if getattr(self, field_name) is not None:
                payload[field_name] = self.value_of(field_name)
        payload.update(self.extra)
        return payload


def as_questions(questions: Any) -> list[Question]:
    """Normalize a single question, a dict, or a sequence of either."""
    if isinstance(questions, (Question, Mapping)):
        questions = [questions]
    result: list[Question] = []
    for q in questions:
        if isinstance(q, Question):
            result.append(q)
        elif isinstance(q, Mapping):
            result.append(Question.from_dict(q))
        else:
            raise TypeError(f"Unsupported question type: {type(q).__name__}")
    return result
