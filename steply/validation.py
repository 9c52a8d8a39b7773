"""Steps, their builder, and validation of the inputs they hold."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from steply.component import Component
from steply.node import Input, Node

FieldError = Tuple[str, str]


class ValidationError(ValueError):
    """Raised by validators when a value is not acceptable."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationContext:
    """Raw values and completeness of every input in a step, by id."""

    values: Dict[str, str] = field(default_factory=dict)
    completeness: Dict[str, bool] = field(default_factory=dict)

    @classmethod
    def from_step(cls, step: "Step") -> "ValidationContext":
        values: Dict[str, str] = {}
        completeness: Dict[str, bool] = {}
        for inp in _inputs(step.nodes):
            values[inp.id] = inp.raw_value()
            completeness[inp.id] = inp.is_complete()
        return cls(values, completeness)

    def value(self, id: str) -> Optional[str]:
        return self.values.get(id)

    def is_complete(self, id: str) -> Optional[bool]:
        return self.completeness.get(id)


FormValidator = Callable[[ValidationContext], Iterable[FieldError]]


@dataclass
class Step:
    """One screen of a flow: a prompt, its nodes and whole-form validators."""

    prompt: str
    hint: Optional[str] = None
    nodes: List[Node] = field(default_factory=list)
    form_validators: List[FormValidator] = field(default_factory=list)


class StepBuilder:
    """Builds a :class:`Step` through chained calls."""

    def __init__(self, prompt: str) -> None:
        self._prompt = prompt
        self._hint: Optional[str] = None
        self._nodes: List[Node] = []
        self._validators: List[FormValidator] = []

    def hint(self, hint: str) -> "StepBuilder":
        self._hint = hint
        return self

    def input(self, input: Input) -> "StepBuilder":
        self._nodes.append(input)
        return self

    def text(self, content: str) -> "StepBuilder":
        self._nodes.append(content)
        return self

    def component(self, component: Component) -> "StepBuilder":
        self._nodes.append(component)
        return self

    def validator(self, validator: FormValidator) -> "StepBuilder":
        self._validators.append(validator)
        return self

    def build(self) -> Step:
        return Step(
            prompt=self._prompt,
            hint=self._hint,
            nodes=list(self._nodes),
            form_validators=list(self._validators),
        )


def _inputs(nodes: Sequence[Node]) -> Iterable[Input]:
    for node in nodes:
        if isinstance(node, Input):
            yield node
        elif isinstance(node, Component):
            yield from _inputs(node.children() or ())


def validate_input(input: Input) -> None:
    """Raise :class:`ValidationError` if the input's value is not acceptable.

    An empty value only goes through the input's validators. A non-empty one
    must first be complete and pass the input's own checks.
    """
    raw = input.raw_value()
    if raw:
        if not input.is_complete():
            raise ValidationError("Incomplete value")
        input.validate_internal()
    for validator in input.validators:
        validator(raw)


def validate_all_inputs(step: Step) -> List[FieldError]:
    """Every input error in the step, in tree order, then form-level errors."""
    errors: List[FieldError] = []
    for inp in _inputs(step.nodes):
        try:
            validate_input(inp)
        except ValidationError as err:
            errors.append((inp.id, str(err)))

    ctx = ValidationContext.from_step(step)
    for validator in step.form_validators:
        errors.extend(validator(ctx))
    return errors