"""Parsers – pydantic-backed schema validation.

A :class:`SchemaValidator` is one side of the closed validator union that
parser factories accept; the other is a plain function returning a
``Result``. The union is collapsed once, by :func:`as_validate_fn`, when the
parser is built::

    class Features(BaseModel):
        beta: bool = False

    parser = json_parser(schema(Features), protected_keys=["token"])
"""
from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from mp_envkit.kernel.errors import ValueParseError
from mp_envkit.kernel.types import Err, Ok, Result

V = TypeVar("V")

type ValidateFn[V] = Callable[[Any], Result[V, Exception]]
type Validator[V] = ValidateFn[V] | SchemaValidator[V]


class SchemaValidator(Generic[V]):
    """Validate values against *tp* through a :class:`pydantic.TypeAdapter`."""

    def __init__(self, tp: Any) -> None:
        self.type = tp
        self._adapter: TypeAdapter[V] = TypeAdapter(tp)

    def validate(self, value: Any) -> Result[V, Exception]:
        try:
            return Ok(self._adapter.validate_python(value))
        except ValidationError as exc:
            message = "\n".join(str(error["msg"]) for error in exc.errors())
            return Err(ValueParseError("Schema", value, message, cause=exc))

    def dump(self, value: V) -> Any:
        """JSON-compatible form of *value* (models become dicts)."""
        return self._adapter.dump_python(value, mode="json")

    def __repr__(self) -> str:
        return f"SchemaValidator({self.type!r})"


def schema(tp: Any) -> SchemaValidator[Any]:
    return SchemaValidator(tp)


def as_validate_fn(validator: Validator[V] | None) -> ValidateFn[V] | None:
    if validator is None:
        return None
    if isinstance(validator, SchemaValidator):
        return validator.validate
    return validator


__all__ = ["SchemaValidator", "ValidateFn", "Validator", "as_validate_fn", "schema"]
