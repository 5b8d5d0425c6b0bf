"""The (value, error, status) triple every pipeline step returns."""

from typing import Any, NamedTuple, Optional

from shared.errors import PipelineError


class Outcome(NamedTuple):
    value: Any
    error: Optional[PipelineError]
    status: int

    @classmethod
    def ok(cls, value: Any, status: int = 200) -> "Outcome":
        return cls(value, None, status)

    @classmethod
    def failed(cls, error: PipelineError, empty: Any = None) -> "Outcome":
        return cls(empty, error, error.status_code)

    @property
    def succeeded(self) -> bool:
        return self.error is None
