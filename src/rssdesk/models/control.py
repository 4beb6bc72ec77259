"""Control channel request/response models."""

from pydantic import BaseModel, Field


class ControlRequest(BaseModel):
    """A command sent over the control channel."""

    action: str = Field(..., description="Action name, e.g. add_url")
    params: list[str] = Field(default_factory=list, description="Positional parameters")


class ControlResponse(BaseModel):
    """Outcome of a dispatched command.

    Normally exactly one of ``result`` and ``error`` is non-empty; both empty
    is a no-op success.
    """

    result: list[str] = Field(default_factory=list)
    error: list[str] = Field(default_factory=list)

    @classmethod
    def ok(cls, *values: str) -> "ControlResponse":
        return cls(result=list(values))

    @classmethod
    def failed(cls, *messages: str) -> "ControlResponse":
        return cls(error=list(messages))

    @property
    def is_error(self) -> bool:
        return bool(self.error)
