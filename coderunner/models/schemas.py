from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, StrictStr


class ExecuteRequest(BaseModel):
    code: StrictStr = Field("", description="Program source.")
    language: StrictStr = Field(
        "", description="One of Python, JavaScript, C, C++, Go, Java (case-sensitive)."
    )
    inputs: list[StrictStr] = Field(
        default_factory=list,
        description="Stdin payloads; the program runs once per payload.",
    )
    key: StrictStr = Field("", description="Shared secret.")


class ExecuteResponse(BaseModel):
    status: Literal["success"] = "success"
    outputs: list[StrictStr] = Field(
        ...,
        description=(
            "One output per input, in input order. If compilation fails this is "
            "a single compiler diagnostic regardless of the number of inputs."
        ),
    )


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: StrictStr
