"""Pydantic models for validating classifier replies."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class StatusResponse(BaseModel):
    """Reply expected from the status classification prompt."""

    status: Literal["working", "needs_input", "done"]
    summary: str = ""


class TaskItem(BaseModel):
    """One task in the input classification reply."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(min_length=1)
    suggested_tools: list[str] | None = Field(default=None, alias="suggestedTools")


class CleanedInputResponse(BaseModel):
    """Reply expected from the input classification prompt."""

    model_config = ConfigDict(populate_by_name=True)

    tasks: list[TaskItem] = Field(default_factory=list)
    clarification_needed: str | None = Field(default=None, alias="clarificationNeeded")
