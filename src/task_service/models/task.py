"""Task record and its request/response shapes."""

from pydantic import BaseModel, ConfigDict, Field


class Task(BaseModel):
    """A stored task.

    Instances are owned by the TaskStore and mutated in place on update.
    """

    model_config = ConfigDict(validate_assignment=True)

    text: str = Field(..., description="Free-text description")
    done: bool = Field(default=False, description="Completion flag")


class GetTaskResponse(BaseModel):
    """Wire representation of a single task."""

    text: str
    done: bool

    @classmethod
    def from_task(cls, task: Task) -> "GetTaskResponse":
        return cls(text=task.text, done=task.done)


class UpdateTaskRequest(BaseModel):
    """Request body for POST /task and UPDATE /task/{id}.

    Both fields are optional. A field that is absent or null means
    "leave unchanged"; POST additionally requires ``text``.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    text: str | None = None
    done: bool | None = None
