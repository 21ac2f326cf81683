"""Unit tests for task models."""

import pytest
from pydantic import ValidationError

from task_service.models import GetTaskResponse, Task, UpdateTaskRequest


class TestTask:
    """Tests for Task model."""

    def test_defaults_not_done(self) -> None:
        """Test new tasks are not done."""
        assert Task(text="x").done is False

    def test_assignment_validated(self) -> None:
        """Test in-place mutation keeps field types."""
        task = Task(text="x")

        with pytest.raises(ValidationError):
            task.text = None  # type: ignore[assignment]


class TestGetTaskResponse:
    """Tests for GetTaskResponse model."""

    def test_from_task(self) -> None:
        """Test the response carries exactly text and done."""
        response = GetTaskResponse.from_task(Task(text="buy milk", done=True))

        assert response.model_dump() == {"text": "buy milk", "done": True}


class TestUpdateTaskRequest:
    """Tests for UpdateTaskRequest parsing."""

    def test_empty_object(self) -> None:
        """Test both fields are optional."""
        request = UpdateTaskRequest.model_validate_json("{}")

        assert request.text is None
        assert request.done is None

    def test_nulls(self) -> None:
        """Test explicit nulls parse like absent fields."""
        request = UpdateTaskRequest.model_validate_json('{"text": null, "done": null}')

        assert request == UpdateTaskRequest()

    def test_extra_fields_ignored(self) -> None:
        """Test unknown fields are dropped."""
        request = UpdateTaskRequest.model_validate_json('{"text": "a", "tags": ["x"]}')

        assert request.text == "a"
        assert not hasattr(request, "tags")

    def test_string_bool_rejected(self) -> None:
        """Test done must be a JSON boolean."""
        with pytest.raises(ValidationError):
            UpdateTaskRequest.model_validate_json('{"done": "true"}')

    def test_number_text_rejected(self) -> None:
        """Test text must be a JSON string."""
        with pytest.raises(ValidationError):
            UpdateTaskRequest.model_validate_json('{"text": 1}')

    def test_not_an_object(self) -> None:
        """Test non-object bodies are rejected."""
        with pytest.raises(ValidationError):
            UpdateTaskRequest.model_validate_json("[]")

    def test_invalid_json(self) -> None:
        """Test malformed JSON is reported as a validation error."""
        with pytest.raises(ValidationError):
            UpdateTaskRequest.model_validate_json("{")
