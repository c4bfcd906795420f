"""Pydantic request bodies.

Bodies are validated strictly at the HTTP boundary: unknown fields and
missing required fields are rejected instead of being zero-filled.
"""

from pydantic import BaseModel, Field, ValidationError

from memory_casino.errors import ValidationFailed


class CreatePlayerRequest(BaseModel):
    """POST /players"""
    name: str = Field(min_length=1, max_length=64, description="Display name")

    model_config = {"extra": "forbid", "str_strip_whitespace": True}


def parse_body(model, data):
    """Validate a decoded JSON body, raising ValidationFailed on any problem."""
    if not isinstance(data, dict):
        raise ValidationFailed('Request body must be a JSON object')
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        details = [
            {'field': '.'.join(str(p) for p in err['loc']), 'message': err['msg']}
            for err in exc.errors()
        ]
        raise ValidationFailed('Invalid request body', details=details) from None
