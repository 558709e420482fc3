from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel
from typing import Any, Dict, Optional


class BaseGolfModel(BaseModel):
    """Shared configuration and methods.

    Persisted documents use camelCase keys; Python code uses snake_case.
    """
    model_config = ConfigDict(
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def update_field(self, field_name: str, value: Any) -> Optional[str]:
        """Update a field with user correction. Returns error message if validation fails."""
        try:
            setattr(self, field_name, value)
            return None
        except ValidationError as e:
            return e.errors()[0]['msg']

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the JSON document shape stored in the database."""
        return self.model_dump(mode="json", by_alias=True)
