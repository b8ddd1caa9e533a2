from pydantic import BaseModel, ConfigDict, ValidationError
from typing import Any, Optional

class BaseGolfModel(BaseModel):
    """Models the user can edit before play. Assignments are validated; names are trimmed."""
    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    def update_field(self, field_name: str, value: Any) -> Optional[str]:
        """Apply one user edit. Returns the validation message, or None on success.

        On failure the previous value is retained.
        """
        try:
            setattr(self, field_name, value)
            return None
        except ValidationError as e:
            return e.errors()[0]['msg']
