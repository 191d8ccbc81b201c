"""
Shared base for decoded GitHub records
"""

from typing import Any, Dict

from pydantic import BaseModel


class GitHubModel(BaseModel):
    """Base for every decoded GitHub record"""

    class Config:
        populate_by_name = True
        extra = "ignore"

    def to_json_dict(self) -> Dict[str, Any]:
        """Serialize with GitHub's key names, leaving out absent fields"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
