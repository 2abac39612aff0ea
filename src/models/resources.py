"""
Free-form record models for the resource collections

Every field is optional. Only fields present in the request body are stored,
so a replace with a subset of fields leaves the others absent.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

class ResourcePayload(BaseModel):
    """Base class for create/replace bodies; unknown fields are dropped"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)

class ClothPayload(ResourcePayload):
    image: Optional[Any] = None
    category: Optional[Any] = None
    title: Optional[Any] = None
    size: Optional[Any] = None
    description: Optional[Any] = None

class TestimonialPayload(ResourcePayload):
    image: Optional[Any] = None
    name: Optional[Any] = None
    location: Optional[Any] = None
    contribution_date: Optional[Any] = Field(default=None, alias="contributionDate")
    description: Optional[Any] = None

class CommentPayload(ResourcePayload):
    name: Optional[Any] = None
    description: Optional[Any] = None
