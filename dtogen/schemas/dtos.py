from pydantic import BaseModel, Field
from typing import List, Optional
from dtogen.generators.dto_gen.types import CanonicalType, DuplicatePolicy, PresenceRule, ValidationRule


class DtoPreviewRequest(BaseModel):
    entity_name: str = Field(..., min_length=1, examples=["cliente"])
    source: str = Field(..., examples=["id: number;\nname: string;\ncreated_at: Date;"])
    relations_required: Optional[bool] = None
    skip_relation_backing_property: Optional[bool] = None
    duplicate_policy: Optional[DuplicatePolicy] = None
    excluded_fields: Optional[List[str]] = None


class DtoFieldResponse(BaseModel):
    name: str
    canonical_type: CanonicalType
    is_array: bool
    required: bool
    is_relation: bool
    validation_rules: List[ValidationRule]
    presence_rule: PresenceRule


class GeneratedFileResponse(BaseModel):
    path: str
    content: str


class DtoPreviewResponse(BaseModel):
    entity_name: str
    create_class: str
    update_class: str
    fields: List[DtoFieldResponse]
    files: List[GeneratedFileResponse]
