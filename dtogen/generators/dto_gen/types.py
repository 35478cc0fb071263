"""Dataclasses and enums for DTO generation."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class CanonicalType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ARRAY = "array"
    ANY = "any"


class ValidationRule(str, Enum):
    IS_STRING = "IsString"
    IS_NUMBER = "IsNumber"
    IS_POSITIVE = "IsPositive"
    IS_BOOLEAN = "IsBoolean"
    IS_DATE = "IsDate"
    IS_ARRAY = "IsArray"
    NUMERIC_RELATION_COERCION = "NumericRelationCoercion"


class PresenceRule(str, Enum):
    IS_OPTIONAL = "IsOptional"
    IS_NOT_EMPTY = "IsNotEmpty"


class DuplicatePolicy(str, Enum):
    """How repeated field names within one entity are resolved."""
    KEEP_ALL = "keep_all"
    FIRST_WINS = "first_wins"
    LAST_WINS = "last_wins"


@dataclass(frozen=True)
class GenerationPolicy:
    """Defaults applied while extracting and mapping fields."""
    relations_required: bool = True
    skip_relation_backing_property: bool = True
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.KEEP_ALL


DEFAULT_POLICY = GenerationPolicy()


@dataclass(frozen=True)
class RawField:
    """One entity field as extracted from declaration text."""
    name: str
    declared_type: str = ""
    is_relation: bool = False
    is_array: bool = False
    source_optional: bool = False


@dataclass(frozen=True)
class DtoFieldSpec:
    """Renderer-ready form of one field."""
    name: str
    canonical_type: CanonicalType
    is_array: bool
    required: bool
    validation_rules: Tuple[ValidationRule, ...]
    presence_rule: PresenceRule
    is_relation: bool = False


@dataclass
class GeneratedFile:
    """Represents a generated file."""
    path: str  # Relative to the output directory
    content: str


@dataclass
class EntityDtos:
    """Everything produced for one entity declaration."""
    entity_name: str
    create_class: str
    update_class: str
    fields: List[DtoFieldSpec] = field(default_factory=list)
    files: List[GeneratedFile] = field(default_factory=list)
    output_dir: Optional[str] = None  # None until written
