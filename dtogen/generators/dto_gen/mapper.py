"""Maps extracted entity fields to DTO field specifications."""
import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Tuple

from dtogen.generators.dto_gen.types import (
    DEFAULT_POLICY,
    CanonicalType,
    DtoFieldSpec,
    GenerationPolicy,
    PresenceRule,
    RawField,
    ValidationRule,
)
from dtogen.generators.dto_gen.utils import is_array_type

_GENERIC_ARGS = re.compile(r'<.*>')


def _pattern(regex: str) -> Callable[[str], bool]:
    compiled = re.compile(regex, re.IGNORECASE)
    return lambda declared_type: bool(compiled.search(_GENERIC_ARGS.sub("", declared_type)))


@dataclass(frozen=True)
class TypeRule:
    """One row of the canonicalization table: first predicate that accepts the type wins."""
    name: str
    predicate: Callable[[str], bool]
    result: CanonicalType


CANONICAL_TYPE_RULES: List[TypeRule] = [
    TypeRule("array", is_array_type, CanonicalType.ARRAY),
    TypeRule("string", _pattern(r'string|varchar|text'), CanonicalType.STRING),
    TypeRule("number", _pattern(r'number|int|decimal|float|double|numeric|smallint|bigint'), CanonicalType.NUMBER),
    TypeRule("boolean", _pattern(r'boolean|true|false'), CanonicalType.BOOLEAN),
    TypeRule("date", _pattern(r'date|datetime|timestamp'), CanonicalType.DATE),
]

BASE_RULES = {
    CanonicalType.STRING: ValidationRule.IS_STRING,
    CanonicalType.NUMBER: ValidationRule.IS_NUMBER,
    CanonicalType.BOOLEAN: ValidationRule.IS_BOOLEAN,
    CanonicalType.DATE: ValidationRule.IS_DATE,
    CanonicalType.ARRAY: ValidationRule.IS_ARRAY,
}


def canonicalize(raw: RawField) -> CanonicalType:
    """Reduce a declared type to its canonical type; unrecognized types become ANY."""
    if raw.is_relation:
        return CanonicalType.NUMBER
    for rule in CANONICAL_TYPE_RULES:
        if rule.predicate(raw.declared_type):
            return rule.result
    return CanonicalType.ANY


def is_required(raw: RawField, policy: GenerationPolicy = DEFAULT_POLICY) -> bool:
    if raw.is_relation:
        return policy.relations_required
    return not raw.source_optional


def select_rules(
    canonical_type: CanonicalType, required: bool, is_array: bool, is_relation: bool
) -> Tuple[ValidationRule, ...]:
    rules: List[ValidationRule] = []
    base = BASE_RULES.get(canonical_type)
    if base is not None:
        rules.append(base)
    if is_relation:
        rules.append(ValidationRule.NUMERIC_RELATION_COERCION)
    elif canonical_type == CanonicalType.NUMBER and required and not is_array:
        rules.append(ValidationRule.IS_POSITIVE)
    return tuple(rules)


def map_field(raw: RawField, policy: GenerationPolicy = DEFAULT_POLICY) -> DtoFieldSpec:
    canonical_type = canonicalize(raw)
    is_array = raw.is_array or canonical_type == CanonicalType.ARRAY
    required = is_required(raw, policy)
    return DtoFieldSpec(
        name=raw.name,
        canonical_type=canonical_type,
        is_array=is_array,
        required=required,
        validation_rules=select_rules(canonical_type, required, is_array, raw.is_relation),
        presence_rule=PresenceRule.IS_NOT_EMPTY if required else PresenceRule.IS_OPTIONAL,
        is_relation=raw.is_relation,
    )


def map_fields(fields: Iterable[RawField], policy: GenerationPolicy = DEFAULT_POLICY) -> List[DtoFieldSpec]:
    return [map_field(raw, policy) for raw in fields]
