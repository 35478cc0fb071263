"""Simple string templates for NestJS DTO generation (Jinja2-free)."""
from typing import Dict, Iterable, List, Set

from dtogen.generators.dto_gen.types import (
    CanonicalType,
    DtoFieldSpec,
    PresenceRule,
    ValidationRule,
)

DEFAULT_PARTIAL_TYPE_PACKAGE = "@nestjs/mapped-types"

TS_TYPES = {
    CanonicalType.STRING: "string",
    CanonicalType.NUMBER: "number",
    CanonicalType.BOOLEAN: "boolean",
    CanonicalType.DATE: "Date",
    CanonicalType.ARRAY: "any[]",
    CanonicalType.ANY: "any",
}

VALIDATOR_DECORATORS = {
    ValidationRule.IS_STRING: "IsString",
    ValidationRule.IS_NUMBER: "IsNumber",
    ValidationRule.IS_POSITIVE: "IsPositive",
    ValidationRule.IS_BOOLEAN: "IsBoolean",
    ValidationRule.IS_DATE: "IsDate",
    ValidationRule.IS_ARRAY: "IsArray",
}


def ts_type(field: DtoFieldSpec) -> str:
    """TypeScript type for a field; array-valued relations become `number[]`."""
    base = TS_TYPES[field.canonical_type]
    if field.is_array and field.canonical_type != CanonicalType.ARRAY:
        return f"{base}[]"
    return base


def _validator_decorator(name: str, each: bool) -> str:
    if not each:
        return f"@{name}()"
    # IsNumber takes its number options first
    if name == "IsNumber":
        return "@IsNumber({}, { each: true })"
    return f"@{name}({{ each: true }})"


def render_field(field: DtoFieldSpec, imports: Dict[str, Set[str]]) -> List[str]:
    """Render the decorator and property lines of one field, recording the imports it needs."""
    lines = []
    swagger = "ApiProperty" if field.required else "ApiPropertyOptional"
    imports["@nestjs/swagger"].add(swagger)
    lines.append(f"@{swagger}()")

    imports["class-validator"].add(field.presence_rule.value)
    lines.append(f"@{field.presence_rule.value}()")

    each = field.is_array and field.canonical_type != CanonicalType.ARRAY
    if each:
        imports["class-validator"].add("IsArray")
        lines.append("@IsArray()")

    for rule in field.validation_rules:
        if rule == ValidationRule.NUMERIC_RELATION_COERCION:
            imports["class-transformer"].add("Type")
            lines.append("@Type(() => Number)")
            continue
        name = VALIDATOR_DECORATORS[rule]
        imports["class-validator"].add(name)
        lines.append(_validator_decorator(name, each))

    if field.canonical_type == CanonicalType.DATE:
        imports["class-transformer"].add("Type")
        lines.append("@Type(() => Date)")

    marker = "?" if field.presence_rule == PresenceRule.IS_OPTIONAL else ""
    lines.append(f"{field.name}{marker}: {ts_type(field)};")
    return lines


def render_imports(imports: Dict[str, Set[str]]) -> List[str]:
    lines = []
    for package in sorted(imports):
        names = sorted(imports[package])
        if names:
            lines.append(f"import {{ {', '.join(names)} }} from '{package}';")
    return lines


def render_create_dto(class_name: str, fields: Iterable[DtoFieldSpec]) -> str:
    """Generate the create DTO class with one validated property per field."""
    imports: Dict[str, Set[str]] = {
        "@nestjs/swagger": set(),
        "class-transformer": set(),
        "class-validator": set(),
    }
    blocks = []
    for field in fields:
        blocks.append("\n".join(f"  {line}" for line in render_field(field, imports)))

    lines = render_imports(imports)
    lines.append("")
    lines.append(f"export class {class_name} {{")
    lines.append("\n\n".join(blocks))
    lines.append("}")
    return "\n".join(lines) + "\n"


def render_update_dto(
    class_name: str,
    create_class_name: str,
    create_module: str,
    partial_type_package: str = DEFAULT_PARTIAL_TYPE_PACKAGE,
) -> str:
    """Generate the update DTO as a partial view of the create DTO."""
    return (
        f"import {{ PartialType }} from '{partial_type_package}';\n"
        f"import {{ {create_class_name} }} from './{create_module}';\n"
        "\n"
        f"export class {class_name} extends PartialType({create_class_name}) {{}}\n"
    )
