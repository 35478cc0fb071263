"""YAML manifest describing what a generation run produced."""
from pathlib import Path
from typing import Any, Dict, List

import yaml

from dtogen.generators.dto_gen.types import DtoFieldSpec, EntityDtos


def field_to_dict(field: DtoFieldSpec) -> Dict[str, Any]:
    return {
        "name": field.name,
        "type": field.canonical_type.value,
        "isArray": field.is_array,
        "required": field.required,
        "relation": field.is_relation,
        "rules": [rule.value for rule in field.validation_rules],
        "presence": field.presence_rule.value,
    }


def entity_to_dict(dtos: EntityDtos) -> Dict[str, Any]:
    return {
        "name": dtos.entity_name,
        "createDto": dtos.create_class,
        "updateDto": dtos.update_class,
        "outputDir": dtos.output_dir,
        "files": [f.path for f in dtos.files],
        "fields": [field_to_dict(f) for f in dtos.fields],
    }


def build_manifest(report) -> Dict[str, Any]:
    """Plain-data view of a GenerationReport."""
    skipped: List[Dict[str, str]] = [
        {"name": s.entity_name, "sourcePath": s.source_path, "reason": s.reason}
        for s in report.skipped
    ]
    return {
        "module": report.module_name,
        "entityFiles": list(report.entity_files),
        "entities": [entity_to_dict(d) for d in report.generated],
        "skipped": skipped,
    }


def render_manifest(report) -> str:
    return yaml.dump(build_manifest(report), default_flow_style=False, sort_keys=False, allow_unicode=True)


def write_manifest(report, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_manifest(report), encoding="utf-8")
    return path
