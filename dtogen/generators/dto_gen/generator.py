"""Orchestrator for per-entity DTO generation."""
import logging
from pathlib import Path
from typing import Iterable, Optional

from dtogen.core.errors import NoFieldsExtracted
from dtogen.core.workflow import GenerationStage
from dtogen.generators.dto_gen.extractor import extract_fields
from dtogen.generators.dto_gen.mapper import map_fields
from dtogen.generators.dto_gen.render import (
    DEFAULT_PARTIAL_TYPE_PACKAGE,
    render_create_dto,
    render_update_dto,
)
from dtogen.generators.dto_gen.types import (
    DEFAULT_POLICY,
    EntityDtos,
    GeneratedFile,
    GenerationPolicy,
)
from dtogen.generators.dto_gen.utils import (
    dto_class_names,
    dto_file_names,
    entity_base_name,
)
from dtogen.generators.dto_gen.writer import write_files

log = logging.getLogger(__name__)


def build_entity_dtos(
    entity_name: str,
    source: str,
    policy: GenerationPolicy = DEFAULT_POLICY,
    excluded_fields: Iterable[str] = (),
    partial_type_package: str = DEFAULT_PARTIAL_TYPE_PACKAGE,
) -> EntityDtos:
    """
    Build the create/update DTOs for one entity without touching the disk.

    Args:
        entity_name: Entity base name (e.g. "cliente" for cliente.entity.ts)
        source: Full text of the entity declaration
        policy: Extraction and mapping defaults
        excluded_fields: Field names left out of the DTOs
        partial_type_package: Package the update DTO imports PartialType from

    Returns:
        EntityDtos with mapped fields and files relative to the dto directory

    Raises:
        NoFieldsExtracted: if no field survives extraction and exclusion
    """
    ctx = {"entity": entity_name, "stage": GenerationStage.EXTRACT.value}
    raw_fields = extract_fields(source, policy)
    excluded = set(excluded_fields)
    if excluded:
        raw_fields = [f for f in raw_fields if f.name not in excluded]
    if not raw_fields:
        raise NoFieldsExtracted(entity_name)
    log.debug("Extracted %d fields", len(raw_fields), extra=ctx)

    fields = map_fields(raw_fields, policy)
    log.debug("Mapped %d fields", len(fields), extra={**ctx, "stage": GenerationStage.MAP.value})

    create_class, update_class = dto_class_names(entity_name)
    create_file, update_file = dto_file_names(entity_name)
    create_module = create_file[: -len(".ts")]

    files = [
        GeneratedFile(
            path=f"{entity_name}/{create_file}",
            content=render_create_dto(create_class, fields),
        ),
        GeneratedFile(
            path=f"{entity_name}/{update_file}",
            content=render_update_dto(update_class, create_class, create_module, partial_type_package),
        ),
    ]
    log.debug("Rendered %s and %s", create_class, update_class, extra={**ctx, "stage": GenerationStage.RENDER.value})
    return EntityDtos(
        entity_name=entity_name,
        create_class=create_class,
        update_class=update_class,
        fields=fields,
        files=files,
    )


def dto_dir_for(entity_file: Path) -> Path:
    """DTOs live in a `dto` directory beside the entity directory."""
    return entity_file.parent.parent / "dto"


def generate_entity_dtos(
    entity_file: Path,
    policy: GenerationPolicy = DEFAULT_POLICY,
    excluded_fields: Iterable[str] = (),
    partial_type_package: str = DEFAULT_PARTIAL_TYPE_PACKAGE,
    dry_run: bool = False,
    out_dir: Optional[Path] = None,
) -> EntityDtos:
    """
    Read an entity file, build its DTOs and write them under the dto directory.

    Nothing is written when dry_run is set; output_dir is still filled in.
    """
    entity_name = entity_base_name(entity_file)
    source = entity_file.read_text(encoding="utf-8")
    dtos = build_entity_dtos(entity_name, source, policy, excluded_fields, partial_type_package)

    target = out_dir if out_dir is not None else dto_dir_for(entity_file)
    dtos.output_dir = str(target / entity_name)
    if dry_run:
        log.info("Dry run, not writing %d files", len(dtos.files),
                 extra={"entity": entity_name, "stage": GenerationStage.WRITE.value})
        return dtos

    for path in write_files(dtos.files, target):
        log.info("Wrote %s", path, extra={"entity": entity_name, "stage": GenerationStage.WRITE.value})
    return dtos
