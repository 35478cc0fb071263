import logging
from fastapi import APIRouter, HTTPException
from dtogen.core.config import settings
from dtogen.core.errors import NoFieldsExtracted
from dtogen.core.workflow import GenerationStage
from dtogen.generators.dto_gen import build_entity_dtos
from dtogen.schemas.dtos import (
    DtoFieldResponse,
    DtoPreviewRequest,
    DtoPreviewResponse,
    GeneratedFileResponse,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/dtos")

@router.post("/preview", response_model=DtoPreviewResponse)
def preview_dtos(req: DtoPreviewRequest):
    overrides = {
        key: value
        for key, value in req.model_dump(include={
            "relations_required", "skip_relation_backing_property", "duplicate_policy", "excluded_fields",
        }).items()
        if value is not None
    }
    effective = settings.model_copy(update=overrides)
    try:
        dtos = build_entity_dtos(
            req.entity_name,
            req.source,
            policy=effective.policy(),
            excluded_fields=effective.excluded_fields,
            partial_type_package=effective.partial_type_package,
        )
    except NoFieldsExtracted as e:
        log.warning("Preview produced no fields", extra={"entity": req.entity_name, "stage": GenerationStage.EXTRACT.value})
        raise HTTPException(status_code=422, detail=str(e))

    return DtoPreviewResponse(
        entity_name=dtos.entity_name,
        create_class=dtos.create_class,
        update_class=dtos.update_class,
        fields=[
            DtoFieldResponse(
                name=f.name,
                canonical_type=f.canonical_type,
                is_array=f.is_array,
                required=f.required,
                is_relation=f.is_relation,
                validation_rules=list(f.validation_rules),
                presence_rule=f.presence_rule,
            )
            for f in dtos.fields
        ],
        files=[GeneratedFileResponse(path=f.path, content=f.content) for f in dtos.files],
    )
