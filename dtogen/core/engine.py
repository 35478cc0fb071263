from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from dtogen.core.config import Settings, settings as default_settings
from dtogen.core.errors import NoFieldsExtracted
from dtogen.core.workflow import GenerationStage
from dtogen.discovery.entity_files import find_entity_files
from dtogen.generators.dto_gen import generate_entity_dtos
from dtogen.generators.dto_gen.types import EntityDtos
from dtogen.generators.dto_gen.utils import entity_base_name

log = logging.getLogger(__name__)


@dataclass
class SkippedEntity:
    entity_name: str
    source_path: str
    reason: str


@dataclass
class GenerationReport:
    module_name: str
    entity_files: List[str] = field(default_factory=list)
    generated: List[EntityDtos] = field(default_factory=list)
    skipped: List[SkippedEntity] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.generated)


class GenerationEngine:
    def __init__(self, settings: Optional[Settings] = None, dry_run: bool = False):
        self.settings = settings or default_settings
        self.policy = self.settings.policy()
        self.dry_run = dry_run

    def _generate_one(self, entity_file: Path, report: GenerationReport) -> None:
        entity_name = entity_base_name(entity_file)
        ctx = {"entity": entity_name, "stage": GenerationStage.EXTRACT.value}
        try:
            dtos = generate_entity_dtos(
                entity_file,
                policy=self.policy,
                excluded_fields=self.settings.excluded_fields,
                partial_type_package=self.settings.partial_type_package,
                dry_run=self.dry_run,
            )
        except NoFieldsExtracted:
            log.warning("No properties parsed from entity file %s, skipping", entity_file,
                        extra={**ctx, "stage": GenerationStage.SKIPPED.value})
            report.skipped.append(SkippedEntity(entity_name, str(entity_file), "no fields extracted"))
            return
        except (OSError, UnicodeDecodeError) as e:
            log.error("Could not process entity file %s: %s", entity_file, e,
                      extra={**ctx, "stage": GenerationStage.SKIPPED.value})
            report.skipped.append(SkippedEntity(entity_name, str(entity_file), str(e)))
            return

        log.info("DTOs generated (%d fields)", len(dtos.fields),
                 extra={**ctx, "stage": GenerationStage.DONE.value})
        report.generated.append(dtos)

    def run(self, module_name: str, src_dir: Optional[Path] = None) -> GenerationReport:
        """
        Discover the module's entity files and generate DTOs for each one.

        InvalidModuleName and NoEntityFilesFound propagate; per-entity failures are
        recorded in the report and never stop the batch.
        """
        src_dir = Path(src_dir or self.settings.src_dir)
        log.info("Discovering entities for module '%s'", module_name,
                 extra={"entity": "-", "stage": GenerationStage.DISCOVER.value})
        entity_files = find_entity_files(src_dir, module_name)

        report = GenerationReport(module_name=module_name, entity_files=[str(p) for p in entity_files])
        for entity_file in entity_files:
            self._generate_one(entity_file, report)
        return report
