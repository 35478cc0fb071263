"""
Locates TypeORM entity files for a module.
Looks in the module's entities/ (or entity/) directory first, then walks the whole source tree.
"""
import logging
import os
import re
from pathlib import Path
from typing import List

from dtogen.core.errors import InvalidModuleName, NoEntityFilesFound
from dtogen.core.workflow import GenerationStage
from dtogen.generators.dto_gen.utils import ENTITY_SUFFIX, to_kebab_case

log = logging.getLogger(__name__)

# Directories to ignore
IGNORE_DIRS = {"node_modules", ".next", "dist", "build", ".git", "coverage"}

MODULE_NAME_PATTERN = re.compile(r'^[A-Za-z][A-Za-z0-9_-]*$')

CANDIDATE_DIRS = ("entities", "entity")


def validate_module_name(name: str) -> str:
    """Return the kebab-case module directory name, or raise InvalidModuleName."""
    if not name or not MODULE_NAME_PATTERN.match(name):
        raise InvalidModuleName(name)
    return to_kebab_case(name)


def _entity_files_in(directory: Path) -> List[Path]:
    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.name.endswith(ENTITY_SUFFIX)
    )


def walk_entity_files(src_dir: Path) -> List[Path]:
    """Recursively collect every *.entity.ts under src_dir, skipping ignored directories."""
    results = []
    for root, dirs, files in os.walk(src_dir):
        dirs[:] = sorted(d for d in dirs if d not in IGNORE_DIRS)
        for name in sorted(files):
            if name.endswith(ENTITY_SUFFIX):
                results.append(Path(root) / name)
    return results


def find_entity_files(src_dir: Path, module_name: str) -> List[Path]:
    """
    Find entity files for a module.

    Args:
        src_dir: Source root (usually <project>/src)
        module_name: Module name as typed by the user (camelCase or kebab-case)

    Returns:
        Sorted list of entity file paths

    Raises:
        InvalidModuleName: if module_name is empty or not identifier-like
        NoEntityFilesFound: if neither the module directories nor the tree walk yield files
    """
    module_dir = validate_module_name(module_name)
    ctx = {"entity": "-", "stage": GenerationStage.DISCOVER.value}

    if not src_dir.is_dir():
        raise NoEntityFilesFound(module_name, src_dir)

    for candidate in CANDIDATE_DIRS:
        directory = src_dir / module_dir / candidate
        if directory.is_dir():
            files = _entity_files_in(directory)
            if files:
                log.info("Found %d entity files in %s", len(files), directory, extra=ctx)
                return files

    log.warning("No entities directory for module '%s', scanning %s", module_name, src_dir, extra=ctx)
    files = walk_entity_files(src_dir)
    if not files:
        raise NoEntityFilesFound(module_name, src_dir)
    return files
