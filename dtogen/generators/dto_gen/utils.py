"""Utility functions for DTO generation."""
import re
from pathlib import Path
from typing import Tuple, Union

ENTITY_SUFFIX = ".entity.ts"

_ARRAY_SUFFIX = re.compile(r'\[\]\s*$')


def lower_first(name: str) -> str:
    """Lower-case the first character only (Client -> client, URLMap -> uRLMap)."""
    return name[:1].lower() + name[1:]


def to_kebab_case(name: str) -> str:
    """Convert PascalCase or camelCase to kebab-case."""
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1-\2', name)
    s2 = re.sub('([a-z0-9])([A-Z])', r'\1-\2', s1)
    return s2.replace('_', '-').lower()


def to_pascal_case(name: str) -> str:
    """Convert kebab-case, snake_case or camelCase to PascalCase."""
    parts = [p for p in re.split(r'[-_\s.]+', name) if p]
    return "".join(p[:1].upper() + p[1:] for p in parts)


def is_array_type(declared_type: str) -> bool:
    """True for `T[]` and `Array<T>` type expressions."""
    return bool(_ARRAY_SUFFIX.search(declared_type)) or "Array<" in declared_type


def entity_base_name(entity_file: Union[str, Path]) -> str:
    """`src/cliente/entities/cliente.entity.ts` -> `cliente`."""
    name = Path(entity_file).name
    if name.endswith(ENTITY_SUFFIX):
        return name[: -len(ENTITY_SUFFIX)]
    return Path(name).stem


def dto_class_names(entity_name: str) -> Tuple[str, str]:
    """Return the (create, update) DTO class names for an entity."""
    class_name = to_pascal_case(entity_name)
    return f"Create{class_name}Dto", f"Update{class_name}Dto"


def dto_file_names(entity_name: str) -> Tuple[str, str]:
    """Return the (create, update) DTO file names for an entity."""
    slug = to_kebab_case(entity_name)
    return f"create-{slug}.dto.ts", f"update-{slug}.dto.ts"
