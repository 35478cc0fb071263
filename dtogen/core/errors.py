"""Error types raised at the generation boundaries."""
from pathlib import Path


class DtoGenError(Exception):
    """Base class for generator errors."""


class NoFieldsExtracted(DtoGenError):
    """An entity declaration produced no recognizable fields."""
    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"No properties parsed from entity '{entity}'")


class NoEntityFilesFound(DtoGenError):
    def __init__(self, module: str, src_dir: Path):
        self.module = module
        self.src_dir = src_dir
        super().__init__(f"Could not find any entity file for module '{module}' under {src_dir}")


class InvalidModuleName(DtoGenError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid module name: {name!r}")
