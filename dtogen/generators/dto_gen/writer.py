"""File writer for DTO generation."""
from pathlib import Path
from typing import List
from dtogen.generators.dto_gen.types import GeneratedFile


def write_files(files: List[GeneratedFile], out_dir: Path) -> List[Path]:
    """
    Write generated files to the output directory.

    If any write fails, the files already written by this call are removed
    before the error is re-raised, so an entity never ends up half generated.

    Args:
        files: List of GeneratedFile objects to write
        out_dir: Base output directory path

    Returns:
        Absolute paths of the written files, in input order
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    try:
        for file in files:
            file_path = out_dir / file.path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(file.content, encoding="utf-8")
            written.append(file_path)
    except OSError:
        for path in written:
            path.unlink(missing_ok=True)
        raise
    return written
