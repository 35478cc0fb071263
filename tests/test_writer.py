"""Tests for the generated file writer."""
import tempfile
import pytest
from pathlib import Path
from dtogen.generators.dto_gen.types import GeneratedFile
from dtogen.generators.dto_gen.writer import write_files


def test_write_files_creates_parents():
    with tempfile.TemporaryDirectory() as temp_dir:
        out_dir = Path(temp_dir) / "dto"
        written = write_files([GeneratedFile(path="cliente/create-cliente.dto.ts", content="x\n")], out_dir)
        assert written == [out_dir / "cliente" / "create-cliente.dto.ts"]
        assert written[0].read_text(encoding="utf-8") == "x\n"


def test_write_files_rolls_back_on_error():
    with tempfile.TemporaryDirectory() as temp_dir:
        out_dir = Path(temp_dir) / "dto"
        (out_dir / "cliente" / "update-cliente.dto.ts").mkdir(parents=True)
        files = [
            GeneratedFile(path="cliente/create-cliente.dto.ts", content="create\n"),
            GeneratedFile(path="cliente/update-cliente.dto.ts", content="update\n"),
        ]
        with pytest.raises(OSError):
            write_files(files, out_dir)
        assert not (out_dir / "cliente" / "create-cliente.dto.ts").exists(), \
            "Files written before the failure should be removed"
