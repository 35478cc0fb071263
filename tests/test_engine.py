"""Tests for the per-module generation engine."""
import shutil
import tempfile
import pytest
import yaml
from pathlib import Path
from dtogen.core.config import Settings
from dtogen.core.engine import GenerationEngine
from dtogen.core.errors import NoEntityFilesFound
from dtogen.generators.dto_gen.manifest import render_manifest, write_manifest

FIXTURE_SRC = Path(__file__).parent / "fixtures" / "fake_nest_app" / "src"


def copy_fixture(temp_dir: str) -> Path:
    src = Path(temp_dir) / "src"
    shutil.copytree(FIXTURE_SRC, src)
    return src


class TestGenerationEngine:
    def test_generates_and_skips(self):
        """cliente has one real entity and one helper file without fields."""
        with tempfile.TemporaryDirectory() as temp_dir:
            src = copy_fixture(temp_dir)
            engine = GenerationEngine(settings=Settings(src_dir=str(src)))
            report = engine.run("cliente")

            assert [d.entity_name for d in report.generated] == ["cliente"]
            assert [s.entity_name for s in report.skipped] == ["audit-log"]
            assert report.skipped[0].reason == "no fields extracted"
            assert report.ok

            dto_dir = src / "cliente" / "dto" / "cliente"
            create = (dto_dir / "create-cliente.dto.ts").read_text(encoding="utf-8")
            update = (dto_dir / "update-cliente.dto.ts").read_text(encoding="utf-8")
            assert "export class CreateClienteDto {" in create
            assert "reservaIds: number[];" in create
            assert "email?: string;" in create
            assert "export class UpdateClienteDto extends PartialType(CreateClienteDto) {}" in update
            assert not (src / "cliente" / "dto" / "audit-log").exists()

    def test_failed_write_leaves_no_partial_dtos(self):
        """If the update DTO cannot be written, the create DTO is removed too."""
        with tempfile.TemporaryDirectory() as temp_dir:
            src = copy_fixture(temp_dir)
            dto_dir = src / "reserva" / "dto" / "reserva"
            # A directory where the update file should go makes its write fail
            (dto_dir / "update-reserva.dto.ts").mkdir(parents=True)

            report = GenerationEngine(settings=Settings(src_dir=str(src))).run("reserva")

            assert report.generated == []
            assert [s.entity_name for s in report.skipped] == ["reserva"]
            assert not (dto_dir / "create-reserva.dto.ts").exists()

    def test_dry_run_writes_nothing(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            src = copy_fixture(temp_dir)
            report = GenerationEngine(settings=Settings(src_dir=str(src)), dry_run=True).run("reserva")
            assert len(report.generated) == 1
            assert report.generated[0].output_dir == str(src / "reserva" / "dto" / "reserva")
            assert not (src / "reserva" / "dto").exists()

    def test_excluded_fields_from_settings(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            src = copy_fixture(temp_dir)
            settings = Settings(src_dir=str(src), excluded_fields=["id", "created_at"])
            report = GenerationEngine(settings=settings, dry_run=True).run("cliente")
            names = [f.name for f in report.generated[0].fields]
            assert "id" not in names
            assert "created_at" not in names

    def test_no_entity_files_propagates(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            with pytest.raises(NoEntityFilesFound):
                GenerationEngine(settings=Settings(src_dir=str(Path(temp_dir) / "src"))).run("cliente")

    def test_unreadable_entity_does_not_abort_batch(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            src = copy_fixture(temp_dir)
            (src / "cliente" / "entities" / "broken.entity.ts").write_bytes(b"\xff\xfe\x00bad: string;")
            report = GenerationEngine(settings=Settings(src_dir=str(src)), dry_run=True).run("cliente")
            assert [d.entity_name for d in report.generated] == ["cliente"]
            assert sorted(s.entity_name for s in report.skipped) == ["audit-log", "broken"]


class TestManifest:
    def test_manifest_contents(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            src = copy_fixture(temp_dir)
            report = GenerationEngine(settings=Settings(src_dir=str(src)), dry_run=True).run("reserva")
            manifest = yaml.safe_load(render_manifest(report))

            assert manifest["module"] == "reserva"
            entity = manifest["entities"][0]
            assert entity["createDto"] == "CreateReservaDto"
            cliente_id = next(f for f in entity["fields"] if f["name"] == "clienteId")
            assert cliente_id == {
                "name": "clienteId",
                "type": "number",
                "isArray": False,
                "required": True,
                "relation": True,
                "rules": ["IsNumber", "NumericRelationCoercion"],
                "presence": "IsNotEmpty",
            }
            assert manifest["skipped"] == []

    def test_write_manifest(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            src = copy_fixture(temp_dir)
            report = GenerationEngine(settings=Settings(src_dir=str(src)), dry_run=True).run("reserva")
            path = write_manifest(report, Path(temp_dir) / "out" / "manifest.yaml")
            assert path.exists()
            assert "CreateReservaDto" in path.read_text(encoding="utf-8")
