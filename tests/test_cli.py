"""Tests for the generate-dto command line."""
import shutil
import tempfile
from pathlib import Path
from dtogen.cli import (
    EXIT_ALL_SKIPPED,
    EXIT_INVALID_MODULE,
    EXIT_NO_ENTITY_FILES,
    EXIT_OK,
    build_parser,
    main,
    settings_from_args,
)
from dtogen.core.config import Settings
from dtogen.generators.dto_gen.types import DuplicatePolicy

FIXTURE_SRC = Path(__file__).parent / "fixtures" / "fake_nest_app" / "src"


def test_cli_generates_files():
    with tempfile.TemporaryDirectory() as temp_dir:
        src = Path(temp_dir) / "src"
        shutil.copytree(FIXTURE_SRC, src)
        manifest = Path(temp_dir) / "manifest.yaml"

        code = main(["reserva", "--src-dir", str(src), "--manifest", str(manifest)])

        assert code == EXIT_OK
        assert (src / "reserva" / "dto" / "reserva" / "create-reserva.dto.ts").exists()
        assert (src / "reserva" / "dto" / "reserva" / "update-reserva.dto.ts").exists()
        assert "CreateReservaDto" in manifest.read_text(encoding="utf-8")


def test_cli_invalid_module_name():
    assert main(["../oops"]) == EXIT_INVALID_MODULE


def test_cli_no_entity_files():
    with tempfile.TemporaryDirectory() as temp_dir:
        assert main(["cliente", "--src-dir", str(Path(temp_dir) / "missing")]) == EXIT_NO_ENTITY_FILES


def test_cli_all_entities_skipped():
    with tempfile.TemporaryDirectory() as temp_dir:
        entities = Path(temp_dir) / "src" / "helper" / "entities"
        entities.mkdir(parents=True)
        (entities / "helper.entity.ts").write_text("export class Helper {}\n", encoding="utf-8")
        assert main(["helper", "--src-dir", str(Path(temp_dir) / "src"), "--dry-run"]) == EXIT_ALL_SKIPPED


def test_settings_from_args():
    args = build_parser().parse_args([
        "cliente",
        "--relations-optional",
        "--keep-relation-backing-property",
        "--duplicates", "last_wins",
        "--exclude", "id", "createdAt",
    ])
    settings = settings_from_args(args, Settings())
    policy = settings.policy()
    assert policy.relations_required is False
    assert policy.skip_relation_backing_property is False
    assert policy.duplicate_policy == DuplicatePolicy.LAST_WINS
    assert settings.excluded_fields == ["id", "createdAt"]


def test_settings_from_args_keeps_defaults():
    args = build_parser().parse_args(["cliente"])
    base = Settings()
    assert settings_from_args(args, base) == base
