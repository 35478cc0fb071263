"""Tests for settings and the generation policy they produce."""
from dtogen.core.config import Settings
from dtogen.generators.dto_gen.types import DEFAULT_POLICY, DuplicatePolicy, GenerationPolicy


def test_default_policy_matches_settings_defaults(monkeypatch):
    for name in ("DTOGEN_RELATIONS_REQUIRED", "DTOGEN_SKIP_RELATION_BACKING_PROPERTY", "DTOGEN_DUPLICATE_POLICY"):
        monkeypatch.delenv(name, raising=False)
    assert Settings().policy() == DEFAULT_POLICY


def test_policy_from_environment(monkeypatch):
    monkeypatch.setenv("DTOGEN_RELATIONS_REQUIRED", "false")
    monkeypatch.setenv("DTOGEN_DUPLICATE_POLICY", "first_wins")
    monkeypatch.setenv("DTOGEN_EXCLUDED_FIELDS", '["id"]')
    settings = Settings()
    assert settings.policy() == GenerationPolicy(
        relations_required=False,
        skip_relation_backing_property=True,
        duplicate_policy=DuplicatePolicy.FIRST_WINS,
    )
    assert settings.excluded_fields == ["id"]
