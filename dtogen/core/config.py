from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from dtogen.generators.dto_gen.types import DuplicatePolicy, GenerationPolicy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="DTOGEN_", extra="ignore")

    app_name: str = "entity-dto-generator"
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    log_level: str = "INFO"

    src_dir: str = "src"

    relations_required: bool = True
    skip_relation_backing_property: bool = True
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.KEEP_ALL
    excluded_fields: List[str] = []
    partial_type_package: str = "@nestjs/mapped-types"

    def policy(self) -> GenerationPolicy:
        return GenerationPolicy(
            relations_required=self.relations_required,
            skip_relation_backing_property=self.skip_relation_backing_property,
            duplicate_policy=self.duplicate_policy,
        )

settings = Settings()
