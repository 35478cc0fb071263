from dtogen.generators.dto_gen.generator import build_entity_dtos, generate_entity_dtos

__all__ = ["build_entity_dtos", "generate_entity_dtos"]
