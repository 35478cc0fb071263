from enum import Enum


class GenerationStage(str, Enum):
    DISCOVER = "DISCOVER"
    EXTRACT = "EXTRACT"
    MAP = "MAP"
    RENDER = "RENDER"
    WRITE = "WRITE"
    DONE = "DONE"
    SKIPPED = "SKIPPED"
