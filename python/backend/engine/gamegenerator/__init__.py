from backend.engine.gamegenerator.generator import (
    INFINITE,
    FurthestState,
    GameGenerator,
    GenerationParams,
    GenerationResult,
    GeneratorConfig,
    difficulty_for_level,
)
from backend.engine.gamegenerator.gradient import GradientPoint, gradient

__all__ = [
    "INFINITE",
    "FurthestState",
    "GameGenerator",
    "GenerationParams",
    "GenerationResult",
    "GeneratorConfig",
    "GradientPoint",
    "difficulty_for_level",
    "gradient",
]
