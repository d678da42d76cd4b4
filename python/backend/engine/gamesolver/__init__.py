from backend.engine.gamesolver.solver import Solver, UnsolvableError

__all__ = ["Solver", "UnsolvableError"]
