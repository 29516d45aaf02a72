"""Board configuration held by each Board instead of module-level globals."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

DEFAULT_DIMENSION = 4
MAX_DIMENSION = 16

# A uniform pick over (1, 1, 2) is floor(uniform{0, 1, 2} / 2) + 1:
# value 1 two times in three, value 2 one time in three.
DEFAULT_SPAWN_VALUES: Tuple[int, ...] = (1, 1, 2)


@dataclass(frozen=True)
class BoardConfig:
    dimension: int = DEFAULT_DIMENSION
    spawn_values: Tuple[int, ...] = DEFAULT_SPAWN_VALUES
    initial_tiles: int = 2
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.dimension < 2:
            raise ValueError(f"Board dimension must be at least 2, got {self.dimension}")
        if self.dimension > MAX_DIMENSION:
            raise ValueError(f"Board dimension must be at most {MAX_DIMENSION}, got {self.dimension}")
        if not self.spawn_values:
            raise ValueError("spawn_values must not be empty")
        if min(self.spawn_values) < 1:
            raise ValueError(f"Spawn values must be >= 1, got {self.spawn_values}")
        if not 0 <= self.initial_tiles <= self.capacity:
            raise ValueError(
                f"initial_tiles must be within [0, {self.capacity}], got {self.initial_tiles}"
            )
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"Seed must be non-negative, got {self.seed}")

    @property
    def capacity(self) -> int:
        return self.dimension * self.dimension

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BoardConfig":
        """Read ``BOARD_SIZE`` and ``BOARD_SEED``; unset keys keep the defaults."""
        env = os.environ if environ is None else environ
        size = env.get("BOARD_SIZE")
        seed = env.get("BOARD_SEED")
        return cls(
            dimension=int(size) if size else DEFAULT_DIMENSION,
            seed=int(seed) if seed else None,
        )


__all__ = ["BoardConfig", "DEFAULT_DIMENSION", "DEFAULT_SPAWN_VALUES", "MAX_DIMENSION"]
