"""Engine limits and tuning constants.

Pure configuration data: no environment variables, no files.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final


@final
@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Tuning knobs shared by the precision, series, Newton and cache layers.

    Every loop bound in the engine is derived from the working precision plus
    one of these margins, so no iteration is open-ended.
    """

    max_precision: int = 100_000          # largest accepted request, in digits
    series_term_margin: int = 30          # extra terms beyond the analytic bound
    newton_extra_steps: int = 4           # iterations beyond the precision schedule
    newton_seed_digits: int = 15          # digits delivered by the float seed
    constant_guard_digits: int = 10       # extra digits when computing pi, e, ln2
    trig_reduction_retries: int = 16      # re-reductions after cancellation

    def __post_init__(self) -> None:
        for name in (
            "max_precision", "newton_seed_digits", "constant_guard_digits",
        ):
            if getattr(self, name) <= 0:
                raise TypeError(f"EngineConfig.{name} must be > 0, got {getattr(self, name)}")
        for name in ("series_term_margin", "newton_extra_steps", "trig_reduction_retries"):
            if getattr(self, name) < 0:
                raise TypeError(f"EngineConfig.{name} must be >= 0, got {getattr(self, name)}")


DEFAULT_CONFIG = EngineConfig()
