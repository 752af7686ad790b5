"""decimath: correctly rounded transcendental functions on decimal.Decimal.

Every function takes the requested number of significant digits and
returns Ok(Decimal) rounded half-up to exactly that many digits, or
Err(MathError).
"""

from decimath.core.config import DEFAULT_CONFIG as DEFAULT_CONFIG
from decimath.core.config import EngineConfig as EngineConfig
from decimath.core.errors import ConvergenceFailure as ConvergenceFailure
from decimath.core.errors import DomainError as DomainError
from decimath.core.errors import InvalidPrecisionError as InvalidPrecisionError
from decimath.core.errors import MathError as MathError
from decimath.core.errors import RangeError as RangeError
from decimath.core.precision import FunctionTag as FunctionTag
from decimath.core.result import Err as Err
from decimath.core.result import Ok as Ok
from decimath.core.result import unwrap as unwrap
from decimath.functions.constants import e as e
from decimath.functions.constants import ln2 as ln2
from decimath.functions.constants import pi as pi
from decimath.functions.exponential import exp as exp
from decimath.functions.exponential import expm1 as expm1
from decimath.functions.exponential import ln as ln
from decimath.functions.exponential import log as log
from decimath.functions.exponential import log1p as log1p
from decimath.functions.exponential import log10 as log10
from decimath.functions.exponential import pow as pow  # noqa: A004
from decimath.functions.hyperbolic import acosh as acosh
from decimath.functions.hyperbolic import asinh as asinh
from decimath.functions.hyperbolic import atanh as atanh
from decimath.functions.hyperbolic import cosh as cosh
from decimath.functions.hyperbolic import sinh as sinh
from decimath.functions.hyperbolic import tanh as tanh
from decimath.functions.registry import FUNCTION_TABLE as FUNCTION_TABLE
from decimath.functions.registry import FunctionEntry as FunctionEntry
from decimath.functions.registry import evaluate as evaluate
from decimath.functions.roots import nth_root as nth_root
from decimath.functions.roots import root_implied_precision as root_implied_precision
from decimath.functions.roots import sqrt as sqrt
from decimath.functions.trigonometric import acos as acos
from decimath.functions.trigonometric import asin as asin
from decimath.functions.trigonometric import atan as atan
from decimath.functions.trigonometric import atan2 as atan2
from decimath.functions.trigonometric import cos as cos
from decimath.functions.trigonometric import sin as sin
from decimath.functions.trigonometric import tan as tan
from decimath.numeric.constants import DEFAULT_CACHE as DEFAULT_CACHE
from decimath.numeric.constants import ConstantCache as ConstantCache
