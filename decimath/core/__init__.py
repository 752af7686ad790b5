"""decimath.core: result values, errors, Decimal context and precision policy."""

from decimath.core.config import DEFAULT_CONFIG as DEFAULT_CONFIG
from decimath.core.config import EngineConfig as EngineConfig
from decimath.core.context import DECIMATH_CONTEXT as DECIMATH_CONTEXT
from decimath.core.context import round_significant as round_significant
from decimath.core.context import working_context as working_context
from decimath.core.errors import ConvergenceFailure as ConvergenceFailure
from decimath.core.errors import DecimalResult as DecimalResult
from decimath.core.errors import DomainError as DomainError
from decimath.core.errors import InvalidPrecisionError as InvalidPrecisionError
from decimath.core.errors import MathError as MathError
from decimath.core.errors import RangeError as RangeError
from decimath.core.precision import FunctionTag as FunctionTag
from decimath.core.precision import WorkingPrecision as WorkingPrecision
from decimath.core.precision import guard_digits as guard_digits
from decimath.core.precision import working_precision as working_precision
from decimath.core.result import Err as Err
from decimath.core.result import Ok as Ok
from decimath.core.result import Result as Result
from decimath.core.result import sequence as sequence
from decimath.core.result import unwrap as unwrap
