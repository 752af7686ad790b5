"""Square and nth roots."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

from decimath.core.config import DEFAULT_CONFIG, EngineConfig
from decimath.core.context import ZERO, int_digits, power_of_ten, working_context
from decimath.core.errors import DecimalResult, domain_error, invalid_precision
from decimath.core.precision import FunctionTag, guard_digits
from decimath.core.result import Err, Ok
from decimath.functions._dispatch import evaluate
from decimath.numeric.kernels import sqrt_kernel
from decimath.numeric.newton import nth_root_core


def sqrt(x: Decimal, precision: int) -> DecimalResult:
    def compute(w: int) -> DecimalResult:
        if x < ZERO:
            return domain_error("sqrt", x, "argument must be >= 0")
        return sqrt_kernel(x, w)

    return evaluate(FunctionTag.SQRT, precision, (x,), compute)


def nth_root(x: Decimal, n: int, precision: int) -> DecimalResult:
    """Real nth root of x.

    Even n needs x > 0; odd n accepts any x and keeps its sign.
    """
    def compute(w: int) -> DecimalResult:
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            return domain_error("nth_root", n, "root index must be an int >= 1")
        if n == 1:
            return Ok(x)
        if x.is_zero():
            if n % 2 == 0:
                return domain_error("nth_root", x, "even root needs an argument > 0")
            return Ok(ZERO)
        if x > ZERO:
            return nth_root_core(x, n, w)
        if n % 2 == 0:
            return domain_error("nth_root", x, "even root needs an argument > 0")
        return nth_root_core(x.copy_negate(), n, w).map(Decimal.copy_negate)

    return evaluate(FunctionTag.NTH_ROOT, precision, (x,), compute)


def root_implied_precision(
    n: int, x: Decimal, config: EngineConfig = DEFAULT_CONFIG,
) -> DecimalResult:
    """x^(1/n) rounded to the precision implied by x.

    The result carries d decimal places, d being the digit count of
    n * unscaled(x): a root known to one unit in the last place of x,
    relative error ulp(x) / (2 n x), rounds to that many places:
    root_implied_precision(4, Decimal("14.75")) is Ok(Decimal("1.9597")).
    """
    if not isinstance(x, Decimal) or not x.is_finite():
        return domain_error("root", repr(x), "argument must be a finite Decimal")
    if x < ZERO:
        return domain_error("root", x, "argument must be >= 0")
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        return domain_error("root", n, "root index must be an int >= 1")
    if n == 1:
        return Ok(x)
    if x.is_zero():
        return Ok(ZERO)

    _, digits, _ = x.as_tuple()
    unscaled = int(Decimal((0, digits, 0)))
    places = int_digits(n * unscaled)
    if places > config.max_precision:
        return invalid_precision(places, f"exceeds max_precision={config.max_precision}", "decimath.root")

    # significant digits needed for ``places`` decimal places of the root
    leading = max(0, x.adjusted() // n + 1)
    working = places + leading + guard_digits(FunctionTag.NTH_ROOT)
    match nth_root_core(x, n, working, config):
        case Err(e):
            return Err(e)
        case Ok(root):
            pass
    ctx = working_context(working + 2)
    with localcontext(ctx):
        return Ok(root.quantize(power_of_ten(-places), rounding=ROUND_HALF_UP))
