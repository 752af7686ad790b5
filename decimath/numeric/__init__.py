"""decimath.numeric: series, Newton iteration, argument reduction and constants."""

from decimath.numeric.constants import DEFAULT_CACHE as DEFAULT_CACHE
from decimath.numeric.constants import ConstantCache as ConstantCache
from decimath.numeric.newton import nth_root_core as nth_root_core
from decimath.numeric.newton import precision_schedule as precision_schedule
from decimath.numeric.series import sum_series as sum_series
from decimath.numeric.series import term_limit as term_limit
