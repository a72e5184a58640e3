import cProfile
import warnings

from suite import BENCHMARKING_SUITE

from rearrange import rearrange_latex
from rearrange.debug.logger import Logger
from rearrange.equation import Rearrangement

logger = Logger()
Rearrangement.logger = logger

warnings.simplefilter("ignore")

# Create a Profile object
profiler = cProfile.Profile()

# Start profiling
profiler.enable()

### CODE IN BETWEEN THESE LINES IS PROFILED ###

for latex in BENCHMARKING_SUITE:
    rearrange_latex(latex)


### CODE IN BETWEEN THESE LINES IS PROFILED ###


profiler.disable()


logger.dump()

# Print stats sorted by cumulative time
profiler.print_stats(sort="cumtime")
