import statistics
import time
import warnings

from suite import BENCHMARKING_SUITE

from rearrange import rearrange_latex

warnings.simplefilter("ignore")

time_taken = []
for _ in range(100):
    start = time.time()

    ### CODE IN BETWEEN THESE LINES IS PROFILED ###

    for latex in BENCHMARKING_SUITE:
        results = rearrange_latex(latex)

    ### CODE IN BETWEEN THESE LINES IS PROFILED ###

    end = time.time()
    time_taken.append(end - start)


print(
    f"Time taken: {statistics.mean(time_taken)}, averaged across {len(time_taken)} runs with stdev {statistics.stdev(time_taken)}"
)
