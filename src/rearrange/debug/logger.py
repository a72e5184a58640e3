"""See benchmark/benchmark-profiler.py for an example usage of the logger.

```
from rearrange import rearrange_latex
from rearrange.debug.logger import Logger
from rearrange.equation import Rearrangement

logger = Logger()
Rearrangement.logger = logger

# rearrange some equations as normal...
rearrange_latex("v = u + at")

logger.dump()   # dumps information into rearrange_log.txt
```

Mutating the whole Rearrangement class is a bit jank, but it means nothing else has to know about the logger.
"""

from typing import TYPE_CHECKING, Dict, List, NamedTuple

if TYPE_CHECKING:
    from ..equation import RearrangementResult


class Datum(NamedTuple):
    latex: str
    time_spent: float
    results: List["RearrangementResult"]


class Logger:
    """Keeps track of time spent rearranging each equation."""

    _data: Dict[str, Datum] = None

    def __init__(self, filename: str = "rearrange_log.txt"):
        self._data = {}
        self.filename = filename

    def log(self, latex: str, time_spent: float, results: List["RearrangementResult"]):
        """Log a rearrangement entry.

        latex: the input equation
        time_spent: time taken to rearrange it, in seconds
        results: what came out
        """
        self._data[latex] = Datum(latex, time_spent, results)

    @property
    def data(self) -> Dict[str, Datum]:
        return self._data

    def sort(self):
        """sorts the data by time spent on each equation, from most time to least time."""
        self._data = dict(sorted(self._data.items(), key=lambda x: x[1].time_spent, reverse=True))

    def dump(self):
        self.sort()

        with open(self.filename, "w") as f:
            f.write("Equation: time taken (s), solved/total")
            f.write("\n\n")
            for k, v in self._data.items():
                solved = sum(r.solved for r in v.results)
                f.write(f"{k}: {v.time_spent}, {solved}/{len(v.results)}\n")

            f.write("\n\n")
            f.write("Unsolved: \n")
            for v in self._data.values():
                for r in v.results:
                    if not r.solved:
                        f.write(f"{v.latex} [{r.variable}]: {r.reason}\n")
