"""
Replay the flip test over a set of quads with each double width backend,
counting flips and timing the whole pass.
"""
import time
import logging
from collections import namedtuple

import numpy as np
import pandas as pd

from .spatial import robust_predicates, quad_data
from .utils import set_keywords

log=logging.getLogger(__name__)

BenchResult=namedtuple('BenchResult','backend calcs flips seconds per_calc')

class Stopwatch(object):
    def __init__(self):
        self.reset()
    def reset(self):
        self.t_start=time.perf_counter()
    def elapsed(self):
        return time.perf_counter()-self.t_start


class Benchmark(object):
    """
    quads: [N,8] integer array.
    Keyword arguments override the class attributes below.
    """
    # number of passes over the full set of quads
    repeat=10
    # names from robust_predicates.backends, plus 'numpy' for the
    # vectorized test
    backends=['int64','int128','pyint','numpy']

    ARRAY='numpy'

    def __init__(self,quads,**kw):
        set_keywords(self,kw)
        self.quads=robust_predicates.as_quad_array(quads)
        self.queries=list(quad_data.iter_queries(self.quads))

    def run_backend(self,name):
        log.info("Running calculations for: %s"%name)
        if name==self.ARRAY:
            return self.run_array()

        backend=robust_predicates.get_backend(name)
        test=robust_predicates.delaunay_test

        flips=0
        calcs=0
        w=Stopwatch()
        for _ in range(self.repeat):
            for q in self.queries:
                if test(*q,backend=backend):
                    flips+=1
                calcs+=1
        return self.result(name,calcs,flips,w.elapsed())

    def run_array(self):
        flips=0
        w=Stopwatch()
        for _ in range(self.repeat):
            flips+=int(np.count_nonzero(robust_predicates.delaunay_test_array(self.quads)))
        return self.result(self.ARRAY,self.repeat*len(self.quads),flips,w.elapsed())

    def result(self,name,calcs,flips,seconds):
        if calcs:
            per_calc=seconds/calcs
        else:
            per_calc=np.nan
        res=BenchResult(backend=name,calcs=calcs,flips=flips,
                        seconds=seconds,per_calc=per_calc)
        log.info("%s: %d calculations, %d flips, %.3fs"%(name,calcs,flips,seconds))
        return res

    def run(self):
        """ DataFrame with one row per backend """
        # fail on a bad name before spending time on the others
        for name in self.backends:
            if name!=self.ARRAY:
                robust_predicates.get_backend(name)
        rows=[self.run_backend(name) for name in self.backends]
        return pd.DataFrame(rows,columns=BenchResult._fields)

    @staticmethod
    def report(df):
        lines=[]
        for rec in df.itertuples(index=False):
            lines.append("Running calculations for: %s"%rec.backend)
            lines.append("Number of calculations = %d"%rec.calcs)
            lines.append("Number of flips = %d"%rec.flips)
            lines.append("Total execution time = %g"%rec.seconds)
            lines.append("Time per calculation = %g"%rec.per_calc)
            lines.append("")
        return "\n".join(lines)
