"""
Reading, writing and generating batches of quadrilateral flip queries.

The text format is whitespace separated integers, eight per record:
  ax ay bx by cx cy dx dy
Line breaks are not significant.
"""
import logging

import numpy as np

from .robust_predicates import (QuadFlipQuery, BadQuadData, MAX_SAFE_COORD,
                                as_quad_array)

log=logging.getLogger(__name__)


def shifted_quads(quads,shift=10):
    """
    Interleave each record with a copy whose coordinates are arithmetically
    shifted right by shift bits, so that the same shapes are exercised at
    two scales.
    """
    quads=as_quad_array(quads)
    return np.stack( [quads,quads>>shift], axis=1).reshape(-1,8)

def read_quads(fn,shifted=True):
    """
    Returns an [N,8] int64 array.  An incomplete trailing record is dropped.
    shifted: follow each record with its copy shifted right 10 bits.
    """
    with open(fn) as fp:
        tokens=fp.read().split()

    try:
        values=np.array([int(t) for t in tokens],dtype=np.int64)
    except (ValueError,OverflowError) as exc:
        raise BadQuadData("%s: %s"%(fn,exc))

    n_quads=len(values)//8
    extra=len(values)-8*n_quads
    if extra:
        log.warning("%s: ignoring %d values after the last complete record"%(fn,extra))
    quads=values[:8*n_quads].reshape(-1,8)
    log.info("Read %d quads from %s"%(n_quads,fn))

    if shifted:
        quads=shifted_quads(quads)
    return quads

def write_quads(fn,quads):
    quads=as_quad_array(quads)
    np.savetxt(fn,quads,fmt='%d')
    log.info("Wrote %d quads to %s"%(len(quads),fn))

def random_quads(n,max_coord=MAX_SAFE_COORD,seed=None):
    """ n quads with coordinates uniform in [-max_coord,max_coord] """
    rng=np.random.default_rng(seed)
    return rng.integers(-max_coord,max_coord,size=(n,8),endpoint=True,dtype=np.int64)

def iter_queries(quads):
    for row in as_quad_array(quads):
        yield QuadFlipQuery(*[int(v) for v in row])
