"""
Exact integer Delaunay flip test.

For a quadrilateral ABCD split by diagonal AC, decide whether the diagonal
should be flipped to BD.  This is the Cline & Renka method: flip if the sum
of the angles ABC and CDA is greater than 180 degrees, equivalently if
sin(ABC + CDA) < 0, i.e.

  cos(ABC)*sin(CDA) + sin(ABC)*cos(CDA) < 0

The sines and cosines, up to a positive scale factor, are the cross and dot
products of edge vectors, so with integer coordinates everything is an
exact integer.  The cosines alone settle most cases; only when their signs
differ are the sines computed and the final sum formed at double width.

Quads are expected in clockwise order (y up), which makes the sine terms
positive.  Orientation is not checked.

Precondition: |coordinate| <= MAX_SAFE_COORD.  Differences then fit in 31
bits plus sign, every working quantity fits in an int64 and the final sum
in an int128.  This is not checked at runtime.
"""
import logging
from collections import namedtuple

import numpy as np

from . import int128

log=logging.getLogger(__name__)

MAX_SAFE_COORD=(1<<30)-1

class UnknownBackend(KeyError):
    pass

class BadQuadData(ValueError):
    pass


class QuadFlipQuery(namedtuple('QuadFlipQuery','ax ay bx by cx cy dx dy')):
    """ The eight coordinates of quadrilateral ABCD, diagonal AC """
    __slots__=()
    def points(self):
        return [ (self.ax,self.ay), (self.bx,self.by),
                 (self.cx,self.cy), (self.dx,self.dy) ]


## Double width arithmetic backends.  Each supplies an exact (or, for
## int64, deliberately wrapping) multiply-widen, add and sign test.

class Int128Backend(object):
    name='int128'
    zero=int128.Int128(0)
    def mul_2n(self,a,b):
        return int128.mult_64x64_to_128(a,b)
    def add(self,x,y):
        return x+y
    def is_negative(self,x):
        return x<self.zero

class PyIntBackend(object):
    name='pyint'
    def mul_2n(self,a,b):
        return a*b
    def add(self,x,y):
        return x+y
    def is_negative(self,x):
        return x<0

class Int64Backend(object):
    """
    Wraps to 64 bits like a plain int64 accumulator would.  Not exact for
    large coordinates.  Only useful as a baseline when timing the others.
    """
    name='int64'
    def mul_2n(self,a,b):
        return int128.wrap_int64(a*b)
    def add(self,x,y):
        return int128.wrap_int64(x+y)
    def is_negative(self,x):
        return x<0

backends={}
for _cls in [Int128Backend,PyIntBackend,Int64Backend]:
    backends[_cls.name]=_cls()

default_backend='int128'

def get_backend(backend=None):
    """
    backend: None for default_backend, a name from backends, or an object
    with mul_2n, add and is_negative.
    """
    if backend is None:
        backend=default_backend
    if isinstance(backend,str):
        try:
            return backends[backend]
        except KeyError:
            raise UnknownBackend("No backend %r. Available: %s"%(backend,", ".join(sorted(backends))))
    return backend


## The staged quantities

def cos_terms(q):
    """ dot products at B and D, (cos_abc, cos_cda) """
    ax,ay,bx,by,cx,cy,dx,dy=q
    cos_abc=(ax-bx)*(cx-bx) + (ay-by)*(cy-by)
    cos_cda=(cx-dx)*(ax-dx) + (cy-dy)*(ay-dy)
    return cos_abc,cos_cda

def sin_terms(q):
    """ cross products at B and D, (sin_abc, sin_cda) """
    ax,ay,bx,by,cx,cy,dx,dy=q
    sin_abc=(ax-bx)*(cy-by) - (cx-bx)*(ay-by)
    sin_cda=(cx-dx)*(ay-dy) - (ax-dx)*(cy-dy)
    return sin_abc,sin_cda

def _sin_sum(backend,sin_abc,cos_cda,cos_abc,sin_cda):
    return backend.add( backend.mul_2n(sin_abc,cos_cda),
                        backend.mul_2n(cos_abc,sin_cda) )

def sin_sum(q,backend=None):
    """
    the double width sin(ABC+CDA) quantity, computed whether or not
    the cosines would have been enough.
    """
    backend=get_backend(backend)
    q=[int(v) for v in q]
    cos_abc,cos_cda=cos_terms(q)
    sin_abc,sin_cda=sin_terms(q)
    return _sin_sum(backend,sin_abc,cos_cda,cos_abc,sin_cda)


def delaunay_test(ax,ay,bx,by,cx,cy,dx,dy,backend=None):
    """
    True if diagonal AC of quadrilateral ABCD should be flipped to BD.

    A zero cosine counts as non-negative, and an exact zero angle sum keeps
    AC.  Inputs are widened to python ints, so numpy int32 coordinates are
    fine.
    """
    backend=get_backend(backend)
    q=(int(ax),int(ay),int(bx),int(by),int(cx),int(cy),int(dx),int(dy))

    cos_abc,cos_cda=cos_terms(q)

    if cos_abc>=0 and cos_cda>=0:
        return False
    if cos_abc<0 and cos_cda<0:
        return True

    sin_abc,sin_cda=sin_terms(q)
    return backend.is_negative( _sin_sum(backend,sin_abc,cos_cda,cos_abc,sin_cda) )

def delaunay_flip(a,b,c,d,backend=None):
    """ same as delaunay_test, but with points a,b,c,d """
    return delaunay_test(a[0],a[1],b[0],b[1],c[0],c[1],d[0],d[1],backend=backend)


## Vectorized, for an [N,8] array of quads.

def as_quad_array(quads):
    quads=np.asarray(quads,dtype=np.int64)
    if quads.ndim==1 and quads.shape[0]==8:
        quads=quads[None,:]
    if quads.ndim!=2 or quads.shape[1]!=8:
        raise BadQuadData("Expected an [N,8] array of quads, got shape %s"%(quads.shape,))
    return quads

def sin_sum_array(quads):
    """
    (high,low) uint64 words of the int128 sin_sum for every quad, no
    shortcuts.
    """
    quads=as_quad_array(quads)
    cos_abc,cos_cda=cos_terms(quads.T)
    sin_abc,sin_cda=sin_terms(quads.T)
    return int128.add128_array( int128.mult_64x64_to_128_array(sin_abc,cos_cda),
                                int128.mult_64x64_to_128_array(cos_abc,sin_cda) )

def delaunay_test_array(quads):
    """
    delaunay_test for each row of an [N,8] integer array.
    Returns a boolean array.  The cosine pass is done for all rows in int64,
    and the int128 pass only for the rows it did not settle.
    """
    quads=as_quad_array(quads)
    cos_abc,cos_cda=cos_terms(quads.T)

    neg_abc=cos_abc<0
    neg_cda=cos_cda<0
    result=neg_abc & neg_cda
    slow=neg_abc!=neg_cda

    n_slow=np.count_nonzero(slow)
    log.debug("%d of %d quads need the int128 pass"%(n_slow,len(quads)))
    if n_slow:
        sub=quads[slow]
        sin_abc,sin_cda=sin_terms(sub.T)
        total=int128.add128_array( int128.mult_64x64_to_128_array(sin_abc,cos_cda[slow]),
                                   int128.mult_64x64_to_128_array(cos_abc[slow],sin_cda) )
        result[slow]=int128.is_negative128_array(total)
    return result
