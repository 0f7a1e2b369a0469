"""
Two-word 128-bit signed integer, just enough of it to evaluate the
Delaunay flip test exactly.

Only the handful of operators the predicate needs are implemented:
construction from a native 64-bit value, left shift, addition,
negation and signed less-than.  This is not a general bignum type.

Words are python ints, masked explicitly so that every operation wraps
modulo 2**64 the way fixed width machine words would.  high is kept
signed, low unsigned, and the value is high*2**64 + low.

The *_array functions do the same thing on numpy uint64 arrays, where
the wrapping comes for free.
"""
import numpy as np

MASK64=(1<<64)-1
INT64_MIN=-(1<<63)
INT64_MAX=(1<<63)-1

def wrap_int64(x):
    """ reduce a python int modulo 2**64, into the signed int64 range
    """
    x&=MASK64
    if x>INT64_MAX:
        x-=(1<<64)
    return x


class Int128(object):
    """
    Fixed width two's complement integer.
    high: signed 64-bit word, holds the sign extension
    low: unsigned 64-bit word
    """
    def __init__(self,value=0):
        # value is either a signed or an unsigned 64-bit native integer.
        # negative values sign extend, so high is all ones.
        value=int(value)
        if value<0:
            self.high=-1
        else:
            self.high=0
        self.low=value & MASK64

    @classmethod
    def from_words(cls,high,low):
        r=cls()
        r.high=wrap_int64(high)
        r.low=low & MASK64
        return r

    def __lshift__(self,amt):
        """ 0<=amt<64.  bits leaving the top of low move into high,
        bits leaving the top of high are lost.
        """
        low=(self.low<<amt) & MASK64
        high=(self.low>>(64-amt)) | (self.high<<amt)
        return Int128.from_words(high,low)

    def __add__(self,other):
        if not isinstance(other,Int128):
            other=Int128(other)
        low=(self.low+other.low) & MASK64
        carry=low<other.low
        high=self.high+other.high
        if carry:
            high+=1
        return Int128.from_words(high,low)
    __radd__=__add__

    def __neg__(self):
        low=(~self.low) & MASK64
        high=~self.high
        low=(low+1) & MASK64
        if low==0:
            high+=1
        # negating the most negative value wraps back to itself
        return Int128.from_words(high,low)

    def __lt__(self,other):
        if not isinstance(other,Int128):
            other=Int128(other)
        if self.high!=other.high:
            return self.high<other.high
        return self.low<other.low

    def __eq__(self,other):
        if isinstance(other,(int,np.integer)):
            other=Int128(other)
        elif not isinstance(other,Int128):
            return NotImplemented
        return (self.high,self.low)==(other.high,other.low)
    def __hash__(self):
        return hash( (self.high,self.low) )

    def __int__(self):
        return (self.high<<64) + self.low

    def __repr__(self):
        return "Int128(high=%d, low=0x%016x)"%(self.high,self.low)

INT128_MIN=Int128.from_words(INT64_MIN,0)
INT128_MAX=Int128.from_words(INT64_MAX,MASK64)


def mult_64x64_to_128(a,b):
    """
    Exact product of two signed 64-bit integers as an Int128.

    Works on absolute values split into 32-bit halves, so that all of the
    partial products are unsigned 32x32->64, and restores the sign at the
    end.  INT64_MIN is fine: its absolute value, 2**63, only exists as an
    unsigned word.
    """
    a=int(a)
    b=int(b)
    neg=False
    if a<0:
        neg=not neg
        a=-a
    if b<0:
        neg=not neg
        b=-b
    a&=MASK64
    b&=MASK64

    ah=a>>32
    al=a & 0xffffffff
    bh=b>>32
    bl=b & 0xffffffff

    #            ah al
    #          * bh bl
    # ----------------
    #            al*bl   (t1)
    # +       ah*bl      (t2)
    # +       al*bh      (t3)
    # +    ah*bh         (t4)
    t1=al*bl
    t2=ah*bl
    t3=al*bh
    t4=ah*bh

    r=Int128(t1)
    r.high=wrap_int64(t4)
    r+=Int128(t2)<<32
    r+=Int128(t3)<<32

    if neg:
        r=-r
    return r


## Vectorized forms.  A value is a pair (high,low) of uint64 arrays, high
## read as signed via view(np.int64).

_LO32=np.uint64(0xffffffff)
_S32=np.uint64(32)
_ONE=np.uint64(1)

def add128_array(x,y):
    xh,xl=x
    yh,yl=y
    low=xl+yl
    carry=(low<yl).astype(np.uint64)
    high=xh+yh+carry
    return high,low

def neg128_array(x):
    h,l=x
    low=(~l)+_ONE
    high=(~h)+(low==0).astype(np.uint64)
    return high,low

def is_negative128_array(x):
    return x[0].view(np.int64)<0

def shl32_array(t):
    """ widen a uint64 array and shift it left by 32 bits """
    return t>>_S32, t<<_S32

def mult_64x64_to_128_array(a,b):
    """
    element-wise exact product of two int64 arrays.
    returns (high,low) uint64 arrays.
    """
    a=np.asarray(a,dtype=np.int64)
    b=np.asarray(b,dtype=np.int64)
    neg=(a<0)!=(b<0)

    # abs(INT64_MIN) wraps to itself, and its uint64 view is 2**63
    ua=np.abs(a).view(np.uint64)
    ub=np.abs(b).view(np.uint64)

    ah=ua>>_S32
    al=ua & _LO32
    bh=ub>>_S32
    bl=ub & _LO32

    t1=al*bl
    t2=ah*bl
    t3=al*bh
    t4=ah*bh

    r=(t4,t1)
    r=add128_array(r,shl32_array(t2))
    r=add128_array(r,shl32_array(t3))

    nh,nl=neg128_array(r)
    return np.where(neg,nh,r[0]), np.where(neg,nl,r[1])

def to_python_ints(x):
    """ list of python ints from a (high,low) pair, mainly for testing """
    h=x[0].view(np.int64)
    l=x[1]
    return [ (int(hi)<<64) + int(lo) for hi,lo in zip(np.ravel(h),np.ravel(l)) ]
