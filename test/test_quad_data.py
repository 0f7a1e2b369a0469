import numpy as np
import pytest

from dtflip.spatial import quad_data
from dtflip.spatial.robust_predicates import QuadFlipQuery, BadQuadData, MAX_SAFE_COORD

def write_text(tmp_path,text):
    fn=tmp_path/"delaunay_data.txt"
    fn.write_text(text)
    return str(fn)

def test_read_records_span_lines(tmp_path):
    fn=write_text(tmp_path,"1 2 3 4\n5 6 7 8 9 10\n11 12 13 14 15 16\n")
    quads=quad_data.read_quads(fn,shifted=False)
    assert quads.dtype==np.int64
    assert quads.shape==(2,8)
    assert list(quads[1])==list(range(9,17))

def test_read_shifted(tmp_path):
    fn=write_text(tmp_path,"1024 2048 -1024 -1025 0 1 -1 5000\n")
    quads=quad_data.read_quads(fn)
    assert quads.shape==(2,8)
    assert list(quads[0])==[1024,2048,-1024,-1025,0,1,-1,5000]
    # arithmetic shift rounds toward -inf
    assert list(quads[1])==[1,2,-1,-2,0,0,-1,4]

def test_read_drops_partial_record(tmp_path,caplog):
    fn=write_text(tmp_path,"1 2 3 4 5 6 7 8\n9 10 11\n")
    quads=quad_data.read_quads(fn,shifted=False)
    assert quads.shape==(1,8)
    assert "ignoring 3 values" in caplog.text

def test_read_bad_token(tmp_path):
    fn=write_text(tmp_path,"1 2 3 4 5 6 7 x8\n")
    with pytest.raises(BadQuadData):
        quad_data.read_quads(fn)

def test_write_then_read(tmp_path):
    quads=quad_data.random_quads(25,seed=3)
    fn=str(tmp_path/"quads.txt")
    quad_data.write_quads(fn,quads)
    back=quad_data.read_quads(fn,shifted=False)
    assert np.array_equal(back,quads)

def test_shifted_interleaves():
    quads=np.array([[4096]*8,[-4096]*8])
    s=quad_data.shifted_quads(quads)
    assert s[:,0].tolist()==[4096,4,-4096,-4]

def test_random_quads():
    a=quad_data.random_quads(1000,max_coord=7,seed=1)
    b=quad_data.random_quads(1000,max_coord=7,seed=1)
    assert np.array_equal(a,b)
    assert a.min()==-7
    assert a.max()==7

    big=quad_data.random_quads(1000,seed=2)
    assert np.abs(big).max()<=MAX_SAFE_COORD

def test_iter_queries():
    queries=list(quad_data.iter_queries(np.arange(16).reshape(2,8)))
    assert queries[1]==QuadFlipQuery(8,9,10,11,12,13,14,15)
    assert type(queries[0].ax) is int
