import numpy as np
import pytest

from dtflip import bench, cli
from dtflip.spatial import quad_data
from dtflip.spatial.robust_predicates import UnknownBackend, delaunay_test_array

def test_benchmark_counts():
    quads=quad_data.random_quads(60,seed=4)
    b=bench.Benchmark(quads,repeat=2)
    df=b.run()

    assert list(df['backend'])==['int64','int128','pyint','numpy']
    assert np.all(df['calcs']==120)
    expected=2*int(np.count_nonzero(delaunay_test_array(quads)))
    flips=df.set_index('backend')['flips']
    for name in ['int128','pyint','numpy']:
        assert flips[name]==expected
    assert np.all(df['seconds']>=0)

    text=bench.Benchmark.report(df)
    assert "Number of flips = %d"%expected in text
    assert text.count("Running calculations for:")==4

def test_benchmark_config():
    quads=quad_data.random_quads(5,seed=1)
    b=bench.Benchmark(quads,backends=['pyint'],repeat=3)
    res=b.run_backend('pyint')
    assert res.calcs==15
    with pytest.raises(AttributeError):
        bench.Benchmark(quads,repet=3)
    with pytest.raises(UnknownBackend):
        bench.Benchmark(quads,backends=['int128','float']).run()

def test_stopwatch():
    w=bench.Stopwatch()
    assert w.elapsed()>=0
    w.reset()
    assert w.elapsed()>=0

def test_cli_generate(tmp_path,capsys):
    fn=str(tmp_path/"quads.txt")
    df=cli.parse_and_run(['-g','20','-s','3','-r','1','-b','int128','-b','numpy','-w',fn])
    assert len(df)==2
    # shifted copies are added
    assert np.all(df['calcs']==40)
    assert df['flips'].iloc[0]==df['flips'].iloc[1]
    assert "Number of calculations = 40" in capsys.readouterr().out

    df2=cli.parse_and_run(['-i',fn,'-r','1','-b','pyint'])
    assert df2['flips'].iloc[0]==df['flips'].iloc[0]

def test_cli_errors(tmp_path):
    with pytest.raises(SystemExit):
        cli.parse_and_run(['-r','1'])
    with pytest.raises(SystemExit):
        cli.parse_and_run(['-i',str(tmp_path/"missing.txt")])
    with pytest.raises(SystemExit):
        cli.parse_and_run(['-g','3','-b','float'])
