"""
Command line timing of the exact flip test.

  python -m dtflip.cli -i delaunay_data.txt
  python -m dtflip.cli -g 10000 -s 1 -b int128 -b pyint -r 5
"""
import sys
import argparse
import logging as log

from .spatial import quad_data
from .spatial.robust_predicates import MAX_SAFE_COORD, UnknownBackend, BadQuadData
from .bench import Benchmark

parser = argparse.ArgumentParser(description='Time the exact Delaunay flip test.')

source=parser.add_mutually_exclusive_group()
source.add_argument("-i", "--input", help="Read quads from a text file, 8 integers per record",
                    metavar="path")
source.add_argument("-g", "--generate", help="Generate N random quads",
                    metavar="N", type=int)
parser.add_argument("-w", "--write", help="Write the generated quads (before shifting) to path",
                    metavar="path")
parser.add_argument("-s", "--seed", help="Seed for generated quads", type=int, default=None)
parser.add_argument("-m", "--max-coord", help="Largest generated coordinate magnitude",
                    type=int, default=MAX_SAFE_COORD)
parser.add_argument("-r", "--repeat", help="Passes over the data per backend",
                    type=int, default=Benchmark.repeat)
parser.add_argument("-b", "--backend", help="Backend to time, may be repeated. Default: %s"%(", ".join(Benchmark.backends)),
                    action='append', dest='backends', metavar='name')
parser.add_argument("--no-shift", help="Do not add copies shifted right by 10 bits",
                    action='store_true')
parser.add_argument("-v", "--verbose", help="Debug logging", action='store_true')


def parse_and_run(argv=None):
    args=parser.parse_args(argv)

    if args.verbose:
        log.basicConfig(level=log.DEBUG)
    else:
        log.basicConfig(level=log.INFO)

    if args.input is not None:
        try:
            quads=quad_data.read_quads(args.input,shifted=not args.no_shift)
        except (IOError,BadQuadData) as exc:
            log.error("Failed to read quads: %s"%exc)
            sys.exit(1)
    elif args.generate is not None:
        quads=quad_data.random_quads(args.generate,max_coord=args.max_coord,seed=args.seed)
        if args.write is not None:
            quad_data.write_quads(args.write,quads)
        if not args.no_shift:
            quads=quad_data.shifted_quads(quads)
    else:
        log.error("Need either an input file (-i) or a count to generate (-g)")
        sys.exit(1)

    backends=args.backends or Benchmark.backends
    try:
        bench=Benchmark(quads,repeat=args.repeat,backends=backends)
        df=bench.run()
    except UnknownBackend as exc:
        log.error(exc.args[0])
        sys.exit(1)

    print(Benchmark.report(df))
    return df

if __name__ == '__main__':
    parse_and_run()
