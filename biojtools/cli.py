"""
bjt: bio-jtools command line.

Usage:
    bjt [-v] info [-l] [-f FORMAT] HTS
        Summarize a FASTQ, FASTA, SAM or BAM file.
        -l          Include the read length distribution.
        -f FORMAT   Report format: human, csv, tsv or json [human].

    bjt [-v] jaccard [-n NAMES] [-o OUTPUT] [-@ THREADS] BED...
        Base pair Jaccard similarity of every pair of interval files.
        -n NAMES    Comma separated labels, one per file [file paths].
        -o OUTPUT   Write a CSV table to OUTPUT instead of printing.
        -@ THREADS  Worker threads [BIOJTOOLS_THREADS or CPU count].

    bjt [-v] filter [-k] [-i IDFILE] [-r REGEX] -o OUTPUT HTS
        Write the SAM or BAM records whose names are listed in IDFILE or match REGEX.
        -k          Keep the matching records instead of removing them.
        -i IDFILE   File of read names, one per line.
        -r REGEX    Regular expression searched for in read names.
        -o OUTPUT   Output path, same container as the input.

    -v  Increase logging verbosity, may be repeated.
"""

import getopt
import logging
import re
import sys

from . import interval, stats
from .errors import HTSError
from .filter import filter_records, read_ids
from .reader import Reader
from .util import DEFAULT_THREADS, atomic_output

log = logging.getLogger(__name__)


class UsageError(Exception):
    pass


def run_info(argv):
    opts, args = getopt.gnu_getopt(argv, 'lf:')
    opts = dict(opts)
    if len(args) != 1:
        raise UsageError("info requires exactly one input file")
    fmt = opts.get('-f', 'human')
    if fmt.lower() not in stats.FORMATS:
        raise UsageError("unknown report format {!r}".format(fmt))
    result = stats.summarize(Reader(args[0]), lengths='-l' in opts)
    sys.stdout.write(result.render(fmt))
    return 0


def run_jaccard(argv):
    opts, args = getopt.gnu_getopt(argv, 'n:o:@:')
    opts = dict(opts)
    if not args:
        raise UsageError("jaccard requires at least one interval file")
    names = opts['-n'].split(',') if '-n' in opts else None
    if names is not None and len(names) != len(args):
        raise UsageError("{} names given for {} files".format(len(names), len(args)))
    try:
        threads = int(opts.get('-@', DEFAULT_THREADS))
    except ValueError:
        raise UsageError("-@ requires an integer")

    if len(args) == 1:
        interval.load(args[0])
        print("Only 1 interval file, which is obviously self-similar.")
        return 0

    results = interval.multijaccard(args, names, threads)
    if '-o' in opts:
        with atomic_output(opts['-o'], 'w') as output:
            count = interval.write_table(results, output)
        log.info("Wrote %d pairs to %s", count, opts['-o'])
    else:
        interval.write_table(results, sys.stdout, '\t')
    return 0


def run_filter(argv):
    opts, args = getopt.gnu_getopt(argv, 'ki:r:o:')
    opts = dict(opts)
    if len(args) != 1:
        raise UsageError("filter requires exactly one input file")
    if '-o' not in opts:
        raise UsageError("filter requires an output path (-o)")
    if '-i' not in opts and '-r' not in opts:
        raise UsageError("filter requires an identifier file (-i) or a regular expression (-r)")
    try:
        pattern = re.compile(opts['-r']) if '-r' in opts else None
    except re.error as e:
        raise UsageError("invalid regular expression: {}".format(e))
    ids = read_ids(opts['-i']) if '-i' in opts else set()
    filter_records(Reader(args[0]), ids, opts['-o'], keep='-k' in opts, pattern=pattern)
    return 0


COMMANDS = {
    'info': run_info,
    'jaccard': run_jaccard,
    'filter': run_filter,
}


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    try:
        opts, args = getopt.getopt(argv, 'vh')
    except getopt.GetoptError as e:
        sys.stderr.write("bjt: {}\n{}".format(e, __doc__))
        return 2
    if ('-h', '') in opts:
        sys.stdout.write(__doc__)
        return 0
    if not args:
        sys.stderr.write(__doc__)
        return 2

    verbosity = sum(1 for opt, _ in opts if opt == '-v')
    logging.basicConfig(level=max(logging.DEBUG, logging.WARNING - 10 * verbosity),
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s', stream=sys.stderr)

    command = COMMANDS.get(args[0])
    if command is None:
        sys.stderr.write("bjt: unknown command {!r}\n{}".format(args[0], __doc__))
        return 2
    try:
        return command(args[1:])
    except (getopt.GetoptError, UsageError) as e:
        sys.stderr.write("bjt {}: {}\n".format(args[0], e))
        return 2
    except HTSError as e:
        sys.stderr.write("bjt {}: {}\n".format(args[0], e))
        return 1


if __name__ == '__main__':
    sys.exit(main())
