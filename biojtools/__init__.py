"""
Streaming tools for high throughput sequencing data: FASTQ/FASTA (plain or GZIP), SAM and BAM (plain or BGZF), and BED.

Classes:
    SequenceRecord: A FASTQ or FASTA entry.
    AlignmentRecord: A SAM or BAM alignment, keeping its raw encoding.
    RecordStream: Lazy sequence of records read from one file.
    Writer: Convenience interface for writing alignment records.
    StatsAggregate: Statistics accumulated over a RecordStream.
    Reference: Represents a reference sequence that the records were aligned to.

Functions:
    Reader: Open a file as a RecordStream, discovering its format from its content.
    discover: Determine the format and compression of a file.
    summarize: Accumulate the statistics of a RecordStream.
    filter_records: Write the alignments of a RecordStream selected by read name.
    read_ids: Read a file of read names.

Example 1:
    from biojtools import Reader, summarize

    stats = summarize(Reader("reads.fastq.gz"), lengths=True)
    print(stats.render("json"))

Example 2:
    from biojtools import Reader, filter_records, read_ids

    counts = filter_records(Reader("aligned.bam"), read_ids("ids.txt"), "filtered.bam", keep=True)

Example 3:
    from biojtools import interval

    for result in interval.multijaccard(["a.bed", "b.bed", "c.bed"]):
        print(result.a, result.b, result.ratio)

For more:
    >> help(biojtools.reader) for more information on reading HTS data.
    >> help(biojtools.interval) for more information on the interval set engine.
    >> help(biojtools.bgzf) for more information on working with BGZF compressed data.
    >> help(biojtools.bam) for more information on working with BAM formatted data.
    >> help(biojtools.errors) for more information on the errors raised.
"""

from .__version import __version__
from .errors import DecodeError, HTSError, IoError, ParseError, TruncatedFileWarning, UnsupportedFormat
from .filter import FilterCounts, filter_records, read_ids
from .reader import Compression, Format, Reader, RecordStream, discover
from .record import AlignmentRecord, Record, SequenceRecord
from .reference import Reference
from .stats import StatsAggregate, summarize
from .writer import Writer
