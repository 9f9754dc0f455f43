"""
Statistics accumulated over one pass of a RecordStream.

Sequence records contribute base totals and read length, instrument and flow cell tallies.
Alignment records contribute mapping tallies instead, they carry no base count.
The instrument and flow cell tallies grow with the number of distinct values observed and are not capped.
"""

import csv
import io
import json
import logging
from collections import Counter

from .record import AlignmentRecord, SequenceRecord, parse_read_name

log = logging.getLogger(__name__)

SEQUENCE = 'sequence'
ALIGNMENT = 'alignment'

FORMATS = {
    'human': 'human',
    'h': 'human',
    'csv': 'csv',
    'c': 'csv',
    'tsv': 'tsv',
    't': 'tsv',
    'json': 'json',
    'j': 'json',
}
"""dict: Accepted report format names and aliases."""


class StatsAggregate:
    """
    Mutable accumulator updated once per record.
    """

    def __init__(self, lengths=False, kind=None):
        """
        Constructor.
        :param lengths: Keep the distribution of read lengths.
        :param kind: SEQUENCE or ALIGNMENT, None to take it from the first record.
        """
        self.kind = kind
        self.records = 0
        self.bases = 0
        self.mapped = 0
        self.unmapped = 0
        self.instruments = Counter()
        self.flow_cells = Counter()
        self.lengths = Counter() if lengths else None

    def update(self, record):
        """
        Fold one record into the totals.
        :param record: SequenceRecord or AlignmentRecord.
        :return: None
        """
        if isinstance(record, SequenceRecord):
            self.kind = self.kind or SEQUENCE
            self.bases += record.length
            if self.lengths is not None:
                self.lengths[record.length] += 1
        elif isinstance(record, AlignmentRecord):
            self.kind = self.kind or ALIGNMENT
            if record.mapped:
                self.mapped += 1
            else:
                self.unmapped += 1
        else:
            raise TypeError("Can not summarize {}.".format(type(record).__name__))
        self.records += 1

        parsed = parse_read_name(record.name)
        if parsed is not None:
            self.instruments[parsed.instrument] += 1
            if parsed.flow_cell is not None:
                self.flow_cells[parsed.flow_cell] += 1

    def as_dict(self) -> dict:
        """
        Statistics relevant to the kind of records seen.
        :return: dict of plain values, suitable for serialization.
        """
        stats = {'records': self.records}
        if self.kind == ALIGNMENT:
            stats['mapped'] = self.mapped
            stats['unmapped'] = self.unmapped
        else:
            stats['bases'] = self.bases
        stats['instruments'] = dict(sorted(self.instruments.items()))
        stats['flow_cells'] = dict(sorted(self.flow_cells.items()))
        if self.lengths is not None:
            stats['lengths'] = dict(sorted(self.lengths.items()))
        return stats

    def _rows(self):
        for key, value in self.as_dict().items():
            if isinstance(value, dict):
                for item, count in value.items():
                    yield key, item, count
            else:
                yield key, '', value

    def render(self, fmt='human') -> str:
        """
        Format the statistics as a report.
        :param fmt: One of human, csv, tsv or json. Aliases h, c, t and j are accepted, case is ignored.
        :return: str containing the report.
        """
        name = FORMATS.get(fmt.lower())
        if name is None:
            raise ValueError("Unknown report format {!r}, expected one of {}.".format(fmt, ", ".join(sorted(set(FORMATS.values())))))

        if name == 'json':
            return json.dumps(self.as_dict(), indent=2) + '\n'

        if name in ('csv', 'tsv'):
            output = io.StringIO()
            writer = csv.writer(output, delimiter=',' if name == 'csv' else '\t', lineterminator='\n')
            writer.writerow(('statistic', 'key', 'value'))
            writer.writerows(self._rows())
            return output.getvalue()

        lines = []
        for key, value in self.as_dict().items():
            label = key.replace('_', ' ').capitalize()
            if isinstance(value, dict):
                lines.append("{}: {}".format(label, len(value)))
                lines.extend("  {}\t{}".format(item, count) for item, count in value.items())
            else:
                lines.append("{}: {}".format(label, value))
        return '\n'.join(lines) + '\n'

    def __repr__(self):
        return "StatsAggregate({})".format(self.as_dict())


def summarize(stream, lengths=False) -> StatsAggregate:
    """
    Consume a record stream once and accumulate its statistics.
    :param stream: Iterable of records, usually a RecordStream.
    :param lengths: Keep the distribution of read lengths.
    :return: StatsAggregate, read only once returned.
    """
    format = getattr(stream, 'format', None)
    kind = None
    if format is not None:
        kind = ALIGNMENT if format.alignment else SEQUENCE
    stats = StatsAggregate(lengths, kind)
    for record in stream:
        stats.update(record)
    log.debug("%s: summarized %d records", getattr(stream, 'path', stream), stats.records)
    return stats
