from collections import defaultdict
from cnv_overlap.cnv import Cnv
from cnv_overlap.interval_algebra import coalesce, sort_intervals


class RegionSet(object):
    '''
    The genomic footprint of one sample: for every chromosome and state a
    sorted tuple of coalesced Cnv intervals. Strand is not recorded.
    '''

    def __init__(self, cnvs=(), name=None):
        '''
        Args:
            cnvs: iterable of Cnv objects in any order. Overlapping and
                  abutting intervals of the same state on the same
                  chromosome are merged.

            name: optional sample name.
        '''
        self.name = name
        regions = defaultdict(lambda: defaultdict(list))
        for cnv in cnvs:
            regions[cnv.chrom][cnv.state].append(cnv)
        self._regions = dict()
        for chrom, by_state in regions.items():
            self._regions[chrom] = dict((state, tuple(coalesce(reg))) for
                                        state, reg in by_state.items())

    @classmethod
    def from_records(cls, records, name=None):
        '''
        Build a RegionSet from (chrom, start, end, state) tuples using
        1-based inclusive coordinates. A fifth strand field is accepted
        and ignored.
        '''
        cnvs = []
        for rec in records:
            if len(rec) not in (4, 5):
                raise ValueError("Expected (chrom, start, end, state) " +
                                 "record, got {!r}".format(rec))
            cnvs.append(Cnv(chrom=rec[0], start=rec[1], stop=rec[2],
                            state=rec[3]))
        return cls(cnvs, name=name)

    @property
    def chroms(self):
        return list(self._regions)

    @property
    def states(self):
        return set(s for by_state in self._regions.values() for s in
                   by_state)

    def intervals(self, chrom, state):
        ''' Coalesced intervals of state on chrom (empty if none).'''
        return self._regions.get(chrom, {}).get(state, ())

    def has_state(self, state):
        return any(by_state.get(state) for by_state in
                   self._regions.values())

    def __iter__(self):
        return iter(sort_intervals(x for by_state in self._regions.values()
                                   for reg in by_state.values()
                                   for x in reg))

    def __len__(self):
        return sum(len(reg) for by_state in self._regions.values() for reg
                   in by_state.values())

    def __str__(self):
        return "{} ({} intervals on {} chromosomes)".format(
            self.name or 'RegionSet', len(self), len(self._regions))
