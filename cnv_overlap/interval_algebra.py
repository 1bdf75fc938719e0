'''
Interval arithmetic on Region Sets.

All functions work on 1-based inclusive Cnv intervals and never modify
the intervals they are given.
'''
from operator import attrgetter


def _coalesce_key(cnv):
    # longest interval first when starts are tied
    return (cnv.start, -cnv.stop)


def coalesce(intervals):
    '''
    Return the minimal sorted list of non-overlapping, non-abutting
    intervals covering the same territory as the given intervals.

    Args:
        intervals:
            Cnv objects on a single chromosome in any order. Each output
            interval takes its chromosome and state from the first
            interval of the run it was merged from.
    '''
    merged = []
    buff = None
    for cnv in sorted(intervals, key=_coalesce_key):
        if buff is None:
            buff = [cnv]
            buff_stop = cnv.stop
        elif cnv.start <= buff_stop + 1:
            buff.append(cnv)
            buff_stop = max(buff_stop, cnv.stop)
        else:
            merged.append(buff[0].merge_new(buff[1:]))
            buff = [cnv]
            buff_stop = cnv.stop
    if buff:
        merged.append(buff[0].merge_new(buff[1:]))
    return merged


def covered_length(intervals):
    ''' Sum of the lengths of intervals (no coalescing performed).'''
    return sum(x.length for x in intervals)


def sweep_intersection(a, b):
    '''
    Number of bases shared by two coalesced, sorted interval lists from
    the same chromosome.
    '''
    i = 0
    j = 0
    inter = 0
    while i < len(a) and j < len(b):
        x = a[i]
        y = b[j]
        inter += x.overlap_length(y)
        if x.stop < y.stop:
            i += 1
        elif y.stop < x.stop:
            j += 1
        else:
            i += 1
            j += 1
    return inter


def total_length(region_set, state):
    ''' Bases covered by intervals of the given state in region_set.'''
    return sum(covered_length(region_set.intervals(chrom, state))
               for chrom in region_set.chroms)


def intersection_length(a, b, state):
    '''
    Bases covered by intervals of the given state in both region sets.
    Chromosomes present in only one of the sets contribute nothing.
    '''
    inter = 0
    for chrom in sorted(set(a.chroms).intersection(b.chroms)):
        inter += sweep_intersection(a.intervals(chrom, state),
                                    b.intervals(chrom, state))
    return inter


def sort_intervals(intervals):
    ''' Return intervals sorted by chromosome, start and stop.'''
    return sorted(intervals, key=attrgetter('chrom', 'start', 'stop'))
