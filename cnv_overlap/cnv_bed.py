import gzip
import csv
import os
from collections import defaultdict, OrderedDict
from cnv_overlap.cnv import Cnv, normalize_state, valid_states
from cnv_overlap.logger import logger
from cnv_overlap.region_set import RegionSet

bed_cols = {'sample': ['chrom', 'start', 'end', 'state', 'sample'],
            None: ['chrom', 'start', 'end', 'state']}
skip_prefixes = ('#', 'track', 'browser')


def sample_name_from_path(path):
    ''' Return the file name of path minus '.gz' and '.bed' suffixes.'''
    name = os.path.basename(path)
    for suffix in ('.gz', '.bed'):
        if name.endswith(suffix):
            name = name[:-len(suffix)]
    return name


def read_bed(bed, bed_format=None):
    '''
    Read CNV calls from a (optionally gzipped) BED file into RegionSets.

    Args:
        bed: input BED format file. Start coordinates are 0-based as
             usual for BED and are converted to 1-based inclusive
             coordinates.

        bed_format:
             Column layout. If None the fourth column gives the CNV
             state and all calls belong to a single sample named after
             the file. If 'sample' a fifth column gives the sample name
             so that one file can hold calls for many samples.

    Returns an OrderedDict of sample name to RegionSet in the order
    samples are first seen.
    '''
    if bed_format not in bed_cols:
        raise ValueError("Unrecognized BED format '{}'".format(bed_format))
    if bed.endswith('.gz'):
        o_func = gzip.open
    else:
        o_func = open
    default_name = sample_name_from_path(bed)
    regions = OrderedDict()
    unrecognized = defaultdict(int)
    n = 0
    with o_func(bed, 'rt') as fh:
        rows = csv.DictReader((x for x in fh if x.strip() and not
                               x.startswith(skip_prefixes)),
                              delimiter='\t',
                              fieldnames=bed_cols[bed_format])
        for row in rows:
            if row['state'] is None or (bed_format == 'sample' and
                                        row['sample'] is None):
                raise ValueError("Too few columns in BED file {}: {}".format(
                    bed, "\t".join(v for v in row.values() if v)))
            state = normalize_state(row['state'])
            if state not in valid_states:
                unrecognized[state] += 1
            name = row['sample'] if bed_format == 'sample' else default_name
            cnv = Cnv(chrom=row['chrom'],
                      start=int(row['start']) + 1,
                      stop=row['end'],
                      state=state)
            regions.setdefault(name, []).append(cnv)
            n += 1
    for state, count in unrecognized.items():
        logger.warning("{:,} calls in {} have unrecognized state '{}'"
                       .format(count, bed, state))
    logger.info("Read {:,} calls for {:,} sample(s) from {}".format(
        n, len(regions), bed))
    return OrderedDict((k, RegionSet(v, name=k)) for k, v in regions.items())
