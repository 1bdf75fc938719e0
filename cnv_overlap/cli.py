import sys
import argparse
import csv
import logging
from collections import OrderedDict
from cnv_overlap.cnv import valid_states
from cnv_overlap.cnv_bed import read_bed, bed_cols
from cnv_overlap.cnv_vcf import is_vcf, read_vcf
from cnv_overlap.logger import logger
from cnv_overlap.matrix import undefined_distance_options
from cnv_overlap.metrics import metric_names
from cnv_overlap.scorer import score_all


def get_argparser():
    parser = argparse.ArgumentParser(
        usage='%(prog)s [options] FILE [FILE ...]',
        description='''Compare the genomic territory covered by CNV calls
                    of many samples and output a symmetric similarity
                    matrix.''')
    parser.add_argument('inputs', metavar='FILE', nargs='+',
                        help='''BED or VCF/BCF files with CNV calls. VCFs
                        provide one sample per VCF sample; BED files
                        provide one sample per file unless --bed_format
                        is 'sample'.''')
    parser.add_argument('-m', '--metric', default='sorensen',
                        choices=metric_names, help='''Similarity metric to
                        calculate. Default=sorensen.''')
    parser.add_argument('-s', '--state', default='AMPLIFICATION',
                        choices=valid_states, help='''CNV state to compare.
                        Default=AMPLIFICATION.''')
    parser.add_argument('-o', '--output', help='''Output file for the
                        similarity matrix. Default is STDOUT.''')
    parser.add_argument('-d', '--distance', metavar='FILE', help='''Also
                        write a clustering distance matrix (1 - score) to
                        this file.''')
    parser.add_argument('--undefined_distance', default='identical',
                        choices=undefined_distance_options, help='''How to
                        treat pairs with no defined score in the distance
                        matrix. 'identical' gives them a distance of 0,
                        'nan' writes NA. Default=identical.''')
    parser.add_argument('-p', '--processes', type=int, default=None,
                        metavar='N', help='''Number of processes to use to
                        calculate scores.''')
    parser.add_argument('--bed_format', default=None,
                        choices=[x for x in bed_cols if x is not None],
                        help='''Set to 'sample' if BED files have a fifth
                        column giving the sample name.''')
    parser.add_argument('--ploidy', type=int, default=2, help='''Expected
                        copy number for VCF inputs. Default=2.''')
    parser.add_argument('--pass_filters', action='store_true',
                        help='''Only use VCF records with PASS in the FILTER
                        field.''')
    parser.add_argument('--minimum_length', type=int, default=0,
                        metavar='N', help='''Ignore VCF records shorter than
                        this value.''')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Only log warnings and errors.')
    parser.add_argument('--debug', action='store_true',
                        help='Output debugging information.')
    return parser


def load_samples(inputs, bed_format=None, ploidy=2, pass_filters=False,
                 minimum_length=0):
    ''' Return an OrderedDict of sample name to RegionSet from inputs.'''
    samples = OrderedDict()
    for f in inputs:
        if is_vcf(f):
            region_sets = read_vcf(f, ploidy=ploidy,
                                   pass_filters=pass_filters,
                                   minimum_length=minimum_length)
        else:
            region_sets = read_bed(f, bed_format=bed_format)
        for name, rs in region_sets.items():
            if name in samples:
                raise ValueError("Sample '{}' found more than once ".format(
                    name) + "in input files")
            samples[name] = rs
    return samples


def write_rows(rows, output=None):
    if output is None:
        writer = csv.writer(sys.stdout, delimiter='\t', lineterminator='\n')
        writer.writerows(rows)
    else:
        with open(output, 'wt', newline='') as fh:
            writer = csv.writer(fh, delimiter='\t', lineterminator='\n')
            writer.writerows(rows)


def distance_rows(names, distance, na='NA'):
    yield [''] + list(names)
    for name, row in zip(names, distance):
        yield [name] + [na if x != x else repr(float(x)) for x in row]


def main(inputs, metric='sorensen', state='AMPLIFICATION', output=None,
         distance=None, undefined_distance='identical', processes=None,
         bed_format=None, ploidy=2, pass_filters=False, minimum_length=0,
         quiet=False, debug=False):
    if debug:
        logger.setLevel(logging.DEBUG)
    elif quiet:
        logger.setLevel(logging.WARNING)
    samples = load_samples(inputs, bed_format=bed_format, ploidy=ploidy,
                           pass_filters=pass_filters,
                           minimum_length=minimum_length)
    if len(samples) < 2:
        raise ValueError("At least 2 samples are required but {} ".format(
            len(samples)) + "found in input files.")
    matrix = score_all(samples, metric, state, processes=processes)
    write_rows(matrix.rows(), output)
    if distance is not None:
        dist = matrix.to_clustering_distance(undefined=undefined_distance)
        write_rows(distance_rows(matrix.names, dist), distance)
        logger.info("Wrote distance matrix to {}".format(distance))
    return matrix


def run():
    parser = get_argparser()
    args = parser.parse_args()
    try:
        main(**vars(args))
    except ValueError as e:
        sys.exit("ERROR: {}".format(e))


if __name__ == '__main__':
    run()
