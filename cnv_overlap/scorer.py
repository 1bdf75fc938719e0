from collections import OrderedDict
from multiprocessing import Pool
from cnv_overlap.cnv import check_state
from cnv_overlap.interval_algebra import total_length, intersection_length
from cnv_overlap.logger import logger
from cnv_overlap.matrix import symmetrize
from cnv_overlap.metrics import Metric, Score


def score(sample_a, sample_b, metric, state):
    '''
    Score the territory shared by intervals of the given state in two
    RegionSets.

    Args:
        sample_a, sample_b:
                RegionSet objects to compare.

        metric: a Metric or metric name ('sorensen', 'szymkiewicz' or
                'jaccard').

        state:  state label to compare, e.g. 'AMPLIFICATION'.

    Returns Score.UNDEFINED if either sample has no intervals of the
    given state, even where the metric itself would be defined.
    '''
    metric = Metric.from_name(metric)
    check_state(state)
    if not sample_a.has_state(state) or not sample_b.has_state(state):
        return Score.UNDEFINED
    len_a = total_length(sample_a, state)
    len_b = total_length(sample_b, state)
    inter = intersection_length(sample_a, sample_b, state)
    return metric(len_a, len_b, inter)


def _score_pair(args):
    i, j, sample_a, sample_b, metric, state = args
    return i, j, score(sample_a, sample_b, metric, state)


def _named_samples(samples):
    if hasattr(samples, 'items'):
        return OrderedDict(samples.items())
    named = OrderedDict()
    for rs in samples:
        if rs.name is None:
            raise ValueError("RegionSets must be named when passed as a " +
                             "sequence")
        if rs.name in named:
            raise ValueError("Duplicate sample name '{}'".format(rs.name))
        named[rs.name] = rs
    return named


def score_all(samples, metric, state, processes=None):
    '''
    Score every pair of samples and return a completed ScoreMatrix.

    Only the lower triangle is computed; the matrix assembler mirrors it.
    Undefined pairs are recorded as such and do not stop the run.

    Args:
        samples:
            Mapping of sample name to RegionSet, or a sequence of named
            RegionSets. Matrix rows follow this order.

        metric:
            a Metric or metric name.

        state:
            state label to compare.

        processes:
            Number of worker processes to use. Pairs are scored serially
            if None or less than 2.
    '''
    metric = Metric.from_name(metric)
    check_state(state)
    named = _named_samples(samples)
    if not named:
        raise ValueError("At least one sample is required")
    names = list(named)
    region_sets = list(named.values())
    jobs = ((i, j, region_sets[i], region_sets[j], metric, state) for i in
            range(len(names)) for j in range(i))
    n_pairs = len(names) * (len(names) - 1) // 2
    logger.info("Scoring {:,} sample pairs for {} using {}".format(
        n_pairs, state, metric.value))
    pair_scores = dict()
    if processes is not None and processes > 1 and n_pairs > 1:
        with Pool(processes) as pool:
            results = list(pool.imap_unordered(_score_pair, jobs,
                                               chunksize=64))
    else:
        results = (_score_pair(x) for x in jobs)
    n_undefined = 0
    for i, j, result in results:
        if not result.defined:
            n_undefined += 1
            logger.debug("Undefined {} score for {} vs {}".format(
                metric.value, names[i], names[j]))
        pair_scores[(names[i], names[j])] = result
    if n_undefined:
        logger.info("{:,} of {:,} pairs have an undefined score".format(
            n_undefined, n_pairs))
    return symmetrize(names, pair_scores, metric=metric, state=state)
