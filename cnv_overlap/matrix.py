'''
Assembly of pairwise scores into symmetric score and distance matrices.

Pairwise scores are collected for one triangle only, keyed by
(row_name, column_name). The functions here turn them into a complete
ScoreMatrix without modifying their inputs.
'''
import numpy as np
from cnv_overlap.metrics import Metric, Score

undefined_distance_options = ['identical', 'nan']


class ScoreMatrix(object):
    '''
    A completed, read-only N x N similarity matrix.

    Attributes:
        names:   sample names labelling both rows and columns.

        values:  float array; cells without a defined score hold 0.0.

        defined: boolean array, False where no defined score exists.

        metric:  the Metric used (may be None).

        state:   the state compared (may be None).
    '''

    def __init__(self, names, values, defined, metric=None, state=None):
        self.names = list(names)
        n = len(self.names)
        values = np.array(values, dtype=float)
        defined = np.array(defined, dtype=bool)
        if values.shape != (n, n) or defined.shape != (n, n):
            raise ValueError("Matrix shape {} does not match {} names"
                             .format(values.shape, n))
        values.flags.writeable = False
        defined.flags.writeable = False
        self.values = values
        self.defined = defined
        self.metric = metric
        self.state = state
        self._index = dict((k, i) for i, k in enumerate(self.names))

    def __len__(self):
        return len(self.names)

    @property
    def scores(self):
        ''' Copy of values with NaN wherever the score is undefined.'''
        return np.where(self.defined, self.values, np.nan)

    @property
    def n_undefined(self):
        ''' Number of unordered sample pairs without a defined score.'''
        return int(np.count_nonzero(~self.defined)) // 2

    def score(self, a, b):
        ''' Return the Score for samples a and b.'''
        i = self._index[a]
        j = self._index[b]
        if not self.defined[i, j]:
            return Score.UNDEFINED
        return Score(self.values[i, j])

    def to_clustering_distance(self, undefined='identical'):
        return to_clustering_distance(self, undefined=undefined)

    def heatmap_input(self, distance=None, undefined='identical'):
        '''
        Return the arguments a heatmap renderer needs: the numeric
        matrix, the row/column labels and a distance matrix for
        clustering. A caller supplied distance matrix is used if given.
        '''
        if distance is None:
            distance = self.to_clustering_distance(undefined=undefined)
        else:
            distance = np.asarray(distance, dtype=float)
            if distance.shape != self.values.shape:
                raise ValueError("Distance matrix shape {} ".format(
                    distance.shape) + "does not match score matrix " +
                    "shape {}".format(self.values.shape))
        return {'matrix': self.values.copy(),
                'labels': list(self.names),
                'distance': distance}

    def rows(self, na='NA'):
        '''
        Yield a header row followed by one row per sample, with
        undefined cells given as na.
        '''
        yield [''] + self.names
        for i, name in enumerate(self.names):
            yield [name] + [repr(float(self.values[i, j])) if
                            self.defined[i, j] else na for j in
                            range(len(self.names))]


def symmetrize(names, pair_scores, metric=None, state=None,
               diagonal_value=1.0):
    '''
    Build a ScoreMatrix from scores for one triangle of sample pairs.

    Args:
        names:
            Sample names in matrix order.

        pair_scores:
            Mapping of (name_a, name_b) to Score (or float, NaN meaning
            undefined). Either orientation of a pair may be used; where
            both are present the lower-triangle entry (row after column)
            is used unless it is undefined.

        diagonal_value:
            Value for self comparisons.
    '''
    names = list(names)
    n = len(names)
    if len(set(names)) != n:
        raise ValueError("Sample names must be unique")
    index = dict((k, i) for i, k in enumerate(names))
    for a, b in pair_scores:
        if a not in index or b not in index:
            raise ValueError("Pair ({}, {}) contains unknown sample".format(
                a, b))
    values = np.zeros((n, n), dtype=float)
    defined = np.zeros((n, n), dtype=bool)
    for i in range(n):
        for j in range(i):
            s = _pair_score(pair_scores, names[i], names[j])
            if s.defined:
                values[i, j] = values[j, i] = s.value
                defined[i, j] = defined[j, i] = True
    np.fill_diagonal(values, diagonal_value)
    np.fill_diagonal(defined, True)
    if metric is not None:
        metric = Metric.from_name(metric)
    return ScoreMatrix(names, values, defined, metric=metric, state=state)


def _as_score(value):
    if value is None or isinstance(value, Score):
        return value
    return Score(value)


def _pair_score(pair_scores, row, col):
    lower = _as_score(pair_scores.get((row, col)))
    if lower is not None and lower.defined:
        return lower
    upper = _as_score(pair_scores.get((col, row)))
    if upper is not None and upper.defined:
        return upper
    return Score.UNDEFINED


def symmetrize_array(names, triangular, metric=None, state=None,
                     diagonal_value=1.0):
    '''
    Build a ScoreMatrix from an N x N array in which only one triangle
    holds scores and NaN marks an undefined score. Cell (i, j) with
    i < j takes the lower-triangle value (j, i) when defined, otherwise
    its own value.
    '''
    triangular = np.asarray(triangular, dtype=float)
    names = list(names)
    n = len(names)
    if triangular.shape != (n, n):
        raise ValueError("Matrix shape {} does not match {} names".format(
            triangular.shape, n))
    pair_scores = dict()
    for i in range(n):
        for j in range(i):
            pair_scores[(names[i], names[j])] = Score(triangular[i, j])
            pair_scores[(names[j], names[i])] = Score(triangular[j, i])
    return symmetrize(names, pair_scores, metric=metric, state=state,
                      diagonal_value=diagonal_value)


def to_clustering_distance(score_matrix, undefined='identical'):
    '''
    Return 1 - score for every cell of a ScoreMatrix.

    Args:
        score_matrix:
            a completed ScoreMatrix.

        undefined:
            How to treat pairs without a defined score. 'identical'
            gives them a distance of 0, i.e. samples that could not be
            compared cluster as if they were identical. 'nan' leaves
            NaN in those cells for callers using a NaN-aware clustering
            method.
    '''
    if undefined not in undefined_distance_options:
        raise ValueError("undefined must be one of {} (got {!r})".format(
            ", ".join(undefined_distance_options), undefined))
    if undefined == 'identical':
        similarity = np.where(score_matrix.defined, score_matrix.values, 1.0)
    else:
        similarity = score_matrix.scores
    return 1.0 - similarity
