'''
Similarity scores computed from the covered lengths of two samples and
the length of their intersection.

Each metric function takes (len_a, len_b, inter) and returns a Score,
which is either a defined value between 0 and 1 or Score.UNDEFINED when
the metric's denominator is zero.
'''
import math
from enum import Enum


class Score(object):
    ''' A similarity score that may be undefined.'''

    __slots__ = ['_value']

    def __init__(self, value):
        if value is not None:
            value = float(value)
            if math.isnan(value):
                value = None
        object.__setattr__(self, '_value', value)

    def __setattr__(self, name, value):
        raise AttributeError("Score objects are immutable")

    def __reduce__(self):
        return (Score, (self._value,))

    @property
    def defined(self):
        return self._value is not None

    @property
    def value(self):
        ''' The score as a float, or None if undefined.'''
        return self._value

    def __float__(self):
        if self._value is None:
            return math.nan
        return self._value

    def __eq__(self, other):
        if isinstance(other, Score):
            return self._value == other._value
        return NotImplemented

    def __hash__(self):
        return hash(self._value)

    def __repr__(self):
        if self._value is None:
            return "Score.UNDEFINED"
        return "Score({!r})".format(self._value)

    def __str__(self):
        if self._value is None:
            return 'NA'
        return str(self._value)


Score.UNDEFINED = Score(None)


def _check_lengths(len_a, len_b, inter):
    if len_a < 0 or len_b < 0 or inter < 0:
        raise ValueError("Lengths must not be negative (got {}, {}, {})"
                         .format(len_a, len_b, inter))
    if inter > min(len_a, len_b):
        raise ValueError("Intersection length {} exceeds ".format(inter) +
                         "the smaller set length {}".format(min(len_a,
                                                                len_b)))


def sorensen(len_a, len_b, inter):
    ''' Sørensen–Dice: twice the intersection over the sum of sizes.'''
    _check_lengths(len_a, len_b, inter)
    if len_a + len_b == 0:
        return Score.UNDEFINED
    return Score(2.0 * inter / (len_a + len_b))


def szymkiewicz(len_a, len_b, inter):
    ''' Szymkiewicz–Simpson: the intersection over the smaller size.'''
    _check_lengths(len_a, len_b, inter)
    smaller = min(len_a, len_b)
    if smaller == 0:
        return Score.UNDEFINED
    return Score(float(inter) / smaller)


def jaccard(len_a, len_b, inter):
    ''' Jaccard: the intersection over the union.'''
    _check_lengths(len_a, len_b, inter)
    union = len_a + len_b - inter
    if union == 0:
        return Score.UNDEFINED
    return Score(float(inter) / union)


class Metric(Enum):
    SORENSEN = 'sorensen'
    SZYMKIEWICZ = 'szymkiewicz'
    JACCARD = 'jaccard'

    @classmethod
    def from_name(cls, name):
        ''' Return the Metric for a member or case-insensitive name.'''
        if isinstance(name, cls):
            return name
        if isinstance(name, str):
            try:
                return cls(name.lower())
            except ValueError:
                pass
        raise InvalidMetricError(
            "Unknown metric {!r}. Valid metrics are: {}".format(
                name, ", ".join(metric_names)))

    def __call__(self, len_a, len_b, inter):
        return _metric_functions[self](len_a, len_b, inter)


_metric_functions = {Metric.SORENSEN: sorensen,
                     Metric.SZYMKIEWICZ: szymkiewicz,
                     Metric.JACCARD: jaccard}

metric_names = [m.value for m in Metric]


class InvalidMetricError(ValueError):
    pass
