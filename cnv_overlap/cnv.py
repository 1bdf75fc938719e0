AMPLIFICATION = 'AMPLIFICATION'
DELETION = 'DELETION'
valid_states = [AMPLIFICATION, DELETION]

state_aliases = {'AMPLIFICATION': AMPLIFICATION,
                 'GAIN': AMPLIFICATION,
                 'DUP': AMPLIFICATION,
                 'duplication': AMPLIFICATION,
                 'copy number gain': AMPLIFICATION,
                 'DELETION': DELETION,
                 'LOSS': DELETION,
                 'DEL': DELETION,
                 'deletion': DELETION,
                 'copy number loss': DELETION}


def normalize_state(label):
    '''
    Return AMPLIFICATION or DELETION for a recognised state label or
    alias. Unrecognised labels are returned unchanged.
    '''
    label = label.strip()
    if label in state_aliases:
        return state_aliases[label]
    return state_aliases.get(label.upper(), label)


def check_state(state):
    ''' Raise InvalidStateError unless state is a non-empty string.'''
    if not isinstance(state, str) or not state:
        raise InvalidStateError("State filter must be a non-empty string, " +
                                "got {!r}".format(state))
    return state


def _coordinate(chrom, start, stop, value):
    '''
    Return value as an int. Integer strings are accepted; bools, floats
    with a fractional part and anything else raise InvalidIntervalError.
    '''
    if isinstance(value, bool) or (isinstance(value, float) and
                                   not value.is_integer()):
        value = None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidIntervalError("Non-integer coordinates for " +
                                   "interval {}:{}-{}".format(chrom, start,
                                                              stop))


class Cnv(object):
    '''
    A labelled genomic interval. Coordinates are 1-based and inclusive
    so a Cnv covering a single base has start == stop.
    '''

    __slots__ = ['chrom', 'start', 'stop', 'state']

    def __init__(self, chrom, start, stop, state):
        start = _coordinate(chrom, start, stop, start)
        stop = _coordinate(chrom, start, stop, stop)
        if stop < start:
            raise InvalidIntervalError("Interval {}:{}-{} ".format(chrom,
                                                                  start,
                                                                  stop) +
                                       "ends before it starts")
        self.chrom = chrom
        self.start = start
        self.stop = stop
        self.state = state

    @property
    def length(self):
        return self.stop - self.start + 1

    def __repr__(self):
        return "Cnv({!r}, {}, {}, {!r})".format(self.chrom, self.start,
                                                self.stop, self.state)

    def __str__(self):
        return "{}:{}-{}-{}".format(self.chrom, self.start, self.stop,
                                    self.state)

    def __eq__(self, other):
        return (isinstance(other, Cnv) and self.state == other.state and
                self.chrom == other.chrom and self.start == other.start and
                self.stop == other.stop)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.chrom, self.start, self.stop, self.state))

    def touches(self, other):
        ''' Return True if other overlaps or directly abuts this Cnv.'''
        if self.chrom != other.chrom:
            return False
        return self.start <= other.stop + 1 and self.stop + 1 >= other.start

    def overlap_length(self, other):
        ''' Number of bases shared with other (0 if none).'''
        if self.chrom != other.chrom:
            return 0
        return max(0, min(self.stop, other.stop) -
                   max(self.start, other.start) + 1)

    def merge_new(self, others):
        '''
        Return a new Cnv spanning this Cnv and every Cnv in others. Each
        of others must overlap or abut the growing merged interval when
        taken in the given order.

        Args:
            others:
                A list of additional CNVs sorted in coordinate order.
        '''
        merged = Cnv(self.chrom, self.start, self.stop, self.state)
        for other in others:
            if not merged.touches(other):
                raise NonOverlappingIntervalError(
                    "Can not merge non-overlapping intervals '{}' and '{}'"
                    .format(merged, other))
            if other.start < merged.start:
                merged.start = other.start
            if other.stop > merged.stop:
                merged.stop = other.stop
        return merged


class InvalidIntervalError(ValueError):
    pass


class InvalidStateError(ValueError):
    pass


class NonOverlappingIntervalError(ValueError):
    pass
