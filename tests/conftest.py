import pytest
from cnv_overlap.region_set import RegionSet


@pytest.fixture
def sample01():
    return RegionSet.from_records([('chr1', 100, 200, 'AMPLIFICATION'),
                                   ('chr1', 201, 350, 'AMPLIFICATION'),
                                   ('chr1', 400, 500, 'DELETION')],
                                  name='sample01')


@pytest.fixture
def sample02():
    return RegionSet.from_records([('chr1', 150, 250, 'AMPLIFICATION'),
                                   ('chr1', 200, 350, 'DELETION'),
                                   ('chr1', 450, 500, 'DELETION')],
                                  name='sample02')


@pytest.fixture
def sample03():
    ''' Amplifications on chr1 and chr2, no deletions.'''
    return RegionSet.from_records([('chr1', 1000, 1999, 'AMPLIFICATION'),
                                   ('chr2', 1, 100, 'AMPLIFICATION')],
                                  name='sample03')
