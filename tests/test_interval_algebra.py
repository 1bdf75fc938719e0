import random
from cnv_overlap.cnv import Cnv
from cnv_overlap.interval_algebra import (coalesce, covered_length,
                                          intersection_length,
                                          sweep_intersection, total_length)
from cnv_overlap.region_set import RegionSet


def amps(*coords):
    return [Cnv('chr1', s, e, 'AMPLIFICATION') for s, e in coords]


def spans(cnvs):
    return [(x.start, x.stop) for x in cnvs]


def test_coalesce_empty():
    assert coalesce([]) == []


def test_coalesce_merges_overlapping_and_adjacent():
    merged = coalesce(amps((201, 350), (100, 200), (400, 500), (450, 460)))
    assert spans(merged) == [(100, 350), (400, 500)]


def test_coalesce_keeps_gap_of_one_base():
    assert spans(coalesce(amps((100, 200), (202, 300)))) == [(100, 200),
                                                             (202, 300)]


def test_coalesce_nested_and_tied_starts():
    merged = coalesce(amps((100, 150), (100, 400), (120, 130), (390, 410)))
    assert spans(merged) == [(100, 410)]


def test_coalesce_does_not_modify_input():
    intervals = amps((300, 400), (100, 350))
    coalesce(intervals)
    assert spans(intervals) == [(300, 400), (100, 350)]


def test_coalesce_is_idempotent():
    rng = random.Random(42)
    for _ in range(50):
        intervals = []
        for _ in range(rng.randint(0, 30)):
            start = rng.randint(1, 1000)
            intervals.append(Cnv('chr1', start, start + rng.randint(0, 80),
                                 'DELETION'))
        once = coalesce(intervals)
        assert coalesce(once) == once


def test_coalesce_preserves_coverage():
    rng = random.Random(7)
    for _ in range(50):
        intervals = []
        for _ in range(rng.randint(1, 20)):
            start = rng.randint(1, 500)
            intervals.append(Cnv('chr1', start, start + rng.randint(0, 50),
                                 'DELETION'))
        covered = set()
        for x in intervals:
            covered.update(range(x.start, x.stop + 1))
        merged = coalesce(intervals)
        assert covered_length(merged) == len(covered)
        for a, b in zip(merged, merged[1:]):
            assert b.start > a.stop + 1


def test_coalesce_coverage_decreases_by_overlap():
    disjoint = amps((1, 10), (20, 30))
    assert covered_length(coalesce(disjoint)) == covered_length(disjoint)
    overlapping = amps((1, 10), (6, 15))
    assert covered_length(overlapping) == 20
    assert covered_length(coalesce(overlapping)) == 15


def test_sweep_intersection():
    a = amps((100, 200), (300, 400), (500, 600))
    b = amps((150, 350), (390, 510), (700, 800))
    # 150-200, 300-350, 390-400, 500-510
    assert sweep_intersection(a, b) == 51 + 51 + 11 + 11
    assert sweep_intersection(b, a) == 124
    assert sweep_intersection(a, []) == 0


def test_sweep_intersection_shared_stop():
    a = amps((100, 200), (250, 300))
    b = amps((150, 200), (260, 270))
    assert sweep_intersection(a, b) == 51 + 11


def test_total_and_intersection_length(sample01, sample02):
    assert total_length(sample01, 'AMPLIFICATION') == 251
    assert total_length(sample02, 'AMPLIFICATION') == 101
    assert intersection_length(sample01, sample02, 'AMPLIFICATION') == 101
    assert total_length(sample01, 'DELETION') == 101
    assert total_length(sample02, 'DELETION') == 202
    assert intersection_length(sample01, sample02, 'DELETION') == 51


def test_total_length_no_matching_state(sample03):
    assert total_length(sample03, 'DELETION') == 0
    assert total_length(RegionSet(), 'AMPLIFICATION') == 0


def test_intersection_ignores_unshared_chromosomes(sample03):
    other = RegionSet.from_records([('chr2', 50, 150, 'AMPLIFICATION'),
                                    ('chr3', 1000, 1999, 'AMPLIFICATION')])
    assert intersection_length(sample03, other, 'AMPLIFICATION') == 51
    assert intersection_length(other, sample03, 'AMPLIFICATION') == 51
