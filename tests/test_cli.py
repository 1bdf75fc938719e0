import csv
import pytest
from cnv_overlap.cli import get_argparser, main


def write_bed(path, lines):
    path.write_text("".join("\t".join(str(x) for x in line) + "\n" for line
                            in lines))
    return str(path)


def read_tsv(path):
    with open(path, 'rt') as fh:
        return list(csv.reader(fh, delimiter='\t'))


@pytest.fixture
def beds(tmp_path):
    a = write_bed(tmp_path / 'a.bed', [('chr1', 99, 200, 'AMPLIFICATION'),
                                       ('chr1', 200, 350, 'GAIN'),
                                       ('chr1', 399, 500, 'DELETION')])
    b = write_bed(tmp_path / 'b.bed', [('chr1', 149, 250, 'AMPLIFICATION'),
                                       ('chr1', 199, 350, 'DELETION'),
                                       ('chr1', 449, 500, 'DELETION')])
    c = write_bed(tmp_path / 'c.bed', [('chr2', 0, 100, 'DELETION')])
    return [a, b, c]


def test_argparser_defaults():
    args = get_argparser().parse_args(['a.bed', 'b.bed'])
    assert args.inputs == ['a.bed', 'b.bed']
    assert args.metric == 'sorensen'
    assert args.state == 'AMPLIFICATION'
    assert args.undefined_distance == 'identical'


def test_argparser_rejects_unknown_metric():
    with pytest.raises(SystemExit):
        get_argparser().parse_args(['-m', 'pearson', 'a.bed'])


def test_main_writes_matrix(beds, tmp_path):
    out = str(tmp_path / 'scores.tsv')
    dist = str(tmp_path / 'dist.tsv')
    matrix = main(beds, output=out, distance=dist, quiet=True)
    rows = read_tsv(out)
    assert rows[0] == ['', 'a', 'b', 'c']
    assert rows[1][1] == '1.0'
    assert float(rows[1][2]) == pytest.approx(202 / 352)
    assert rows[2][1] == rows[1][2]
    # c has no amplifications
    assert rows[3][1:] == ['NA', 'NA', '1.0']
    assert matrix.n_undefined == 2
    dist_rows = read_tsv(dist)
    assert float(dist_rows[1][2]) == pytest.approx(1 - 202 / 352)
    assert float(dist_rows[3][1]) == 0.0


def test_main_nan_distance(beds, tmp_path):
    dist = str(tmp_path / 'dist.tsv')
    main(beds, metric='jaccard', state='DELETION', output=str(tmp_path /
         'scores.tsv'), distance=dist, undefined_distance='nan', quiet=True)
    dist_rows = read_tsv(dist)
    # a and c share no deletions but both have some
    assert float(dist_rows[1][3]) == 1.0
    assert float(dist_rows[1][2]) == pytest.approx(1 - 51 / 252)


def test_main_undefined_as_na_in_distance(beds, tmp_path):
    dist = str(tmp_path / 'dist.tsv')
    main(beds, output=str(tmp_path / 'scores.tsv'), distance=dist,
         undefined_distance='nan', quiet=True)
    assert read_tsv(dist)[3][1] == 'NA'


def test_main_stdout(beds, capsys):
    main(beds[:2], metric='szymkiewicz', quiet=True)
    rows = [x.split('\t') for x in capsys.readouterr().out.splitlines()]
    assert rows[1] == ['a', '1.0', '1.0']


def test_main_requires_two_samples(beds):
    with pytest.raises(ValueError):
        main(beds[:1], quiet=True)


def test_main_duplicate_samples(beds):
    with pytest.raises(ValueError):
        main([beds[0], beds[0]], quiet=True)
