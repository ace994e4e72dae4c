import io

from apriori_miner.__main__ import main


def _write(tmp_path, text):
    path = tmp_path / "baskets.csv"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_cli_prints_each_level(tmp_path):
    path = _write(tmp_path, "a,b\na,b,c\na\nb,c\n")
    stream = io.StringIO()
    assert main([path, "--min-support", "0.5"], stream=stream) == 0
    assert stream.getvalue() == (
        "[c]\t0.5\n[a]\t0.75\n[b]\t0.75\n\n"
        "[a, b]\t0.5\n[b, c]\t0.5\n\n"
    )


def test_cli_bitset_counting_matches(tmp_path):
    path = _write(tmp_path, "x,y,z\n")
    scan, bitset = io.StringIO(), io.StringIO()
    assert main([path, "--min-support", "1"], stream=scan) == 0
    assert main([path, "--min-support", "1", "--counting", "bitset", "--no-prune"], stream=bitset) == 0
    assert scan.getvalue() == bitset.getvalue()
    assert "[x, y, z]\t1.0" in scan.getvalue()


def test_cli_missing_file(tmp_path):
    stream = io.StringIO()
    assert main([str(tmp_path / "nope.csv")], stream=stream) == 1
    assert stream.getvalue() == ""


def test_cli_empty_dataset(tmp_path):
    path = _write(tmp_path, "\n\n")
    assert main([path], stream=io.StringIO()) == 1


def test_cli_invalid_threshold(tmp_path):
    path = _write(tmp_path, "a\n")
    assert main([path, "--min-support", "1.5"], stream=io.StringIO()) == 1


def test_cli_invalid_max_length(tmp_path):
    path = _write(tmp_path, "a\n")
    assert main([path, "--max-length", "0"], stream=io.StringIO()) == 2
