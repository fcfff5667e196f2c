import pytest

from s21comp.measurement import load
from s21comp.measurement.csv_source import (
    label_from_filename, read_rows, read_rows_from_path, sniff_delimiter,
)
from s21comp.measurement.extractor import ExtractorConfig, extract


def test_comma_rows_and_blank_lines():
    text = "Freq,S11,S21\n\n1e9,-10,-3\n\n2e9,-11,-4\n"
    assert read_rows(text) == [
        ["Freq", "S11", "S21"],
        ["1e9", "-10", "-3"],
        ["2e9", "-11", "-4"],
    ]


def test_bytes_with_bom():
    content = "\ufeffFreq,S11,S21\n1e9,-10,-3\n".encode("utf-8")
    rows = read_rows(content)
    assert rows[0] == ["Freq", "S11", "S21"]


def test_semicolon_sniffed():
    text = "Freq;S11;S21\n1e9;-10;-3\n2e9;-11;-4\n"
    assert sniff_delimiter(text) == ";"
    assert read_rows(text)[1] == ["1e9", "-10", "-3"]


def test_sniff_with_metadata_lines():
    text = "BEGIN\nfreq;s11;s21\n1;2;3\nEND\n"
    assert sniff_delimiter(text) == ";"


SEMICOLON_METADATA = (
    "!Date; 2024-05-02; 10:00\n"
    "!Instrument; VNA; SN 1234\n"
    "!Start; 1 GHz; Stop; 2 GHz\n"
    "!Points; 2\n"
    "!IFBW; 1 kHz; Avg; 1\n"
)


@pytest.mark.parametrize("delimiter", [",", "\t"])
def test_comment_metadata_does_not_pick_delimiter(delimiter):
    body = delimiter.join(["Freq(Hz)", "S11(dB)", "S21(dB)"]) + "\n"
    body += delimiter.join(["1000000000", "-10", "-3"]) + "\n"
    body += delimiter.join(["2000000000", "-11", "-4"]) + "\n"
    assert sniff_delimiter(SEMICOLON_METADATA + body) == delimiter


def test_plain_metadata_lines_do_not_pick_delimiter():
    text = (
        "Date|2024-05-02|10:00\n"
        "Instrument|VNA|SN 1234\n"
        "Start Freq|1|GHz\n"
        "Stop Freq|2|GHz\n"
        "BEGIN\n"
        "Freq(Hz),S11(dB),S21(dB)\n"
        "1000000000,-10,-3\n"
        "END\n"
    )
    assert sniff_delimiter(text) == ","


def test_header_row_beats_decimal_commas():
    text = "!Date; 2024\nFreq(Hz);S11(dB);S21(dB)\n1000000000;-10,5;-3,25\n"
    assert sniff_delimiter(text) == ";"


def test_semicolon_metadata_over_comma_data_loads_correctly():
    text = SEMICOLON_METADATA + "Freq(Hz),S11(dB),S21(dB)\n1000000000,-10,-3\n2000000000,-11,-4\n"
    measurements = load([("dut", text)])

    assert measurements.failures == {}
    points = [(p.frequency_hz, p.s11_db, p.s21_db) for p in measurements["dut"]]
    assert points == [(1e9, -10.0, -3.0), (2e9, -11.0, -4.0)]


def test_sniff_defaults_to_comma():
    assert sniff_delimiter("BEGIN\nEND\n") == ","


def test_explicit_delimiter():
    rows = read_rows("a\tb\tc\n1\t2\t3\n", delimiter="\t")
    assert rows == [["a", "b", "c"], ["1", "2", "3"]]


def test_quoted_instrument_header(tmp_path):
    path = tmp_path / "ads.csv"
    path.write_text('"Freq(Hz)","dB(S(1,1))","dB(S(2,1))"\n1000000000,-10,-3\n')
    rows = read_rows_from_path(path)
    assert rows[0] == ["Freq(Hz)", "dB(S(1,1))", "dB(S(2,1))"]

    point = extract(rows, ExtractorConfig(skip_rows=1))[0]
    assert (point.frequency_hz, point.s11_db, point.s21_db) == (1e9, -10.0, -3.0)


def test_label_from_filename():
    assert label_from_filename("thru.csv") == "thru"
    assert label_from_filename("/data/run 1/dut_a.csv") == "dut_a"
    assert label_from_filename("old.csv.csv") == "old.csv"
    assert label_from_filename("notes.txt") == "notes.txt"
