import matplotlib

matplotlib.use("Agg")

import pytest


def sweep_csv(points, block=True, header=("Freq(Hz)", "dB(S(1,1))", "dB(S(2,1))"),
              metadata=("! Network analyzer export", "! Date: 2024-05-02")):
    """CSV text of an instrument export with the given (freq, s11, s21) rows."""
    lines = list(metadata)
    if block:
        lines.append("BEGIN")
    lines.append(",".join(f'"{h}"' for h in header))
    lines += [f"{f},{s11},{s21}" for f, s11, s21 in points]
    if block:
        lines.append("END")
    return "\n".join(lines) + "\n"


@pytest.fixture
def make_csv():
    return sweep_csv


@pytest.fixture
def thru_points():
    return [(1e9, -20.0, -0.5), (2e9, -18.0, -0.7), (3e9, -15.0, -1.0)]


@pytest.fixture
def dut_points():
    return [(1e9, -12.0, -3.0), (2e9, -10.0, -3.5), (3e9, -8.0, -4.2)]


@pytest.fixture
def csv_files(tmp_path, thru_points, dut_points):
    """Two well-formed sweep files and one without an S21 column."""
    thru = tmp_path / "thru.csv"
    thru.write_text(sweep_csv(thru_points))
    dut = tmp_path / "dut.csv"
    dut.write_text(sweep_csv(dut_points))
    bad = tmp_path / "bad.csv"
    bad.write_text(sweep_csv(dut_points, header=("Freq(Hz)", "S11", "Phase")))
    return {"thru": thru, "dut": dut, "bad": bad}
