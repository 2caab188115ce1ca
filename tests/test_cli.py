"""Tests for the command-line front end."""

import pytest
from main import parse_args, run_cli
from utils.test_images import encode_png, generate_gradient, generate_noise


@pytest.fixture
def image_paths(tmp_path):
    a = tmp_path / "a.png"
    b = tmp_path / "b.png"
    a.write_bytes(encode_png(generate_gradient(24, 16)))
    b.write_bytes(encode_png(generate_noise(16, 24, 3)))
    return a, b


def test_parse_args():
    paths, options = parse_args(["x.png", "--kernel", "scalar", "y.jpg", "--verbose"])
    assert paths == ["x.png", "y.jpg"]
    assert options == {'kernel': 'scalar', 'reference': False, 'verbose': True}

    with pytest.raises(ValueError):
        parse_args(["only_one.png"])
    with pytest.raises(ValueError):
        parse_args(["a.png", "b.png", "--fast"])


def test_cli_prints_psnr(image_paths, capsys):
    a, b = image_paths
    assert run_cli([str(a), str(b), "--reference", "--verbose"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("PSNR: ")
    assert "Reference:" in out
    assert "Deviation: 0.0000%" in out


def test_cli_identical(image_paths, capsys):
    a, _ = image_paths
    assert run_cli([str(a), str(a)]) == 0
    assert "inf dB (identical)" in capsys.readouterr().out


def test_cli_errors(image_paths, tmp_path):
    a, _ = image_paths
    assert run_cli([str(a), str(tmp_path / "missing.png")]) == 1
    assert run_cli([str(a)]) == 2
    assert run_cli([str(a), str(a), "--kernel", "gpu"]) == 2
    assert run_cli(["--help"]) == 0
