"""Tests for the command-line interface."""

import json

import numpy as np
import pytest
from PIL import Image

from houghlines.cli import main
from houghlines.core import load_config


@pytest.fixture
def line_image(tmp_path):
    """A 20x20 PNG with one bright horizontal line."""
    array = np.zeros((20, 20), dtype=np.uint8)
    array[5, :] = 255
    path = tmp_path / "line.png"
    Image.fromarray(array).save(path)
    return path


def test_json_output(line_image, capsys):
    main([str(line_image), "--json", "--maxima-threshold", "15"])
    records = json.loads(capsys.readouterr().out)
    assert len(records) == 1
    assert records[0]["r"] == pytest.approx(5.0)


def test_text_output_and_artifacts(line_image, tmp_path, capsys):
    hough_path = tmp_path / "hough.png"
    config_path = tmp_path / "hough.yaml"
    main([
        str(line_image),
        "--maxima-threshold", "15",
        "--min-height", "3",
        "--hough-image", str(hough_path),
        "--save-config", str(config_path),
    ])
    assert capsys.readouterr().out == ""
    assert hough_path.exists()
    assert load_config(config_path).min_height == 3.0


def test_missing_image_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing.png")])
    assert excinfo.value.code == 1
    assert "Error loading image" in capsys.readouterr().err
