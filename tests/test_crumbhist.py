from PIL import Image

from pixcrumb.crumbhist import crumb_statistics, format_statistics, main
from pixcrumb.planes import CrumbPlane


def _plane(matrix):
    return CrumbPlane.from_matrix(matrix)


def test_all_zero_plane_counts_nothing():
    bins, predict = crumb_statistics([_plane([[0, 0], [0, 0]])])
    assert bins == [0] * 16
    assert all(count == 0 for row in predict for count in row)


def test_nonzero_plane_counts_every_crumb():
    matrix = [[1, 2, 3], [4, 5, 6]]
    bins, predict = crumb_statistics([_plane(matrix)])
    assert sum(bins) == 6
    assert sum(sum(row) for row in predict) == 5


def test_predictions_follow_serpentine_order():
    _, predict = crumb_statistics([_plane([[1, 2], [3, 4]])])
    assert predict[1][2] == 1
    assert predict[2][4] == 1
    assert predict[4][3] == 1
    assert predict[2][3] == 0


def test_last_crumb_carries_between_planes():
    bins, _ = crumb_statistics([_plane([[5]]), _plane([[0, 0]])])
    assert bins[5] == 1
    assert bins[0] == 1


def test_format_statistics_layout():
    bins = list(range(16))
    predict = [[0] * 16 for _ in range(16)]
    text = format_statistics(bins, predict)
    assert text.startswith("\n\nFrequency data:" + ",".join(map(str, bins)) + "\n")
    assert "\nPrediction data:\n" in text
    lines = text.split("\nPrediction data:\n")[1].splitlines()
    assert len(lines) == 16
    assert lines[3] == "3," + ",".join(["0"] * 16)


def test_main_requires_input(capsys):
    assert main([]) == 1
    assert "an input file must be specified" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.png")]) == 1
    assert "Could not load image file" in capsys.readouterr().err


def test_main_prints_statistics(tmp_path, capsys):
    path = tmp_path / "img.png"
    im = Image.new("P", (8, 8))
    im.putpalette(list(range(256)) * 3)
    im.putdata([(x + 2 * y) % 4 for y in range(8) for x in range(8)])
    im.save(path)
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("\n\nFrequency data:")
    assert len(out.split("\nPrediction data:\n")[1].splitlines()) == 16