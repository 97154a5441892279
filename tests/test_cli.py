import json

import pytest

import tangibl.__main__ as cli


def write_detections(path, detections):
    path.write_text(json.dumps(detections), encoding="utf-8")
    return path


def test_main_prints_program(tmp_path, capsys):
    path = write_detections(
        tmp_path / "batch.json",
        [
            {"code": 61, "diameter": 48.0, "orientation": 0.0, "x": 0.0, "y": 0.0},
            {"code": 79, "diameter": 48.0, "orientation": 0.0, "x": 100.0, "y": 0.0},
            {"code": None, "diameter": 48.0, "orientation": 0.0, "x": 150.0, "y": 0.0},
            {"code": 59, "diameter": 48.0, "orientation": 0.0, "x": 200.0, "y": 0.0},
        ],
    )

    cli.main([str(path)])

    out = capsys.readouterr().out
    assert out == '{"name":"start","next":{"name":"turnLeft","next":{"name":"shoot"}}}\n'


def test_main_exits_without_start(tmp_path):
    path = write_detections(
        tmp_path / "batch.json",
        [{"code": 59, "diameter": 48.0, "orientation": 0.0, "x": 0.0, "y": 0.0}],
    )

    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(path)])

    assert excinfo.value.code == 1


def test_main_passes_options(tmp_path, monkeypatch, capsys):
    path = write_detections(
        tmp_path / "batch.json",
        [{"code": 61, "diameter": 48.0, "orientation": 0.0, "x": 0.0, "y": 0.0}],
    )
    seen = []
    parse_markers = cli.parse_markers

    def _parse_markers(markers, options):
        seen.append((markers, options))
        return parse_markers(markers, options)

    monkeypatch.setattr(cli, "parse_markers", _parse_markers)

    cli.main([str(path), "--math-coordinates", "--strategy", "nearest"])

    (markers, options), = seen
    assert options.image_coordinates is False
    assert options.strategy is cli.MatchStrategy.NEAREST
    assert capsys.readouterr().out == '{"name":"start"}\n'


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"code": 61}, "must hold a JSON list"),
        ([42], "must be a JSON object"),
        ([{"code": 61, "x": 0.0, "y": 0.0}], "missing diameter, orientation"),
    ],
)
def test_malformed_payload_is_rejected(tmp_path, payload, message):
    path = write_detections(tmp_path / "batch.json", payload)

    with pytest.raises(ValueError) as excinfo:
        cli.main([str(path)])

    assert message in str(excinfo.value)


def test_main_writes_plot(tmp_path, monkeypatch, capsys):
    path = write_detections(
        tmp_path / "batch.json",
        [{"code": 61, "diameter": 48.0, "orientation": 0.0, "x": 0.0, "y": 0.0}],
    )
    plots = []

    def _plot_markers(markers, **kwargs):
        plots.append((markers, kwargs))

    monkeypatch.setattr(cli, "plot_markers", _plot_markers)
    plot_path = tmp_path / "out" / "markers.png"

    cli.main([str(path), "--plot-output-path", str(plot_path)])

    (markers, kwargs), = plots
    assert [marker.kind.name for marker in markers] == ["START"]
    assert kwargs["out"] == plot_path
    assert kwargs["title"] == "batch.json"
    assert plot_path.parent.is_dir()
