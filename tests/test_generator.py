import re

import pytest
from matplotlib.path import Path

from chart_agent.charts import (
    ChartGenerator,
    ChartRenderingError,
    SvgRenderer,
    get_brand_colors,
    validate_chart_specification,
)
from chart_agent.charts.generator import color_with_opacity
from chart_agent.charts.renderer import LINE_SERIES_ID, smooth_line_path


@pytest.fixture
def generator():
    return ChartGenerator()


def spec_for(chart_type="bar", color_scheme="fd", **extra):
    return validate_chart_specification({
        "labels": ["Q1", "Q2"],
        "values": [100, 150],
        "title": "Sales",
        "chartType": chart_type,
        "colorScheme": color_scheme,
        **extra,
    })


def test_fd_bar_chart_options(generator):
    spec = spec_for()
    options = generator.build_options(spec, get_brand_colors(spec.color_scheme))

    trace = options["data"][0]
    layout = options["layout"]
    assert trace["type"] == "bar"
    assert list(trace["x"]) == ["Q1", "Q2"]
    assert list(trace["y"]) == [100.0, 150.0]
    assert trace["marker"]["color"] == "#379596"
    assert layout["paper_bgcolor"] == "#ffeadb"
    assert layout["plot_bgcolor"] == "#ffeadb"
    assert layout["title"]["text"] == "Sales"
    assert layout["title"]["font"]["color"] == "#191919"
    assert layout["xaxis"]["tickangle"] == -45


def test_bnr_colors(generator):
    spec = spec_for(color_scheme="bnr")
    options = generator.build_options(spec, get_brand_colors(spec.color_scheme))

    assert options["data"][0]["marker"]["color"] == "#ffd200"
    assert options["layout"]["paper_bgcolor"] == "#fff"
    assert options["layout"]["yaxis"]["gridcolor"] == "rgba(0, 0, 0, 0.2)"


def test_line_chart_is_smoothed_with_circle_markers(generator):
    spec = spec_for(chart_type="line")
    trace = generator.build_options(spec, get_brand_colors(spec.color_scheme))["data"][0]

    assert trace["type"] == "scatter"
    assert trace["mode"] == "lines+markers"
    assert trace["line"]["shape"] == "spline"
    assert trace["line"]["width"] == 3
    assert trace["marker"]["symbol"] == "circle"
    assert trace["marker"]["size"] == 8


def test_unit_becomes_y_axis_title(generator):
    spec = spec_for(unit="miljoen")
    options = generator.build_options(spec, get_brand_colors(spec.color_scheme))
    assert options["layout"]["yaxis"]["title"]["text"] == "miljoen"


def test_build_is_deterministic(generator):
    spec = spec_for(chart_type="line", color_scheme="bnr")
    colors = get_brand_colors(spec.color_scheme)
    assert generator.build_options(spec, colors) == generator.build_options(spec, colors)


def test_svg_render_is_deterministic():
    renderer = SvgRenderer()
    spec = spec_for()
    colors = get_brand_colors(spec.color_scheme)

    first = renderer.render(spec, colors)
    assert first.lstrip().startswith("<?xml")
    assert "<svg" in first
    assert first == renderer.render(spec, colors)


def test_line_chart_svg_is_a_smooth_curve():
    spec = spec_for(chart_type="line", labels=["Jan", "Feb", "Mrt", "Apr"], values=[10, 40, 20, 35])
    svg = SvgRenderer().render(spec, get_brand_colors(spec.color_scheme))

    match = re.search(r"id=\"" + LINE_SERIES_ID + r"\".*?d=\"([^\"]+)\"", svg, re.S)
    assert match is not None
    assert "C" in match.group(1)
    assert "L" not in match.group(1)


def test_bar_chart_svg_has_no_line_series():
    spec = spec_for()
    svg = SvgRenderer().render(spec, get_brand_colors(spec.color_scheme))
    assert LINE_SERIES_ID not in svg


def test_smooth_line_path_passes_through_every_point():
    xs, ys = [0, 1, 2, 3], [10.0, 40.0, 20.0, 35.0]
    path = smooth_line_path(xs, ys)

    assert path.codes[0] == Path.MOVETO
    assert list(path.codes[1:]) == [Path.CURVE4] * 3 * (len(xs) - 1)
    anchors = [tuple(path.vertices[0])] + [tuple(v) for v in path.vertices[3::3]]
    assert anchors == list(zip(map(float, xs), ys))


def test_supported_chart_types(generator):
    assert generator.get_supported_chart_types() == ["bar", "line"]


@pytest.mark.parametrize("color,expected", [
    ("#000", "rgba(0, 0, 0, 0.2)"),
    ("#191919", "rgba(25, 25, 25, 0.2)"),
])
def test_color_with_opacity(color, expected):
    assert color_with_opacity(color, 0.2) == expected


def test_color_with_opacity_rejects_bad_color():
    with pytest.raises(ChartRenderingError):
        color_with_opacity("#12", 0.5)
