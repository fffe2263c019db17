import logging
import warnings

import pytest

from color import BLACK, Color, encode_color
from icons import (
    IconResolver,
    InvalidColorWarning,
    NotFoundWarning,
    StyleBundle,
    css_value,
    wrap_url,
)
from utils import IconConfig

RED = encode_color(Color(255, 0, 0))
BLUE = encode_color(Color(0, 0, 255))


def template_of(registry, name):
    return registry.lookup(name).template


def test_color_cascades_to_fill_and_stroke(resolver):
    assert resolver.resolve_icon("check", color="red") == resolver.resolve_icon(
        "check", fill_color="red", stroke_color="red"
    )


def test_resolve_passes_encoded_colors(resolver, registry):
    assert resolver.resolve_icon("check", color="red", url=False) == f"data:check;fill={RED};stroke={RED}"
    assert template_of(registry, "check").calls == [(RED, RED)]


def test_fill_and_stroke_override_separately(resolver, registry):
    resolver.resolve_icon("check", color="red", stroke_color=Color(0, 0, 255))
    assert template_of(registry, "check").calls == [(RED, BLUE)]


def test_absent_color_passes_through(resolver, registry):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        resolver.resolve_icon("check", color=None)
    assert template_of(registry, "check").calls == [(None, None)]


def test_absent_color_keeps_explicit_fill(resolver, registry):
    resolver.resolve_icon("check", color=None, fill_color="red")
    assert template_of(registry, "check").calls == [(RED, None)]


def test_invalid_color_falls_back_to_black(resolver):
    with pytest.warns(InvalidColorWarning):
        image = resolver.resolve_icon("check", color="not-a-color")
    assert image == resolver.resolve_icon("check", color=BLACK)


def test_invalid_color_overrides_fill_and_stroke(resolver, registry):
    with pytest.warns(InvalidColorWarning):
        resolver.resolve_icon("check", color="not-a-color", fill_color="red")
    black = encode_color(BLACK)
    assert template_of(registry, "check").calls == [(black, black)]


def test_invalid_fill_override_only_affects_fill(resolver, registry):
    with pytest.warns(InvalidColorWarning):
        resolver.resolve_icon("check", color="blue", fill_color="bogus")
    assert template_of(registry, "check").calls == [(encode_color(BLACK), BLUE)]


def test_unknown_icon_yields_nothing(resolver):
    with pytest.warns(NotFoundWarning, match="does not exist"):
        assert resolver.resolve_icon("does-not-exist") is None


def test_non_string_icon_yields_nothing(resolver, registry):
    with pytest.warns(NotFoundWarning, match="spelled"):
        assert resolver.resolve_icon(42, color="red") is None
    assert all(not entry.template.calls for entry in registry)


def test_failed_call_does_not_affect_next_call(resolver):
    with pytest.warns(NotFoundWarning):
        resolver.resolve_icon("nope", color="not-a-color")
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert resolver.resolve_icon("check", color="red", url=False).endswith(f"stroke={RED}")


def test_url_wrapping_round_trip(resolver):
    bare = resolver.resolve_icon("check", color="red", url=False)
    assert wrap_url(bare) == resolver.resolve_icon("check", color="red", url=True)
    assert wrap_url(bare) == f'url("{bare}")'


def test_config_supplies_defaults(registry):
    resolver = IconResolver(registry, IconConfig(color="blue", url=False))
    assert resolver.resolve_icon("check") == f"data:check;fill={BLUE};stroke={BLUE}"
    assert resolver.resolve_icon("check", color="red").startswith("data:check")
    assert resolver.resolve_icon("check", url=True).startswith('url("')


def test_default_config_keeps_embedded_colors(resolver):
    assert resolver.resolve_icon("check") == 'url("data:check;fill=None;stroke=None")'


def test_list_icons_by_folder(resolver):
    assert resolver.list_icons("social") == ["facebook", "twitter"]
    assert resolver.list_icons(None) == ["check", "logo"]
    assert resolver.list_icons() == ["check", "logo"]
    assert resolver.list_icons("missing-folder") == []


def test_list_icons_is_repeatable(resolver):
    assert resolver.list_icons("social") == resolver.list_icons("social")


def test_compose_icon_style_defaults(resolver):
    style = resolver.compose_icon_style("check")
    assert style.position == "0 50%"
    assert style.size == "2rem 2rem"
    assert style.repeat == "no-repeat"
    assert style.image.startswith('url("') and style.image.endswith('")')


def test_compose_icon_style_always_wraps_url(registry):
    resolver = IconResolver(registry, IconConfig(url=False))
    assert resolver.compose_icon_style("check", "red").image == resolver.resolve_icon("check", "red", url=True)


def test_compose_icon_style_normalizes_values(resolver):
    style = resolver.compose_icon_style("check", position=(0, "50%"), size="'1em'", repeat='"repeat-x"')
    assert style.position == "0 50%"
    assert style.size == "1em"
    assert style.repeat == "repeat-x"


def test_compose_icon_style_forwards_warning(resolver):
    with pytest.warns(NotFoundWarning):
        style = resolver.compose_icon_style("missing")
    assert style.image is None
    assert "background-image" not in style.declarations()


def test_compose_icon_style_forwards_color_overrides(resolver, registry):
    resolver.compose_icon_style("check", fill_color="red", stroke_color="blue")
    assert template_of(registry, "check").calls == [(RED, BLUE)]


def test_style_bundle_to_css():
    style = StyleBundle(image='url("x")', repeat="no-repeat", position="0 50%", size="2rem 2rem")
    assert list(style.declarations()) == [
        "background-image",
        "background-repeat",
        "background-position",
        "background-size",
    ]
    assert style.to_css(".icon-x") == (
        ".icon-x {\n"
        '  background-image: url("x");\n'
        "  background-repeat: no-repeat;\n"
        "  background-position: 0 50%;\n"
        "  background-size: 2rem 2rem;\n"
        "}\n"
    )


def test_css_value():
    assert css_value(" center ") == "center"
    assert css_value(1.5) == "1.5"
    assert css_value(["left", 0]) == "left 0"
    with pytest.raises(TypeError):
        css_value(object())


def test_extended_color_names_resolve(resolver, registry):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        resolver.resolve_icon("check", color="coral")
    coral = encode_color(Color(255, 127, 80))
    assert template_of(registry, "check").calls == [(coral, coral)]


def test_every_call_reports_its_own_warning(resolver, caplog):
    with warnings.catch_warnings():
        warnings.simplefilter("default")
        with caplog.at_level(logging.WARNING):
            for _ in range(3):
                resolver.resolve_icon("nope")
    assert [r.getMessage() for r in caplog.records] == ["Icon nope does not exist"] * 3


def test_warnings_point_at_the_caller(resolver):
    with pytest.warns(NotFoundWarning) as record:
        resolver.compose_icon_style("missing")
    with pytest.warns(InvalidColorWarning) as color_record:
        resolver.compose_icon_style("check", color="red", fill_color="bogus")
    with pytest.warns(InvalidColorWarning) as direct_record:
        resolver.resolve_icon("check", color="red", stroke_color="bogus")
    assert record[0].filename == __file__
    assert color_record[0].filename == __file__
    assert direct_record[0].filename == __file__


def test_css_value_unquotes_each_token():
    assert css_value("'a' 'b'") == "a b"
    assert css_value("'0 50%'") == "0 50%"
    assert css_value('"left"  top') == "left top"
