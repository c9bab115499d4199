import xml.etree.ElementTree as ET

from assetgen.compose import Placement, compose, preview_spec
from assetgen.fragment import Fragment, StripStrategy

SVG_NS = "{http://www.w3.org/2000/svg}"

LOGO_FRAGMENT = Fragment(
    '<g transform="translate(64,64)" fill="#d97757"><circle r="9"/></g>'
)


def _tags(markup: str) -> list[str]:
    root = ET.fromstring(markup)
    return [el.tag.replace(SVG_NS, "") for el in root.iter()]


def test_compose_is_deterministic():
    spec = preview_spec("Claudex", "claudex.space")
    a = compose(spec, LOGO_FRAGMENT)
    b = compose(preview_spec("Claudex", "claudex.space"), Fragment(LOGO_FRAGMENT.markup))
    assert a.to_bytes() == b.to_bytes()


def test_compose_embeds_fragment_with_placement():
    doc = compose(preview_spec("Claudex", "claudex.space"), LOGO_FRAGMENT)
    assert '<g transform="translate(600,250) scale(3.5)">' in doc.markup
    assert "translate(64,64)" not in doc.markup
    assert '<circle r="9"/>' in doc.markup
    assert doc.width == 1200
    assert doc.height == 630


def test_compose_grid_line_counts():
    doc = compose(preview_spec("t", "u"), None)
    root = ET.fromstring(doc.markup)
    lines = root.findall(f".//{SVG_NS}line")
    vertical = [ln for ln in lines if ln.get("x1") == ln.get("x2")]
    horizontal = [ln for ln in lines if ln.get("y1") == ln.get("y2")]
    assert len(vertical) == 1200 // 50 + 1
    assert len(horizontal) == 630 // 50 + 1


def test_compose_without_fragment_is_still_complete():
    doc = compose(preview_spec("Claudex", "claudex.space"), None)
    tags = _tags(doc.markup)
    assert "linearGradient" in tags
    assert "line" in tags
    assert tags.count("text") == 2
    # background + bottom bar + four corner marks
    assert tags.count("rect") == 6
    assert "scale(3.5)" not in doc.markup
    assert "circle" not in tags


def test_compose_escapes_text():
    doc = compose(preview_spec("A & <B>", "x.dev"), None)
    root = ET.fromstring(doc.markup)
    texts = [t.text for t in root.iter(f"{SVG_NS}text")]
    assert texts == ["A & <B>", "x.dev"]


def test_compose_leading_strategy_strips_unknown_offset():
    frag = Fragment('<g transform="translate(50,50)"><circle r="9"/></g>')
    exact = compose(preview_spec("t", "u"), frag)
    leading = compose(preview_spec("t", "u", strip_strategy=StripStrategy.LEADING), frag)
    assert "translate(50,50)" in exact.markup
    assert "translate(50,50)" not in leading.markup


def test_preview_spec_accents_follow_canvas_edges():
    spec = preview_spec("t", "u", width=800, height=400)
    bottom = spec.accents[0]
    assert (bottom.y, bottom.width) == (385, 800)
    assert spec.accents[-1].x == 757
    assert spec.placement == Placement(x=400, y=250, scale=3.5)
