from __future__ import annotations

from xml.sax.saxutils import escape, quoteattr

from pydantic import BaseModel, ConfigDict, Field

from .fragment import DEFAULT_PLACEHOLDER, Fragment, StripStrategy
from .svg import VectorDocument

ACCENT = "#d97757"
FONT_STACK = "system-ui, -apple-system, 'Segoe UI', sans-serif"


def _num(v: float) -> str:
    """Format a coordinate so equal inputs always give equal text."""
    f = float(v)
    if f.is_integer():
        return str(int(f))
    return format(f, ".10g")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class GradientStop(_Frozen):
    offset: float = Field(ge=0.0, le=1.0)
    color: str


class Gradient(_Frozen):
    id: str = "bg"
    x1: float = 0.0
    y1: float = 0.0
    x2: float = 1.0
    y2: float = 1.0
    stops: tuple[GradientStop, ...]


class Grid(_Frozen):
    cell: int = Field(default=50, gt=0)
    color: str = ACCENT
    stroke_width: float = 1.0
    opacity: float = 0.03


class Placement(_Frozen):
    """Translate-then-scale transform for the embedded fragment."""

    x: float
    y: float
    scale: float = 1.0

    def render(self) -> str:
        return f"translate({_num(self.x)},{_num(self.y)}) scale({_num(self.scale)})"


class TextLabel(_Frozen):
    text: str
    x: float
    y: float
    font_size: float
    fill: str
    anchor: str = "middle"
    font_family: str = FONT_STACK
    font_weight: str | None = None
    letter_spacing: float | None = None


class AccentRect(_Frozen):
    x: float
    y: float
    width: float
    height: float
    fill: str = ACCENT
    opacity: float = 1.0
    rx: float = 0.0


class CompositionSpec(_Frozen):
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    background: Gradient
    grid: Grid = Grid()
    placement: Placement
    labels: tuple[TextLabel, ...] = ()
    accents: tuple[AccentRect, ...] = ()
    strip_strategy: StripStrategy = StripStrategy.EXACT
    placeholder: str = DEFAULT_PLACEHOLDER


def preview_spec(
    title: str,
    url: str,
    width: int = 1200,
    height: int = 630,
    strip_strategy: StripStrategy = StripStrategy.EXACT,
) -> CompositionSpec:
    """Social preview layout: centered logo over title and URL on a dark grid."""
    cx = width / 2
    return CompositionSpec(
        width=width,
        height=height,
        background=Gradient(
            stops=(
                GradientStop(offset=0.0, color="#0f1729"),
                GradientStop(offset=1.0, color="#1e293b"),
            )
        ),
        grid=Grid(),
        placement=Placement(x=cx, y=250, scale=3.5),
        labels=(
            TextLabel(
                text=title,
                x=cx,
                y=460,
                font_size=80,
                font_weight="bold",
                fill="white",
                letter_spacing=4,
            ),
            TextLabel(text=url, x=cx, y=530, font_size=22, fill=ACCENT),
        ),
        accents=(
            # bottom bar
            AccentRect(x=0, y=height - 15, width=width, height=15, opacity=0.8),
            # top-left corner
            AccentRect(x=40, y=40, width=60, height=3, opacity=0.3, rx=1.5),
            AccentRect(x=40, y=40, width=3, height=60, opacity=0.3, rx=1.5),
            # top-right corner
            AccentRect(x=width - 100, y=40, width=60, height=3, opacity=0.3, rx=1.5),
            AccentRect(x=width - 43, y=40, width=3, height=60, opacity=0.3, rx=1.5),
        ),
        strip_strategy=strip_strategy,
    )


def _gradient(g: Gradient) -> list[str]:
    out = [
        f'    <linearGradient id="{g.id}" x1="{_num(g.x1)}" y1="{_num(g.y1)}"'
        f' x2="{_num(g.x2)}" y2="{_num(g.y2)}">'
    ]
    for stop in g.stops:
        out.append(f'      <stop offset="{_num(stop.offset * 100)}%" stop-color="{stop.color}"/>')
    out.append("    </linearGradient>")
    return out


def _grid(spec: CompositionSpec) -> list[str]:
    g = spec.grid
    w, h = spec.width, spec.height
    out = [
        f'  <g opacity="{_num(g.opacity)}" stroke="{g.color}" stroke-width="{_num(g.stroke_width)}">'
    ]
    for i in range(w // g.cell + 1):
        x = i * g.cell
        out.append(f'    <line x1="{x}" y1="0" x2="{x}" y2="{h}"/>')
    for i in range(h // g.cell + 1):
        y = i * g.cell
        out.append(f'    <line x1="0" y1="{y}" x2="{w}" y2="{y}"/>')
    out.append("  </g>")
    return out


def _label(label: TextLabel) -> str:
    attrs = [
        f'x="{_num(label.x)}"',
        f'y="{_num(label.y)}"',
        f'text-anchor="{label.anchor}"',
        f"font-family={quoteattr(label.font_family)}",
        f'font-size="{_num(label.font_size)}"',
    ]
    if label.font_weight:
        attrs.append(f'font-weight="{label.font_weight}"')
    attrs.append(f'fill="{label.fill}"')
    if label.letter_spacing is not None:
        attrs.append(f'letter-spacing="{_num(label.letter_spacing)}"')
    return f"  <text {' '.join(attrs)}>{escape(label.text)}</text>"


def _accent(a: AccentRect) -> str:
    return (
        f'  <rect x="{_num(a.x)}" y="{_num(a.y)}" width="{_num(a.width)}"'
        f' height="{_num(a.height)}" fill="{a.fill}" opacity="{_num(a.opacity)}"'
        f' rx="{_num(a.rx)}"/>'
    )


def compose(spec: CompositionSpec, fragment: Fragment | None) -> VectorDocument:
    """Build the composed document. Same inputs always produce the same text."""
    w, h = spec.width, spec.height
    bg = spec.background
    lines = [
        f'<svg width="{w}" height="{h}" viewBox="0 0 {w} {h}" xmlns="http://www.w3.org/2000/svg">',
        "  <defs>",
        *_gradient(bg),
        "  </defs>",
        f'  <rect width="{w}" height="{h}" fill="url(#{bg.id})"/>',
        *_grid(spec),
    ]
    if fragment is not None:
        embedded = fragment.strip_transform(spec.strip_strategy, spec.placeholder)
        lines.append(f'  <g transform="{spec.placement.render()}">')
        lines.append(f"    {embedded.markup}")
        lines.append("  </g>")
    lines.extend(_label(label) for label in spec.labels)
    lines.extend(_accent(a) for a in spec.accents)
    lines.append("</svg>")
    return VectorDocument("\n".join(lines) + "\n")
