"""Tag and attribute allowlists for sanitized HTML.

The tables are process-wide constants. Anything not listed is rejected, so a
newly invented tag or attribute is excluded until someone adds it here.

SVG support is deliberately broad (dataset descriptions embed inline
diagrams), but ``script``, ``style`` and ``foreignObject`` are never listed,
and neither are the ``style`` attribute or any ``on*`` event handler.

Example:
    >>> from mdguard.allowlist import DEFAULT_ALLOWLIST
    >>> DEFAULT_ALLOWLIST.tag("clippath")
    'clipPath'
    >>> DEFAULT_ALLOWLIST.tag("script") is None
    True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

# Pseudo-tag for bare text nodes
TEXT_NODE = "#text"

_PROSE_TAGS = frozenset({
    "div", "h1", "h2", "h3", "h4", "h5", "h6", "p", "em", "strong", "del",
    "ol", "ul", "li", "a", "img",
})

_CODE_AND_TABLE_TAGS = frozenset({
    TEXT_NODE, "code", "pre", "hr", "table", "thead", "tbody", "th", "tr", "td",
    "sub", "sup",
})

# https://developer.mozilla.org/en-US/docs/Web/SVG/Element
# without foreignObject, style and script
_SVG_TAGS = frozenset({
    "svg", "altGlyph", "altGlyphDef", "altGlyphItem", "animate", "animateColor",
    "animateMotion", "animateTransform", "circle", "clipPath", "color-profile",
    "cursor", "defs", "desc", "ellipse", "feBlend", "feColorMatrix",
    "feComponentTransfer", "feComposite", "feConvolveMatrix",
    "feDiffuseLighting", "feDisplacementMap", "feDistantLight", "feFlood",
    "feFuncA", "feFuncB", "feFuncG", "feFuncR", "feGaussianBlur", "feImage",
    "feMerge", "feMergeNode", "feMorphology", "feOffset", "fePointLight",
    "feSpecularLighting", "feSpotLight", "feTile", "feTurbulence", "filter",
    "font", "font-face", "font-face-format", "font-face-name", "font-face-src",
    "font-face-uri", "g", "glyph", "glyphRef", "hkern", "image", "line",
    "linearGradient", "marker", "mask", "metadata", "missing-glyph", "mpath",
    "path", "pattern", "polygon", "polyline", "radialGradient", "rect", "set",
    "stop", "switch", "symbol", "text", "textPath", "title", "tref", "tspan",
    "use", "view", "vkern",
})

ALLOWED_TAGS: frozenset[str] = _PROSE_TAGS | _CODE_AND_TABLE_TAGS | _SVG_TAGS

_LINK_AND_MEDIA_ATTRIBUTES = frozenset({"href", "src", "width", "height", "alt"})

# https://developer.mozilla.org/en-US/docs/Web/SVG/Attribute
# without style and the event handlers
_SVG_ATTRIBUTES = frozenset({
    "accent-height", "accumulate", "additive", "alignment-baseline",
    "allowReorder", "alphabetic", "amplitude", "arabic-form", "ascent",
    "attributeName", "attributeType", "autoReverse", "azimuth",
    "baseFrequency", "baseline-shift", "baseProfile", "bbox", "begin", "bias",
    "by",
    "calcMode", "cap-height", "class", "clip", "clipPathUnits", "clip-path",
    "clip-rule", "color", "color-interpolation", "color-interpolation-filters",
    "color-profile", "color-rendering", "cursor", "cx", "cy",
    "d", "decelerate", "descent", "diffuseConstant", "direction", "display",
    "divisor", "dominant-baseline", "dur", "dx", "dy",
    "edgeMode", "elevation", "enable-background", "end", "exponent",
    "externalResourcesRequired",
    "fill", "fill-opacity", "fill-rule", "filter", "filterRes", "filterUnits",
    "flood-color", "flood-opacity", "font-family", "font-size",
    "font-size-adjust", "font-stretch", "font-style", "font-variant",
    "font-weight", "format", "from", "fr", "fx", "fy",
    "g1", "g2", "glyph-name", "glyph-orientation-horizontal",
    "glyph-orientation-vertical", "glyphRef", "gradientTransform",
    "gradientUnits",
    "hanging", "height", "href", "hreflang", "horiz-adv-x", "horiz-origin-x",
    "id", "ideographic", "image-rendering", "in", "in2", "intercept",
    "k", "k1", "k2", "k3", "k4", "kernelMatrix", "kernelUnitLength", "kerning",
    "keyPoints", "keySplines", "keyTimes",
    "lang", "lengthAdjust", "letter-spacing", "lighting-color",
    "limitingConeAngle", "local",
    "marker-end", "marker-mid", "marker-start", "markerHeight", "markerUnits",
    "markerWidth", "mask", "maskContentUnits", "maskUnits", "mathematical",
    "max", "media", "method", "min", "mode",
    "name", "numOctaves",
    "offset", "opacity", "operator", "order", "orient", "orientation",
    "origin", "overflow", "overline-position", "overline-thickness",
    "panose-1", "paint-order", "path", "pathLength", "patternContentUnits",
    "patternTransform", "patternUnits", "ping", "pointer-events", "points",
    "pointsAtX", "pointsAtY", "pointsAtZ", "preserveAlpha",
    "preserveAspectRatio", "primitiveUnits",
    "r", "radius", "referrerPolicy", "refX", "refY", "rel", "rendering-intent",
    "repeatCount", "repeatDur", "requiredExtensions", "requiredFeatures",
    "restart", "result", "rotate", "rx", "ry",
    "scale", "seed", "shape-rendering", "slope", "spacing", "specularConstant",
    "specularExponent", "speed", "spreadMethod", "startOffset", "stdDeviation",
    "stemh", "stemv", "stitchTiles", "stop-color", "stop-opacity",
    "strikethrough-position", "strikethrough-thickness", "string", "stroke",
    "stroke-dasharray", "stroke-dashoffset", "stroke-linecap",
    "stroke-linejoin", "stroke-miterlimit", "stroke-opacity", "stroke-width",
    "surfaceScale", "systemLanguage",
    "tabindex", "tableValues", "target", "targetX", "targetY", "text-anchor",
    "text-decoration", "text-rendering", "textLength", "to", "transform",
    "type",
    "u1", "u2", "underline-position", "underline-thickness", "unicode",
    "unicode-bidi", "unicode-range", "units-per-em",
    "v-alphabetic", "v-hanging", "v-ideographic", "v-mathematical", "values",
    "vector-effect", "version", "vert-adv-y", "vert-origin-x", "vert-origin-y",
    "viewBox", "viewTarget", "visibility",
    "width", "widths", "word-spacing", "writing-mode",
    "x", "x-height", "x1", "x2", "xChannelSelector",
    "y", "y1", "y2", "yChannelSelector",
    "z", "zoomAndPan",
})

ALLOWED_ATTRIBUTES: frozenset[str] = _LINK_AND_MEDIA_ATTRIBUTES | _SVG_ATTRIBUTES

# Elements that never have content or a closing tag
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta",
    "param", "source", "track", "wbr",
})


def _fold(names: frozenset[str]) -> dict[str, str]:
    """Map lower-cased names back to their allowlisted spelling."""
    # sorted() keeps the winner deterministic if two entries differ only in case
    return {name.lower(): name for name in sorted(names) if name != TEXT_NODE}


@dataclass(frozen=True, slots=True)
class Allowlist:
    """Immutable tag and attribute allowlist.

    The HTML tokenizer reports every name lower-cased, so lookups go through
    a case-folded table that restores the allowlisted spelling. SVG names
    such as ``clipPath`` and ``viewBox`` survive a round trip, and every name
    handed back is an exact member of the allowlist.

    Attributes:
        tags: Allowed tag names (``#text`` allows bare text nodes)
        attributes: Attribute names allowed on every allowed tag

    """

    tags: frozenset[str]
    attributes: frozenset[str]
    _tag_lookup: dict[str, str] = field(init=False, repr=False, compare=False)
    _attribute_lookup: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_tag_lookup", _fold(self.tags))
        object.__setattr__(self, "_attribute_lookup", _fold(self.attributes))

    @property
    def allows_text(self) -> bool:
        """True if bare text nodes are kept."""
        return TEXT_NODE in self.tags

    def tag(self, name: str) -> str | None:
        """Return the allowlisted spelling of a tag name, or None if rejected."""
        return self._tag_lookup.get(name.lower())

    def attribute(self, name: str) -> str | None:
        """Return the allowlisted spelling of an attribute name, or None if rejected."""
        return self._attribute_lookup.get(name.lower())


@lru_cache(maxsize=16)
def allowlist_for(tags: frozenset[str], attributes: frozenset[str]) -> Allowlist:
    """Return a shared Allowlist for the given name sets.

    Building the case-folded lookups walks every name, so configs that share
    the same sets share one instance.
    """
    return Allowlist(tags=tags, attributes=attributes)


DEFAULT_ALLOWLIST: Allowlist = allowlist_for(ALLOWED_TAGS, ALLOWED_ATTRIBUTES)


__all__ = [
    "ALLOWED_ATTRIBUTES",
    "ALLOWED_TAGS",
    "DEFAULT_ALLOWLIST",
    "TEXT_NODE",
    "VOID_ELEMENTS",
    "Allowlist",
    "allowlist_for",
]
