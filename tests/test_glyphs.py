import pytest

from atlas_core.errors import FontLoadError
from atlasgen.glyphs import GlyphShape, glyph_batch, glyph_scale, glyph_size, open_face, read_shapes


def _shapes():
    return [
        GlyphShape(32, 0.0, 0.0, 0.0, 0.0, 4.0, outlined=False),
        GlyphShape(65, 0.0, 0.0, 10.0, 20.0, 11.0),
        GlyphShape(46, 1.0, 0.0, 2.5, 2.5, 4.0),
    ]


def test_glyph_scale_uses_tallest_outlined_glyph():
    assert glyph_scale(_shapes(), 40) == pytest.approx(2.0)


def test_glyph_scale_requires_outlines():
    with pytest.raises(FontLoadError):
        glyph_scale([GlyphShape(32, 0, 0, 0, 0, 4.0, outlined=False)], 10)


def test_glyph_size_rounds_up_and_pads():
    assert glyph_size(GlyphShape(46, 0, 0, 2.5, 2.5, 4.0), 1.0, 2) == (7, 7)


def test_glyph_batch_skips_whitespace():
    batch = glyph_batch(_shapes(), 40, 2)

    assert [rect.id for rect in batch] == [65, 46]
    assert (batch[0].width, batch[0].height) == (24, 44)
    assert (batch[1].width, batch[1].height) == (9, 9)
    assert not any(rect.placed for rect in batch)


def test_glyph_batch_grows_with_height():
    small = glyph_batch(_shapes(), 10, 2)
    large = glyph_batch(_shapes(), 20, 2)

    for a, b in zip(small, large):
        assert a.width <= b.width and a.height <= b.height


def test_open_face_missing_file(tmp_path):
    with pytest.raises(FontLoadError):
        open_face(str(tmp_path / "missing.ttf"))


def test_read_shapes_from_font(font_path):
    face = open_face(font_path)

    shapes = read_shapes(face)
    by_cp = {shape.codepoint: shape for shape in shapes}

    assert ord("A") in by_cp and by_cp[ord("A")].outlined
    assert by_cp[ord("A")].width > 0 and by_cp[ord("A")].height > 0
    assert not by_cp[ord(" ")].outlined
    assert by_cp[ord(" ")].advance > 0
    assert all(0 <= shape.codepoint < 256 for shape in shapes)
