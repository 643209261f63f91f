import numpy as np
import pytest

from atlasgen.glyphs import glyph_batch, glyph_scale, open_face, read_shapes
from atlasgen.sdf import encode_distance, render_glyph, signed_distance


def test_signed_distance_sign_and_limit():
    inside = np.zeros((9, 9), dtype=bool)
    inside[3:6, 3:6] = True

    dist = signed_distance(inside, 3)

    assert dist[4, 4] > 0
    assert dist[0, 0] < 0
    assert dist[4, 4] == pytest.approx(1.5)
    assert dist[4, 2] == pytest.approx(-0.5)
    assert np.abs(dist).max() <= 3


def test_signed_distance_uniform_field_is_clamped():
    dist = signed_distance(np.zeros((4, 4), dtype=bool), 2)
    assert np.all(dist == -2)


def test_encode_distance_maps_edge_to_half():
    encoded = encode_distance(np.array([-4.0, 0.0, 1.0, 10.0]), 2.0)
    assert encoded.tolist() == pytest.approx([0.0, 0.5, 1.0, 1.0])


def test_render_glyph_has_inside_and_outside(font_path):
    face = open_face(font_path)
    shapes = [s for s in read_shapes(face, [ord("O")])]
    scale = glyph_scale(shapes, 32)
    rect = glyph_batch(shapes, 32, 2)[0]

    bitmap = render_glyph(face, shapes[0], scale, (rect.width, rect.height), 2, 2.0)

    assert bitmap.shape == (rect.height, rect.width, 3)
    assert bitmap.max() > 0.5
    assert bitmap.min() < 0.5
    assert np.all(bitmap[:, :, 0] == bitmap[:, :, 1])
