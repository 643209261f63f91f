import pytest

from atlas_core import InsufficientSpace, Packer, find_max_height, pack
from atlas_core.models import Rectangle, Surface


def _squares(count):
    def build(height):
        return [Rectangle(i, height, height) for i in range(count)]

    return build


def _scaled_glyphs(height):
    return [
        Rectangle("wide", max(1, height * 3 // 4), height),
        Rectangle("narrow", max(1, height // 3), height),
        Rectangle("short", max(1, height // 2), max(1, height // 2)),
        Rectangle("square", height, height),
    ]


def test_search_converges_on_boundary():
    surface = Surface(64, 64)
    build = _squares(6)

    result = find_max_height(build, surface, 8)

    assert result.height == 21
    assert pack(build(result.height), surface)
    assert not pack(build(result.height + 1), surface)


def test_search_returns_packed_batch_at_final_height():
    surface = Surface(64, 64, spacing=1)

    result = find_max_height(_scaled_glyphs, surface, 8)

    assert all(rect.placed for rect in result.rectangles)
    assert max(rect.height for rect in result.rectangles) == result.height
    assert pack(_scaled_glyphs(result.height), surface)
    assert not pack(_scaled_glyphs(result.height + 1), surface)


def test_search_bisects_downward_when_initial_height_fails():
    surface = Surface(64, 64)
    build = _squares(6)

    result = find_max_height(build, surface, 50)

    assert result.height == 21


def test_search_never_probes_above_surface_height():
    surface = Surface(40, 40)
    probed = []

    def build(height):
        probed.append(height)
        return [Rectangle("one", 1, height)]

    result = find_max_height(build, surface, 8)

    assert result.height == 40
    assert max(probed) <= surface.height


def test_search_uses_given_packer_policies():
    surface = Surface(64, 64)
    packer = Packer(surface, order="input", select="bottom_left")

    result = find_max_height(_squares(4), surface, 4, packer=packer)

    assert result.height == 32
    assert result.probes > 0


def test_search_raises_when_nothing_fits():
    surface = Surface(4, 4)

    def build(height):
        return [Rectangle(i, 3, height) for i in range(5)]

    with pytest.raises(InsufficientSpace):
        find_max_height(build, surface, 2)


def test_search_rejects_non_positive_initial_height():
    with pytest.raises(ValueError):
        find_max_height(_squares(1), Surface(8, 8), 0)


def test_search_repacks_shared_rectangles():
    surface = Surface(64, 64)
    shared = [Rectangle(i, 1, 1) for i in range(6)]

    def build(height):
        for rect in shared:
            rect.width = height
            rect.height = height
        return shared

    result = find_max_height(build, surface, 50)

    assert result.height == 21
    assert all(rect.placed for rect in result.rectangles)
    assert all(rect.width == 21 for rect in result.rectangles)


@pytest.mark.parametrize("spacing, expected", [(0, 21), (1, 20), (3, 19)])
def test_every_height_below_result_packs(spacing, expected):
    surface = Surface(64, 64, spacing=spacing)
    build = _squares(6)

    result = find_max_height(build, surface, 5)

    assert result.height == expected
    for height in range(1, result.height + 1):
        assert pack(build(height), surface), height
    assert not pack(build(result.height + 1), surface)


def test_search_rejects_packer_for_other_surface():
    packer = Packer(Surface(32, 32))
    with pytest.raises(ValueError):
        find_max_height(_squares(2), Surface(64, 64), 4, packer=packer)
