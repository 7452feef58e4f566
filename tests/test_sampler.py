import pytest
from PIL import Image

from conftest import BLUE, RED, solid
from letter_image.config import PROSE
from letter_image.models.grid import Placement
from letter_image.services.cycler import LetterCycler
from letter_image.services.sampler import GridSampler, darkness
from letter_image.services.surface import TargetSurface


def sampler(text=PROSE, **kwargs) -> GridSampler:
    return GridSampler(LetterCycler(text), **kwargs)


@pytest.mark.parametrize("size", [(1, 1), (200, 100), (100, 200), (3000, 17), (640, 640)])
def test_grid_is_always_columns_by_rows(size):
    surface = TargetSurface(800, 600)
    surface.draw_fitted(solid(size))
    grid = sampler().build_grid(surface)
    assert len(grid) == 100 * 77
    assert (grid.columns, grid.rows) == (100, 77)


def test_small_surface_still_gives_a_full_grid():
    # fewer pixels than cells: sample points repeat
    surface = TargetSurface(10, 7)
    surface.draw_fitted(solid((10, 7)))
    grid = sampler().build_grid(surface, columns=100, rows=77)
    assert len(grid) == 7700
    assert all(cell.red == 255 for cell in grid.cells)


def test_landscape_band_is_coloured_and_letterbox_is_transparent():
    surface = TargetSurface(800, 600)
    placement = surface.draw_fitted(solid((200, 100)))
    assert (placement.y, placement.height) == (100, 400)

    grid = sampler().build_grid(surface)
    for index, row in enumerate(grid.iter_rows()):
        y = int(index * 600 / 77)
        expected = RED if 100 <= y < 500 else (0, 0, 0, 0)
        assert {(c.red, c.green, c.blue, int(c.alpha)) for c in row} == {expected}


def test_raw_alpha_is_not_normalised():
    surface = TargetSurface(20, 20)
    surface.draw_fitted(solid((20, 20), (10, 20, 30, 128)))
    cell = sampler().build_grid(surface, 2, 2).cells[0]
    assert (cell.red, cell.green, cell.blue) == (10, 20, 30)
    assert cell.alpha == 128


def test_normalized_alpha():
    surface = TargetSurface(20, 20)
    surface.draw_fitted(solid((20, 20)))
    cell = sampler(alpha_mode="normalized").build_grid(surface, 2, 2).cells[0]
    assert cell.alpha == pytest.approx(1.0)


def test_inverted_alpha_uses_the_normalised_complement():
    surface = TargetSurface(20, 20)
    surface.draw_fitted(solid((20, 20)))
    opaque = sampler(alpha_mode="inverted").build_grid(surface, 2, 2).cells[0]
    assert opaque.alpha == pytest.approx(0.0)

    surface.clear()
    clear = sampler(alpha_mode="inverted").build_grid(surface, 2, 2).cells[0]
    assert clear.alpha == pytest.approx(1.0)


def test_darkness_mode_averages_the_channels():
    assert darkness((51, 102, 153, 0)) == pytest.approx(0.4)

    surface = TargetSurface(20, 20)
    surface.draw_fitted(solid((20, 20), (51, 102, 153, 255)))
    cell = sampler(alpha_source="darkness").build_grid(surface, 2, 2).cells[0]
    assert cell.alpha == pytest.approx(0.4)

    inverted = sampler(alpha_source="darkness", alpha_mode="inverted").build_grid(surface, 2, 2).cells[0]
    assert inverted.alpha == pytest.approx(0.6)


def test_monochrome_forces_white():
    surface = TargetSurface(20, 20)
    surface.draw_fitted(solid((20, 20), BLUE))
    cell = sampler(monochrome=True).build_grid(surface, 2, 2).cells[0]
    assert (cell.red, cell.green, cell.blue) == (255, 255, 255)
    assert cell.alpha == 255


def test_samples_are_taken_row_major_at_cell_origins():
    surface = TargetSurface(4, 2)
    img = Image.new("RGBA", (4, 2))
    img.putdata([(x * 10, y * 10, 0, 255) for y in range(2) for x in range(4)])
    surface.draw(img, Placement(x=0, y=0, width=4, height=2))

    grid = sampler(text="abcdefgh").build_grid(surface, columns=2, rows=2)
    assert [(c.red, c.green) for c in grid.cells] == [(0, 0), (20, 0), (0, 10), (20, 10)]
    assert grid.text == "abcd"


def test_out_of_range_pixels_are_clamped():
    surface = TargetSurface(4, 2)
    surface.draw_fitted(solid((4, 2)))
    assert surface.pixel(10_000, -5) == surface.pixel(3, 0)


def test_letters_continue_across_grids():
    cycler = LetterCycler("abcdefg")
    s = GridSampler(cycler)
    surface = TargetSurface(8, 8)
    surface.draw_fitted(solid((8, 8)))

    first = s.build_grid(surface, 2, 2)
    second = s.build_grid(surface, 2, 2)
    assert first.text == "abcd"
    assert second.text == "efg"  # includes the empty read at the end of the text
    assert [c.letter for c in second.cells] == ["e", "f", "g", ""]


def test_unknown_modes_are_rejected():
    with pytest.raises(ValueError):
        sampler(alpha_source="brightness")
    with pytest.raises(ValueError):
        sampler(alpha_mode="both")
