import numpy as np
import pytest

import services
from models.color_triple import ColorTriple
from models.errors import DecodeError, EncodeError, ShapeViolation
from models.pixel_grid import PixelGrid
from models.pixel_transform import PixelTransform
from services.image_service import (
    ImageService,
    apply_grayscale_average,
    apply_grayscale_lightness,
    apply_grayscale_luminosity,
    apply_sepia,
    apply_transform,
    copy,
)

DRIVERS = {
    PixelTransform.AVERAGE: apply_grayscale_average,
    PixelTransform.LIGHTNESS: apply_grayscale_lightness,
    PixelTransform.LUMINOSITY: apply_grayscale_luminosity,
    PixelTransform.SEPIA: apply_sepia,
}
GRAYSCALE_DRIVERS = [d for t, d in DRIVERS.items() if t.is_grayscale]


def test_end_to_end_average(rgbw_png):
    grid = services.load(rgbw_png)
    assert apply_grayscale_average(grid) is None
    assert grid.rows() == [
        [ColorTriple.gray(85), ColorTriple.gray(85)],
        [ColorTriple.gray(85), ColorTriple.gray(255)],
    ]


def test_copy_matches_then_diverges(noise_pixels):
    grid = PixelGrid.from_array(noise_pixels)
    dup = copy(grid)
    assert dup == grid
    assert dup.pixels is not grid.pixels

    apply_sepia(dup)
    assert grid == PixelGrid.from_array(noise_pixels)

    apply_grayscale_average(grid)
    assert dup != grid


@pytest.mark.parametrize("transform, driver", list(DRIVERS.items()))
def test_driver_matches_cellwise_transform(transform, driver, noise_pixels):
    grid = PixelGrid.from_array(noise_pixels)
    before = copy(grid)
    driver(grid)

    assert grid.shape == before.shape
    for y in range(before.height):
        for x in range(before.width):
            assert grid[y, x] == transform(before[y, x])


@pytest.mark.parametrize("driver", GRAYSCALE_DRIVERS)
def test_grayscale_driver_idempotent(driver, noise_pixels):
    grid = PixelGrid.from_array(noise_pixels)
    driver(grid)
    once = copy(grid)
    driver(grid)
    assert grid == once


@pytest.mark.parametrize("driver", list(DRIVERS.values()))
def test_driver_on_empty_grid(driver):
    grid = PixelGrid.blank(0, 4)
    driver(grid)
    assert grid.shape == (0, 4)


@pytest.mark.parametrize("driver", list(DRIVERS.values()))
def test_driver_fails_fast_on_malformed_storage(driver):
    grid = PixelGrid.blank(2, 2)
    grid.pixels = np.zeros((2, 2, 4), dtype=np.uint8)
    with pytest.raises(ShapeViolation):
        driver(grid)


def test_copy_fails_fast_on_malformed_storage():
    grid = PixelGrid.blank(1, 1)
    grid.pixels = np.zeros(3, dtype=np.uint8)
    with pytest.raises(ShapeViolation):
        copy(grid)


def test_generic_driver():
    grid = PixelGrid.from_rows([[(255, 0, 0)]])
    apply_transform(grid, PixelTransform.LUMINOSITY)
    assert grid[0, 0] == ColorTriple.gray(54)


def test_service_apply_by_name():
    grid = PixelGrid.from_rows([[(0, 0, 0), (255, 255, 255)]])
    ImageService.apply(grid, "Lightness")
    assert grid.rows() == [[ColorTriple.gray(0), ColorTriple.gray(255)]]
    with pytest.raises(ValueError):
        ImageService.apply(grid, "blur")


@pytest.mark.parametrize("codec", ["pillow", "opencv"])
def test_recolor_file(rgbw_png, tmp_path, codec):
    service = ImageService(codec=codec)
    dst = tmp_path / "sepia.bmp"
    written = service.recolor_file(rgbw_png, dst, PixelTransform.SEPIA)

    assert service.load(dst) == written
    assert written[0, 0] == ColorTriple(100, 89, 69)
    assert written[1, 1] == ColorTriple(255, 255, 239)


def test_module_save_and_load(tmp_path):
    grid = PixelGrid.from_rows([[(1, 2, 3)], [(4, 5, 6)]])
    path = tmp_path / "col.png"
    services.save(path, grid)
    assert services.load(path) == grid


def test_module_failures(tmp_path):
    with pytest.raises(DecodeError):
        services.load(tmp_path / "missing.jpg")
    with pytest.raises(EncodeError):
        services.save(tmp_path / "bad.png", [[(0, 0, 0)], [(0, 0, 0), (0, 0, 0)]])
    assert not (tmp_path / "bad.png").exists()
