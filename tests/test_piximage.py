import numpy as np
import pytest

from piximage import PixImage


def test_new_image_is_black():
    image = PixImage(3, 2)

    assert image.width == 3
    assert image.height == 2
    for x in range(3):
        for y in range(2):
            assert image.get_pixel(x, y) == (0, 0, 0)


def test_set_pixel_updates_only_addressed_pixel():
    image = PixImage(2, 2)
    image.set_pixel(1, 0, 10, 20, 30)

    assert image.get_red(1, 0) == 10
    assert image.get_green(1, 0) == 20
    assert image.get_blue(1, 0) == 30
    assert image.get_pixel(0, 0) == (0, 0, 0)
    assert image.get_pixel(1, 1) == (0, 0, 0)


@pytest.mark.parametrize(
    "rgb",
    [(256, 0, 0), (0, -1, 0), (0, 0, 1000), (-5, 300, 12)],
)
def test_set_pixel_out_of_range_is_ignored(rgb):
    image = PixImage(1, 1)
    image.set_pixel(0, 0, 7, 8, 9)

    image.set_pixel(0, 0, *rgb)

    assert image.get_pixel(0, 0) == (7, 8, 9)


def test_set_pixel_accepts_range_limits():
    image = PixImage(1, 1)
    image.set_pixel(0, 0, 0, 255, 128)
    assert image.get_pixel(0, 0) == (0, 255, 128)


@pytest.mark.parametrize("coords", [(-1, 0), (0, -1), (3, 0), (0, 2)])
def test_out_of_bounds_access_raises(coords):
    image = PixImage(3, 2)

    with pytest.raises(IndexError):
        image.get_red(*coords)
    with pytest.raises(IndexError):
        image.set_pixel(*coords, 1, 1, 1)


@pytest.mark.parametrize("dims", [(-1, 2), (2, -3), (2.5, 1), ("3", 3), (True, 1)])
def test_invalid_dimensions_rejected(dims):
    with pytest.raises(ValueError):
        PixImage(*dims)


def test_zero_area_image_allowed():
    image = PixImage(0, 4)
    assert image.width == 0
    assert image.height == 4
    assert str(image) == ""


def test_equality():
    a = PixImage.from_grayscale([[1, 2], [3, 4]])
    b = PixImage.from_grayscale([[1, 2], [3, 4]])
    c = PixImage.from_grayscale([[1, 2], [3, 5]])

    assert a.equals(b)
    assert a == b
    assert not a.equals(c)
    assert a != c


def test_equality_against_other_shapes_and_objects():
    image = PixImage(2, 3)

    assert not image.equals(None)
    assert not image.equals(PixImage(3, 2))
    assert not image.equals("2x3")
    assert image != None  # noqa: E711


def test_images_are_unhashable():
    with pytest.raises(TypeError):
        hash(PixImage(1, 1))


def test_str_is_row_major():
    image = PixImage(2, 2)
    image.set_pixel(0, 0, 1, 2, 3)
    image.set_pixel(1, 0, 4, 5, 6)
    image.set_pixel(0, 1, 7, 8, 9)
    image.set_pixel(1, 1, 10, 11, 12)

    assert str(image) == "1:2:3\n4:5:6\n7:8:9\n10:11:12\n"


def test_repr():
    assert repr(PixImage(4, 5)) == "PixImage(width=4, height=5)"


def test_from_grayscale_indexes_x_then_y():
    image = PixImage.from_grayscale([[0, 100, 100], [0, 0, 100]])

    assert image.width == 2
    assert image.height == 3
    assert image.get_pixel(0, 1) == (100, 100, 100)
    assert image.get_pixel(1, 1) == (0, 0, 0)


def test_from_grayscale_leaves_out_of_range_entries_black():
    image = PixImage.from_grayscale([[300, 5]])

    assert image.get_pixel(0, 0) == (0, 0, 0)
    assert image.get_pixel(0, 1) == (5, 5, 5)


def test_from_grayscale_rejects_ragged_input():
    with pytest.raises(ValueError):
        PixImage.from_grayscale([[1, 2], [3]])


def test_from_array_round_trip_copies_buffer():
    data = np.arange(2 * 3 * 3, dtype=np.int64).reshape(2, 3, 3)
    image = PixImage.from_array(data)

    data[0, 0, 0] = 99
    assert image.get_red(0, 0) == 0
    assert image.get_blue(1, 2) == 17

    exported = image.to_array()
    exported[1, 2, 2] = 0
    assert image.get_blue(1, 2) == 17
    assert exported.dtype == np.uint8


@pytest.mark.parametrize(
    "array",
    [np.full((1, 1, 3), 256), np.full((1, 1, 3), -1), np.zeros((2, 2)), np.zeros((2, 2, 4))],
)
def test_from_array_rejects_bad_input(array):
    with pytest.raises(ValueError):
        PixImage.from_array(array)


def test_copy_is_independent():
    image = PixImage.from_grayscale([[1, 2], [3, 4]])
    duplicate = image.copy()

    duplicate.set_pixel(0, 0, 9, 9, 9)

    assert duplicate is not image
    assert image.get_pixel(0, 0) == (1, 1, 1)
