import pytest

from jimbot.palette import BackgroundPalette, ObjectPalette

IDENTITY = 0b11_10_01_00
REVERSED = 0b00_01_10_11


@pytest.mark.parametrize("index", range(4))
def test_background_identity_palette(index):
    assert BackgroundPalette(IDENTITY).color(index) == index


def test_background_reversed_palette_maps_to_opposite_shades():
    palette = BackgroundPalette(REVERSED)
    assert [palette.color(i) for i in range(4)] == [3 - i for i in range(4)]


def test_object_palette_index_zero_is_transparent():
    assert ObjectPalette(REVERSED).color(0) == 0
    assert ObjectPalette(0xFF).color(0) == 0


@pytest.mark.parametrize("index", [1, 2, 3])
def test_object_palette_matches_background_above_zero(index):
    assert ObjectPalette(REVERSED).color(index) == BackgroundPalette(REVERSED).color(index)


@pytest.mark.parametrize("cls", [BackgroundPalette, ObjectPalette])
@pytest.mark.parametrize("index", [-1, 4])
def test_out_of_range_index_raises(cls, index):
    with pytest.raises(ValueError):
        cls(IDENTITY).color(index)


def test_int_round_trip():
    assert int(BackgroundPalette(IDENTITY)) == IDENTITY
    assert int(ObjectPalette(REVERSED)) == REVERSED