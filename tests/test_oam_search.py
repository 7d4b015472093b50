import pytest

from jimbot.mmu import MMU
from jimbot.oam_search import OAMSearch
from jimbot.sprite import Sprite


def make_mmu(lcdc=0x00, ly=0):
    mmu = MMU(bytes(0x100))
    mmu.write(0xFF40, lcdc)
    mmu.ly = ly
    return mmu


def place(mmu, index, y, x, tile=0, flags=0):
    mmu.oam[index * 4:index * 4 + 4] = bytes([y, x, tile, flags])


def run(search, mmu, buffer):
    for cycles in range(1, 1000):
        if search.cycle(mmu, buffer):
            return cycles
    raise AssertionError("search never finished")


def test_search_takes_two_clocks_per_entry():
    mmu = make_mmu()
    search = OAMSearch()
    assert run(search, mmu, []) == 80
    assert run(search, mmu, []) == 80


def test_visible_sprite_is_collected():
    mmu = make_mmu(ly=0)
    place(mmu, 0, 16, 8, tile=5, flags=0x20)
    buffer = []
    run(OAMSearch(), mmu, buffer)
    assert buffer == [Sprite.from_bytes([16, 8, 5, 0x20])]


def test_sprite_at_x_zero_is_skipped():
    mmu = make_mmu(ly=0)
    place(mmu, 0, 16, 0)
    buffer = []
    assert run(OAMSearch(), mmu, buffer) == 80
    assert buffer == []


@pytest.mark.parametrize("ly, expected", [(0, 0), (14, 1), (21, 1), (22, 0)])
def test_sprite_must_cover_the_line(ly, expected):
    mmu = make_mmu(ly=ly)
    place(mmu, 3, 30, 20)
    buffer = []
    assert run(OAMSearch(), mmu, buffer) == 80
    assert buffer == [Sprite.from_bytes([30, 20, 0, 0])] * expected


@pytest.mark.parametrize("lcdc, expected", [(0x00, 0), (0x04, 1)])
def test_tall_sprites_cover_sixteen_lines(lcdc, expected):
    mmu = make_mmu(lcdc=lcdc, ly=10)
    place(mmu, 0, 16, 8)
    buffer = []
    assert run(OAMSearch(), mmu, buffer) == 80
    assert buffer == [Sprite.from_bytes([16, 8, 0, 0])] * expected


def test_at_most_ten_sprites_in_oam_order():
    mmu = make_mmu(ly=0)
    for i in range(12):
        place(mmu, i, 16, i + 1)
    buffer = []
    assert run(OAMSearch(), mmu, buffer) == 80
    assert buffer == [Sprite.from_bytes([16, x, 0, 0]) for x in range(1, 11)]


def test_full_buffer_receives_nothing():
    mmu = make_mmu(ly=0)
    place(mmu, 0, 16, 8)
    buffer = [Sprite() for _ in range(10)]
    run(OAMSearch(), mmu, buffer)
    assert buffer == [Sprite() for _ in range(10)]


def test_reset_restarts_the_scan():
    mmu = make_mmu()
    search = OAMSearch()
    for _ in range(10):
        assert search.cycle(mmu, []) is False
    search.reset()
    assert run(search, mmu, []) == 80