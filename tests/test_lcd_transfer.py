import pytest

from jimbot.lcd_transfer import SCREEN_HEIGHT, SCREEN_WIDTH, LCDTransfer, new_screen
from jimbot.mmu import MMU
from jimbot.sprite import Sprite, SpriteFlags


def make_mmu(lcdc=0x91, bgp=0xE4):
    mmu = MMU(bytes(0x100))
    mmu.write(0xFF40, lcdc)
    mmu.write(0xFF47, bgp)
    return mmu


def set_tile(mmu, base, lo, hi):
    for row in range(8):
        mmu.write(base + 2 * row, lo)
        mmu.write(base + 2 * row + 1, hi)


def run_line(transfer, mmu, sprites=None, lcd=None, limit=2000):
    lcd = new_screen() if lcd is None else lcd
    sprites = [] if sprites is None else sprites
    for n in range(1, limit + 1):
        if transfer.cycle(mmu, sprites, lcd):
            return lcd, n
    raise AssertionError("line never finished")


def row(lcd, ly):
    return [lcd[x][ly] for x in range(SCREEN_WIDTH)]


def test_new_screen_shape():
    screen = new_screen()
    assert len(screen) == SCREEN_WIDTH
    assert all(len(column) == SCREEN_HEIGHT for column in screen)


def test_blank_background_uses_palette_shade_zero():
    mmu = make_mmu(bgp=0x03)
    lcd, _ = run_line(LCDTransfer(), mmu)
    assert row(lcd, 0) == [mmu.bgp.color(0)] * SCREEN_WIDTH


def test_solid_tile_fills_line():
    mmu = make_mmu()
    set_tile(mmu, 0x8000, 0xFF, 0xFF)
    lcd, _ = run_line(LCDTransfer(), mmu)
    assert row(lcd, 0) == [mmu.bgp.color(3)] * SCREEN_WIDTH


def test_pixel_order_follows_tile_bits():
    mmu = make_mmu()
    set_tile(mmu, 0x8000, 0xF0, 0x00)
    lcd, _ = run_line(LCDTransfer(), mmu)
    assert row(lcd, 0) == ([1] * 4 + [0] * 4) * (SCREEN_WIDTH // 8)


def test_fine_scroll_discards_leading_pixels():
    mmu = make_mmu()
    set_tile(mmu, 0x8000, 0xF0, 0x00)
    mmu.write(0xFF43, 4)
    lcd, _ = run_line(LCDTransfer(), mmu)
    assert row(lcd, 0) == ([0] * 4 + [1] * 4) * (SCREEN_WIDTH // 8)


def test_only_current_line_is_written():
    mmu = make_mmu(bgp=0x03)
    mmu.ly = 5
    lcd, _ = run_line(LCDTransfer(), mmu)
    assert all(lcd[x][5] == 3 for x in range(SCREEN_WIDTH))
    assert all(lcd[x][4] == 0 and lcd[x][6] == 0 for x in range(SCREEN_WIDTH))


def test_consecutive_lines_take_same_time():
    mmu = make_mmu()
    set_tile(mmu, 0x8000, 0xAA, 0x55)
    transfer = LCDTransfer()
    lcd, first = run_line(transfer, mmu)
    mmu.ly = 1
    lcd, second = run_line(transfer, mmu, lcd=lcd)
    assert first == second
    assert first >= SCREEN_WIDTH
    assert row(lcd, 0) == row(lcd, 1)


@pytest.mark.parametrize(
    "flags, bg_lo, expected_palette",
    [
        (0x00, 0x00, "obp0"),
        (0x10, 0x00, "obp1"),
        (0x00, 0xFF, "obp0"),
        (0x80, 0xFF, "bgp"),
    ],
)
def test_sprite_mixing(flags, bg_lo, expected_palette):
    mmu = make_mmu(lcdc=0x93)
    mmu.write(0xFF48, 0xE4)
    mmu.write(0xFF49, 0x1B)
    set_tile(mmu, 0x8000, bg_lo, 0x00)
    set_tile(mmu, 0x8010, 0xFF, 0xFF)
    sprites = [Sprite(16, 8, 1, SpriteFlags(flags))]
    lcd, _ = run_line(LCDTransfer(), mmu, sprites)
    if expected_palette == "bgp":
        expected = mmu.bgp.color(1)
    else:
        expected = getattr(mmu, expected_palette).color(3)
    line = row(lcd, 0)
    assert line[:8] == [expected] * 8
    assert line[8:] == [mmu.bgp.color(1 if bg_lo else 0)] * (SCREEN_WIDTH - 8)
    assert sprites == []


def test_sprite_slows_the_line():
    mmu = make_mmu(lcdc=0x93)
    set_tile(mmu, 0x8010, 0xFF, 0xFF)
    _, plain = run_line(LCDTransfer(), mmu)
    _, with_sprite = run_line(LCDTransfer(), mmu, [Sprite(16, 8, 1, SpriteFlags(0))])
    assert with_sprite > plain


def test_window_replaces_background():
    mmu = make_mmu(lcdc=0xF1)
    mmu.write(0xFF4B, 7)
    mmu.write(0xFF4A, 0)
    for i in range(32):
        mmu.write(0x9C00 + i, 1)
    set_tile(mmu, 0x8010, 0xFF, 0xFF)
    lcd, _ = run_line(LCDTransfer(), mmu)
    assert row(lcd, 0) == [mmu.bgp.color(3)] * SCREEN_WIDTH


def test_window_ignored_when_disabled():
    mmu = make_mmu(lcdc=0xD1)
    mmu.write(0xFF4B, 7)
    for i in range(32):
        mmu.write(0x9C00 + i, 1)
    set_tile(mmu, 0x8010, 0xFF, 0xFF)
    lcd, _ = run_line(LCDTransfer(), mmu)
    assert row(lcd, 0) == [mmu.bgp.color(0)] * SCREEN_WIDTH