from jimbot.tac import TAC


def test_enable_bit():
    assert TAC(0b100).is_timer_enabled() is True
    assert TAC(0b011).is_timer_enabled() is False


def test_slowest_clock_is_default():
    assert TAC(0).clock_select() == 9


def test_clock_select_uses_low_two_bits_only():
    for value in range(256):
        assert TAC(value).clock_select() == TAC(value & 0b11).clock_select()


def test_clock_select_ordering():
    bits = [TAC(sel).clock_select() for sel in (1, 2, 3, 0)]
    assert bits == sorted(bits)
    assert len(set(bits)) == 4