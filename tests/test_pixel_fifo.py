import pytest

from jimbot.pixel_fifo import PixelFifo


def test_empty_queue_state():
    fifo = PixelFifo()
    assert len(fifo) == 0
    assert not fifo.can_pop()
    assert fifo.can_push()


def test_pop_requires_eight_pixels():
    fifo = PixelFifo()
    with pytest.raises(IndexError):
        fifo.pop()


def test_two_rows_fill_queue():
    fifo = PixelFifo()
    fifo.push_row([1] * 8)
    assert fifo.can_push()
    fifo.push_row([2] * 8)
    assert len(fifo) == 16
    assert not fifo.can_push()
    with pytest.raises(OverflowError):
        fifo.push_row([3] * 8)


def test_push_front_goes_first_in_order():
    fifo = PixelFifo()
    fifo.push_row([0] * 8)
    fifo.push_row_front([1, 2, 3, 0, 1, 2, 3, 0])
    assert fifo.pop_front_8() == [1, 2, 3, 0, 1, 2, 3, 0]
    assert fifo.pop_front_8() == [0] * 8


def test_push_front_refused_when_full():
    fifo = PixelFifo()
    fifo.push_row([0] * 8)
    fifo.push_row([0] * 8)
    with pytest.raises(OverflowError):
        fifo.push_row_front([1] * 8)


def test_row_length_checked():
    fifo = PixelFifo()
    with pytest.raises(ValueError):
        fifo.push_row([1, 2, 3])


def test_reset_empties():
    fifo = PixelFifo()
    fifo.push_row([3] * 8)
    fifo.reset()
    assert len(fifo) == 0
    with pytest.raises(IndexError):
        fifo.pop_front_8()