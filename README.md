# jimbot

The core of a Game Boy (DMG) emulator: the memory map, the timer, the joypad
register and a pixel-pipeline PPU that is advanced one clock at a time.

## Install

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## What is inside

- `jimbot.mmu.MMU`: the address space. It is built from a 256-byte boot ROM,
  an optional cartridge and an optional audio unit. Read with
  `MMU.read(address)` and write with `MMU.write(address, value)`. It holds
  VRAM, work RAM (with its echo at `0xE000`–`0xFDFF`), OAM, high RAM and the
  I/O registers. A write to `0xFF46` copies 160 bytes into OAM (DMA), a write
  to `0xFF50` unmaps the boot ROM, and a write to `0xFF4B` (WX) is raised to
  at least 7. Reading cartridge space with no cartridge inserted raises
  `MissingCartridgeError`; unusable addresses read as `0xFF`.
  Decoded register views are available as properties: `lcdc`, `lcdstat`,
  `bgp`, `obp0`, `obp1`, `interrupt_flags` and `interrupt_enables`.
- `jimbot.timer.Timer`: the DIV, TIMA, TMA and TAC registers. `Timer.cycle`
  returns `True` on the clock where TIMA overflows and reloads from TMA; it
  also calls an optional callback with the frame sequencer step (0–7) each
  time divider bit 13 falls. `MMU.cycle_timer()` advances the timer, passes
  that step to the audio unit's `clock` method and requests the timer
  interrupt on overflow.
- `jimbot.joypad.JoyPad`: the `0xFF00` register, with `Key` and `SelectMode`.
  Use `MMU.joypad_press(key)` and `MMU.joypad_release(key)`; a press also
  requests the joypad interrupt. Until a button group is selected by a write
  the register reads `0xFF`.
- `jimbot.interrupts`: `InterruptRequest` (with `routine_location()`) and the
  `Interrupts` bit set held by the IF and IE registers.
- `jimbot.lcdc`, `jimbot.lcdstat`, `jimbot.palette`, `jimbot.sprite` and
  `jimbot.tac`: the bit fields of the LCD control, LCD status, palette, OAM
  entry and timer control registers.
- `jimbot.ppu.PPU`: the picture processing unit. Each `PPU.cycle(mmu)` runs
  one clock of line timing, STAT modes and interrupts, the OAM search
  (`jimbot.oam_search`), the background/window fetcher
  (`jimbot.pixel_fetcher`), the sprite fetcher (`jimbot.sprite_pixel_fetcher`)
  and the pixel queues (`jimbot.pixel_fifo`, `jimbot.sprite_pixel_fifo`),
  drawing lines through `jimbot.lcd_transfer.LCDTransfer`. Frames are drawn
  into two alternating buffers; `PPU.lcd()` returns a copy of the last
  completed one.

## Example

```python
from jimbot.mmu import MMU
from jimbot.ppu import PPU

boot_rom = bytes(0x100)          # supply a real boot ROM image here
mmu = MMU(boot_rom)
ppu = PPU()

mmu.write(0xFF40, 0x91)          # turn the display on
for _ in range(456 * 154):       # one full frame of clocks
    mmu.cycle_timer()
    ppu.cycle(mmu)

frame = ppu.lcd()                # 160 columns of 144 shades, 0 to 3
```

Each shade in the frame is a colour number from 0 (lightest) to 3 (darkest),
after the background or object palette has been applied. The frame is
indexed as `frame[x][y]`.

## What it does not do

This package has no CPU, so it does not run game code by itself: the caller
drives `MMU`, `PPU` and the timer clock by clock. It ships no cartridge or
memory bank controller and no audio unit; `MMU` accepts any objects that
provide the `Cartridge` and `AudioUnit` methods (`read`, `write`, and for
audio also `cycle` and `clock`). Without an audio unit the sound registers
read as `0xFF` and writes to them are dropped. There is no window, screen
output, input handling or command-line program; the frame is returned as
plain lists of shade numbers.