"""The memory map: routes CPU reads and writes to memory and devices."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from jimbot.interrupts import InterruptRequest, Interrupts
from jimbot.joypad import JoyPad, Key
from jimbot.lcdc import LCDC
from jimbot.lcdstat import LCDStat
from jimbot.palette import BackgroundPalette, ObjectPalette
from jimbot.timer import Timer

log = logging.getLogger(__name__)

BOOT_ROM_SIZE = 0x100
VRAM_SIZE = 0x2000
WRAM_SIZE = 0x2000
OAM_SIZE = 0xA0
HRAM_SIZE = 0x7F

_APU_RANGES = (
    range(0xFF10, 0xFF15),
    range(0xFF16, 0xFF1F),
    range(0xFF20, 0xFF27),
    range(0xFF30, 0xFF40),
)


class Cartridge(Protocol):
    """What the memory map needs from a cartridge."""

    def read(self, address: int) -> int: ...

    def write(self, address: int, value: int) -> None: ...


class AudioUnit(Protocol):
    """What the memory map needs from the audio unit."""

    def read(self, address: int) -> int: ...

    def write(self, address: int, value: int) -> None: ...

    def cycle(self) -> None: ...

    def clock(self, step: int) -> None: ...


class MissingCartridgeError(RuntimeError):
    """Raised when cartridge memory is read but no cartridge is inserted."""


def _is_apu_register(address: int) -> bool:
    return any(address in r for r in _APU_RANGES)


class MMU:
    """Address space of the console, with its registers and memories."""

    def __init__(
        self,
        boot_rom: bytes,
        cartridge: Optional[Cartridge] = None,
        apu: Optional[AudioUnit] = None,
    ) -> None:
        if len(boot_rom) != BOOT_ROM_SIZE:
            raise ValueError(
                f"boot ROM must be {BOOT_ROM_SIZE} bytes, got {len(boot_rom)}"
            )
        self.boot_rom = bytes(boot_rom)
        self.boot_mode = True
        self.cartridge = cartridge
        self.apu = apu
        self.timer = Timer()
        self.joypad = JoyPad()
        self.vram = bytearray(VRAM_SIZE)
        self.wram = bytearray(WRAM_SIZE)
        self.oam = bytearray(OAM_SIZE)
        self.hram = bytearray(HRAM_SIZE)
        self._interrupt_flags = 0
        self._interrupt_enables = 0
        self._bgp = 0
        self._obp0 = 0
        self._obp1 = 0
        self._lcdc = 0
        self._lcdstat = 0x84
        self.scy = 0
        self.scx = 0
        self.ly = 0
        self.lyc = 0
        self.wx = 0
        self.wy = 0
        self.serial_data = 0
        self.serial_control = 0

    # Decoded register views

    @property
    def lcdc(self) -> LCDC:
        return LCDC(self._lcdc)

    @property
    def lcdstat(self) -> LCDStat:
        return LCDStat(self._lcdstat)

    @lcdstat.setter
    def lcdstat(self, stat: LCDStat) -> None:
        self._lcdstat = int(stat) & 0xFF

    @property
    def bgp(self) -> BackgroundPalette:
        return BackgroundPalette(self._bgp)

    @property
    def obp0(self) -> ObjectPalette:
        return ObjectPalette(self._obp0)

    @property
    def obp1(self) -> ObjectPalette:
        return ObjectPalette(self._obp1)

    @property
    def interrupt_flags(self) -> Interrupts:
        return Interrupts(self._interrupt_flags)

    @interrupt_flags.setter
    def interrupt_flags(self, flags: Interrupts) -> None:
        self._interrupt_flags = int(flags) & 0xFF

    @property
    def interrupt_enables(self) -> Interrupts:
        return Interrupts(self._interrupt_enables)

    @interrupt_enables.setter
    def interrupt_enables(self, enables: Interrupts) -> None:
        self._interrupt_enables = int(enables) & 0xFF

    # Bus access

    def _require_cartridge(self, address: int) -> Cartridge:
        if self.cartridge is None:
            raise MissingCartridgeError(f"no cartridge for {address:#06X}")
        return self.cartridge

    def read(self, address: int) -> int:
        """Return the byte at ``address``."""
        if not 0 <= address <= 0xFFFF:
            raise ValueError(f"address out of range: {address:#x}")
        if address <= 0x00FF and self.boot_mode:
            return self.boot_rom[address]
        if address <= 0x7FFF:
            return self._require_cartridge(address).read(address)
        if address <= 0x9FFF:
            return self.vram[address - 0x8000]
        if address <= 0xBFFF:
            return self._require_cartridge(address).read(address)
        if address <= 0xDFFF:
            return self.wram[address - 0xC000]
        if address <= 0xFDFF:
            return self.read(address - 0x2000)
        if address <= 0xFE9F:
            return self.oam[address - 0xFE00]
        if address == 0xFF00:
            return self.joypad.read()
        if address == 0xFF01:
            return self.serial_data
        if address == 0xFF02:
            return self.serial_control
        if 0xFF04 <= address <= 0xFF07:
            return self.timer.read(address)
        if address == 0xFF0F:
            return self._interrupt_flags
        if _is_apu_register(address):
            return self.apu.read(address) if self.apu is not None else 0xFF
        registers = {
            0xFF40: self._lcdc,
            0xFF41: self._lcdstat,
            0xFF42: self.scy,
            0xFF43: self.scx,
            0xFF44: self.ly,
            0xFF45: self.lyc,
            0xFF47: self._bgp,
            0xFF48: self._obp0,
            0xFF49: self._obp1,
            0xFF4A: self.wy,
            0xFF4B: self.wx,
        }
        if address in registers:
            return registers[address]
        if 0xFF80 <= address <= 0xFFFE:
            return self.hram[address - 0xFF80]
        if address == 0xFFFF:
            return self._interrupt_enables
        log.debug("read of unusable address %#06X", address)
        return 0xFF

    def write(self, address: int, value: int) -> None:
        """Store ``value`` at ``address``."""
        if not 0 <= address <= 0xFFFF:
            raise ValueError(f"address out of range: {address:#x}")
        value &= 0xFF
        if address <= 0x7FFF:
            if not self.boot_mode and self.cartridge is not None:
                self.cartridge.write(address, value)
        elif address <= 0x9FFF:
            self.vram[address - 0x8000] = value
        elif address <= 0xBFFF:
            if self.cartridge is not None:
                self.cartridge.write(address, value)
        elif address <= 0xDFFF:
            self.wram[address - 0xC000] = value
        elif address <= 0xFDFF:
            self.write(address - 0x2000, value)
        elif address <= 0xFE9F:
            self.oam[address - 0xFE00] = value
        elif address == 0xFF00:
            self.joypad.write(value)
        elif address == 0xFF01:
            self.serial_data = value
        elif address == 0xFF02:
            self.serial_control = value
        elif 0xFF04 <= address <= 0xFF07:
            self.timer.write(address, value)
        elif address == 0xFF0F:
            self._interrupt_flags = value
        elif _is_apu_register(address):
            if self.apu is not None:
                self.apu.write(address, value)
        elif address == 0xFF40:
            self._lcdc = value
        elif address == 0xFF41:
            self._lcdstat = (self._lcdstat & 0b1000_0011) | (value & 0b1111_1100)
        elif address == 0xFF42:
            self.scy = value
        elif address == 0xFF43:
            self.scx = value
        elif address == 0xFF44:
            log.debug("write to LY ignored: %#04X", value)
        elif address == 0xFF45:
            self.lyc = value
        elif address == 0xFF46:
            self._dma(value)
        elif address == 0xFF47:
            self._bgp = value
        elif address == 0xFF48:
            self._obp0 = value
        elif address == 0xFF49:
            self._obp1 = value
        elif address == 0xFF4A:
            self.wy = value
        elif address == 0xFF4B:
            self.wx = max(value, 7)
        elif address == 0xFF50:
            self.boot_mode = False
        elif 0xFF80 <= address <= 0xFFFE:
            self.hram[address - 0xFF80] = value
        elif address == 0xFFFF:
            self._interrupt_enables = value
        else:
            log.debug("write to unusable address %#06X: %#04X", address, value)

    def _dma(self, source_high: int) -> None:
        start = source_high << 8
        self.oam[:] = bytes(self.read(start + i) for i in range(OAM_SIZE))

    # Devices

    def cycle_timer(self) -> None:
        """Advance the timer one clock, raising its interrupt on overflow."""
        on_frame_step = self.apu.clock if self.apu is not None else None
        if self.timer.cycle(on_frame_step):
            self.request_interrupt(InterruptRequest.TIMER)

    def cycle_apu(self) -> None:
        """Advance the audio unit one clock, if there is one."""
        if self.apu is not None:
            self.apu.cycle()

    def request_interrupt(self, request: InterruptRequest) -> None:
        flags = self.interrupt_flags
        flags.enable_request(request)
        self.interrupt_flags = flags

    def joypad_press(self, key: Key) -> None:
        self.joypad.press(key)
        self.request_interrupt(InterruptRequest.JOYPAD)

    def joypad_release(self, key: Key) -> None:
        self.joypad.release(key)