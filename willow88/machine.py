"""The Willow88 machine: memory, registers and the fetch-execute loop."""

from __future__ import annotations

import sys
from pathlib import Path

from .isa import (
    AUDIO_START,
    IO_START,
    MEMORY_SIZE,
    PROGRAM_START,
    RAM_START,
    VRAM_START,
    Opcode,
    Register,
    WordRegister,
)

_MEMDUMP_PATH = "W88memdump.txt"

_LOAD_ADDRESS = {Opcode.LDAA: Register.A, Opcode.LDXA: Register.X, Opcode.LDYA: Register.Y}
_LOAD_IMMEDIATE = {Opcode.LDAI: Register.A, Opcode.LDXI: Register.X, Opcode.LDYI: Register.Y}
_STORE = {Opcode.STA: Register.A, Opcode.STX: Register.X, Opcode.STY: Register.Y}

_SECTIONS = {
    RAM_START: "w88_ram",
    VRAM_START: "w88_vram",
    IO_START: "w88_io_regs",
    AUDIO_START: "w88_audio_regs",
    PROGRAM_START: "w88_cartridge",
}


class CartridgeError(Exception):
    """A cartridge could not be loaded."""


class Machine:
    """Memory, register file and execution state of one machine."""

    def __init__(self):
        self.memory = bytearray(MEMORY_SIZE)
        self.registers = [0] * len(Register)
        self.word_registers = [0] * len(WordRegister)
        self.halted = False
        self.pc = PROGRAM_START

    @property
    def pc(self):
        return self.word_registers[WordRegister.PC]

    @pc.setter
    def pc(self, value):
        self.word_registers[WordRegister.PC] = value & 0xFFFF

    def load_bytes(self, data):
        """Place a cartridge image at the start of the program area."""
        if len(data) > MEMORY_SIZE - PROGRAM_START:
            raise CartridgeError(f"Cartridge of {len(data)} bytes is too long")
        self.memory[PROGRAM_START:PROGRAM_START + len(data)] = data

    def load_rom(self, path):
        """Load the cartridge file at *path*."""
        try:
            data = Path(path).read_bytes()
        except OSError as error:
            raise CartridgeError(f"Failed to open cartridge {path}: {error.strerror}") from error
        if len(data) > MEMORY_SIZE - PROGRAM_START:
            raise CartridgeError(f"Cartridge {path} is too long")
        self.load_bytes(data)

    def _fetch_operand(self):
        self.pc += 1
        return self.memory[self.pc]

    def step(self):
        """Execute the instruction at PC and return its opcode."""
        opcode = self.memory[self.pc]
        if opcode == Opcode.NOP:
            pass
        elif opcode == Opcode.HLT:
            self.halted = True
        elif opcode in _LOAD_ADDRESS:
            self.registers[_LOAD_ADDRESS[opcode]] = self.memory[self._fetch_operand()]
        elif opcode in _LOAD_IMMEDIATE:
            self.registers[_LOAD_IMMEDIATE[opcode]] = self._fetch_operand()
        elif opcode in _STORE:
            self.memory[self._fetch_operand()] = self.registers[_STORE[opcode]]
        elif opcode == Opcode.JMP:
            self.pc = self._fetch_operand()
        elif opcode == Opcode.MOV:
            operand = self._fetch_operand()
            target, source = (operand >> 4) & 0x0F, operand & 0x0F
            if max(target, source) >= len(self.registers):
                raise ValueError(f"MOV names a register outside the register file: 0x{operand:02X}")
            self.registers[target] = self.registers[source]
        else:
            print(f"WARNING: Bad opcode 0x{opcode:02X}")
        self.pc += 1
        return opcode

    def run(self):
        """Execute instructions until the machine halts."""
        while not self.halted:
            self.step()

    def format_memdump(self):
        """Return a text dump of the registers and the whole memory."""
        parts = [
            "w88_regs:\n"
            f"\tA: 0x{self.registers[Register.A]:02X}\n"
            f"\tX: 0x{self.registers[Register.X]:02X}\n"
            f"\tY: 0x{self.registers[Register.Y]:02X}\n"
            f"\tSP: 0x{self.word_registers[WordRegister.SP]:04X}\n"
            f"\tPC: 0x{self.word_registers[WordRegister.PC]:04X}\n"
        ]
        for address, value in enumerate(self.memory):
            section = _SECTIONS.get(address)
            if section is not None:
                parts.append(f"\n{section}:")
            if address % 8 == 0:
                parts.append(f"\n\t0x{address:02X}:")
            parts.append(f" 0x{value:02X}")
        return "".join(parts)

    def memdump(self, outpath):
        """Write the memory dump to *outpath*."""
        Path(outpath).write_text(self.format_memdump())


def main(argv=None):
    """Command entry point: run a cartridge and dump memory when it halts."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("ERROR: Invalid usage")
        print("w88 [cartridge.w88]")
        return 1
    machine = Machine()
    try:
        machine.load_rom(args[0])
    except CartridgeError as error:
        print(f"ERROR: {error}")
        return 1
    print(f"INFO: Loaded cartridge {args[0]}")
    machine.run()
    machine.memdump(_MEMDUMP_PATH)
    print(f"INFO: Generated memdump in {_MEMDUMP_PATH}")
    return 0