"""Instruction set, register file layout and memory map of the Willow88 machine."""

from enum import IntEnum

MEMORY_SIZE = 64 * 1024

RAM_START = 0x0000
VRAM_START = 0x2000
IO_START = 0x4000
AUDIO_START = 0x6000
PROGRAM_START = 0x8000


class Register(IntEnum):
    """The 8-bit data registers."""

    A = 0x00
    X = 0x01
    Y = 0x02


class WordRegister(IntEnum):
    """The 16-bit control registers."""

    SP = 0x00
    PC = 0x01
    SR = 0x02


class StatusFlag(IntEnum):
    """Bit positions in the status register."""

    NEGATIVE = 0
    OVERFLOW = 1
    ZERO = 2
    CARRY = 3


class Opcode(IntEnum):
    """Machine opcodes."""

    NOP = 0x00

    LDAI = 0x01
    LDAA = 0x02
    STA = 0x03
    LDXI = 0x04
    LDXA = 0x05
    LDYI = 0x06
    LDYA = 0x07
    STX = 0x08
    STY = 0x09
    MOV = 0x0A

    ADDI = 0x10
    ADDX = 0x11
    ADDY = 0x12
    SUB = 0x13
    AND = 0x14
    OR = 0x15
    XOR = 0x16
    INC = 0x17
    DEC = 0x18
    SHL = 0x19
    SHR = 0x1A

    JMP = 0x20
    JSR = 0x21
    RTS = 0x22
    BEQ = 0x23
    BNE = 0x24
    BCC = 0x25
    BCS = 0x26

    PUSH = 0x30
    POP = 0x31

    IN = 0x40
    OUT = 0x41
    WAIT = 0x42
    DRAW = 0x43
    HLT = 0x44


def register_by_name(name):
    """Return the data register called *name* (case sensitive)."""
    try:
        return Register[name]
    except KeyError:
        raise ValueError(f"unknown register {name!r}") from None