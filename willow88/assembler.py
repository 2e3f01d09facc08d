"""Assembler turning Willow88 assembly text into cartridge images."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from .isa import Opcode, Register

_HEX_NUMBER = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")
_DEC_NUMBER = re.compile(r"\s*([+-]?)([0-9]*)")
_LONG_MAX = 2**63 - 1
_LONG_MIN = -(2**63)


class AssemblyError(Exception):
    """An error in a line of assembly source."""

    def __init__(self, filename, lineno, detail):
        super().__init__(f"ERROR {filename}:{lineno}: {detail}")
        self.filename = filename
        self.lineno = lineno
        self.detail = detail


@dataclass(frozen=True)
class InstructionSpec:
    """A mnemonic, how its operands are encoded, and its opcodes."""

    name: str
    encoder: Callable[[list, "InstructionSpec", str, int], int]
    primary: int
    secondary: int = 0


def split_fields(text, delim):
    """Split *text* on *delim*, dropping empty fields and trimming each one."""
    return [field.strip() for field in text.split(delim) if field.strip()]


def _parse_hex(text):
    match = _HEX_NUMBER.match(text)
    sign, digits = match.groups()
    if not digits:
        return 0
    value = int(digits, 16)
    if sign == "-":
        value = -value
    value = max(_LONG_MIN, min(_LONG_MAX, value))
    return value & 0xFF


def _parse_decimal(text):
    match = _DEC_NUMBER.match(text)
    sign, digits = match.groups()
    if not digits:
        return 0
    value = int(digits)
    if sign == "-":
        value = -value
    return value & 0xFF


def _word(opcode, operand):
    return (opcode << 8) | operand


def _require_operand(fields, spec, filename, lineno):
    if len(fields) < 2:
        raise AssemblyError(filename, lineno, f"instruction {spec.name} expects an operand")
    return fields[1]


def _address_or_immediate(fields, spec, filename, lineno):
    operand = _require_operand(fields, spec, filename, lineno)
    if operand.startswith("$"):
        return _word(spec.secondary, _parse_decimal(operand[1:]))
    return _word(spec.primary, _parse_hex(operand))


def _address(fields, spec, filename, lineno):
    operand = _require_operand(fields, spec, filename, lineno)
    return _word(spec.primary, _parse_hex(operand))


def _no_operand(fields, spec, filename, lineno):
    if len(fields) > 1:
        raise AssemblyError(filename, lineno, f"instruction {spec.name} requires no arguments")
    return _word(spec.primary, 0)


def _register_pair(fields, spec, filename, lineno):
    if len(fields) < 3:
        raise AssemblyError(filename, lineno, f"instruction {spec.name} expects 2 operand")
    names = (fields[1][:-1].strip(), fields[2].strip())
    try:
        first, second = (Register[name] for name in names)
    except KeyError:
        raise AssemblyError(
            filename, lineno, f"instruction {spec.name} needs a register as an argument"
        ) from None
    return _word(spec.primary, ((first << 4) | (second & 0x0F)) & 0xFF)


def _single_register(fields, spec, filename, lineno):
    if len(fields) > 2:
        raise AssemblyError(filename, lineno, f"instruction {spec.name} requires no arguments")
    # No register operand form is accepted for these mnemonics.
    raise AssemblyError(filename, lineno, f"instruction {spec.name} needs a register as an argument")


INSTRUCTIONS = (
    InstructionSpec("LDA", _address_or_immediate, Opcode.LDAA, Opcode.LDAI),
    InstructionSpec("LDX", _address_or_immediate, Opcode.LDXA, Opcode.LDXI),
    InstructionSpec("LDY", _address_or_immediate, Opcode.LDYA, Opcode.LDYI),
    InstructionSpec("STA", _address, Opcode.STA),
    InstructionSpec("STX", _address, Opcode.STX),
    InstructionSpec("STY", _address, Opcode.STY),
    InstructionSpec("MOV", _register_pair, Opcode.MOV),
    InstructionSpec("JMP", _address, Opcode.JMP),
    InstructionSpec("JSR", _address, Opcode.JSR),
    InstructionSpec("BEQ", _address, Opcode.BEQ),
    InstructionSpec("BNE", _address, Opcode.BNE),
    InstructionSpec("BCC", _address, Opcode.BCC),
    InstructionSpec("BCS", _address, Opcode.BCS),
    InstructionSpec("NOP", _no_operand, Opcode.NOP),
    InstructionSpec("HLT", _no_operand, Opcode.HLT),
    InstructionSpec("RTS", _no_operand, Opcode.RTS),
    InstructionSpec("WAIT", _no_operand, Opcode.WAIT),
    InstructionSpec("DRAW", _no_operand, Opcode.DRAW),
    InstructionSpec("INC", _no_operand, Opcode.INC),
    InstructionSpec("DEC", _no_operand, Opcode.DEC),
    InstructionSpec("SHL", _single_register, Opcode.SHL),
    InstructionSpec("SHR", _single_register, Opcode.SHR),
    InstructionSpec("PUSH", _single_register, Opcode.PUSH),
    InstructionSpec("POP", _single_register, Opcode.PUSH),
)

_BY_NAME = {spec.name: spec for spec in INSTRUCTIONS}


def encode(word):
    """Return the bytes of a 16-bit instruction word; a zero operand is omitted."""
    opcode = (word >> 8) & 0xFF
    operand = word & 0xFF
    return bytes((opcode, operand)) if operand else bytes((opcode,))


def assemble_line(line, filename, lineno):
    """Assemble one source line into an instruction word, or None if it holds none."""
    text = line.strip()
    if len(text) < 2 or text.startswith(";"):
        return None
    fields = split_fields(text, " ")
    spec = _BY_NAME.get(fields[0])
    if spec is None:
        raise AssemblyError(filename, lineno, f"Invalid operation {fields[0]}")
    return spec.encoder(fields, spec, filename, lineno)


def assemble(lines: Iterable[str], filename="<input>"):
    """Assemble source lines into a cartridge image."""
    image = bytearray()
    for lineno, line in enumerate(lines, start=1):
        word = assemble_line(line, filename, lineno)
        if word is not None:
            image += encode(word)
    return bytes(image)


def output_path(path):
    """Return the cartridge name for a source path: text before the first dot plus .w88."""
    fields = split_fields(str(path), ".")
    return (fields[0] if fields else "") + ".w88"


def assemble_file(path):
    """Assemble the file at *path*, write the cartridge, and return its path."""
    with open(path, "r") as source:
        image = assemble(source, str(path))
    target = output_path(path)
    Path(target).write_bytes(image)
    return target


def main(argv=None):
    """Command entry point: assemble the named source file."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("w88-asm [input.wa] ...")
        return 1
    path = args[0]
    try:
        assemble_file(path)
    except AssemblyError as error:
        print(error)
        return 1
    except OSError as error:
        print(f"ERROR: Failed to open file {path}: {error.strerror}")
        return 1
    return 0