# willow88

An assembler and emulator for Willow88, a small 8-bit fantasy computer. It has
three 8-bit data registers (A, X, Y), 16-bit SP, PC and SR registers and a
64 KiB address space. Cartridges are loaded at address `0x8000`.

## Installation

```
pip install .
```

## Assembling a program

Source files hold one instruction per line. Lines starting with `;` and lines
shorter than two characters are skipped. Immediate operands start with `$`
and are decimal; addresses are written in hexadecimal without a prefix.

```
; store 5 at address 0x10
LDA $5
STA 10
HLT
```

Assemble it with:

```
w88-asm program.wa
```

The output file is named after the text before the first `.` in the given
path, followed by `.w88`, so `program.wa` becomes `program.w88`. Each
instruction is written as its opcode byte followed by its operand byte; an
operand of zero is left out.

Errors are printed as `ERROR <file>:<line>: <message>` and the command exits
with status 1.

Accepted mnemonics:

- `LDA`, `LDX`, `LDY`: an address, or a `$` immediate
- `STA`, `STX`, `STY`, `JMP`, `JSR`, `BEQ`, `BNE`, `BCC`, `BCS`: an address
- `MOV`: two registers, as in `MOV A, X`
- `NOP`, `HLT`, `RTS`, `WAIT`, `DRAW`, `INC`, `DEC`: no operand

`SHL`, `SHR`, `PUSH` and `POP` are recognised but always rejected with
"needs a register as an argument".

## Running a cartridge

```
w88 program.w88
```

The machine starts at `0x8000` and runs until it reaches `HLT`, then writes
the registers and the whole memory to `W88memdump.txt` in the current
directory. A cartridge longer than 32 KiB is refused.

## Using the library

```python
from willow88.assembler import assemble
from willow88.machine import Machine

code = assemble(["LDA $5", "STA 10", "HLT"], "example.wa")

machine = Machine()
machine.load_bytes(code)
machine.run()
print(machine.format_memdump())
```

- `willow88.isa` provides the `Opcode`, `Register`, `WordRegister` and
  `StatusFlag` enumerations, the memory map constants and
  `register_by_name`.
- `willow88.assembler` provides `assemble`, `assemble_line`, `assemble_file`,
  `encode`, `output_path`, `split_fields` and `AssemblyError`.
- `willow88.machine` provides `Machine` (with `load_bytes`, `load_rom`,
  `step`, `run`, `format_memdump` and `memdump`) and `CartridgeError`.

## What it does not do

- The machine executes only `NOP`, `HLT`, the `LD*` and `ST*` loads and
  stores, `JMP` and `MOV`. Every other opcode, including arithmetic,
  subroutines, branches, the stack and I/O, prints
  `WARNING: Bad opcode 0x..` and is skipped.
- Operands are a single byte, so loads, stores and jumps reach only
  addresses `0x00` to `0xFF`.
- There is no graphics, sound or input: the video, I/O and audio areas are
  plain memory that appears in the dump.

## Running the tests

```
pip install ".[test]"
pytest
```