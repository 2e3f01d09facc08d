import pytest

from willow88.assembler import assemble
from willow88.isa import MEMORY_SIZE, PROGRAM_START, Opcode, Register
from willow88.machine import CartridgeError, Machine, main


def test_fresh_machine_starts_at_program_area():
    machine = Machine()
    assert machine.pc == PROGRAM_START
    assert not machine.halted
    assert len(machine.memory) == MEMORY_SIZE


def test_load_bytes_places_image():
    machine = Machine()
    image = bytes([Opcode.LDAI, 9, Opcode.HLT])
    machine.load_bytes(image)
    assert bytes(machine.memory[PROGRAM_START:PROGRAM_START + len(image)]) == image


def test_load_bytes_rejects_oversize():
    with pytest.raises(CartridgeError):
        Machine().load_bytes(bytes(MEMORY_SIZE - PROGRAM_START + 1))


def test_load_bytes_accepts_full_program_area():
    machine = Machine()
    machine.load_bytes(b"\x01" * (MEMORY_SIZE - PROGRAM_START))
    assert machine.memory[MEMORY_SIZE - 1] == 1


def test_load_rom_missing_file(tmp_path):
    with pytest.raises(CartridgeError, match="Failed to open cartridge"):
        Machine().load_rom(tmp_path / "absent.w88")


def test_load_rom_too_long(tmp_path):
    path = tmp_path / "big.w88"
    path.write_bytes(bytes(MEMORY_SIZE - PROGRAM_START + 1))
    with pytest.raises(CartridgeError, match="is too long"):
        Machine().load_rom(path)


def test_load_store_round_trip():
    machine = Machine()
    machine.load_bytes(assemble(["LDA $7", "STA 10", "LDX 10", "HLT"]))
    machine.run()
    assert machine.halted
    assert machine.memory[0x10] == 7
    assert machine.registers[Register.X] == 7


def test_mov_copies_register():
    machine = Machine()
    machine.load_bytes(assemble(["LDA $5", "MOV Y, A", "HLT"]))
    machine.run()
    assert machine.registers[Register.Y] == 5
    assert machine.registers[Register.A] == 5


def test_mov_outside_register_file():
    machine = Machine()
    machine.load_bytes(bytes([Opcode.MOV, 0x70]))
    with pytest.raises(ValueError):
        machine.step()


def test_step_returns_opcode_and_advances():
    machine = Machine()
    machine.load_bytes(bytes([Opcode.HLT]))
    assert machine.step() == Opcode.HLT
    assert machine.halted
    assert machine.pc == PROGRAM_START + 1


def test_jump_lands_after_target_byte():
    machine = Machine()
    target = 0x20
    machine.load_bytes(bytes([Opcode.JMP, target]))
    machine.step()
    assert machine.pc == target + 1


def test_bad_opcode_warns(capsys):
    machine = Machine()
    machine.load_bytes(bytes([Opcode.INC, Opcode.HLT]))
    machine.run()
    assert "WARNING: Bad opcode 0x17" in capsys.readouterr().out
    assert machine.halted


def test_memdump_writes_file(tmp_path):
    machine = Machine()
    machine.load_bytes(bytes([Opcode.LDAI, 3, Opcode.HLT]))
    machine.run()
    path = tmp_path / "dump.txt"
    machine.memdump(path)
    assert path.read_text() == machine.format_memdump()


def test_main_without_arguments(capsys):
    assert main([]) == 1
    assert "ERROR: Invalid usage" in capsys.readouterr().out


def test_main_missing_cartridge(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["nothing.w88"]) == 1
    assert "Failed to open cartridge nothing.w88" in capsys.readouterr().out


def test_main_runs_and_dumps(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "game.w88").write_bytes(bytes([Opcode.HLT]))
    assert main(["game.w88"]) == 0
    assert "w88_cartridge:" in (tmp_path / "W88memdump.txt").read_text()
    assert "INFO: Loaded cartridge game.w88" in capsys.readouterr().out