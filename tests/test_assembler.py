# =============================================================================
# test_assembler.py - Full Assembler Integration Tests
# =============================================================================
# End-to-end integration tests for the complete Hack assembler.
# These tests verify the full pipeline from source code to .hack output.
#
# Test coverage includes:
#   - Complete program assembly (Add, Max)
#   - Labels, variables and predefined symbols
#   - Error reporting with line numbers, all-or-nothing failure
#   - Output files (.hack, symbol file, listing)
# =============================================================================

import logging

import pytest

from hack_asm import Assembler, AssemblerConfig, assemble, assemble_file
from hack_asm.errors import (
    AssemblerError,
    AssemblyFailed,
    HackError,
    MalformedValueError,
    UnrecognizedInstructionError,
    UnrecognizedMnemonicError,
)


MAX_ASM = """
// Computes R2 = max(R0, R1)  (R0,R1,R2 refer to RAM[0],RAM[1],RAM[2])

   @R0
   D=M              // D = first number
   @R1
   D=D-M            // D = first number - second number
   @OUTPUT_FIRST
   D;JGT            // if D>0 (first is greater) goto output_first
   @R1
   D=M              // D = second number
   @OUTPUT_D
   0;JMP            // goto output_d
(OUTPUT_FIRST)
   @R0
   D=M              // D = first number
(OUTPUT_D)
   @R2
   M=D              // M[2] = D (greatest number)
(INFINITE_LOOP)
   @INFINITE_LOOP
   0;JMP            // infinite loop
"""

MAX_HACK = [
    "0000000000000000",
    "1111110000010000",
    "0000000000000001",
    "1111010011010000",
    "0000000000001010",
    "1110001100000001",
    "0000000000000001",
    "1111110000010000",
    "0000000000001100",
    "1110101010000111",
    "0000000000000000",
    "1111110000010000",
    "0000000000000010",
    "1110001100001000",
    "0000000000001110",
    "1110101010000111",
]


# =============================================================================
# Full Assembly Pipeline Tests
# =============================================================================

class TestFullPipeline:
    """Test the complete assembly pipeline."""

    def test_empty_program(self):
        assert assemble("") == []
        assert assemble("// nothing here\n\n") == []

    def test_add(self):
        source = """
// Computes R0 = 2 + 3
@2
D=A
@3
D=D+A
@0
M=D
"""
        assert assemble(source) == [
            "0000000000000010",
            "1110110000010000",
            "0000000000000011",
            "1110000010010000",
            "0000000000000000",
            "1110001100001000",
        ]

    def test_max(self):
        assert assemble(MAX_ASM) == MAX_HACK

    def test_one_line_per_instruction(self):
        """Labels produce no output."""
        source = """
(LOOP)
@10
M=1
@LOOP
0;JMP
(END)
@END
0;JMP
"""
        asm = Assembler()
        code = asm.assemble_string(source)
        assert len(code) == 6
        assert all(len(word) == 16 and set(word) <= {"0", "1"} for word in code)
        assert asm.get_symbols()["LOOP"] == 0
        assert asm.get_symbols()["END"] == 4
        assert code[2] == "0000000000000000"
        assert code[4] == "0000000000000100"

    def test_predefined_register(self):
        assert assemble("@R3\n") == ["0000000000000011"]

    @pytest.mark.parametrize("name,value", [
        ("SP", 0), ("LCL", 1), ("ARG", 2), ("THIS", 3), ("THAT", 4),
        ("R15", 15), ("SCREEN", 16384), ("KBD", 24576),
    ])
    def test_predefined_symbols(self, name, value):
        assert assemble(f"@{name}") == [format(value, "016b")]

    def test_variables(self):
        asm = Assembler()
        code = asm.assemble_string("@i\nD=A\n")
        assert code == ["0000000000010000", "1110110000010000"]
        assert asm.get_user_symbols() == {"i": 16}

    def test_variable_bound_once(self):
        asm = Assembler()
        code = asm.assemble_string("@i\nM=0\n@i\nM=M+1\n@j\n")
        assert code[0] == code[2] == "0000000000010000"
        assert code[4] == "0000000000010001"
        assert asm.get_user_symbols() == {"i": 16, "j": 17}

    def test_custom_variable_base(self):
        config = AssemblerConfig(variable_base=100)
        assert assemble("@x\n", config=config) == [format(100, "016b")]

    def test_repeatable(self):
        """Re-running the same input gives identical output."""
        asm = Assembler()
        first = asm.assemble_string(MAX_ASM + "@tmp\nM=0\n")
        second = asm.assemble_string(MAX_ASM + "@tmp\nM=0\n")
        assert first == second
        assert asm.get_user_symbols()["tmp"] == 16

    def test_fresh_symbols_each_run(self):
        asm = Assembler()
        asm.assemble_string("@a\n@b\n")
        asm.assemble_string("@b\n")
        assert asm.get_user_symbols() == {"b": 16}

    def test_get_code_is_copy(self):
        asm = Assembler()
        asm.assemble_string("@1\n")
        asm.get_code().append("junk")
        assert asm.get_code() == ["0000000000000001"]


# =============================================================================
# Error Handling Tests
# =============================================================================

class TestErrorHandling:
    """Test error handling and reporting."""

    def test_unknown_computation(self):
        with pytest.raises(UnrecognizedMnemonicError) as exc_info:
            assemble("@1\nD=D^A\n")
        assert exc_info.value.token == "D^A"

    def test_error_line_number(self):
        source = """
@1
D=A
D=M;JMP;JEQ
"""
        with pytest.raises(UnrecognizedInstructionError) as exc_info:
            assemble(source, "Prog.asm")
        assert exc_info.value.location.line == 4
        assert "Prog.asm:4" in str(exc_info.value)

    @pytest.mark.parametrize("source", ["@1\n@\n", "@1\n()\n"])
    def test_bare_at_and_empty_label(self, source):
        with pytest.raises(UnrecognizedInstructionError) as exc_info:
            assemble(source)
        assert exc_info.value.location.line == 2

    def test_empty_compute_fields(self):
        assert assemble("D;\nD=M;\n=D\n") == [
            "1110001100000000",
            "1111110000010000",
            "1110001100000000",
        ]

    def test_value_too_large(self):
        with pytest.raises(MalformedValueError):
            assemble("@70000\n")

    def test_strict_addresses(self):
        config = AssemblerConfig(address_bits=15)
        assert assemble("@32767", config=config) == ["0111111111111111"]
        with pytest.raises(MalformedValueError):
            assemble("@40000", config=config)

    def test_errors_are_hack_errors(self):
        with pytest.raises(HackError):
            assemble("foo\n")

    def test_failed_run_keeps_nothing(self):
        """A failing run discards everything, including earlier results."""
        asm = Assembler()
        asm.assemble_string("@i\nD=A\n")
        with pytest.raises(AssemblerError):
            asm.assemble_string("@j\nD=A\nD^A\n")
        assert asm.get_code() == []
        assert asm.get_user_symbols() == {}
        assert asm.get_listing() == ""

    def test_collect_all_errors(self):
        config = AssemblerConfig(collect_errors=True)
        with pytest.raises(AssemblyFailed) as exc_info:
            assemble("D^A\n@1\nX=D\nD;JXX\n", config=config)
        assert [e.group for e in exc_info.value.errors] == [
            "computation", "destination", "jump",
        ]


# =============================================================================
# Output File Tests
# =============================================================================

class TestOutputFiles:
    """Test .hack, symbol and listing output."""

    def test_assemble_file(self, tmp_path):
        src = tmp_path / "Max.asm"
        src.write_text(MAX_ASM)
        assert assemble_file(src) == MAX_HACK

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Assembler().assemble_file(tmp_path / "Nope.asm")

    def test_error_names_file(self, tmp_path):
        src = tmp_path / "Bad.asm"
        src.write_text("@1\nD^A\n")
        with pytest.raises(UnrecognizedMnemonicError) as exc_info:
            assemble_file(src)
        assert f"{src}:2" in str(exc_info.value)

    def test_write_hack(self, tmp_path):
        asm = Assembler()
        asm.assemble_string(MAX_ASM)
        out = tmp_path / "Max.hack"
        asm.write_hack(out)
        assert out.read_text() == "".join(word + "\n" for word in MAX_HACK)

    def test_write_symbols(self, tmp_path):
        asm = Assembler()
        asm.assemble_string("@i\n(LOOP)\n@LOOP\n0;JMP\n@sum\n")
        out = tmp_path / "Prog.sym"
        asm.write_symbols(out)
        assert out.read_text().splitlines() == [
            "# Symbol table",
            "# Generated by hackasm",
            "LOOP 1 label",
            "i 16 variable",
            "sum 17 variable",
        ]

    def test_listing(self, tmp_path):
        asm = Assembler()
        asm.assemble_string("(START)\n  @2\n  D=A   // load\n")
        assert asm.get_listing() == (
            "00000  0000000000000010  @2\n"
            "00001  1110110000010000  D=A   // load\n"
        )
        out = tmp_path / "Prog.lst"
        asm.write_listing(out)
        assert out.read_text() == asm.get_listing()


# =============================================================================
# Logging Tests
# =============================================================================

class TestLogging:
    """Test progress logging."""

    def test_debug_messages(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="hack_asm"):
            assemble("(L)\n@i\n@L\n")
        assert "Pass 1: 1 labels, 2 instructions" in caplog.text
        assert "Pass 2: 1 variables from RAM[16]" in caplog.text

    def test_verbose_logs_at_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="hack_asm"):
            Assembler(verbose=True).assemble_string("@1\n")
        assert "Generated 1 instructions" in caplog.text
