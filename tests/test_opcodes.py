import unittest

from calysto_xy import opcodes


class TestOpcodeTable(unittest.TestCase):
    def test_lookup(self):
        inst = opcodes.lookup(0x16)
        self.assertEqual(inst.mnemonic, "LDI")
        self.assertEqual(inst.operands, (opcodes.REGISTER, opcodes.VALUE))
        self.assertEqual(inst.length, 4)

    def test_unknown_opcode_is_none(self):
        for value in (0x02, 0x17, 0x25, 0x37, 0x38, 0x42, 0xFF):
            self.assertIsNone(opcodes.lookup(value))

    def test_by_mnemonic_ignores_case(self):
        self.assertIs(opcodes.by_mnemonic("jnz"), opcodes.lookup(0x32))
        self.assertIsNone(opcodes.by_mnemonic("FOO"))

    def test_lengths(self):
        lengths = dict((inst.mnemonic, inst.length)
                       for inst in opcodes.instruction_info)
        self.assertEqual(lengths, {
            "NOP": 1, "HLT": 1,
            "MOV": 2, "LOD": 4, "STO": 4, "LDR": 2, "STR": 2, "SWP": 1,
            "LDI": 4,
            "ADD": 1, "SUB": 1, "MUL": 1, "DIV": 1, "MOD": 1,
            "JMP": 3, "JZ": 3, "JNZ": 3, "JC": 3, "JNC": 3, "JGE": 3,
            "JL": 3,
            "SCF": 1, "CCF": 1,
        })

    def test_carry_opcodes(self):
        self.assertEqual(opcodes.by_mnemonic("SCF").opcode, 0x40)
        self.assertEqual(opcodes.by_mnemonic("CCF").opcode, 0x41)

    def test_every_entry_has_a_description(self):
        for inst in opcodes.instruction_info:
            self.assertTrue(inst.description.endswith("."))

    def test_jumps(self):
        jumps = [inst.mnemonic for inst in opcodes.instruction_info
                 if opcodes.is_jump(inst)]
        self.assertEqual(jumps, ["JMP", "JZ", "JNZ", "JC", "JNC", "JGE", "JL"])
        self.assertFalse(opcodes.is_jump(None))
