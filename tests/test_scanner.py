import random
import unittest

from calysto_xy import Machine, assemble
from calysto_xy.memory import Memory, Tag
from calysto_xy.scanner import scan

I, R, V, P, U = (Tag.INSTRUCTION, Tag.REGISTER, Tag.VALUE, Tag.POINTER,
                 Tag.UNKNOWN)


def tags(memory, start, stop):
    return [memory.get_tag(a) for a in range(start, stop)]


class TestScanner(unittest.TestCase):
    def setUp(self):
        self.memory = Memory()

    def test_operand_roles(self):
        self.memory.load(assemble("LDI x 0012\nLOD y 0100\nMOV x\nHLT"))
        visited = scan(self.memory, 0, 0)
        self.assertEqual(visited, [0, 4, 8, 10])
        self.assertEqual(tags(self.memory, 0, 12),
                         [I, R, V, V, I, R, P, P, I, R, I, U])

    def test_both_sides_of_a_branch(self):
        self.memory.load(assemble("JZ 0010\nNOP\nHLT"))
        self.memory.load(assemble("LDI y 0001\nHLT"), 0x10)
        scan(self.memory, 0, 0)
        self.assertEqual(tags(self.memory, 0, 6), [I, P, P, I, I, U])
        self.assertEqual(tags(self.memory, 0x10, 0x16), [I, R, V, V, I, U])

    def test_unconditional_jump_previews_fall_through(self):
        self.memory.load(assemble("JMP 0008\nSWP\nHLT"))
        self.memory.set(8, 0x01)
        visited = scan(self.memory, 0, 0)
        self.assertEqual(sorted(visited), [0, 3, 4, 8])

    def test_same_tags_every_time(self):
        self.memory.load(assemble("start:\nJC start\nJNC done\nADD\ndone:\nHLT"))
        first = scan(self.memory, 0, 0)
        first_tags = list(self.memory.tags)
        for i in range(5):
            self.assertEqual(scan(self.memory, 0, 0), first)
            self.assertEqual(self.memory.tags, first_tags)

    def test_limit(self):
        # zeroed memory is all NOPs
        visited = scan(self.memory, 0, 0, limit=100)
        self.assertEqual(len(visited), 100)
        self.assertEqual(self.memory.get_tag(99), I)
        self.assertEqual(self.memory.get_tag(100), U)

    def test_pointer_is_always_an_instruction(self):
        self.memory.set(0, 0xFF)
        scan(self.memory, 0x0500, 0)
        self.assertEqual(self.memory.get_tag(0x0500), I)

    def test_stops_on_unknown_opcode(self):
        self.memory.set(0, 0xFF)
        self.assertEqual(scan(self.memory, 0, 0), [0])
        self.assertEqual(self.memory.get_tag(1), U)

    def test_stops_at_end_of_memory(self):
        self.memory.set(0xFFFE, 0x16)
        self.assertEqual(scan(self.memory, 0xFFFE, 0xFFFE), [0xFFFE])
        self.assertEqual(self.memory.get_tag(0xFFFF), U)

    def test_nop_at_end_of_memory(self):
        self.assertEqual(scan(self.memory, 0xFFFF, 0xFFFF), [0xFFFF])

    def test_values_never_change(self):
        rng = random.Random(1234)
        image = bytes(rng.randrange(256) for i in range(0x10000))
        self.memory.load(image)
        for start in (0, 0x1234, 0x8000, 0xFFF0, 0xFFFF):
            scan(self.memory, start, start)
            self.assertEqual(self.memory.values.tobytes(), image)

    def test_machine_state_untouched(self):
        machine = Machine()
        machine.memory.load(assemble("LDI x 0001\nJNZ 0000"))
        machine.x, machine.y, machine.carry = 0x1111, 0x2222, True
        machine.target_pointer = 4
        scan(machine.memory, machine.pointer, machine.target_pointer)
        self.assertEqual((machine.x, machine.y, machine.carry),
                         (0x1111, 0x2222, True))
        self.assertEqual((machine.pointer, machine.target_pointer), (0, 4))
