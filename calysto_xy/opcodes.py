"""
The XY instruction set.

Each instruction is one opcode byte followed by a fixed operand layout.
Operand kinds:

    REGISTER - one selector byte, 00 is X, anything else is Y
    VALUE    - two bytes, big-endian 16-bit immediate
    POINTER  - two bytes, big-endian 16-bit address

The assembler, the tagging scanner and the machine all read this table.
"""

from collections import namedtuple

REGISTER = "register"
VALUE = "value"
POINTER = "pointer"

width = {
    REGISTER: 1,
    VALUE: 2,
    POINTER: 2,
}


class Instruction(namedtuple("Instruction",
                             "opcode mnemonic operands description")):
    __slots__ = ()

    @property
    def length(self):
        return 1 + sum(width[kind] for kind in self.operands)

    def __repr__(self):
        return "<%s %02X>" % (self.mnemonic, self.opcode)


instruction_info = [
    Instruction(0x00, "NOP", (),
                "No operation, just increments the program counter, usually used for padding."),
    Instruction(0x01, "HLT", (),
                "Halt, halts the program."),

    Instruction(0x10, "MOV", (REGISTER,),
                "Move, copies value from one register to another register."),
    Instruction(0x11, "LOD", (REGISTER, POINTER),
                "Load, loads value from memory to a register."),
    Instruction(0x12, "STO", (REGISTER, POINTER),
                "Store, stores value from a register to memory."),
    Instruction(0x13, "LDR", (REGISTER,),
                "Load by register, loads value from memory to a register using X as an address."),
    Instruction(0x14, "STR", (REGISTER,),
                "Store by register, stores value from a register to memory using X as an address."),
    Instruction(0x15, "SWP", (),
                "Swap, swaps X and Y."),
    Instruction(0x16, "LDI", (REGISTER, VALUE),
                "Load immediate, loads value into a register."),

    Instruction(0x20, "ADD", (),
                "Add, adds the Y value to X."),
    Instruction(0x21, "SUB", (),
                "Subtract, subtracts the Y value from X."),
    Instruction(0x22, "MUL", (),
                "Multiply, multiplies X by Y."),
    Instruction(0x23, "DIV", (),
                "Divide, divides X by Y."),
    Instruction(0x24, "MOD", (),
                "Modulo, divides X by Y and returns the remainder."),

    Instruction(0x30, "JMP", (POINTER,),
                "Jump, jumps to a memory address."),
    Instruction(0x31, "JZ", (POINTER,),
                "Jump if zero, jumps to a memory address if X is zero."),
    Instruction(0x32, "JNZ", (POINTER,),
                "Jump if not zero, jumps to a memory address if X is not zero."),
    Instruction(0x33, "JC", (POINTER,),
                "Jump if carry, jumps to a memory address if carry flag is set."),
    Instruction(0x34, "JNC", (POINTER,),
                "Jump if not carry, jumps to a memory address if carry flag is not set."),
    Instruction(0x35, "JGE", (POINTER,),
                "Jump if greater or equal, jumps to a memory address if X is greater or equal to Y."),
    Instruction(0x36, "JL", (POINTER,),
                "Jump if less, jumps to a memory address if X is less than Y."),

    Instruction(0x40, "SCF", (),
                "Set carry flag, sets the carry flag."),
    Instruction(0x41, "CCF", (),
                "Clear carry flag, clears the carry flag."),
]

opcode = dict((inst.opcode, inst) for inst in instruction_info)
mnemonic = dict((inst.mnemonic, inst) for inst in instruction_info)

JUMPS = frozenset(["JMP", "JZ", "JNZ", "JC", "JNC", "JGE", "JL"])


def lookup(value):
    """ Descriptor for an opcode byte, or None if it is not decodable """
    return opcode.get(value)


def by_mnemonic(name):
    return mnemonic.get(name.upper())


def is_jump(inst):
    return inst is not None and inst.mnemonic in JUMPS
