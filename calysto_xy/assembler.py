"""
Two-pass assembler for the XY machine.

    loop:               ; a label binds to the next instruction
        LDI x 0001      ; registers are x or y
        JNZ loop        ; addresses are 4 hex digits or a label
        HLT

Pass 1 sizes each line and records label addresses. Labels and register
names are then substituted token by token, and pass 2 encodes each line.
"""

from . import opcodes
from .memory import MEMORY_SIZE, xy_hex

registers = {"X": "00", "Y": "01"}


class AssemblyError(ValueError):
    def __init__(self, line, message):
        self.line = line
        super(AssemblyError, self).__init__("Line %s: %s" % (line, message))


class MalformedOperand(AssemblyError):
    pass


class UnknownMnemonic(AssemblyError):
    pass


class DuplicateLabel(AssemblyError):
    pass


class InvalidLabel(AssemblyError):
    pass


def is_hex(word):
    return len(word) > 0 and all(c in "0123456789abcdefABCDEF" for c in word)


def split_line(line):
    """ Drop the comment; return (label or None, words) """
    line = line.split(';')[0].strip()
    label = None
    if ':' in line:
        label, line = line.split(':', 1)
        label = label.strip()
    return label, line.split()


class Assembler(object):
    """
    Keeps the label table and a map of address -> source line number
    from the last program assembled.
    """
    def __init__(self):
        self.labels = {}
        self.source = {}

    def first_pass(self, lines):
        addr = 0
        for line_count, line in lines:
            label, words = split_line(line)
            if label is not None:
                if not label or len(label.split()) != 1:
                    raise InvalidLabel(line_count, 'Invalid label "%s"' % label)
                if label.upper() in registers:
                    raise InvalidLabel(line_count, 'Register name used as label "%s"' % label)
                if label in self.labels:
                    raise DuplicateLabel(line_count, 'Duplicate label "%s"' % label)
                self.labels[label] = addr
            if not words:
                continue
            inst = opcodes.by_mnemonic(words[0])
            if inst is None:
                raise UnknownMnemonic(line_count, 'Unknown instruction "%s"' % words[0])
            addr += inst.length

    def substitute(self, word):
        if word in self.labels:
            return xy_hex(self.labels[word])
        return registers.get(word.upper(), word)

    def encode(self, inst, words, line_count):
        if len(words) != len(inst.operands):
            raise MalformedOperand(line_count,
                "%s takes %d operand(s), got %d" % (inst.mnemonic,
                                                   len(inst.operands),
                                                   len(words)))
        data = [inst.opcode]
        for kind, word in zip(inst.operands, words):
            if not is_hex(word):
                raise MalformedOperand(line_count, 'Not a hex number or label: "%s"' % word)
            value = int(word, 16)
            if kind == opcodes.REGISTER:
                if value > 0xFF:
                    raise MalformedOperand(line_count, 'Register selector out of range: "%s"' % word)
                data.append(value)
            else:
                if value > 0xFFFF:
                    raise MalformedOperand(line_count, 'Value out of range: "%s"' % word)
                data.append(value >> 8)
                data.append(value & 0xFF)
        return data

    def assemble(self, code):
        self.labels = {}
        self.source = {}
        lines = [(line_count, line)
                 for line_count, line in enumerate(code.splitlines(), 1)
                 if line.strip()]
        # first pass:
        self.first_pass(lines)
        # second pass:
        program = bytearray()
        for line_count, line in lines:
            label, words = split_line(line)
            if not words:
                continue
            inst = opcodes.by_mnemonic(words[0])
            operands = [self.substitute(word) for word in words[1:]]
            self.source[len(program)] = line_count
            program.extend(self.encode(inst, operands, line_count))
            if len(program) > MEMORY_SIZE:
                raise AssemblyError(line_count, "Program does not fit in memory")
        return program


def assemble(code):
    return Assembler().assemble(code)
