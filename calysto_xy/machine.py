"""
The XY machine: 64K of memory, two 16-bit registers X and Y, a carry
flag, and a pointer to the next instruction.

`target_pointer` is where the machine is going; `pointer` is where a
display currently shows it. A step always starts from `target_pointer`,
and only a caller moves `pointer` (see arrive()).
"""

import sys

from . import opcodes
from .memory import (Memory, MachineError, AddressOutOfRange, MEMORY_SIZE,
                     check_address, parse_hex, xy_hex)


class DivisionByZero(MachineError):
    pass


class ModuloByZero(MachineError):
    pass


def register_name(selector):
    return "X" if selector == 0x00 else "Y"


class Machine(object):
    """
    Owns all machine state. step() is the one place an instruction
    changes it; the edit_* methods are the requests a front end may make
    between steps.
    """
    def __init__(self, kernel=None):
        self.kernel = kernel
        self.apply = {
            "NOP": self.NOP,
            "HLT": self.HLT,
            "MOV": self.MOV,
            "LOD": self.LOD,
            "STO": self.STO,
            "LDR": self.LDR,
            "STR": self.STR,
            "SWP": self.SWP,
            "LDI": self.LDI,
            "ADD": self.ADD,
            "SUB": self.SUB,
            "MUL": self.MUL,
            "DIV": self.DIV,
            "MOD": self.MOD,
            "JMP": self.JMP,
            "JZ": self.JZ,
            "JNZ": self.JNZ,
            "JC": self.JC,
            "JNC": self.JNC,
            "JGE": self.JGE,
            "JL": self.JL,
            "SCF": self.SCF,
            "CCF": self.CCF,
        }
        self.memory = Memory()
        self.initialize()

    def initialize(self):
        self.debug = False
        self.meta = False
        self.source = {}
        self.memory.reset()
        self.reset_registers()

    def reset_registers(self):
        debug = self.debug
        self.debug = self.meta
        self.x = 0
        self.y = 0
        self.carry = False
        self.pointer = 0
        self.target_pointer = 0
        self.halted = False
        self.fault = None
        self.instruction_count = 0
        self.debug = debug

    #### State access, traced when debug (writes) or meta (reads) is on

    def get_register(self, selector):
        name = register_name(selector)
        value = self.x if name == "X" else self.y
        if self.meta:
            self.Print("    %s => %s" % (name, xy_hex(value)))
        return value

    def set_register(self, selector, value):
        name = register_name(selector)
        value &= 0xFFFF
        if name == "X":
            self.x = value
        else:
            self.y = value
        if self.debug:
            self.Print("    %s <= %s" % (name, xy_hex(value)))

    def get_memory(self, location):
        value = self.memory.get(location)
        if self.meta:
            self.Print("    memory[%s] => %s" % (xy_hex(location), xy_hex(value, 2)))
        return value

    def get_word(self, location):
        value = self.memory.get_word(location)
        if self.meta:
            self.Print("    memory[%s] => %s" % (xy_hex(location), xy_hex(value)))
        return value

    def set_word(self, location, value):
        self.memory.set_word(location, value)
        if self.debug:
            self.Print("    memory[%s] <= %s" % (xy_hex(location), xy_hex(value)))

    def set_carry(self, value):
        self.carry = bool(value)
        if self.debug:
            self.Print("    C <= %d" % self.carry)

    def set_target_pointer(self, value):
        self.target_pointer = value
        if self.debug:
            self.Print("    PC <= %s" % xy_hex(value))

    def arrive(self):
        """ The display has caught up: pointer becomes target_pointer """
        self.pointer = self.target_pointer

    def at_rest(self):
        return self.pointer == self.target_pointer

    #### Requests from a front end

    def edit_memory(self, location, text):
        if not self.memory.edit(location, text):
            return False
        self.resume()
        return True

    def edit_register(self, name, text):
        value = parse_hex(text, 4)
        if value is None or name.upper() not in ("X", "Y"):
            return False
        self.set_register(0x00 if name.upper() == "X" else 0x01, value)
        self.resume()
        return True

    def resume(self):
        """
        A halt from HLT or an unknown opcode only means nothing advances;
        after an edit the next step decodes the pointer again. A fault
        stays halted until jump().
        """
        if self.fault is None:
            self.halted = False

    def edit_target_pointer(self, text):
        value = parse_hex(text, 4)
        if value is None:
            return False
        self.jump(value)
        return True

    def jump(self, location):
        self.set_target_pointer(max(0, min(location, MEMORY_SIZE - 1)))
        self.halted = False
        self.fault = None

    def toggle_carry(self):
        self.set_carry(not self.carry)

    def snapshot(self):
        return {
            "cells": self.memory.cells(),
            "x": self.x,
            "y": self.y,
            "carry": self.carry,
            "pointer": self.pointer,
            "target_pointer": self.target_pointer,
            "halted": self.halted,
        }

    def describe(self):
        inst = opcodes.lookup(self.memory.get(self.pointer))
        if inst is None:
            return None
        return (inst.mnemonic, inst.description)

    #### Decoding

    def decode(self, location):
        """
        Returns (instruction, operands) for the bytes at location, or
        (None, []) if the opcode is unknown. Raises AddressOutOfRange if
        the operands run past the end of memory.
        """
        inst = opcodes.lookup(self.get_memory(location))
        if inst is None:
            return None, []
        check_address(location + inst.length - 1)
        operands = []
        position = location + 1
        for kind in inst.operands:
            if kind == opcodes.REGISTER:
                operands.append(self.memory.get(position))
            else:
                operands.append(self.memory.get_word(position))
            position += opcodes.width[kind]
        return inst, operands

    def format_instruction(self, location):
        try:
            inst, operands = self.decode(location)
        except AddressOutOfRange:
            inst, operands = None, []
        if inst is None:
            return ";; %s" % xy_hex(self.memory.get(location), 2)
        words = [inst.mnemonic]
        for kind, value in zip(inst.operands, operands):
            if kind == opcodes.REGISTER:
                words.append(register_name(value).lower())
            else:
                words.append(xy_hex(value))
        return " ".join(words)

    #### Execution

    def step(self):
        """
        Execute the instruction at target_pointer. An unknown opcode
        leaves everything as it is and halts in place.
        """
        location = self.target_pointer
        try:
            inst, operands = self.decode(location)
            if inst is None:
                self.halted = True
                if self.debug:
                    self.Print("(%s) unknown opcode %s at %s" % (
                        self.instruction_count,
                        xy_hex(self.memory.get(location), 2),
                        xy_hex(location)))
                return
            following = location + inst.length
            if (following >= MEMORY_SIZE and inst.mnemonic != "HLT" and
                    not opcodes.is_jump(inst)):
                raise AddressOutOfRange(following)
            self.instruction_count += 1
            if self.debug:
                line = self.source.get(location, -1)
                line_str = (" [%s]" % line) if (line != -1) else ""
                self.Print("(%s) %s%s (PC: %s)" % (
                    self.instruction_count,
                    self.format_instruction(location),
                    line_str,
                    xy_hex(location)))
            target = self.apply[inst.mnemonic](location, following, *operands)
            check_address(target)
            self.set_target_pointer(target)
        except MachineError as exc:
            self.halted = True
            self.fault = exc
            raise

    def NOP(self, location, following):
        return following

    def HLT(self, location, following):
        self.halted = True
        return location

    def MOV(self, location, following, reg):
        if reg == 0x00:
            self.set_register(0x00, self.get_register(0x01))
        else:
            self.set_register(0x01, self.get_register(0x00))
        return following

    def LOD(self, location, following, reg, address):
        self.set_register(reg, self.get_word(address))
        return following

    def STO(self, location, following, reg, address):
        self.set_word(address, self.get_register(reg))
        return following

    def LDR(self, location, following, reg):
        self.set_register(reg, self.get_word(self.x))
        return following

    def STR(self, location, following, reg):
        self.set_word(self.x, self.get_register(reg))
        return following

    def SWP(self, location, following):
        x, y = self.x, self.y
        self.set_register(0x00, y)
        self.set_register(0x01, x)
        return following

    def LDI(self, location, following, reg, value):
        self.set_register(reg, value)
        return following

    def ADD(self, location, following):
        total = self.x + self.y
        self.set_carry(total > 0xFFFF)
        self.set_register(0x00, total)
        return following

    def SUB(self, location, following):
        # carry is the borrow out of X - Y
        borrow = self.x < self.y
        self.set_register(0x00, self.x - self.y)
        self.set_carry(borrow)
        return following

    def MUL(self, location, following):
        self.set_register(0x00, self.x * self.y)
        return following

    def DIV(self, location, following):
        if self.y == 0:
            raise DivisionByZero("division by zero at %s" % xy_hex(location),
                                 location)
        self.set_register(0x00, self.x // self.y)
        return following

    def MOD(self, location, following):
        if self.y == 0:
            raise ModuloByZero("modulo by zero at %s" % xy_hex(location),
                               location)
        self.set_register(0x00, self.x % self.y)
        return following

    def branch(self, condition, following, address):
        if self.debug:
            if condition:
                self.Print("    True - branching to", xy_hex(address))
            else:
                self.Print("    False - continuing...")
        if condition:
            return address
        if following >= MEMORY_SIZE:
            raise AddressOutOfRange(following)
        return following

    def JMP(self, location, following, address):
        return address

    def JZ(self, location, following, address):
        return self.branch(self.x == 0, following, address)

    def JNZ(self, location, following, address):
        return self.branch(self.x != 0, following, address)

    def JC(self, location, following, address):
        return self.branch(self.carry, following, address)

    def JNC(self, location, following, address):
        return self.branch(not self.carry, following, address)

    def JGE(self, location, following, address):
        return self.branch(self.x >= self.y, following, address)

    def JL(self, location, following, address):
        return self.branch(self.x < self.y, following, address)

    def SCF(self, location, following):
        self.set_carry(True)
        return following

    def CCF(self, location, following):
        self.set_carry(False)
        return following

    #### Output

    def Print(self, *args, **kwargs):
        print(*args, **kwargs)

    def Error(self, string):
        if self.kernel:
            self.kernel.Error(string)
        else:
            sys.stderr.write(string)
