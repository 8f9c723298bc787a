"""
Tagging scanner: looks ahead of the machine and tags each byte as an
instruction, register selector, value or pointer so a display can show
operand roles before execution reaches them.

Branches are followed down both sides, fall through and taken, so the
tags are the same on every scan of the same memory image. Only tags are
written; values, registers and pointers are never touched.
"""

from collections import deque

from . import opcodes
from .memory import MEMORY_SIZE, Tag

SCAN_LIMIT = 100

operand_tag = {
    opcodes.REGISTER: Tag.REGISTER,
    opcodes.VALUE: Tag.VALUE,
    opcodes.POINTER: Tag.POINTER,
}


def tag_instruction(memory, ip, inst):
    """ Tag one decoded instruction; return (fall through, branch target) """
    memory.tags[ip] = Tag.INSTRUCTION
    position = ip + 1
    target = None
    for kind in inst.operands:
        for i in range(opcodes.width[kind]):
            memory.tags[position + i] = operand_tag[kind]
        if kind == opcodes.POINTER:
            target = (memory.values[position] << 8) | memory.values[position + 1]
        position += opcodes.width[kind]
    return position, target


def scan(memory, pointer, target_pointer, limit=SCAN_LIMIT):
    """
    Tag up to `limit` instructions reachable from target_pointer.
    Returns the addresses decoded, in the order they were visited.
    """
    memory.set_tag(pointer, Tag.INSTRUCTION)
    visited = []
    seen = set()
    pending = deque([target_pointer])
    while pending and len(visited) < limit:
        ip = pending.popleft()
        if ip in seen or not 0 <= ip < MEMORY_SIZE:
            continue
        seen.add(ip)
        memory.tags[ip] = Tag.INSTRUCTION
        inst = opcodes.lookup(memory.values[ip])
        if inst is None or inst.mnemonic == "HLT":
            visited.append(ip)
            continue
        if ip + inst.length > MEMORY_SIZE:
            # operands would run off the end of memory
            visited.append(ip)
            continue
        following, target = tag_instruction(memory, ip, inst)
        visited.append(ip)
        pending.append(following)
        if opcodes.is_jump(inst):
            pending.append(target)
    return visited
