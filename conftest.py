"""
Pytest configuration for the Calysto XY test suite.

    pip install -e .[test]
    pytest
"""

import pytest

from calysto_xy import Machine, assemble


def load_machine(source, start=0):
    """ A fresh machine with the assembled source loaded at start """
    machine = Machine()
    machine.memory.load(assemble(source), start)
    machine.jump(start)
    machine.arrive()
    return machine


def run_machine(machine, max_steps=10000):
    """ Step until halted; returns the (target_pointer, x, y, carry) trace """
    trace = []
    for _ in range(max_steps):
        if machine.halted:
            break
        machine.step()
        machine.arrive()
        trace.append((machine.target_pointer, machine.x, machine.y,
                      machine.carry))
    return trace


@pytest.fixture
def load():
    return load_machine


@pytest.fixture
def run():
    return run_machine
