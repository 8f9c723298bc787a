"""Calysto XY: assembler and simulator for the XY teaching machine."""

from ._version import __version__
from .assembler import (assemble, Assembler, AssemblyError, MalformedOperand,
                        UnknownMnemonic, DuplicateLabel, InvalidLabel)
from .memory import Memory, Tag, MachineError, AddressOutOfRange
from .machine import Machine, DivisionByZero, ModuloByZero
from .scanner import scan
from .stepper import Stepper
from .xy import XY
