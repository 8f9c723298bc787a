"""
The XY computer as a notebook sees it: assemble source, edit memory and
registers, step or run, and look at the results.
"""

import sys

from .assembler import Assembler, AssemblyError
from .machine import Machine
from .memory import MachineError, MEMORY_SIZE, xy_hex
from .scanner import scan
from .stepper import Stepper
from . import opcodes

magics = ["%auto", "%carry", "%cont", "%d", "%dis", "%dump", "%exe",
          "%labels", "%mem", "%pc", "%reg", "%regs", "%reset", "%screen",
          "%step", "%tick", "%turbo"]


class XY(Machine):
    """
    The XY Computer. This object can assemble, disassemble, step and
    run XY programs.
    """
    def __init__(self, kernel=None, filename=None):
        self.assembler = Assembler()
        super(XY, self).__init__(kernel)
        self.stepper = Stepper(self)
        if filename:
            self.load_file(filename)

    def initialize(self):
        Machine.initialize(self)
        self.filename = ""
        self.max_steps = 100000
        self.suspended = False

    @property
    def labels(self):
        return self.assembler.labels

    def lookup(self, location, default=None):
        for label in self.labels:
            if self.labels[label] == location:
                return label
        if default is None:
            return location
        else:
            return default

    def assemble(self, text):
        program = self.assembler.assemble(text)
        self.memory.reset()
        self.reset_registers()
        self.memory.load(program)
        self.source = self.assembler.source
        scan(self.memory, self.pointer, self.target_pointer,
             self.stepper.scan_limit)
        return program

    def load(self, filename):
        self.filename = filename
        with open(filename) as fp:
            return fp.read()

    def load_file(self, filename):
        return self.assemble(self.load(filename))

    def run(self, reset=True):
        """
        Run without display until the machine halts or max_steps
        instructions have gone by.
        """
        if reset:
            self.instruction_count = 0
        self.suspended = False
        steps = 0
        self.arrive()
        while not self.halted:
            if steps >= self.max_steps:
                self.suspended = True
                break
            self.step()
            self.arrive()
            steps += 1
        scan(self.memory, self.pointer, self.target_pointer,
             self.stepper.scan_limit)

    def report(self):
        self.Print("=" * 60)
        if self.suspended:
            self.Print("Computation SUSPENDED")
        else:
            self.Print("Computation completed")
        self.Print("=" * 60)
        self.Print("Instructions:", self.instruction_count)
        self.dump_registers()

    def runtime_error(self, exc):
        location = self.target_pointer
        if location in self.source:
            self.Error("\nRuntime error:\n    line %s:\n%s\n" %
                       (self.source[location], str(exc)))
        else:
            self.Error("\nRuntime error:\n    memory %s\n%s\n" %
                       (xy_hex(location), str(exc)))

    def execute_file(self, filename):
        self.load_file(filename)
        try:
            self.run()
        except MachineError as exc:
            self.runtime_error(exc)
            return False
        self.report()
        return True

    def dump_registers(self):
        self.Print()
        self.Print("=" * 60)
        self.Print("Registers:")
        self.Print("=" * 60)
        self.Print("PC: %s  (target %s)" % (xy_hex(self.pointer),
                                           xy_hex(self.target_pointer)))
        self.Print("X: %s Y: %s C: %d" % (xy_hex(self.x), xy_hex(self.y),
                                          self.carry))
        state = "halted" if self.halted else self.stepper.state
        self.Print("Mode: %s, %s" % (self.stepper.mode, state))

    def default_range(self, start, stop):
        if start is None:
            start = 0
        if stop is None:
            if self.source:
                stop = max(self.source.keys())
                inst = opcodes.lookup(self.memory.get(stop))
                stop += inst.length if inst is not None else 1
            else:
                stop = start + 10
        else:
            stop = stop + 1
        if stop <= start:
            stop = start + 10
        if stop - start > 100:
            stop = start + 100
        return start, min(stop, MEMORY_SIZE)

    def dump(self, start=None, stop=None, header=True):
        start, stop = self.default_range(start, stop)
        if header:
            self.Print("=" * 60)
            self.Print("Memory dump:")
            self.Print("=" * 60)
        for location in range(start, stop):
            value, tag = self.memory.cell(location)
            label = self.lookup(location, "")
            if label:
                label = label + ":"
            self.Print("%-10s %s: %s  %s" % (label, xy_hex(location),
                                             xy_hex(value, 2), tag))

    def dis(self, start=None, stop=None, header=True):
        start, stop = self.default_range(start, stop)
        if header:
            self.Print("=" * 60)
            self.Print("Memory disassembled:")
            self.Print("=" * 60)
        location = start
        while location < stop:
            inst = opcodes.lookup(self.memory.get(location))
            length = inst.length if inst is not None else 1
            data = " ".join(xy_hex(self.memory.get(i), 2)
                            for i in range(location, min(location + length,
                                                         MEMORY_SIZE)))
            label = self.lookup(location, "")
            if label:
                label = label + ":"
            line = self.source.get(location, "")
            self.Print("%-10s %s: %-12s %-16s%s" % (
                label, xy_hex(location), data,
                self.format_instruction(location),
                (" [line: %s]" % line) if line else ""))
            location += length

    def screen(self):
        for row, values in enumerate(self.memory.display()):
            self.Print("%s: %s" % (xy_hex(0xFF00 + row * 16),
                                   " ".join(xy_hex(v, 2) for v in values)))

    def explain(self):
        description = self.describe()
        if description:
            self.Print(">>> %s: %s" % description)

    def tick(self, count=1):
        """ Advance count frames; the notebook shows each step at once """
        committed = 0
        for i in range(count):
            if self.stepper.tick():
                committed += 1
            self.arrive()
        return committed

    def execute(self, text):
        words = [word.strip() for word in text.split()]
        if not words:
            return True
        if words[0].startswith("%"):
            if words[0] == "%dump":
                try:
                    self.dump(*[int(word, 16) for word in words[1:3]])
                except ValueError:
                    self.Error("Error; use %dump [STARTHEX [STOPHEX]]\n")
                    return False
                return True
            elif words[0] == "%dis":
                try:
                    self.dis(*[int(word, 16) for word in words[1:3]])
                except ValueError:
                    self.Error("Error; use %dis [STARTHEX [STOPHEX]]\n")
                    return False
                return True
            elif words[0] == "%regs":
                self.dump_registers()
                return True
            elif words[0] == "%d":
                self.debug = not self.debug
                self.Print("Debug is now %s" % ["off", "on"][int(self.debug)])
                return True
            elif words[0] == "%auto":
                self.stepper.toggle_auto()
                self.Print("Auto is now %s" % ["off", "on"][int(self.stepper.auto)])
                return True
            elif words[0] == "%turbo":
                self.stepper.toggle_turbo()
                self.Print("Turbo is now %s" % ["off", "on"][int(self.stepper.turbo)])
                return True
            elif words[0] == "%carry":
                self.toggle_carry()
                self.dump_registers()
                return True
            elif words[0] == "%pc":
                if len(words) > 1:
                    self.edit_target_pointer(words[1])
                self.dump_registers()
                return True
            elif words[0] == "%mem":
                if len(words) < 3:
                    self.Error("Error; use %mem HEXLOCATION HEXBYTE\n")
                    return False
                try:
                    location = int(words[1], 16)
                except ValueError:
                    location = -1
                if 0 <= location < MEMORY_SIZE:
                    self.edit_memory(location, words[2])
                    self.dump(location, location, header=False)
                return True
            elif words[0] == "%reg":
                if len(words) > 2:
                    self.edit_register(words[1], words[2])
                self.dump_registers()
                return True
            elif words[0] == "%labels":
                self.Print("Label", "Location")
                for key in sorted(self.labels, key=self.labels.get):
                    self.Print(key + ":", xy_hex(self.labels[key]))
                return True
            elif words[0] == "%screen":
                self.screen()
                return True
            elif words[0] == "%reset":
                self.memory.reset()
                self.reset_registers()
                self.source = {}
                self.assembler.labels = {}
                self.dump_registers()
                return True
            elif words[0] in ("%step", "%tick"):
                orig_debug = self.debug
                try:
                    if words[0] == "%step":
                        self.debug = True
                        self.arrive()
                        self.explain()
                        self.stepper.trigger()
                        self.tick()
                    else:
                        count = int(words[1]) if len(words) > 1 else 1
                        self.Print("Steps: %s" % self.tick(count))
                except MachineError as exc:
                    self.runtime_error(exc)
                    return False
                except ValueError:
                    self.Error("Error; use %tick [COUNT]\n")
                    return False
                finally:
                    self.debug = orig_debug
                self.dump_registers()
                return True
            elif words[0] == "%exe" or words[0] == "%cont":
                try:
                    self.debug = False
                    if words[0] == "%exe":
                        self.reset_registers()
                        self.run()
                    else:
                        self.halted = False
                        self.run(reset=False)
                except MachineError as exc:
                    self.runtime_error(exc)
                    return False
                self.report()
                return True
            else:
                self.Error("Invalid Interactive Magic Directive\nHint: %help\n")
                return False
        else:
            ### Else, must be code to assemble:
            try:
                self.assemble(text)
            except AssemblyError as exc:
                self.Error("\nAssemble error\n    line %s\n" % exc.line)
                self.Error(str(exc) + "\n")
                return False
            self.Print("Assembled! Use %dis or %dump to examine; use %exe to run.")
            return True


def main(argv=None):
    """ Assemble and run a program file: python -m calysto_xy.xy FILE """
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        sys.stderr.write("usage: python -m calysto_xy.xy FILE\n")
        return 2
    return 0 if XY().execute_file(argv[0]) else 1


if __name__ == '__main__':
    raise SystemExit(main())
