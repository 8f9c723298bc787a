"""
Decides, once per tick, whether the machine takes a step.

    manual - one step per trigger()
    auto   - one step each time the machine is at rest
    turbo  - like auto, and the pointer jumps straight to its target

The stepper never waits. Between steps in manual and auto mode a front
end animates toward target_pointer and calls machine.arrive() when done.
"""

from .scanner import scan, SCAN_LIMIT

AT_REST = "AtRest"
TRANSITIONING = "Transitioning"


class Stepper(object):
    def __init__(self, machine, scan_limit=SCAN_LIMIT):
        self.machine = machine
        self.scan_limit = scan_limit
        self.auto = False
        self.turbo = False
        self.pending = False

    @property
    def mode(self):
        if self.turbo:
            return "turbo"
        elif self.auto:
            return "auto"
        return "manual"

    @property
    def state(self):
        if self.machine.at_rest():
            return AT_REST
        return TRANSITIONING

    def toggle_auto(self):
        self.auto = not self.auto
        return self.auto

    def toggle_turbo(self):
        self.turbo = not self.turbo
        return self.turbo

    def trigger(self):
        """ Ask for one step; it is taken on the next tick at rest """
        self.pending = True

    def tick(self):
        """
        One frame. Returns True if an instruction was executed. Errors
        from the machine are raised to the caller after the machine has
        halted.
        """
        machine = self.machine
        if self.turbo:
            machine.arrive()
        scan(machine.memory, machine.pointer, machine.target_pointer,
             self.scan_limit)
        if not machine.at_rest():
            return False
        if machine.halted:
            self.pending = False
            return False
        if not (self.auto or self.turbo or self.pending):
            return False
        self.pending = False
        machine.step()
        if self.turbo:
            machine.arrive()
        return True
