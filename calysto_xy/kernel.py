from metakernel import MetaKernel

from .xy import XY, magics
from . import opcodes
from ._version import __version__


class CalystoXY(MetaKernel):
    implementation = 'XY'
    implementation_version = __version__
    language = 'Calysto XY'
    language_version = '0.1'
    banner = "Calysto XY - assembly language of the XY machine"
    language_info = {
        'name': 'gas',
        'mimetype': 'text/x-gas',
        'file_extension': '.asm',
    }

    def __init__(self, *args, **kwargs):
        super(CalystoXY, self).__init__(*args, **kwargs)
        self.xy = XY(self)

    def get_usage(self):
        return """This is the Calysto XY Jupyter kernel.

XY Interactive Magic Directives:

 %auto                              - toggle auto stepping
 %carry                             - toggle the carry flag
 %cont                              - continue running
 %d                                 - toggle the debug trace
 %dis [STARTHEX [STOPHEX]]          - dump memory as program
 %dump [STARTHEX [STOPHEX]]         - list memory in hex, with tags
 %exe                               - execute the program
 %labels                            - show labels
 %mem HEXLOCATION HEXBYTE           - set memory
 %pc HEXWORD                        - jump: set the target pointer
 %reg X|Y HEXWORD                   - set register X or Y
 %regs                              - show registers
 %reset                             - reset XY to start state
 %screen                            - show the display cells xFF00-xFFFF
 %step                              - execute the next instruction
 %tick [COUNT]                      - advance COUNT frames in the current mode
 %turbo                             - toggle turbo stepping

Bytes are two hex digits (0F), words four (00FF); no prefix.

To get additional help on these items, use '%help %item'.

To see additional magics, use %lsmagic, and put a question mark after a magic
name.
"""

    def get_completions(self, info):
        token = info["help_obj"]
        matches = []
        for item in (list(opcodes.mnemonic.keys()) +
                     list(self.xy.labels.keys()) +
                     magics):
            if item.startswith(token) and item not in matches:
                matches.append(item)
        return matches

    def get_kernel_help_on(self, info, level=0, none_on_fail=False):
        expr = info["code"].strip()
        inst = opcodes.by_mnemonic(expr)
        if inst is not None:
            return "%s (%02X) - %s\n" % (inst.mnemonic, inst.opcode,
                                         inst.description)
        elif expr == "%step":
            return """%step - Execute the next instruction
"""
        elif expr == "%tick":
            return """%tick - Advance one or more frames

In manual mode a frame only steps after %step; with %auto or %turbo on,
every frame steps:
    %auto
    %tick 10
"""
        elif expr == "%mem":
            return """%mem - Set a memory location

Set location 0010 to the byte 2A:
    %mem 0010 2A

Anything but two hex digits is ignored.
"""
        elif expr == "%reg":
            return """%reg - Set a register

    %reg x 00FF
"""
        elif expr == "%pc":
            return """%pc - Jump: set where the next step starts
"""
        elif expr in magics:
            return "%s - see %%help for a summary\n" % expr
        elif none_on_fail:
            return None
        else:
            return "No available help on '%s'" % expr

    def do_execute_file(self, filename):
        self.xy.execute_file(filename)

    def do_execute_direct(self, code):
        try:
            self.xy.execute(code.rstrip())
        except Exception as exc:
            self.Error(str(exc))
        except KeyboardInterrupt:
            self.Error("Keyboard Interrupt!")

    def do_is_complete(self, code):
        if code:
            if code.split()[-1].strip() != "":
                return {'status': 'incomplete',
                        'indent': '    '}
            else:
                return {'status': 'complete'}
        else:
            return {'status': 'incomplete'}

    def repr(self, data):
        return repr(data)
