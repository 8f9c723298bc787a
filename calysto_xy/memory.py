"""
Memory of the XY machine: 64K cells, each a byte value and a tag.

The tag records what the tagging scanner last decided the byte is used
for. It is presentation only and never set from outside.
"""

from array import array

MEMORY_SIZE = 1 << 16
DISPLAY_START = 0xFF00
DISPLAY_ROWS = 16
DISPLAY_COLUMNS = 16


def xy_hex(value, digits=4):
    """ Format the value in the form 00FF """
    return "%0*X" % (digits, value)


def parse_hex(text, digits):
    """
    Parse exactly `digits` hexadecimal characters. Returns None for
    anything else.
    """
    text = text.strip()
    if len(text) != digits:
        return None
    if not all(c in "0123456789abcdefABCDEF" for c in text):
        return None
    return int(text, 16)


class MachineError(ValueError):
    """ Fatal error of the running program """
    def __init__(self, message, address=None):
        self.address = address
        super(MachineError, self).__init__(message)


class AddressOutOfRange(MachineError):
    def __init__(self, address):
        super(AddressOutOfRange, self).__init__(
            "address out of range: x%X (memory ends at xFFFF)" % address,
            address)


class Tag(object):
    UNKNOWN = "unknown"
    INSTRUCTION = "instruction"
    REGISTER = "register"
    VALUE = "value"
    POINTER = "pointer"


def check_address(address):
    if not 0 <= address < MEMORY_SIZE:
        raise AddressOutOfRange(address)
    return address


class Memory(object):
    def __init__(self):
        self.reset()

    def reset(self):
        self.values = array('B', [0] * MEMORY_SIZE)
        self.tags = [Tag.UNKNOWN] * MEMORY_SIZE

    def __len__(self):
        return MEMORY_SIZE

    def get(self, address):
        return self.values[check_address(address)]

    def set(self, address, value):
        self.values[check_address(address)] = value & 0xFF

    def get_word(self, address):
        check_address(address + 1)
        return (self.get(address) << 8) | self.get(address + 1)

    def set_word(self, address, value):
        # both cells are checked before either is written
        check_address(address)
        check_address(address + 1)
        self.values[address] = (value >> 8) & 0xFF
        self.values[address + 1] = value & 0xFF

    def load(self, data, start=0):
        if data:
            check_address(start + len(data) - 1)
        for i, byte in enumerate(data):
            self.values[start + i] = byte

    def edit(self, address, text):
        """
        Set one cell from two hex digits. Anything else, or an address
        outside memory, is ignored. Returns True if the cell changed.
        """
        value = parse_hex(text, 2)
        if value is None or not 0 <= address < MEMORY_SIZE:
            return False
        self.values[address] = value
        return True

    def get_tag(self, address):
        return self.tags[check_address(address)]

    def set_tag(self, address, tag):
        self.tags[check_address(address)] = tag

    def clear_tags(self):
        self.tags = [Tag.UNKNOWN] * MEMORY_SIZE

    def cell(self, address):
        check_address(address)
        return (self.values[address], self.tags[address])

    def cells(self):
        return list(zip(self.values, self.tags))

    def display(self):
        """
        The memory mapped display: 16 rows of 16 bytes starting at xFF00.
        """
        return [list(self.values[DISPLAY_START + row * DISPLAY_COLUMNS:
                                 DISPLAY_START + (row + 1) * DISPLAY_COLUMNS])
                for row in range(DISPLAY_ROWS)]
