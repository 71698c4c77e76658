import sys

CELL_MODULUS = 256

OP_RIGHT = ord('>')
OP_LEFT = ord('<')
OP_INC = ord('+')
OP_DEC = ord('-')
OP_OUT = ord('.')
OP_IN = ord(',')
OP_OPEN = ord('[')
OP_CLOSE = ord(']')


class BFError(Exception):
    def __init__(self, message, position=None):
        super().__init__(message)
        self.position = position


class BracketMismatchError(BFError):
    def __init__(self, bracket, position):
        super().__init__(f"unmatched '{bracket}' at position {position}", position)
        self.bracket = bracket


class BFRuntimeError(BFError):
    pass


class CellPointerUnderflowError(BFRuntimeError):
    def __init__(self, position):
        super().__init__(f"cell pointer moved left of cell 0 at position {position}", position)


def build_jump_table(code):
    """
    Map every '[' to its matching ']' and back.
    Raises BracketMismatchError for the first unmatched ']' or,
    after the scan, the innermost unmatched '['.
    """
    jump_table = {}
    loop_stack = []

    for i, c in enumerate(code):
        if c == OP_OPEN:
            loop_stack.append(i)
        elif c == OP_CLOSE:
            if not loop_stack:
                raise BracketMismatchError(']', i)
            start = loop_stack.pop()
            jump_table[start] = i
            jump_table[i] = start

    if loop_stack:
        raise BracketMismatchError('[', loop_stack[-1])

    return jump_table


class Tape:
    """Cells of the tape, grown with zeros as the pointer moves right."""

    def __init__(self):
        self.cells = bytearray(1)
        self.ptr = 0

    def __len__(self):
        return len(self.cells)

    def __getitem__(self, index):
        if index < 0:
            raise IndexError("tape index out of range")
        # Cells past the current extent have never been touched
        if index >= len(self.cells):
            return 0
        return self.cells[index]

    def move_right(self):
        self.ptr += 1
        if self.ptr == len(self.cells):
            self.cells.append(0)

    def move_left(self):
        if self.ptr == 0:
            raise IndexError("cell pointer underflow")
        self.ptr -= 1

    def get(self):
        return self.cells[self.ptr]

    def set(self, value):
        self.cells[self.ptr] = value % CELL_MODULUS

    def increment(self):
        self.cells[self.ptr] = (self.cells[self.ptr] + 1) % CELL_MODULUS

    def decrement(self):
        self.cells[self.ptr] = (self.cells[self.ptr] - 1) % CELL_MODULUS


class BFMachine:
    def __init__(self, code, stdin=None, stdout=None):
        if isinstance(code, str):
            code = code.encode('utf-8', 'surrogateescape')
        self.code = bytes(code)
        # Resolve loops up front: a bad program never gets a tape
        self.jump_table = build_jump_table(self.code)
        self.tape = Tape()
        self.pc = 0
        self.step_count = 0
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer

    @property
    def finished(self):
        return self.pc >= len(self.code)

    def run_step(self):
        if self.finished:
            return False

        c = self.code[self.pc]
        tape = self.tape

        if c == OP_RIGHT:
            tape.move_right()
        elif c == OP_LEFT:
            try:
                tape.move_left()
            except IndexError:
                raise CellPointerUnderflowError(self.pc) from None
        elif c == OP_INC:
            tape.increment()
        elif c == OP_DEC:
            tape.decrement()
        elif c == OP_OUT:
            self.stdout.write(bytes((tape.get(),)))
            self.stdout.flush()
        elif c == OP_IN:
            data = self.stdin.read(1)
            # End of input reads as 0
            tape.set(data[0] if data else 0)
        elif c == OP_OPEN:
            if tape.get() == 0:
                self.pc = self.jump_table[self.pc]
        elif c == OP_CLOSE:
            if tape.get() != 0:
                self.pc = self.jump_table[self.pc]

        self.pc += 1
        self.step_count += 1
        return True

    def run(self):
        while self.run_step():
            pass
        self.stdout.flush()
        return self.step_count


def run_bf(code, stdin=None, stdout=None):
    machine = BFMachine(code, stdin, stdout)
    machine.run()
    return machine

