#######################################
# IMPORTS
#######################################

from strings_with_arrows import string_with_arrows

#######################################
# ERRORS
#######################################

class Error:
    __slots__ = ['pos_start', 'pos_end', 'error_name', 'details']

    def __init__(self, pos_start, pos_end, error_name, details):
        self.pos_start = pos_start
        self.pos_end = pos_end
        self.error_name = error_name
        self.details = details

    def set_pos(self, pos_start=None, pos_end=None):
        if pos_start is not None:
            self.pos_start = pos_start
            self.pos_end = pos_end or pos_start
        return self

    @property
    def line(self):
        return self.pos_start.ln + 1 if self.pos_start else 0

    def __repr__(self) -> str:
        return f'{self.error_name}: {self.details}'

    def as_string(self):
        result = f'{self.error_name}: {self.details}\n'
        result += f'File {self.pos_start.fn}, line {self.line}'
        result += '\n\n' + \
            string_with_arrows(self.pos_start.ftxt,
                               self.pos_start, self.pos_end)
        return result

    def copy(self):
        return __class__(self.pos_start, self.pos_end, self.error_name, self.details)

class IllegalCharError(Error):
    def __init__(self, pos_start, pos_end, details):
        super().__init__(pos_start, pos_end, 'Illegal Character', details)

class UnterminatedStringError(Error):
    def __init__(self, pos_start, pos_end, details='Unterminated string.'):
        super().__init__(pos_start, pos_end, 'Unterminated String', details)

class InvalidSyntaxError(Error):
    def __init__(self, pos_start, pos_end, details=''):
        super().__init__(pos_start, pos_end, 'Invalid Syntax', details)

class StaticError(Error):
    def __init__(self, pos_start, pos_end, details):
        super().__init__(pos_start, pos_end, 'Static Error', details)

class StaticErrorList(StaticError):
    """Every static error of one program, positioned at the first."""
    __slots__ = ['errors']

    def __init__(self, errors):
        first = errors[0]
        super().__init__(first.pos_start, first.pos_end, first.details)
        self.errors = errors

    def as_string(self):
        return '\n\n'.join(error.as_string() for error in self.errors)

    def copy(self):
        return StaticErrorList([error.copy() for error in self.errors])

class RTError(Error):
    __slots__ = ['context']

    def __init__(self, pos_start, pos_end, details, context=None):
        super().__init__(pos_start, pos_end, 'Runtime Error', details)
        self.context = context

    def set_context(self, context=None):
        if self.context is None:
            self.context = context
        return self

    def as_string(self):
        result = self.generate_traceback()
        result += f'{self.error_name}: {self.details}'
        result += '\n\n' + \
            string_with_arrows(self.pos_start.ftxt,
                               self.pos_start, self.pos_end)
        return result

    def generate_traceback(self):
        result = ''
        pos = self.pos_start
        ctx = self.context

        while ctx:
            result = f'  File {pos.fn}, line {str(pos.ln + 1)}, in {ctx.display_name}\n' + result
            pos = ctx.parent_entry_pos
            ctx = ctx.parent

        return 'Traceback (most recent call last):\n' + result

    def copy(self):
        return __class__(self.pos_start, self.pos_end, self.details, self.context)
