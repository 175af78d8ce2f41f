"""Error handling for blcalc. Every failure raised by the library is a GenericException subclass; if another type of
error makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a blcalc error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """msg is a str.format template filled with exprs. exprs[0] should be the offending expr that caused the
        error; start and end delimit the part of it that is highlighted in a diagnosis.
        """
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.template = msg
        self.exprs = exprs
        self.msg = msg.format(*exprs)
        self.expr = exprs[0] if exprs else ""
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)

    def highlighted(self):
        """Returns msg with the expr snippets in bold."""
        return self.template.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs))

    def __str__(self):
        return self.msg


class LexError(GenericException):
    """Character outside of the core alphabet."""


class LambdaSyntaxError(GenericException, SyntaxError):
    """Grammar violation. position is the index of the offending token (== character index in the source)."""

    def __init__(self, msg, exprs=None, position=0, **kwargs):
        kwargs.setdefault("start", position)
        kwargs.setdefault("end", position + 1)
        super().__init__(msg, exprs, **kwargs)
        self.position = position


class UnboundReferenceError(GenericException):
    """Variable with no enclosing binder and no free-variable registry during De Bruijn conversion."""


class EncodingError(GenericException):
    """Malformed BLC bit string or De Bruijn text."""


class FreshNameError(GenericException):
    """No single-letter name is left for an alpha-conversion."""


class ErrorHandler:
    """Context manager that reports blcalc errors/warnings instead of letting them escape as tracebacks. Also collects
    the reduction steps of the terms run under it.
    """
    ERROR = "red"
    WARNING = "magenta"
    STEP = "cyan"

    def __init__(self, fatal=True, verbose=False, stream=None):
        self.fatal = fatal
        self.verbose = verbose
        self.stream = stream
        self.traceback = {}
        self.steps = []
        self.failed = False

    def _print(self, *args):
        print(*args, file=self.stream if self.stream is not None else sys.stdout)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called before the line is evaluated."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a successful evaluation."""
        self.traceback[path] = (None, None)

    def register_step(self, kind, expr):
        """Records a reduction step: kind is the rule applied ("β") and expr the resulting term."""
        self.steps.append((kind, expr))
        if self.verbose:
            self._print(colored(kind, ErrorHandler.STEP, attrs=["bold"]) + "  " + str(expr))

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def _location(self):
        for file, (line, line_num) in self.traceback.items():
            if line is not None:
                return f"{file}:{line_num}: "
        return ""

    def warn(self, *args, **kwargs):
        """Generates and prints a warning message based on args (same signature as GenericException)."""
        error = GenericException(*args, **kwargs)

        error_msg = colored(self._location(), attrs=["bold"])
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.highlighted()
        self._print(error_msg)

    def throw(self, error):
        """Prints error, prefixed by the line registered in self.traceback (if any). Exits if this handler is fatal."""
        self.failed = True

        error_msg = ""
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(self._location() + "error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.highlighted()
        self._print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            self._print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {key: (None, None) for key in self.traceback}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("term is nested too deeply: maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}: {}'", (exc_type.__name__, exc_val), internal=True))
            do_exit = True

        return not do_exit
