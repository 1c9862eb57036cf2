# Machine word
INT32_MIN = -0x80000000
INT32_MAX = 0x7FFFFFFF
WORD_MASK = 0xFFFFFFFF

# Unicode scalar values
MAX_CODE_POINT = 0x10FFFF
SURROGATE_FIRST = 0xD800
SURROGATE_LAST = 0xDFFF

# Process exit codes
EXIT_HALT = 0
EXIT_PARSE_ERROR = 1
EXIT_KEYBOARD = 3
EXIT_LOAD_ERROR = 4
EXIT_EXEC_ERROR = 100


class Settings:
    verbose: bool
    trace: bool
    json: bool

    def __init__(self):
        self.verbose = False
        self.trace = False
        self.json = False

    def update(
        self,
        verbose: bool | None = None,
        trace: bool | None = None,
        json: bool | None = None
    ):
        if verbose is not None:
            self.verbose = verbose

        if trace is not None:
            self.trace = trace

        if json is not None:
            self.json = json

        return self
