"""
Keyword and built-in function catalog for BASICA
Static tables built once at import and shared by every analysis
"""

from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Entry:
    name: str
    kind: str  # keyword, function
    detail: str
    signature: Optional[str] = None
    parameters: List[Tuple[str, str]] = field(default_factory=list)
    doc: Optional[str] = None


def _keyword(name: str, detail: str) -> Entry:
    return Entry(name, "keyword", detail)


def _function(name: str, detail: str, signature: Optional[str] = None,
              parameters: Optional[List[Tuple[str, str]]] = None,
              doc: Optional[str] = None) -> Entry:
    return Entry(name, "function", detail, signature, parameters or [], doc)


_KEYWORD_LIST = [
    # Control flow
    _keyword("IF", "Conditional execution"),
    _keyword("THEN", "Part of IF statement"),
    _keyword("ELSE", "Alternative branch"),
    _keyword("ELSEIF", "Chained condition"),
    _keyword("ENDIF", "End of IF block"),
    _keyword("FOR", "Counted loop"),
    _keyword("TO", "Loop end value"),
    _keyword("STEP", "Loop increment"),
    _keyword("NEXT", "End of FOR loop"),
    _keyword("WHILE", "Conditional loop"),
    _keyword("WEND", "End of WHILE"),
    _keyword("DO", "DO...LOOP block"),
    _keyword("LOOP", "End of DO block"),
    _keyword("UNTIL", "Loop exit condition"),
    _keyword("EXIT", "Exit loop early"),
    _keyword("GOTO", "Jump to line"),
    _keyword("GOSUB", "Call subroutine"),
    _keyword("RETURN", "Return from subroutine"),
    _keyword("ON", "Computed GOTO/GOSUB"),
    _keyword("SELECT", "Multi-way branch"),
    _keyword("CASE", "Branch option"),
    _keyword("IS", "Relational CASE test"),
    _keyword("END", "End program"),
    _keyword("STOP", "Halt execution"),
    _keyword("ERROR", "Raise or trap an error"),
    _keyword("RESUME", "Continue after error"),
    _keyword("CALL", "Call procedure"),
    _keyword("SUB", "Procedure block"),
    _keyword("FUNCTION", "Function block"),
    _keyword("SYSTEM", "Return to operating system"),
    _keyword("RUN", "Run program"),
    _keyword("CHAIN", "Load and run another program"),

    # Variables and data
    _keyword("LET", "Variable assignment"),
    _keyword("DIM", "Declare array"),
    _keyword("AS", "Type or file number clause"),
    _keyword("SHARED", "Shared variables"),
    _keyword("COMMON", "Variables passed to CHAINed program"),
    _keyword("STATIC", "Static variables"),
    _keyword("READ", "Read from DATA"),
    _keyword("DATA", "Define data values"),
    _keyword("RESTORE", "Reset DATA pointer"),
    _keyword("REM", "Comment"),
    _keyword("DEF", "Define function"),
    _keyword("SEG", "Memory segment"),
    _keyword("DEFINT", "Default integer type"),
    _keyword("DEFSNG", "Default single type"),
    _keyword("DEFDBL", "Default double type"),
    _keyword("DEFSTR", "Default string type"),
    _keyword("SWAP", "Exchange variables"),
    _keyword("RANDOMIZE", "Seed RNG"),
    _keyword("CLEAR", "Clear variables"),
    _keyword("POKE", "Write to memory"),
    _keyword("OUT", "Write to I/O port"),
    _keyword("WAIT", "Wait on I/O port"),

    # Input and output
    _keyword("PRINT", "Output to screen"),
    _keyword("LPRINT", "Output to printer"),
    _keyword("USING", "Formatted output"),
    _keyword("WRITE", "Write delimited values"),
    _keyword("INPUT", "Read user input"),
    _keyword("LINE", "LINE INPUT statement or draw line"),

    # Files
    _keyword("OPEN", "Open file"),
    _keyword("CLOSE", "Close file"),
    _keyword("OUTPUT", "File mode"),
    _keyword("APPEND", "File mode"),
    _keyword("RANDOM", "File mode"),
    _keyword("BINARY", "File mode"),
    _keyword("FIELD", "Define random file buffer"),
    _keyword("LSET", "Left-justify into field"),
    _keyword("RSET", "Right-justify into field"),
    _keyword("KILL", "Delete file"),
    _keyword("NAME", "Rename file"),
    _keyword("MKDIR", "Create directory"),
    _keyword("RMDIR", "Remove directory"),
    _keyword("CHDIR", "Change directory"),
    _keyword("FILES", "List files"),

    # Screen, graphics and sound
    _keyword("SCREEN", "Set screen mode"),
    _keyword("COLOR", "Set colors"),
    _keyword("CLS", "Clear screen"),
    _keyword("LOCATE", "Position cursor"),
    _keyword("WIDTH", "Set screen width"),
    _keyword("CIRCLE", "Draw circle"),
    _keyword("PAINT", "Flood fill"),
    _keyword("PSET", "Set pixel"),
    _keyword("PRESET", "Clear pixel"),
    _keyword("DRAW", "Turtle graphics"),
    _keyword("GET", "Capture sprite"),
    _keyword("PUT", "Draw sprite"),
    _keyword("PLAY", "Play music"),
    _keyword("SOUND", "Play tone"),
    _keyword("BEEP", "System beep"),

    # Program and environment
    _keyword("KEY", "Function key display and trapping"),
    _keyword("OFF", "Disable a feature"),
    _keyword("LIST", "List program or key assignments"),
    _keyword("OPTION", "OPTION BASE statement"),
    _keyword("BASE", "Lowest array subscript"),
    _keyword("ERASE", "Remove arrays"),
    _keyword("TRON", "Trace on"),
    _keyword("TROFF", "Trace off"),
    _keyword("NEW", "Delete program in memory"),
    _keyword("RESET", "Close all files"),
    _keyword("LOAD", "Load program"),
    _keyword("SAVE", "Save program"),
    _keyword("BLOAD", "Load memory image"),
    _keyword("BSAVE", "Save memory image"),
    _keyword("SHELL", "Run operating system command"),
    _keyword("ENVIRON", "Set environment variable"),
    _keyword("VIEW", "Set graphics or text viewport"),
    _keyword("WINDOW", "Set logical coordinates"),
    _keyword("PALETTE", "Change palette colors"),

    # Operators
    _keyword("AND", "Logical AND"),
    _keyword("OR", "Logical OR"),
    _keyword("XOR", "Logical XOR"),
    _keyword("EQV", "Logical equivalence"),
    _keyword("IMP", "Logical implication"),
    _keyword("NOT", "Logical NOT"),
    _keyword("MOD", "Modulo operator"),
]

_FUNCTION_LIST = [
    # String functions
    _function("CHR$", "Character from ASCII code", "CHR$(code)",
              [("code", "ASCII code (0-255)")],
              "Returns character for ASCII code"),
    _function("ASC", "ASCII code of character", "ASC(string$)",
              [("string$", "String to get first character from")],
              "Returns ASCII code of first character"),
    _function("LEN", "String length", "LEN(string$)",
              [("string$", "String to measure")],
              "Returns length of string"),
    _function("LEFT$", "Leftmost characters", "LEFT$(string$, count)",
              [("string$", "Source string"), ("count", "Number of characters")],
              "Returns leftmost characters"),
    _function("RIGHT$", "Rightmost characters", "RIGHT$(string$, count)",
              [("string$", "Source string"), ("count", "Number of characters")],
              "Returns rightmost characters"),
    _function("MID$", "Substring", "MID$(string$, start[, length])",
              [("string$", "Source string"),
               ("start", "Starting position (1-based)"),
               ("length", "Number of characters (optional)")],
              "Returns substring"),
    _function("STR$", "Number to string", "STR$(number)",
              [("number", "Number to convert")],
              "Converts number to string"),
    _function("VAL", "String to number", "VAL(string$)",
              [("string$", "String to parse")],
              "Converts string to number"),
    _function("STRING$", "Repeat character", "STRING$(count, char)",
              [("count", "Number of repetitions"), ("char", "Character or ASCII code")],
              "Returns repeated character"),
    _function("SPACE$", "String of spaces", "SPACE$(count)",
              [("count", "Number of spaces")],
              "Returns string of spaces"),
    _function("INSTR", "Find substring", "INSTR([start,] string$, search$)",
              [("start", "Starting position (optional)"),
               ("string$", "String to search in"),
               ("search$", "String to find")],
              "Returns position of substring"),
    _function("UCASE$", "Uppercase", "UCASE$(string$)",
              [("string$", "String to convert")],
              "Converts to uppercase"),
    _function("LCASE$", "Lowercase", "LCASE$(string$)",
              [("string$", "String to convert")],
              "Converts to lowercase"),
    _function("LTRIM$", "Trim left spaces", "LTRIM$(string$)",
              [("string$", "String to trim")],
              "Removes leading spaces"),
    _function("RTRIM$", "Trim right spaces", "RTRIM$(string$)",
              [("string$", "String to trim")],
              "Removes trailing spaces"),
    _function("HEX$", "Hexadecimal string", "HEX$(number)",
              [("number", "Number to convert")],
              "Converts to hexadecimal string"),
    _function("OCT$", "Octal string", "OCT$(number)",
              [("number", "Number to convert")],
              "Converts to octal string"),

    # Math functions
    _function("ABS", "Absolute value", "ABS(number)",
              [("number", "Number to get absolute value of")],
              "Returns absolute value"),
    _function("SGN", "Sign of number", "SGN(number)",
              [("number", "Number to check")],
              "Returns sign (-1, 0, or 1)"),
    _function("INT", "Integer part (floor)", "INT(number)",
              [("number", "Number to floor")],
              "Returns largest integer <= number"),
    _function("FIX", "Truncate to integer", "FIX(number)",
              [("number", "Number to truncate")],
              "Truncates toward zero"),
    _function("CINT", "Round to integer", "CINT(number)",
              [("number", "Number to round")],
              "Rounds to nearest integer"),
    _function("CSNG", "Convert to single precision", "CSNG(number)",
              [("number", "Number to convert")],
              "Converts to single precision"),
    _function("CDBL", "Convert to double precision", "CDBL(number)",
              [("number", "Number to convert")],
              "Converts to double precision"),
    _function("SQR", "Square root", "SQR(number)",
              [("number", "Non-negative number")],
              "Returns square root"),
    _function("SIN", "Sine", "SIN(angle)",
              [("angle", "Angle in radians")],
              "Returns sine"),
    _function("COS", "Cosine", "COS(angle)",
              [("angle", "Angle in radians")],
              "Returns cosine"),
    _function("TAN", "Tangent", "TAN(angle)",
              [("angle", "Angle in radians")],
              "Returns tangent"),
    _function("ATN", "Arctangent", "ATN(number)",
              [("number", "Value")],
              "Returns arctangent in radians"),
    _function("LOG", "Natural logarithm", "LOG(number)",
              [("number", "Positive number")],
              "Returns natural logarithm"),
    _function("EXP", "Exponential", "EXP(number)",
              [("number", "Exponent")],
              "Returns e raised to power"),
    _function("RND", "Random number", "RND[(seed)]",
              [("seed", "Optional seed value")],
              "Returns random number 0-1"),

    # System and I/O
    _function("PEEK", "Read memory", "PEEK(address)",
              [("address", "Memory address")],
              "Returns byte at address"),
    _function("INP", "Read port", "INP(port)",
              [("port", "Port number 0-65535")],
              "Returns byte read from I/O port"),
    _function("FRE", "Free memory", "FRE(x)",
              [("x", "Dummy number or string")],
              "Returns bytes of free memory"),
    _function("VARPTR", "Variable address", "VARPTR(variable)",
              [("variable", "Variable name")],
              "Returns memory address of variable"),
    _function("VARPTR$", "Variable pointer string", "VARPTR$(variable)",
              [("variable", "Variable name")],
              "Returns 3-byte pointer string for PLAY and DRAW"),
    _function("SADD", "String address", "SADD(string$)",
              [("string$", "String variable")],
              "Returns address of string data"),
    _function("TIMER", "Seconds since midnight", "TIMER", [],
              "Returns seconds since midnight"),
    _function("DATE$", "Current date"),
    _function("TIME$", "Current time"),
    _function("INKEY$", "Read key (no wait)"),
    _function("EOF", "End of file check", "EOF(filenum)",
              [("filenum", "File number")],
              "Returns true if at end of file"),
    _function("LOF", "Length of file", "LOF(filenum)",
              [("filenum", "File number")],
              "Returns length of open file in bytes"),
    _function("LOC", "File position", "LOC(filenum)",
              [("filenum", "File number")],
              "Returns current record or byte position"),

    # Screen
    _function("CSRLIN", "Cursor row", "CSRLIN", [], "Returns cursor row"),
    _function("POS", "Cursor column", "POS(dummy)",
              [("dummy", "Ignored value")],
              "Returns cursor column"),
    _function("POINT", "Pixel color", "POINT(x, y)",
              [("x", "X coordinate"), ("y", "Y coordinate")],
              "Returns color at pixel"),
    _function("TAB", "Move to column", "TAB(column)",
              [("column", "Column to move to")],
              "Moves to column in PRINT"),
    _function("SPC", "Output spaces", "SPC(count)",
              [("count", "Number of spaces")],
              "Outputs spaces in PRINT"),
    _function("FN", "User-defined function"),
]

KEYWORDS: Dict[str, Entry] = {e.name: e for e in _KEYWORD_LIST}
FUNCTIONS: Dict[str, Entry] = {e.name: e for e in _FUNCTION_LIST}

# Read-only values the runtime provides; never reported as undefined
BUILTIN_VARIABLES = frozenset(["TIMER", "DATE$", "TIME$", "INKEY$", "ERR", "ERL"])

# Markdown hover documentation, keyed by name with any '$' suffix removed
HOVER_DOCS: Dict[str, str] = {
    # Control flow
    "IF": "**IF** condition **THEN** statement [**ELSE** statement]\n\nConditional execution. If the condition is true, executes the THEN clause; otherwise executes the optional ELSE clause.",
    "THEN": "**THEN**\n\nPart of IF...THEN...ELSE statement. Introduces the code to execute when the condition is true.",
    "ELSE": "**ELSE**\n\nPart of IF...THEN...ELSE statement. Introduces the code to execute when the condition is false.",
    "FOR": "**FOR** var **=** start **TO** end [**STEP** step]\n\nBegin a counted loop. The variable is initialized to start and incremented by step (default 1) until it exceeds end.",
    "TO": "**TO**\n\nPart of FOR...TO...STEP statement. Specifies the ending value of the loop.",
    "STEP": "**STEP** value\n\nOptional part of FOR loop. Specifies the increment (can be negative for counting down).",
    "NEXT": "**NEXT** [var]\n\nEnd of FOR loop. Increments the loop variable and continues if not past the end value.",
    "WHILE": "**WHILE** condition\n\nBegin a conditional loop. Repeats while the condition is true.",
    "WEND": "**WEND**\n\nEnd of WHILE loop. Returns to WHILE to re-check the condition.",
    "DO": "**DO** [**WHILE**|**UNTIL** condition]\n\nBegin a DO...LOOP block. Can have condition at start or end.",
    "LOOP": "**LOOP** [**WHILE**|**UNTIL** condition]\n\nEnd of DO...LOOP block. Can have condition at end.",
    "UNTIL": "**UNTIL** condition\n\nLoop exit condition. Loop continues until the condition becomes true.",
    "EXIT": "**EXIT** **DO** | **EXIT** **FOR**\n\nExit from the innermost DO or FOR loop.",
    "GOTO": "**GOTO** line\n\nUnconditional jump to the specified line number.",
    "GOSUB": "**GOSUB** line\n\nCall subroutine at line number. Use RETURN to come back.",
    "RETURN": "**RETURN**\n\nReturn from subroutine to the statement after GOSUB.",
    "ON": "**ON** expr **GOTO** line1, line2, ... | **ON** expr **GOSUB** line1, line2, ...\n\nComputed GOTO/GOSUB. Jumps to the nth line in the list based on the expression value.",
    "SELECT": "**SELECT CASE** expr\n\nBegin a SELECT CASE block for multi-way branching.",
    "CASE": "**CASE** value | **CASE** v1 **TO** v2 | **CASE IS** op value | **CASE ELSE**\n\nDefines a case in SELECT CASE block.",
    "END": "**END**\n\nTerminate program execution.",
    "STOP": "**STOP**\n\nHalt program execution (can be resumed in some implementations).",

    # Input and output
    "PRINT": "**PRINT** [expr] [; | ,] ...\n\nOutput to screen. Semicolon continues on same line; comma moves to next tab zone.",
    "LPRINT": "**LPRINT** [expr] [; | ,] ...\n\nOutput to printer. Same format as PRINT.",
    "INPUT": "**INPUT** [\"prompt\";] var1 [, var2, ...]\n\nRead input from user. Displays optional prompt and waits for keyboard input.",
    "LINE": "**LINE INPUT** [\"prompt\";] var$\n\nRead entire line of input including commas into string variable.",
    "READ": "**READ** var1 [, var2, ...]\n\nRead values from DATA statements into variables.",
    "DATA": "**DATA** value1, value2, ...\n\nDefine constant data to be read by READ statements.",
    "RESTORE": "**RESTORE** [line]\n\nReset DATA pointer to beginning or to specified line.",

    # Variables
    "LET": "**LET** var = expr | var = expr\n\nAssign value to variable. LET keyword is optional.",
    "DIM": "**DIM** array(size) [, array2(size), ...]\n\nDeclare array dimensions. Arrays are 0-indexed by default.",
    "SWAP": "**SWAP** var1, var2\n\nExchange values of two variables.",

    # String functions
    "CHR": "**CHR$(n)**\n\nReturns the character with ASCII code n.\n\nExample: `CHR$(65)` returns `\"A\"`",
    "ASC": "**ASC(string$)**\n\nReturns the ASCII code of the first character.\n\nExample: `ASC(\"A\")` returns `65`",
    "LEN": "**LEN(string$)**\n\nReturns the length of the string.\n\nExample: `LEN(\"Hello\")` returns `5`",
    "LEFT": "**LEFT$(string$, n)**\n\nReturns the leftmost n characters.\n\nExample: `LEFT$(\"Hello\", 2)` returns `\"He\"`",
    "RIGHT": "**RIGHT$(string$, n)**\n\nReturns the rightmost n characters.\n\nExample: `RIGHT$(\"Hello\", 2)` returns `\"lo\"`",
    "MID": "**MID$(string$, start [, length])**\n\nReturns substring starting at position start (1-based).\n\nExample: `MID$(\"Hello\", 2, 3)` returns `\"ell\"`",
    "STR": "**STR$(n)**\n\nConverts number to string.\n\nExample: `STR$(42)` returns `\" 42\"` (with leading space for positive)",
    "VAL": "**VAL(string$)**\n\nConverts string to number.\n\nExample: `VAL(\"3.14\")` returns `3.14`",
    "STRING": "**STRING$(n, char)**\n\nReturns string of n copies of character.\n\nExample: `STRING$(5, 42)` returns `\"*****\"`",
    "SPACE": "**SPACE$(n)**\n\nReturns string of n spaces.\n\nExample: `SPACE$(5)` returns `\"     \"`",
    "INSTR": "**INSTR([start,] string1$, string2$)**\n\nReturns position of string2$ in string1$ (1-based, 0 if not found).\n\nExample: `INSTR(\"Hello\", \"ll\")` returns `3`",
    "UCASE": "**UCASE$(string$)**\n\nConverts string to uppercase.\n\nExample: `UCASE$(\"Hello\")` returns `\"HELLO\"`",
    "LCASE": "**LCASE$(string$)**\n\nConverts string to lowercase.\n\nExample: `LCASE$(\"Hello\")` returns `\"hello\"`",
    "LTRIM": "**LTRIM$(string$)**\n\nRemoves leading spaces.\n\nExample: `LTRIM$(\"  Hi\")` returns `\"Hi\"`",
    "RTRIM": "**RTRIM$(string$)**\n\nRemoves trailing spaces.",
    "HEX": "**HEX$(n)**\n\nReturns hexadecimal representation of number.\n\nExample: `HEX$(255)` returns `\"FF\"`",
    "OCT": "**OCT$(n)**\n\nReturns octal representation of number.",

    # Math functions
    "ABS": "**ABS(n)**\n\nReturns absolute value.\n\nExample: `ABS(-5)` returns `5`",
    "SGN": "**SGN(n)**\n\nReturns sign: -1 if negative, 0 if zero, 1 if positive.",
    "INT": "**INT(n)**\n\nReturns largest integer not greater than n (floor).\n\nExample: `INT(3.7)` returns `3`, `INT(-3.7)` returns `-4`",
    "FIX": "**FIX(n)**\n\nReturns integer part (truncates toward zero).\n\nExample: `FIX(-3.7)` returns `-3`",
    "CINT": "**CINT(n)**\n\nConverts to integer with rounding.",
    "SQR": "**SQR(n)**\n\nReturns square root.\n\nExample: `SQR(16)` returns `4`",
    "SIN": "**SIN(n)**\n\nReturns sine of angle in radians.",
    "COS": "**COS(n)**\n\nReturns cosine of angle in radians.",
    "TAN": "**TAN(n)**\n\nReturns tangent of angle in radians.",
    "ATN": "**ATN(n)**\n\nReturns arctangent in radians.",
    "LOG": "**LOG(n)**\n\nReturns natural logarithm (base e).",
    "EXP": "**EXP(n)**\n\nReturns e raised to the power n.",
    "RND": "**RND** [(n)]\n\nReturns random number between 0 and 1.\n\nUse `RANDOMIZE` to seed the generator.",
    "RANDOMIZE": "**RANDOMIZE** [seed]\n\nSeed the random number generator. Without argument, uses system time.",

    # System
    "INKEY": "**INKEY$**\n\nReturns key pressed (empty string if none). Non-blocking keyboard input.",
    "TAB": "**TAB(n)**\n\nMove to column n in PRINT statement.",
    "SPC": "**SPC(n)**\n\nOutput n spaces in PRINT statement.",
    "TIMER": "**TIMER**\n\nReturns seconds since midnight as floating-point number.",
    "DATE": "**DATE$**\n\nReturns current date as string.",
    "TIME": "**TIME$**\n\nReturns current time as string.",
    "EOF": "**EOF(n)**\n\nReturns -1 (true) if end of file reached on file #n.",
    "PEEK": "**PEEK(address)**\n\nReturns byte value at memory address.",
    "INP": "**INP(port)**\n\nReturns byte read from I/O port.",
    "FRE": "**FRE(x)**\n\nReturns bytes of free memory. A string argument forces garbage collection first.",
    "VARPTR": "**VARPTR(variable)**\n\nReturns memory address of variable. **VARPTR$** returns a 3-byte pointer string for PLAY and DRAW.",
    "SADD": "**SADD(string$)**\n\nReturns address of string data.",
    "LOC": "**LOC(n)**\n\nReturns current position in file #n.",
    "LOF": "**LOF(n)**\n\nReturns length of file #n in bytes.",
    "POKE": "**POKE** address, value\n\nWrite byte value to memory address.",
    "POINT": "**POINT(x, y)**\n\nReturns color of pixel at coordinates.",

    # Screen and graphics
    "SCREEN": "**SCREEN** mode [, colorswitch]\n\nSet graphics mode. Mode 0 is text, higher modes are graphics.",
    "COLOR": "**COLOR** foreground [, background [, border]]\n\nSet text or graphics colors.",
    "CLS": "**CLS**\n\nClear screen.",
    "LOCATE": "**LOCATE** row, col [, cursor]\n\nPosition text cursor. Row and column are 1-based.",
    "CIRCLE": "**CIRCLE** (x, y), radius [, color]\n\nDraw circle centered at (x, y).",
    "PAINT": "**PAINT** (x, y) [, color [, border]]\n\nFlood fill starting at (x, y).",
    "PSET": "**PSET** (x, y) [, color]\n\nSet pixel at coordinates.",
    "PRESET": "**PRESET** (x, y)\n\nReset pixel at coordinates to background color.",
    "GET": "**GET** (x1, y1)-(x2, y2), array\n\nCapture screen rectangle into array (sprite capture).",
    "PUT": "**PUT** (x, y), array\n\nDraw array contents at position (sprite draw).",
    "DRAW": "**DRAW** command$\n\nTurtle graphics. Commands: U/D/L/R (move), M (move to), C (color), etc.",
    "PLAY": "**PLAY** music$\n\nPlay music notation. Notes: A-G, O (octave), L (length), T (tempo).",
    "SOUND": "**SOUND** frequency, duration\n\nPlay tone at frequency (Hz) for duration.",
    "BEEP": "**BEEP**\n\nPlay system beep sound.",
    "WIDTH": "**WIDTH** columns\n\nSet screen width (40 or 80 columns typically).",

    # Files
    "OPEN": "**OPEN** filename$ **FOR** mode **AS** #n\n\nOpen file. Modes: INPUT, OUTPUT, APPEND.",
    "CLOSE": "**CLOSE** [#n]\n\nClose file. Without argument, closes all files.",
    "KILL": "**KILL** filename$\n\nDelete file.",
    "NAME": "**NAME** oldname$ **AS** newname$\n\nRename file.",
    "FILES": "**FILES** [pattern$]\n\nList files matching pattern.",
    "MKDIR": "**MKDIR** dirname$\n\nCreate directory.",
    "RMDIR": "**RMDIR** dirname$\n\nRemove directory.",
    "CHDIR": "**CHDIR** dirname$\n\nChange current directory.",

    # Operators
    "AND": "**AND**\n\nLogical AND operator. Returns true if both operands are true.\n\nExample: `IF A > 0 AND B > 0 THEN ...`",
    "OR": "**OR**\n\nLogical OR operator. Returns true if either operand is true.\n\nExample: `IF A = 1 OR A = 2 THEN ...`",
    "XOR": "**XOR**\n\nLogical exclusive OR. Returns true if operands differ.",
    "NOT": "**NOT**\n\nLogical NOT operator. Inverts boolean value.\n\nExample: `IF NOT EOF(1) THEN ...`",
    "MOD": "**MOD**\n\nModulo operator. Returns remainder of integer division.\n\nExample: `10 MOD 3` returns `1`",

    # Error handling
    "ERROR": "**ON ERROR GOTO** line\n\nSet error trap. When error occurs, jumps to specified line.",
    "RESUME": "**RESUME** [line | **NEXT**]\n\nContinue after error. RESUME retries, RESUME NEXT continues, RESUME line jumps.",

    # Misc
    "REM": "**REM** comment\n\nComment. Everything after REM is ignored.",
    "DEF": "**DEF FN**name(params) = expression\n\nDefine user function.\n\nExample: `DEF FNSQUARE(X) = X * X`",
    "FN": "**FN**name(args)\n\nCall user-defined function.\n\nExample: `Y = FNSQUARE(5)`",
    "CLEAR": "**CLEAR**\n\nClear all variables and reset program state.",
    "CHAIN": "**CHAIN** filename$ [, line]\n\nLoad and run another BASIC program.",
    "KEY": "**KEY ON** | **KEY OFF** | **KEY LIST** | **KEY** n, text$ | **KEY(**n**) ON**|**OFF**|**STOP**\n\nControl function key display, assignments and trapping.",
    "OPTION": "**OPTION BASE** n\n\nSet lowest array subscript to 0 or 1.",
    "ERASE": "**ERASE** array [, array2, ...]\n\nRemove arrays from memory so they can be dimensioned again.",
    "TRON": "**TRON**\n\nTurn on line number tracing.",
    "TROFF": "**TROFF**\n\nTurn off line number tracing.",
    "VIEW": "**VIEW** [[**SCREEN**] (x1, y1)-(x2, y2) [, fill [, border]]] | **VIEW PRINT** [top **TO** bottom]\n\nSet graphics viewport or text scrolling region.",
    "WINDOW": "**WINDOW** [[**SCREEN**] (x1, y1)-(x2, y2)]\n\nSet logical coordinates for graphics.",
}


def is_keyword(word: str) -> bool:
    return word.upper() in KEYWORDS


def is_function(word: str) -> bool:
    return word.upper() in FUNCTIONS


def is_reserved(word: str) -> bool:
    """Keywords and built-in functions; anything else is a variable"""
    upper = word.upper()
    return upper in KEYWORDS or upper in FUNCTIONS


def documentation(word: str) -> Optional[str]:
    return HOVER_DOCS.get(word.upper().rstrip("$"))
