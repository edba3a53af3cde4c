from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from egos.core.errors import UsageError

HEADER = "// generated by egos(1)"

_WHOLE_PROGRAM = """%(header)s
package main

import (
\t"fmt"
\t"os"
)

%(imports)s

var (
\t_ = fmt.Println
\t_ = os.Exit
)

func main() {
%(body)s
}
"""

_LINE_FILTER = """%(header)s
package main

import (
\t"bufio"
\t"fmt"
\t"os"
)

%(imports)s

func fn(line string) {
%(body)s%(appendage)s
}

func doIt(in *os.File) {
\tscanner := bufio.NewScanner(in)
\tfor scanner.Scan() {
\t\tfn(scanner.Text())
\t}
}

func main() {
\targc := len(os.Args)
\tif argc <= 1 {
\t\tdoIt(os.Stdin)
\t} else {
\t\tfor i := 1; i < argc; i++ {
\t\t\tinfile := os.Args[i]
\t\t\tif infile == "-" {
\t\t\t\tdoIt(os.Stdin)
\t\t\t} else {
\t\t\t\tin, err := os.Open(infile)
\t\t\t\tif err != nil {
\t\t\t\t\tfmt.Fprintln(os.Stderr, err)
\t\t\t\t} else {
\t\t\t\t\tdoIt(in)
\t\t\t\t\tin.Close()
\t\t\t\t}
\t\t\t}
\t\t}
\t}
}
"""

ECHO_APPENDAGE = "\nfmt.Println(line)"


@dataclass(frozen=True)
class WholeProgram:
    """The snippet is the entire body of ``main``."""

    builtins: tuple[str, ...] = ("fmt", "os")

    def render(self, body: str, imports: str) -> str:
        return _WHOLE_PROGRAM % {
            "header": HEADER,
            "imports": imports,
            "body": body,
        }


@dataclass(frozen=True)
class LineFilter:
    """The snippet runs once per input line, bound to ``line``.

    With ``echo`` the (possibly reassigned) line is printed after the
    snippet, like ``sed`` without ``-n``.
    """

    echo: bool = False
    builtins: tuple[str, ...] = ("bufio", "fmt", "os")

    def render(self, body: str, imports: str) -> str:
        return _LINE_FILTER % {
            "header": HEADER,
            "imports": imports,
            "body": body,
            "appendage": ECHO_APPENDAGE if self.echo else "",
        }


ProgramTemplate = Union[WholeProgram, LineFilter]


def select_template(line_mode: bool, print_mode: bool) -> ProgramTemplate:
    if line_mode and print_mode:
        raise UsageError("-n and -p are mutually exclusive")
    if line_mode:
        return LineFilter(echo=False)
    if print_mode:
        return LineFilter(echo=True)
    return WholeProgram()
