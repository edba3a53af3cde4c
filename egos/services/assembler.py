from __future__ import annotations

from egos.domain.options import ProgramOptions
from egos.domain.templates import select_template
from egos.services.imports import (
    excluding,
    parse_imports,
    render_import_block,
)

_SNIPPET_WHITESPACE = "\t\n\v\f\r "


def assemble(
    snippet: str,
    import_spec: str = "",
    line_mode: bool = False,
    print_mode: bool = False,
) -> str:
    """Wrap ``snippet`` in a complete Go program. No validation happens here."""
    template = select_template(line_mode, print_mode)
    clauses = parse_imports(import_spec, excluding(template.builtins))
    return template.render(
        body=snippet.strip(_SNIPPET_WHITESPACE),
        imports=render_import_block(clauses),
    )


def assemble_for(snippet: str, options: ProgramOptions) -> str:
    return assemble(
        snippet,
        options.imports,
        line_mode=options.line_mode,
        print_mode=options.print_mode,
    )
