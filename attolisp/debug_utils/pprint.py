from attolisp import SExpression
from attolisp.types.symbol import Symbol
from attolisp.types.value import to_lisp_string

INDENT = "  "


def _is_atomic(expr: SExpression) -> bool:
    return not isinstance(expr, list)


def _layout(expr: SExpression, indent: int, lines: list[str]) -> None:
    pad = INDENT * indent

    if _is_atomic(expr):
        lines.append(pad + to_lisp_string(expr))
        return

    if not expr:
        lines.append(pad + "()")
        return

    # Atom-only list: one line
    if all(_is_atomic(e) for e in expr):
        lines.append(pad + to_lisp_string(expr))
        return

    head = expr[0]
    if isinstance(head, Symbol):
        # Head plus its leading atomic operands on the first line
        i = 1
        while i < len(expr) and _is_atomic(expr[i]):
            i += 1
        lines.append(pad + "(" + " ".join(to_lisp_string(e) for e in expr[:i]))
        rest = expr[i:]
    else:
        lines.append(pad + "(")
        rest = expr

    for e in rest:
        _layout(e, indent + 1, lines)
    lines.append(pad + ")")


def pformat_form(expr: SExpression, indent: int = 0) -> str:
    """
    Lay a parsed form out over several lines, nesting sub-lists one level
    deeper and closing each multi-line list on its own line.

        (define (square x) (* x x))  ->  (define
                                           (square x)
                                           (* x x)
                                         )
    """
    lines: list[str] = []
    _layout(expr, indent, lines)
    return "\n".join(lines)
