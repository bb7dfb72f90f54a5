"""Registry of special forms for the AttoLisp evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
Each handler is called as handler(tail, env, evaluate_fn) with the unevaluated
operands. The evaluator consults this table before ordinary function
application; matching is by exact, case-sensitive name.
"""

from attolisp.types.symbol import Symbol
from attolisp.evaluation.special_forms.quote_forms import quote_form
from attolisp.evaluation.special_forms.if_form import if_form
from attolisp.evaluation.special_forms.logic_forms import and_form, or_form
from attolisp.evaluation.special_forms.define_form import define_form
from attolisp.evaluation.special_forms.set_form import set_form
from attolisp.evaluation.special_forms.lambda_form import lambda_form
from attolisp.evaluation.special_forms.cond_form import cond_form
from attolisp.evaluation.special_forms.let_forms import let_form, let_star_form, letrec_form

SPECIAL_FORMS = {
    Symbol("quote"): quote_form,
    Symbol("if"): if_form,
    Symbol("and"): and_form,
    Symbol("or"): or_form,
    Symbol("define"): define_form,
    Symbol("set!"): set_form,
    Symbol("lambda"): lambda_form,
    Symbol("cond"): cond_form,
    Symbol("let"): let_form,
    Symbol("let*"): let_star_form,
    Symbol("letrec"): letrec_form,
}
