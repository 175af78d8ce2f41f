"""Named combinators available to the surface syntax (see lang/surface.py). Definitions are written in surface syntax
and may refer to each other and to numerals; they are resolved on first use.

Sources: https://en.wikipedia.org/wiki/Church_encoding,
         https://en.wikipedia.org/wiki/Lambda_calculus#Logic_and_predicates
"""

COMBINATORS = {
    "id": "λx.x",

    # booleans
    "true": "λx.λy.x",
    "false": "λx.λy.y",
    "and": "λa.λb.a b a",
    "or": "λa.λb.a a b",
    "not": "λa.a false true",

    # pairs
    "pair": "λa.λb.λf.f a b",
    "first": "λp.p true",
    "second": "λp.p false",

    # arithmetic on Church numerals
    "succ": "λn.λf.λx.f (n f x)",
    "add": "λm.λn.λf.λx.m f (n f x)",
    "mult": "λm.λn.λf.m (n f)",
    "pow": "λm.λn.n m",
    "pred": "λn.λf.λx.n (λg.λh.h (g f)) (λu.x) (λu.u)",
    "sub": "λm.λn.n pred m",
    "iszero": "λn.n (λx.false) true",
}
