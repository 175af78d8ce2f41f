"""Pure lambda calculus: parsing, normal-order reduction, De Bruijn indices and Binary Lambda Calculus."""

from blcalc.evaluator import bruijn, bruijn_binary, evaluate

__version__ = "0.1.0"
