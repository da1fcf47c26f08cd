# PostfixSym SDK
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
PostfixSym Python SDK - Symbolic Math from Postfix Expressions.

This SDK builds expression trees from postfix (RPN) token streams and
lets you evaluate, simplify, differentiate and render them as text or
LaTeX.

Example:
    >>> import postfixsym as ps
    >>> ps.evaluate("4 3 / pi * r 3 ^ *", {'r': 2})
    33.510321638291124
    >>> d = ps.differentiate("x 2 ^ sin", 'x')
    >>> print(d)
    (cos((x ^ 2)) * (2 * x))

Key Features:
    - Postfix parsing into an immutable expression tree
    - Symbolic differentiation with the chain, product and quotient rules
    - Single-pass simplification with constant folding and distribution
    - Decimal cleanup to bound constants, integers and fractions
    - Plain-text and LaTeX rendering
"""

__version__ = "0.1.0"

# Core expression types and constructors
from .expr import (
    Expr,
    Literal,
    Named,
    BinaryResult,
    UnaryResult,
    Equation,
    var,
    const,
    free_vars,
    structurally_equal,
    is_simple,
    leftmost_term,
)

# Function constructors
from .functions import (
    Function,
    sin,
    cos,
    tan,
    asin,
    acos,
    atan,
    sinh,
    cosh,
    tanh,
    ln,
    log10,
    abs_,
)

# Operation rule bundles
from .operations import (
    Operation,
    ADD,
    SUBTRACT,
    MULTIPLY,
    DIVIDE,
    POWER,
)

# Symbol tables
from .symbols import OPERATIONS, FUNCTIONS

# Bindings
from .bindings import (
    Constant,
    constant,
    CONSTANTS,
    complete_bindings,
    complete_latex_mappings,
)

# Configuration
from .config import Config

# Parsing
from .parser import parse

# Evaluation and calculus
from .evaluation import has_constant_term
from .calculus import derivative, is_function_of

# Rendering
from .render import to_string

# Domains
from .domain import VariableDomain, EvaluationDomain

# Rational utilities
from .rational import approximate_fraction

# Persistence
from .persistence import to_dict, from_dict, save, load

# Engine
from .engine import (
    Engine,
    evaluate,
    can_evaluate,
    get_unknowns,
    simplify,
    clean_decimals,
    differentiate,
    to_latex,
    analytically_equals,
)

# Exceptions
from .exceptions import (
    PostfixSymError,
    MalformedExpression,
    UnboundSymbol,
    UnrecognizedOperator,
    DecimalCleanupError,
    SerializationError,
)

__all__ = [
    # Version
    "__version__",
    # Expression types
    "Expr",
    "Literal",
    "Named",
    "BinaryResult",
    "UnaryResult",
    "Equation",
    # Expression constructors
    "var",
    "const",
    "sin",
    "cos",
    "tan",
    "asin",
    "acos",
    "atan",
    "sinh",
    "cosh",
    "tanh",
    "ln",
    "log10",
    "abs_",
    # Structural helpers
    "free_vars",
    "structurally_equal",
    "is_simple",
    "leftmost_term",
    "has_constant_term",
    # Rule bundles
    "Operation",
    "Function",
    "ADD",
    "SUBTRACT",
    "MULTIPLY",
    "DIVIDE",
    "POWER",
    "OPERATIONS",
    "FUNCTIONS",
    # Bindings
    "Constant",
    "constant",
    "CONSTANTS",
    "complete_bindings",
    "complete_latex_mappings",
    # Configuration
    "Config",
    # Parsing
    "parse",
    # Calculus
    "derivative",
    "is_function_of",
    # Rendering
    "to_string",
    "to_latex",
    # Domains
    "VariableDomain",
    "EvaluationDomain",
    # Rational utilities
    "approximate_fraction",
    # Persistence
    "to_dict",
    "from_dict",
    "save",
    "load",
    # Engine
    "Engine",
    "evaluate",
    "can_evaluate",
    "get_unknowns",
    "simplify",
    "clean_decimals",
    "differentiate",
    "analytically_equals",
    # Exceptions
    "PostfixSymError",
    "MalformedExpression",
    "UnboundSymbol",
    "UnrecognizedOperator",
    "DecimalCleanupError",
    "SerializationError",
]
