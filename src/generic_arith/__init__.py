"""generic-arith public API."""

from .arithmetic import GenericArithmetic, build_arithmetic, default_arithmetic
from .arity import Arity, ArityFunction, ProcedureVector, identity, with_arity
from .arrays import matrix, vector
from .errors import (
    ArityMismatch,
    GenericArithError,
    MalformedRegistration,
    NoApplicableMethod,
    UnclassifiableOperand,
    UnknownOperation,
)
from .generic import GenericOperation
from .kinds import Kind, UserKind
from .registry import IdentityRole, Registry
from .symbolic import Expression, Symbol, substitute, symbols

_default = default_arithmetic()

add = _default.add
sub = _default.sub
mul = _default.mul
div = _default.div
negate = _default.negate
invert = _default.invert
is_negative = _default.is_negative
expt = _default.expt
quotient = _default.quotient
remainder = _default.remainder
modulo = _default.modulo
exact_divide = _default.exact_divide
gcd = _default.gcd
lcm = _default.lcm
exp = _default.exp
log = _default.log
sin = _default.sin
cos = _default.cos
tan = _default.tan
asin = _default.asin
acos = _default.acos
atan = _default.atan
sinh = _default.sinh
cosh = _default.cosh
tanh = _default.tanh
sqrt = _default.sqrt
magnitude = _default.magnitude
angle = _default.angle
real_part = _default.real_part
imag_part = _default.imag_part
conjugate = _default.conjugate
make_rectangular = _default.make_rectangular
make_polar = _default.make_polar
transpose = _default.transpose
dot_product = _default.dot_product
inner_product = _default.inner_product
outer_product = _default.outer_product
cross_product = _default.cross_product
determinant = _default.determinant
trace = _default.trace

square = _default.square
cube = _default.cube
compose = _default.compose
arity = _default.arity
arg_shift = _default.arg_shift
arg_scale = _default.arg_scale
sigma = _default.sigma

kind = _default.kind
kind_predicate = _default.kind_predicate
is_zero = _default.is_zero
is_one = _default.is_one
zero_like = _default.zero_like
one_like = _default.one_like

register_kind = _default.register_kind
register_identity = _default.register_identity
define_operation = _default.define_operation
register_method = _default.register_method
operation = _default.operation

__all__ = [
    "GenericArithmetic",
    "GenericOperation",
    "Registry",
    "IdentityRole",
    "Kind",
    "UserKind",
    "Arity",
    "ArityFunction",
    "ProcedureVector",
    "Symbol",
    "Expression",
    "build_arithmetic",
    "default_arithmetic",
    "with_arity",
    "identity",
    "symbols",
    "substitute",
    "vector",
    "matrix",
    "add",
    "sub",
    "mul",
    "div",
    "negate",
    "invert",
    "is_negative",
    "expt",
    "quotient",
    "remainder",
    "modulo",
    "exact_divide",
    "gcd",
    "lcm",
    "exp",
    "log",
    "sin",
    "cos",
    "tan",
    "asin",
    "acos",
    "atan",
    "sinh",
    "cosh",
    "tanh",
    "sqrt",
    "magnitude",
    "angle",
    "real_part",
    "imag_part",
    "conjugate",
    "make_rectangular",
    "make_polar",
    "transpose",
    "dot_product",
    "inner_product",
    "outer_product",
    "cross_product",
    "determinant",
    "trace",
    "square",
    "cube",
    "compose",
    "arity",
    "arg_shift",
    "arg_scale",
    "sigma",
    "kind",
    "kind_predicate",
    "is_zero",
    "is_one",
    "zero_like",
    "one_like",
    "register_kind",
    "register_identity",
    "define_operation",
    "register_method",
    "operation",
    "GenericArithError",
    "UnclassifiableOperand",
    "NoApplicableMethod",
    "ArityMismatch",
    "MalformedRegistration",
    "UnknownOperation",
]
