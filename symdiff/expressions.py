"""Symbolic expressions with simplifying construction and differentiation."""
from functools import singledispatch
import numbers


def _as_expression(value):
    """Promote a plain integer to a :class:`Const`."""
    if isinstance(value, Expression):
        return value
    return Const(value)


def _is_const(expr, value=None):
    if not isinstance(expr, Const):
        return False
    return value is None or expr.value == value


class Expression:
    """Base class for all expression nodes.

    Expressions are immutable trees. Arithmetic on them goes through
    :func:`add`, :func:`sub`, :func:`mul` and :func:`div`, which fold
    trivial identities instead of always building a new node.
    """

    __slots__ = ("_operands", "_hash")

    def __init__(self, *operands):
        self._operands = operands
        self._hash = hash(self._key())

    @property
    def operands(self):
        return self._operands

    def _key(self):
        # Operand hashes are cached, so hashing never walks the subtree.
        return (type(self).__name__, self._operands)

    def __eq__(self, other):
        if not isinstance(other, Expression):
            return NotImplemented
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return self._hash

    def __repr__(self):
        operands = ", ".join(repr(o) for o in self.operands)
        return f"{type(self).__name__}({operands})"

    def __str__(self):
        return postvisitor(self, render)

    def __add__(self, other):
        return add(self, _as_expression(other))

    def __sub__(self, other):
        return sub(self, _as_expression(other))

    def __mul__(self, other):
        return mul(self, _as_expression(other))

    def __truediv__(self, other):
        return div(self, _as_expression(other))

    def __pow__(self, other):
        return self.pow(other)

    def __radd__(self, other):
        return add(_as_expression(other), self)

    def __rsub__(self, other):
        return sub(_as_expression(other), self)

    def __rmul__(self, other):
        return mul(_as_expression(other), self)

    def __rtruediv__(self, other):
        return div(_as_expression(other), self)

    def __rpow__(self, other):
        return _as_expression(other).pow(self)

    def __neg__(self):
        return Neg(self)

    def pow(self, exponent):
        """Raise to ``exponent`` without any simplification."""
        return Pow(self, _as_expression(exponent))

    def exp(self):
        return Exp(self)

    def diff(self, var):
        """Return the derivative of this expression with respect to var."""
        return diff(self, var)


class Terminal(Expression):
    """Base class for terminal nodes (values with no operands)."""

    __slots__ = ("_value",)

    def __init__(self, value):
        self._value = value
        super().__init__()

    @property
    def value(self):
        return self._value

    def _key(self):
        return (type(self).__name__, self._value)

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


class Const(Terminal):
    """Terminal node representing an integer constant."""

    __slots__ = ()

    def __init__(self, value):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ValueError(f"Const value must be an integer, not {value!r}")
        super().__init__(int(value))


class Variable(Terminal):
    """Terminal node representing a named variable."""

    __slots__ = ()

    def __init__(self, value):
        if not isinstance(value, str) or not value:
            raise ValueError(
                f"Variable name must be a non-empty string, not {value!r}"
            )
        super().__init__(value)

    @property
    def name(self):
        return self.value


class Operator(Expression):
    """Base class for all operator nodes."""

    __slots__ = ()

    symbol = None
    arity = 2

    def __init__(self, *operands):
        if len(operands) != self.arity:
            raise ValueError(
                f"{type(self).__name__} takes {self.arity} operand(s), "
                f"got {len(operands)}"
            )
        for operand in operands:
            if not isinstance(operand, Expression):
                raise ValueError(
                    f"{type(self).__name__} operands must be expressions, "
                    f"not {operand!r}"
                )
        super().__init__(*operands)


class Add(Operator):
    __slots__ = ()

    symbol = '+'


class Sub(Operator):
    __slots__ = ()

    symbol = '-'


class Mul(Operator):
    __slots__ = ()

    symbol = '*'


class Div(Operator):
    __slots__ = ()

    symbol = '/'


class Pow(Operator):
    __slots__ = ()

    symbol = '**'


class Neg(Operator):
    __slots__ = ()

    symbol = '-'
    arity = 1


class Exp(Operator):
    __slots__ = ()

    symbol = 'exp'
    arity = 1


def exp(expr):
    """Return the natural exponential of ``expr``."""
    return Exp(_as_expression(expr))


# Simplifying builders. Only the two immediate operands are inspected and
# the first matching rule wins.

def add(lhs, rhs):
    """Build ``lhs + rhs``, folding zeros and constant pairs."""
    if _is_const(lhs, 0):
        return rhs
    if _is_const(lhs) and _is_const(rhs):
        return Const(lhs.value + rhs.value)
    if _is_const(rhs, 0):
        return lhs
    return Add(lhs, rhs)


def sub(lhs, rhs):
    """Build ``lhs - rhs``, folding zeros and constant pairs."""
    if _is_const(lhs, 0):
        if _is_const(rhs):
            return Const(-rhs.value)
        return Neg(rhs)
    if _is_const(lhs) and _is_const(rhs):
        return Const(lhs.value - rhs.value)
    if _is_const(rhs, 0):
        return lhs
    return Sub(lhs, rhs)


def mul(lhs, rhs):
    """Build ``lhs * rhs``, folding zeros, ones and constant pairs."""
    if _is_const(lhs, 0):
        return Const(0)
    if _is_const(lhs, 1):
        return rhs
    if _is_const(lhs) and _is_const(rhs):
        return Const(lhs.value * rhs.value)
    if _is_const(rhs, 0):
        return Const(0)
    if _is_const(rhs, 1):
        return lhs
    return Mul(lhs, rhs)


def div(numerator, denominator):
    """Build ``numerator / denominator``. Division is never simplified."""
    return Div(numerator, denominator)


def postvisitor(expr, fn, **kwargs):
    '''Visit an Expression in postorder applying a function to every node.

    Parameters
    ----------
    expr: Expression
        The expression to be visited.
    fn: function(node, *o, **kwargs)
        A function to be applied at each node. The function should take the
        node to be visited as its first argument, and the results of visiting
        its operands as any further positional arguments. Any additional
        information that the visitor requires can be passed in as keyword
        arguments.
    **kwargs:
        Any additional keyword arguments to be passed to fn.

    Returns
    -------
    The result of applying fn to the expression and its visited operands.
    '''
    # Keyed by node identity. The tree keeps every node alive, so ids are
    # not reused during the traversal.
    visited = {}
    stack = [(expr, False)]

    while stack:
        node, processed = stack.pop()

        if id(node) in visited:
            continue

        if processed:
            operand_results = tuple(visited[id(c)] for c in node.operands)
            visited[id(node)] = fn(node, *operand_results, **kwargs)
        else:
            stack.append((node, True))
            # Reversed so that operands are processed left to right.
            for child in reversed(node.operands):
                if id(child) not in visited:
                    stack.append((child, False))

    return visited[id(expr)]


def diff(expr, var):
    """Differentiate ``expr`` with respect to the variable ``var``.

    Parameters
    ----------
    expr: Expression
        The expression to differentiate.
    var: str or Variable
        The variable of differentiation.

    Returns
    -------
    Expression
        The derivative, simplified only as far as the builders simplify.
    """
    if isinstance(var, Variable):
        var = var.name
    if not isinstance(var, str) or not var:
        raise ValueError(f"Cannot differentiate with respect to {var!r}")
    return postvisitor(expr, differentiate, var=var)


# Differentiation rules. Each rule receives the node and the derivatives of
# its operands.
@singledispatch
def differentiate(expr, *o, var):
    """Differentiate a single node given the derivatives of its operands."""
    raise NotImplementedError(
        f"Cannot differentiate a {type(expr).__name__}"
    )


@differentiate.register(Const)
def _(expr, *o, var):
    return Const(0)


@differentiate.register(Variable)
def _(expr, *o, var):
    return Const(1) if expr.name == var else Const(0)


@differentiate.register(Add)
def _(expr, df, dg, *, var):
    return df + dg


@differentiate.register(Sub)
def _(expr, df, dg, *, var):
    return df - dg


@differentiate.register(Mul)
def _(expr, df, dg, *, var):
    f, g = expr.operands
    return df * g + f * dg


@differentiate.register(Div)
def _(expr, df, dg, *, var):
    f, g = expr.operands
    return (g * df - f * dg) / g.pow(Const(2))


@differentiate.register(Pow)
def _(expr, dbase, dexponent, *, var):
    # The exponent is treated as constant with respect to var.
    base, exponent = expr.operands
    return dbase * exponent * base.pow(exponent - Const(1))


@differentiate.register(Neg)
def _(expr, du, *, var):
    return Neg(du)


@differentiate.register(Exp)
def _(expr, du, *, var):
    return du * expr


@singledispatch
def render(expr, *o):
    """Render a single node given the rendered text of its operands."""
    raise NotImplementedError(f"Cannot render a {type(expr).__name__}")


@render.register(Terminal)
def _(expr, *o):
    return str(expr.value)


@render.register(Add)
@render.register(Sub)
def _(expr, lhs, rhs):
    return f"({lhs} {expr.symbol} {rhs})"


@render.register(Mul)
@render.register(Div)
def _(expr, lhs, rhs):
    return f"{lhs}{expr.symbol}{rhs}"


@render.register(Pow)
def _(expr, base, exponent):
    return f"({base}){expr.symbol}{exponent}"


@render.register(Neg)
def _(expr, operand):
    return f"{expr.symbol}{operand}"


@render.register(Exp)
def _(expr, operand):
    return f"{expr.symbol}({operand})"
