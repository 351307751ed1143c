"""Symbolic differentiation of simple arithmetic expressions."""
from .expressions import (
    Expression,
    Operator,
    Terminal,
    Const,
    Variable,
    Add,
    Sub,
    Mul,
    Div,
    Pow,
    Neg,
    Exp,
    exp,
    add,
    sub,
    mul,
    div,
    diff,
    differentiate,
    render,
    postvisitor
)

__all__ = [
    'Expression',
    'Operator',
    'Terminal',
    'Const',
    'Variable',
    'Add',
    'Sub',
    'Mul',
    'Div',
    'Pow',
    'Neg',
    'Exp',
    'exp',
    'add',
    'sub',
    'mul',
    'div',
    'diff',
    'differentiate',
    'render',
    'postvisitor'
]
