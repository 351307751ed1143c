"""Print a few sample expressions together with their derivatives."""
import argparse
import logging

from .expressions import Variable, diff, exp

logger = logging.getLogger(__name__)


def sample_expressions():
    a = Variable('a')
    b = Variable('b')
    x = Variable('x')
    y = Variable('y')
    return [
        a + b,
        x ** 3,
        exp(x + 3),
        x * y,
        (x + 1) / x,
        -(x * x),
        3 * x ** 2 - 2 * x + 7,
    ]


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="symdiff",
        description="Differentiate sample expressions symbolically."
    )
    p.add_argument("var", nargs="?", default="x",
                   help="Variable to differentiate with respect to")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Enable debug logging")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s"
    )

    for expr in sample_expressions():
        logger.debug("Differentiating %r with respect to %s", expr, args.var)
        print(f"d/d{args.var} {expr} = {diff(expr, args.var)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
