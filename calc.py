#! /bin/env python3

from Calculator import Calculator
from ExprParser import ParseDebug
from TreeVis import TreeVis
from Errors import CalcError

import argparse
import os
import sys
from typing import List, Tuple


def getArgs(argv: List[str] = None):
    parser = argparse.ArgumentParser(description="Integer expression calculator")
    parser.add_argument("-e", dest="exprs", type=str, action="append",
                        default=[], help="expression to evaluate (repeatable)")
    parser.add_argument("-i", dest="src", type=str,
                        help="sample file, one \"expression[=expected]\" per line")
    parser.add_argument("-d", dest="debug", type=str,
                        help="debug output from the parser")
    parser.add_argument("-g", dest="graph", type=str,
                        help="directory for the dot graphs of the expressions")
    parser.add_argument("-s", dest="seed", type=int,
                        help="seed of random()")
    parser.add_argument("-v", action="store_true",
                        dest="verbose", default=False, help="verbose mode")
    args = parser.parse_args(argv)

    if not args.exprs and not args.src:
        parser.error("either -e or -i is required")
    return args


def readSamples(file: str) -> List[Tuple[str, str]]:
    samples = []
    with open(file) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            segments = line.split("=", 1)
            expected = segments[1].strip() if len(segments) > 1 else None
            samples.append((segments[0], expected))
    return samples


def run(calculator: Calculator, text: str, idx: int, args) -> int:
    try:
        tree = calculator.tree(text)
        result = calculator.evaluator.evaluate(tree)
    except CalcError as e:
        calculator.error(text, e)
        return Calculator.ERROR_RESULT

    if args.verbose:
        print(f"{text} => {tree}")

    if args.graph:
        vis = TreeVis(filename=os.path.join(args.graph, f"expr{idx}.dot"),
                      debug=args.verbose)
        vis.tree(tree, title=text)
        vis.save()

    return result


def main(argv: List[str] = None) -> int:
    # Get args
    args = getArgs(argv)
    debug = ParseDebug(file=args.debug) if args.debug else None
    calculator = Calculator(debug=debug, seed=args.seed)
    wrong = 0

    for idx, text in enumerate(args.exprs):
        print(run(calculator, text, idx, args))

    if args.src:
        samples = readSamples(args.src)
        print(f"{'Expression':>80} {'Result':>10} Expected")
        for idx, (text, expected) in enumerate(samples, len(args.exprs)):
            result = run(calculator, text, idx, args)
            if expected is None:
                print(f"{text:>80} {result:>10}")
                continue

            correct = str(result) == expected
            wrong += 0 if correct else 1
            print(f"{text:>80} {result:>10} {expected} "
                  f"{'[correct]' if correct else '[wrong]'}")

    if debug:
        debug.dump()

    return 1 if wrong else 0


if __name__ == "__main__":
    sys.exit(main())
