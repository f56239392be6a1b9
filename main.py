from rich.pretty import pprint

from argosy import *

verbose = BoolBinder()
jobs = IntBinder(1)


@command(arguments=[
    Argument("verbose", "v", binder=verbose, usage="print what is being done"),
])
def foo(context, operands):
    "demo tool"
    if verbose.value:
        pprint(operands)


@foo.command(arguments=[
    Argument("jobs", "j", binder=jobs, usage="number of parallel jobs", required=True),
])
def baz(context, operands):
    "build the given targets"
    pprint({"jobs": jobs.value, "targets": operands})


if __name__ == '__main__':
    invoke(Runner(foo, Syntax.GNU, shell=True, colorful=True))
