"""
Argosy fakes for unit-testing host applications.

Each fake implements one capability by delegating to a plain function, so a
test can observe or script the engine's calls without building real binders,
renderers or command trees.

    >>> seen = []
    >>> fake = FakeBinder(lambda arg, value: seen.append((arg, value)))
    >>> fake.bind("--name", "value")
    >>> seen
    [('--name', 'value')]
"""
from .binders import Binder
from .commands import Helper
from .runner import Runner


class FakeBinder(Binder):
    """
    Binder calling 'fake_bind(arg, value)'; calls are recorded in .calls.
    """

    def __init__(self, fake_bind=None, /, *, boolean=False):
        super().__init__()
        self.fake_bind = fake_bind
        self.boolean = bool(boolean)
        self.calls = []

    def bind(self, arg, value, /):
        self.calls.append((arg, value))
        if self.fake_bind is not None:
            self.value = self.fake_bind(arg, value)


class FakeHelper(Helper):
    """
    Helper returning 'fake_render(route, syntax)' (an empty string by default).
    """

    def __init__(self, fake_render=None, /):
        self.fake_render = fake_render
        self.calls = []

    def render(self, route, syntax, /):
        self.calls.append((tuple(route), syntax))
        if self.fake_render is None:
            return ""
        return self.fake_render(route, syntax)


class FakeRunner(Runner):
    """
    Runner whose run() is replaced by 'fake_run(argv, context)'.

    The root is still validated, so the fake can be handed to invoke().
    """

    def __init__(self, root, fake_run=None, /, **options):
        super().__init__(root, **options)
        self.fake_run = fake_run
        self.calls = []

    def run(self, argv, /, context=None):
        self.calls.append(list(argv))
        if self.fake_run is None:
            return None
        return self.fake_run(argv, context)


__all__ = (
    "FakeBinder",
    "FakeHelper",
    "FakeRunner",
)
