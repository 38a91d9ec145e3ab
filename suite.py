import time
import traceback
from typing import List, Any, Callable, NamedTuple, Optional, Type

PASS_FACE = '(^ ω ^)'
FAIL_FACE = '(ﾉಥДಥ)ﾉ'

OK, FAIL, INFO, GREY, RESET = '\033[92m', '\033[91m', '\033[94m', '\033[90m', '\033[0m'


class TestAssertionError(AssertionError):
    """an assert_that failure, as opposed to the code under test blowing up."""
    __test__ = False


class _Case(NamedTuple):
    description: str
    func: Callable[[], Any]


_registered: List[_Case] = []


def test(description: str) -> Callable:
    """registers a test case and hands the function back untouched, so pytest sees it too."""

    def decorator(func: Callable) -> Callable:
        _registered.append(_Case(description, func))
        return func

    return decorator


def assert_that(condition: Any, message: str = "assertion failed") -> None:
    if not condition:
        raise TestAssertionError(message)


def assert_raises(error_type: Type[BaseException], func: Callable[[], Any], message: str = "") -> BaseException:
    """runs func and checks it raises error_type. returns the caught error for further checks."""
    try:
        func()
    except error_type as e:
        return e
    except Exception as e:
        raise TestAssertionError(
            f"{message or 'wrong error'}: expected {error_type.__name__}, got {type(e).__name__}: {e}")
    raise TestAssertionError(f"{message or 'nothing raised'}: expected {error_type.__name__}")


def _outcome(case: _Case, verbose: bool) -> Optional[str]:
    """None when the case passed, otherwise a one-line reason"""
    try:
        case.func()
    except TestAssertionError as e:
        return f"assertion failed: {e}"
    except Exception as e:
        if verbose:
            traceback.print_exc()
        return f"{type(e).__name__}: {e}"
    return None


def run(title: str = "test run", verbose: bool = False) -> bool:
    """runs every registered case once, prints a report and returns whether all passed."""
    print(f"\n{INFO}--- {title} ---{RESET}")
    started = time.perf_counter()
    failures = 0

    for case in _registered:
        reason = _outcome(case, verbose)
        if reason is None:
            print(f"  {OK}✔ pass{RESET}  {PASS_FACE}  {case.description}")
        else:
            failures += 1
            print(f"  {FAIL}✖ fail{RESET}  {FAIL_FACE}  {case.description}\n    {GREY}└─> {reason}{RESET}")

    elapsed = (time.perf_counter() - started) * 1000
    colour = OK if failures == 0 else FAIL
    print(f"\n{colour}ran {len(_registered)} tests in {elapsed:.2f}ms: "
          f"{len(_registered) - failures} passed, {failures} failed{RESET}\n")

    # a script may register and run several batches
    _registered.clear()
    return failures == 0
