import suite
from sinqy import P, NO_VALUE, InvalidArgumentError

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises


def unseekable(values):
    return P(lambda: iter(values))


# --- zip ---

@test("zip_with stops at the shorter sequence")
def test_zip_with():
    assert_that(P([1, 2, 3]).zip.zip_with(['a', 'b']).to_list() == [(1, 'a'), (2, 'b')], "default tuples")
    summed = P([1, 2]).zip.zip_with([10, 20], lambda a, b: a + b).to_list()
    assert_that(summed == [11, 22], "zipper")
    indexed = P(['x', 'y']).zip.zip_with(['p', 'q'], lambda a, b, i: f"{a}{b}{i}").to_list()
    assert_that(indexed == ['xp0', 'yq1'], f"index passed to zipper: {indexed}")


@test("lag and lead")
def test_lag_lead():
    for numbers in (P([1, 2, 3]), unseekable([1, 2, 3])):
        assert_that(numbers.zip.lag().to_list() == [(1, None), (2, 1), (3, 2)], "lag 1")
        assert_that(numbers.zip.lead().to_list() == [(1, 2), (2, 3), (3, None)], "lead 1")
        assert_that(numbers.zip.lag(2).to_list() == [(1, None), (2, None), (3, 1)], "lag 2")
        assert_that(numbers.zip.lead(2, lambda a, b: b).to_list() == [3, None, None], "lead 2 zipper")
        assert_that(numbers.zip.lag().count() == 3, "count propagates")


@test("lag and lead seek when the source does")
def test_lag_lead_seek():
    source = P(list(range(10)))
    lagged = source.zip.lag(3)
    assert_that(lagged.can_seek, "seekable")
    assert_that(lagged.element_at(5) == (5, 2), "partner three back")
    assert_that(source.zip.lead(3).element_at(8) == (8, None), "partner past the end")
    assert_that(not source.was_iterated, "no iteration")
    assert_raises(InvalidArgumentError, lambda: source.zip.lag(0))
    assert_raises(InvalidArgumentError, lambda: source.zip.lead(-1))


# --- randomness ---

@test("shuffle is a seeded permutation")
def test_shuffle():
    numbers = P(range(50))
    first = numbers.util.shuffle(random_state=42).to_list()
    second = numbers.util.shuffle(random_state=42).to_list()
    assert_that(first == second, "same seed, same order")
    assert_that(sorted(first) == list(range(50)), "a permutation")
    assert_that(first != list(range(50)), "actually shuffled")
    assert_that(numbers.util.shuffle().count() == 50, "count propagates")
    assert_that(not numbers.util.shuffle().can_seek, "shuffle does not seek")


@test("random_sample on seekable and unseekable sources")
def test_random_sample():
    for numbers in (P(range(100)), unseekable(list(range(100)))):
        sample = numbers.util.random_sample(10, random_state=3).to_list()
        assert_that(len(sample) == 10 and len(set(sample)) == 10, f"ten distinct items: {sample}")
        assert_that(all(0 <= x < 100 for x in sample), "items from the source")
        again = numbers.util.random_sample(10, random_state=3).to_list()
        assert_that(sample == again, "seeded samples repeat")
        limited = numbers.util.random_sample(5, limit=8, random_state=1).to_list()
        assert_that(len(limited) == 5 and all(x < 8 for x in limited), f"only the first 8: {limited}")


@test("random_sample edge cases")
def test_random_sample_edges():
    assert_that(sorted(P([3, 1, 2]).util.random_sample(10).to_list()) == [1, 2, 3], "k above length")
    assert_that(P([1, 2]).util.random_sample(0).to_list() == [], "k of zero")
    assert_raises(InvalidArgumentError, lambda: P([1]).util.random_sample(-1))
    source = P([1, 2, 3])
    source.util.random_sample(2)
    assert_that(not source.was_iterated, "sampling is lazy")


# --- padding ---

@test("pad_end and pad_start")
def test_padding():
    for numbers in (P([1, 2]), unseekable([1, 2])):
        assert_that(numbers.util.pad_end(4, 0).to_list() == [1, 2, 0, 0], "pad end")
        assert_that(numbers.util.pad_start(4, 0).to_list() == [0, 0, 1, 2], "pad start")
        assert_that(numbers.util.pad_end(1, 0).to_list() == [1, 2], "already long enough")
        assert_that(numbers.util.pad_end(3, lambda i: i * 10).to_list() == [1, 2, 20], "filler by position")
        assert_that(numbers.util.pad_start(4).count() == 4, "count")
    assert_that(P([1, 2]).util.pad_start(4, 0).element_at(3) == 2, "pad_start seeks")
    assert_that(P([1, 2]).util.pad_end(4, 9).element_at(3) == 9, "pad_end seeks")
    assert_raises(InvalidArgumentError, lambda: P([1]).util.pad_end(0))
    assert_raises(InvalidArgumentError, lambda: P([1]).util.pad_start(-2))


# --- searching and plumbing ---

@test("binary_search finds positions in sorted input")
def test_binary_search():
    numbers = P([1, 3, 5, 7, 9, 11])
    assert_that(numbers.util.binary_search(7) == 3, "found")
    assert_that(numbers.util.binary_search(4) is NO_VALUE, "missing")
    assert_that(P([]).util.binary_search(1) is NO_VALUE, "empty")
    assert_that(unseekable([2, 4, 6]).util.binary_search(6) == 2, "unseekable input")
    descending = P([9, 5, 1])
    assert_that(descending.util.binary_search(1, lambda a, b: (b > a) - (b < a)) == 2, "custom comparer")


@test("side_effect is lazy, for_each is eager")
def test_side_effects():
    seen = []
    tapped = P([1, 2, 3]).util.side_effect(seen.append)
    assert_that(seen == [], "nothing until consumed")
    assert_that(tapped.to_list() == [1, 2, 3], "items pass through")
    assert_that(seen == [1, 2, 3], "tapped every item")

    visited = []
    numbers = P([4, 5])
    assert_that(numbers.util.for_each(visited.append) is numbers, "for_each returns the source")
    assert_that(visited == [4, 5], "ran immediately")


@test("pipe hands the enumerable to a function")
def test_pipe():
    total = P([1, 2, 3]).util.pipe(lambda e, offset: e.count() + offset, 10)
    assert_that(total == 13, f"piped result: {total}")


if __name__ == "__main__":
    suite.run(title="sinqy utility and zip test suite")
