import suite
from sinqy import P, EqualityComparer, EqualityMode, InvalidArgumentError
from sinqy.types import equality_mode

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

case_insensitive = lambda a, b: a.lower() == b.lower()


@test("distinct keeps first occurrences in order")
def test_distinct():
    assert_that(P([1, 2, 2, 3]).set.distinct().to_list() == [1, 2, 3], "basic distinct")
    assert_that(P([3, 1, 3, 2, 1]).set.distinct().to_list() == [3, 1, 2], "order of first appearance")
    assert_that(P([]).set.distinct().to_list() == [], "empty")


@test("distinct with a custom comparer")
def test_distinct_custom():
    words = P(['Apple', 'apple', 'Banana', 'APPLE', 'banana'])
    assert_that(words.set.distinct(case_insensitive).to_list() == ['Apple', 'Banana'], "case-insensitive")
    unhashable = P([[1], [2], [1]])
    assert_that(unhashable.set.distinct(lambda a, b: a == b).to_list() == [[1], [2]],
                "comparer path handles unhashable items")


@test("the default comparer keeps the hash path")
def test_equality_mode_selection():
    assert_that(equality_mode(None) is EqualityMode.HASH, "no comparer hashes")
    assert_that(equality_mode(EqualityComparer.default) is EqualityMode.HASH, "plain == hashes")
    assert_that(equality_mode(EqualityComparer.exact) is EqualityMode.CUSTOM, "exact compares pairwise")
    assert_that(equality_mode(lambda a, b: a == b) is EqualityMode.CUSTOM, "other callables compare pairwise")
    numbers = P([1, 2, 2, 3])
    assert_that(numbers.set.distinct(EqualityComparer.default).to_list() == [1, 2, 3], "distinct")
    assert_that(numbers.set.intersect([2, 3], EqualityComparer.default).to_list() == [2, 2, 3], "intersect")
    assert_that(numbers.set.except_([2], EqualityComparer.default).to_list() == [1, 3], "except")
    # the hash path needs hashable items, so a list element fails inside set()
    assert_raises(TypeError, lambda: P([[1]]).set.distinct(EqualityComparer.default).to_list())


@test("default equality follows python ==")
def test_default_equality():
    assert_that(P([1, 1.0, 2]).set.distinct().to_list() == [1, 2], "1 and 1.0 are equal")
    assert_that(P([1, 1.0, 2]).set.distinct(EqualityComparer.exact).to_list() == [1, 1.0, 2],
                "exact comparer tells types apart")
    assert_that(P(['1', 1]).set.distinct().count() == 2, "no string coercion")


@test("distinct_by_hash")
def test_distinct_by_hash():
    people = P([('alice', 'nyc'), ('bob', 'la'), ('carol', 'nyc')])
    assert_that(people.set.distinct_by_hash(lambda p: p[1]).to_list() == [('alice', 'nyc'), ('bob', 'la')],
                "one per city")


@test("union, intersect and except")
def test_set_operations():
    left, right = P([1, 2, 3, 4]), [3, 4, 5, 3]
    assert_that(left.set.union(right).to_list() == [1, 2, 3, 4, 5], "union")
    assert_that(left.set.intersect(right).to_list() == [3, 4], "intersect")
    assert_that(left.set.except_(right).to_list() == [1, 2], "except")


@test("set operations with a custom comparer")
def test_set_operations_custom():
    left, right = P(['A', 'b', 'C']), ['a', 'c', 'd']
    assert_that(left.set.union(right, case_insensitive).to_list() == ['A', 'b', 'C', 'd'], "union")
    assert_that(left.set.intersect(right, case_insensitive).to_list() == ['A', 'C'], "intersect")
    assert_that(left.set.except_(right, case_insensitive).to_list() == ['b'], "except")


@test("membership by hash value")
def test_by_hash_membership():
    left = P([{'id': 1}, {'id': 2}, {'id': 3}])
    right = [{'id': 2}, {'id': 9}]
    ids = lambda r: r['id']
    assert_that(left.set.intersect_by_hash(right, ids).select(ids).to_list() == [2], "intersect by id")
    assert_that(left.set.except_by_hash(right, ids).select(ids).to_list() == [1, 3], "except by id")


@test("set operations are lazy and restartable")
def test_set_laziness():
    left = P([1, 2, 2])
    distinct = left.set.distinct()
    assert_that(not left.was_iterated, "nothing iterated yet")
    assert_that(distinct.to_list() == distinct.to_list() == [1, 2], "restartable")


@test("bad arguments are rejected")
def test_set_bad_arguments():
    assert_raises(InvalidArgumentError, lambda: P([1]).set.intersect(5))
    assert_raises(InvalidArgumentError, lambda: P([1]).set.distinct_by_hash(None))
    assert_raises(InvalidArgumentError, lambda: P([1]).set.distinct('not a function'))


if __name__ == "__main__":
    suite.run(title="sinqy set operations test suite")
