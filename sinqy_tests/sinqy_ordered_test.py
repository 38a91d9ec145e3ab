import random
import suite
from dgen import from_schema
from sinqy import P, OrderedEnumerable, InvalidArgumentError, UnsupportedOperationError

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

person_schema = {
    'id': ('pyint', {'min_value': 1, 'max_value': 1000}),
    'name': 'first_name',
    'age': {'_qen_provider': 'range', 'from': [18, 30]},
    'department': {'_qen_provider': 'choice', 'from': ['eng', 'sales', 'hr', 'marketing']},
}

rng = random.Random(7)
scrambled = [rng.randint(0, 50) for _ in range(300)]


@test("order_by then take yields the smallest items")
def test_order_by_take():
    assert_that(P([3, 1, 2]).order_by().take(2).to_list() == [1, 2], "smallest two")
    assert_that(P([3, 1, 2]).order_by_descending().to_list() == [3, 2, 1], "descending")
    assert_that(isinstance(P([1]).order_by(), OrderedEnumerable), "ordering type")


@test("windows match slices of a full sort")
def test_window_matches_sorted_slice():
    expected = sorted(scrambled)
    for source in (scrambled, lambda: iter(scrambled)):
        for a in (0, 1, 63, 64, 150, 299, 400):
            for b in (0, 1, 10, 65, 500):
                got = P(source).order_by().skip(a).take(b).to_list()
                assert_that(got == expected[a:a + b], f"skip {a} take {b} differs")


@test("builtin sort gives the same windows")
def test_builtin_sort_mode():
    expected = sorted(scrambled)
    got = P(scrambled).order_by().use_builtin_sort().skip(20).take(30).to_list()
    assert_that(got == expected[20:50], "builtin sort window")
    got = P(scrambled).order_by().use_builtin_sort().use_quicksort().take(5).to_list()
    assert_that(got == expected[:5], "switching back to quicksort")


@test("restrictions fold in declaration order")
def test_restriction_folding():
    numbers = [5, 1, 4, 2, 3]
    assert_that(P(numbers).order_by().take_last(2).to_list() == [4, 5], "take_last")
    assert_that(P(numbers).order_by().skip_last(2).to_list() == [1, 2, 3], "skip_last")
    assert_that(P(numbers).order_by().skip(1).take_last(2).to_list() == [4, 5], "skip then take_last")
    assert_that(P(numbers).order_by().take(3).skip(1).to_list() == [2, 3], "take then skip")
    assert_that(P(numbers).order_by().skip(1).take(3).skip_last(1).to_list() == [2, 3], "three restrictions")
    assert_that(P(numbers).order_by().skip(10).to_list() == [], "empty window")


@test("multi-key ordering with mixed directions")
def test_multi_key_ordering():
    people = from_schema(person_schema, seed=11).list(80)
    ordered = P(people).order_by(lambda p: p['department']).then_by_descending(lambda p: p['age']).then_by(
        lambda p: p['id']).to_list()
    keys = [(p['department'], -p['age'], p['id']) for p in ordered]
    assert_that(keys == sorted(keys), "keys should be in composite order")
    assert_that(len(ordered) == 80, "nothing lost")


@test("multi-key partial window")
def test_multi_key_window():
    people = from_schema(person_schema, seed=12).list(200)
    window = P(people).order_by(lambda p: p['age']).then_by(lambda p: p['name']).skip(70).take(40).to_list()
    expected = sorted((p['age'], p['name']) for p in people)[70:110]
    assert_that([(p['age'], p['name']) for p in window] == expected, "window keys match a full sort")


@test("equal keys keep a valid ordering")
def test_ties():
    pairs = [(1, 'a'), (0, 'b'), (1, 'c'), (0, 'd')] * 30
    ordered = P(pairs).order_by(lambda p: p[0]).take(100).to_list()
    assert_that([p[0] for p in ordered] == sorted(p[0] for p in pairs)[:100], "keys are ordered")


@test("count does not sort")
def test_count_without_sorting():
    calls = []
    ordering = P([3, 1, 2, 5]).order_by(lambda x: calls.append(x) or x).skip(1).take(2)
    assert_that(ordering.count() == 2, f"wrong count {ordering.count()}")
    assert_that(calls == [], "no key should be computed for count")


@test("positional access is refused, first and last still work")
def test_positional_access():
    ordering = P([3, 1, 2]).order_by()
    error = assert_raises(UnsupportedOperationError, lambda: ordering.element_at(0))
    assert_that(isinstance(error, NotImplementedError), "also a NotImplementedError")
    assert_that(not P([3, 1, 2]).order_by().can_seek, "orderings do not seek")
    assert_that(P([3, 1, 2]).order_by().first() == 1, "first")
    assert_that(P([3, 1, 2]).order_by().last() == 3, "last")
    assert_that(P([3, 1, 2]).order_by().select(lambda x: x * 2).to_list() == [2, 4, 6], "chaining after")


@test("the builder locks after consumption")
def test_builder_guard():
    ordering = P([3, 1, 2]).order_by()
    assert_that(ordering.take(2) is ordering, "builder returns itself")
    assert_that(ordering.to_list() == [1, 2], "resolved")
    assert_raises(UnsupportedOperationError, lambda: ordering.take(1))
    assert_raises(UnsupportedOperationError, lambda: ordering.then_by(lambda x: x))
    assert_raises(UnsupportedOperationError, lambda: ordering.use_builtin_sort())
    assert_that(ordering.to_list() == [1, 2], "cached result is stable")

    counted = P([3, 1, 2]).order_by()
    counted.count()
    assert_raises(UnsupportedOperationError, lambda: counted.skip(1))


@test("unseekable sources are read once")
def test_unseekable_read_once():
    pulls = []

    def source():
        for value in [4, 2, 3, 1]:
            pulls.append(value)
            yield value

    ordering = P(source).order_by().take(2)
    assert_that(ordering.count() == 2, "count")
    assert_that(ordering.to_list() == [1, 2], "sorted")
    assert_that(pulls == [4, 2, 3, 1], f"source read exactly once: {pulls}")


@test("key searches only evaluate the searched levels")
def test_key_search_cost():
    calls = {'age': 0, 'name': 0}

    def age(p):
        calls['age'] += 1
        return p[1]

    def name(p):
        calls['name'] += 1
        return p[0]

    people = [(f"p{i:03}", i % 40) for i in range(512)]
    ordering = P(people).order_by(age).then_by_descending(name)
    ordering.to_list()
    calls.update(age=0, name=0)
    found = ordering.find_by_key(7).to_list()
    assert_that(len(found) == 13 and all(p[1] == 7 for p in found), f"wrong matches: {len(found)}")
    assert_that(calls['name'] == 0, "secondary key untouched by a one-level search")
    assert_that(0 < calls['age'] <= 2 * 11, f"binary search probes only: {calls['age']}")
    names = ordering.between_keys((3, 'p083'), (3, 'p003')).select(lambda p: p[0]).to_list()
    assert_that(names == ['p083', 'p043', 'p003'], f"two-level range, second level descending: {names}")


@test("find_by_key and between_keys")
def test_key_searches():
    people = [('alice', 25), ('bob', 30), ('carol', 25), ('dave', 35), ('erin', 28)]
    by_age = P(people).order_by(lambda p: p[1])
    assert_that(sorted(by_age.find_by_key(25).select(lambda p: p[0]).to_list()) == ['alice', 'carol'], "age 25")
    assert_that(by_age.between_keys(26, 31).select(lambda p: p[0]).to_list() == ['erin', 'bob'], "ages 26-31")
    descending = P(people).order_by_descending(lambda p: p[1])
    assert_that(descending.find_by_key(35).to_list() == [('dave', 35)], "descending search")
    assert_that(descending.between_keys(30, 28).select(lambda p: p[1]).to_list() == [30, 28], "descending range")
    assert_raises(InvalidArgumentError, lambda: by_age.find_by_key(25, 'x', 'y').to_list())


@test("merge_with merges two orderings")
def test_merge_with():
    merged = P([7, 1, 4]).order_by().merge_with(P([8, 2, 3]).order_by())
    assert_that(merged.to_list() == [1, 2, 3, 4, 7, 8], f"merged: {merged.to_list()}")
    mismatched = P([1]).order_by().merge_with(P([2]).order_by_descending())
    assert_raises(InvalidArgumentError, lambda: mismatched.to_list())


if __name__ == "__main__":
    suite.run(title="sinqy ordering test suite")
