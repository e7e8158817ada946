"""
Tests for deductive support: complex attacks, d-attacks, acceptability and the closure law
"""
import itertools

import pytest

from structure.argument import Argument
from structure.argument_set import ArgumentSet
from structure.exceptions import SearchCancelledError
from structure.relations import Attack
from search.cancellation import CancellationToken
from search.subsets import powerset
from semantics.deductive import DeductiveSemantics, deductive_framework

a, b, c, d = (Argument(n) for n in "abcd")


class TestComplexAttacks:
    def test_supported_attack(self):
        f = deductive_framework()
        f.add_attack(a, b)
        f.add_support(c, a)
        assert Attack(c, b) in f.semantics.get_complex_attacks()
        assert f.semantics.is_supported_attack(c, b)
        assert f.semantics.get_supported_attacks(c) == {Attack(c, b)}

    def test_deductive_attacks_contain_supported_attack(self):
        f = deductive_framework()
        f.add_attack(a, b)
        f.add_support(c, a)
        assert Attack(c, b) in f.semantics.get_deductive_complex_attacks()

    def test_mediated_attack(self):
        f = deductive_framework()
        f.add_attack(a, b)
        f.add_support(c, b)
        assert Attack(a, c) in f.semantics.get_complex_attacks()
        assert f.semantics.is_mediated_attack(a, c)
        assert not f.semantics.is_mediated_attack(c, a)
        assert f.semantics.get_mediated_attacks(a) == {Attack(a, c)}

    def test_direct_attacks_included(self):
        f = deductive_framework()
        f.add_attack(a, b)
        assert f.semantics.get_complex_attacks() == {Attack(a, b)}
        assert f.semantics.get_deductive_complex_attacks() == {Attack(a, b)}

    def test_super_mediated_attack(self):
        # d supports a, a supports x which attacks y, c supports y
        x, y = Argument("x"), Argument("y")
        f = deductive_framework()
        f.add_support(d, a)
        f.add_support(a, x)
        f.add_attack(x, y)
        f.add_support(c, y)
        d_attacks = f.semantics.get_deductive_complex_attacks()
        assert Attack(a, y) in d_attacks
        assert Attack(a, c) in d_attacks
        assert Attack(d, y) in d_attacks
        assert f.semantics.is_super_mediated_attack(a, c)
        assert not f.semantics.is_super_mediated_attack(c, a)

    def test_complex_attacks_are_subset_of_d_attacks(self):
        f = deductive_framework().populate_random(8, 0.2, 0.2, seed=21)
        assert f.semantics.get_complex_attacks() <= f.semantics.get_deductive_complex_attacks()

    def test_cache_follows_mutation(self):
        f = deductive_framework()
        f.add_attack(a, b)
        assert f.semantics.get_deductive_complex_attacks() == {Attack(a, b)}
        f.add_support(c, a)
        assert Attack(c, b) in f.semantics.get_deductive_complex_attacks()
        f.remove(c)
        assert f.semantics.get_deductive_complex_attacks() == {Attack(a, b)}

    def test_results_are_copies(self):
        f = deductive_framework()
        f.add_attack(a, b)
        f.semantics.get_complex_attacks().clear()
        assert f.semantics.get_complex_attacks() == {Attack(a, b)}

    def test_cancelled_token_raises_on_cached_result(self):
        f = deductive_framework()
        f.add_attack(a, b)
        f.add_support(c, a)
        expected = f.semantics.get_deductive_complex_attacks()
        token = CancellationToken()
        token.cancel()
        with pytest.raises(SearchCancelledError):
            f.semantics.get_deductive_complex_attacks(token)
        with pytest.raises(SearchCancelledError):
            f.semantics.get_d_attackers(b, token)
        assert f.semantics.get_deductive_complex_attacks(CancellationToken()) == expected


class TestDeductiveAcceptability:
    def _chain(self):
        # c attacks a, a attacks b
        f = deductive_framework()
        f.add_attack(c, a)
        f.add_attack(a, b)
        return f

    def test_defended_argument(self):
        f = self._chain()
        assert f.is_acceptable(b, [c])
        assert not f.is_acceptable(b, [])
        assert f.is_acceptable(c, [])
        assert not f.is_acceptable(a, [b])

    def test_fes(self):
        f = self._chain()
        assert f.fes([]) == ArgumentSet([c])
        assert f.fes([c]) == ArgumentSet([b, c])
        assert f.fes(f.fes([c])) == ArgumentSet([b, c])

    def test_supported_attack_needs_defence(self):
        # d supports a which attacks b, c attacks d
        f = deductive_framework()
        f.add_support(d, a)
        f.add_attack(a, b)
        f.add_attack(c, d)
        assert f.semantics.get_d_attackers(b) == {a, d}
        assert not f.is_acceptable(b, [c])

    def test_conflict_free(self):
        f = self._chain()
        assert f.semantics.is_conflict_free([b, c])
        assert not f.semantics.is_conflict_free([a, b])

    def test_safe(self):
        f = deductive_framework()
        f.add_support(a, b)
        f.add_attack(c, b)
        assert not f.semantics.is_safe([a, c])
        assert f.semantics.is_safe([c])
        assert f.semantics.is_safe([a, b])


class TestDeductiveClosure:
    def test_closed_sets(self):
        f = deductive_framework()
        f.add_support(a, b)
        assert not f.is_closed([a])
        assert f.is_closed([a, b])
        assert f.is_closed([b])
        assert f.is_closed([])

    def test_closure_law(self):
        f = deductive_framework().populate_random(6, 0.1, 0.3, seed=13)
        for ext in powerset(f):
            expected = all(f.get_direct_supported(x) <= set(ext) for x in ext)
            assert f.is_closed(ext) == expected

    def test_semantics_is_composed(self):
        f = deductive_framework()
        assert isinstance(f.semantics, DeductiveSemantics)
        assert f.variant.sentinel is None
        assert f.sentinel is None
        assert list(itertools.islice(f, 1)) == []
