"""
Tests for the entity model, the relation index and the generic framework:
- Argument / ArgumentSet value semantics
- RelationIndex consistency
- BipolarFramework mutation, endpoint validation, removal cascade, derived frameworks
"""
import networkx as nx
import pytest

from structure.argument import Argument
from structure.argument_set import ArgumentSet
from structure.exceptions import (
    BipolarError,
    InvalidRelationTypeError,
    PreconditionViolationError,
    UnsupportedOperationError,
)
from structure.relation_index import RelationIndex
from structure.relations import Attack, RelationKind, Support
from semantics.deductive import deductive_framework
from semantics.evidential import evidential_framework
from semantics.necessity import necessity_framework

a, b, c, d = (Argument(n) for n in "abcd")


# ── Entity model ────────────────────────────────────────────────

class TestArgument:
    def test_identity_by_name(self):
        assert Argument("a") == a
        assert hash(Argument("a")) == hash(a)
        assert Argument("a") != b

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            Argument("")

    def test_ordering(self):
        assert sorted([c, a, b]) == [a, b, c]


class TestArgumentSet:
    def test_value_semantics(self):
        assert ArgumentSet([a, b, a]) == ArgumentSet([b, a])
        assert len(ArgumentSet([a, b, a])) == 2
        assert {ArgumentSet([a, b]): 1}[ArgumentSet([b, a])] == 1

    def test_empty_set(self):
        assert ArgumentSet().is_empty()
        assert ArgumentSet() == ArgumentSet([])

    def test_single_argument(self):
        assert ArgumentSet(a) == ArgumentSet([a])

    def test_str_is_sorted(self):
        assert str(ArgumentSet([c, a, b])) == "{a,b,c}"

    def test_set_operations(self):
        s = ArgumentSet([a, b])
        assert s | ArgumentSet([c]) == ArgumentSet([a, b, c])
        assert s - [a] == ArgumentSet([b])
        assert s & ArgumentSet([b, c]) == ArgumentSet([b])
        assert ArgumentSet([a]) < s
        assert not s < s
        assert s <= s
        assert s.isdisjoint([c, d])

    def test_operations_return_new_sets(self):
        s = ArgumentSet([a])
        t = s.with_argument(b)
        assert s == ArgumentSet([a])
        assert t == ArgumentSet([a, b])
        assert t.without_argument(a) == ArgumentSet([b])

    def test_rejects_non_arguments(self):
        with pytest.raises(TypeError):
            ArgumentSet(["a"])


class TestRelations:
    def test_kinds(self):
        assert Support(a, b).kind == RelationKind.SUPPORT
        assert Attack(a, b).kind == RelationKind.ATTACK

    def test_support_and_attack_differ(self):
        assert Support(a, b) != Attack(a, b)
        assert Attack(a, b) == Attack(Argument("a"), Argument("b"))

    def test_set_source(self):
        s = Support(ArgumentSet([a, b]), c)
        assert not s.is_binary
        assert s.source_members == ArgumentSet([a, b])
        assert Support(a, c).source_members == ArgumentSet([a])

    def test_invalid_target(self):
        with pytest.raises(TypeError):
            Attack(a, ArgumentSet([b]))


class TestRelationIndex:
    def test_both_directions_updated(self):
        index = RelationIndex()
        assert index.add(a, b) is True
        assert index.add(a, b) is False
        assert index.get_parents(b) == {a}
        assert index.get_children(a) == {b}
        assert (a, b) in index
        assert len(index) == 1

    def test_discard_cleans_up(self):
        index = RelationIndex()
        index.add(a, b)
        assert index.discard(a, b) is True
        assert index.discard(a, b) is False
        assert index.parents == {}
        assert index.children == {}

    def test_lookups_return_copies(self):
        index = RelationIndex()
        index.add(a, b)
        index.get_children(a).add(c)
        assert index.get_children(a) == {b}

    def test_remove_argument_in_set_source(self):
        index = RelationIndex()
        index.add(ArgumentSet([a, b]), c)
        index.add(ArgumentSet([d]), c)
        assert index.remove_argument(a) is True
        assert list(index) == [(ArgumentSet([d]), c)]


# ── Framework ───────────────────────────────────────────────────

class TestFrameworkMutation:
    def test_relation_endpoints_become_nodes(self):
        f = deductive_framework()
        assert f.add_support(a, b) is True
        assert a in f and b in f
        assert len(f) == 2

    def test_idempotent_insert(self):
        f = deductive_framework()
        f.add_attack(a, b)
        revision = f.revision
        assert f.add_attack(a, b) is False
        assert f.revision == revision

    def test_revision_bumps(self):
        f = deductive_framework()
        r0 = f.revision
        f.add(a)
        f.add_support(a, b)
        assert f.revision > r0

    def test_add_relation(self):
        f = deductive_framework()
        f.add_relation(Support(a, b))
        f.add_relation(Attack(b, c))
        assert Support(a, b) in f
        assert Attack(b, c) in f
        assert f.get_supports() == {Support(a, b)}
        assert f.get_attacks() == {Attack(b, c)}
        with pytest.raises(InvalidRelationTypeError):
            f.add_relation((a, b))

    def test_binary_variant_rejects_set_source(self):
        f = deductive_framework()
        with pytest.raises(InvalidRelationTypeError):
            f.add_support(ArgumentSet([a, b]), c)
        with pytest.raises(InvalidRelationTypeError):
            f.add_attack([a, b], c)
        assert len(f) == 0

    def test_binary_attack_in_necessity_variant(self):
        f = necessity_framework()
        f.add_support([a, b], c)
        with pytest.raises(InvalidRelationTypeError):
            f.add_attack([a, b], c)

    def test_set_variant_wraps_single_argument(self):
        f = necessity_framework()
        f.add_support(a, b)
        assert f.get_direct_supporters(b) == {ArgumentSet([a])}
        assert f.is_direct_supported_by(b, a)

    def test_empty_source_rejected(self):
        f = necessity_framework()
        with pytest.raises(PreconditionViolationError):
            f.add_support([], a)

    def test_target_must_be_argument(self):
        f = deductive_framework()
        with pytest.raises(InvalidRelationTypeError):
            f.add_support(a, "b")

    def test_errors_share_base_class(self):
        f = deductive_framework()
        with pytest.raises(BipolarError):
            f.add_support([a, b], c)
        with pytest.raises(TypeError):
            f.add_support([a, b], c)

    def test_direct_lookups_are_copies(self):
        f = deductive_framework()
        f.add_support(a, b)
        f.get_direct_supported(a).add(c)
        f.get_direct_supporters(b).clear()
        assert f.get_direct_supported(a) == {b}
        assert f.get_direct_supporters(b) == {a}

    def test_remove_relation(self):
        f = deductive_framework()
        f.add_support(a, b)
        f.add_attack(b, c)
        assert f.remove_support(a, b) is True
        assert f.remove_relation(Attack(b, c)) is True
        assert f.get_supports() == set()
        assert f.get_attacks() == set()
        assert len(f) == 3

    def test_sentinel_operations_need_sentinel(self):
        f = deductive_framework()
        with pytest.raises(UnsupportedOperationError):
            f.add_prima_facie(a)
        with pytest.raises(UnsupportedOperationError):
            f.get_evidence_supported_arguments()


class TestRemovalCascade:
    def test_binary_relations(self):
        f = deductive_framework()
        f.add_support(a, b)
        f.add_attack(a, c)
        f.add_attack(c, a)
        assert f.remove(a) is True
        assert a not in f
        for relation in f.get_supports() | f.get_attacks():
            assert a not in relation.source_members
            assert relation.target != a
        assert f.get_direct_supporters(b) == set()
        assert f.get_attacked(c) == set()

    def test_set_sources_containing_the_argument(self):
        f = necessity_framework()
        f.add_support([a, b], c)
        f.add_support([d], c)
        f.remove(a)
        assert f.get_supports() == {Support(ArgumentSet([d]), c)}

    def test_remove_missing_argument(self):
        f = deductive_framework()
        assert f.remove(a) is False

    def test_sentinel_not_removable(self):
        f = evidential_framework()
        with pytest.raises(PreconditionViolationError):
            f.remove(f.sentinel)
        assert f.sentinel in f


class TestFrameworkQueries:
    def test_str(self):
        f = deductive_framework()
        f.add_attack(a, b)
        f.add_support(b, c)
        assert str(f) == "arg(a).\narg(b).\narg(c).\natt(a,b).\nsup(b,c).\n"

    def test_is_supported(self):
        f = necessity_framework()
        f.add_support([a, b], c)
        assert f.is_supported(c, [a, b, d])
        assert not f.is_supported(c, [a])

    def test_membership_of_invalid_relations(self):
        f = necessity_framework()
        f.add_support([a, b], c)
        f.add_attack(a, d)
        assert Support(ArgumentSet([a, b]), c) in f
        assert Support(ArgumentSet(), c) not in f
        assert not f.contains_support(Support(ArgumentSet(), c))
        assert Attack(ArgumentSet([a, b]), d) not in f
        g = evidential_framework()
        g.add_prima_facie(a)
        assert not g.contains_attack(Attack(ArgumentSet([g.sentinel]), a))

    def test_is_supported_by_is_transitive(self):
        f = deductive_framework()
        f.add_support(a, b)
        f.add_support(b, c)
        assert f.is_supported_by(c, a)
        assert not f.is_supported_by(a, c)

    def test_are_adjacent(self):
        f = necessity_framework()
        f.add_support([a, b], c)
        f.add(d)
        assert f.are_adjacent(c, b)
        assert f.are_adjacent(b, c)
        assert not f.are_adjacent(a, d)

    def test_exists_directed_path(self):
        f = deductive_framework()
        f.add_support(a, b)
        f.add_attack(b, c)
        assert f.exists_directed_path(a, c)
        assert not f.exists_directed_path(c, a)
        assert not f.exists_directed_path(a, d)

    def test_to_networkx(self):
        f = necessity_framework()
        f.add_support([a, b], c)
        f.add_attack(c, d)
        g = f.to_networkx()
        assert isinstance(g, nx.MultiDiGraph)
        assert g.number_of_edges() == 3
        kinds = {(u, v): data["kind"] for u, v, data in g.edges(data=True)}
        assert kinds[(a, c)] == RelationKind.SUPPORT
        assert kinds[(c, d)] == RelationKind.ATTACK


class TestDerivedFrameworks:
    def test_copy_is_independent(self):
        f = deductive_framework()
        f.add_support(a, b)
        g = f.copy()
        g.add_attack(b, c)
        g.remove(a)
        assert f.get_supports() == {Support(a, b)}
        assert f.get_attacks() == set()
        assert g.semantics.framework is g
        assert type(g.semantics) is type(f.semantics)

    def test_add_framework(self):
        f = deductive_framework()
        f.add_support(a, b)
        g = deductive_framework()
        g.add_attack(c, a)
        assert f.add_framework(g) is True
        assert f.get_attacks() == {Attack(c, a)}
        assert f.add_framework(g) is False

    def test_minimal_form(self):
        f = necessity_framework()
        f.add_support([a], c)
        f.add_support([a, b], c)
        f.add_support([b], d)
        m = f.get_minimal_form()
        assert m.get_supports() == {Support(ArgumentSet([a]), c), Support(ArgumentSet([b]), d)}
        assert set(m) == set(f)
        assert len(f.get_supports()) == 3

    def test_minimal_form_of_binary_variant_is_a_copy(self):
        f = deductive_framework()
        f.add_support(a, b)
        f.add_attack(b, c)
        m = f.get_minimal_form()
        assert m.get_supports() == f.get_supports()
        assert m.get_attacks() == f.get_attacks()
        assert m is not f

    def test_populate_random_is_seeded(self):
        f = deductive_framework().populate_random(8, 0.3, 0.3, seed=7)
        g = deductive_framework().populate_random(8, 0.3, 0.3, seed=7)
        assert len(f) == 8
        assert f.get_attacks() == g.get_attacks()
        assert f.get_supports() == g.get_supports()

    def test_populate_random_makes_unsupported_arguments_prima_facie(self):
        f = evidential_framework().populate_random(6, 0.2, 0.2, seed=3)
        for argument in f:
            if argument != f.sentinel:
                assert f.get_direct_supporters(argument)
