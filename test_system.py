import itertools
import logging

import pytest

from lindenmayer import (
    Alphabet,
    DuplicateToken,
    EmptyAxiom,
    FrozenAlphabet,
    IncompleteConfiguration,
    InvalidToken,
    LSystem,
    LSystemBuilder,
    RuleTable,
    Token,
    UnknownToken,
)


def algae() -> LSystem:
    builder = LSystemBuilder()
    a = builder.token("A")
    b = builder.token("B")
    builder.axiom([a])
    builder.transformation_rule(a, [a, b])
    builder.transformation_rule(b, [a])
    return builder.finish()


class TestAlphabet:
    def test_ids_are_sequential(self) -> None:
        alphabet = Alphabet()
        assert alphabet.register("A") == 0
        assert alphabet.register("B") == 1
        assert alphabet.register("stem") == 2
        assert len(alphabet) == 3
        assert list(alphabet) == [Token(0, "A"), Token(1, "B"), Token(2, "stem")]

    def test_name_lookup(self) -> None:
        alphabet = Alphabet(["F", "+", "-"])
        assert alphabet.name_of(1) == "+"
        assert alphabet.id_of("-") == 2
        assert "F" in alphabet
        assert "G" not in alphabet
        assert alphabet.render([0, 1, 0, 2]) == "F+F-"

    def test_duplicate_token(self) -> None:
        alphabet = Alphabet(["A"])
        with pytest.raises(DuplicateToken):
            alphabet.register("A")
        # The failed registration must not consume an id
        assert alphabet.register("B") == 1

    def test_invalid_token_names(self) -> None:
        alphabet = Alphabet()
        with pytest.raises(InvalidToken):
            alphabet.register("space cadet")
        with pytest.raises(InvalidToken):
            alphabet.register("")

    def test_foreign_ids(self) -> None:
        alphabet = Alphabet(["A"])
        with pytest.raises(UnknownToken):
            alphabet.name_of(1)
        with pytest.raises(UnknownToken):
            alphabet.name_of(-1)
        with pytest.raises(UnknownToken):
            alphabet.id_of("B")
        with pytest.raises(UnknownToken):
            alphabet.validate([0, 3])

    def test_freeze_returns_read_only_copy(self) -> None:
        alphabet = Alphabet(["A"])
        frozen = alphabet.freeze()
        assert frozen.frozen
        assert not alphabet.frozen
        with pytest.raises(FrozenAlphabet):
            frozen.register("B")
        assert alphabet.register("B") == 1
        assert len(frozen) == 1


class TestRuleTable:
    def test_identity_default(self) -> None:
        rules = RuleTable(Alphabet(["A", "B"]))
        rules.set_rule(0, [0, 1])
        assert rules.replacement(0) == (0, 1)
        assert rules.replacement(1) == (1,)
        assert rules.successors() == ((0, 1), (1,))

    def test_unknown_tokens_rejected(self) -> None:
        rules = RuleTable(Alphabet(["A"]))
        with pytest.raises(UnknownToken):
            rules.set_rule(1, [0])
        with pytest.raises(UnknownToken):
            rules.set_rule(0, [0, 5])
        assert len(rules) == 0

    def test_last_rule_wins(self, caplog: pytest.LogCaptureFixture) -> None:
        rules = RuleTable(Alphabet(["A", "B", "C"]))
        rules.set_rule(0, [1])
        with caplog.at_level(logging.DEBUG, logger="lindenmayer.rules"):
            rules.set_rule(0, [2])
        assert rules.replacement(0) == (2,)
        assert "overwriting rule" in caplog.text


class TestBuilder:
    def test_empty_axiom(self) -> None:
        builder = LSystemBuilder()
        builder.token("A")
        with pytest.raises(EmptyAxiom):
            builder.axiom([])

    def test_foreign_axiom(self) -> None:
        builder = LSystemBuilder()
        x = builder.token("x")
        y = builder.token("y")

        other = LSystemBuilder()
        with pytest.raises(UnknownToken):
            other.axiom([x])
        q = other.token("q")
        # `y` is still unknown to a builder with a single token
        with pytest.raises(UnknownToken):
            other.axiom([y])
        with pytest.raises(UnknownToken):
            other.transformation_rule(q, [x, y, q])
        with pytest.raises(UnknownToken):
            other.transformation_rule(y, [q, q])

    def test_missing_axiom(self) -> None:
        builder = LSystemBuilder()
        a = builder.token("A")
        builder.transformation_rule(a, [a, a])
        with pytest.raises(IncompleteConfiguration):
            builder.finish()

    def test_duplicate_token(self) -> None:
        builder = LSystemBuilder()
        builder.token("A")
        with pytest.raises(DuplicateToken):
            builder.token("A")

    def test_finished_system_is_isolated_from_builder(self) -> None:
        builder = LSystemBuilder()
        a = builder.token("A")
        builder.axiom([a])
        system = builder.finish()

        b = builder.token("B")
        builder.transformation_rule(a, [a, b])

        system.step()
        assert system.render() == "A"
        assert len(system.alphabet) == 1
        with pytest.raises(FrozenAlphabet):
            system.alphabet.register("C")

    def test_repr_lists_rules(self) -> None:
        builder = LSystemBuilder()
        a = builder.token("a")
        b = builder.token("b")
        builder.transformation_rule(a, [a, b])
        assert "a => a b" in repr(builder)


class TestRewrite:
    def test_algae_generations(self) -> None:
        system = algae()
        seen = [system.render()]
        for _ in range(3):
            system.step()
            seen.append(system.render())
        assert seen == ["A", "AB", "ABA", "ABAAB"]

    def test_algae_step_by(self) -> None:
        system = algae()
        system.step_by(7)
        assert system.render() == "ABAABABAABAABABAABABAABAABABAABAAB"
        assert system.steps == 7

    def test_identity_rules_leave_state_unchanged(self) -> None:
        builder = LSystemBuilder()
        ids = [builder.token(n) for n in ("F", "+", "-")]
        builder.axiom([ids[0], ids[1], ids[2], ids[0]])
        system = builder.finish()
        for _ in range(5):
            system.step()
            assert system.render() == "F+-F"

    def test_simultaneous_rewrite(self) -> None:
        builder = LSystemBuilder()
        a = builder.token("A")
        b = builder.token("B")
        builder.axiom([a])
        builder.transformation_rule(a, [b])
        builder.transformation_rule(b, [a])
        system = builder.finish()

        system.step()
        assert system.render() == "B"
        system.step()
        assert system.render() == "A"

    def test_step_by_matches_repeated_step(self) -> None:
        for n in range(7):
            stepped = algae()
            for _ in range(n):
                stepped.step()
            jumped = algae()
            jumped.step_by(n)
            assert jumped.state == stepped.state

    def test_step_by_zero_is_noop(self) -> None:
        system = algae()
        system.step_by(0)
        assert system.render() == "A"
        assert system.steps == 0

    def test_negative_step_by(self) -> None:
        with pytest.raises(ValueError):
            algae().step_by(-1)

    def test_expand_matches_step_by(self) -> None:
        for n in range(8):
            system = algae()
            ahead = tuple(system.expand(n))
            system.step_by(n)
            assert ahead == system.state

    def test_expand_does_not_advance(self) -> None:
        system = algae()
        system.step()
        assert list(system.expand(2)) == list(system.expand(2))
        assert system.render() == "AB"
        assert system.steps == 1

    def test_expand_from_current_generation(self) -> None:
        system = algae()
        system.step_by(2)
        grown = algae()
        grown.step_by(5)
        assert tuple(system.expand(3)) == grown.state

    def test_expand_prefix_of_large_generation(self) -> None:
        builder = LSystemBuilder()
        f = builder.token("F")
        plus = builder.token("+")
        builder.axiom([f])
        builder.transformation_rule(f, [f, plus, f])
        system = builder.finish()
        # Generation 40 has about 2**41 tokens; only the prefix is produced.
        prefix = list(itertools.islice(system.expand(40), 5))
        assert prefix == [f, plus, f, plus, f]
        assert system.steps == 0

    def test_expand_drops_erased_tokens(self) -> None:
        builder = LSystemBuilder()
        a = builder.token("A")
        b = builder.token("B")
        builder.axiom([a, b, a])
        builder.transformation_rule(a, [])
        system = builder.finish()
        assert list(system.expand(1)) == [b]

    def test_negative_expand(self) -> None:
        with pytest.raises(ValueError):
            list(algae().expand(-1))

    def test_empty_replacement_removes_token(self) -> None:
        builder = LSystemBuilder()
        a = builder.token("A")
        b = builder.token("B")
        builder.axiom([a, b, a])
        builder.transformation_rule(a, [])
        system = builder.finish()
        system.step()
        assert system.render() == "B"

    def test_fractal_binary_tree(self) -> None:
        builder = LSystemBuilder()
        zero = builder.token("0")
        one = builder.token("1")
        lsb = builder.token("[")
        rsb = builder.token("]")
        builder.axiom([zero])
        builder.transformation_rule(one, [one, one])
        builder.transformation_rule(zero, [one, lsb, zero, rsb, zero])
        system = builder.finish()

        assert system.render() == "0"
        system.step()
        assert system.render() == "1[0]0"
        system.step()
        assert system.render() == "11[1[0]0]1[0]0"
        system.step()
        assert system.render() == "1111[11[1[0]0]1[0]0]11[1[0]0]1[0]0"

    def test_multi_character_names(self) -> None:
        builder = LSystemBuilder()
        stem = builder.token("stem")
        leaf = builder.token("leaf")
        builder.axiom([stem])
        builder.transformation_rule(stem, [stem, leaf])
        system = builder.finish()
        system.step_by(2)
        assert system.render() == "stemleafleaf"
        assert len(system) == 3

    def test_reset(self) -> None:
        system = algae()
        system.step_by(4)
        system.reset()
        assert system.render() == "A"
        assert system.steps == 0
        assert system.state == system.axiom

    def test_rules_view_is_read_only(self) -> None:
        system = algae()
        assert dict(system.rules) == {0: (0, 1), 1: (0,)}
        with pytest.raises(TypeError):
            system.rules[0] = (1,)  # type: ignore[index]
