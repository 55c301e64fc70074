import pytest

from nfa import EPSILON, NFA, DuplicateStateError, MissingStartStateError, NFAState, StateCounter, Symbol


def test_new_nfa_is_empty():
    nfa = NFA()
    assert list(nfa.get_states()) == []
    assert list(nfa.get_final_states()) == []
    assert nfa.get_alphabet() == set()


def test_missing_start_state_fails_fast():
    with pytest.raises(MissingStartStateError):
        NFA().get_start_state()


def test_start_and_final_states():
    nfa = NFA()
    start = nfa.add_start_state("0")
    final = nfa.add_final_state("1")

    assert nfa.get_start_state() is start
    assert not start.final
    assert list(nfa.get_final_states()) == [final]
    assert {state.name for state in nfa.get_states()} == {"0", "1"}


def test_add_transition_leaves_alphabet_alone():
    nfa = NFA()
    start = nfa.add_start_state("0")
    final = nfa.add_final_state("1")
    nfa.add_transition("a", start, final)
    nfa.add_transition("a", start, start)

    assert start.get_targets("a") == {"0", "1"}
    assert nfa.get_to_state(start, "a") == [start, final]
    assert nfa.get_alphabet() == set()


def test_invalid_symbols_are_rejected():
    state = NFAState(name="0")
    with pytest.raises(ValueError):
        state.add_transition("ab", "1")
    with pytest.raises(ValueError):
        NFA().add_alphabet([EPSILON])


def test_set_non_final_keeps_state():
    nfa = NFA()
    nfa.add_start_state("0")
    final = nfa.add_final_state("1")
    nfa.set_non_final(final)

    assert not final.final
    assert list(nfa.get_final_states()) == []
    assert nfa.get_state("1") is final


def test_add_nfa_states_transfers_ownership():
    other = NFA()
    other.add_start_state("0")
    final = other.add_final_state("1")

    nfa = NFA()
    nfa.add_start_state("2")
    nfa.add_nfa_states(other.get_states())

    assert nfa.get_state("1") is final
    assert list(nfa.get_final_states()) == [final]
    assert nfa.get_start_state().name == "2"


def test_add_nfa_states_refuses_name_clash():
    nfa = NFA()
    nfa.add_start_state("0")
    with pytest.raises(DuplicateStateError):
        nfa.add_nfa_states([NFAState(name="0")])


def test_eclosure_follows_only_epsilon():
    nfa = NFA()
    s0 = nfa.add_start_state("0")
    s1 = nfa.add_final_state("1")
    s2 = nfa.add_final_state("2")
    nfa.add_transition(EPSILON, s0, s1)
    nfa.add_transition(EPSILON, s1, s0)
    nfa.add_transition("x", s1, s2)

    assert nfa.eclosure(s0) == {"0", "1"}
    assert nfa.eclosure(s2) == {"2"}


def test_state_counter_is_monotonic():
    counter = StateCounter()
    assert [counter.next_name() for _ in range(3)] == ["0", "1", "2"]
    assert StateCounter().next_name() == "0"


def test_print_nfa(capsys):
    nfa = NFA()
    start = nfa.add_start_state("0")
    final = nfa.add_final_state("1")
    nfa.add_transition("a", start, final)
    nfa.add_transition(EPSILON, final, start)
    nfa.add_alphabet(["a"])
    nfa.print_nfa()

    assert capsys.readouterr().out.splitlines() == [
        "Q = { 0 1 }",
        "Sigma = { a }",
        "delta =",
        "0,a,1",
        "1,ε,0",
        "q0 = 0",
        "F = { 1 }",
    ]


@pytest.mark.parametrize("value", [EPSILON, "a", "*", "ε"])
def test_symbol_accepts_epsilon_and_single_characters(value):
    assert Symbol(value=value).value == value


@pytest.mark.parametrize("value", ["ab", "abc"])
def test_symbol_rejects_longer_strings(value):
    with pytest.raises(ValueError):
        Symbol(value=value)
