import pytest


def run_nfa(nfa, word):
    """Simulate the NFA over word, following epsilon moves"""
    current = nfa.eclosure(nfa.get_start_state())

    for symbol in word:
        moved = set()
        for name in current:
            for target in nfa.get_to_state(nfa.get_state(name), symbol):
                moved |= nfa.eclosure(target)
        current = moved

    return any(nfa.get_state(name).final for name in current)


@pytest.fixture
def accepts():
    return run_nfa
