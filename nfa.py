from typing import Dict, Iterable, List, Optional, Set
from pydantic import BaseModel, Field

# Reserved epsilon marker, never a one-character symbol
EPSILON = ""


class MissingStartStateError(RuntimeError):
    """Raised when the start state is read before one has been installed"""


class DuplicateStateError(ValueError):
    """Raised when two distinct states would share one name"""


class Symbol(BaseModel):
    """Model representing a transition symbol: epsilon or exactly one character"""
    value: str

    def model_post_init(self, __context):
        if self.value != EPSILON and len(self.value) != 1:
            raise ValueError(f"Symbol must be epsilon or a single character, got {self.value!r}")


class NFAState(BaseModel):
    """Model representing a state in the NFA"""
    name: str
    final: bool = False
    transitions: Dict[str, Set[str]] = Field(default_factory=dict)

    def add_transition(self, symbol: str, target: str):
        """Add target to the destination set for symbol"""
        Symbol(value=symbol)
        self.transitions.setdefault(symbol, set()).add(target)

    def get_targets(self, symbol: str) -> Set[str]:
        """Names of the states reachable on symbol"""
        return self.transitions.get(symbol, set())

    def set_non_final(self):
        self.final = False


class StateCounter(BaseModel):
    """Monotonic source of state names for one compilation"""
    count: int = 0

    def next_name(self) -> str:
        name = str(self.count)
        self.count += 1
        return name


class NFA(BaseModel):
    """Model representing a nondeterministic finite automaton"""
    states: Dict[str, NFAState] = Field(default_factory=dict)
    start: Optional[str] = None
    final_states: Dict[str, NFAState] = Field(default_factory=dict)
    alphabet: Set[str] = Field(default_factory=set)

    def _own(self, state: NFAState):
        """Take ownership of a state, refusing to alias an existing name"""
        owned = self.states.get(state.name)
        if owned is not None and owned is not state:
            raise DuplicateStateError(f"State {state.name} is already owned by this automaton")
        self.states[state.name] = state
        if state.final:
            self.final_states[state.name] = state

    def add_start_state(self, name: str) -> NFAState:
        """Create a fresh non-accepting state and install it as the start state"""
        state = NFAState(name=name)
        self._own(state)
        self.start = name
        return state

    def add_final_state(self, name: str) -> NFAState:
        """Create a fresh accepting state"""
        state = NFAState(name=name, final=True)
        self._own(state)
        return state

    def add_transition(self, symbol: str, state: NFAState, target: NFAState):
        """Add a transition; the alphabet is left to the caller"""
        state.add_transition(symbol, target.name)

    def set_non_final(self, state: NFAState):
        """Drop a state from the accepting set but keep owning it"""
        state.set_non_final()
        self.final_states.pop(state.name, None)

    def add_nfa_states(self, states: Iterable[NFAState]):
        """Transfer ownership of foreign states into this automaton"""
        for state in list(states):
            self._own(state)

    def add_alphabet(self, symbols: Iterable[str]):
        """Add ordinary symbols to the alphabet"""
        for symbol in symbols:
            if symbol == EPSILON:
                raise ValueError("Epsilon is not an alphabet symbol")
            Symbol(value=symbol)
            self.alphabet.add(symbol)

    def get_start_state(self) -> NFAState:
        if self.start is None:
            raise MissingStartStateError("Automaton has no start state")
        return self.states[self.start]

    def get_final_states(self):
        return self.final_states.values()

    def get_states(self):
        return self.states.values()

    def get_alphabet(self) -> Set[str]:
        return self.alphabet

    def get_state(self, name: str) -> NFAState:
        return self.states[name]

    def get_to_state(self, state: NFAState, symbol: str) -> List[NFAState]:
        """States reachable from state on exactly one symbol move"""
        return [self.states[name] for name in sorted(state.get_targets(symbol))]

    def eclosure(self, state: NFAState) -> Set[str]:
        """Names of every state reachable from state through epsilon moves alone"""
        closure = {state.name}
        stack = [state.name]

        while stack:
            current = self.states[stack.pop()]
            for name in current.get_targets(EPSILON):
                if name not in closure:
                    closure.add(name)
                    stack.append(name)

        return closure

    def print_nfa(self):
        """Print the NFA as its 5-tuple, one transition per line as state,symbol,target"""
        print("Q = { " + " ".join(self.states) + " }")
        print("Sigma = { " + " ".join(sorted(self.alphabet)) + " }")
        print("delta =")
        for state in self.states.values():
            for symbol, targets in state.transitions.items():
                label = symbol if symbol != EPSILON else "ε"
                for target in sorted(targets):
                    print(f"{state.name},{label},{target}")
        print(f"q0 = {self.get_start_state().name}")
        print("F = { " + " ".join(self.final_states) + " }")
