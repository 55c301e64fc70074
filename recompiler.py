from typing import Optional

from nfa import EPSILON, NFA, StateCounter


class RegexSyntaxError(ValueError):
    """A pattern that cannot be compiled, reported with its position"""

    def __init__(self, message: str, position: int, near: Optional[str] = None):
        self.message = message
        self.position = position
        self.near = near if near is not None else "EOL"
        super().__init__(f"{message} at position {position} - near '{self.near}'")


class TokenMismatchError(RegexSyntaxError):
    """The next character is not the one the grammar requires"""

    def __init__(self, expected: str, found: str, position: int):
        self.expected = expected
        self.found = found
        super().__init__(f"Expected '{expected}' but got '{found}'", position, found)


class UnexpectedEndError(RegexSyntaxError):
    """The pattern ran out while the grammar still needed input"""


class REcompiler:
    """Regular Expression Compiler that builds an NFA by Thompson's construction

    Grammar:
        regex  ::= term '|' regex | term
        term   ::= { factor }
        factor ::= base { '*' }
        base   ::= char | '\\' char | '(' regex ')'
    """

    def __init__(self, regexp: str):
        """Store the pattern; nothing is validated until get_nfa()"""
        self.pattern = regexp
        self.pos = 0                    # Cursor into the pattern
        self.counter = StateCounter()   # State names for this compilation only
        self.alphabet_nfa = NFA()       # Working automaton collecting the alphabet

    def get_nfa(self) -> NFA:
        """Compile the pattern into an NFA; the cursor is consumed, so call once"""
        self.alphabet_nfa = NFA()

        try:
            nfa = self.regex()
        except RecursionError:
            near = self.pattern[self.pos] if self.more() else None
            raise RegexSyntaxError("Pattern nested too deeply", self.pos, near) from None

        # The grammar stops only at ')' here, and nothing opened it
        if self.more():
            self.error(f"Unexpected '{self.peek()}'")

        nfa.add_alphabet(self.alphabet_nfa.get_alphabet())
        return nfa

    # Cursor

    def peek(self) -> str:
        """Return the next character without consuming it"""
        if not self.more():
            raise UnexpectedEndError("Unexpected end of pattern", self.pos)
        return self.pattern[self.pos]

    def eat(self, c: str):
        """Consume the next character, failing if it is not c"""
        if not self.more():
            raise UnexpectedEndError(f"Expected '{c}' but reached end of pattern", self.pos)
        found = self.pattern[self.pos]
        if found != c:
            raise TokenMismatchError(c, found, self.pos)
        self.pos += 1

    def next(self) -> str:
        """Consume and return the next character"""
        c = self.peek()
        self.eat(c)
        return c

    def more(self) -> bool:
        return self.pos < len(self.pattern)

    def error(self, message: str):
        """Report a compilation error at the cursor"""
        if not self.more():
            raise UnexpectedEndError(message, self.pos)
        raise RegexSyntaxError(message, self.pos, self.pattern[self.pos])

    # Grammar

    def regex(self) -> NFA:
        """Parse a term and, after '|', the alternative to its right"""
        term = self.term()

        if self.more() and self.peek() == '|':
            self.eat('|')
            return self.choice(term, self.regex())

        return term

    def term(self) -> NFA:
        """Parse a sequence of factors up to ')', '|' or the end of the pattern"""
        factor = None

        while self.more() and self.peek() != ')' and self.peek() != '|':
            factor = self.sequence(factor, self.factor())

        # Empty alternatives and empty groups have no automaton
        if factor is None:
            self.error("Expected a character or '('")

        return factor

    def factor(self) -> NFA:
        """Parse a base followed by any number of Kleene stars"""
        base = self.base()

        while self.more() and self.peek() == '*':
            self.eat('*')
            base = self.repetition(base)

        return base

    def base(self) -> NFA:
        """Parse a literal, an escaped character or a parenthesized regex"""
        c = self.peek()

        if c == '(':
            self.eat('(')
            nfa = self.regex()
            self.eat(')')
            return nfa

        if c == '\\':
            self.eat('\\')
            # Escaped characters lose any special meaning
            return self.primitive(self.next())

        return self.primitive(self.next())

    # Thompson's construction

    def choice(self, nfa_a: NFA, nfa_b: NFA) -> NFA:
        """Union: a new start state branching to both operands"""
        nfa = NFA()
        start = nfa.add_start_state(self.counter.next_name())

        nfa.add_nfa_states(nfa_a.get_states())
        nfa.add_nfa_states(nfa_b.get_states())

        nfa.add_transition(EPSILON, start, nfa_a.get_start_state())
        nfa.add_transition(EPSILON, start, nfa_b.get_start_state())

        return nfa

    def sequence(self, nfa_a: Optional[NFA], nfa_b: NFA) -> NFA:
        """Concatenation: nfa_a's accepting states hand over to nfa_b's start"""
        if nfa_a is None:
            return nfa_b

        b_start = nfa_b.get_start_state()
        for state in list(nfa_a.get_final_states()):
            nfa_a.set_non_final(state)
            nfa_a.add_transition(EPSILON, state, b_start)

        nfa_a.add_nfa_states(nfa_b.get_states())
        return nfa_a

    def repetition(self, nfa: NFA) -> NFA:
        """Kleene closure: epsilon both ways between start and each accepting state"""
        start = nfa.get_start_state()

        for state in list(nfa.get_final_states()):
            nfa.add_transition(EPSILON, start, state)
            nfa.add_transition(EPSILON, state, start)

        return nfa

    def primitive(self, c: str) -> NFA:
        """Two-state automaton accepting the single symbol c"""
        if c not in self.alphabet_nfa.get_alphabet():
            self.alphabet_nfa.add_alphabet([c])

        nfa = NFA()
        start = nfa.add_start_state(self.counter.next_name())
        final = nfa.add_final_state(self.counter.next_name())
        nfa.add_transition(c, start, final)

        return nfa
