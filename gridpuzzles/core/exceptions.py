"""Exceptions raised by the puzzle core."""


class InvalidBoardError(ValueError):
    """A board snapshot violates a structural invariant (shape, labels, walls)."""


class BudgetExhausted(RuntimeError):
    """A search or propagation budget ran out before a result was proven."""

    def __init__(self, message: str, nodes: int = 0):
        super().__init__(message)
        self.nodes = nodes


class PropagationLimitExceeded(BudgetExhausted):
    """Propagation hit its pass cap without reaching a fixpoint."""
