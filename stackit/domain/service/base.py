"""Common base for domain services."""


class Service:
    """Marker for classes holding StackIt's business rules.

    A service owns the rules that span more than one model (accepting an
    answer touches the answer, its question and two reputations) and is the
    only place repositories are written from.
    """
