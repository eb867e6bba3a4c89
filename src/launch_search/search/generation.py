"""Query generation counter."""


class Generation:
    """Monotonically increasing token identifying the active query.

    Asynchronous work captures the token current when it starts and checks
    :meth:`is_current` before touching shared state.
    """

    def __init__(self) -> None:
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def advance(self) -> int:
        """Invalidate all outstanding tokens and return the new one."""
        self._current += 1
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current
